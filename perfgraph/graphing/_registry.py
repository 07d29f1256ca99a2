#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from perfgraph.type_defs import SeriesId

from ._series import Series

AGGREGATE_INDEX = 0


@dataclass(frozen=True)
class IndexedKey:
    """A sub metric of a dynamically discovered group, e.g. "user" of core 3"""

    index: int
    sub_metric: str


@dataclass(frozen=True)
class SlotKey:
    """A fixed, singleton slot, e.g. "ctxt" """

    slot: str


GroupKey = IndexedKey | SlotKey


def core_index(core_number: int) -> int:
    """Registry index of a concrete CPU core. Index 0 is the aggregate.

    >>> core_index(0)
    1
    """
    return core_number + 1


class GroupRegistry:
    """The classified series of one render request

    Dynamic groups are keyed by their integer index (0 is the aggregate of all
    cores, core N lives at N+1). Fixed slots are keyed by name. Slots which are
    expected by a topic but were not delivered are kept with the value None.
    """

    def __init__(self, expected_slots: Iterable[str] = ()) -> None:
        self._groups: dict[int, dict[str, Series]] = {}
        self._slots: dict[str, Series | None] = {slot: None for slot in expected_slots}

    def add(self, key: GroupKey, series: Series) -> None:
        # Input order does not matter, so the last series wins on duplicates
        match key:
            case IndexedKey(index, sub_metric):
                self._groups.setdefault(index, {})[sub_metric] = series
            case SlotKey(slot):
                self._slots[slot] = series

    def exists(self, key: int | str) -> bool:
        if isinstance(key, int):
            return key in self._groups
        return self._slots.get(key) is not None

    def get(self, key: int | str, sub_metric: str | None = None) -> Series | None:
        if isinstance(key, int):
            if sub_metric is None:
                raise ValueError("Dynamic groups need a sub metric")
            return self._groups.get(key, {}).get(sub_metric)
        return self._slots.get(key)

    def count(self) -> int:
        return len(self._groups)

    def groups(self) -> Iterator[tuple[int, Mapping[str, Series]]]:
        for index in sorted(self._groups):
            yield index, dict(self._groups[index])

    def expected_slots(self) -> Iterator[str]:
        yield from self._slots

    def present_slots(self) -> Mapping[str, Series]:
        return {slot: series for slot, series in self._slots.items() if series is not None}

    def slot_sources(self, slots: Iterable[str]) -> Mapping[str, SeriesId]:
        return {
            slot: series.series_id
            for slot in slots
            if (series := self._slots.get(slot)) is not None
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(groups={self._groups!r}, slots={self._slots!r})"
