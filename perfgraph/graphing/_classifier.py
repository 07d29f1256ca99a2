#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Classification of performance data labels into groups and slots

Every label is matched against an ordered list of matchers. The first
matcher which recognizes the label decides on the group key, labels that
no matcher recognizes are dropped. The upstream plugins may omit variables
depending on their configuration, so unknown labels are never an error.
"""

import abc
import functools
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing_extensions import override

from ._registry import AGGREGATE_INDEX, core_index, GroupKey, GroupRegistry, IndexedKey, SlotKey
from ._series import Series

logger = logging.getLogger("perfgraph.graphing")


# Only ASCII digits form a core number
@functools.cache
def _core_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(prefix)}([0-9]*)_(.+)")


class LabelMatcher(abc.ABC):
    @abc.abstractmethod
    def match(self, label: str) -> GroupKey | None: ...


@dataclass(frozen=True)
class CoreMatcher(LabelMatcher):
    """Matches "<prefix>_<metric>" (aggregate) and "<prefix><N>_<metric>" (core N)

    >>> m = CoreMatcher("cpu")
    >>> m.match("cpu_idle"), m.match("cpu3_user")
    (IndexedKey(index=0, sub_metric='idle'), IndexedKey(index=4, sub_metric='user'))
    >>> m.match("cpuX_user") is None
    True
    """

    prefix: str

    @override
    def match(self, label: str) -> GroupKey | None:
        if (m := _core_pattern(self.prefix).fullmatch(label)) is None:
            return None
        number, sub_metric = m.groups()
        if not number:
            return IndexedKey(AGGREGATE_INDEX, sub_metric)
        return IndexedKey(core_index(int(number)), sub_metric)


@dataclass(frozen=True)
class SlotMatcher(LabelMatcher):
    """Exact label names, each one mapped to a slot of the same name"""

    labels: frozenset[str]

    @override
    def match(self, label: str) -> GroupKey | None:
        return SlotKey(label) if label in self.labels else None


@dataclass(frozen=True)
class Classifier:
    matchers: Sequence[LabelMatcher]

    @classmethod
    def flat(cls, labels: Iterable[str]) -> "Classifier":
        """One-to-one lookup from a fixed set of expected labels to slots"""
        return cls([SlotMatcher(frozenset(labels))])

    def classify(self, label: str) -> GroupKey | None:
        for matcher in self.matchers:
            if (key := matcher.match(label)) is not None:
                return key
        return None

    def expected_slots(self) -> Iterable[str]:
        for matcher in self.matchers:
            if isinstance(matcher, SlotMatcher):
                yield from sorted(matcher.labels)

    def build_registry(self, series: Iterable[Series]) -> GroupRegistry:
        registry = GroupRegistry(expected_slots=self.expected_slots())
        for s in series:
            if (key := self.classify(s.label)) is None:
                logger.debug("Ignoring unknown label %r", s.label)
                continue
            registry.add(key, s)
        return registry
