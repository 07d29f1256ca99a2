#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from perfgraph.type_defs import Consolidation, SeriesId


@dataclass(frozen=True, kw_only=True)
class Series:
    series_id: SeriesId
    label: str
    warn: float | None = None
    crit: float | None = None


@dataclass(frozen=True, kw_only=True)
class GraphContext:
    """Display metadata used for graph titles. Passed through verbatim."""

    host_name: str = ""
    service_description: str = ""


class ValueOracle(Protocol):
    """Provides consolidated values of series, e.g. backed by RRD files

    None means that there is no data for the series in the requested
    time range."""

    def value(self, series_id: SeriesId, consolidation: Consolidation) -> float | None: ...


class StaticValueOracle:
    """Answers every consolidation of a series with the same value

    Useful when only the current value of each performance variable is known.
    Values for specific consolidations can be given explicitly and win over
    the plain value:

    >>> oracle = StaticValueOracle({SeriesId("a"): 2.0}, {(SeriesId("a"), "max"): 5.0})
    >>> oracle.value(SeriesId("a"), "average"), oracle.value(SeriesId("a"), "max")
    (2.0, 5.0)
    """

    def __init__(
        self,
        values: Mapping[SeriesId, float],
        consolidated: Mapping[tuple[SeriesId, Consolidation], float] | None = None,
    ) -> None:
        self._values = dict(values)
        self._consolidated = dict(consolidated or {})

    def value(self, series_id: SeriesId, consolidation: Consolidation) -> float | None:
        if (series_id, consolidation) in self._consolidated:
            return self._consolidated[(series_id, consolidation)]
        return self._values.get(series_id)
