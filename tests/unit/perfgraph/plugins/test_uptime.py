#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Callable, Mapping, Sequence

from perfgraph.graphing import assemble_graphs, GraphSpec, Series
from perfgraph.plugins.uptime import CHECK_COMMAND

SeriesFactory = Callable[[Sequence[str]], list[Series]]
Evaluator = Callable[[GraphSpec, Mapping[str, float]], dict[str, float | None]]


def test_uptime_in_days(series: SeriesFactory, evaluate: Evaluator) -> None:
    [spec] = assemble_graphs(CHECK_COMMAND, series(["uptime_seconds", "uptime_minutes"]))
    assert spec.options.vertical_label == "days"
    assert spec.sources == {"uptime_minutes": "rrd:uptime_minutes"}
    assert evaluate(spec, {"uptime_minutes": 4320.0})["days"] == 3.0


def test_no_uptime_graph_without_minutes(series: SeriesFactory) -> None:
    assert assemble_graphs(CHECK_COMMAND, series(["uptime_seconds"])) == []
