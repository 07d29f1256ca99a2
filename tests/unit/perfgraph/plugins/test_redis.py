#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Callable, Mapping, Sequence

import pytest

from perfgraph.graphing import assemble_graphs, GraphSpec, Series
from perfgraph.plugins.redis import CHECK_COMMAND, REDIS_LABELS

SeriesFactory = Callable[[Sequence[str]], list[Series]]
Evaluator = Callable[[GraphSpec, Mapping[str, float]], dict[str, float | None]]

MB = 1024 * 1024


def _graphs(series: SeriesFactory, labels: Sequence[str]) -> dict[str, GraphSpec]:
    return {g.id: g for g in assemble_graphs(CHECK_COMMAND, series(labels))}


def test_all_graphs(series: SeriesFactory) -> None:
    assert list(_graphs(series, REDIS_LABELS)) == [
        "response_time",
        "client_connections",
        "hits_misses",
        "keys",
        "memory",
        "cpu_use",
    ]


@pytest.mark.parametrize(
    "hits, misses, hit_rate",
    [
        pytest.param(80.0, 20.0, 80.0, id="regular"),
        pytest.param(0.0, 0.0, 0.0, id="no requests"),
    ],
)
def test_hit_rate(
    series: SeriesFactory, evaluate: Evaluator, hits: float, misses: float, hit_rate: float
) -> None:
    spec = _graphs(series, ["keyspace_hits", "keyspace_misses"])["hits_misses"]
    assert [(e.name, e.line_type) for e in spec.entries] == [
        ("hits", "area"),
        ("misses", "stack"),
        ("hitrate", "comment"),
    ]
    values = evaluate(spec, {"keyspace_hits": hits, "keyspace_misses": misses})
    assert values["hitrate"] == pytest.approx(hit_rate)


def test_no_hit_rate_without_misses(series: SeriesFactory) -> None:
    assert "hits_misses" not in _graphs(series, ["keyspace_hits"])


def test_connections_with_one_of_the_variables(series: SeriesFactory) -> None:
    spec = _graphs(series, ["blocked_clients"])["client_connections"]
    assert spec.entry_names() == ["blocked"]


def test_keys_optional_lines(series: SeriesFactory) -> None:
    spec = _graphs(series, ["total_keys", "total_expires", "evicted_keys"])["keys"]
    assert spec.entry_names() == ["keys", "expires", "evicted"]


def test_memory_without_rss(series: SeriesFactory, evaluate: Evaluator) -> None:
    spec = _graphs(series, ["used_memory", "used_memory_peak"])["memory"]
    assert spec.entry_names() == ["use_mb", "maxuse_mb"]
    values = evaluate(spec, {"used_memory": 10 * MB, "used_memory_peak": 12 * MB})
    assert values["use_mb"] == pytest.approx(10.0)
    assert values["maxuse_mb"] == pytest.approx(12.0)


def test_memory_with_rss_and_utilization(series: SeriesFactory, evaluate: Evaluator) -> None:
    labels = ["used_memory", "used_memory_peak", "used_memory_rss", "memory_utilization"]
    spec = _graphs(series, labels)["memory"]
    values = evaluate(
        spec,
        {
            "used_memory": 10 * MB,
            "used_memory_peak": 12 * MB,
            "used_memory_rss": 15 * MB,
            "memory_utilization": 25.0,
        },
    )
    assert values["fragmented_mb"] == pytest.approx(5.0)
    assert values["fragmented_mb.legend"] == pytest.approx(15.0)
    assert values["fragmentation_calc"] == pytest.approx(1.5)
    assert values["total_mb"] == pytest.approx(60.0)
    assert values["free_mb"] == pytest.approx(45.0)
    assert values["free_perc"] == pytest.approx(75.0)
    assert "fragmentation_data" not in spec.entry_names()


def test_cpu_use_needs_system_time(series: SeriesFactory) -> None:
    assert "cpu_use" not in _graphs(series, ["used_cpu_user", "used_cpu_user_children"])
    spec = _graphs(series, ["used_cpu_sys", "used_cpu_user"])["cpu_use"]
    assert [(e.name, e.line_type) for e in spec.entries] == [
        ("cpu_main_sys", "area"),
        ("cpu_main_user", "stack"),
    ]
