#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence

import pytest

from perfgraph.config import Config
from perfgraph.graphing import (
    evaluate_values,
    GraphContext,
    GraphSpec,
    Series,
    StaticValueOracle,
)
from perfgraph.type_defs import SeriesId

SeriesFactory = Callable[[Sequence[str]], list[Series]]
Evaluator = Callable[[GraphSpec, Mapping[str, float]], dict[str, float | None]]


def make_series(labels: Sequence[str]) -> list[Series]:
    """One series per label, the series id is "rrd:<label>" """
    return [Series(series_id=SeriesId(f"rrd:{label}"), label=label) for label in labels]


def label_values(values: Mapping[str, float]) -> StaticValueOracle:
    return StaticValueOracle({SeriesId(f"rrd:{label}"): v for label, v in values.items()})


@pytest.fixture(name="series")
def fixture_series() -> SeriesFactory:
    return make_series


@pytest.fixture(name="evaluate")
def fixture_evaluate() -> Evaluator:
    """Evaluates a graph for label values under the "average" consolidation"""

    def _evaluate(spec: GraphSpec, values: Mapping[str, float]) -> dict[str, float | None]:
        return evaluate_values(spec, label_values(values), "average")

    return _evaluate


@pytest.fixture(name="context")
def fixture_context() -> GraphContext:
    return GraphContext(host_name="heute", service_description="Kernel Performance")


@pytest.fixture(name="config")
def fixture_config() -> Config:
    return Config()


@pytest.fixture(autouse=True)
def reset_log_levels() -> Iterator[None]:
    logger = logging.getLogger("perfgraph")
    level = logger.level
    yield
    logger.setLevel(level)
