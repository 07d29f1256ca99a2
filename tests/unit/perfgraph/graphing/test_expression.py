#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest
from pydantic import ValidationError

from perfgraph.exceptions import MetricNotFound
from perfgraph.graphing import metric_expression_adapter, MetricExpression
from perfgraph.graphing._expression import (
    bytes_to_mb,
    ClampAtZero,
    clamped_difference,
    constant,
    Difference,
    fraction,
    metric,
    percent_of,
    scaled,
    Sum,
    total,
)

VALUES = {"hits": 80.0, "misses": 20.0, "zero": 0.0, "bytes": 2 * 1024 * 1024, "gone": None}


@pytest.mark.parametrize(
    "expression, expected",
    [
        pytest.param(constant(3), 3.0, id="constant"),
        pytest.param(metric("hits"), 80.0, id="metric"),
        pytest.param(total(metric("hits"), metric("misses")), 100.0, id="sum"),
        pytest.param(total(), 0.0, id="empty sum"),
        pytest.param(clamped_difference(metric("misses"), metric("hits")), 0.0, id="clamped"),
        pytest.param(scaled(metric("misses"), 8), 160.0, id="product"),
        pytest.param(fraction(metric("hits"), metric("zero")), 0.0, id="zero divisor"),
        pytest.param(
            percent_of(metric("hits"), total(metric("hits"), metric("misses"))),
            80.0,
            id="hit rate",
        ),
        pytest.param(bytes_to_mb(metric("bytes")), 2.0, id="bytes to MB"),
    ],
)
def test_evaluate(expression: MetricExpression, expected: float) -> None:
    assert expression.evaluate(VALUES) == pytest.approx(expected)


@pytest.mark.parametrize(
    "expression",
    [
        metric("gone"),
        total(metric("hits"), metric("gone")),
        Difference(minuend=metric("gone"), subtrahend=constant(1)),
        fraction(metric("hits"), metric("gone")),
        scaled(metric("gone"), 8),
        ClampAtZero(expression=metric("gone")),
    ],
)
def test_no_data_propagates(expression: MetricExpression) -> None:
    assert expression.evaluate(VALUES) is None


def test_undefined_name_is_an_error() -> None:
    with pytest.raises(MetricNotFound) as e:
        total(metric("hits"), metric("typo")).evaluate(VALUES)
    assert e.value.metric_name == "typo"
    assert str(e.value) == "Undefined metric 'typo'"


def test_metric_names() -> None:
    expression = percent_of(metric("hits"), total(metric("hits"), metric("misses")))
    assert list(expression.metric_names()) == ["hits", "hits", "misses"]
    assert list(constant(1).metric_names()) == []


def test_json_round_trip() -> None:
    expression = clamped_difference(metric("a"), Sum(summands=(metric("b"), constant(1.5))))
    dumped = metric_expression_adapter.dump_python(expression)
    assert dumped["type"] == "clamp_at_zero"
    assert dumped["expression"]["subtrahend"]["type"] == "sum"
    assert metric_expression_adapter.validate_python(dumped) == expression


def test_expressions_are_immutable() -> None:
    expression = metric("a")
    with pytest.raises(ValidationError):
        expression.name = "b"  # type: ignore[misc]
