#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# Metric expressions are small trees which are evaluated against a mapping of
# names to values. A name is either a source (a series of the graph) or the
# name of an earlier line of the same graph. A value of None means "no data"
# and propagates through all operators.

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from perfgraph.exceptions import MetricNotFound

from . import _derived as derived

Values = Mapping[str, float | None]


class Constant(BaseModel, frozen=True):
    type: Literal["constant"] = "constant"
    value: float

    def evaluate(self, values: Values) -> float | None:
        return self.value

    def metric_names(self) -> Iterator[str]:
        yield from ()


class Metric(BaseModel, frozen=True):
    type: Literal["metric"] = "metric"
    name: str

    def evaluate(self, values: Values) -> float | None:
        try:
            return values[self.name]
        except KeyError:
            raise MetricNotFound(self.name) from None

    def metric_names(self) -> Iterator[str]:
        yield self.name


class Sum(BaseModel, frozen=True):
    type: Literal["sum"] = "sum"
    summands: tuple[MetricExpression, ...]

    def evaluate(self, values: Values) -> float | None:
        results = [s.evaluate(values) for s in self.summands]
        if any(r is None for r in results):
            return None
        return derived.total_of(r for r in results if r is not None)

    def metric_names(self) -> Iterator[str]:
        for summand in self.summands:
            yield from summand.metric_names()


class Difference(BaseModel, frozen=True):
    type: Literal["difference"] = "difference"
    minuend: MetricExpression
    subtrahend: MetricExpression

    def evaluate(self, values: Values) -> float | None:
        if (minuend := self.minuend.evaluate(values)) is None:
            return None
        if (subtrahend := self.subtrahend.evaluate(values)) is None:
            return None
        return minuend - subtrahend

    def metric_names(self) -> Iterator[str]:
        yield from self.minuend.metric_names()
        yield from self.subtrahend.metric_names()


class Product(BaseModel, frozen=True):
    type: Literal["product"] = "product"
    factors: tuple[MetricExpression, ...]

    def evaluate(self, values: Values) -> float | None:
        results = [f.evaluate(values) for f in self.factors]
        if any(r is None for r in results):
            return None
        return math.prod(r for r in results if r is not None)

    def metric_names(self) -> Iterator[str]:
        for factor in self.factors:
            yield from factor.metric_names()


class Fraction(BaseModel, frozen=True):
    """A division which yields 0 if the divisor is 0"""

    type: Literal["fraction"] = "fraction"
    dividend: MetricExpression
    divisor: MetricExpression

    def evaluate(self, values: Values) -> float | None:
        if (dividend := self.dividend.evaluate(values)) is None:
            return None
        if (divisor := self.divisor.evaluate(values)) is None:
            return None
        return derived.safe_fraction(dividend, divisor)

    def metric_names(self) -> Iterator[str]:
        yield from self.dividend.metric_names()
        yield from self.divisor.metric_names()


class ClampAtZero(BaseModel, frozen=True):
    type: Literal["clamp_at_zero"] = "clamp_at_zero"
    expression: MetricExpression

    def evaluate(self, values: Values) -> float | None:
        if (value := self.expression.evaluate(values)) is None:
            return None
        return derived.clamp_at_zero(value)

    def metric_names(self) -> Iterator[str]:
        yield from self.expression.metric_names()


MetricExpression = Annotated[
    Constant | Metric | Sum | Difference | Product | Fraction | ClampAtZero,
    Field(discriminator="type"),
]

for _model in (Sum, Difference, Product, Fraction, ClampAtZero):
    _model.model_rebuild()

metric_expression_adapter: TypeAdapter[MetricExpression] = TypeAdapter(MetricExpression)


# Shortcuts for the graph templates


def metric(name: str) -> Metric:
    return Metric(name=name)


def constant(value: float) -> Constant:
    return Constant(value=value)


def total(*summands: MetricExpression) -> Sum:
    return Sum(summands=summands)


def difference(minuend: MetricExpression, subtrahend: MetricExpression) -> Difference:
    return Difference(minuend=minuend, subtrahend=subtrahend)


def clamped_difference(minuend: MetricExpression, subtrahend: MetricExpression) -> ClampAtZero:
    return ClampAtZero(expression=difference(minuend, subtrahend))


def scaled(expression: MetricExpression, factor: float) -> Product:
    return Product(factors=(expression, constant(factor)))


def fraction(dividend: MetricExpression, divisor: MetricExpression) -> Fraction:
    return Fraction(dividend=dividend, divisor=divisor)


def percent_of(part: MetricExpression, whole: MetricExpression) -> Product:
    return scaled(fraction(part, whole), 100.0)


def bytes_to_mb(expression: MetricExpression) -> Fraction:
    return fraction(expression, constant(derived.MB))
