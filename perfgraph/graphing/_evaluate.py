#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from perfgraph.config import Config, DEFAULT_CONFIG
from perfgraph.type_defs import Consolidation, LineType

from ._expression import (
    ClampAtZero,
    Constant,
    Difference,
    Fraction,
    Metric,
    MetricExpression,
    Product,
    Sum,
)
from ._graph_specification import GraphEntry, GraphSpec
from ._series import ValueOracle

_EXTREMES: frozenset[Consolidation] = frozenset({"max", "min"})


@dataclass(frozen=True, kw_only=True)
class EvaluatedEntry:
    name: str
    line_type: LineType
    title: str
    value: float | None
    summaries: Mapping[Consolidation, float | None]


def evaluate_values(
    spec: GraphSpec, oracle: ValueOracle, consolidation: Consolidation
) -> dict[str, float | None]:
    """All sources and lines of a graph under one consolidation function

    Lines are evaluated in order, so each line can use the lines before it.
    The legend value of a line is stored as "<name>.legend" if it differs
    from the painted one."""
    values: dict[str, float | None] = {
        name: oracle.value(series_id, consolidation) for name, series_id in spec.sources.items()
    }
    for entry in spec.entries:
        values[entry.name] = entry.expression.evaluate(values)
        if entry.legend_expression is not None:
            values[f"{entry.name}.legend"] = entry.legend_expression.evaluate(values)
    return values


def evaluate_graph(
    spec: GraphSpec, oracle: ValueOracle, config: Config = DEFAULT_CONFIG
) -> Sequence[EvaluatedEntry]:
    """Current value and summaries of every line of a graph

    A summary of a derived series is computed from its operands consolidated
    with the same function. For "max" and "min" this is only the extreme of
    the series if the series rises with exactly one source (e.g. bytes
    scaled to bits). The extremes of ratios, sums and differences of several
    sources are not known without the single samples, they are None."""
    consolidations = {config.value_consolidation}
    for entry in spec.entries:
        consolidations.update(entry.summaries)
    by_consolidation = {cf: evaluate_values(spec, oracle, cf) for cf in consolidations}
    lines = {entry.name: entry.expression for entry in spec.entries}

    def summary(entry: GraphEntry, cf: Consolidation) -> float | None:
        if cf in _EXTREMES and not follows_one_series(entry.legend_source(), lines):
            return None
        values = by_consolidation[cf]
        if entry.legend_expression is not None:
            return values[f"{entry.name}.legend"]
        return values[entry.name]

    return [
        EvaluatedEntry(
            name=entry.name,
            line_type=entry.line_type,
            title=entry.title,
            value=by_consolidation[config.value_consolidation][entry.name],
            summaries={cf: summary(entry, cf) for cf in entry.summaries},
        )
        for entry in spec.entries
    ]


def follows_one_series(
    expression: MetricExpression, lines: Mapping[str, MetricExpression]
) -> bool:
    """True if the expression rises with at most one source and nothing else

    Names of lines are resolved to their expressions.

    >>> from perfgraph.graphing._expression import metric, percent_of, scaled, total
    >>> follows_one_series(scaled(metric("bytes"), 8), {})
    True
    >>> follows_one_series(percent_of(metric("hits"), total(metric("hits"), metric("misses"))), {})
    False
    """
    return (sources := _rising_with(expression, lines)) is not None and len(sources) <= 1


def _rising_with(
    expression: MetricExpression, lines: Mapping[str, MetricExpression]
) -> set[str] | None:
    # None: not monotonically rising in its sources
    match expression:
        case Constant():
            return set()
        case Metric(name=name):
            if name in lines:
                return _rising_with(lines[name], lines)
            return {name}
        case Sum(summands=summands):
            return _union(_rising_with(s, lines) for s in summands)
        case Product(factors=factors):
            constants = [f for f in factors if isinstance(f, Constant)]
            variables = [f for f in factors if not isinstance(f, Constant)]
            if len(variables) > 1 or any(c.value < 0 for c in constants):
                return None
            return _union(_rising_with(f, lines) for f in variables)
        case Difference(minuend=minuend, subtrahend=Constant()):
            return _rising_with(minuend, lines)
        case Fraction(dividend=dividend, divisor=Constant(value=divisor)) if divisor > 0:
            return _rising_with(dividend, lines)
        case ClampAtZero(expression=inner):
            return _rising_with(inner, lines)
    return None


def _union(parts: Iterable[set[str] | None]) -> set[str] | None:
    result: set[str] = set()
    for part in parts:
        if part is None:
            return None
        result |= part
    return result
