#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel

from perfgraph.exceptions import MKTemplateError
from perfgraph.type_defs import Consolidation, LineType, SeriesId

from ._expression import MetricExpression


class GraphOptions(BaseModel, frozen=True):
    vertical_label: str = ""
    lower_limit: float | None = None
    upper_limit: float | None = None
    base: Literal[1000, 1024] | None = None


class GraphEntry(BaseModel, frozen=True):
    """One line of a graph

    The expression is what gets painted. If the legend shall show another
    value (e.g. the plain bucket instead of the top of its stacked area),
    it is given as legend_expression."""

    name: str
    line_type: LineType
    expression: MetricExpression
    title: str = ""
    summaries: tuple[Consolidation, ...] = ()
    legend_expression: MetricExpression | None = None

    def legend_source(self) -> MetricExpression:
        return self.expression if self.legend_expression is None else self.legend_expression


class GraphSpec(BaseModel, frozen=True):
    id: str
    template_id: str
    title: str
    ds_name: str
    options: GraphOptions
    sources: dict[str, SeriesId]
    entries: tuple[GraphEntry, ...]

    def entry(self, name: str) -> GraphEntry:
        for entry in self.entries:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def entry_names(self) -> Sequence[str]:
        return [e.name for e in self.entries]


def check_consistency(spec: GraphSpec) -> None:
    """Every name must be defined once and before it is used

    The legend of a line may refer to the line itself."""
    known = set(spec.sources)
    for entry in spec.entries:
        if entry.name in known:
            raise MKTemplateError(f"Graph {spec.id}: the name '{entry.name}' is defined twice")
        _check_defined(spec.id, entry.name, entry.expression, known)
        known.add(entry.name)
        if entry.legend_expression is not None:
            _check_defined(spec.id, entry.name, entry.legend_expression, known)


def _check_defined(
    graph_id: str, line_name: str, expression: MetricExpression, known: set[str]
) -> None:
    if undefined := set(expression.metric_names()) - known:
        raise MKTemplateError(
            f"Graph {graph_id}: line '{line_name}' uses undefined names {sorted(undefined)}"
        )
