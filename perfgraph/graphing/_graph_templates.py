#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from perfgraph.config import Config
from perfgraph.log import VERBOSE
from perfgraph.type_defs import Consolidation, LineType

from ._expression import constant, MetricExpression
from ._graph_specification import check_consistency, GraphEntry, GraphOptions, GraphSpec
from ._series import GraphContext, Series

logger = logging.getLogger("perfgraph.graphing")


@dataclass(frozen=True, kw_only=True)
class TemplateLine:
    name: str
    line_type: LineType
    expression: MetricExpression
    title: str = ""
    # None means: use the summaries of the configuration
    summaries: Sequence[Consolidation] | None = None
    legend: MetricExpression | None = None

    def used_names(self) -> Iterator[str]:
        yield from self.expression.metric_names()
        if self.legend is not None:
            yield from (n for n in self.legend.metric_names() if n != self.name)


@dataclass(frozen=True, kw_only=True)
class ScalarRule:
    """Horizontal rules at the warn and crit levels of a source"""

    source: str
    title: str
    # e.g. 8 for rules on a bits graph of a bytes source
    factor: float = 1.0


@dataclass(frozen=True, kw_only=True)
class GraphTemplate:
    """Template for a graph over named sources

    The graph is only possible if all required sources are present and, if
    any_of is given, at least one of those. Every line whose names are not
    all available is left out of the graph. This makes all other sources
    optional."""

    id: str
    title: str
    ds_name: str
    lines: Sequence[TemplateLine]
    options: GraphOptions = GraphOptions()
    required: Sequence[str] = ()
    any_of: Sequence[str] = ()
    scalars: Sequence[ScalarRule] = ()


def graph_possible(template: GraphTemplate, sources: Mapping[str, Series]) -> bool:
    if missing := [name for name in template.required if name not in sources]:
        logger.log(VERBOSE, "Graph %s not possible, missing %s", template.id, ", ".join(missing))
        return False
    if template.any_of and not any(name in sources for name in template.any_of):
        logger.log(
            VERBOSE, "Graph %s not possible, none of %s", template.id, ", ".join(template.any_of)
        )
        return False
    return True


def build_graph(
    template: GraphTemplate,
    sources: Mapping[str, Series],
    context: GraphContext,
    config: Config,
    *,
    graph_id: str | None = None,
) -> GraphSpec:
    available = set(sources)
    line_names: set[str] = set()
    used_sources: set[str] = set()
    entries = []
    for line in template.lines:
        used = set(line.used_names())
        if missing := used - available:
            logger.debug("Graph %s: skipping line %s, missing %s", template.id, line.name, missing)
            continue
        # Earlier lines shadow sources of the same name
        used_sources.update(used - line_names)
        entries.append(
            GraphEntry(
                name=line.name,
                line_type=line.line_type,
                expression=line.expression,
                title=line.title,
                summaries=_summaries(line, config),
                legend_expression=line.legend,
            )
        )
        available.add(line.name)
        line_names.add(line.name)

    entries.extend(_scalar_entries(template.scalars, sources))

    spec = GraphSpec(
        id=graph_id or template.id,
        template_id=template.id,
        title=template.title.format(
            host_name=context.host_name,
            service_description=context.service_description,
        ),
        ds_name=template.ds_name,
        options=template.options,
        sources={name: sources[name].series_id for name in sorted(used_sources)},
        entries=tuple(entries),
    )
    check_consistency(spec)
    return spec


def _summaries(line: TemplateLine, config: Config) -> tuple[Consolidation, ...]:
    if line.line_type in ("helper", "hrule"):
        return ()
    if line.summaries is None:
        return config.summary_aggregates
    return tuple(line.summaries)


def _scalar_entries(
    scalars: Sequence[ScalarRule], sources: Mapping[str, Series]
) -> Iterator[GraphEntry]:
    for scalar in scalars:
        if (series := sources.get(scalar.source)) is None:
            continue
        for level_name, level in (("warn", series.warn), ("crit", series.crit)):
            if level is None:
                continue
            level *= scalar.factor
            yield GraphEntry(
                name=f"{scalar.source}_{level_name}",
                line_type="hrule",
                expression=constant(level),
                title=f"{scalar.title} {'Warning' if level_name == 'warn' else 'Critical'} on {level:g}",
            )
