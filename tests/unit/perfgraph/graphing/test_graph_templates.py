#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from perfgraph.config import Config
from perfgraph.exceptions import MKTemplateError
from perfgraph.graphing import (
    build_graph,
    GraphContext,
    GraphEntry,
    GraphOptions,
    GraphSpec,
    GraphTemplate,
    graph_possible,
    ScalarRule,
    Series,
    TemplateLine,
)
from perfgraph.graphing._expression import constant, metric, scaled, total
from perfgraph.graphing._graph_specification import check_consistency
from perfgraph.type_defs import SeriesId

TEMPLATE = GraphTemplate(
    id="traffic",
    title="Traffic of {service_description} on {host_name}",
    ds_name="Traffic",
    options=GraphOptions(vertical_label="bits/sec", base=1000),
    required=("in",),
    lines=[
        TemplateLine(name="in_bits", line_type="area", expression=scaled(metric("in"), 8)),
        TemplateLine(name="out_bits", line_type="line", expression=scaled(metric("out"), 8)),
        TemplateLine(
            name="sum_bits",
            line_type="comment",
            expression=total(metric("in_bits"), metric("out_bits")),
            summaries=("max",),
        ),
        TemplateLine(name="helper", line_type="helper", expression=metric("in")),
    ],
    scalars=(ScalarRule(source="in", title="In", factor=8),),
)


def _sources(*labels: str, warn: float | None = None) -> dict[str, Series]:
    return {
        label: Series(series_id=SeriesId(f"rrd:{label}"), label=label, warn=warn)
        for label in labels
    }


def test_graph_possible() -> None:
    assert graph_possible(TEMPLATE, _sources("in"))
    assert not graph_possible(TEMPLATE, _sources("out"))


def test_graph_possible_any_of() -> None:
    template = GraphTemplate(id="t", title="", ds_name="", lines=[], any_of=("a", "b"))
    assert graph_possible(template, _sources("b"))
    assert not graph_possible(template, _sources("c"))


def test_build_graph_all_sources(context: GraphContext, config: Config) -> None:
    spec = build_graph(TEMPLATE, _sources("in", "out", "unused"), context, config)
    assert spec.id == spec.template_id == "traffic"
    assert spec.title == "Traffic of Kernel Performance on heute"
    assert spec.entry_names() == ["in_bits", "out_bits", "sum_bits", "helper"]
    assert spec.sources == {"in": "rrd:in", "out": "rrd:out"}


def test_build_graph_skips_lines_with_missing_names(
    context: GraphContext, config: Config
) -> None:
    spec = build_graph(TEMPLATE, _sources("in"), context, config)
    # sum_bits depends on the skipped out_bits line
    assert spec.entry_names() == ["in_bits", "helper"]
    assert spec.sources == {"in": "rrd:in"}


def test_build_graph_summaries(context: GraphContext) -> None:
    config = Config(summary_aggregates=("last", "min"))
    spec = build_graph(TEMPLATE, _sources("in", "out"), context, config)
    assert spec.entry("in_bits").summaries == ("last", "min")
    assert spec.entry("sum_bits").summaries == ("max",)
    assert spec.entry("helper").summaries == ()


def test_build_graph_scalar_rules(context: GraphContext, config: Config) -> None:
    spec = build_graph(TEMPLATE, _sources("in", warn=100.0), context, config)
    rule = spec.entry("in_warn")
    assert rule.line_type == "hrule"
    assert rule.expression == constant(800.0)
    assert rule.title == "In Warning on 800"
    assert "in_crit" not in spec.entry_names()


def test_build_graph_with_graph_id(context: GraphContext, config: Config) -> None:
    spec = build_graph(TEMPLATE, _sources("in"), context, config, graph_id="traffic_eth0")
    assert spec.id == "traffic_eth0"
    assert spec.template_id == "traffic"


def test_lines_shadow_sources_of_the_same_name(context: GraphContext, config: Config) -> None:
    template = GraphTemplate(
        id="t",
        title="",
        ds_name="",
        lines=[
            TemplateLine(name="total", line_type="helper", expression=metric("a")),
            TemplateLine(name="twice", line_type="line", expression=scaled(metric("total"), 2)),
        ],
    )
    spec = build_graph(template, _sources("a", "total"), context, config)
    assert spec.sources == {"a": "rrd:a"}


def _spec(*entries: GraphEntry) -> GraphSpec:
    return GraphSpec(
        id="g",
        template_id="g",
        title="",
        ds_name="",
        options=GraphOptions(),
        sources={"a": SeriesId("rrd:a")},
        entries=entries,
    )


def test_check_consistency_duplicate_name() -> None:
    with pytest.raises(MKTemplateError, match="defined twice"):
        check_consistency(
            _spec(
                GraphEntry(name="x", line_type="line", expression=metric("a")),
                GraphEntry(name="x", line_type="line", expression=metric("a")),
            )
        )


def test_check_consistency_use_before_definition() -> None:
    with pytest.raises(MKTemplateError, match="undefined names"):
        check_consistency(
            _spec(
                GraphEntry(name="x", line_type="line", expression=metric("y")),
                GraphEntry(name="y", line_type="line", expression=metric("a")),
            )
        )


def test_check_consistency_legend_may_use_own_line() -> None:
    check_consistency(
        _spec(
            GraphEntry(
                name="x",
                line_type="area",
                expression=metric("a"),
                legend_expression=scaled(metric("x"), 2),
            ),
        )
    )


def test_graph_spec_is_serializable(context: GraphContext, config: Config) -> None:
    spec = build_graph(TEMPLATE, _sources("in", "out"), context, config)
    assert GraphSpec.model_validate_json(spec.model_dump_json()) == spec
