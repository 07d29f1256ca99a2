#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from ._assembler import (
    assemble_graphs,
    graph_collection_registry,
    GraphCollection,
    GraphCollectionRegistry,
    template_graphs,
    TemplateGraphCollection,
)
from ._classifier import Classifier, CoreMatcher, LabelMatcher, SlotMatcher
from ._evaluate import EvaluatedEntry, evaluate_graph, evaluate_values
from ._expression import metric_expression_adapter, MetricExpression
from ._graph_specification import GraphEntry, GraphOptions, GraphSpec
from ._graph_templates import build_graph, graph_possible, GraphTemplate, ScalarRule, TemplateLine
from ._registry import AGGREGATE_INDEX, core_index, GroupKey, GroupRegistry, IndexedKey, SlotKey
from ._series import GraphContext, Series, StaticValueOracle, ValueOracle

__all__ = [
    "AGGREGATE_INDEX",
    "assemble_graphs",
    "build_graph",
    "Classifier",
    "core_index",
    "CoreMatcher",
    "evaluate_graph",
    "evaluate_values",
    "EvaluatedEntry",
    "graph_collection_registry",
    "graph_possible",
    "GraphCollection",
    "GraphCollectionRegistry",
    "GraphContext",
    "GraphEntry",
    "GraphOptions",
    "GraphSpec",
    "GraphTemplate",
    "GroupKey",
    "GroupRegistry",
    "IndexedKey",
    "LabelMatcher",
    "metric_expression_adapter",
    "MetricExpression",
    "ScalarRule",
    "Series",
    "SlotKey",
    "SlotMatcher",
    "StaticValueOracle",
    "template_graphs",
    "TemplateGraphCollection",
    "TemplateLine",
    "ValueOracle",
]
