#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graph specifications for classic monitoring plug-ins

The performance data of one service is a set of labeled series. It is
classified into groups (e.g. the CPU cores), derived series are defined on
top of it and the possible graphs are assembled:

    >>> from perfgraph import assemble_graphs, Series, SeriesId
    >>> graphs = assemble_graphs(
    ...     "check_uptime", [Series(series_id=SeriesId("1"), label="uptime_minutes")]
    ... )
    >>> [g.id for g in graphs]
    ['uptime']
"""

from perfgraph import plugins
from perfgraph.config import Config, DEFAULT_CONFIG, initialize, read_config
from perfgraph.graphing import (
    assemble_graphs,
    evaluate_graph,
    graph_collection_registry,
    GraphContext,
    GraphSpec,
    Series,
    StaticValueOracle,
    ValueOracle,
)
from perfgraph.type_defs import SeriesId

plugins.register(graph_collection_registry)

__all__ = [
    "assemble_graphs",
    "Config",
    "DEFAULT_CONFIG",
    "evaluate_graph",
    "graph_collection_registry",
    "initialize",
    "GraphContext",
    "GraphSpec",
    "read_config",
    "Series",
    "SeriesId",
    "StaticValueOracle",
    "ValueOracle",
]
