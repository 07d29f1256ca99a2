#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_memcached"""

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import (
    bytes_to_mb,
    clamped_difference,
    constant,
    fraction,
    metric,
    percent_of,
    scaled,
)

from ._shared import hits_and_misses_template, response_time_template

CHECK_COMMAND = "check_memcached"

# The variables requested with -A by the plug-in call
MEMCACHED_LABELS = (
    "utilization",
    "hitrate",
    "response_time",
    "curr_connections",
    "evictions",
    "cmd_set",
    "bytes_written",
    "curr_items",
    "uptime",
    "rusage_system",
    "get_hits",
    "total_connections",
    "get_misses",
    "bytes",
    "time",
    "connection_structures",
    "total_items",
    "limit_maxbytes",
    "rusage_user",
    "cmd_get",
    "bytes_read",
    "threads",
    "rusage_user_ms",
    "rusage_system_ms",
)

CONNECTIONS_TEMPLATE = GraphTemplate(
    id="client_connections",
    title="{service_description} Connections to {host_name}",
    ds_name="Memcached Client Connections",
    options=GraphOptions(vertical_label="connections", lower_limit=0),
    any_of=("curr_connections", "total_connections"),
    lines=[
        TemplateLine(
            name="curr_conn",
            line_type="area",
            expression=metric("curr_connections"),
            title="Current Number of Connections",
        ),
        TemplateLine(
            name="conn_rate",
            line_type="line",
            expression=metric("total_connections"),
            title="New Connections Per Second",
        ),
        TemplateLine(
            name="conn_struct",
            line_type="comment",
            expression=metric("connection_structures"),
            title="Total Connection Structures",
        ),
    ],
)

TRAFFIC_TEMPLATE = GraphTemplate(
    id="data_traffic",
    title="{service_description} Net Traffic on {host_name}",
    ds_name="Data Traffic",
    options=GraphOptions(vertical_label="bits/sec", base=1000),
    required=("bytes_read", "bytes_written"),
    lines=[
        TemplateLine(
            name="out_bits",
            line_type="area",
            expression=scaled(metric("bytes_written"), 8),
            title="out",
        ),
        TemplateLine(
            name="in_bits",
            line_type="line",
            expression=scaled(metric("bytes_read"), 8),
            title="in",
        ),
    ],
)

MEMORY_TEMPLATE = GraphTemplate(
    id="memory",
    title="{service_description} Memory Use on {host_name}",
    ds_name="Memcached Memory",
    options=GraphOptions(vertical_label="MB", lower_limit=0, base=1024),
    required=("bytes", "limit_maxbytes"),
    lines=[
        TemplateLine(
            name="total_mb",
            line_type="helper",
            expression=bytes_to_mb(metric("limit_maxbytes")),
        ),
        TemplateLine(
            name="use_perc",
            line_type="helper",
            expression=percent_of(metric("bytes"), metric("limit_maxbytes")),
        ),
        TemplateLine(
            name="use_mb",
            line_type="area",
            expression=bytes_to_mb(metric("bytes")),
            title="Used Memory",
        ),
        TemplateLine(
            name="used_percent",
            line_type="comment",
            expression=metric("use_perc"),
            title="Used Memory (%)",
        ),
        TemplateLine(
            name="free_mb",
            line_type="stack",
            expression=clamped_difference(metric("total_mb"), metric("use_mb")),
            title="Free Memory",
        ),
        TemplateLine(
            name="free_percent",
            line_type="comment",
            expression=clamped_difference(constant(100), metric("use_perc")),
            title="Free Memory (%)",
        ),
        TemplateLine(
            name="total_memory",
            line_type="comment",
            expression=metric("total_mb"),
            title="Total Memory",
            summaries=("last",),
        ),
    ],
)

ITEMS_TEMPLATE = GraphTemplate(
    id="data_items",
    title="{service_description} Data Items on {host_name}",
    ds_name="Data Items Store",
    options=GraphOptions(vertical_label="# items"),
    any_of=("total_items", "curr_items"),
    lines=[
        TemplateLine(
            name="items_added",
            line_type="area",
            expression=metric("total_items"),
            title="Items Added Per Sec",
        ),
        TemplateLine(
            name="current_items",
            line_type="comment",
            expression=metric("curr_items"),
            title="Total Current Items",
            summaries=("last",),
        ),
    ],
)

CPU_TEMPLATE = GraphTemplate(
    id="cpu_use",
    title="CPU Time Use for {service_description} on {host_name}",
    ds_name="CPU Use",
    options=GraphOptions(vertical_label="cpu time in msec"),
    any_of=("rusage_system_ms", "rusage_user_ms"),
    lines=[
        TemplateLine(
            name="rusage_system_graph",
            line_type="area",
            expression=fraction(metric("rusage_system_ms"), constant(1024)),
            title="CPU System Mode Time",
        ),
        TemplateLine(
            name="rusage_user_graph",
            line_type="stack",
            expression=fraction(metric("rusage_user_ms"), constant(1024)),
            title="CPU User Mode Time",
        ),
    ],
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    MEMCACHED_LABELS,
    [
        response_time_template("Memcache Response Time"),
        CONNECTIONS_TEMPLATE,
        TRAFFIC_TEMPLATE,
        hits_and_misses_template("get_hits", "get_misses", "Hits and Misses"),
        MEMORY_TEMPLATE,
        ITEMS_TEMPLATE,
        CPU_TEMPLATE,
    ],
)
