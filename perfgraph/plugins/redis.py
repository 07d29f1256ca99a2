#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_redis

The order of the performance variables does not matter, so the plug-in can be
called with -A to return all of them. Variables which are not graphed are
ignored.
"""

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import (
    bytes_to_mb,
    clamped_difference,
    constant,
    fraction,
    metric,
    scaled,
)

from ._shared import hits_and_misses_template, response_time_template

CHECK_COMMAND = "check_redis"

REDIS_LABELS = (
    "total_connections_received",
    "used_memory_rss",
    "used_cpu_sys",
    "connected_clients",
    "keyspace_hits",
    "used_cpu_user_children",
    "keyspace_misses",
    "used_cpu_user",
    "total_commands_processed",
    "mem_fragmentation_ratio",
    "used_memory",
    "blocked_clients",
    "expired_keys",
    "used_memory_peak",
    "used_cpu_sys_children",
    "evicted_keys",
    "response_time",
    "total_keys",
    "total_expires",
    "memory_utilization",
)


CONNECTIONS_TEMPLATE = GraphTemplate(
    id="client_connections",
    title="{service_description} Connections to {host_name}",
    ds_name="Redis Client Connections",
    options=GraphOptions(vertical_label="connections", lower_limit=0),
    any_of=("total_connections_received", "connected_clients", "blocked_clients"),
    lines=[
        TemplateLine(
            name="curr_conn",
            line_type="area",
            expression=metric("connected_clients"),
            title="Current Number of Connections",
        ),
        TemplateLine(
            name="conn_rate",
            line_type="line",
            expression=metric("total_connections_received"),
            title="New Connections Per Second",
        ),
        TemplateLine(
            name="blocked",
            line_type="line",
            expression=metric("blocked_clients"),
            title="Blocked Client Connections",
        ),
    ],
)

KEYS_TEMPLATE = GraphTemplate(
    id="keys",
    title="{service_description} Keys on {host_name}",
    ds_name="Redis Keys Store",
    options=GraphOptions(vertical_label="keys", lower_limit=0),
    required=("total_keys", "total_expires"),
    lines=[
        TemplateLine(
            name="keys", line_type="area", expression=metric("total_keys"), title="Total Keys"
        ),
        TemplateLine(
            name="expires",
            line_type="area",
            expression=metric("total_expires"),
            title="Will Expire",
        ),
        TemplateLine(
            name="expired", line_type="line", expression=metric("expired_keys"), title="Expired"
        ),
        TemplateLine(
            name="evicted", line_type="line", expression=metric("evicted_keys"), title="Evicted"
        ),
    ],
)

# RSS minus used memory is the memory allocated but not used. If the
# utilization of the system memory is known, the total memory and the free
# memory can be derived from the RSS.
MEMORY_TEMPLATE = GraphTemplate(
    id="memory",
    title="{service_description} Memory Use on {host_name}",
    ds_name="Redis Memory",
    options=GraphOptions(vertical_label="MB", lower_limit=0, base=1024),
    required=("used_memory", "used_memory_peak"),
    lines=[
        TemplateLine(
            name="use_mb",
            line_type="area",
            expression=bytes_to_mb(metric("used_memory")),
            title="Used Memory",
        ),
        TemplateLine(
            name="maxuse_mb",
            line_type="line",
            expression=bytes_to_mb(metric("used_memory_peak")),
            title="Max Used Memory",
        ),
        TemplateLine(
            name="memrss_mb",
            line_type="helper",
            expression=bytes_to_mb(metric("used_memory_rss")),
        ),
        TemplateLine(
            name="fragmented_mb",
            line_type="stack",
            expression=clamped_difference(metric("memrss_mb"), metric("use_mb")),
            title="Allocated Memory",
            legend=metric("memrss_mb"),
        ),
        TemplateLine(
            name="fragmentation_calc",
            line_type="comment",
            expression=fraction(metric("memrss_mb"), metric("use_mb")),
            title="Fragmentation Ratio (Allocated/Used)",
            summaries=("last",),
        ),
        TemplateLine(
            name="fragmentation_data",
            line_type="comment",
            expression=metric("mem_fragmentation_ratio"),
            title="Fragmentation Ratio (reported)",
            summaries=("last",),
        ),
        TemplateLine(
            name="total_mb",
            line_type="helper",
            expression=scaled(fraction(metric("memrss_mb"), metric("memory_utilization")), 100),
        ),
        TemplateLine(
            name="free_mb",
            line_type="stack",
            expression=clamped_difference(metric("total_mb"), metric("memrss_mb")),
            title="Free Memory",
        ),
        TemplateLine(
            name="free_perc",
            line_type="comment",
            expression=clamped_difference(constant(100), metric("memory_utilization")),
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

CPU_TEMPLATE = GraphTemplate(
    id="cpu_use",
    title="{service_description} CPU Use on {host_name}",
    ds_name="CPU Use",
    options=GraphOptions(vertical_label="cpu time in msec"),
    required=("used_cpu_sys",),
    lines=[
        TemplateLine(
            name="cpu_main_sys",
            line_type="area",
            expression=metric("used_cpu_sys"),
            title="System CPU - Main Thread",
        ),
        TemplateLine(
            name="cpu_child_sys",
            line_type="stack",
            expression=metric("used_cpu_sys_children"),
            title="System CPU - Children",
        ),
        TemplateLine(
            name="cpu_main_user",
            line_type="stack",
            expression=metric("used_cpu_user"),
            title="User CPU - Main Thread",
        ),
        TemplateLine(
            name="cpu_child_user",
            line_type="stack",
            expression=metric("used_cpu_user_children"),
            title="User CPU - Children",
        ),
    ],
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    REDIS_LABELS,
    [
        response_time_template("Redis Response Time"),
        CONNECTIONS_TEMPLATE,
        hits_and_misses_template("keyspace_hits", "keyspace_misses", "Redis Hits and Misses"),
        KEYS_TEMPLATE,
        MEMORY_TEMPLATE,
        CPU_TEMPLATE,
    ],
)
