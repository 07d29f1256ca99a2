#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_mysqld

The plug-in returns the status variables of "SHOW GLOBAL STATUS" which were
requested with -A. SELECT queries are split into the ones answered from the
query cache and the ones which read from the database. The latter are again
split into queries which were added to the cache and the ones which were not.
"""

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import (
    clamped_difference,
    difference,
    metric,
    scaled,
    total,
)

CHECK_COMMAND = "check_mysqld"

MYSQLD_LABELS = (
    "com_commit",
    "com_rollback",
    "com_delete",
    "com_update",
    "com_insert",
    "com_insert_select",
    "com_select",
    "qcache_hits",
    "qcache_inserts",
    "qcache_not_cached",
    "questions",
    "bytes_sent",
    "bytes_received",
    "aborted_clients",
    "aborted_connects",
    "binlog_cache_disk_use",
    "binlog_cache_use",
    "connections",
    "created_tmp_disk_tables",
    "created_tmp_files",
    "created_tmp_tables",
    "max_used_connections",
    "open_files",
    "open_tables",
    "opened_tables",
    "slow_queries",
    "table_locks_immediate",
    "table_locks_waited",
    "threads_cached",
    "threads_connected",
    "threads_created",
    "threads_running",
)

_COMMANDS = (
    ("com_commit", "Commit Commands"),
    ("com_rollback", "Rollback Commands"),
    ("com_delete", "Delete Commands"),
    ("com_update", "Update Commands"),
    ("com_insert", "Insert Commands"),
    ("com_insert_select", "Insert_Select Commands"),
)

QUERIES_TEMPLATE = GraphTemplate(
    id="sql_queries",
    title="SQL Queries on {host_name}",
    ds_name="SQL Queries",
    options=GraphOptions(vertical_label="commands/sec", base=1000),
    required=tuple(name for name, _title in _COMMANDS)
    + ("com_select", "qcache_hits", "qcache_inserts", "qcache_not_cached", "questions"),
    lines=[
        *(
            TemplateLine(
                name=f"{name}_area",
                line_type="area" if index == 0 else "stack",
                expression=metric(name),
                title=title,
            )
            for index, (name, title) in enumerate(_COMMANDS)
        ),
        TemplateLine(
            name="select_graph",
            line_type="stack",
            expression=clamped_difference(
                difference(metric("com_select"), metric("qcache_inserts")),
                metric("qcache_not_cached"),
            ),
            title="Select - from DB",
            legend=metric("com_select"),
        ),
        TemplateLine(
            name="qc_not_cached",
            line_type="stack",
            expression=metric("qcache_not_cached"),
            title="- of that not cached",
        ),
        TemplateLine(
            name="qc_inserts",
            line_type="stack",
            expression=metric("qcache_inserts"),
            title="- of that added to cache",
        ),
        TemplateLine(
            name="qc_hits",
            line_type="stack",
            expression=metric("qcache_hits"),
            title="Select - from Cache",
        ),
        TemplateLine(
            name="com_select_total",
            line_type="comment",
            expression=total(metric("com_select"), metric("qcache_hits")),
            title="Total Select Queries",
        ),
        TemplateLine(
            name="queries_nocache",
            line_type="line",
            expression=difference(metric("questions"), metric("qcache_hits")),
            title="All DB Queries (except cache hits)",
        ),
        TemplateLine(
            name="all_questions",
            line_type="line",
            expression=metric("questions"),
            title="All Questions (counting cache hits)",
        ),
    ],
)

TRAFFIC_TEMPLATE = GraphTemplate(
    id="data_traffic",
    title="DB Net Traffic on {host_name}",
    ds_name="Data Traffic",
    options=GraphOptions(vertical_label="bits/sec", base=1000),
    required=("bytes_sent", "bytes_received"),
    lines=[
        TemplateLine(
            name="out_bits",
            line_type="area",
            expression=scaled(metric("bytes_sent"), 8),
            title="out",
        ),
        TemplateLine(
            name="in_bits",
            line_type="line",
            expression=scaled(metric("bytes_received"), 8),
            title="in",
        ),
    ],
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    MYSQLD_LABELS,
    [QUERIES_TEMPLATE, TRAFFIC_TEMPLATE],
)
