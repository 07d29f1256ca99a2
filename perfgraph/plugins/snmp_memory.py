#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_snmp_memory (Linux, values in MB)"""

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import metric, total

CHECK_COMMAND = "check_snmp_memory"

SNMP_MEMORY_LABELS = (
    "total_free",
    "perc_avail_real",
    "shared",
    "perc_avail_swap",
    "perc_buffer_real",
    "user",
    "perc_user_real",
    "avail_swap",
    "perc_used_real",
    "used_swap",
    "total",
    "perc_cached_real",
    "cached",
    "total_swap",
    "buffer",
    "min_swap",
    "avail_real",
    "total_real",
    "perc_used_swap",
)

_STACKED = (
    ("user", "perc_user_real", "Used"),
    ("buffer", "perc_buffer_real", "Buffers"),
    ("cached", "perc_cached_real", "Cached"),
    ("avail_real", "perc_avail_real", "Free"),
)


def _stacked_lines() -> list[TemplateLine]:
    lines = []
    for index, (source, percent, title) in enumerate(_STACKED):
        lines += [
            TemplateLine(
                name=f"{source}_area",
                line_type="area" if index == 0 else "stack",
                expression=metric(source),
                title=title,
            ),
            TemplateLine(
                name=f"{percent}_comment",
                line_type="comment",
                expression=metric(percent),
                title=f"{title} (% of RAM)",
            ),
        ]
    return lines


MEMORY_TEMPLATE = GraphTemplate(
    id="system_memory",
    title="Memory Use on {host_name}",
    ds_name="System Memory",
    options=GraphOptions(vertical_label="Memory (MB)", base=1000),
    required=("user", "buffer", "cached", "avail_real"),
    lines=[
        *_stacked_lines(),
        TemplateLine(
            name="total_ram",
            line_type="comment",
            expression=metric("total_real"),
            title="Total RAM",
            summaries=("last",),
        ),
        TemplateLine(
            name="used_swap_area",
            line_type="stack",
            expression=metric("used_swap"),
            title="Swap Used",
        ),
        TemplateLine(
            name="perc_used_swap_comment",
            line_type="comment",
            expression=metric("perc_used_swap"),
            title="Swap Used (% of RAM)",
        ),
        TemplateLine(
            name="swap_plus_real",
            line_type="line",
            expression=total(metric("total_swap"), metric("total_real")),
            title="Swap Total",
            summaries=("last",),
            legend=metric("total_swap"),
        ),
        TemplateLine(
            name="total_real_line",
            line_type="line",
            expression=metric("total_real"),
            summaries=(),
        ),
    ],
)

graph_collection = TemplateGraphCollection(CHECK_COMMAND, SNMP_MEMORY_LABELS, [MEMORY_TEMPLATE])
