#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import constant, fraction, metric

CHECK_COMMAND = "check_uptime"

MINUTES_PER_DAY = 60 * 24

UPTIME_TEMPLATE = GraphTemplate(
    id="uptime",
    title="Uptime for {host_name}",
    ds_name="Uptime",
    options=GraphOptions(vertical_label="days"),
    required=("uptime_minutes",),
    lines=[
        TemplateLine(
            name="days",
            line_type="area",
            expression=fraction(metric("uptime_minutes"), constant(MINUTES_PER_DAY)),
            title="Uptime",
            summaries=("last", "average", "max"),
        ),
    ],
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    ("uptime_seconds", "uptime_minutes"),
    [UPTIME_TEMPLATE],
)
