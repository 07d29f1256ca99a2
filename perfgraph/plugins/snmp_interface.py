#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_snmp_netint (counters, percent of capacity and errors)"""

from perfgraph.graphing import (
    GraphOptions,
    GraphTemplate,
    ScalarRule,
    TemplateGraphCollection,
    TemplateLine,
)
from perfgraph.graphing._expression import metric, scaled

CHECK_COMMAND = "check_snmp_netint"

NETINT_LABELS = (
    "in_prct",
    "out_prct",
    "in_octet",
    "out_octet",
    "in_error",
    "in_discard",
    "out_error",
    "out_discard",
)

TRAFFIC_BPS_TEMPLATE = GraphTemplate(
    id="interface_traffic_bps",
    title="Network Data Traffic for {host_name}",
    ds_name="Network Interface Traffic (bps)",
    options=GraphOptions(vertical_label="traffic bps", base=1000),
    required=("in_octet", "out_octet"),
    lines=[
        TemplateLine(
            name="in_bits",
            line_type="line",
            expression=scaled(metric("in_octet"), 8),
            title="in",
        ),
        TemplateLine(
            name="out_bits",
            line_type="line",
            expression=scaled(metric("out_octet"), 8),
            title="out",
        ),
    ],
    scalars=(
        ScalarRule(source="in_octet", title="In-Traffic", factor=8),
        ScalarRule(source="out_octet", title="Out-Traffic", factor=8),
    ),
)

TRAFFIC_PERCENT_TEMPLATE = GraphTemplate(
    id="interface_traffic_percent",
    title="Network Data Traffic for {host_name}",
    ds_name="Network Interface Traffic (% of capacity)",
    options=GraphOptions(vertical_label="traffic %", upper_limit=100, base=1000),
    required=("in_prct", "out_prct"),
    lines=[
        TemplateLine(name="in", line_type="line", expression=metric("in_prct"), title="in"),
        TemplateLine(name="out", line_type="line", expression=metric("out_prct"), title="out"),
    ],
    scalars=(
        ScalarRule(source="in_prct", title="In"),
        ScalarRule(source="out_prct", title="Out"),
    ),
)

ERRORS_TEMPLATE = GraphTemplate(
    id="interface_errors",
    title="Network Errors for {host_name}",
    ds_name="Network Interface Errors",
    options=GraphOptions(vertical_label="# errors", base=1000),
    any_of=("in_error", "out_error", "in_discard", "out_discard"),
    lines=[
        TemplateLine(
            name="in_errors", line_type="line", expression=metric("in_error"), title="in error"
        ),
        TemplateLine(
            name="out_errors", line_type="line", expression=metric("out_error"), title="out error"
        ),
        TemplateLine(
            name="in_discards",
            line_type="line",
            expression=metric("in_discard"),
            title="in discard",
        ),
        TemplateLine(
            name="out_discards",
            line_type="line",
            expression=metric("out_discard"),
            title="out discard",
        ),
    ],
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    NETINT_LABELS,
    [TRAFFIC_BPS_TEMPLATE, TRAFFIC_PERCENT_TEMPLATE, ERRORS_TEMPLATE],
)
