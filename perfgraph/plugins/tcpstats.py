#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateGraphCollection, TemplateLine
from perfgraph.graphing._expression import metric

CHECK_COMMAND = "check_snmp_tcpstats"

TCPSTATS_LABELS = (
    "active_opens",
    "passive_opens",
    "curr_established",
    "in_errs",
    "attempt_fails",
    "estab_resets",
    "retrans_segs",
)


def _lines(*lines: tuple[str, str]) -> list[TemplateLine]:
    return [
        TemplateLine(name=f"{source}_line", line_type="line", expression=metric(source), title=title)
        for source, title in lines
    ]


CONNECTIONS_TEMPLATE = GraphTemplate(
    id="tcp_connections",
    title="TCP Statistics for {host_name}",
    ds_name="TCP Connections",
    options=GraphOptions(vertical_label="# connections", base=1000),
    any_of=("curr_established", "active_opens", "passive_opens"),
    lines=_lines(
        ("curr_established", "Established Current Sessions"),
        ("active_opens", "Connections Closed Per Second"),
        ("passive_opens", "Completed Connections (Passive)"),
    ),
)

PROBLEMS_TEMPLATE = GraphTemplate(
    id="tcp_problems",
    title="TCP Statistics for {host_name}",
    ds_name="TCP Problems and Errors",
    options=GraphOptions(vertical_label="#", base=1000),
    any_of=("estab_resets", "attempt_fails", "retrans_segs", "in_errs"),
    lines=_lines(
        ("estab_resets", "Reset Sessions (Improperly Closed)"),
        ("attempt_fails", "Attempted Sessions Not Established"),
        ("retrans_segs", "Retransmitted TCP Packets"),
        ("in_errs", "Packets with Input/Checksum Errors"),
    ),
)

graph_collection = TemplateGraphCollection(
    CHECK_COMMAND,
    TCPSTATS_LABELS,
    [CONNECTIONS_TEMPLATE, PROBLEMS_TEMPLATE],
)
