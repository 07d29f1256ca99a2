#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Graphs for check_linux_procstat

The plug-in reads /proc/stat. CPU data is cpu_<bucket> for all CPUs together
and cpu<N>_<bucket> for a specific core. Additional data are memory and swap
operations (not on later 2.6 kernels), interrupts and context switches and
process forking and blocked processes.
"""

from collections.abc import Collection, Iterator
from typing_extensions import override

from perfgraph.config import Config
from perfgraph.graphing import (
    AGGREGATE_INDEX,
    build_graph,
    Classifier,
    CoreMatcher,
    GraphCollection,
    GraphContext,
    GraphOptions,
    GraphSpec,
    GraphTemplate,
    graph_possible,
    GroupRegistry,
    SlotMatcher,
    template_graphs,
    TemplateLine,
)
from perfgraph.graphing._derived import CPU_BUCKETS, CPU_TIME_BUCKETS
from perfgraph.graphing._expression import (
    ClampAtZero,
    constant,
    difference,
    metric,
    MetricExpression,
    percent_of,
    total,
)
from perfgraph.type_defs import LineType

CHECK_COMMAND = "check_linux_procstat"

PROCSTAT_SLOTS = frozenset(
    {
        "ctxt",
        "num_intr",
        "processes",
        "procs_running",
        "procs_blocked",
        "swap_paged_in",
        "swap_paged_out",
        "data_paged_in",
        "data_paged_out",
    }
)


def cpu_graph_template(index: int, buckets: Collection[str]) -> GraphTemplate:
    """The stacked CPU graph of the aggregate (in percent) or of one core (in jiffies/s)

    Missing buckets count as 0 in the total and get no visible area."""
    aggregate = index == AGGREGATE_INDEX
    prefix = "percent_" if aggregate else ""

    def raw(bucket: str) -> MetricExpression:
        return metric(bucket) if bucket in buckets else constant(0.0)

    def shown(bucket: str) -> MetricExpression:
        return metric(f"{prefix}{bucket}") if bucket in buckets else constant(0.0)

    def area_type(bucket: str) -> LineType:
        return "area" if bucket in buckets else "helper"

    lines = [
        TemplateLine(
            name="total",
            line_type="helper",
            expression=total(*(raw(b) for b in CPU_TIME_BUCKETS)),
        ),
        TemplateLine(
            name="used",
            line_type="helper",
            expression=difference(metric("total"), raw("idle")),
        ),
    ]
    if aggregate:
        lines.extend(
            TemplateLine(
                name=f"percent_{bucket}",
                line_type="helper",
                expression=percent_of(metric(bucket), metric("total")),
            )
            for bucket in CPU_TIME_BUCKETS
            if bucket in buckets
        )
        lines.append(
            TemplateLine(
                name="percent_used",
                line_type="helper",
                expression=percent_of(metric("used"), metric("total")),
            )
        )

    lines += [
        TemplateLine(
            name="total_idle",
            line_type="comment",
            expression=metric(f"{prefix}idle"),
            title="Total Idle",
        ),
        TemplateLine(
            name="total_used",
            line_type="comment",
            expression=metric(f"{prefix}used"),
            title="Total Used",
        ),
    ]

    # The areas overlap: each one is painted over the previous one, so the
    # visible band of a bucket lies between its top and the next top.
    lines.append(
        TemplateLine(
            name="user_area",
            line_type=area_type("user"),
            expression=metric(f"{prefix}used"),
            title="user",
            legend=shown("user"),
        )
    )
    for previous, bucket in zip(CPU_BUCKETS[:-2], CPU_BUCKETS[1:-1]):
        lines += [
            TemplateLine(
                name=f"{bucket}_area_temp",
                line_type="helper",
                expression=difference(metric(f"{previous}_area"), shown(previous)),
            ),
            TemplateLine(
                name=f"{bucket}_area",
                line_type=area_type(bucket),
                expression=ClampAtZero(expression=metric(f"{bucket}_area_temp")),
                title=bucket,
                legend=shown(bucket),
            ),
        ]
    lines.append(
        TemplateLine(
            name="iowait_area",
            line_type=area_type("iowait"),
            expression=shown("iowait"),
            title="iowait",
        )
    )

    if aggregate:
        return GraphTemplate(
            id="cpu_total",
            title="Total for all CPUs on {host_name}",
            ds_name="Total for All CPUs",
            options=GraphOptions(vertical_label="Percent", lower_limit=0, upper_limit=101),
            any_of=CPU_TIME_BUCKETS,
            lines=lines,
        )
    core_number = index - 1
    return GraphTemplate(
        id="cpu_core",
        title=f"CPU Core {core_number} on {{host_name}}",
        ds_name=f"CPU Core {core_number}",
        options=GraphOptions(vertical_label="jiffs/sec", lower_limit=0),
        any_of=CPU_TIME_BUCKETS,
        lines=lines,
    )


MEMORY_AND_SWAP_TEMPLATE = GraphTemplate(
    id="memory_swap_operations",
    title="Memory and Swap Operations on {host_name}",
    ds_name="Memory and Swap Operations",
    options=GraphOptions(vertical_label="#"),
    required=("swap_paged_in", "swap_paged_out", "data_paged_in", "data_paged_out"),
    lines=[
        TemplateLine(
            name="data_paged_in_area",
            line_type="area",
            expression=metric("data_paged_in"),
            title="Data Paged In",
        ),
        TemplateLine(
            name="data_paged_out_area",
            line_type="stack",
            expression=metric("data_paged_out"),
            title="Data Paged Out",
        ),
        TemplateLine(
            name="swap_paged_in_line",
            line_type="line",
            expression=metric("swap_paged_in"),
            title="Swap Paged In",
        ),
        TemplateLine(
            name="swap_paged_out_line",
            line_type="line",
            expression=total(metric("swap_paged_out"), metric("data_paged_in")),
            title="Swap Paged Out",
            legend=metric("swap_paged_out"),
        ),
    ],
)

INTERRUPTS_TEMPLATE = GraphTemplate(
    id="interrupts_context_switches",
    title="Interrupts and Context Switches on {host_name}",
    ds_name="Interrupts and Context Switches",
    options=GraphOptions(vertical_label="per second", lower_limit=0),
    any_of=("num_intr", "ctxt"),
    lines=[
        TemplateLine(
            name="interrupts",
            line_type="line",
            expression=metric("num_intr"),
            title="Interrupts",
        ),
        TemplateLine(
            name="context_switches",
            line_type="line",
            expression=metric("ctxt"),
            title="Context Switches",
        ),
    ],
)

PROCESSES_TEMPLATE = GraphTemplate(
    id="processes",
    title="Processes on {host_name}",
    ds_name="Processes",
    options=GraphOptions(vertical_label="processes", lower_limit=0),
    any_of=("processes", "procs_running", "procs_blocked"),
    lines=[
        TemplateLine(
            name="running",
            line_type="area",
            expression=metric("procs_running"),
            title="Running",
        ),
        TemplateLine(
            name="blocked",
            line_type="stack",
            expression=metric("procs_blocked"),
            title="Blocked",
        ),
        TemplateLine(
            name="forked",
            line_type="line",
            expression=metric("processes"),
            title="Forked per second",
        ),
    ],
)


class ProcStatGraphCollection(GraphCollection):
    _classifier = Classifier([CoreMatcher("cpu"), SlotMatcher(PROCSTAT_SLOTS)])
    _templates = (MEMORY_AND_SWAP_TEMPLATE, INTERRUPTS_TEMPLATE, PROCESSES_TEMPLATE)

    @property
    @override
    def check_command(self) -> str:
        return CHECK_COMMAND

    @property
    @override
    def classifier(self) -> Classifier:
        return self._classifier

    @override
    def graphs(
        self, registry: GroupRegistry, context: GraphContext, config: Config
    ) -> Iterator[GraphSpec]:
        for index, group in registry.groups():
            template = cpu_graph_template(index, group)
            if template.id in config.disabled_graphs or not graph_possible(template, group):
                continue
            yield build_graph(
                template,
                group,
                context,
                config,
                graph_id=template.id if index == AGGREGATE_INDEX else f"cpu_core_{index - 1}",
            )
        yield from template_graphs(self._templates, registry, context, config)


graph_collection = ProcStatGraphCollection()
