#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# Graph templates which are shared by the cache server plug-ins

from perfgraph.graphing import GraphOptions, GraphTemplate, TemplateLine
from perfgraph.graphing._expression import metric, percent_of, total


def response_time_template(ds_name: str) -> GraphTemplate:
    return GraphTemplate(
        id="response_time",
        title="{service_description} Response Time on {host_name}",
        ds_name=ds_name,
        options=GraphOptions(vertical_label="s"),
        required=("response_time",),
        lines=[
            TemplateLine(
                name="response_time_area",
                line_type="area",
                expression=metric("response_time"),
                title="Response Time",
            ),
        ],
    )


def hits_and_misses_template(hits: str, misses: str, ds_name: str) -> GraphTemplate:
    """Hits stacked with misses, with the hit rate in the legend

    >>> hits_and_misses_template("get_hits", "get_misses", "Hits").required
    ('get_hits', 'get_misses')
    """
    return GraphTemplate(
        id="hits_misses",
        title="{service_description} Hits and Misses on {host_name}",
        ds_name=ds_name,
        options=GraphOptions(vertical_label="hits and misses", lower_limit=0),
        required=(hits, misses),
        lines=[
            TemplateLine(name="hits", line_type="area", expression=metric(hits), title="Hits"),
            TemplateLine(
                name="misses", line_type="stack", expression=metric(misses), title="Misses"
            ),
            TemplateLine(
                name="hitrate",
                line_type="comment",
                expression=percent_of(metric(hits), total(metric(hits), metric(misses))),
                title="Hit Rate",
            ),
        ],
    )


