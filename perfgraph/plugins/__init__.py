#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from perfgraph.graphing import GraphCollectionRegistry

from . import memcached, mysqld, procstat, redis, snmp_interface, snmp_memory, tcpstats, uptime


def register(registry: GraphCollectionRegistry) -> None:
    for module in (
        procstat,
        redis,
        memcached,
        mysqld,
        snmp_memory,
        snmp_interface,
        tcpstats,
        uptime,
    ):
        registry.register(module.graph_collection)
