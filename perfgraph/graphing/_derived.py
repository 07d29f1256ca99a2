#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Numeric primitives of the metric expressions

The derived series themselves (CPU areas, hit rates, memory in MB, ...) are
expression trees defined by the graph templates of the plug-ins. This module
only holds the arithmetic the expression nodes evaluate with and the
constants the templates share.
"""

from collections.abc import Iterable
from typing import Final

KB: Final = 1024
MB: Final = KB * 1024

# Order matters: this is the order of the buckets in the stacked CPU graph.
CPU_BUCKETS: Final = ("user", "nice", "system", "irq", "softirq", "iowait")
CPU_TIME_BUCKETS: Final = ("idle",) + CPU_BUCKETS


def clamp_at_zero(value: float) -> float:
    return max(value, 0.0)


def safe_fraction(dividend: float, divisor: float) -> float:
    """A ratio which is 0 for a zero divisor

    >>> safe_fraction(1.0, 0.0)
    0.0
    """
    if divisor == 0:
        return 0.0
    return dividend / divisor


def total_of(values: Iterable[float]) -> float:
    return sum(values, 0.0)
