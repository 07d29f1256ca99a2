#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the graph assembly."""

__all__ = [
    "MKConfigError",
    "MKException",
    "MKGeneralException",
    "MKTemplateError",
    "MetricNotFound",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class MKException(Exception):
    pass


class MKGeneralException(MKException):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    def __str__(self) -> str:
        return self.reason


class MKConfigError(MKGeneralException):
    """The configuration file could not be parsed or has invalid values."""


class MKTemplateError(MKGeneralException):
    """A graph template is inconsistent, e.g. two lines share one name."""


# Absent data is not an error (it evaluates to None). This is only raised
# when an expression refers to a name the graph never defined.
class MetricNotFound(MKGeneralException):
    def __init__(self, metric_name: str) -> None:
        self.metric_name = metric_name
        super().__init__(f"Undefined metric '{metric_name}'")
