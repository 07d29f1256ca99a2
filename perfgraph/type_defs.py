#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from typing import Literal, NewType

SeriesId = NewType("SeriesId", str)

Consolidation = Literal["average", "last", "max", "min"]

LineType = Literal["area", "stack", "line", "comment", "helper", "hrule"]
