#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import ast
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from perfgraph import log
from perfgraph.exceptions import MKConfigError
from perfgraph.type_defs import Consolidation

CONFIG_KEY = "perfgraph"


class Config(BaseModel, frozen=True):
    summary_aggregates: tuple[Consolidation, ...] = ("last", "average", "max")
    value_consolidation: Consolidation = "average"
    disabled_graphs: frozenset[str] = frozenset()
    log_levels: dict[str, int] = {"perfgraph": logging.WARNING}


DEFAULT_CONFIG = Config()


def load_object_from_file(path: Path, default: Any = None) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    if not content.strip():
        return default
    return ast.literal_eval(content)


def read_config(path: Path) -> Config:
    class _Config(BaseModel, frozen=True):
        perfgraph: Config

    try:
        raw_config = load_object_from_file(path, default={})
    except (SyntaxError, ValueError) as e:
        raise MKConfigError(f"Cannot parse configuration file {path}: {e}") from e

    if not isinstance(raw_config, dict) or CONFIG_KEY not in raw_config:
        return DEFAULT_CONFIG

    try:
        return _Config.model_validate(raw_config).perfgraph
    except ValidationError as e:
        raise MKConfigError(f"Invalid configuration in {path}: {e}") from e


def initialize(path: Path) -> Config:
    """Loads the configuration and applies its log levels"""
    config = read_config(path)
    log.set_log_levels(config.log_levels)
    return config
