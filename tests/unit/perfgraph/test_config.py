#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from pathlib import Path

import pytest

from perfgraph.config import (
    Config,
    DEFAULT_CONFIG,
    initialize,
    load_object_from_file,
    read_config,
)
from perfgraph.exceptions import MKConfigError


def test_default_config() -> None:
    assert DEFAULT_CONFIG.summary_aggregates == ("last", "average", "max")
    assert DEFAULT_CONFIG.value_consolidation == "average"
    assert DEFAULT_CONFIG.disabled_graphs == frozenset()
    assert DEFAULT_CONFIG.log_levels == {"perfgraph": logging.WARNING}


def test_load_object_from_missing_file(tmp_path: Path) -> None:
    assert load_object_from_file(tmp_path / "missing.mk", default={}) == {}


def test_load_object_from_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.mk"
    path.write_text("\n  \n")
    assert load_object_from_file(path, default=[]) == []


def test_read_config(tmp_path: Path) -> None:
    path = tmp_path / "perfgraph.mk"
    path.write_text(
        repr(
            {
                "perfgraph": {
                    "summary_aggregates": ("max",),
                    "disabled_graphs": {"cpu_core", "uptime"},
                    "log_levels": {"perfgraph.graphing": 10},
                }
            }
        )
    )
    assert read_config(path) == Config(
        summary_aggregates=("max",),
        disabled_graphs=frozenset({"cpu_core", "uptime"}),
        log_levels={"perfgraph.graphing": 10},
    )


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("", id="empty"),
        pytest.param("{}", id="no section"),
        pytest.param("{'other': {}}", id="other section"),
        pytest.param("[1, 2]", id="no dict"),
    ],
)
def test_read_config_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "perfgraph.mk"
    path.write_text(content)
    assert read_config(path) == DEFAULT_CONFIG


def test_read_config_missing_file(tmp_path: Path) -> None:
    assert read_config(tmp_path / "nothing.mk") is DEFAULT_CONFIG


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("{'perfgraph': {", id="syntax error"),
        pytest.param("{'perfgraph': open('x')}", id="no literal"),
        pytest.param("{'perfgraph': {'value_consolidation': 'median'}}", id="invalid value"),
        pytest.param("{'perfgraph': {'summary_aggregates': 5}}", id="invalid type"),
    ],
)
def test_read_config_invalid(tmp_path: Path, content: str) -> None:
    path = tmp_path / "perfgraph.mk"
    path.write_text(content)
    with pytest.raises(MKConfigError):
        read_config(path)


def test_config_is_frozen() -> None:
    with pytest.raises(ValueError):
        DEFAULT_CONFIG.value_consolidation = "max"  # type: ignore[misc]


def test_initialize_applies_log_levels(tmp_path: Path) -> None:
    path = tmp_path / "perfgraph.mk"
    path.write_text(repr({"perfgraph": {"log_levels": {"perfgraph": logging.DEBUG}}}))
    config = initialize(path)
    assert config.log_levels == {"perfgraph": logging.DEBUG}
    assert logging.getLogger("perfgraph").level == logging.DEBUG


def test_initialize_without_file(tmp_path: Path) -> None:
    logging.getLogger("perfgraph").setLevel(logging.DEBUG)
    assert initialize(tmp_path / "nothing.mk") is DEFAULT_CONFIG
    assert logging.getLogger("perfgraph").level == logging.WARNING
