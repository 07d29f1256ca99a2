#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import abc
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing_extensions import override

from perfgraph.config import Config, DEFAULT_CONFIG
from perfgraph.exceptions import MKTemplateError
from perfgraph.log import VERBOSE
from perfgraph.plugin_registry import Registry

from ._classifier import Classifier
from ._graph_specification import GraphSpec
from ._graph_templates import build_graph, graph_possible, GraphTemplate
from ._registry import GroupRegistry
from ._series import GraphContext, Series

logger = logging.getLogger("perfgraph.graphing")


class GraphCollection(abc.ABC):
    """All graphs of one monitoring plug-in"""

    @property
    @abc.abstractmethod
    def check_command(self) -> str: ...

    @property
    @abc.abstractmethod
    def classifier(self) -> Classifier: ...

    @abc.abstractmethod
    def graphs(
        self, registry: GroupRegistry, context: GraphContext, config: Config
    ) -> Iterator[GraphSpec]:
        """Yields the possible graphs in their fixed order"""


class TemplateGraphCollection(GraphCollection):
    """Graphs of a plug-in with a fixed set of performance variables"""

    def __init__(
        self,
        check_command: str,
        expected_labels: Iterable[str],
        templates: Sequence[GraphTemplate],
    ) -> None:
        self._check_command = check_command
        self._classifier = Classifier.flat(expected_labels)
        self._templates = templates

    @property
    @override
    def check_command(self) -> str:
        return self._check_command

    @property
    @override
    def classifier(self) -> Classifier:
        return self._classifier

    @property
    def templates(self) -> Sequence[GraphTemplate]:
        return self._templates

    @override
    def graphs(
        self, registry: GroupRegistry, context: GraphContext, config: Config
    ) -> Iterator[GraphSpec]:
        yield from template_graphs(self._templates, registry, context, config)


def template_graphs(
    templates: Iterable[GraphTemplate],
    registry: GroupRegistry,
    context: GraphContext,
    config: Config,
) -> Iterator[GraphSpec]:
    sources = registry.present_slots()
    for template in templates:
        if template.id in config.disabled_graphs:
            continue
        if graph_possible(template, sources):
            yield build_graph(template, sources, context, config)


class GraphCollectionRegistry(Registry[GraphCollection]):
    @override
    def plugin_name(self, instance: GraphCollection) -> str:
        return instance.check_command

    @override
    def registration_hook(self, instance: GraphCollection) -> None:
        if not isinstance(instance, TemplateGraphCollection):
            return
        seen: set[str] = set()
        for template in instance.templates:
            if template.id in seen:
                raise MKTemplateError(
                    f"{instance.check_command}: graph template {template.id} defined twice"
                )
            seen.add(template.id)


graph_collection_registry = GraphCollectionRegistry()


def assemble_graphs(
    check_command: str,
    series: Iterable[Series],
    context: GraphContext = GraphContext(),
    config: Config = DEFAULT_CONFIG,
    *,
    registry: GraphCollectionRegistry = graph_collection_registry,
) -> list[GraphSpec]:
    """Classifies the series of one service and builds all possible graphs

    This never fails on incomplete data. Unknown check commands, unknown
    labels and missing metrics simply lead to fewer (or no) graphs."""
    try:
        collection = registry[check_command]
    except KeyError:
        logger.log(VERBOSE, "No graphs defined for check command %s", check_command)
        return []

    group_registry = collection.classifier.build_registry(series)
    graphs = [
        spec
        for spec in collection.graphs(group_registry, context, config)
        if spec.template_id not in config.disabled_graphs
    ]
    logger.log(VERBOSE, "%s: assembled %d graphs", check_command, len(graphs))
    return graphs
