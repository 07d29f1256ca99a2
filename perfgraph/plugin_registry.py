#!/usr/bin/env python3
# Copyright (C) 2025 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from abc import abstractmethod
from collections.abc import Iterator, Mapping
from typing import TypeVar

from perfgraph.exceptions import MKGeneralException

_VT = TypeVar("_VT")

logger = logging.getLogger("perfgraph")


class Registry(Mapping[str, _VT]):
    """Read-only mapping of plug-in names to plug-in objects

    Subclasses tell the registry how an object is named. Names are unique,
    registering a second object under a known name is a programming error.

        >>> class Collection:
        ...     def __init__(self, name: str):
        ...         self.name = name
        >>> class CollectionRegistry(Registry[Collection]):
        ...     def plugin_name(self, instance: Collection) -> str:
        ...         return instance.name
        >>> registry = CollectionRegistry()
        >>> collection = registry.register(Collection("check_uptime"))
        >>> registry["check_uptime"] is collection
        True
        >>> registry.register(Collection("check_uptime"))
        Traceback (most recent call last):
        ...
        perfgraph.exceptions.MKGeneralException: Plug-in 'check_uptime' is already registered
    """

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, _VT] = {}

    @abstractmethod
    def plugin_name(self, instance: _VT) -> str:
        raise NotImplementedError()

    def registration_hook(self, instance: _VT) -> None:
        pass

    def register(self, instance: _VT) -> _VT:
        name = self.plugin_name(instance)
        if name in self._entries:
            raise MKGeneralException(f"Plug-in '{name}' is already registered")
        self.registration_hook(instance)
        self._entries[name] = instance
        logger.debug("Registered %s", name)
        return instance

    def unregister(self, name: str) -> None:
        del self._entries[name]

    def __getitem__(self, key: str) -> _VT:
        return self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
