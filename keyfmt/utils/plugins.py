#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt plugins manager.

Third party crypto providers are distributed as packages registering a module under the
``keyfmt.provider`` entry point group. Importing the module registers its provider classes.
"""

import logging
from types import ModuleType
from typing import Optional

import importlib_metadata

from keyfmt.exceptions import KeyfmtError, KeyfmtTypeError
from keyfmt.utils.keyfmt_enum import KeyfmtEnum
from keyfmt.utils.misc import SingletonMeta

logger = logging.getLogger(__name__)


class PluginType(KeyfmtEnum):
    """Keyfmt plugin types with their entry point group."""

    CRYPTO_PROVIDER = (0, "keyfmt.provider", "Crypto provider")


class PluginsManager(metaclass=SingletonMeta):
    """Keyfmt plugin manager keeping track of already loaded plugin modules."""

    def __init__(self) -> None:
        self.plugins: dict[str, ModuleType] = {}

    def load_from_entrypoints(self, group_name: Optional[str] = None) -> int:
        """Load modules from given entry point group.

        Modules failing to import are logged as warnings and skipped.

        :param group_name: Entry point group to load plugins from. If None, loads from all groups.
        :raises KeyfmtTypeError: When group_name is not a string type.
        :return: The number of successfully loaded plugins.
        """
        if group_name is not None and not isinstance(group_name, str):
            raise KeyfmtTypeError("Group name must be of string type.")
        group_names = [group_name] if group_name is not None else PluginType.labels()

        entry_points: list[importlib_metadata.EntryPoint] = []
        for group in group_names:
            entry_points.extend(importlib_metadata.entry_points(group=group))

        count = 0
        for ep in entry_points:
            try:
                plugin = ep.load()
            except (ModuleNotFoundError, ImportError) as exc:
                logger.warning(f"Module {ep.module} could not be loaded: {exc}")
                continue
            if self.register(plugin):
                logger.info(f"Plugin {ep.name}-{ep.group} has been loaded.")
                count += 1
        return count

    def register(self, plugin: ModuleType) -> bool:
        """Register a plugin module.

        :param plugin: Plugin as a module to be registered.
        :raises KeyfmtError: Plugin name could not be determined.
        :return: True if plugin was registered, False if it had been registered already.
        """
        plugin_name = getattr(plugin, "__name__", None)
        if plugin_name is None:
            raise KeyfmtError("Plugin name could not be determined.")
        if plugin_name in self.plugins:
            logger.debug(f"Plugin {plugin_name} has been already registered.")
            return False
        self.plugins[plugin_name] = plugin
        logger.debug(f"A plugin {plugin_name} has been registered.")
        return True
