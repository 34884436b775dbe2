#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt Service Provider base class.

Concrete service providers are subclasses with a unique ``identifier``. They are found
by walking the subclass tree after the plugins of the service were loaded.
"""

import abc
import inspect
import logging
from typing import Any, Iterator, Type, Union

from typing_extensions import Self

from keyfmt.exceptions import KeyfmtError, KeyfmtKeyError, KeyfmtValueError
from keyfmt.utils.plugins import PluginsManager

logger = logging.getLogger(__name__)


class ServiceProvider(abc.ABC):
    """Service Provider abstract base class.

    :cvar identifier: Unique identifier of the concrete provider.
    :cvar plugin_identifier: Entry point group of external implementations.
    :cvar reserved_keys: Parameter keys consumed by the framework.
    """

    identifier: str
    plugin_identifier: str
    reserved_keys = ["type"]

    def __init_subclass__(cls) -> None:
        """Verify that concrete subclasses define an identifier.

        :raises KeyfmtError: When concrete subclass doesn't have 'identifier' attribute set.
        """
        if not inspect.isabstract(cls) and not hasattr(cls, "identifier"):
            raise KeyfmtError(f"{cls.__name__}.identifier is not set")
        return super().__init_subclass__()

    def info(self) -> str:
        """Provide information about the Service provider.

        :return: Name of the service provider class.
        """
        return self.__class__.__name__

    @classmethod
    def get_types(cls) -> list[str]:
        """Get identifiers of all available concrete providers.

        :return: List of provider identifiers.
        """
        return [sub_class.identifier for sub_class in cls.get_all_providers()]

    @staticmethod
    def convert_params(params: str) -> dict[str, str]:
        """Convert creation params from string into dictionary.

        :param params: Semicolon-separated string of key-value pairs (e.g., "type=local").
        :raises KeyfmtKeyError: Duplicate key found in the parameters.
        :raises KeyfmtValueError: Parameter format is invalid.
        :return: Dictionary containing the parsed key-value pairs.
        """
        result: dict[str, str] = {}
        try:
            for p in params.split(";"):
                key, value = p.split("=")
                if key in result:
                    raise KeyfmtKeyError(f"Duplicate key found: {key}")
                result[key] = value
        except ValueError as e:
            raise KeyfmtValueError(
                "Parameter must meet the following pattern: type=local;key=value"
            ) from e
        return result

    @classmethod
    def create(cls, params: Union[str, dict[str, Any]]) -> Self:
        """Create a concrete instance of the service provider.

        :param params: Either 'type=...;key=value' string or dictionary with 'type' key.
        :raises KeyfmtValueError: No provider of the requested type exists.
        :return: Instance of the matching provider class.
        """
        cls.load_plugins()
        if isinstance(params, str):
            params = cls.convert_params(params)
        params = dict(params)
        klass = cls.get_provider(params["type"])
        for key in cls.reserved_keys:
            params.pop(key, None)
        return klass(**params)

    @classmethod
    def load_plugins(cls) -> None:
        """Load all plugins implementing this service."""
        if hasattr(cls, "plugin_identifier"):
            logger.info(f"Loading plugins: {cls.plugin_identifier}")
            PluginsManager().load_from_entrypoints(cls.plugin_identifier)

    @classmethod
    def get_all_providers(cls) -> list[Type[Self]]:
        """Get list of all concrete providers.

        :return: Provider classes found in the inheritance hierarchy.
        """

        def get_subclasses(base_class: Type[Self]) -> Iterator[Type[Self]]:
            for subclass in base_class.__subclasses__():
                yield subclass
                yield from get_subclasses(subclass)

        return [klass for klass in get_subclasses(cls) if not inspect.isabstract(klass)]

    @classmethod
    def get_provider(cls, identifier: str) -> Type[Self]:
        """Get provider class with given identifier.

        :param identifier: String identifier of the provider to find.
        :raises KeyfmtValueError: When no provider with the given identifier exists.
        :return: Provider class that matches the identifier.
        """
        for provider in cls.get_all_providers():
            if provider.identifier == identifier:
                return provider
        raise KeyfmtValueError(f"No provider with identifier '{identifier}' was found")
