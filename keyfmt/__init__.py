#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt - asymmetric key format conversion toolkit.

Converts RSA and elliptic-curve key material between containers (PKCS#1, PKCS#8, SEC1)
and serializations (PEM, DER), and renders raw key bytes as text in a selectable
character encoding (Base64, hexadecimal, raw text).

MULTIPLE INTERFACES:
    - Pure Python library for custom integrations
    - ``keyfmt`` command line tool for automation and scripting
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_keyfmt_version() -> Version:
    """Get keyfmt version information.

    :return: Parsed version object containing keyfmt version information.
    """
    from .__version__ import __version__ as keyfmt_version

    return parse(keyfmt_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_keyfmt_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)
__release__ = "beta"

KEYFMT_VERSION_BASE = version.base_version
KEYFMT_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="keyfmt",
    version=KEYFMT_VERSION_BASE,
)

KEYFMT_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("KEYFMT_DEBUG_LOGGING_DISABLED"))
KEYFMT_DEBUG_LOG_FILE = os.environ.get(
    "KEYFMT_DEBUG_LOG_FILE", os.path.join(KEYFMT_PLATFORM_DIRS.user_log_dir, "debug.log")
)

# Label of the text encoding used by display controls when nothing else was selected
KEYFMT_TEXT_ENCODING = os.environ.get("KEYFMT_TEXT_ENCODING", "base64")
