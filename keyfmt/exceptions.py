#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt exception classes and error handling utilities.

This module defines the hierarchy of custom exception classes used throughout
the keyfmt library for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # Keyfmt Exceptions
#######################################################################


class KeyfmtError(Exception):
    """Keyfmt Base Exception.

    Base exception class for all keyfmt-related errors. It provides consistent error
    formatting; all keyfmt-specific exceptions inherit from this class.

    :cvar fmt: Default error message format template.
    """

    fmt = "KEYFMT: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base keyfmt Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        If no description is provided, defaults to "Unknown Error".

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class KeyfmtKeyError(KeyfmtError, KeyError):
    """Keyfmt Key Error exception for missing or invalid lookup keys."""


class KeyfmtValueError(KeyfmtError, ValueError):
    """Keyfmt standard value error exception.

    This exception is raised when an invalid value is provided to keyfmt operations,
    combining keyfmt-specific error handling with standard ValueError semantics.
    """


class KeyfmtTypeError(KeyfmtError, TypeError):
    """Keyfmt standard type error exception."""

