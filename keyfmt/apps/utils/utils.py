#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt application utilities: application error and error handling decorator."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from keyfmt import KEYFMT_DEBUG_LOG_FILE, KEYFMT_DEBUG_LOGGING_DISABLED
from keyfmt.exceptions import KeyfmtError

logger = logging.getLogger(__name__)


class KeyfmtAppError(KeyfmtError):
    """Keyfmt application error exception for CLI tools.

    Represents non-fatal errors of the application, carries the exit code passed to the OS.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.error_code = error_code


def catch_keyfmt_error(function: Callable) -> Callable:
    """Catch and handle KeyfmtError and other exceptions.

    Application errors exit with their error code (1 by default), library errors exit
    with code 2 and anything unexpected exits with code 3. The traceback is logged at
    DEBUG level, so it lands in the debug log file.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except KeyfmtAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, KeyfmtError) as keyfmt_exc:
            click.echo(f"{keyfmt_exc.__class__.__name__}: {keyfmt_exc}", err=True)
            logger.debug(str(keyfmt_exc), exc_info=True)
            if not KEYFMT_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {KEYFMT_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not KEYFMT_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {KEYFMT_DEBUG_LOG_FILE} for more info.", fg="yellow"
                )
            sys.exit(3)

    return wrapper
