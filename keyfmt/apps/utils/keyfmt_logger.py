#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt logging utilities with colored console output support.

The console handler colors records by level, the optional rotating debug log file keeps
everything down to DEBUG level for later inspection.
"""

import logging
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from keyfmt import KEYFMT_DEBUG_LOG_FILE, KEYFMT_DEBUG_LOGGING_DISABLED, __version__

colorama.just_fix_windows_console()

ANSI_COLOR_PATTERN = re.compile(r"\x1b\[\d{1,3}m")

LEVEL_COLORS = {
    logging.DEBUG: colorama.Fore.BLUE,
    logging.INFO: colorama.Fore.WHITE + colorama.Style.BRIGHT,
    logging.WARNING: colorama.Fore.YELLOW,
    logging.ERROR: colorama.Fore.RED,
    logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT,
}


class ColoredFormatter(logging.Formatter):
    """Keyfmt logging formatter coloring records by their level.

    INFO records are printed short, all other levels get timing and source location.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    def __init__(self, colored: bool = True) -> None:
        """Initialize the formatter.

        :param colored: Use colored output.
        """
        super().__init__()
        self.colored = colored
        self.formatters = {
            level: logging.Formatter(self._get_format(level)) for level in LEVEL_COLORS
        }

    def _get_format(self, level: int) -> str:
        fmt = self.FORMAT if level == logging.INFO else self.FORMAT_DEBUG
        if not self.colored:
            return fmt
        return LEVEL_COLORS[level] + fmt + colorama.Style.RESET_ALL

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with format of its level.

        :param record: Input logging record to print.
        :return: Formatted logging string.
        """
        formatter = self.formatters.get(record.levelno) or self.formatters[logging.DEBUG]
        if not self.colored and isinstance(record.msg, str):
            record.msg = ANSI_COLOR_PATTERN.sub("", record.msg)
        return formatter.format(record)


def _has_debug_handler(target_logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == os.path.abspath(KEYFMT_DEBUG_LOG_FILE)
        for h in target_logger.handlers
    )


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install keyfmt log handlers.

    :param level: Console logging level, defaults to logging.WARNING
    :param stream: Stream to output logging, defaults to sys.stderr
    :param colored: Force colored output on or off, detected from the stream when None
    :param logger: Logger to install handlers to, defaults to 'keyfmt' logger
    :param create_debug_logger: Create rotating debug log file
    """
    level = level or logging.WARNING
    target_logger = logger or logging.getLogger("keyfmt")
    target_logger.setLevel(logging.DEBUG)

    color = True
    if "NO_COLOR" in os.environ:
        # For details see https://no-color.org/
        color = False
    if not hasattr(stream, "isatty") or not stream.isatty():
        color = False
    if colored is not None:
        color = colored

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)
    target_logger.propagate = True

    if not create_debug_logger or KEYFMT_DEBUG_LOGGING_DISABLED:
        return
    if _has_debug_handler(target_logger):
        return
    try:
        os.makedirs(os.path.dirname(os.path.abspath(KEYFMT_DEBUG_LOG_FILE)), exist_ok=True)
        debug_handler = logging.handlers.RotatingFileHandler(
            KEYFMT_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as exc:
        target_logger.warning(f"Failed to initialize debug logging: {exc}")
        return
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* KEYFMT DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* Keyfmt version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))
