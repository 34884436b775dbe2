#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Miscellaneous keyfmt helpers: file access and small utility classes."""

import logging
import os
from typing import Any, Optional, Type, TypeVar, Union

from keyfmt.exceptions import KeyfmtError

logger = logging.getLogger(__name__)

TS = TypeVar("TS")


def get_abs_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """Convert relative or absolute file path to normalized absolute path.

    :param file_path: File path to be converted to absolute path.
    :param base_dir: Base directory of relative paths, defaults to the current working directory.
    :return: Absolute file path with normalized separators.
    """
    if os.path.isabs(file_path):
        return file_path.replace("\\", "/")

    return os.path.abspath(os.path.join(base_dir or os.getcwd(), file_path)).replace("\\", "/")


def load_file(path: str, mode: str = "r") -> Union[str, bytes]:
    """Load file content from specified path.

    :param path: Path to the file to be loaded.
    :param mode: File reading mode, 'r' for text or 'rb' for binary.
    :raises KeyfmtError: File doesn't exist.
    :return: File content as string (text mode) or bytes (binary mode).
    """
    path = get_abs_path(path)
    if not os.path.isfile(path):
        raise KeyfmtError(f"File not found: {path}")
    logger.debug(f"Loading {'binary' if 'b' in mode else 'text'} file from {path}")
    encoding = None if "b" in mode else "utf-8"
    with open(path, mode, encoding=encoding) as f:
        return f.read()


def load_binary(path: str) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the binary file to load.
    :return: Content of the binary file as bytes.
    """
    data = load_file(path, mode="rb")
    assert isinstance(data, bytes)
    return data


def load_text(path: str) -> str:
    """Load text file content into string.

    :param path: Path to the text file to load.
    :return: Content of the text file as string.
    """
    text = load_file(path, mode="r")
    assert isinstance(text, str)
    return text


def write_file(data: Union[str, bytes], path: str, mode: str = "w", encoding: str = "utf-8") -> int:
    """Write data to a file, creating parent directories when needed.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding, defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)


class SingletonMeta(type):
    """Singleton metaclass, the class is instantiated only once."""

    _instance = None

    def __call__(cls: Type[TS], *args: Any, **kwargs: Any) -> TS:  # type: ignore
        """Create or return singleton instance of the class.

        :param args: Positional arguments to pass to the class constructor.
        :param kwargs: Keyword arguments to pass to the class constructor.
        :return: The singleton instance of the class.
        """
        if cls._instance is None:  # type: ignore
            instance = super().__call__(*args, **kwargs)  # type: ignore
            cls._instance = instance  # type: ignore
        return cls._instance  # type: ignore
