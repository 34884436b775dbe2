#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt text codecs for displaying binary key material.

Each ``TextEncoding`` has exactly one ``TextCodec`` in the codec registry. Encoding never
fails and decoding either returns the original bytes or raises ``DecodeFailure``; partially
decoded data are never returned.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Callable

from keyfmt.crypto.crypto_types import TextEncoding
from keyfmt.crypto.exceptions import DecodeFailure
from keyfmt.exceptions import KeyfmtError

logger = logging.getLogger(__name__)

BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
BASE64_URL_PATTERN = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")
HEX_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{2})*$")


@dataclass(frozen=True)
class TextCodec:
    """Pair of conversion functions between bytes and text for one encoding."""

    encoding: TextEncoding
    encoder: Callable[[bytes], str]
    decoder: Callable[[str], bytes]

    def encode(self, data: bytes) -> str:
        """Encode binary data into text.

        :param data: Data to encode.
        :return: Text representation of the data.
        """
        return self.encoder(data)

    def decode(self, text: str) -> bytes:
        """Decode text into binary data.

        :param text: Text to decode.
        :raises DecodeFailure: Text is not valid in this encoding.
        :return: Decoded data.
        """
        try:
            return self.decoder(text)
        except DecodeFailure:
            raise
        except (binascii.Error, ValueError) as exc:
            raise DecodeFailure(
                f"Invalid {self.encoding.label} text: {exc}", encoding=self.encoding
            ) from exc


def _base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _base64_decode(text: str) -> bytes:
    text = text.strip()
    if not BASE64_PATTERN.match(text):
        raise DecodeFailure(
            "Invalid base64 text: contains characters outside of the base64 alphabet",
            encoding=TextEncoding.BASE64,
        )
    return base64.b64decode(text, validate=True)


def _base64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _base64_url_decode(text: str) -> bytes:
    text = text.strip()
    if not BASE64_URL_PATTERN.match(text):
        raise DecodeFailure(
            "Invalid base64url text: contains characters outside of the base64url alphabet",
            encoding=TextEncoding.BASE64_URL,
        )
    text = text.rstrip("=")
    if len(text) % 4 == 1:
        raise DecodeFailure(
            f"Invalid base64url text: length {len(text)} can't be produced by the encoder",
            encoding=TextEncoding.BASE64_URL,
        )
    padded = text + "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(padded)


def _hex_encode(data: bytes) -> str:
    return data.hex()


def _hex_decode(text: str) -> bytes:
    text = text.strip()
    if not HEX_PATTERN.match(text):
        raise DecodeFailure(
            "Invalid hex text: expected even number of hexadecimal digits",
            encoding=TextEncoding.HEX,
        )
    return bytes.fromhex(text)


def _utf8_encode(data: bytes) -> str:
    # undecodable bytes become lone surrogates and come back unchanged
    return data.decode("utf-8", errors="surrogateescape")


def _utf8_decode(text: str) -> bytes:
    try:
        return text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError as exc:
        raise DecodeFailure(
            f"Invalid utf8 text: character at position {exc.start} can't be encoded",
            encoding=TextEncoding.UTF8,
        ) from exc


CODECS: dict[TextEncoding, TextCodec] = {
    TextEncoding.BASE64: TextCodec(TextEncoding.BASE64, _base64_encode, _base64_decode),
    TextEncoding.BASE64_URL: TextCodec(
        TextEncoding.BASE64_URL, _base64_url_encode, _base64_url_decode
    ),
    TextEncoding.HEX: TextCodec(TextEncoding.HEX, _hex_encode, _hex_decode),
    TextEncoding.UTF8: TextCodec(TextEncoding.UTF8, _utf8_encode, _utf8_decode),
}

_missing = [encoding.label for encoding in TextEncoding if encoding not in CODECS]
if _missing:
    raise KeyfmtError(f"Text codec registry has no entry for: {', '.join(_missing)}")


def get_codec(encoding: TextEncoding) -> TextCodec:
    """Get codec for given text encoding.

    :param encoding: Text encoding.
    :return: Registered codec.
    """
    return CODECS[encoding]


def encode(data: bytes, encoding: TextEncoding) -> str:
    """Encode binary data into text.

    :param data: Data to encode.
    :param encoding: Text encoding to use.
    :return: Text representation.
    """
    return get_codec(encoding).encode(data)


def decode(text: str, encoding: TextEncoding) -> bytes:
    """Decode text into binary data.

    :param text: Text to decode.
    :param encoding: Text encoding the text is written in.
    :raises DecodeFailure: Malformed text for the encoding.
    :return: Decoded data.
    """
    return get_codec(encoding).decode(text)


def recode(text: str, from_encoding: TextEncoding, to_encoding: TextEncoding) -> str:
    """Re-encode text from one encoding into another.

    :param text: Text in ``from_encoding``.
    :param from_encoding: Current encoding of the text.
    :param to_encoding: Requested encoding.
    :raises DecodeFailure: Text is not valid in ``from_encoding``.
    :return: The same data as text in ``to_encoding``.
    """
    if from_encoding == to_encoding:
        return text
    logger.debug(f"Re-encoding text from {from_encoding.label} to {to_encoding.label}")
    return encode(decode(text, from_encoding), to_encoding)
