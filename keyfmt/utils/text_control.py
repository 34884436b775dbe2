#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Text encoding control for displaying binary data.

A control keeps named text fields (for example private and public key) written in one
text encoding. Switching the encoding re-encodes every field, so the shown data stay the same.
"""

import logging
from typing import Iterable, Mapping, Optional

from keyfmt import KEYFMT_TEXT_ENCODING
from keyfmt.crypto.codec import decode, encode, recode
from keyfmt.crypto.crypto_types import TextEncoding

logger = logging.getLogger(__name__)


class TextEncodingControl:
    """Named text inputs sharing a text encoding."""

    def __init__(
        self,
        encoding: Optional[TextEncoding] = None,
        inputs: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize the control.

        :param encoding: Text encoding of the inputs, defaults to KEYFMT_TEXT_ENCODING.
        :param inputs: Initial inputs.
        """
        self._encoding = encoding or TextEncoding.from_label(KEYFMT_TEXT_ENCODING)
        self._inputs: dict[str, str] = dict(inputs or {})

    def __repr__(self) -> str:
        return f"TextEncodingControl({self._encoding.label}, {sorted(self._inputs)})"

    def get_text_encoding(self) -> TextEncoding:
        """Get current text encoding.

        :return: Text encoding of all inputs.
        """
        return self._encoding

    def set_text_encoding(self, encoding: TextEncoding) -> None:
        """Change text encoding and re-encode all inputs.

        The control is left untouched when any of the inputs can't be decoded.

        :param encoding: New text encoding.
        :raises DecodeFailure: Some input is not valid in the current encoding.
        """
        if encoding == self._encoding:
            return
        logger.debug(f"Switching text encoding {self._encoding.label} -> {encoding.label}")
        recoded = {
            name: recode(text, self._encoding, encoding) for name, text in self._inputs.items()
        }
        self._inputs = recoded
        self._encoding = encoding

    def get_inputs(self) -> dict[str, str]:
        """Get copy of all inputs.

        :return: Mapping of input name to text.
        """
        return dict(self._inputs)

    def set_inputs(self, inputs: Mapping[str, str]) -> None:
        """Set inputs, other inputs are kept.

        :param inputs: Mapping of input name to text in the current encoding.
        """
        self._inputs.update(inputs)

    def get_data(self, name: str) -> bytes:
        """Get binary data of an input.

        :param name: Input name.
        :raises DecodeFailure: Input is not valid in the current encoding.
        :return: Decoded data, empty when the input is not set.
        """
        return decode(self._inputs.get(name, ""), self._encoding)

    def set_data(self, name: str, data: bytes) -> None:
        """Set input from binary data.

        :param name: Input name.
        :param data: Binary data to be shown in the current encoding.
        """
        self._inputs[name] = encode(data, self._encoding)


def transfer_inputs(
    source: TextEncodingControl,
    target: TextEncodingControl,
    names: Optional[Iterable[str]] = None,
) -> None:
    """Copy inputs from one control to another.

    Texts are re-encoded when both controls use different encodings.

    :param source: Control to copy inputs from.
    :param target: Control receiving the inputs.
    :param names: Names of the inputs to copy, all inputs when None.
    :raises DecodeFailure: Source input is not valid in the source encoding.
    """
    inputs = source.get_inputs()
    if names is not None:
        inputs = {name: inputs[name] for name in names if name in inputs}
    target.set_inputs(
        {
            name: recode(text, source.get_text_encoding(), target.get_text_encoding())
            for name, text in inputs.items()
        }
    )
