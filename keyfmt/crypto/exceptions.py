#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023,2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt cryptographic exceptions module.

This module defines the failures reported by key conversion: an illegal container
transition rejected before any provider call, a failure reported by the crypto provider
and a malformed text payload that cannot be decoded.
"""

from typing import TYPE_CHECKING, Any, Optional

from keyfmt.exceptions import KeyfmtError

if TYPE_CHECKING:
    from keyfmt.crypto.crypto_types import ContainerKind, KeyFamily


class KeyfmtCryptoError(KeyfmtError):
    """General keyfmt crypto error, base of all conversion failures."""


class UnsupportedTransition(KeyfmtCryptoError):
    """Requested container transition is not legal for the key family.

    Raised synchronously by container converters, before anything is sent to the provider.
    The offending family and containers are kept for diagnostics.
    """

    fmt = "{description}"

    def __init__(
        self,
        family: "KeyFamily",
        from_container: "ContainerKind",
        to_container: "ContainerKind",
        desc: Optional[str] = None,
    ) -> None:
        """Initialize the unsupported transition error.

        :param family: Key family of the converter that rejected the request.
        :param from_container: Source container kind.
        :param to_container: Target container kind.
        :param desc: Optional custom description.
        """
        super().__init__(
            desc
            or (
                f"Unsupported {family.label} key transition: "
                f"{from_container.label} -> {to_container.label}"
            )
        )
        self.family = family
        self.from_container = from_container
        self.to_container = to_container


class ProviderFailure(KeyfmtCryptoError):
    """The crypto provider rejected or could not complete the request.

    The provider message is reported verbatim.
    """

    fmt = "{description}"


class DecodeFailure(KeyfmtCryptoError):
    """Text could not be decoded into bytes with the selected encoding."""

    def __init__(self, desc: Optional[str] = None, encoding: Optional[Any] = None) -> None:
        """Initialize the decode failure.

        :param desc: Description of the malformed input.
        :param encoding: Text encoding that was used for decoding.
        """
        super().__init__(desc)
        self.encoding = encoding
