#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Key pair converters.

A converter is a value built from one of four kinds and the crypto provider doing the work.
Container converters validate the container transition for their key family, encoding
converters accept any pair of formats. All of them return the input unchanged when source
and target format are equal.

Typical usage::

    converter = Converter(ConverterKind.RSA_CONTAINER, LocalCryptoProvider())
    pair = await converter.convert(private_key, public_key, from_spec, to_spec)
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, NamedTuple, Optional

from keyfmt.crypto.crypto_types import EccCurve, FormatSpec, KeyFamily, KeyPair
from keyfmt.crypto.provider import CryptoProvider, ProviderRequest
from keyfmt.crypto.transitions import check_transition
from keyfmt.exceptions import KeyfmtError, KeyfmtValueError
from keyfmt.utils.keyfmt_enum import KeyfmtEnum

logger = logging.getLogger(__name__)


class ConverterKind(KeyfmtEnum):
    """Closed set of converter variants."""

    RSA_CONTAINER = (0, "rsa_container", "RSA container converter")
    ECC_CONTAINER = (1, "ecc_container", "Elliptic curve container converter")
    RSA_ENCODING = (2, "rsa_encoding", "RSA encoding converter")
    ECC_ENCODING = (3, "ecc_encoding", "Elliptic curve encoding converter")

    @property
    def family(self) -> KeyFamily:
        """Key family handled by this converter kind."""
        return CONVERTER_TRAITS[self].family

    @property
    def validates_containers(self) -> bool:
        """True when the container transition is checked before delegation."""
        return CONVERTER_TRAITS[self].validates_containers


TransferFunction = Callable[[CryptoProvider, ProviderRequest], Awaitable[KeyPair]]


def _transfer_rsa(provider: CryptoProvider, request: ProviderRequest) -> Awaitable[KeyPair]:
    return provider.transfer_rsa_key(request)


def _transfer_ecc(provider: CryptoProvider, request: ProviderRequest) -> Awaitable[KeyPair]:
    return provider.transfer_ecc_key(request)


class ConverterTraits(NamedTuple):
    """Behavior of one converter kind."""

    family: KeyFamily
    validates_containers: bool
    transfer: TransferFunction


CONVERTER_TRAITS: dict[ConverterKind, ConverterTraits] = {
    ConverterKind.RSA_CONTAINER: ConverterTraits(KeyFamily.RSA, True, _transfer_rsa),
    ConverterKind.ECC_CONTAINER: ConverterTraits(KeyFamily.ECC, True, _transfer_ecc),
    ConverterKind.RSA_ENCODING: ConverterTraits(KeyFamily.RSA, False, _transfer_rsa),
    ConverterKind.ECC_ENCODING: ConverterTraits(KeyFamily.ECC, False, _transfer_ecc),
}

_missing = [kind.label for kind in ConverterKind if kind not in CONVERTER_TRAITS]
if _missing:
    raise KeyfmtError(f"Converter table has no entry for: {', '.join(_missing)}")


@dataclass(frozen=True)
class Converter:
    """Key pair converter of one kind bound to a crypto provider.

    The converter holds no mutable state, one instance may serve any number of concurrent
    conversions. The curve of elliptic curve keys is passed with every call.
    """

    kind: ConverterKind
    provider: CryptoProvider

    @classmethod
    def for_family(
        cls, family: KeyFamily, validate_containers: bool, provider: CryptoProvider
    ) -> "Converter":
        """Create converter for key family.

        :param family: Key family to be converted.
        :param validate_containers: Create container converter when True, encoding otherwise.
        :param provider: Crypto provider doing the conversion.
        :return: Converter instance.
        """
        for kind, traits in CONVERTER_TRAITS.items():
            if traits.family == family and traits.validates_containers == validate_containers:
                return cls(kind, provider)
        raise KeyfmtValueError(f"No converter available for {family.label} keys")

    @property
    def family(self) -> KeyFamily:
        """Key family of this converter."""
        return self.kind.family

    def prepare(
        self,
        private_key: str,
        public_key: str,
        from_spec: FormatSpec,
        to_spec: FormatSpec,
        curve: Optional[EccCurve] = None,
    ) -> Optional[ProviderRequest]:
        """Validate conversion and build the provider request.

        Nothing is sent anywhere, failures are raised immediately.

        :param private_key: Private key text.
        :param public_key: Public key text.
        :param from_spec: Current format of the keys.
        :param to_spec: Requested format of the keys.
        :param curve: Curve of elliptic curve keys, ignored for RSA.
        :raises UnsupportedTransition: Container transition is illegal for the key family.
        :raises KeyfmtValueError: Curve is missing for elliptic curve conversion.
        :return: Provider request, None when formats are equal and no work is needed.
        """
        if from_spec == to_spec:
            logger.debug(f"{self.kind.description}: {from_spec} is already requested format")
            return None
        traits = CONVERTER_TRAITS[self.kind]
        if traits.validates_containers:
            check_transition(traits.family, from_spec.container, to_spec.container)
        if traits.family == KeyFamily.ECC:
            if curve is None:
                raise KeyfmtValueError("Elliptic curve must be selected to convert ECC keys")
        else:
            curve = None
        return ProviderRequest(private_key, public_key, from_spec, to_spec, curve)

    async def convert(
        self,
        private_key: str,
        public_key: str,
        from_spec: FormatSpec,
        to_spec: FormatSpec,
        curve: Optional[EccCurve] = None,
    ) -> KeyPair:
        """Convert key pair into requested format.

        :param private_key: Private key text, empty string when absent.
        :param public_key: Public key text, empty string when absent.
        :param from_spec: Current format of the keys.
        :param to_spec: Requested format of the keys.
        :param curve: Curve of elliptic curve keys, ignored for RSA.
        :raises UnsupportedTransition: Container transition is illegal for the key family.
        :raises KeyfmtValueError: Curve is missing for elliptic curve conversion.
        :raises ProviderFailure: Provider couldn't convert the keys.
        :return: Converted key pair as returned by the provider.
        """
        request = self.prepare(private_key, public_key, from_spec, to_spec, curve)
        if request is None:
            return KeyPair(private_key, public_key)
        logger.info(f"{self.kind.description}: delegating {request} to {self.provider.info()}")
        return await CONVERTER_TRAITS[self.kind].transfer(self.provider, request)
