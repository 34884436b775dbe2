#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of key pair converters with a recording crypto provider."""

import asyncio
import itertools
from typing import Optional

import pytest

from keyfmt.crypto.converter import CONVERTER_TRAITS, Converter, ConverterKind
from keyfmt.crypto.crypto_types import (
    ContainerKind,
    EccCurve,
    FormatSpec,
    KeyFamily,
    KeyPair,
    Serialization,
    TextEncoding,
)
from keyfmt.crypto.exceptions import ProviderFailure, UnsupportedTransition
from keyfmt.crypto.provider import CryptoProvider, ProviderRequest
from keyfmt.crypto.transitions import is_legal
from keyfmt.exceptions import KeyfmtValueError

ALL_SPECS = [
    FormatSpec(container, serialization)
    for container, serialization in itertools.product(ContainerKind, Serialization)
]


class RecordingProvider(CryptoProvider):
    """Provider answering every request with a marker pair, requests are recorded."""

    identifier = "recording"

    def __init__(self, delay: float = 0, failure: Optional[str] = None) -> None:
        self.delay = delay
        self.failure = failure
        self.calls: list[tuple[str, ProviderRequest]] = []

    async def _answer(self, operation: str, request: ProviderRequest) -> KeyPair:
        self.calls.append((operation, request))
        await asyncio.sleep(self.delay)
        if self.failure:
            raise ProviderFailure(self.failure)
        curve = request.curve.label if request.curve else "-"
        return KeyPair(f"{operation}:{request.to_spec}:{curve}", "public")

    async def transfer_rsa_key(self, request: ProviderRequest) -> KeyPair:
        return await self._answer("rsa", request)

    async def transfer_ecc_key(self, request: ProviderRequest) -> KeyPair:
        return await self._answer("ecc", request)


def spec(container: ContainerKind, serialization: Serialization) -> FormatSpec:
    return FormatSpec(container, serialization)


def test_converter_table_is_total() -> None:
    assert set(CONVERTER_TRAITS) == set(ConverterKind)
    assert ConverterKind.RSA_CONTAINER.family is KeyFamily.RSA
    assert ConverterKind.ECC_ENCODING.family is KeyFamily.ECC
    assert ConverterKind.ECC_CONTAINER.validates_containers
    assert not ConverterKind.RSA_ENCODING.validates_containers


@pytest.mark.parametrize("kind", list(ConverterKind))
def test_identity(kind: ConverterKind) -> None:
    """Equal formats return the input unchanged without calling the provider."""
    provider = RecordingProvider()
    converter = Converter(kind, provider)
    for format_spec in ALL_SPECS + [ALL_SPECS[1].with_encoding(TextEncoding.HEX)]:
        result = asyncio.run(converter.convert("priv", "pub", format_spec, format_spec))
        assert result == KeyPair("priv", "pub")
        assert converter.prepare("priv", "pub", format_spec, format_spec) is None
    assert provider.calls == []


def test_identity_compares_text_encoding() -> None:
    """Formats differing only in text encoding are not identical."""
    provider = RecordingProvider()
    converter = Converter(ConverterKind.RSA_CONTAINER, provider)
    der = spec(ContainerKind.PKCS8, Serialization.DER)
    asyncio.run(
        converter.convert(
            "priv", "pub", der.with_encoding(TextEncoding.HEX), der.with_encoding(TextEncoding.UTF8)
        )
    )
    assert len(provider.calls) == 1


@pytest.mark.parametrize(
    "kind,operation",
    [(ConverterKind.RSA_CONTAINER, "rsa"), (ConverterKind.ECC_CONTAINER, "ecc")],
)
def test_container_legality_completeness(kind: ConverterKind, operation: str) -> None:
    """Legal transitions make exactly one provider call, illegal ones none."""
    for from_spec, to_spec in itertools.product(ALL_SPECS, repeat=2):
        if from_spec == to_spec:
            continue
        provider = RecordingProvider()
        converter = Converter(kind, provider)
        if is_legal(kind.family, from_spec.container, to_spec.container):
            asyncio.run(
                converter.convert("priv", "pub", from_spec, to_spec, EccCurve.NIST_P256)
            )
            assert len(provider.calls) == 1
            assert provider.calls[0][0] == operation
        else:
            with pytest.raises(UnsupportedTransition) as exc_info:
                converter.prepare("priv", "pub", from_spec, to_spec, EccCurve.NIST_P256)
            assert exc_info.value.family is kind.family
            assert provider.calls == []


@pytest.mark.parametrize("kind", [ConverterKind.RSA_ENCODING, ConverterKind.ECC_ENCODING])
def test_encoding_converter_skips_validation(kind: ConverterKind) -> None:
    """Encoding converters pass every non-identical pair to the provider."""
    provider = RecordingProvider()
    converter = Converter(kind, provider)
    pairs = [(f, t) for f, t in itertools.product(ALL_SPECS, repeat=2) if f != t]
    for from_spec, to_spec in pairs:
        asyncio.run(converter.convert("priv", "pub", from_spec, to_spec, EccCurve.NIST_P384))
    assert len(provider.calls) == len(pairs)


def test_rsa_pkcs1_to_pkcs8_delegates() -> None:
    """The provider receives the request unchanged and its pair is returned verbatim."""
    provider = RecordingProvider()
    converter = Converter(ConverterKind.RSA_CONTAINER, provider)
    from_spec = spec(ContainerKind.PKCS1, Serialization.PEM)
    to_spec = spec(ContainerKind.PKCS8, Serialization.PEM)
    result = asyncio.run(converter.convert("priv", "pub", from_spec, to_spec))
    assert result == KeyPair("rsa:pkcs8-pem:-", "public")
    operation, request = provider.calls[0]
    assert operation == "rsa"
    assert request == ProviderRequest("priv", "pub", from_spec, to_spec, None)
    assert request.from_spec.container is ContainerKind.PKCS1
    assert request.to_spec.container is ContainerKind.PKCS8


def test_ecc_sec1_der_identity() -> None:
    provider = RecordingProvider()
    converter = Converter(ConverterKind.ECC_CONTAINER, provider)
    sec1_der = spec(ContainerKind.SEC1, Serialization.DER)
    result = asyncio.run(converter.convert("priv", "pub", sec1_der, sec1_der))
    assert result == ("priv", "pub")
    assert provider.calls == []


def test_rsa_sec1_rejected() -> None:
    provider = RecordingProvider()
    converter = Converter(ConverterKind.RSA_CONTAINER, provider)
    with pytest.raises(UnsupportedTransition):
        asyncio.run(
            converter.convert(
                "priv",
                "pub",
                spec(ContainerKind.SEC1, Serialization.PEM),
                spec(ContainerKind.PKCS8, Serialization.PEM),
            )
        )
    assert provider.calls == []


def test_same_container_other_serialization_reaches_provider() -> None:
    provider = RecordingProvider()
    converter = Converter(ConverterKind.RSA_CONTAINER, provider)
    asyncio.run(
        converter.convert(
            "priv",
            "pub",
            spec(ContainerKind.PKCS8, Serialization.PEM),
            spec(ContainerKind.PKCS8, Serialization.DER),
        )
    )
    assert len(provider.calls) == 1


def test_curve_handling() -> None:
    """ECC converters require the curve, RSA converters never forward it."""
    provider = RecordingProvider()
    pkcs8 = spec(ContainerKind.PKCS8, Serialization.PEM)
    sec1 = spec(ContainerKind.SEC1, Serialization.PEM)
    ecc = Converter(ConverterKind.ECC_CONTAINER, provider)
    with pytest.raises(KeyfmtValueError):
        ecc.prepare("priv", "pub", pkcs8, sec1)
    assert ecc.prepare("priv", "pub", sec1, sec1) is None

    rsa = Converter(ConverterKind.RSA_CONTAINER, provider)
    pkcs1 = spec(ContainerKind.PKCS1, Serialization.PEM)
    request = rsa.prepare("priv", "pub", pkcs8, pkcs1, EccCurve.NIST_P521)
    assert request is not None
    assert request.curve is None
    assert provider.calls == []


def test_concurrent_curves_do_not_interfere() -> None:
    """Conversions in flight on one converter keep their own curve."""
    provider = RecordingProvider(delay=0.01)
    converter = Converter(ConverterKind.ECC_CONTAINER, provider)
    from_spec = spec(ContainerKind.SEC1, Serialization.PEM)
    to_spec = spec(ContainerKind.PKCS8, Serialization.PEM)

    async def run_all() -> list[KeyPair]:
        return await asyncio.gather(
            *(converter.convert("priv", "pub", from_spec, to_spec, curve) for curve in EccCurve)
        )

    results = asyncio.run(run_all())
    assert [result.private_key for result in results] == [
        f"ecc:pkcs8-pem:{curve.label}" for curve in EccCurve
    ]
    assert sorted(request.curve.tag for _, request in provider.calls) == [c.tag for c in EccCurve]


def test_provider_failure_passes_through() -> None:
    provider = RecordingProvider(failure="Key material is broken")
    converter = Converter(ConverterKind.ECC_ENCODING, provider)
    with pytest.raises(ProviderFailure) as exc_info:
        asyncio.run(
            converter.convert(
                "priv",
                "pub",
                spec(ContainerKind.SEC1, Serialization.PEM),
                spec(ContainerKind.SEC1, Serialization.DER),
                EccCurve.SECP256K1,
            )
        )
    assert str(exc_info.value) == "Key material is broken"


@pytest.mark.parametrize(
    "family,validate,kind",
    [
        (KeyFamily.RSA, True, ConverterKind.RSA_CONTAINER),
        (KeyFamily.ECC, True, ConverterKind.ECC_CONTAINER),
        (KeyFamily.RSA, False, ConverterKind.RSA_ENCODING),
        (KeyFamily.ECC, False, ConverterKind.ECC_ENCODING),
    ],
)
def test_for_family(family: KeyFamily, validate: bool, kind: ConverterKind) -> None:
    provider = RecordingProvider()
    converter = Converter.for_family(family, validate, provider)
    assert converter == Converter(kind, provider)
    assert converter.family is family
