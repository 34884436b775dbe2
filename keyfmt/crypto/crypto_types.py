#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt key format type definitions and enumerations.

This module provides the value types passed through a key conversion: the key family,
container and serialization enumerations, the named curves, the display text encodings,
the ``FormatSpec`` describing one side of a conversion and the ``KeyPair`` being converted.
"""

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

from cryptography.hazmat.primitives.serialization import Encoding

from keyfmt.exceptions import KeyfmtError
from keyfmt.utils.keyfmt_enum import KeyfmtEnum


class KeyFamily(KeyfmtEnum):
    """Asymmetric key family, decides which container transitions are legal."""

    RSA = (0, "rsa", "RSA")
    ECC = (1, "ecc", "Elliptic curve")


class ContainerKind(KeyfmtEnum):
    """Structural format of an encoded key."""

    PKCS1 = (0, "pkcs1", "PKCS#1 (RSA only)")
    PKCS8 = (1, "pkcs8", "PKCS#8")
    SEC1 = (2, "sec1", "SEC1 (elliptic curve only)")


class Serialization(KeyfmtEnum):
    """Framing of a container: text-armored PEM or binary DER."""

    PEM = (0, "pem", "PEM text armor")
    DER = (1, "der", "DER binary")

    def get_cryptography_encoding(self) -> Encoding:
        """Get cryptography library encoding for this serialization.

        :return: Corresponding cryptography library encoding.
        """
        return {
            Serialization.PEM: Encoding.PEM,
            Serialization.DER: Encoding.DER,
        }[self]


class EccCurve(KeyfmtEnum):
    """Named elliptic curves supported by the elliptic-curve converters."""

    NIST_P256 = (0, "nistp256", "secp256r1")
    NIST_P384 = (1, "nistp384", "secp384r1")
    NIST_P521 = (2, "nistp521", "secp521r1")
    SECP256K1 = (3, "secp256k1", "secp256k1")

    @property
    def curve_name(self) -> str:
        """SEC 2 name of the curve, as reported by the cryptography library."""
        assert self.description
        return self.description

    @classmethod
    def from_curve_name(cls, name: str) -> "EccCurve":
        """Get curve by its SEC 2 name (``secp256r1``, ...).

        :param name: SEC 2 curve name.
        :raises KeyfmtError: Curve is not supported.
        :return: Matching curve.
        """
        for curve in cls:
            if curve.curve_name == name.lower():
                return curve
        raise KeyfmtError(f"Elliptic curve {name} is not supported")


class TextEncoding(KeyfmtEnum):
    """Character encodings used to show binary key material as text."""

    BASE64 = (0, "base64", "Base64, standard alphabet with padding")
    BASE64_URL = (1, "base64url", "Base64, URL-safe alphabet without padding")
    HEX = (2, "hex", "Hexadecimal")
    UTF8 = (3, "utf8", "Raw UTF-8 text")


@dataclass(frozen=True)
class FormatSpec:
    """Description of one side of a key conversion.

    Container and serialization are chosen independently. The text encoding is used only
    where the payload is binary (DER) and has to travel as text.
    """

    container: ContainerKind
    serialization: Serialization
    text_encoding: Optional[TextEncoding] = None

    def with_encoding(self, encoding: Optional[TextEncoding]) -> "FormatSpec":
        """Get copy of this format with another text encoding.

        :param encoding: Text encoding of the new format.
        :return: New format specification.
        """
        return replace(self, text_encoding=encoding)

    @property
    def is_binary(self) -> bool:
        """True when the serialization produces binary data."""
        return self.serialization == Serialization.DER

    @classmethod
    def from_label(cls, label: str) -> "FormatSpec":
        """Get format specification from key format identifier like ``pkcs8_pem``.

        :param label: Key format label.
        :return: Format specification.
        """
        return KEY_FORMATS[KeyFormat.from_label(label)]

    def __str__(self) -> str:
        ret = f"{self.container.label}-{self.serialization.label}"
        if self.text_encoding:
            ret += f" ({self.text_encoding.label})"
        return ret


class KeyPair(NamedTuple):
    """Private and public key text; an empty string marks an absent key."""

    private_key: str
    public_key: str


class KeyFormat(KeyfmtEnum):
    """Key format identifiers offered for selection."""

    PKCS8_PEM = (0, "pkcs8_pem", "pkcs8-pem")
    PKCS8_DER = (1, "pkcs8_der", "pkcs8-der")
    PKCS1_PEM = (2, "pkcs1_pem", "pkcs1-pem")
    PKCS1_DER = (3, "pkcs1_der", "pkcs1-der")
    SEC1_PEM = (4, "sec1_pem", "sec1-pem")
    SEC1_DER = (5, "sec1_der", "sec1-der")


KEY_FORMATS: dict[KeyFormat, FormatSpec] = {
    KeyFormat.PKCS8_PEM: FormatSpec(ContainerKind.PKCS8, Serialization.PEM),
    KeyFormat.PKCS8_DER: FormatSpec(ContainerKind.PKCS8, Serialization.DER),
    KeyFormat.PKCS1_PEM: FormatSpec(ContainerKind.PKCS1, Serialization.PEM),
    KeyFormat.PKCS1_DER: FormatSpec(ContainerKind.PKCS1, Serialization.DER),
    KeyFormat.SEC1_PEM: FormatSpec(ContainerKind.SEC1, Serialization.PEM),
    KeyFormat.SEC1_DER: FormatSpec(ContainerKind.SEC1, Serialization.DER),
}

FAMILY_CONTAINERS: dict[KeyFamily, tuple[ContainerKind, ...]] = {
    KeyFamily.RSA: (ContainerKind.PKCS1, ContainerKind.PKCS8),
    KeyFamily.ECC: (ContainerKind.PKCS8, ContainerKind.SEC1),
}


def _check_total(table: dict, enum_cls: type, table_name: str) -> None:
    missing = [member.label for member in enum_cls if member not in table]
    if missing:
        raise KeyfmtError(f"{table_name} has no entry for: {', '.join(missing)}")


_check_total(KEY_FORMATS, KeyFormat, "Key format table")
_check_total(FAMILY_CONTAINERS, KeyFamily, "Family container table")


def get_family_formats(family: KeyFamily) -> list[KeyFormat]:
    """Get key formats selectable for given key family.

    :param family: Key family.
    :return: Key formats whose container belongs to the family.
    """
    containers = FAMILY_CONTAINERS[family]
    return [fmt for fmt, spec in KEY_FORMATS.items() if spec.container in containers]
