#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""Keyfmt key loading and export on top of the cryptography library.

This module maps container kinds and serializations onto the cryptography library
serialization formats and provides loading/exporting of RSA and ECC keys in those
formats. It is used by the local crypto provider.
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import NoEncryption, PrivateFormat, PublicFormat
from cryptography.hazmat.primitives.serialization import (
    load_der_private_key as crypto_load_der_private_key,
)
from cryptography.hazmat.primitives.serialization import (
    load_der_public_key as crypto_load_der_public_key,
)
from cryptography.hazmat.primitives.serialization import (
    load_pem_private_key as crypto_load_pem_private_key,
)
from cryptography.hazmat.primitives.serialization import (
    load_pem_public_key as crypto_load_pem_public_key,
)
from pyasn1.codec.der.decoder import decode as asn1_decode
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ

from keyfmt.crypto.codec import decode, encode
from keyfmt.crypto.crypto_types import (
    ContainerKind,
    EccCurve,
    FormatSpec,
    KeyFamily,
    Serialization,
    TextEncoding,
)
from keyfmt.exceptions import KeyfmtError, KeyfmtValueError

logger = logging.getLogger(__name__)

PrivateKeyType = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]
PublicKeyType = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]

DEFAULT_BINARY_ENCODING = TextEncoding.BASE64

# SEC1 defines no standalone public key structure, EC public keys always use SPKI
PRIVATE_FORMATS = {
    ContainerKind.PKCS1: PrivateFormat.TraditionalOpenSSL,
    ContainerKind.PKCS8: PrivateFormat.PKCS8,
    ContainerKind.SEC1: PrivateFormat.TraditionalOpenSSL,
}
PUBLIC_FORMATS = {
    ContainerKind.PKCS1: PublicFormat.PKCS1,
    ContainerKind.PKCS8: PublicFormat.SubjectPublicKeyInfo,
    ContainerKind.SEC1: PublicFormat.SubjectPublicKeyInfo,
}
PRIVATE_PEM_LABELS = {
    ContainerKind.PKCS1: ("RSA PRIVATE KEY",),
    ContainerKind.PKCS8: ("PRIVATE KEY", "ENCRYPTED PRIVATE KEY"),
    ContainerKind.SEC1: ("EC PRIVATE KEY",),
}
PUBLIC_PEM_LABELS = {
    ContainerKind.PKCS1: ("RSA PUBLIC KEY",),
    ContainerKind.PKCS8: ("PUBLIC KEY",),
    ContainerKind.SEC1: ("PUBLIC KEY",),
}

# Universal tags of the first two members of the outer DER SEQUENCE of each container
ASN1_INTEGER = 0x02
ASN1_BIT_STRING = 0x03
ASN1_OCTET_STRING = 0x04
ASN1_SEQUENCE = 0x30
PRIVATE_DER_LAYOUTS = {
    ContainerKind.PKCS1: ((ASN1_INTEGER, ASN1_INTEGER),),
    ContainerKind.PKCS8: ((ASN1_INTEGER, ASN1_SEQUENCE), (ASN1_SEQUENCE, ASN1_OCTET_STRING)),
    ContainerKind.SEC1: ((ASN1_INTEGER, ASN1_OCTET_STRING),),
}
PUBLIC_DER_LAYOUTS = {
    ContainerKind.PKCS1: ((ASN1_INTEGER, ASN1_INTEGER),),
    ContainerKind.PKCS8: ((ASN1_SEQUENCE, ASN1_BIT_STRING),),
    ContainerKind.SEC1: ((ASN1_SEQUENCE, ASN1_BIT_STRING),),
}


class KeyfmtInvalidKeyType(KeyfmtError):
    """Key material does not belong to the expected family or curve."""


class KeyfmtKeyPassphraseMissing(KeyfmtError):
    """Private key is encrypted, keyfmt converts unencrypted keys only."""


def key_text_to_bytes(text: str, spec: FormatSpec) -> bytes:
    """Get raw key data from key text.

    PEM keys are the text itself, DER keys are decoded with the format's text encoding.

    :param text: Key text.
    :param spec: Format of the key.
    :raises DecodeFailure: DER text is malformed for its encoding.
    :return: Raw key data.
    """
    if spec.is_binary:
        return decode(text, spec.text_encoding or DEFAULT_BINARY_ENCODING)
    return text.encode("utf-8")


def key_bytes_to_text(data: bytes, spec: FormatSpec) -> str:
    """Get key text from raw key data.

    :param data: Raw key data.
    :param spec: Format of the key.
    :return: Key text.
    """
    if spec.is_binary:
        return encode(data, spec.text_encoding or DEFAULT_BINARY_ENCODING)
    return data.decode("utf-8")


def _check_pem_label(data: bytes, labels: tuple[str, ...]) -> None:
    """Verify that PEM data carry one of expected armor labels.

    :param data: PEM data.
    :param labels: Accepted PEM labels, e.g. 'RSA PRIVATE KEY'.
    :raises KeyfmtValueError: Armor label differs.
    """
    if not any(f"-----BEGIN {label}-----".encode("ascii") in data for label in labels):
        raise KeyfmtValueError(f"Expected PEM block '{labels[0]}' was not found")


def _check_der_layout(
    data: bytes, container: ContainerKind, layouts: tuple[tuple[int, int], ...]
) -> None:
    """Verify that DER data are structured as the container.

    The loaders of the cryptography library accept any container, so the container is told
    apart by the types of the first two members of the outer SEQUENCE.

    :param data: DER data.
    :param container: Declared container kind.
    :param layouts: Accepted pairs of universal tags of the first two members.
    :raises KeyfmtValueError: Data are not DER encoded SEQUENCE or are another container.
    """
    try:
        members, rest = asn1_decode(data, asn1Spec=univ.SequenceOf(componentType=univ.Any()))
    except PyAsn1Error as exc:
        raise KeyfmtValueError(f"Cannot parse DER data: {exc}") from exc
    if rest:
        raise KeyfmtValueError(f"Unexpected {len(rest)} bytes after DER data")
    tags = tuple(member.asOctets()[0] for member in list(members)[:2])
    if tags not in layouts:
        raise KeyfmtValueError(f"DER data are not a {container.description} container")


def parse_private_key(
    data: bytes, container: ContainerKind, serialization: Serialization
) -> PrivateKeyType:
    """Load private key from data in given format.

    :param data: Raw key data.
    :param container: Container kind of the data.
    :param serialization: Serialization of the data.
    :raises KeyfmtKeyPassphraseMissing: Private key is encrypted.
    :raises KeyfmtValueError: Data can't be loaded in the given format.
    :return: Loaded private key.
    """
    logger.debug(f"Loading {container.label}-{serialization.label} private key")
    if serialization == Serialization.PEM:
        _check_pem_label(data, PRIVATE_PEM_LABELS[container])
    else:
        _check_der_layout(data, container, PRIVATE_DER_LAYOUTS[container])
    crypto_load_function = {
        Serialization.DER: crypto_load_der_private_key,
        Serialization.PEM: crypto_load_pem_private_key,
    }[serialization]
    try:
        private_key = crypto_load_function(data, None)
    except TypeError as exc:
        if "Password was not given but private key is encrypted" in str(exc):
            raise KeyfmtKeyPassphraseMissing(str(exc)) from exc
        raise KeyfmtValueError(f"Cannot load {serialization.label} private key: {exc}") from exc
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise KeyfmtValueError(f"Cannot load {serialization.label} private key: {exc}") from exc
    if not isinstance(private_key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        raise KeyfmtInvalidKeyType(f"Unsupported private key type: {type(private_key).__name__}")
    return private_key


def parse_public_key(
    data: bytes, container: ContainerKind, serialization: Serialization
) -> PublicKeyType:
    """Load public key from data in given format.

    :param data: Raw key data.
    :param container: Container kind of the data.
    :param serialization: Serialization of the data.
    :raises KeyfmtValueError: Data can't be loaded in the given format.
    :return: Loaded public key.
    """
    logger.debug(f"Loading {container.label}-{serialization.label} public key")
    if serialization == Serialization.PEM:
        _check_pem_label(data, PUBLIC_PEM_LABELS[container])
    else:
        _check_der_layout(data, container, PUBLIC_DER_LAYOUTS[container])
    crypto_load_function = {
        Serialization.DER: crypto_load_der_public_key,
        Serialization.PEM: crypto_load_pem_public_key,
    }[serialization]
    try:
        public_key = crypto_load_function(data)
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise KeyfmtValueError(f"Cannot load {serialization.label} public key: {exc}") from exc
    if not isinstance(public_key, (rsa.RSAPublicKey, ec.EllipticCurvePublicKey)):
        raise KeyfmtInvalidKeyType(f"Unsupported public key type: {type(public_key).__name__}")
    return public_key


def export_private_key(
    key: PrivateKeyType, container: ContainerKind, serialization: Serialization
) -> bytes:
    """Export private key in requested format.

    :param key: Private key.
    :param container: Target container kind.
    :param serialization: Target serialization.
    :return: Exported key data.
    """
    return key.private_bytes(
        encoding=serialization.get_cryptography_encoding(),
        format=PRIVATE_FORMATS[container],
        encryption_algorithm=NoEncryption(),
    )


def export_public_key(
    key: PublicKeyType, container: ContainerKind, serialization: Serialization
) -> bytes:
    """Export public key in requested format.

    :param key: Public key.
    :param container: Target container kind.
    :param serialization: Target serialization.
    :return: Exported key data.
    """
    return key.public_bytes(
        encoding=serialization.get_cryptography_encoding(),
        format=PUBLIC_FORMATS[container],
    )


def get_key_curve(key: Union[PrivateKeyType, PublicKeyType]) -> EccCurve:
    """Get the named curve of an elliptic curve key.

    :param key: Elliptic curve key.
    :raises KeyfmtInvalidKeyType: Key is not an elliptic curve key.
    :return: Curve of the key.
    """
    if not isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        raise KeyfmtInvalidKeyType("Key is not an elliptic curve key")
    return EccCurve.from_curve_name(key.curve.name)


def check_key_family(
    key: Union[PrivateKeyType, PublicKeyType],
    family: KeyFamily,
    curve: Optional[EccCurve] = None,
) -> None:
    """Verify that key belongs to the key family and curve.

    :param key: Loaded key.
    :param family: Expected key family.
    :param curve: Expected curve of elliptic curve keys, not checked when None.
    :raises KeyfmtInvalidKeyType: Key doesn't match.
    """
    if family == KeyFamily.RSA:
        if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
            raise KeyfmtInvalidKeyType("Key is not an RSA key")
        return
    key_curve = get_key_curve(key)
    if curve is not None and key_curve != curve:
        raise KeyfmtInvalidKeyType(
            f"Key is on curve {key_curve.label}, but {curve.label} was selected"
        )
