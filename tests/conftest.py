#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt pytest configuration and shared test fixtures."""

import os

import pytest
from cryptography.hazmat.backends.openssl import backend
from cryptography.hazmat.primitives.asymmetric import ec, rsa

# Must be set before keyfmt is imported
os.environ["KEYFMT_DEBUG_LOGGING_DISABLED"] = "True"

from keyfmt.crypto.crypto_types import EccCurve  # noqa: E402
from tests.cli_runner import CliRunner  # noqa: E402

# Disable RSA key blinding to speed up unit tests in cryptography 37+
# https://github.com/pyca/cryptography/issues/7236
setattr(backend, "_rsa_skip_check_key", True)

CRYPTOGRAPHY_CURVES = {
    EccCurve.NIST_P256: ec.SECP256R1(),
    EccCurve.NIST_P384: ec.SECP384R1(),
    EccCurve.NIST_P521: ec.SECP521R1(),
    EccCurve.SECP256K1: ec.SECP256K1(),
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """RSA 2048 private key shared by the whole test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ecc_private_keys() -> dict[EccCurve, ec.EllipticCurvePrivateKey]:
    """One elliptic curve private key for every supported curve."""
    return {
        curve: ec.generate_private_key(crypto_curve)
        for curve, crypto_curve in CRYPTOGRAPHY_CURVES.items()
    }
