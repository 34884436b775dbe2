#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Crypto providers performing the byte-level key transformation.

The converter only validates requests; the actual re-encoding of key material is done by a
``CryptoProvider``. Providers are looked up by identifier, external packages can add their
own through the ``keyfmt.provider`` entry point group.
"""

import abc
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm

from keyfmt.crypto.crypto_types import (
    FAMILY_CONTAINERS,
    EccCurve,
    FormatSpec,
    KeyFamily,
    KeyPair,
)
from keyfmt.crypto.exceptions import ProviderFailure
from keyfmt.crypto.keys import (
    check_key_family,
    export_private_key,
    export_public_key,
    key_bytes_to_text,
    key_text_to_bytes,
    parse_private_key,
    parse_public_key,
)
from keyfmt.exceptions import KeyfmtError
from keyfmt.utils.plugins import PluginType
from keyfmt.utils.service_provider import ServiceProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderRequest:
    """Single key conversion request sent to a crypto provider.

    :param private_key: Private key text, empty string when absent.
    :param public_key: Public key text, empty string when absent.
    :param from_spec: Current format of both keys.
    :param to_spec: Requested format of both keys.
    :param curve: Named curve of elliptic curve keys, None for RSA.
    """

    private_key: str
    public_key: str
    from_spec: FormatSpec
    to_spec: FormatSpec
    curve: Optional[EccCurve] = None

    def __str__(self) -> str:
        ret = f"{self.from_spec} -> {self.to_spec}"
        if self.curve:
            ret += f" on {self.curve.label}"
        return ret


class CryptoProvider(ServiceProvider):
    """Base class of all crypto providers.

    Both operations return the converted key pair or raise ``ProviderFailure`` with a
    descriptive message.
    """

    plugin_identifier = PluginType.CRYPTO_PROVIDER.label

    @abc.abstractmethod
    async def transfer_rsa_key(self, request: ProviderRequest) -> KeyPair:
        """Convert RSA key pair into requested format.

        :param request: Conversion request.
        :return: Converted key pair.
        """

    @abc.abstractmethod
    async def transfer_ecc_key(self, request: ProviderRequest) -> KeyPair:
        """Convert elliptic curve key pair into requested format.

        :param request: Conversion request, the curve is set.
        :return: Converted key pair.
        """


class LocalCryptoProvider(CryptoProvider):
    """Crypto provider built on the cryptography library.

    Key parsing and export run in a worker thread so the event loop is never blocked.
    """

    identifier = "local"

    async def transfer_rsa_key(self, request: ProviderRequest) -> KeyPair:
        """Convert RSA key pair into requested format.

        :param request: Conversion request.
        :raises ProviderFailure: Keys can't be converted.
        :return: Converted key pair.
        """
        return await self._transfer(KeyFamily.RSA, request)

    async def transfer_ecc_key(self, request: ProviderRequest) -> KeyPair:
        """Convert elliptic curve key pair into requested format.

        :param request: Conversion request.
        :raises ProviderFailure: Keys can't be converted or don't lie on requested curve.
        :return: Converted key pair.
        """
        return await self._transfer(KeyFamily.ECC, request)

    async def _transfer(self, family: KeyFamily, request: ProviderRequest) -> KeyPair:
        logger.info(f"Transferring {family.label} key: {request}")
        try:
            return await asyncio.to_thread(self._convert_pair, family, request)
        except ProviderFailure:
            raise
        except KeyfmtError as exc:
            raise ProviderFailure(exc.description) from exc
        except (UnsupportedAlgorithm, ValueError, TypeError) as exc:
            raise ProviderFailure(str(exc)) from exc

    @staticmethod
    def _check_containers(family: KeyFamily, request: ProviderRequest) -> None:
        for spec in (request.from_spec, request.to_spec):
            if spec.container not in FAMILY_CONTAINERS[family]:
                raise ProviderFailure(
                    f"{family.description} keys can't be stored in {spec.container.label} container"
                )

    def _convert_pair(self, family: KeyFamily, request: ProviderRequest) -> KeyPair:
        self._check_containers(family, request)
        return KeyPair(
            self._convert_private(family, request) if request.private_key else "",
            self._convert_public(family, request) if request.public_key else "",
        )

    @staticmethod
    def _convert_private(family: KeyFamily, request: ProviderRequest) -> str:
        src, dst = request.from_spec, request.to_spec
        data = key_text_to_bytes(request.private_key, src)
        key = parse_private_key(data, src.container, src.serialization)
        check_key_family(key, family, request.curve)
        exported = export_private_key(key, dst.container, dst.serialization)
        return key_bytes_to_text(exported, dst)

    @staticmethod
    def _convert_public(family: KeyFamily, request: ProviderRequest) -> str:
        src, dst = request.from_spec, request.to_spec
        data = key_text_to_bytes(request.public_key, src)
        key = parse_public_key(data, src.container, src.serialization)
        check_key_family(key, family, request.curve)
        exported = export_public_key(key, dst.container, dst.serialization)
        return key_bytes_to_text(exported, dst)
