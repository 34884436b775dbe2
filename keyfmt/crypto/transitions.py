#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Container transition rules per key family.

RSA keys move between PKCS#1 and PKCS#8, elliptic-curve keys between PKCS#8 and SEC1.
Serialization-only changes (PEM <-> DER) are not covered here, they are always allowed.
"""

from keyfmt.crypto.crypto_types import ContainerKind, KeyFamily
from keyfmt.crypto.exceptions import UnsupportedTransition
from keyfmt.exceptions import KeyfmtError

LEGAL_TRANSITIONS: dict[KeyFamily, frozenset[tuple[ContainerKind, ContainerKind]]] = {
    KeyFamily.RSA: frozenset(
        {
            (ContainerKind.PKCS1, ContainerKind.PKCS8),
            (ContainerKind.PKCS8, ContainerKind.PKCS1),
            (ContainerKind.PKCS8, ContainerKind.PKCS8),
            (ContainerKind.PKCS1, ContainerKind.PKCS1),
        }
    ),
    KeyFamily.ECC: frozenset(
        {
            (ContainerKind.PKCS8, ContainerKind.SEC1),
            (ContainerKind.SEC1, ContainerKind.PKCS8),
            (ContainerKind.PKCS8, ContainerKind.PKCS8),
            (ContainerKind.SEC1, ContainerKind.SEC1),
        }
    ),
}

if set(LEGAL_TRANSITIONS) != set(KeyFamily):
    raise KeyfmtError("Transition table must define rules for every key family")


def is_legal(family: KeyFamily, from_container: ContainerKind, to_container: ContainerKind) -> bool:
    """Check whether the container transition is legal for the key family.

    :param family: Key family.
    :param from_container: Source container kind.
    :param to_container: Target container kind.
    :return: True if the transition is allowed.
    """
    return (from_container, to_container) in LEGAL_TRANSITIONS[family]


def check_transition(
    family: KeyFamily, from_container: ContainerKind, to_container: ContainerKind
) -> None:
    """Verify the container transition.

    :param family: Key family.
    :param from_container: Source container kind.
    :param to_container: Target container kind.
    :raises UnsupportedTransition: The transition is not legal for the family.
    """
    if not is_legal(family, from_container, to_container):
        raise UnsupportedTransition(family, from_container, to_container)


def legal_transitions(family: KeyFamily) -> list[tuple[ContainerKind, ContainerKind]]:
    """Get all legal container transitions of the key family.

    :param family: Key family.
    :return: Sorted list of (from, to) container pairs.
    """
    return sorted(LEGAL_TRANSITIONS[family], key=lambda pair: (pair[0].tag, pair[1].tag))
