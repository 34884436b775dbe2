#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt KeyfmtEnum utility tests."""

import pytest

from keyfmt.crypto.crypto_types import ContainerKind, KeyFamily
from keyfmt.exceptions import KeyfmtKeyError
from keyfmt.utils.keyfmt_enum import KeyfmtEnum


class KeyfmtEnumNumbers(KeyfmtEnum):
    """Test enumeration with numeric values."""

    ONE = (1, "TheOne")
    TWO = (2, "TheTwo", "Just two.")
    THREE = (3, "TheThree")
    FOUR = (4, "TheFour", "Just four.")


class KeyfmtEnumDays(KeyfmtEnum):
    """Test enumeration sharing tags with KeyfmtEnumNumbers."""

    MONDAY = (1, "Monday")
    TUESDAY = (2, "Tuesday")


def test_equals() -> None:
    """Members equal their tag and label, but not members of another enumeration."""
    assert KeyfmtEnumNumbers.ONE == 1
    assert KeyfmtEnumNumbers.ONE == "TheOne"
    assert KeyfmtEnumNumbers.TWO == 2
    assert KeyfmtEnumNumbers.ONE != 2
    assert KeyfmtEnumNumbers.ONE != KeyfmtEnumDays.MONDAY
    assert ContainerKind.PKCS1 != KeyFamily.RSA


def test_from_label() -> None:
    """Label lookup is case-insensitive and fails for unknown labels."""
    assert KeyfmtEnumNumbers.from_label("TheTwo") is KeyfmtEnumNumbers.TWO
    assert KeyfmtEnumNumbers.from_label("thetwo") is KeyfmtEnumNumbers.TWO
    assert ContainerKind.from_label("PKCS8") is ContainerKind.PKCS8
    with pytest.raises(KeyfmtKeyError):
        KeyfmtEnumNumbers.from_label("TEN")
    with pytest.raises(KeyfmtKeyError):
        KeyfmtEnumNumbers.from_label(2)  # type: ignore


def test_labels() -> None:
    assert KeyfmtEnumNumbers.labels() == ["TheOne", "TheTwo", "TheThree", "TheFour"]


def test_membership() -> None:
    """Members are found in containers by their tag as well."""
    assert KeyfmtEnumNumbers.ONE in KeyfmtEnumNumbers
    assert 1 in [5, KeyfmtEnumNumbers.ONE]
    assert 2 not in [5, KeyfmtEnumNumbers.ONE]


def test_hashable() -> None:
    """Members can be used as dictionary keys and set items."""
    table = {KeyfmtEnumNumbers.ONE: "one", KeyfmtEnumDays.MONDAY: "monday"}
    assert table[KeyfmtEnumNumbers.ONE] == "one"
    assert table[KeyfmtEnumDays.MONDAY] == "monday"
    assert len({KeyfmtEnumNumbers.ONE, KeyfmtEnumNumbers.ONE, KeyfmtEnumNumbers.TWO}) == 2
