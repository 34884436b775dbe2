#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt enumeration base with tag/label lookup.

Every keyfmt enumeration member carries a numeric tag, a label used on the command
line and in serialized requests, and an optional human readable description.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from typing_extensions import Self

from keyfmt.exceptions import KeyfmtKeyError


@dataclass(frozen=True)
class KeyfmtEnumMember:
    """Keyfmt Enum member representation."""

    tag: int
    label: str
    description: Optional[str] = None


class KeyfmtEnum(KeyfmtEnumMember, Enum):
    """Keyfmt enumeration with tag and label based lookup.

    Members compare equal to their own tag and label, so ``ContainerKind.PKCS8 == "pkcs8"``
    holds. Label lookups are case-insensitive.
    """

    def __eq__(self, __value: object) -> bool:
        """Check equality of enum value with another object.

        :param __value: Object to compare with this enum value.
        :return: True if the object equals tag or label, False otherwise.
        """
        if isinstance(__value, KeyfmtEnum) and type(__value) is not type(self):
            return False
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        """Calculate hash value for the enum instance.

        :return: Hash value as integer.
        """
        return hash((self.tag, self.label, self.description))

    @classmethod
    def labels(cls) -> list[str]:
        """Get list of labels of all enum members.

        :return: List of all labels.
        """
        return [value.label for value in cls.__members__.values()]

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Get enum member with given label.

        :param label: Label to be used for searching, case-insensitive
        :raises KeyfmtKeyError: If enum with given label is not found or label is not string
        :return: Found enum member
        """
        if not isinstance(label, str):
            raise KeyfmtKeyError("Label must be string")
        for item in cls.__members__.values():
            if item.label.upper() == label.upper():
                return item
        raise KeyfmtKeyError(f"There is no {cls.__name__} item with label {label} defined")
