#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt key conversion and text encoding engine.

This package decides whether a requested key format transition is legal, short-circuits
no-op conversions, delegates the work to a crypto provider and maps binary payloads
to their textual representations.
"""
