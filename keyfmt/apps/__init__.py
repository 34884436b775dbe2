#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyfmt applications package.

This package contains the ``keyfmt`` command line application converting key formats
and text encodings from scripts.
"""
