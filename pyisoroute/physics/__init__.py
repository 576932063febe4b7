#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Activation, burn-up and decay-chain physics

Pure functions over floats and NumPy arrays.  Nothing in this
sub-package knows about routes or registries.
"""

from __future__ import annotations
