#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities for parsing, validation and physical constants

Isotope and impurity-descriptor parsing, the input validators used by
every physics primitive, and the constants table live here so that no
module re-implements them.
"""

from __future__ import annotations
