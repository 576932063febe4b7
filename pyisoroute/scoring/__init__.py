#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Priority scoring of evaluated routes
"""

from __future__ import annotations

from pyisoroute.scoring.scorer import score_route

__all__ = ["score_route"]
