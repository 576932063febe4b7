#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Route feasibility evaluation and impurity assessment
"""

from __future__ import annotations

from pyisoroute.routing.evaluator import RouteEvaluator, evaluate_route

__all__ = ["RouteEvaluator", "evaluate_route"]
