#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for routes, conditions and evaluation results

All models are frozen ``dataclasses`` that validate their own fields.
They are the sole input format of the evaluator and the sole output
format of the evaluator and scorer.
"""

from __future__ import annotations

from pyisoroute.models.records import (
    Advisory,
    ApplicationContext,
    ChainIsotope,
    Classification,
    DecayChainSpec,
    EvaluationResult,
    ImpurityActivity,
    ImpurityRisk,
    ImpurityTrap,
    OperatingConditions,
    Pathway,
    Priority,
    ReactionType,
    RegulatoryFlag,
    RiskLevel,
    RouteDescriptor,
    ScoreBreakdown,
    Severity,
    ThresholdMode,
)

__all__ = [
    "Advisory",
    "ApplicationContext",
    "ChainIsotope",
    "Classification",
    "DecayChainSpec",
    "EvaluationResult",
    "ImpurityActivity",
    "ImpurityRisk",
    "ImpurityTrap",
    "OperatingConditions",
    "Pathway",
    "Priority",
    "ReactionType",
    "RegulatoryFlag",
    "RiskLevel",
    "RouteDescriptor",
    "ScoreBreakdown",
    "Severity",
    "ThresholdMode",
]
