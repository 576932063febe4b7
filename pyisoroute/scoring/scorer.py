#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Route priority scoring

A transparent overlay on top of an
:class:`~pyisoroute.models.records.EvaluationResult`: six independent
rules each award 0-5 points and the unweighted mean decides the
priority class (≥ 4.0 High Priority, ≥ 2.5 Conditional, otherwise Low
Priority).

Scoring never alters a physics value.  It reads the route and the
evaluation, and the same inputs always give a bit-identical
:class:`~pyisoroute.models.records.ScoreBreakdown`.

Criteria
--------
physics
    Feasibility class, threshold failures, missing cross section.
production_yield
    Reaction-rate and EOB-activity tiers.
specific_activity
    TBq/g ladder; stricter for no-carrier-added routes.
impurity
    Impurity risk level, high-severity advisories, impurity reasons.
logistics
    Half-life fit to the route category, chemistry, carrier needs.
regulatory
    Regulatory flag, alpha-emitter category, data quality.
"""

from __future__ import annotations

import logging

from pyisoroute.exceptions import InvalidInputError
from pyisoroute.models.records import (
    Classification,
    EvaluationResult,
    RegulatoryFlag,
    RiskLevel,
    RouteDescriptor,
    ScoreBreakdown,
    Severity,
)
from pyisoroute.utils.constants import BQ_PER_GBQ, BQ_PER_TBQ

logger = logging.getLogger(__name__)

PHYSICS_BASE: dict[Classification, float] = {
    Classification.FEASIBLE: 5.0,
    Classification.FEASIBLE_WITH_CONSTRAINTS: 3.0,
    Classification.NOT_RECOMMENDED: 0.5,
}

IMPURITY_BASE: dict[RiskLevel, float] = {
    RiskLevel.LOW: 5.0,
    RiskLevel.MEDIUM: 3.0,
    RiskLevel.HIGH: 1.0,
    RiskLevel.UNKNOWN: 2.0,
}

REGULATORY_BASE: dict[RegulatoryFlag, float] = {
    RegulatoryFlag.STANDARD: 5.0,
    RegulatoryFlag.CONSTRAINED: 3.0,
    RegulatoryFlag.EXPLORATORY: 1.5,
}

# (lower bound, adjustment), scanned top-down; below the last bound the
# fallback applies
RATE_TIERS: tuple[tuple[float, float], ...] = ((1e12, 1.0), (1e10, 0.5), (1e8, 0.0), (1e6, -0.5))
ACTIVITY_TIERS_GBQ: tuple[tuple[float, float], ...] = ((100.0, 1.0), (10.0, 0.5), (1.0, 0.0), (0.1, -0.5))
NCA_LADDER_TBQ: tuple[tuple[float, float], ...] = ((10.0, 5.0), (1.0, 4.0), (0.1, 2.5))
CARRIER_LADDER_TBQ: tuple[tuple[float, float], ...] = ((1.0, 5.0), (0.1, 4.0), (0.01, 3.0))


def _tier(value: float, tiers: tuple[tuple[float, float], ...], fallback: float) -> float:
    for bound, points in tiers:
        if value >= bound:
            return points
    return fallback


# ---------------------------------------------------------------------------
# Individual criteria
# ---------------------------------------------------------------------------

def score_physics(route: RouteDescriptor, evaluation: EvaluationResult) -> float:
    score = PHYSICS_BASE[evaluation.classification]
    if (
        route.threshold_mev is not None
        and route.threshold_mev > 0
        and evaluation.classification is Classification.NOT_RECOMMENDED
        and any("threshold" in reason for reason in evaluation.reasons)
    ):
        score = 0.0
    if not route.nominal_sigma_barns:
        score = max(0.0, score - 1.0)
    return score


def score_yield(evaluation: EvaluationResult) -> float:
    if evaluation.classification is Classification.NOT_RECOMMENDED:
        return 0.5
    rate = evaluation.reaction_rate or 0.0
    activity_gbq = (evaluation.activity_eob_bq or 0.0) / BQ_PER_GBQ
    return 2.5 + _tier(rate, RATE_TIERS, -1.0) + _tier(activity_gbq, ACTIVITY_TIERS_GBQ, -1.0)


def score_specific_activity(route: RouteDescriptor, evaluation: EvaluationResult) -> float:
    """Specific-activity score; n.c.a. routes use the stricter ladder"""
    sa_tbq = (evaluation.specific_activity_bq_per_g or 0.0) / BQ_PER_TBQ
    if route.is_nca:
        return _tier(sa_tbq, NCA_LADDER_TBQ, 1.0)
    return _tier(sa_tbq, CARRIER_LADDER_TBQ, 2.0)


def score_impurity(evaluation: EvaluationResult) -> float:
    """Impurity score from risk level, advisories and impurity reasons

    Every high-severity advisory costs 1 point, every other advisory
    0.3, and any reason mentioning an impurity a further 1.5.
    """
    score = IMPURITY_BASE[evaluation.impurity_risk_level]
    high = sum(1 for w in evaluation.warnings if w.severity is Severity.HIGH)
    score -= 1.0 * high
    score -= 0.3 * (len(evaluation.warnings) - high)
    if any("impurity" in reason.lower() for reason in evaluation.reasons):
        score -= 1.5
    return score


def score_logistics(route: RouteDescriptor) -> float:
    score = 3.0
    half_life = route.product_half_life_days
    if route.category == "industrial":
        if half_life >= 30:
            score += 1.0
        elif half_life >= 7:
            score += 0.5
        elif half_life < 1:
            score -= 0.5
    else:
        if 1 <= half_life <= 10:
            score += 1.0
        elif 0.5 <= half_life < 1:
            score += 0.5
        elif 10 < half_life <= 30:
            pass
        elif half_life > 30:
            score -= 0.5
        else:
            score -= 1.0
    if not route.chemical_separable:
        score -= 1.5
    if route.is_nca and route.category != "industrial":
        score -= 0.3
    return score


def score_regulatory(route: RouteDescriptor) -> float:
    score = REGULATORY_BASE[route.regulatory_flag]
    if route.category == "alpha":
        score -= 1.0
    if route.data_quality == "planning-conservative":
        score -= 0.2
    return score


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

def score_route(route: RouteDescriptor, evaluation: EvaluationResult) -> ScoreBreakdown:
    """Score an evaluated route on the six priority criteria

    Parameters
    ----------
    route : RouteDescriptor
        The evaluated route.
    evaluation : EvaluationResult
        Its evaluation; never modified.

    Returns
    -------
    ScoreBreakdown
        Category scores clamped to [0, 5], with ``total`` and
        ``priority`` derived from them.

    Raises
    ------
    InvalidInputError
        If *evaluation* belongs to a different route.
    """
    if evaluation.route_id != route.route_id:
        raise InvalidInputError(
            f"Evaluation for {evaluation.route_id!r} cannot score route {route.route_id!r}."
        )
    breakdown = ScoreBreakdown(
        physics=score_physics(route, evaluation),
        production_yield=score_yield(evaluation),
        specific_activity=score_specific_activity(route, evaluation),
        impurity=score_impurity(evaluation),
        logistics=score_logistics(route),
        regulatory=score_regulatory(route),
        details=evaluation.reasons,
    )
    logger.debug(
        "Route %s scored %.2f (%s).", route.route_id, breakdown.total, breakdown.priority.value,
    )
    return breakdown
