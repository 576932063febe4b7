#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for route priority scoring
"""

from __future__ import annotations

import dataclasses

import pytest

from pyisoroute.exceptions import InvalidInputError
from pyisoroute.models.records import (
    Advisory,
    Classification,
    EvaluationResult,
    OperatingConditions,
    Priority,
    RiskLevel,
    Severity,
)
from pyisoroute.routing.evaluator import RouteEvaluator
from pyisoroute.scoring.scorer import (
    score_impurity,
    score_logistics,
    score_physics,
    score_regulatory,
    score_route,
    score_specific_activity,
    score_yield,
)


def _result(route_id: str = "test-lu177", **fields) -> EvaluationResult:
    values = dict(
        feasible=True,
        classification=Classification.FEASIBLE,
        impurity_risk_level=RiskLevel.LOW,
        reaction_rate=1e11,
        activity_eob_bq=5e10,
        specific_activity_bq_per_g=2e13,
    )
    values.update(fields)
    return EvaluationResult(route_id, **values)


# -----------------------------------------------------------------------
# Individual criteria
# -----------------------------------------------------------------------

class TestPhysics:
    """Tests for score_physics"""

    @pytest.mark.parametrize(
        "classification, expected",
        [
            (Classification.FEASIBLE, 5.0),
            (Classification.FEASIBLE_WITH_CONSTRAINTS, 3.0),
            (Classification.NOT_RECOMMENDED, 0.5),
        ],
    )
    def test_base(self, lu177_route, classification, expected) -> None:
        assert score_physics(lu177_route, _result(classification=classification)) == expected

    def test_threshold_failure(self, fast_route) -> None:
        result = _result(
            "test-fast", feasible=False, classification=Classification.NOT_RECOMMENDED,
            reasons=("Neutron energy (3.00 MeV) below reaction threshold (5 MeV)",),
        )
        assert score_physics(fast_route, result) == 0.0

    def test_missing_sigma_penalty(self, lu177_route) -> None:
        route = dataclasses.replace(lu177_route, nominal_sigma_barns=None)
        assert score_physics(route, _result()) == 4.0


class TestYield:
    """Tests for score_yield"""

    def test_top_tiers(self) -> None:
        assert score_yield(_result(reaction_rate=1e12, activity_eob_bq=1e11)) == 4.5

    def test_middle_tiers(self) -> None:
        assert score_yield(_result(reaction_rate=1e9, activity_eob_bq=2e9)) == 2.5

    def test_fallback_tiers(self) -> None:
        assert score_yield(_result(reaction_rate=10.0, activity_eob_bq=1e3)) == 0.5

    def test_not_recommended(self) -> None:
        result = _result(feasible=False, classification=Classification.NOT_RECOMMENDED)
        assert score_yield(result) == 0.5


class TestSpecificActivity:
    """Tests for the n.c.a. and carrier-added ladders"""

    @pytest.mark.parametrize("sa_tbq, expected", [(20.0, 5.0), (2.0, 4.0), (0.5, 2.5), (0.01, 1.0)])
    def test_nca_ladder(self, lu177_route, sa_tbq: float, expected: float) -> None:
        result = _result(specific_activity_bq_per_g=sa_tbq * 1e12)
        assert score_specific_activity(lu177_route, result) == expected

    @pytest.mark.parametrize("sa_tbq, expected", [(2.0, 5.0), (0.5, 4.0), (0.05, 3.0), (0.001, 2.0)])
    def test_carrier_ladder(self, lu177_route, sa_tbq: float, expected: float) -> None:
        route = dataclasses.replace(lu177_route, carrier_added_acceptable=True)
        result = _result(specific_activity_bq_per_g=sa_tbq * 1e12)
        assert score_specific_activity(route, result) == expected

    def test_missing_value(self, lu177_route) -> None:
        assert score_specific_activity(lu177_route, _result(specific_activity_bq_per_g=None)) == 1.0


class TestImpurity:
    """Tests for score_impurity"""

    def test_clean(self) -> None:
        assert score_impurity(_result()) == 5.0

    def test_advisory_penalties(self) -> None:
        warnings = (
            Advisory("high", Severity.HIGH),
            Advisory("moderate", Severity.MODERATE),
            Advisory("info"),
        )
        result = _result(impurity_risk_level=RiskLevel.MEDIUM, warnings=warnings)
        assert score_impurity(result) == pytest.approx(3.0 - 1.0 - 0.6)

    def test_impurity_reason(self) -> None:
        result = _result(reasons=("Long-lived impurity present - may accumulate",))
        assert score_impurity(result) == pytest.approx(3.5)

    def test_unknown_risk(self) -> None:
        assert score_impurity(_result(impurity_risk_level=RiskLevel.UNKNOWN)) == 2.0


class TestLogistics:
    """Tests for score_logistics"""

    def test_medical_window(self, lu177_route) -> None:
        assert score_logistics(lu177_route) == pytest.approx(3.7)

    def test_carrier_added(self, lu177_route) -> None:
        route = dataclasses.replace(lu177_route, carrier_added_acceptable=True)
        assert score_logistics(route) == 4.0

    @pytest.mark.parametrize("half_life, expected", [(0.7, 3.5), (20.0, 3.0), (74.0, 2.5), (0.1, 2.0)])
    def test_half_life_fit(self, lu177_route, half_life: float, expected: float) -> None:
        route = dataclasses.replace(lu177_route, carrier_added_acceptable=True, product_half_life_days=half_life)
        assert score_logistics(route) == expected

    @pytest.mark.parametrize("half_life, expected", [(1925.0, 4.0), (10.0, 3.5), (3.0, 3.0), (0.5, 2.5)])
    def test_industrial(self, lu177_route, half_life: float, expected: float) -> None:
        route = dataclasses.replace(lu177_route, category="industrial", product_half_life_days=half_life)
        assert score_logistics(route) == expected

    def test_inseparable_penalty(self, lu177_route) -> None:
        route = dataclasses.replace(lu177_route, chemical_separable=False, carrier_added_acceptable=True)
        assert score_logistics(route) == 2.5


class TestRegulatory:
    """Tests for score_regulatory"""

    def test_flags(self, lu177_route) -> None:
        assert score_regulatory(lu177_route) == 5.0
        assert score_regulatory(dataclasses.replace(lu177_route, regulatory_flag="constrained")) == 3.0
        assert score_regulatory(dataclasses.replace(lu177_route, regulatory_flag="exploratory")) == 1.5

    def test_alpha_and_data_quality(self, lu177_route) -> None:
        route = dataclasses.replace(
            lu177_route, category="alpha", regulatory_flag="exploratory", data_quality="planning-conservative",
        )
        assert score_regulatory(route) == pytest.approx(0.3)


# -----------------------------------------------------------------------
# Aggregate
# -----------------------------------------------------------------------

class TestScoreRoute:
    """Tests for score_route"""

    def test_reference_route(self, lu177_route, lu177_conditions) -> None:
        evaluation = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        breakdown = score_route(lu177_route, evaluation)
        assert breakdown.physics == 5.0
        assert breakdown.production_yield == 3.5
        assert breakdown.specific_activity == 5.0
        assert breakdown.impurity == pytest.approx(4.7)
        assert breakdown.logistics == pytest.approx(3.7)
        assert breakdown.regulatory == 5.0
        assert breakdown.total == pytest.approx(26.9 / 6.0)
        assert breakdown.priority is Priority.HIGH

    def test_idempotent(self, lu177_route, lu177_conditions) -> None:
        evaluation = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        snapshot = dataclasses.asdict(evaluation)
        first = score_route(lu177_route, evaluation)
        second = score_route(lu177_route, evaluation)
        assert first == second
        assert first.total == second.total
        assert dataclasses.asdict(evaluation) == snapshot

    def test_route_mismatch(self, lu177_route) -> None:
        with pytest.raises(InvalidInputError):
            score_route(lu177_route, _result("other"))

    def test_scores_clamped(self, lu177_route) -> None:
        warnings = tuple(Advisory(f"w{i}", Severity.HIGH) for i in range(8))
        result = _result(impurity_risk_level=RiskLevel.HIGH, warnings=warnings)
        assert score_route(lu177_route, result).impurity == 0.0

    def test_below_threshold_is_low_priority(self, fast_route) -> None:
        evaluation = RouteEvaluator().evaluate(fast_route, OperatingConditions(neutron_energy_mev=3.0))
        breakdown = score_route(fast_route, evaluation)
        assert breakdown.physics == 0.0
        assert breakdown.production_yield == 0.5
        assert breakdown.priority is Priority.LOW

    def test_details_carry_reasons(self, lu177_route) -> None:
        result = _result(reasons=("Route has operational constraints",))
        assert score_route(lu177_route, result).details == ("Route has operational constraints",)

    def test_whole_registry(self, registry, builtin_data) -> None:
        evaluator = RouteEvaluator(builtin_data)
        for route in registry:
            breakdown = score_route(route, evaluator.evaluate(route))
            assert 0.0 <= breakdown.total <= 5.0
            assert isinstance(breakdown.priority, Priority)
