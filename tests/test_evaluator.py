#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the route feasibility evaluator

Covers the terminal gates, flux and cross-section selection, the Lu-177
reference case, burn-up coupling, impurity handling, viability
thresholds and delivered activity.
"""

from __future__ import annotations

import dataclasses

import pytest

from pyisoroute.data.nuclear import BuiltinNuclearData
from pyisoroute.models.records import (
    Classification,
    EvaluationResult,
    OperatingConditions,
    RiskLevel,
    RouteDescriptor,
    Severity,
)
from pyisoroute.routing.evaluator import (
    MISSING_SIGMA,
    PATHWAY_NOT_FOUND,
    RouteEvaluator,
    evaluate_route,
)


def _messages(result: EvaluationResult) -> list[str]:
    return [w.message for w in result.warnings]


# -----------------------------------------------------------------------
# Terminal gates
# -----------------------------------------------------------------------

class TestGates:
    """Tests for the threshold, separability and zero-sigma gates"""

    def test_threshold_gate(self, fast_route: RouteDescriptor) -> None:
        result = RouteEvaluator().evaluate(fast_route, OperatingConditions(neutron_energy_mev=3.0))
        assert result.classification is Classification.NOT_RECOMMENDED
        assert not result.feasible
        assert "threshold" in result.reasons[0]
        assert result.activity_eob_bq is None
        assert result.impurity_risk_level is RiskLevel.UNKNOWN

    def test_above_threshold_passes(self, fast_route: RouteDescriptor) -> None:
        result = RouteEvaluator().evaluate(fast_route, OperatingConditions(neutron_energy_mev=14.1))
        assert result.activity_eob_bq is not None
        assert result.flux == 1e13

    @pytest.mark.parametrize("mass", [1e-6, 1.0, 1e3])
    def test_inseparable_without_carrier(self, lu177_route: RouteDescriptor, mass: float) -> None:
        route = dataclasses.replace(lu177_route, chemical_separable=False)
        result = RouteEvaluator().evaluate(route, OperatingConditions(target_mass_g=mass, neutron_flux=1e15))
        assert result.classification is Classification.NOT_RECOMMENDED
        assert "inseparable" in result.reasons[0]

    def test_zero_cross_section(self, lu177_route: RouteDescriptor) -> None:
        route = dataclasses.replace(lu177_route, nominal_sigma_barns=0.0)
        result = RouteEvaluator().evaluate(route)
        assert result.classification is Classification.NOT_RECOMMENDED
        assert "cross-section is zero" in result.reasons[0]
        assert "threshold" not in result.reasons[0]

    def test_zero_sigma_at_threshold(self, fast_route: RouteDescriptor) -> None:
        conditions = OperatingConditions(neutron_energy_mev=5.0, threshold_mode="energy_scaled")
        result = RouteEvaluator().evaluate(fast_route, conditions)
        assert result.classification is Classification.NOT_RECOMMENDED
        assert "threshold not met at 5.00 MeV" in result.reasons[0]

    def test_energy_scaled_below_reference(self, fast_route: RouteDescriptor) -> None:
        conditions = OperatingConditions(neutron_energy_mev=9.55, threshold_mode="energy_scaled")
        result = RouteEvaluator().evaluate(fast_route, conditions)
        assert result.cross_section_cm2 == pytest.approx(0.02e-24 * 0.5 ** 1.5)


# -----------------------------------------------------------------------
# Reference case
# -----------------------------------------------------------------------

class TestLu177Reference:
    """Lu-176(n,γ)Lu-177 at 1e14 for 5 days, 75 % enriched"""

    def test_classification(self, lu177_route, lu177_conditions) -> None:
        result = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        assert result.classification is Classification.FEASIBLE
        assert result.feasible
        assert result.reasons == ()
        assert result.impurity_risk_level is RiskLevel.LOW

    def test_physics_values(self, lu177_route, lu177_conditions) -> None:
        result = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        assert result.saturation == pytest.approx(0.4063, rel=1e-3)
        assert 0.40 <= result.saturation <= 0.45
        assert result.activity_eob_gbq == pytest.approx(38.35, rel=1e-3)
        assert 10.0 <= result.activity_eob_gbq <= 500.0
        assert result.reaction_rate == pytest.approx(9.4397e10, rel=1e-4)

    def test_default_chemistry_yield(self, lu177_route, lu177_conditions) -> None:
        result = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        assert result.chemistry_yield == 0.85
        assert result.delivered_activity_bq == pytest.approx(0.85 * result.activity_eob_bq)
        assert any("conservative default" in m for m in _messages(result))

    def test_no_pathway_warning_without_registry(self, lu177_route, lu177_conditions) -> None:
        result = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        assert PATHWAY_NOT_FOUND not in _messages(result)

    def test_pathway_overrides(self, lu177_route, lu177_conditions, builtin_data) -> None:
        result = RouteEvaluator(builtin_data).evaluate(lu177_route, lu177_conditions)
        assert result.chemistry_yield == 0.9
        assert result.burn_up_rate > 0.0
        assert any("Resonance-dominated" in m for m in _messages(result))

    def test_pure_thermal_silences_resonance(self, lu177_route, builtin_data) -> None:
        conditions = OperatingConditions(neutron_flux=1e14, pure_thermal_spectrum=True)
        result = RouteEvaluator(builtin_data).evaluate(lu177_route, conditions)
        assert not any("Resonance-dominated" in m for m in _messages(result))

    def test_deterministic(self, lu177_route, lu177_conditions) -> None:
        evaluator = RouteEvaluator()
        assert evaluator.evaluate(lu177_route, lu177_conditions) == evaluator.evaluate(lu177_route, lu177_conditions)


# -----------------------------------------------------------------------
# Flux and cross-section defaults
# -----------------------------------------------------------------------

class TestDefaults:
    """Tests for default flux and placeholder cross sections"""

    def test_thermal_default_flux(self, lu177_route) -> None:
        assert RouteEvaluator().evaluate(lu177_route).flux == 1e14

    def test_charged_particle_default_flux(self) -> None:
        route = RouteDescriptor("cp", "Zn-68", "Ga-67", "p,2n", 3.26, nominal_sigma_barns=0.5)
        assert RouteEvaluator().evaluate(route).flux == 1e10

    def test_missing_capture_sigma(self, lu177_route) -> None:
        route = dataclasses.replace(lu177_route, nominal_sigma_barns=None)
        result = RouteEvaluator().evaluate(route)
        assert result.cross_section_cm2 == pytest.approx(1e-24)
        assert MISSING_SIGMA in _messages(result)

    def test_missing_fast_sigma(self, fast_route) -> None:
        route = dataclasses.replace(fast_route, nominal_sigma_barns=None)
        result = RouteEvaluator().evaluate(route)
        assert result.cross_section_cm2 == pytest.approx(1e-26)

    def test_unregistered_route_warns(self, builtin_data) -> None:
        route = RouteDescriptor("adhoc", "Er-170", "Er-171", "n,γ", 0.313, nominal_sigma_barns=5.0)
        result = RouteEvaluator(builtin_data).evaluate(route)
        assert PATHWAY_NOT_FOUND in _messages(result)

    def test_atomic_mass_lookup(self, lu177_route, builtin_data) -> None:
        plain = RouteEvaluator().evaluate(lu177_route, OperatingConditions(pure_thermal_spectrum=True))
        route = dataclasses.replace(lu177_route, route_id="lu-no-pathway", target_isotope="Lu-175")
        looked_up = RouteEvaluator(builtin_data).evaluate(route, OperatingConditions(pure_thermal_spectrum=True))
        assert looked_up.reaction_rate == pytest.approx(plain.reaction_rate * 100.0 / 174.9668)


# -----------------------------------------------------------------------
# Yield modifiers
# -----------------------------------------------------------------------

class TestYield:
    """Tests for burn-up, carrier mass and delivered activity"""

    def test_burnup_lowers_activity(self, lu177_route, lu177_conditions) -> None:
        burned = dataclasses.replace(lu177_route, product_burn_sigma_cm2=2e-21)
        plain = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        result = RouteEvaluator().evaluate(burned, lu177_conditions)
        assert result.burn_up_rate > 0.0
        assert result.activity_eob_bq < plain.activity_eob_bq

    def test_carrier_lowers_specific_activity(self, lu177_route, lu177_conditions) -> None:
        nca = RouteEvaluator().evaluate(lu177_route, lu177_conditions)
        carrier = dataclasses.replace(lu177_route, carrier_added_acceptable=True)
        ca = RouteEvaluator().evaluate(carrier, lu177_conditions)
        assert ca.activity_eob_bq == pytest.approx(nca.activity_eob_bq)
        assert ca.specific_activity_bq_per_g < nca.specific_activity_bq_per_g

    def test_explicit_carrier_mass(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, carrier_added_acceptable=True, carrier_mass_g=1.0)
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.specific_activity_bq_per_g == pytest.approx(result.activity_eob_bq, rel=1e-3)

    def test_delivered_after_one_half_life(self, lu177_route, lu177_conditions) -> None:
        conditions = dataclasses.replace(lu177_conditions, chemistry_delay_hours=6.647 * 12, transport_time_hours=6.647 * 12)
        result = RouteEvaluator().evaluate(lu177_route, conditions)
        assert result.delivered_activity_bq == pytest.approx(0.5 * 0.85 * result.activity_eob_bq)

    def test_route_chemistry_yield(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, chemistry_yield=0.6)
        result = RouteEvaluator(BuiltinNuclearData()).evaluate(route, lu177_conditions)
        assert result.chemistry_yield == 0.6

    def test_inseparable_carrier_route_full_yield(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, chemical_separable=False, carrier_added_acceptable=True)
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.chemistry_yield == 1.0


# -----------------------------------------------------------------------
# Classification rules
# -----------------------------------------------------------------------

class TestClassification:
    """Tests for non-terminal failure and constraint rules"""

    def test_low_activity_not_recommended(self, lu177_route) -> None:
        result = RouteEvaluator().evaluate(lu177_route, OperatingConditions(target_mass_g=1e-12, neutron_flux=1e12))
        assert result.classification is Classification.NOT_RECOMMENDED
        assert any("below medical application threshold" in r for r in result.reasons)
        assert result.activity_eob_bq is not None

    def test_context_relaxes_threshold(self, lu177_route) -> None:
        # about 1.2 MBq: below the medical floor, marginal for research
        conditions = OperatingConditions(target_mass_g=1e-6, neutron_flux=1e12)
        medical = RouteEvaluator().evaluate(lu177_route, conditions)
        research = RouteEvaluator().evaluate(lu177_route, dataclasses.replace(conditions, application_context="research"))
        assert medical.classification is Classification.NOT_RECOMMENDED
        assert research.classification is Classification.FEASIBLE_WITH_CONSTRAINTS
        assert any("research application" in r for r in research.reasons)

    def test_exploratory_is_constrained(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, regulatory_flag="exploratory")
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.classification is Classification.FEASIBLE_WITH_CONSTRAINTS
        assert any("Exploratory" in r for r in result.reasons)

    def test_same_element_nca_not_recommended(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, impurity_risks=("Lu-178 from Lu-177(n,γ)",))
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.classification is Classification.NOT_RECOMMENDED
        assert result.impurity_risk_level is RiskLevel.MEDIUM

    def test_same_element_carrier_is_advisory(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(
            lu177_route, carrier_added_acceptable=True, impurity_risks=("Lu-178 from Lu-177(n,γ)",),
        )
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.feasible
        high = [w for w in result.warnings if w.severity is Severity.HIGH]
        assert any("high-purity chemistry" in w.message for w in high)

    def test_unparseable_descriptor_warns(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(lu177_route, impurity_risks=("trace metals",))
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert any("Unparseable impurity descriptor" in m for m in _messages(result))
        assert result.classification is Classification.FEASIBLE

    def test_quantitative_activity_reported(self, lu177_route, lu177_conditions) -> None:
        route = dataclasses.replace(
            lu177_route, carrier_added_acceptable=True, impurity_risks=("Lu-178 from Lu-177(n,γ)",),
        )
        result = RouteEvaluator().evaluate(route, lu177_conditions)
        assert result.impurity_activities
        assert result.impurity_activities[0].isotope == "Lu-178"
        assert result.impurity_activities[0].fraction_of_product < 1e-3
        assert result.impurity_risk_level is RiskLevel.MEDIUM

    def test_low_reaction_rate_advisory(self, lu177_route) -> None:
        result = RouteEvaluator().evaluate(lu177_route, OperatingConditions(target_mass_g=1e-15, neutron_flux=1e10))
        assert any("Low reaction rate" in m for m in _messages(result))

    def test_high_flux_regime_advisory(self, lu177_route) -> None:
        conditions = OperatingConditions(
            neutron_flux=2e14, irradiation_time_s=8 * 86400.0, target_thickness_cm=0.5,
        )
        result = RouteEvaluator().evaluate(lu177_route, conditions)
        assert any("thick-target regime" in m for m in _messages(result))


# -----------------------------------------------------------------------
# Batch helpers
# -----------------------------------------------------------------------

class TestBatch:
    """Tests for evaluate_all and evaluate_route"""

    def test_evaluate_all_order(self, registry, builtin_data) -> None:
        routes = list(registry)
        results = RouteEvaluator(builtin_data).evaluate_all(routes, OperatingConditions())
        assert [r.route_id for r in results] == [r.route_id for r in routes]
        assert all(isinstance(r.classification, Classification) for r in results)

    def test_evaluate_route_shorthand(self, lu177_route, lu177_conditions) -> None:
        assert evaluate_route(lu177_route, lu177_conditions) == RouteEvaluator().evaluate(lu177_route, lu177_conditions)

    def test_mo100_below_threshold(self, registry, builtin_data) -> None:
        result = RouteEvaluator(builtin_data).evaluate(
            registry.get("mo100-n2n-mo99"), OperatingConditions(neutron_energy_mev=2.5),
        )
        assert result.classification is Classification.NOT_RECOMMENDED
        assert "threshold" in result.reasons[0]
