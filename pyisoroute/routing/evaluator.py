#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Route feasibility evaluator

Classifies a :class:`~pyisoroute.models.records.RouteDescriptor` under
given :class:`~pyisoroute.models.records.OperatingConditions` as
*Feasible*, *Feasible with constraints* or *Not recommended*, and fills
in the physics figures behind the verdict.

Pipeline
--------
1. Threshold gate (terminal).
2. Chemical-separability gate (terminal).
3. Cross-section and flux selection; a zero effective cross section is
   terminal.
4. Target-atom count from the data provider's atomic mass.
5. Reaction rate and end-of-bombardment yield, with product burn-up
   when a burn-up cross section is known.
6. Activity and specific activity.
7. Impurity assessment (qualitative traps + quantitative activities).
8. Regulatory flag.
9. Activity viability for the application context.
10. Specific activity for no-carrier-added routes.
11. Low reaction rate.
12. Delivered activity after decay and chemistry yield.
13. Final classification.

Design Note
-----------
Route infeasibility is a result, never an exception.  Steps 1-3 return a
bare verdict immediately; later failures mark the verdict and let the
remaining physics values be computed, so callers can still inspect them.
Data gaps (missing cross section, unknown abundance, unparseable
impurity text) become :class:`~pyisoroute.models.records.Advisory`
records and a conservative default.  Only malformed inputs raise.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pyisoroute.data.nuclear import NuclearDataProvider, NullNuclearData
from pyisoroute.models.records import (
    Advisory,
    Classification,
    EvaluationResult,
    OperatingConditions,
    Pathway,
    ReactionType,
    RegulatoryFlag,
    RiskLevel,
    RouteDescriptor,
    Severity,
)
from pyisoroute.physics.advanced import delivered_activity_with_chemistry_yield
from pyisoroute.physics.burnup import (
    atoms_at_eob_with_burnup,
    estimate_product_density,
    product_burn_up_rate,
    saturation_factor_with_burnup,
)
from pyisoroute.physics.kinetics import (
    activity,
    atoms_at_eob,
    decay_constant,
    decay_correct,
    reaction_rate,
    saturation_factor,
    specific_activity,
    threshold_activation,
)
from pyisoroute.routing.impurities import (
    assess_impurity_quantitative,
    assess_impurity_traps,
    check_chemical_inseparability,
    check_long_lived_impurity,
    unparseable_descriptors,
)
from pyisoroute.utils.constants import (
    ACTIVITY_THRESHOLDS_GBQ,
    ATOMIC_MASS_UNIT_G,
    AVOGADRO,
    BARN_TO_CM2,
    BQ_PER_GBQ,
    BQ_PER_TBQ,
    DEFAULT_ATOMIC_MASS,
    DEFAULT_CHARGED_PARTICLE_FLUX,
    DEFAULT_CHEMISTRY_YIELD,
    DEFAULT_FAST_FLUX,
    DEFAULT_TARGET_DENSITY,
    DEFAULT_TARGET_THICKNESS_CM,
    DEFAULT_THERMAL_FLUX,
    HIGH_FLUX_REGIME,
    IMPURITY_FRACTION_HIGH,
    IMPURITY_FRACTION_MEDIUM,
    LONG_IRRADIATION_S,
    LOW_REACTION_RATE,
    MIN_PRODUCT_MASS_G,
    NCA_MIN_SPECIFIC_ACTIVITY_BQ_PER_G,
    PLACEHOLDER_CAPTURE_SIGMA_CM2,
    PLACEHOLDER_FAST_SIGMA_CM2,
    SECONDS_PER_HOUR,
)
from pyisoroute.utils.parsing import extract_element_symbol

logger = logging.getLogger(__name__)

PATHWAY_NOT_FOUND = "Isotope pathway not found in canonical registry - using route metadata only"
MISSING_SIGMA = "Cross-section not specified - using conservative placeholder"


@dataclass(frozen=True)
class _ResolvedRoute:
    """Route metadata after canonical-pathway overrides"""

    threshold_mev: float | None
    sigma_cm2: float | None
    chemical_separable: bool
    carrier_added_acceptable: bool
    pathway_yield: float | None
    resonance_dominated: bool
    product_burn_sigma_cm2: float | None


def _override(pathway_value, route_value):
    return route_value if pathway_value is None else pathway_value


def _resolve(route: RouteDescriptor, pathway: Pathway | None) -> _ResolvedRoute:
    route_sigma = (
        route.nominal_sigma_barns * BARN_TO_CM2 if route.nominal_sigma_barns is not None else None
    )
    if pathway is None:
        return _ResolvedRoute(
            threshold_mev=route.threshold_mev,
            sigma_cm2=route_sigma,
            chemical_separable=route.chemical_separable,
            carrier_added_acceptable=route.carrier_added_acceptable,
            pathway_yield=None,
            resonance_dominated=route.resonance_dominated,
            product_burn_sigma_cm2=route.product_burn_sigma_cm2,
        )
    return _ResolvedRoute(
        threshold_mev=_override(pathway.threshold_mev, route.threshold_mev),
        sigma_cm2=_override(pathway.sigma_cm2, route_sigma),
        chemical_separable=_override(pathway.chemical_separable, route.chemical_separable),
        carrier_added_acceptable=_override(pathway.carrier_added_acceptable, route.carrier_added_acceptable),
        pathway_yield=pathway.default_chemistry_yield,
        resonance_dominated=_override(pathway.resonance_dominated, route.resonance_dominated),
        product_burn_sigma_cm2=_override(pathway.product_burn_sigma_cm2, route.product_burn_sigma_cm2),
    )


class RouteEvaluator:
    """Deterministic feasibility engine for production routes

    Parameters
    ----------
    data : NuclearDataProvider, optional
        Source of atomic masses, isotopic abundances and canonical
        pathways.  Defaults to :class:`NullNuclearData`, in which case
        every atomic mass falls back to 100 g/mol and no pathway
        overrides apply.

    Examples
    --------
    >>> from pyisoroute.models.records import RouteDescriptor, OperatingConditions
    >>> route = RouteDescriptor("fast", "Zn-67", "Cu-67", "n,p", 2.58,
    ...                         nominal_sigma_barns=0.02, threshold_mev=5.0)
    >>> RouteEvaluator().evaluate(route, OperatingConditions(neutron_energy_mev=3.0)).classification.value
    'Not recommended'
    """

    def __init__(self, data: NuclearDataProvider | None = None) -> None:
        self.data = data if data is not None else NullNuclearData()

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _atomic_mass(self, isotope: str) -> float:
        symbol = extract_element_symbol(isotope)
        mass = self.data.get_atomic_mass(symbol) if symbol else None
        return mass if mass is not None else DEFAULT_ATOMIC_MASS

    @staticmethod
    def _terminal(route: RouteDescriptor, reason: str, warnings: list[Advisory]) -> EvaluationResult:
        logger.debug("Route %s rejected: %s", route.route_id, reason)
        return EvaluationResult(
            route_id=route.route_id,
            feasible=False,
            classification=Classification.NOT_RECOMMENDED,
            reasons=(reason,),
            warnings=tuple(warnings),
        )

    @staticmethod
    def _advise(warnings: list[Advisory], message: str, severity: Severity = Severity.INFO) -> None:
        logger.debug("Advisory (%s): %s", severity.value, message)
        warnings.append(Advisory(message, severity, "evaluator"))

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def evaluate(
        self,
        route: RouteDescriptor,
        conditions: OperatingConditions | None = None,
    ) -> EvaluationResult:
        """Evaluate *route* under *conditions*

        Parameters
        ----------
        route : RouteDescriptor
            Route to classify.
        conditions : OperatingConditions, optional
            Irradiation parameters; defaults to ``OperatingConditions()``.

        Returns
        -------
        EvaluationResult
            Always returned for well-formed input; infeasible routes are
            classified "Not recommended" with a reason.
        """
        conditions = conditions if conditions is not None else OperatingConditions()
        reasons: list[str] = []
        warnings: list[Advisory] = []
        feasible = True

        pathway = self.data.lookup_pathway(route)
        if pathway is None and self.data.provides_pathways:
            self._advise(warnings, PATHWAY_NOT_FOUND)
        params = _resolve(route, pathway)
        energy = conditions.neutron_energy_mev

        # 1. threshold gate
        threshold = params.threshold_mev
        if threshold is not None and threshold > 0 and energy < threshold:
            return self._terminal(
                route,
                f"Neutron energy ({energy:.2f} MeV) below reaction threshold ({threshold:g} MeV)",
                warnings,
            )

        # 2. separability gate
        if not params.chemical_separable and not params.carrier_added_acceptable:
            return self._terminal(
                route,
                "Product is chemically inseparable and carrier-added production is not acceptable",
                warnings,
            )

        # 3. cross section and flux
        reaction = route.reaction
        sigma = params.sigma_cm2
        if reaction.is_capture_like:
            if sigma is None:
                self._advise(warnings, MISSING_SIGMA, Severity.MODERATE)
                sigma = PLACEHOLDER_CAPTURE_SIGMA_CM2
            default_flux = DEFAULT_THERMAL_FLUX
        else:
            if sigma is None:
                self._advise(warnings, MISSING_SIGMA, Severity.MODERATE)
                sigma = PLACEHOLDER_FAST_SIGMA_CM2
            if reaction is ReactionType.CHARGED_PARTICLE:
                default_flux = DEFAULT_CHARGED_PARTICLE_FLUX
            else:
                default_flux = DEFAULT_FAST_FLUX
                sigma = threshold_activation(
                    energy, threshold or 0.0, sigma,
                    mode=conditions.threshold_mode, reaction=reaction,
                )
        if sigma == 0.0:
            if params.sigma_cm2 == 0.0:
                reason = f"Nominal cross-section is zero for {reaction.value} route"
            else:
                reason = f"Effective cross-section is zero (threshold not met at {energy:.2f} MeV)"
            return self._terminal(route, reason, warnings)
        flux = conditions.neutron_flux if conditions.neutron_flux is not None else default_flux

        if params.resonance_dominated and not conditions.pure_thermal_spectrum:
            self._advise(
                warnings,
                "Resonance-dominated capture - effective resonance integral approximation may "
                "misestimate yield by 2-5x for non-1/E spectra",
                Severity.MODERATE,
            )

        # 4. target atoms
        target_mass_g = conditions.target_mass_g
        atomic_mass = self._atomic_mass(route.target_isotope)
        n_target = target_mass_g * AVOGADRO * conditions.enrichment / atomic_mass

        # 5. reaction rate and yield
        f_shield = conditions.self_shielding
        t_irr = conditions.irradiation_time_s
        lam = decay_constant(route.product_half_life_days)
        rate = reaction_rate(n_target, sigma, flux, f_shield)
        thickness = conditions.target_thickness_cm or DEFAULT_TARGET_THICKNESS_CM

        burn_sigma = params.product_burn_sigma_cm2
        if burn_sigma is not None and burn_sigma > 0:
            density = conditions.target_density_atoms_cm3 or DEFAULT_TARGET_DENSITY
            product_density = estimate_product_density(
                rate, saturation_factor(lam, t_irr), lam, target_mass_g, atomic_mass, density,
            )
            k_burn = product_burn_up_rate(flux, burn_sigma, product_density, thickness)
            saturation = saturation_factor_with_burnup(lam, k_burn, t_irr)
            n_eob = atoms_at_eob_with_burnup(rate, lam, k_burn, t_irr, advisories=warnings)
        else:
            k_burn = 0.0
            saturation = saturation_factor(lam, t_irr)
            n_eob = atoms_at_eob(rate, saturation, lam)

        # 6. activity and specific activity
        a_eob = activity(lam, n_eob)
        total_mass = n_eob * self._atomic_mass(route.product_isotope) * ATOMIC_MASS_UNIT_G
        if params.carrier_added_acceptable:
            total_mass += route.carrier_mass_g if route.carrier_mass_g is not None else target_mass_g
        sa = specific_activity(a_eob, max(total_mass, MIN_PRODUCT_MASS_G))

        # 7. impurities
        for descriptor in unparseable_descriptors(route):
            self._advise(warnings, f"Unparseable impurity descriptor {descriptor!r} - not assessed")
        quantitative = assess_impurity_quantitative(
            route, n_target, flux, f_shield, t_irr, a_eob, conditions.enrichment, self.data, warnings,
        )
        if check_long_lived_impurity(route):
            reasons.append("Long-lived impurity present - may accumulate over multiple production cycles")
        if check_chemical_inseparability(route):
            if not params.carrier_added_acceptable:
                feasible = False
                reasons.append("Chemically inseparable impurity and carrier-added production not acceptable")
            else:
                self._advise(
                    warnings,
                    "Chemically inseparable impurity present - high-purity chemistry required",
                    Severity.HIGH,
                )

        traps = assess_impurity_traps(route)
        risk_level = traps.risk_level
        if quantitative.has_data:
            fraction = quantitative.max_fraction
            if fraction > IMPURITY_FRACTION_HIGH:
                risk_level = RiskLevel.HIGH
                self._advise(
                    warnings,
                    f"QUANTITATIVE: Maximum impurity fraction {fraction * 100:.2f}% exceeds 1% threshold",
                    Severity.HIGH,
                )
            elif fraction > IMPURITY_FRACTION_MEDIUM:
                if risk_level is RiskLevel.LOW:
                    risk_level = RiskLevel.MEDIUM
                self._advise(
                    warnings,
                    f"QUANTITATIVE: Maximum impurity fraction {fraction * 100:.3f}% is in 0.1-1% range",
                    Severity.MODERATE,
                )
        for trap in traps.traps:
            label = "HIGH RISK" if trap.severity is Severity.HIGH else "MODERATE RISK"
            self._advise(warnings, f"{label}: {trap.message}", trap.severity)
        if traps.has_fail_condition:
            reasons.append("Long-lived inseparable impurity (>30 days half-life) - requires special handling")

        # 8. regulatory flag
        if route.regulatory_flag is RegulatoryFlag.EXPLORATORY:
            reasons.append("Exploratory route - requires special handling and regulatory review")
        elif route.regulatory_flag is RegulatoryFlag.CONSTRAINED:
            reasons.append("Route has operational constraints")

        # 9. activity viability
        context = conditions.application_context.value
        viable, marginal, not_viable = ACTIVITY_THRESHOLDS_GBQ[context]
        a_gbq = a_eob / BQ_PER_GBQ
        if a_gbq < not_viable:
            feasible = False
            reasons.append(
                f"Activity yield at EOB ({a_gbq:.4f} GBq) below {context} application threshold ({not_viable:g} GBq)"
            )
        elif a_gbq < marginal:
            reasons.append(
                f"Activity yield at EOB ({a_gbq:.3f} GBq) is marginal for {context} application "
                f"(threshold: {marginal:g} GBq)"
            )
        elif a_gbq < viable:
            reasons.append(
                f"Activity yield at EOB ({a_gbq:.3f} GBq) may be insufficient for {context} application "
                f"(recommended: >={viable:g} GBq)"
            )

        # 10. specific activity
        if not params.carrier_added_acceptable and sa < NCA_MIN_SPECIFIC_ACTIVITY_BQ_PER_G:
            reasons.append(
                f"Specific activity may be insufficient for n.c.a. requirements ({sa / BQ_PER_TBQ:.2f} TBq/g)"
            )

        # 11. reaction rate
        if rate < LOW_REACTION_RATE:
            self._advise(
                warnings,
                f"Low reaction rate ({rate:.2e} reactions/s) - production may be inefficient",
                Severity.MODERATE,
            )

        # 12. delivered activity
        elapsed = (conditions.chemistry_delay_hours + conditions.transport_time_hours) * SECONDS_PER_HOUR
        chemistry_yield = route.chemistry_yield
        if chemistry_yield is None:
            chemistry_yield = params.pathway_yield
        if chemistry_yield is None:
            if params.chemical_separable:
                chemistry_yield = DEFAULT_CHEMISTRY_YIELD
                self._advise(
                    warnings,
                    f"No chemistry yield specified - applying conservative default of {DEFAULT_CHEMISTRY_YIELD:.0%}",
                )
            else:
                chemistry_yield = 1.0
        delivered = delivered_activity_with_chemistry_yield(decay_correct(a_eob, lam, elapsed), chemistry_yield)

        if flux > HIGH_FLUX_REGIME and t_irr > LONG_IRRADIATION_S and thickness > DEFAULT_TARGET_THICKNESS_CM:
            self._advise(
                warnings,
                f"High-flux, long-irradiation, thick-target regime (flux {flux:.2e} cm^-2 s^-1, "
                f"{t_irr / 86400.0:.1f} days, {thickness:.2f} cm) - yields may be overestimated",
                Severity.MODERATE,
            )

        # 13. final classification
        if not feasible:
            classification = Classification.NOT_RECOMMENDED
        elif reasons:
            classification = Classification.FEASIBLE_WITH_CONSTRAINTS
        else:
            classification = Classification.FEASIBLE
        logger.debug(
            "Route %s: %s (A_EOB=%.4e Bq, R=%.4e 1/s).",
            route.route_id, classification.value, a_eob, rate,
        )

        return EvaluationResult(
            route_id=route.route_id,
            feasible=feasible,
            classification=classification,
            reasons=tuple(reasons),
            warnings=tuple(warnings),
            impurity_risk_level=risk_level,
            reaction_rate=rate,
            activity_eob_bq=a_eob,
            specific_activity_bq_per_g=sa,
            delivered_activity_bq=delivered,
            product_atoms_eob=n_eob,
            saturation=saturation,
            cross_section_cm2=sigma,
            flux=flux,
            burn_up_rate=k_burn,
            chemistry_yield=chemistry_yield,
            impurity_traps=traps.traps,
            impurity_activities=quantitative.activities,
        )

    def evaluate_all(
        self,
        routes: Iterable[RouteDescriptor],
        conditions: OperatingConditions | None = None,
    ) -> list[EvaluationResult]:
        """Evaluate every route under the same conditions, in input order"""
        return [self.evaluate(route, conditions) for route in routes]


def evaluate_route(
    route: RouteDescriptor,
    conditions: OperatingConditions | None = None,
    data: NuclearDataProvider | None = None,
) -> EvaluationResult:
    """Evaluate one route; shorthand for ``RouteEvaluator(data).evaluate(...)``"""
    return RouteEvaluator(data).evaluate(route, conditions)
