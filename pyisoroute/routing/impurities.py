#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Impurity contamination assessment for production routes

Two complementary views of the impurity descriptors attached to a
:class:`~pyisoroute.models.records.RouteDescriptor`:

Qualitative
    Catalog and half-life heuristics.  Long-lived species that build up
    over repeated cycles, stable accumulators, and impurities of the
    product's own element (which chemistry cannot remove) are reported
    as :class:`~pyisoroute.models.records.ImpurityTrap` records and
    folded into a Low / Medium / High risk level.

Quantitative
    For descriptors of the form ``"<impurity> from <parent>(<reaction>)"``
    whose channel has a tabulated cross section, the impurity's own
    end-of-bombardment activity is computed with the kinetics primitives
    and expressed as a fraction of the product activity.

Trap Rules
----------
* half-life ratio (impurity / product) > 10: high severity, +3
* half-life ratio > 3: moderate severity, +1
* stable impurity with product half-life < 30 d: high severity, +3
* impurity of the product's element: high severity, +3
* same element and finite impurity half-life > 30 d: fail condition

Risk is High for a score ≥ 6 or any fail condition, Medium for ≥ 3,
otherwise Low.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from pyisoroute.data.impurities import (
    IMPURITY_CROSS_SECTIONS,
    IMPURITY_HALF_LIVES,
    LONG_LIVED_IMPURITIES,
    impurity_reaction_key,
)
from pyisoroute.data.nuclear import NuclearDataProvider
from pyisoroute.models.records import (
    Advisory,
    ImpurityActivity,
    ImpurityTrap,
    RiskLevel,
    RouteDescriptor,
    Severity,
)
from pyisoroute.physics.kinetics import (
    activity,
    atoms_at_eob,
    decay_constant,
    reaction_rate,
    saturation_factor,
)
from pyisoroute.utils.constants import (
    BARN_TO_CM2,
    HIGH_TRAP_RATIO,
    LONG_LIVED_IMPURITY_DAYS,
    MODERATE_TRAP_RATIO,
    SHORT_LIVED_PRODUCT_DAYS,
    TRACE_IMPURITY_FRACTION,
)
from pyisoroute.utils.parsing import Isotope, extract_element_symbol, parse_isotope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrapAssessment:
    """Outcome of the qualitative trap rules"""

    risk_level: RiskLevel
    traps: tuple[ImpurityTrap, ...]
    has_fail_condition: bool
    score: int = 0


@dataclass(frozen=True)
class QuantitativeAssessment:
    """Outcome of the quantitative impurity-activity estimate

    ``has_data`` is False when no descriptor had a tabulated channel, in
    which case ``max_fraction`` carries no information.
    """

    has_data: bool
    max_fraction: float
    activities: tuple[ImpurityActivity, ...]


def _base_name(isotope: Isotope) -> str:
    return f"{isotope.symbol}-{isotope.mass_number}"


def _catalog_half_life(isotope: Isotope) -> float | None:
    """Tabulated half-life (days); isomer suffixes fall back to the ground name"""
    name = str(isotope)
    if name in IMPURITY_HALF_LIVES:
        return IMPURITY_HALF_LIVES[name]
    return IMPURITY_HALF_LIVES.get(_base_name(isotope))


def unparseable_descriptors(route: RouteDescriptor) -> list[str]:
    """Impurity descriptors of *route* that do not name an isotope"""
    return [risk.descriptor for risk in route.impurity_risks if risk.path is None]


# ---------------------------------------------------------------------------
# Qualitative checks
# ---------------------------------------------------------------------------

def check_long_lived_impurity(route: RouteDescriptor) -> bool:
    """True if a cataloged long-lived impurity meets a short-lived product

    Matching is on the impurity isotope parsed from each descriptor,
    ignoring isomer suffixes, so ``"Ho-166m ..."`` matches ``Ho-166``
    while the parent named after ``from`` never does.
    """
    if route.product_half_life_days >= SHORT_LIVED_PRODUCT_DAYS:
        return False
    for risk in route.impurity_risks:
        isotope = risk.isotope
        if isotope is not None and _base_name(isotope) in LONG_LIVED_IMPURITIES:
            logger.debug("Route %s: long-lived impurity %s.", route.route_id, isotope)
            return True
    return False


def check_chemical_inseparability(route: RouteDescriptor) -> bool:
    """True if any impurity shares the product's element"""
    product_element = extract_element_symbol(route.product_isotope)
    return any(risk.element == product_element for risk in route.impurity_risks)


def assess_impurity_traps(route: RouteDescriptor) -> TrapAssessment:
    """Apply the trap rules to every impurity descriptor of *route*

    Parameters
    ----------
    route : RouteDescriptor
        Route whose ``impurity_risks`` are assessed.

    Returns
    -------
    TrapAssessment
        Risk level, detected traps (in descriptor order) and whether a
        fail condition was met.  A route without impurities is Low.

    Examples
    --------
    >>> from pyisoroute.models.records import RouteDescriptor
    >>> route = RouteDescriptor("r", "Zn-67", "Cu-67", "n,p", 2.4,
    ...                         impurity_risks=("Cu-64 from Zn-64(n,p)",))
    >>> [trap.kind for trap in assess_impurity_traps(route).traps]
    ['same_element']
    """
    product_half_life = route.product_half_life_days
    product_element = extract_element_symbol(route.product_isotope)
    traps: list[ImpurityTrap] = []
    score = 0
    fail = False

    for risk in route.impurity_risks:
        isotope = risk.isotope
        if isotope is None:
            continue
        name = _base_name(isotope)
        half_life = _catalog_half_life(isotope)

        if half_life is not None and math.isfinite(half_life):
            ratio = half_life / product_half_life
            if ratio > HIGH_TRAP_RATIO:
                score += 3
                traps.append(ImpurityTrap(
                    "long_lived", Severity.HIGH,
                    f"Impurity {name} has half-life {half_life:.1f} days, significantly exceeding "
                    f"product half-life ({product_half_life:.2f} days, ratio {ratio:.1f}x)",
                ))
            elif ratio > MODERATE_TRAP_RATIO:
                score += 1
                traps.append(ImpurityTrap(
                    "long_lived", Severity.MODERATE,
                    f"Impurity {name} has half-life {half_life:.1f} days, exceeding "
                    f"product half-life ({product_half_life:.2f} days, ratio {ratio:.1f}x)",
                ))
        elif half_life is not None and product_half_life < SHORT_LIVED_PRODUCT_DAYS:
            score += 3
            traps.append(ImpurityTrap(
                "stable_accumulator", Severity.HIGH,
                f"Stable impurity {name} will accumulate indefinitely "
                f"(product half-life {product_half_life:.2f} days)",
            ))

        if isotope.symbol == product_element:
            score += 3
            traps.append(ImpurityTrap(
                "same_element", Severity.HIGH,
                f"Impurity {name} is same element as product ({product_element}) - "
                "chemical separation may be difficult",
            ))
            if half_life is not None and math.isfinite(half_life) and half_life > LONG_LIVED_IMPURITY_DAYS:
                fail = True
                traps.append(ImpurityTrap(
                    "long_lived_inseparable", Severity.HIGH,
                    f"FAIL CONDITION: Impurity {name} has half-life {half_life:.1f} days (>30 days) "
                    "and is same element as product - requires special handling",
                ))

    if score >= 6 or fail:
        level = RiskLevel.HIGH
    elif score >= 3:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW
    logger.debug("Route %s: impurity trap score %d -> %s.", route.route_id, score, level.value)
    return TrapAssessment(level, tuple(traps), fail, score)


# ---------------------------------------------------------------------------
# Quantitative estimate
# ---------------------------------------------------------------------------

def _parent_atoms(
    route: RouteDescriptor,
    parent: Isotope,
    impurity: Isotope,
    n_target: float,
    enrichment: float,
    data: NuclearDataProvider,
    advisories: list[Advisory],
) -> float:
    target = parse_isotope(route.target_isotope)
    if str(parent) == route.target_isotope:
        return n_target
    if parent.symbol == target.symbol:
        abundance = data.get_abundance(parent.symbol, parent.mass_number)
        if abundance is None:
            advisories.append(Advisory(
                f"Impurity {impurity} from {parent} - isotopic abundance unknown, may be underestimated",
                Severity.INFO,
                "impurity",
            ))
            return n_target
        return n_target * abundance / enrichment
    return n_target * TRACE_IMPURITY_FRACTION


def assess_impurity_quantitative(
    route: RouteDescriptor,
    n_target: float,
    flux: float,
    f_shield: float,
    t_irr: float,
    activity_product: float,
    enrichment: float,
    data: NuclearDataProvider,
    advisories: list[Advisory],
) -> QuantitativeAssessment:
    """Estimate end-of-bombardment activity of tabulated impurity channels

    Parameters
    ----------
    route : RouteDescriptor
        Route under evaluation.
    n_target : float
        Enriched target-isotope atoms.
    flux : float
        Flux used for production (cm⁻² s⁻¹).
    f_shield : float
        Production self-shielding factor.
    t_irr : float
        Irradiation time (s).
    activity_product : float
        Product activity at EOB (Bq); nothing is computed if ≤ 0.
    enrichment : float
        Target enrichment, used to scale natural abundances.
    data : NuclearDataProvider
        Source of isotopic abundances.
    advisories : list of Advisory
        Data-gap warnings are appended here.

    Returns
    -------
    QuantitativeAssessment

    Notes
    -----
    Parent atoms are the target atoms when the parent is the target
    isotope, ``N · abundance / enrichment`` for another isotope of the
    target element, and a 0.1 % trace for an unrelated element.
    Channels without a tabulated cross section, and stable or
    uncataloged impurities, are skipped.
    """
    if not route.impurity_risks or activity_product <= 0:
        return QuantitativeAssessment(False, 0.0, ())

    results: list[ImpurityActivity] = []
    for risk in route.impurity_risks:
        path = risk.path
        if path is None or path.parent is None or path.reaction is None:
            continue
        key = impurity_reaction_key(str(path.parent), path.reaction, str(path.isotope))
        sigma_barns = IMPURITY_CROSS_SECTIONS.get(key)
        if sigma_barns is None:
            logger.debug("Route %s: no tabulated cross section for %s.", route.route_id, key)
            continue
        half_life = IMPURITY_HALF_LIVES.get(str(path.isotope))
        if half_life is None or not math.isfinite(half_life):
            logger.debug("Route %s: %s is stable or uncataloged; skipped.", route.route_id, path.isotope)
            continue

        n_parent = _parent_atoms(route, path.parent, path.isotope, n_target, enrichment, data, advisories)
        rate = reaction_rate(n_parent, sigma_barns * BARN_TO_CM2, flux, f_shield)
        lam = decay_constant(half_life)
        a_imp = activity(lam, atoms_at_eob(rate, saturation_factor(lam, t_irr), lam))
        results.append(ImpurityActivity(
            isotope=str(path.isotope),
            reaction_key=key,
            cross_section_barns=sigma_barns,
            activity_bq=a_imp,
            fraction_of_product=a_imp / activity_product,
        ))

    max_fraction = max((r.fraction_of_product for r in results), default=0.0)
    return QuantitativeAssessment(bool(results), max_fraction, tuple(results))
