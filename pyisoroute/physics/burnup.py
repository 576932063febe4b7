#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Product burn-up coupling

Under high flux or long irradiation, product atoms are themselves
activated and removed from the inventory.  The removal acts as an
additional first-order loss, so the product obeys::

    dN/dt = R − (λ + k_burn) · N,     k_burn = φ · σ_burn · f_shield

and reaches ``N_EOB = R (1 − e^(−λ_eff t)) / λ_eff`` with
``λ_eff = λ + k_burn``.  Burn-up is strictly opt-in: without a product
burn-up cross section ``k_burn`` is zero and every result reduces to
the decay-only expressions in :mod:`pyisoroute.physics.kinetics`.

Design Note
-----------
The self-shielding applied to the burn-up rate uses the same slab
formula as production.  The product-atom density that enters it is not
known before the yield is computed, so :func:`estimate_product_density`
supplies an upper-bound heuristic (see its docstring).
"""

from __future__ import annotations

import logging
import math

from pyisoroute.exceptions import InvalidParameterError
from pyisoroute.models.records import Advisory, Severity
from pyisoroute.physics.kinetics import macroscopic_cross_section, self_shielding_factor
from pyisoroute.utils.constants import AVOGADRO, MIN_LAMBDA_FOR_DENSITY
from pyisoroute.utils.validation import require_non_negative, require_positive

logger = logging.getLogger(__name__)


def effective_decay_constant(lam_decay: float, k_burn: float) -> float:
    """Total removal constant ``λ_eff = λ + k_burn`` (1/s)"""
    lam_decay = require_non_negative(lam_decay, "decay_constant")
    k_burn = require_non_negative(k_burn, "k_burn")
    return lam_decay + k_burn


def burn_up_rate_constant(flux: float, sigma_burn_cm2: float) -> float:
    """Unshielded burn-up rate constant ``φ · σ_burn`` (1/s)"""
    flux = require_non_negative(flux, "flux")
    sigma_burn_cm2 = require_non_negative(sigma_burn_cm2, "sigma_burn_cm2")
    return flux * sigma_burn_cm2


def product_burn_up_rate(
    flux: float,
    sigma_burn_cm2: float | None,
    product_density: float | None = None,
    thickness: float | None = None,
) -> float:
    """Self-shielded product burn-up rate constant (1/s)

    Parameters
    ----------
    flux : float
        Flux seen by the target (cm⁻² s⁻¹).
    sigma_burn_cm2 : float | None
        Product burn-up cross section (cm²).  ``None`` or ≤ 0 disables
        burn-up and returns 0.
    product_density : float, optional
        Product atom density (atoms/cm³) used for shielding.
    thickness : float, optional
        Target thickness (cm) used for shielding.

    Returns
    -------
    float
        ``φ · σ_burn · f_shield(N_prod · σ_burn, thickness)``.  Without a
        density or thickness the shielding factor is 1.
    """
    if sigma_burn_cm2 is None or sigma_burn_cm2 <= 0:
        return 0.0
    k_unshielded = burn_up_rate_constant(flux, sigma_burn_cm2)
    if product_density is None or thickness is None:
        return k_unshielded
    sigma_macro = macroscopic_cross_section(product_density, sigma_burn_cm2)
    f_shield = self_shielding_factor(sigma_macro, thickness)
    logger.debug(
        "Product burn-up: k=%.4e 1/s (unshielded %.4e, f_shield=%.4f).",
        k_unshielded * f_shield, k_unshielded, f_shield,
    )
    return k_unshielded * f_shield


def saturation_factor_with_burnup(lam_decay: float, k_burn: float, t: float) -> float:
    """Saturation factor ``1 − e^(−λ_eff t)`` including burn-up losses"""
    lam_eff = effective_decay_constant(lam_decay, k_burn)
    t = require_non_negative(t, "irradiation_time")
    return -math.expm1(-lam_eff * t)


def atoms_at_eob_with_burnup(
    rate: float,
    lam_decay: float,
    k_burn: float,
    t_irr: float,
    advisories: list[Advisory] | None = None,
) -> float:
    """Product atoms at end of bombardment with burn-up losses

    Parameters
    ----------
    rate : float
        Production rate R (1/s).
    lam_decay : float
        Product decay constant (1/s).
    k_burn : float
        Product burn-up rate constant (1/s).
    t_irr : float
        Irradiation time (s).
    advisories : list of Advisory, optional
        When given, a burn-up dominance advisory is appended to it.

    Returns
    -------
    float
        ``R (1 − e^(−λ_eff t)) / λ_eff``.

    Raises
    ------
    InvalidParameterError
        If ``λ_eff`` is not positive.

    Notes
    -----
    When ``k_burn > λ`` burn-up dominates decay and the yield is strongly
    suppressed.  This is reported as a warning, never an exception.
    """
    rate = require_non_negative(rate, "reaction_rate")
    lam_eff = effective_decay_constant(lam_decay, k_burn)
    t_irr = require_non_negative(t_irr, "t_irr")
    if lam_eff <= 0:
        raise InvalidParameterError(
            f"Effective decay constant must be positive, got {lam_eff:.6g}."
        )
    if k_burn > lam_decay:
        message = (
            f"Product burn-up rate ({k_burn:.3e} 1/s) exceeds decay constant "
            f"({lam_decay:.3e} 1/s) - yield strongly suppressed"
        )
        logger.warning(message)
        if advisories is not None:
            advisories.append(Advisory(message, Severity.MODERATE, "burnup"))
    return rate * -math.expm1(-lam_eff * t_irr) / lam_eff


def estimate_product_density(
    rate: float,
    f_sat: float,
    lam: float,
    target_mass_g: float,
    atomic_mass: float,
    target_density: float,
) -> float:
    """Heuristic product-atom density (atoms/cm³) for burn-up shielding

    The product inventory is approximated by the burn-up-free value
    ``R · f_sat / max(λ, 1e-10)`` and spread over the target volume
    ``V = m / ρ_mass`` with ``ρ_mass = M / N_A · ρ_atoms``.  The result is
    capped at the target atom density.

    Because burn-up only lowers the true inventory, the estimate is an
    upper bound on the product density, so the shielding factor derived
    from it is a lower bound and the burn-up rate is never overstated.

    Parameters
    ----------
    rate : float
        Production rate (1/s).
    f_sat : float
        Saturation factor at end of bombardment.
    lam : float
        Product decay constant (1/s).
    target_mass_g : float
        Target mass (g).
    atomic_mass : float
        Target atomic mass (g/mol).
    target_density : float
        Target atom density (atoms/cm³).

    Returns
    -------
    float
    """
    rate = require_non_negative(rate, "reaction_rate")
    f_sat = require_non_negative(f_sat, "saturation_factor")
    lam = require_non_negative(lam, "decay_constant")
    target_mass_g = require_positive(target_mass_g, "target_mass_g")
    atomic_mass = require_positive(atomic_mass, "atomic_mass")
    target_density = require_positive(target_density, "target_density")

    n_product = rate * f_sat / max(lam, MIN_LAMBDA_FOR_DENSITY)
    mass_density = atomic_mass / AVOGADRO * target_density
    volume = target_mass_g / mass_density
    return min(n_product / volume, target_density)
