#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Activation and decay kinetics primitives

Pure scalar functions that turn a reaction description and an
irradiation schedule into atom counts and activities.  Each function
takes only explicit numeric arguments and raises
:class:`~pyisoroute.exceptions.InvalidParameterError` when an input
violates its physical domain.

Production Model
----------------
For a target of N atoms with cross section σ in flux φ::

    R      = N · σ · φ · f_shield                 (reactions/s)
    f_sat  = 1 − exp(−λ t_irr)
    N_EOB  = R · f_sat / λ
    A_EOB  = λ · N_EOB                            (Bq)

Geometry
--------
Flux from a point isotropic source follows the solid-angle model
``φ = S · Ω / A`` with ``Ω = 2π(1 − d/√(d² + r²))`` for a disk target of
radius r at distance d.

References
----------
.. [1] W. Bateman, "Solution of a system of differential equations
   occurring in the theory of radioactive transformations",
   Proc. Cambridge Phil. Soc. 15, 423 (1910).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np

from pyisoroute.exceptions import InvalidParameterError
from pyisoroute.models.records import ReactionType, ThresholdMode
from pyisoroute.utils.constants import (
    ENERGY_SCALING_EXPONENT_DEFAULT,
    ENERGY_SCALING_EXPONENT_N2N,
    LN2,
    REFERENCE_FAST_ENERGY_MEV,
    SECONDS_PER_DAY,
    SHIELDING_SINGULARITY_EPS,
)
from pyisoroute.utils.validation import (
    require_fraction,
    require_non_negative,
    require_positive,
)

logger = logging.getLogger(__name__)

__all__ = [
    "decay_constant",
    "saturation_factor",
    "reaction_rate",
    "atoms_at_eob",
    "activity",
    "solid_angle",
    "geometric_efficiency",
    "flux_from_solid_angle",
    "flux_finite_source",
    "macroscopic_cross_section",
    "self_shielding_factor",
    "threshold_activation",
    "uncertainty_rss",
    "specific_activity",
    "decay_correct",
    "temperature_rise",
    "thermal_derating",
    "damage_time_limit",
    "damage_derating",
    "activity_time_series",
]


# ---------------------------------------------------------------------------
# Decay and production
# ---------------------------------------------------------------------------

def decay_constant(half_life_days: float) -> float:
    """Decay constant λ (1/s) of a nuclide with the given half-life

    Parameters
    ----------
    half_life_days : float
        Half-life in days, > 0.

    Returns
    -------
    float
        ``ln(2) / (half_life_days · 86400)``.

    Raises
    ------
    InvalidParameterError
        If the half-life is not positive.

    Examples
    --------
    >>> f"{decay_constant(6.647):.4e}"
    '1.2069e-06'
    """
    half_life_days = require_positive(half_life_days, "half_life_days")
    return LN2 / (half_life_days * SECONDS_PER_DAY)


def saturation_factor(lam: float, t: float) -> float:
    """Fraction of the saturation population reached after *t* seconds

    Returns ``1 − exp(−λ t)``, always in [0, 1].
    """
    lam = require_non_negative(lam, "decay_constant")
    t = require_non_negative(t, "irradiation_time")
    return -math.expm1(-lam * t)


def reaction_rate(n_atoms: float, sigma_cm2: float, flux: float, f_shield: float = 1.0) -> float:
    """Production rate ``R = N · σ · φ · f_shield`` (reactions/s)

    Parameters
    ----------
    n_atoms : float
        Number of target atoms.
    sigma_cm2 : float
        Microscopic cross section (cm²).
    flux : float
        Particle flux (cm⁻² s⁻¹).
    f_shield : float, optional
        Self-shielding factor in [0, 1].
    """
    n_atoms = require_non_negative(n_atoms, "n_atoms")
    sigma_cm2 = require_non_negative(sigma_cm2, "sigma_cm2")
    flux = require_non_negative(flux, "flux")
    f_shield = require_fraction(f_shield, "f_shield")
    return n_atoms * sigma_cm2 * flux * f_shield


def atoms_at_eob(rate: float, f_sat: float, lam: float) -> float:
    """Product atoms at end of bombardment, ``R · f_sat / λ``

    Raises
    ------
    InvalidParameterError
        If *rate* is negative, *f_sat* is outside [0, 1] or *lam* ≤ 0.
    """
    rate = require_non_negative(rate, "reaction_rate")
    f_sat = require_fraction(f_sat, "saturation_factor")
    lam = require_positive(lam, "decay_constant")
    return rate * f_sat / lam


def activity(lam: float, n_atoms: float) -> float:
    """Activity ``A = λ · N`` (Bq)"""
    lam = require_non_negative(lam, "decay_constant")
    n_atoms = require_non_negative(n_atoms, "n_atoms")
    return lam * n_atoms


def specific_activity(activity_bq: float, mass_g: float) -> float:
    """Activity per gram of product-bearing material (Bq/g)"""
    activity_bq = require_non_negative(activity_bq, "activity")
    mass_g = require_positive(mass_g, "mass_g")
    return activity_bq / mass_g


def decay_correct(activity_bq: float, lam: float, elapsed_s: float) -> float:
    """Activity remaining after *elapsed_s* seconds of decay"""
    activity_bq = require_non_negative(activity_bq, "activity")
    lam = require_non_negative(lam, "decay_constant")
    elapsed_s = require_non_negative(elapsed_s, "elapsed_s")
    return activity_bq * math.exp(-lam * elapsed_s)


# ---------------------------------------------------------------------------
# Geometry and flux
# ---------------------------------------------------------------------------

def solid_angle(distance: float, radius: float) -> float:
    """Solid angle (sr) subtended by a disk of *radius* at *distance*

    The degenerate case ``distance = radius = 0`` returns 0.

    Examples
    --------
    >>> round(solid_angle(5.0, 2.0), 4)
    0.4494
    """
    distance = require_non_negative(distance, "distance")
    radius = require_non_negative(radius, "radius")
    if distance == 0.0 and radius == 0.0:
        return 0.0
    return 2.0 * math.pi * (1.0 - distance / math.hypot(distance, radius))


def geometric_efficiency(omega: float) -> float:
    """Fraction of isotropic emission intercepted, ``Ω / 4π``"""
    omega = require_non_negative(omega, "solid_angle")
    return omega / (4.0 * math.pi)


def flux_from_solid_angle(
    source_rate: float,
    omega: float,
    area_cm2: float,
    distance: float | None = None,
    radius: float | None = None,
) -> float:
    """Flux on a target intercepting solid angle Ω of a point source

    Parameters
    ----------
    source_rate : float
        Source emission rate S (particles/s).
    omega : float
        Solid angle intercepted by the target (sr).
    area_cm2 : float
        Target area (cm²), > 0.
    distance, radius : float, optional
        Target distance and radius (cm).  When both are given and the
        target sits closer than three radii, a warning is logged: the
        point-source approximation may then overestimate flux by 10-50 %.

    Returns
    -------
    float
        ``S · Ω / A`` (cm⁻² s⁻¹).
    """
    source_rate = require_non_negative(source_rate, "source_rate")
    omega = require_non_negative(omega, "solid_angle")
    area_cm2 = require_positive(area_cm2, "area_cm2")
    if (
        distance is not None
        and radius is not None
        and distance >= 0
        and radius > 0
        and distance < 3.0 * radius
    ):
        logger.warning(
            "Target distance %.3g cm is below 3x target radius %.3g cm; "
            "point-source flux may be overestimated by 10-50%%.",
            distance, radius,
        )
    return source_rate * omega / area_cm2


def flux_finite_source(
    source_rate: float,
    distance: float,
    target_radius: float,
    source_radius: float,
) -> float:
    """Flux on a disk target from a finite disk source (approximation)

    Sources smaller than a tenth of the distance are treated as points.
    Larger sources use the effective distance ``√(d² + r_s²/2)``.
    Returns 0 for a non-positive distance.
    """
    if distance <= 0:
        return 0.0
    target_radius = require_positive(target_radius, "target_radius")
    source_radius = require_non_negative(source_radius, "source_radius")
    area = math.pi * target_radius ** 2
    if source_radius <= 0.1 * distance:
        omega = solid_angle(distance, target_radius)
    else:
        d_eff = math.sqrt(distance ** 2 + 0.5 * source_radius ** 2)
        omega = solid_angle(d_eff, target_radius)
    return require_non_negative(source_rate, "source_rate") * omega / area


# ---------------------------------------------------------------------------
# Cross sections and shielding
# ---------------------------------------------------------------------------

def macroscopic_cross_section(density: float, sigma_cm2: float) -> float:
    """Macroscopic cross section ``Σ = N · σ`` (1/cm)"""
    density = require_non_negative(density, "atom_density")
    sigma_cm2 = require_non_negative(sigma_cm2, "sigma_cm2")
    return density * sigma_cm2


def self_shielding_factor(sigma_macro: float, thickness: float) -> float:
    """Slab self-shielding factor ``(1 − e^(−Σt)) / (Σt)``

    The removable singularity at ``Σt → 0`` evaluates to 1.

    Examples
    --------
    >>> self_shielding_factor(0.0, 0.2)
    1.0
    """
    sigma_macro = require_non_negative(sigma_macro, "macroscopic_cross_section")
    thickness = require_non_negative(thickness, "thickness")
    x = sigma_macro * thickness
    if x < SHIELDING_SINGULARITY_EPS:
        return 1.0
    return -math.expm1(-x) / x


def threshold_activation(
    energy_mev: float,
    threshold_mev: float,
    sigma_ref: float,
    mode: ThresholdMode | str = ThresholdMode.STEP,
    reaction: ReactionType | str | None = None,
    reference_energy_mev: float = REFERENCE_FAST_ENERGY_MEV,
) -> float:
    """Effective cross section of a threshold reaction at *energy_mev*

    Parameters
    ----------
    energy_mev : float
        Incident neutron energy (MeV).
    threshold_mev : float
        Reaction threshold (MeV).
    sigma_ref : float
        Cross section at the reference energy (any unit; returned in
        the same unit).
    mode : ThresholdMode or str, optional
        ``"step"`` (default): σ_ref at or above threshold, 0 below.
        ``"energy_scaled"``: ``σ_ref·((E − E_thr)/(E_ref − E_thr))^n``
        with n = 2.0 for (n,2n) and 1.5 otherwise, equal to σ_ref at and
        above the reference energy.
    reaction : ReactionType or str, optional
        Reaction kind; selects the energy-scaling exponent.
    reference_energy_mev : float, optional
        Energy at which *sigma_ref* is quoted (14.1 MeV).

    Returns
    -------
    float
    """
    energy_mev = require_non_negative(energy_mev, "energy_mev")
    threshold_mev = require_non_negative(threshold_mev, "threshold_mev")
    sigma_ref = require_non_negative(sigma_ref, "sigma_ref")
    mode = ThresholdMode(mode)

    if energy_mev < threshold_mev:
        return 0.0
    if mode is ThresholdMode.STEP:
        return sigma_ref
    if energy_mev >= reference_energy_mev or reference_energy_mev <= threshold_mev:
        return sigma_ref

    kind = ReactionType.parse(reaction) if reaction is not None else None
    exponent = ENERGY_SCALING_EXPONENT_N2N if kind is ReactionType.N_2N else ENERGY_SCALING_EXPONENT_DEFAULT
    scale = (energy_mev - threshold_mev) / (reference_energy_mev - threshold_mev)
    return sigma_ref * scale ** exponent


def uncertainty_rss(values: Iterable[float]) -> float:
    """Root-sum-square combination of independent uncertainties

    Raises
    ------
    InvalidParameterError
        If any entry is negative.

    Examples
    --------
    >>> uncertainty_rss([3.0, 4.0])
    5.0
    """
    total = 0.0
    for i, value in enumerate(values):
        value = require_non_negative(value, f"uncertainty[{i}]")
        total += value * value
    return math.sqrt(total)


# ---------------------------------------------------------------------------
# Engineering derating
# ---------------------------------------------------------------------------

def temperature_rise(power_w: float, mass_flow_kg_s: float, heat_capacity: float) -> float:
    """Coolant temperature rise ``ΔT = P / (ṁ · c_p)`` (K)"""
    power_w = require_non_negative(power_w, "power_w")
    mass_flow_kg_s = require_positive(mass_flow_kg_s, "mass_flow_kg_s")
    heat_capacity = require_positive(heat_capacity, "heat_capacity")
    return power_w / (mass_flow_kg_s * heat_capacity)


def thermal_derating(delta_t: float, delta_t_max: float) -> float:
    """Power derating needed to keep ΔT within ΔT_max

    Returns 1 when within the limit, otherwise ``ΔT_max / ΔT``.
    """
    delta_t = require_non_negative(delta_t, "delta_t")
    delta_t_max = require_positive(delta_t_max, "delta_t_max")
    if delta_t <= delta_t_max:
        return 1.0
    return delta_t_max / delta_t


def damage_time_limit(dpa_limit: float, dpa_rate: float) -> float:
    """Irradiation time (s) until the displacement-damage limit is reached

    A zero damage rate never reaches the limit and returns ``inf``.
    """
    dpa_limit = require_positive(dpa_limit, "dpa_limit")
    dpa_rate = require_non_negative(dpa_rate, "dpa_rate")
    if dpa_rate == 0.0:
        return math.inf
    return dpa_limit / dpa_rate


def damage_derating(t_irr: float, t_limit: float) -> float:
    """Duty derating that keeps *t_irr* within the damage limit"""
    t_irr = require_non_negative(t_irr, "t_irr")
    t_limit = require_positive(t_limit, "t_limit")
    if t_irr <= t_limit:
        return 1.0
    return t_limit / t_irr


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------

def activity_time_series(
    rate: float,
    lam: float,
    t_irr: float,
    times: np.ndarray,
    k_burn: float = 0.0,
) -> tuple[np.ndarray, np.ndarray]:
    """Atom count and activity of a product over an irradiate-then-decay cycle

    During irradiation (``t ≤ t_irr``) the population grows as
    ``R (1 − e^(−λ_eff t)) / λ_eff`` with ``λ_eff = λ + k_burn``; after
    end of bombardment it decays with λ alone.

    Parameters
    ----------
    rate : float
        Production rate R (1/s).
    lam : float
        Product decay constant (1/s), > 0.
    t_irr : float
        Irradiation time (s).
    times : array_like
        Non-negative sample times (s) measured from start of irradiation.
    k_burn : float, optional
        Product burn-up rate constant (1/s).

    Returns
    -------
    tuple[numpy.ndarray, numpy.ndarray]
        ``(atoms, activity_bq)`` sampled at *times*.
    """
    rate = require_non_negative(rate, "reaction_rate")
    lam = require_positive(lam, "decay_constant")
    t_irr = require_non_negative(t_irr, "t_irr")
    k_burn = require_non_negative(k_burn, "k_burn")
    t = np.asarray(times, dtype="f8")
    if t.size and (not np.all(np.isfinite(t)) or np.any(t < 0)):
        raise InvalidParameterError("Sample times must be finite and non-negative.")

    lam_eff = lam + k_burn
    n_eob = rate * -math.expm1(-lam_eff * t_irr) / lam_eff
    growing = rate * -np.expm1(-lam_eff * np.minimum(t, t_irr)) / lam_eff
    decaying = n_eob * np.exp(-lam * np.maximum(t - t_irr, 0.0))
    atoms = np.where(t <= t_irr, growing, decaying)
    return atoms, lam * atoms
