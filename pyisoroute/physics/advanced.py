#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Extended production models built on the kinetics primitives

These models relax one simplifying assumption of the basic
``R · f_sat / λ`` yield at a time:

* **Time-dependent flux**: the production rate follows a flux profile
  (constant, pulsed duty cycle, linear ramp, step change) and the end of
  bombardment inventory is the convolution
  ``N = ∫₀ᵗ R(τ) e^(−λ(t−τ)) dτ``.
* **Spatial flux**: the target disk sees a radial flux profile
  (gaussian, inverse-square, uniform) and production is summed over
  concentric rings.
* **Epithermal capture**: resonance-integral contribution added to the
  thermal reaction rate.
* **Chemistry yield**: separation losses between EOB and delivery.
* **Monte Carlo**: parametric uncertainty propagation through any
  deterministic kernel.

Design Note
-----------
Everything here is deterministic apart from :func:`monte_carlo_uncertainty`,
which draws from an explicit :class:`numpy.random.Generator`; passing a
seeded generator (or an integer seed) makes it reproducible.  No
transport physics is attempted.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Mapping

import numpy as np

from pyisoroute.exceptions import InvalidInputError, InvalidParameterError
from pyisoroute.models.records import Advisory, Severity
from pyisoroute.physics.kinetics import atoms_at_eob, reaction_rate, saturation_factor
from pyisoroute.utils.constants import BARN_TO_CM2
from pyisoroute.utils.validation import require_fraction, require_non_negative, require_positive

logger = logging.getLogger(__name__)

FLUX_PROFILES: tuple[str, ...] = ("constant", "duty_cycle", "ramp", "step")
"""Supported temporal flux profiles."""

SPATIAL_PROFILES: tuple[str, ...] = ("gaussian", "inverse_square", "uniform")
"""Supported radial flux profiles."""

RESONANCE_INTEGRAL_SUSPECT_CM2: float = 1e-20
"""Resonance integrals above this (cm²) were probably passed in barns."""

PERCENTILES: tuple[int, ...] = (5, 25, 50, 75, 95)


# ---------------------------------------------------------------------------
# Time-dependent flux
# ---------------------------------------------------------------------------

def time_dependent_flux(profile: str, t, **params):
    """Flux at time *t* for a temporal profile

    Parameters
    ----------
    profile : str
        ``"constant"``: ``phi0``.
        ``"duty_cycle"``: ``phi0`` during the first ``duty_fraction`` of
        every ``period`` seconds, 0 otherwise.
        ``"ramp"``: linear from ``phi0`` to ``phi1`` over ``t_ramp``
        seconds, then ``phi1``.
        ``"step"``: ``phi0`` before ``t_step``, ``phi1`` afterwards.
    t : float or numpy.ndarray
        Time(s) since start of irradiation (s), ≥ 0.
    **params
        Profile parameters (see above).  Missing values default to
        ``phi0 = 0``, ``phi1 = phi0``, ``period = 1``,
        ``duty_fraction = 0.5``, ``t_ramp = 1`` and ``t_step = 0``.

    Returns
    -------
    float or numpy.ndarray
        Flux (cm⁻² s⁻¹), matching the shape of *t*.

    Examples
    --------
    >>> time_dependent_flux("ramp", 5.0, phi0=0.0, phi1=1e12, t_ramp=10.0)
    500000000000.0
    """
    scalar = np.ndim(t) == 0
    times = np.asarray(t, dtype="f8")
    if np.any(times < 0) or not np.all(np.isfinite(times)):
        raise InvalidParameterError("Time must be finite and non-negative.")

    phi0 = float(params.get("phi0", 0.0))
    phi1 = float(params.get("phi1", phi0))
    if profile == "constant":
        flux = np.full_like(times, phi0)
    elif profile == "duty_cycle":
        period = require_positive(params.get("period", 1.0), "period")
        duty = require_fraction(params.get("duty_fraction", 0.5), "duty_fraction")
        phase = np.mod(times, period) / period
        flux = np.where(phase < duty, phi0, 0.0)
    elif profile == "ramp":
        t_ramp = require_positive(params.get("t_ramp", 1.0), "t_ramp")
        flux = np.where(times <= t_ramp, phi0 + (phi1 - phi0) * (times / t_ramp), phi1)
    elif profile == "step":
        t_step = require_non_negative(params.get("t_step", 0.0), "t_step")
        flux = np.where(times < t_step, phi0, phi1)
    else:
        raise InvalidInputError(f"Unknown flux profile {profile!r}; expected one of {FLUX_PROFILES}.")
    if np.any(flux < 0):
        raise InvalidParameterError(f"Flux profile {profile!r} produced a negative flux.")
    return float(flux) if scalar else flux


def atoms_at_eob_time_dependent_flux(
    n_target: float,
    sigma_cm2: float,
    profile: str,
    params: Mapping[str, float],
    f_shield: float,
    lam: float,
    t_irr: float,
    dt: float | None = None,
) -> float:
    """Product atoms at EOB under a time-varying flux

    Evaluates ``N = ∫₀ᵗ R(τ) e^(−λ(t−τ)) dτ`` with the midpoint rule.  The
    default step is ``min(t_irr/1000, 0.1 s)``; the last interval is
    shortened to end exactly at *t_irr*.

    Parameters
    ----------
    n_target : float
        Target atoms.
    sigma_cm2 : float
        Production cross section (cm²).
    profile : str
        Temporal profile name, see :func:`time_dependent_flux`.
    params : mapping
        Profile parameters.
    f_shield : float
        Self-shielding factor in [0, 1].
    lam : float
        Product decay constant (1/s).
    t_irr : float
        Irradiation time (s).
    dt : float, optional
        Integration step (s).

    Returns
    -------
    float
    """
    n_target = require_non_negative(n_target, "n_target")
    sigma_cm2 = require_non_negative(sigma_cm2, "sigma_cm2")
    f_shield = require_fraction(f_shield, "f_shield")
    lam = require_non_negative(lam, "decay_constant")
    t_irr = require_non_negative(t_irr, "t_irr")
    if t_irr == 0.0:
        return 0.0
    step = require_positive(dt, "dt") if dt is not None else min(t_irr / 1000.0, 0.1)

    edges = np.arange(0.0, t_irr, step)
    widths = np.diff(np.append(edges, t_irr))
    midpoints = edges + 0.5 * widths
    flux = time_dependent_flux(profile, midpoints, **params)
    rates = n_target * sigma_cm2 * f_shield * flux
    atoms = float(np.sum(rates * np.exp(-lam * (t_irr - midpoints)) * widths))
    logger.debug(
        "Time-dependent flux (%s): %d intervals, N_EOB=%.4e.", profile, widths.size, atoms,
    )
    return atoms


# ---------------------------------------------------------------------------
# Spatial flux
# ---------------------------------------------------------------------------

def spatial_flux_profile(profile: str, r, **params):
    """Flux at radius *r* for a radial profile

    Parameters
    ----------
    profile : str
        ``"gaussian"``: ``phi_center · exp(−r²/2σ²)`` with width ``sigma``.
        ``"inverse_square"``: ``phi_center`` inside ``r0``, then
        ``phi_center · r0²/r²``.
        ``"uniform"``: ``phi0``.
    r : float or numpy.ndarray
        Radius from the beam axis (cm), ≥ 0.

    Returns
    -------
    float or numpy.ndarray
    """
    scalar = np.ndim(r) == 0
    radii = np.asarray(r, dtype="f8")
    if np.any(radii < 0) or not np.all(np.isfinite(radii)):
        raise InvalidParameterError("Radius must be finite and non-negative.")

    if profile == "gaussian":
        phi_center = float(params.get("phi_center", 0.0))
        width = require_positive(params.get("sigma", 1.0), "sigma")
        flux = phi_center * np.exp(-(radii ** 2) / (2.0 * width ** 2))
    elif profile == "inverse_square":
        phi_center = float(params.get("phi_center", 0.0))
        r0 = require_positive(params.get("r0", 1.0), "r0")
        flux = np.where(radii < r0, phi_center, phi_center * r0 ** 2 / np.maximum(radii, r0) ** 2)
    elif profile == "uniform":
        flux = np.full_like(radii, float(params.get("phi0", 0.0)))
    else:
        raise InvalidInputError(
            f"Unknown spatial flux profile {profile!r}; expected one of {SPATIAL_PROFILES}."
        )
    if np.any(flux < 0):
        raise InvalidParameterError(f"Spatial profile {profile!r} produced a negative flux.")
    return float(flux) if scalar else flux


def atoms_at_eob_spatial_flux(
    target_density: float,
    sigma_cm2: float,
    profile: str,
    params: Mapping[str, float],
    f_shield: float,
    target_radius: float,
    target_thickness: float,
    lam: float,
    t_irr: float,
    dr: float | None = None,
) -> float:
    """Product atoms at EOB in a disk target under a radial flux profile

    The disk is cut into concentric rings of width *dr* (default
    ``min(R/100, 0.1 cm)``).  Each ring holds
    ``ρ · π(r_out² − r_in²) · thickness`` target atoms and sees the flux
    at its mid-radius.

    Returns
    -------
    float
        Sum of ``atoms_at_eob`` over all rings.
    """
    target_density = require_non_negative(target_density, "target_density")
    sigma_cm2 = require_non_negative(sigma_cm2, "sigma_cm2")
    f_shield = require_fraction(f_shield, "f_shield")
    target_radius = require_positive(target_radius, "target_radius")
    target_thickness = require_positive(target_thickness, "target_thickness")
    lam = require_positive(lam, "decay_constant")
    t_irr = require_non_negative(t_irr, "t_irr")
    step = require_positive(dr, "dr") if dr is not None else min(target_radius / 100.0, 0.1)

    inner = np.arange(0.0, target_radius, step)
    outer = np.minimum(inner + step, target_radius)
    ring_atoms = target_density * math.pi * (outer ** 2 - inner ** 2) * target_thickness
    flux = spatial_flux_profile(profile, 0.5 * (inner + outer), **params)
    rates = ring_atoms * sigma_cm2 * flux * f_shield
    return atoms_at_eob(float(np.sum(rates)), saturation_factor(lam, t_irr), lam)


# ---------------------------------------------------------------------------
# Epithermal capture and chemistry
# ---------------------------------------------------------------------------

def convert_resonance_integral(barns: float) -> float:
    """Resonance integral in cm² from a value in barns

    Examples
    --------
    >>> f"{convert_resonance_integral(1000.0):.1e}"
    '1.0e-21'
    """
    return require_non_negative(barns, "resonance_integral") * BARN_TO_CM2


def reaction_rate_with_epithermal(
    n_target: float,
    sigma_thermal_cm2: float,
    flux_thermal: float,
    resonance_integral_cm2: float,
    flux_epithermal: float,
    f_shield: float = 1.0,
    advisories: list[Advisory] | None = None,
) -> float:
    """Reaction rate including the epithermal resonance contribution

    ``R = N · (σ_th · φ_th + I_res · φ_epi) · f_shield``

    A resonance integral above 1e-20 cm² (10⁴ b) is almost certainly a
    value in barns that was not converted; it is reported, not rejected.
    """
    resonance_integral_cm2 = require_non_negative(resonance_integral_cm2, "resonance_integral_cm2")
    if resonance_integral_cm2 > RESONANCE_INTEGRAL_SUSPECT_CM2:
        message = (
            f"Resonance integral {resonance_integral_cm2:.3e} cm^2 is implausibly large - "
            "was it given in barns? Use convert_resonance_integral()"
        )
        logger.warning(message)
        if advisories is not None:
            advisories.append(Advisory(message, Severity.MODERATE, "epithermal"))
    thermal = reaction_rate(n_target, sigma_thermal_cm2, flux_thermal, f_shield)
    epithermal = reaction_rate(n_target, resonance_integral_cm2, flux_epithermal, f_shield)
    return thermal + epithermal


def delivered_activity_with_chemistry_yield(activity_bq: float, yield_fraction: float) -> float:
    """Activity after separation losses, ``A · Y_chem``"""
    activity_bq = require_non_negative(activity_bq, "activity")
    yield_fraction = require_fraction(yield_fraction, "chemistry_yield")
    return activity_bq * yield_fraction


# ---------------------------------------------------------------------------
# Monte Carlo uncertainty
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MonteCarloSummary:
    """Statistics of a Monte Carlo propagation

    Parameters
    ----------
    mean : float
        Sample mean.
    std : float
        Population standard deviation of the samples.
    samples : numpy.ndarray
        Kernel outputs, in draw order.
    percentiles : dict[str, float]
        ``p5``, ``p25``, ``p50``, ``p75`` and ``p95`` order statistics.
    """

    mean: float
    std: float
    samples: np.ndarray
    percentiles: dict[str, float]


def _sampler(name: str, spec: Mapping, rng: np.random.Generator, n: int) -> np.ndarray:
    kind = spec.get("type")
    if kind == "normal":
        std = require_non_negative(spec.get("std", 0.0), f"{name}.std")
        return rng.normal(float(spec["mean"]), std, size=n)
    if kind == "uniform":
        low, high = (float(v) for v in spec["range"])
        if high < low:
            raise InvalidParameterError(f"Uniform range for {name!r} is reversed: [{low}, {high}].")
        return rng.uniform(low, high, size=n)
    raise InvalidInputError(f"Unknown distribution {kind!r} for parameter {name!r}.")


def monte_carlo_uncertainty(
    kernel: Callable[[dict[str, float]], float],
    nominal: Mapping[str, float],
    uncertainties: Mapping[str, Mapping],
    n_samples: int,
    rng: np.random.Generator | int | None = None,
) -> MonteCarloSummary:
    """Propagate parametric input uncertainty through *kernel*

    Parameters
    ----------
    kernel : callable
        Deterministic function of a ``{name: value}`` dict returning a
        float.
    nominal : mapping
        Nominal value of every kernel parameter.
    uncertainties : mapping
        Per-parameter distribution, either
        ``{"type": "normal", "mean": m, "std": s}`` or
        ``{"type": "uniform", "range": (lo, hi)}``.  Parameters without
        an entry keep their nominal value.
    n_samples : int
        Number of kernel evaluations, > 0.
    rng : numpy.random.Generator or int, optional
        Random generator or seed.

    Returns
    -------
    MonteCarloSummary

    Examples
    --------
    >>> summary = monte_carlo_uncertainty(
    ...     lambda p: p["a"] * 2.0, {"a": 1.0},
    ...     {"a": {"type": "uniform", "range": (1.0, 1.0)}}, 10, rng=0)
    >>> summary.mean
    2.0
    """
    if isinstance(n_samples, bool) or not isinstance(n_samples, int) or n_samples <= 0:
        raise InvalidParameterError(f"n_samples must be a positive integer, got {n_samples!r}.")
    unknown = set(uncertainties) - set(nominal)
    if unknown:
        raise InvalidInputError(f"Uncertainties given for unknown parameters: {sorted(unknown)}.")
    generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    draws = {
        name: _sampler(name, spec, generator, n_samples)
        for name, spec in uncertainties.items()
    }
    samples = np.empty(n_samples, dtype="f8")
    for i in range(n_samples):
        params = {
            name: float(draws[name][i]) if name in draws else value
            for name, value in nominal.items()
        }
        samples[i] = float(kernel(params))

    values = np.percentile(samples, PERCENTILES)
    percentiles = {f"p{q}": float(v) for q, v in zip(PERCENTILES, values)}
    logger.debug("Monte Carlo: %d samples, mean=%.4e, std=%.4e.", n_samples, samples.mean(), samples.std())
    return MonteCarloSummary(
        mean=float(samples.mean()),
        std=float(samples.std()),
        samples=samples,
        percentiles=percentiles,
    )
