#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Physical constants and planning thresholds used across PyIsoRoute

Fundamental constants are sourced from NIST CODATA 2018 [1]_.  The
planning thresholds (default fluxes, viability cut-offs, placeholder
cross sections) are conservative engineering defaults; changing them
changes every evaluation, so they live here as the single point of
configuration.

References
----------
.. [1] NIST, "The 2018 CODATA Recommended Values of the Fundamental
   Physical Constants", https://physics.nist.gov/cuu/pdf/wallet_2018.pdf
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Physical constants  (NIST CODATA 2018)
# ---------------------------------------------------------------------------

AVOGADRO: float = 6.02214076e23
"""Avogadro constant N_A (1/mol, exact by SI definition)."""

ATOMIC_MASS_UNIT_G: float = 1.66053906660e-24
"""Atomic mass unit u expressed in grams."""

BARN_TO_CM2: float = 1e-24
"""Conversion factor from barns to cm²."""

MILLIBARN_TO_CM2: float = 1e-27
"""Conversion factor from millibarns to cm²."""

SECONDS_PER_DAY: float = 86400.0
"""Seconds in one day."""

SECONDS_PER_HOUR: float = 3600.0
"""Seconds in one hour."""

LN2: float = math.log(2.0)
"""Natural logarithm of 2."""

BQ_PER_GBQ: float = 1e9
"""Becquerel per gigabecquerel."""

BQ_PER_TBQ: float = 1e12
"""Becquerel per terabecquerel."""


# ---------------------------------------------------------------------------
# Numerical guards
# ---------------------------------------------------------------------------

SHIELDING_SINGULARITY_EPS: float = 1e-12
"""Below this optical thickness Σ·t the self-shielding factor is 1."""

EQUAL_LAMBDA_EPS: float = 1e-12
"""Decay constants closer than this use the secular-equilibrium limit."""

MIN_PRODUCT_MASS_G: float = 1e-9
"""Floor on product mass when forming specific activity."""

MIN_LAMBDA_FOR_DENSITY: float = 1e-10
"""Floor on λ used by the product-density heuristic."""


# ---------------------------------------------------------------------------
# Reaction defaults
# ---------------------------------------------------------------------------

REFERENCE_FAST_ENERGY_MEV: float = 14.1
"""D-T reference neutron energy at which fast cross sections are quoted."""

DEFAULT_NEUTRON_ENERGY_MEV: float = REFERENCE_FAST_ENERGY_MEV
"""Neutron energy assumed when the operating conditions leave it unset."""

DEFAULT_THERMAL_FLUX: float = 1e14
"""Thermal flux (cm⁻² s⁻¹) assumed for capture routes."""

DEFAULT_FAST_FLUX: float = 1e13
"""Fast flux (cm⁻² s⁻¹) assumed for threshold routes."""

DEFAULT_CHARGED_PARTICLE_FLUX: float = 1e10
"""Particle flux (cm⁻² s⁻¹) assumed for charged-particle routes."""

PLACEHOLDER_CAPTURE_SIGMA_CM2: float = 1.0 * BARN_TO_CM2
"""Conservative capture cross section used when none is tabulated (1 b)."""

PLACEHOLDER_FAST_SIGMA_CM2: float = 10.0 * MILLIBARN_TO_CM2
"""Conservative fast cross section used when none is tabulated (10 mb)."""

ENERGY_SCALING_EXPONENT_N2N: float = 2.0
"""Exponent of the energy-scaled threshold model for (n,2n)."""

ENERGY_SCALING_EXPONENT_DEFAULT: float = 1.5
"""Exponent of the energy-scaled threshold model for other reactions."""

DEFAULT_ATOMIC_MASS: float = 100.0
"""Atomic mass (g/mol) used when the nuclear-data provider has none."""

DEFAULT_TARGET_DENSITY: float = 5e22
"""Target atom density (atoms/cm³) assumed for burn-up shielding."""

DEFAULT_TARGET_THICKNESS_CM: float = 0.2
"""Target thickness (cm) assumed for burn-up shielding."""

DEFAULT_CHEMISTRY_YIELD: float = 0.85
"""Separation yield assumed for separable products without data."""


# ---------------------------------------------------------------------------
# Evaluation thresholds
# ---------------------------------------------------------------------------

ACTIVITY_THRESHOLDS_GBQ: dict[str, tuple[float, float, float]] = {
    "medical": (1.0, 0.1, 0.01),
    "industrial": (0.1, 0.01, 0.001),
    "research": (0.01, 0.001, 0.0001),
}
"""(viable, marginal, not viable) EOB activity cut-offs per context."""

NCA_MIN_SPECIFIC_ACTIVITY_BQ_PER_G: float = 1e12
"""Minimum specific activity (1 TBq/g) expected from an n.c.a. route."""

LOW_REACTION_RATE: float = 1e6
"""Reaction rate (1/s) below which a low-yield warning is emitted."""

SHORT_LIVED_PRODUCT_DAYS: float = 30.0
"""Products shorter-lived than this are exposed to accumulation traps."""

LONG_LIVED_IMPURITY_DAYS: float = 30.0
"""Same-element impurities longer-lived than this are a fail condition."""

HIGH_TRAP_RATIO: float = 10.0
"""Impurity/product half-life ratio for a high-severity trap."""

MODERATE_TRAP_RATIO: float = 3.0
"""Impurity/product half-life ratio for a moderate trap."""

TRACE_IMPURITY_FRACTION: float = 0.001
"""Fraction of target atoms assumed for an unrelated-element parent."""

IMPURITY_FRACTION_HIGH: float = 0.01
"""Impurity activity fraction that escalates risk to High."""

IMPURITY_FRACTION_MEDIUM: float = 0.001
"""Impurity activity fraction that escalates risk to at least Medium."""

HIGH_FLUX_REGIME: float = 1e14
"""Flux above which long, thick irradiations warrant a shielding note."""

LONG_IRRADIATION_S: float = 7.0 * SECONDS_PER_DAY
"""Irradiation time above which the high-flux note applies."""


# ---------------------------------------------------------------------------
# Solver limits
# ---------------------------------------------------------------------------

MAX_EULER_STEPS: int = 2_000_000
"""Hard cap on explicit-Euler steps for one chain solve."""

EULER_STABILITY_LIMIT: float = 0.2
"""Maximum λ_max·dt accepted by the explicit-Euler integrator."""

EULER_INITIAL_DT: float = 0.1
"""Upper bound (s) on the initial Euler time step."""

RECURSIVE_MAX_CHAIN: int = 4
"""Largest chain solved with the closed-form recursive path."""
