#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for activation and decay kinetics primitives

Covers decay constants, saturation, production, geometry, shielding,
threshold activation, derating and the irradiate-then-decay series.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from pyisoroute.exceptions import InvalidInputError, InvalidParameterError
from pyisoroute.physics.kinetics import (
    activity,
    activity_time_series,
    atoms_at_eob,
    damage_derating,
    damage_time_limit,
    decay_constant,
    decay_correct,
    flux_finite_source,
    flux_from_solid_angle,
    geometric_efficiency,
    macroscopic_cross_section,
    reaction_rate,
    saturation_factor,
    self_shielding_factor,
    solid_angle,
    specific_activity,
    temperature_rise,
    thermal_derating,
    threshold_activation,
    uncertainty_rss,
)


# -----------------------------------------------------------------------
# Decay and production
# -----------------------------------------------------------------------

class TestDecayConstant:
    """Tests for decay_constant"""

    def test_lu177(self) -> None:
        assert decay_constant(6.647) == pytest.approx(1.20694e-6, rel=1e-4)

    def test_one_day(self) -> None:
        assert decay_constant(1.0) == pytest.approx(math.log(2) / 86400.0)

    @pytest.mark.parametrize("half_life", [0.0, -1.0, float("nan")])
    def test_rejects_non_positive(self, half_life: float) -> None:
        with pytest.raises(InvalidParameterError):
            decay_constant(half_life)

    def test_parameter_error_is_input_error(self) -> None:
        with pytest.raises(InvalidInputError):
            decay_constant(0.0)

    def test_rejects_string(self) -> None:
        with pytest.raises(InvalidParameterError):
            decay_constant("6.647")


class TestSaturationFactor:
    """Tests for saturation_factor"""

    def test_zero_time(self) -> None:
        assert saturation_factor(1e-6, 0.0) == 0.0

    def test_one_half_life(self) -> None:
        lam = decay_constant(2.0)
        assert saturation_factor(lam, 2.0 * 86400.0) == pytest.approx(0.5)

    def test_bounded_and_monotone(self) -> None:
        lam = 1e-5
        values = [saturation_factor(lam, t) for t in np.linspace(0.0, 5e6, 50)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(b >= a for a, b in zip(values, values[1:]))
        assert values[-1] == pytest.approx(1.0, abs=1e-9)

    def test_stable_nuclide(self) -> None:
        assert saturation_factor(0.0, 1e9) == 0.0

    def test_negative_time(self) -> None:
        with pytest.raises(InvalidParameterError):
            saturation_factor(1e-6, -1.0)


class TestProduction:
    """Tests for reaction_rate, atoms_at_eob and activity"""

    def test_reaction_rate(self) -> None:
        assert reaction_rate(1e20, 1e-24, 1e14, 0.5) == pytest.approx(5e9)

    def test_shield_out_of_range(self) -> None:
        with pytest.raises(InvalidParameterError):
            reaction_rate(1e20, 1e-24, 1e14, 1.5)

    def test_atoms_activity_round_trip(self) -> None:
        rate = 3.0e10
        lam = decay_constant(6.647)
        f_sat = saturation_factor(lam, 5 * 86400.0)
        assert activity(lam, atoms_at_eob(rate, f_sat, lam)) == pytest.approx(rate * f_sat)

    def test_atoms_at_eob_requires_decay(self) -> None:
        with pytest.raises(InvalidParameterError):
            atoms_at_eob(1e10, 0.5, 0.0)

    def test_specific_activity(self) -> None:
        assert specific_activity(1e12, 0.5) == pytest.approx(2e12)

    def test_specific_activity_zero_mass(self) -> None:
        with pytest.raises(InvalidParameterError):
            specific_activity(1e12, 0.0)

    def test_decay_correct_one_half_life(self) -> None:
        lam = decay_constant(1.0)
        assert decay_correct(100.0, lam, 86400.0) == pytest.approx(50.0)


# -----------------------------------------------------------------------
# Geometry
# -----------------------------------------------------------------------

class TestGeometry:
    """Tests for solid-angle flux helpers"""

    def test_solid_angle(self) -> None:
        assert solid_angle(5.0, 2.0) == pytest.approx(0.44939, rel=1e-4)

    def test_solid_angle_contact(self) -> None:
        assert solid_angle(0.0, 1.0) == pytest.approx(2.0 * math.pi)

    def test_solid_angle_degenerate(self) -> None:
        assert solid_angle(0.0, 0.0) == 0.0

    def test_geometric_efficiency_full_sphere(self) -> None:
        assert geometric_efficiency(4.0 * math.pi) == pytest.approx(1.0)

    def test_flux_from_solid_angle(self) -> None:
        omega = solid_angle(10.0, 1.0)
        flux = flux_from_solid_angle(1e12, omega, math.pi)
        assert flux == pytest.approx(1e12 * omega / math.pi)

    def test_close_target_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="pyisoroute.physics.kinetics"):
            flux_from_solid_angle(1e12, 1.0, 1.0, distance=1.0, radius=1.0)
        assert "overestimated" in caplog.text

    def test_far_target_silent(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="pyisoroute.physics.kinetics"):
            flux_from_solid_angle(1e12, 1.0, 1.0, distance=10.0, radius=1.0)
        assert caplog.text == ""

    def test_finite_source_point_limit(self) -> None:
        expected = 1e12 * solid_angle(20.0, 1.0) / math.pi
        assert flux_finite_source(1e12, 20.0, 1.0, 0.5) == pytest.approx(expected)

    def test_finite_source_large_source_lowers_flux(self) -> None:
        point = flux_finite_source(1e12, 5.0, 1.0, 0.0)
        extended = flux_finite_source(1e12, 5.0, 1.0, 4.0)
        assert extended < point

    def test_finite_source_zero_distance(self) -> None:
        assert flux_finite_source(1e12, 0.0, 1.0, 1.0) == 0.0


# -----------------------------------------------------------------------
# Cross sections and shielding
# -----------------------------------------------------------------------

class TestShielding:
    """Tests for macroscopic cross sections and self-shielding"""

    def test_macroscopic(self) -> None:
        assert macroscopic_cross_section(5e22, 1e-24) == pytest.approx(0.05)

    def test_thin_limit(self) -> None:
        assert self_shielding_factor(1e-15, 1e-3) == 1.0
        assert self_shielding_factor(1e-6, 1.0) == pytest.approx(1.0, abs=1e-6)

    def test_strictly_decreasing(self) -> None:
        values = [self_shielding_factor(s, 1.0) for s in (0.01, 0.1, 1.0, 10.0)]
        assert all(b < a for a, b in zip(values, values[1:]))

    def test_known_value(self) -> None:
        assert self_shielding_factor(1.0, 1.0) == pytest.approx(1.0 - math.exp(-1.0))


class TestThresholdActivation:
    """Tests for threshold_activation"""

    def test_below_threshold(self) -> None:
        assert threshold_activation(3.0, 5.0, 0.02) == 0.0

    def test_step_above_threshold(self) -> None:
        assert threshold_activation(6.0, 5.0, 0.02) == 0.02

    def test_energy_scaled_n2n(self) -> None:
        sigma = threshold_activation(11.05, 8.0, 0.4, mode="energy_scaled", reaction="n,2n")
        assert sigma == pytest.approx(0.4 * 0.25)

    def test_energy_scaled_default_exponent(self) -> None:
        sigma = threshold_activation(7.05, 0.0, 1.0, mode="energy_scaled", reaction="n,p")
        assert sigma == pytest.approx(0.5 ** 1.5)

    def test_energy_scaled_above_reference(self) -> None:
        assert threshold_activation(15.0, 8.0, 0.4, mode="energy_scaled") == 0.4

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            threshold_activation(6.0, 5.0, 0.02, mode="linear")


# -----------------------------------------------------------------------
# Uncertainty and derating
# -----------------------------------------------------------------------

class TestDerating:
    """Tests for RSS combination and engineering derating"""

    def test_rss(self) -> None:
        assert uncertainty_rss([3.0, 4.0]) == 5.0
        assert uncertainty_rss([]) == 0.0

    def test_rss_negative(self) -> None:
        with pytest.raises(InvalidParameterError):
            uncertainty_rss([1.0, -1.0])

    def test_temperature_rise(self) -> None:
        assert temperature_rise(4186.0, 1.0, 4186.0) == pytest.approx(1.0)

    def test_thermal_derating(self) -> None:
        assert thermal_derating(50.0, 100.0) == 1.0
        assert thermal_derating(200.0, 100.0) == pytest.approx(0.5)

    def test_damage_time_limit(self) -> None:
        assert damage_time_limit(10.0, 1e-6) == pytest.approx(1e7)
        assert damage_time_limit(10.0, 0.0) == math.inf

    def test_damage_derating(self) -> None:
        assert damage_derating(100.0, 200.0) == 1.0
        assert damage_derating(400.0, 200.0) == pytest.approx(0.5)


# -----------------------------------------------------------------------
# Time series
# -----------------------------------------------------------------------

class TestActivityTimeSeries:
    """Tests for activity_time_series"""

    def test_peak_at_eob(self) -> None:
        lam = decay_constant(1.0)
        t_irr = 2 * 86400.0
        times = np.linspace(0.0, 4 * 86400.0, 81)
        atoms, act = activity_time_series(1e9, lam, t_irr, times)
        assert times[np.argmax(act)] == pytest.approx(t_irr)
        assert atoms[0] == 0.0

    def test_matches_scalar_primitives(self) -> None:
        lam = decay_constant(1.0)
        t_irr = 86400.0
        atoms, _ = activity_time_series(1e9, lam, t_irr, [t_irr, 2 * t_irr])
        n_eob = atoms_at_eob(1e9, saturation_factor(lam, t_irr), lam)
        assert atoms[0] == pytest.approx(n_eob)
        assert atoms[1] == pytest.approx(n_eob / 2.0)

    def test_burn_up_lowers_inventory(self) -> None:
        lam = decay_constant(1.0)
        plain, _ = activity_time_series(1e9, lam, 86400.0, [86400.0])
        burned, _ = activity_time_series(1e9, lam, 86400.0, [86400.0], k_burn=lam)
        assert burned[0] < plain[0]

    def test_negative_time(self) -> None:
        with pytest.raises(InvalidParameterError):
            activity_time_series(1e9, 1e-5, 10.0, [-1.0])
