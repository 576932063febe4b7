#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyIsoRoute tests

Provides small hand-built routes, conditions and decay chains so that
evaluator and solver tests do not depend on the bundled registry.
"""

from __future__ import annotations

import pytest

from pyisoroute.data.nuclear import BuiltinNuclearData, NullNuclearData
from pyisoroute.data.routes import default_registry
from pyisoroute.models.records import (
    ChainIsotope,
    DecayChainSpec,
    OperatingConditions,
    ReactionType,
    RouteDescriptor,
)
from pyisoroute.physics.kinetics import decay_constant


@pytest.fixture
def lu177_route() -> RouteDescriptor:
    """Clean n.c.a. Lu-176(n,γ)Lu-177 route without impurities"""
    return RouteDescriptor(
        route_id="test-lu177",
        target_isotope="Lu-176",
        product_isotope="Lu-177",
        reaction=ReactionType.CAPTURE,
        product_half_life_days=6.647,
        nominal_sigma_barns=2090.0,
        chemical_separable=True,
        carrier_added_acceptable=False,
    )


@pytest.fixture
def lu177_conditions() -> OperatingConditions:
    """1e14 flux, 75 % enrichment, 5 days, 0.1 mg target"""
    return OperatingConditions(
        neutron_flux=1e14,
        enrichment=0.75,
        irradiation_time_s=5 * 86400.0,
        target_mass_g=1e-4,
    )


@pytest.fixture
def fast_route() -> RouteDescriptor:
    """Threshold (n,p) route with a 5 MeV threshold"""
    return RouteDescriptor(
        route_id="test-fast",
        target_isotope="Zn-67",
        product_isotope="Cu-67",
        reaction="n,p",
        product_half_life_days=2.58,
        nominal_sigma_barns=0.02,
        threshold_mev=5.0,
        category="fast",
    )


@pytest.fixture
def null_data() -> NullNuclearData:
    return NullNuclearData()


@pytest.fixture
def builtin_data() -> BuiltinNuclearData:
    return BuiltinNuclearData()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def mo99_chain() -> DecayChainSpec:
    """Mo-99 -> Tc-99m, full branching"""
    return DecayChainSpec((
        ChainIsotope("Mo-99", decay_constant(2.75)),
        ChainIsotope("Tc-99m", decay_constant(0.25), (("Mo-99", 1.0),)),
    ))


@pytest.fixture
def fast_chain() -> DecayChainSpec:
    """Two-member chain with second-scale decay constants"""
    return DecayChainSpec((
        ChainIsotope("A", 0.05),
        ChainIsotope("B", 0.02, (("A", 1.0),)),
    ))
