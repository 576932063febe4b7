#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the bundled route registry and nuclear-data providers
"""

from __future__ import annotations

import dataclasses

import pytest

from pyisoroute.data.nuclear import BuiltinNuclearData, NullNuclearData
from pyisoroute.data.pathways import PATHWAYS
from pyisoroute.data.routes import ROUTES, RouteRegistry
from pyisoroute.exceptions import RegistryError
from pyisoroute.models.records import RegulatoryFlag, RouteDescriptor


class TestRouteRegistry:
    """Tests for RouteRegistry"""

    def test_size(self, registry) -> None:
        assert len(registry) == 17
        assert len(registry.ids()) == len(set(registry.ids()))

    def test_get(self, registry) -> None:
        route = registry.get("lu176-ng-lu177")
        assert route.target_isotope == "Lu-176"
        assert route.product_isotope == "Lu-177"

    def test_unknown_id(self, registry) -> None:
        with pytest.raises(RegistryError, match="no-such-route"):
            registry.get("no-such-route")

    def test_contains(self, registry) -> None:
        assert "co59-ng-co60" in registry
        assert "co59-ng-co61" not in registry

    def test_find_by_product(self, registry) -> None:
        ids = [r.route_id for r in registry.find_by_product("Sc-47")]
        assert ids == ["ti47-np-sc47", "ti48-nd-sc47"]
        assert len(registry.find_by_product("Mo-99")) == 2
        assert registry.find_by_product("Xe-133") == []

    def test_iteration_order(self, registry) -> None:
        assert [r.route_id for r in registry] == [r.route_id for r in ROUTES]

    def test_duplicate_ids(self) -> None:
        route = RouteDescriptor("dup", "Co-59", "Co-60", "n,γ", 1925.0)
        with pytest.raises(RegistryError):
            RouteRegistry([route, route])

    def test_alpha_route_is_exploratory(self, registry) -> None:
        for route in registry:
            if route.category == "alpha":
                assert route.regulatory_flag is RegulatoryFlag.EXPLORATORY

    def test_categories(self, registry) -> None:
        categories = {r.category for r in registry}
        assert categories == {"fast", "moderated", "generator", "alpha", "industrial"}


class TestNuclearData:
    """Tests for the nuclear-data providers"""

    def test_null_provider(self, null_data: NullNuclearData, lu177_route) -> None:
        assert null_data.get_atomic_mass("Lu") is None
        assert null_data.get_abundance("Lu", 176) is None
        assert null_data.lookup_pathway(lu177_route) is None
        assert not null_data.provides_pathways

    def test_atomic_mass(self, builtin_data: BuiltinNuclearData) -> None:
        assert builtin_data.get_atomic_mass("Lu") == pytest.approx(174.9668)
        assert builtin_data.get_atomic_mass(" Lu ") == pytest.approx(174.9668)
        assert builtin_data.get_atomic_mass("Xx") is None

    def test_abundance(self, builtin_data: BuiltinNuclearData) -> None:
        assert builtin_data.get_abundance("Zn", 64) == pytest.approx(0.492)
        assert builtin_data.get_abundance("Zn", 65) is None

    def test_pathway_lookup_respects_carrier(self, builtin_data, lu177_route) -> None:
        assert builtin_data.lookup_pathway(lu177_route).pathway_id == "LU177_NCA"
        carrier = dataclasses.replace(lu177_route, carrier_added_acceptable=True)
        assert builtin_data.lookup_pathway(carrier).pathway_id == "LU177_CA"

    def test_pathway_lookup_miss(self, builtin_data) -> None:
        other = RouteDescriptor("x", "Er-170", "Er-171", "n,γ", 0.313)
        assert builtin_data.lookup_pathway(other) is None
        assert builtin_data.provides_pathways

    def test_empty_pathways(self) -> None:
        assert not BuiltinNuclearData(pathways=()).provides_pathways

    def test_pathway_ids_unique(self) -> None:
        ids = [p.pathway_id for p in PATHWAYS]
        assert len(ids) == len(set(ids))
