#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Static registry of radioisotope production routes

All cross-section values are planning-level estimates: conservative
lower-bound or mid-range figures suitable for facility planning, not
evaluated nuclear-data library values.  The routes are scenario
definitions, not regulatory approvals.

Route Categories
----------------
fast
    14.1 MeV threshold reactions (D-T neutron source, minimal moderation).
moderated
    Thermal/epithermal capture.
generator
    Capture-produced parents of a generator daughter.
alpha
    Alpha-emitter precursors; exploratory and heavily regulated.
industrial
    Long-lived sealed-source isotopes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pyisoroute.exceptions import RegistryError
from pyisoroute.models.records import RegulatoryFlag, ReactionType, RouteDescriptor

logger = logging.getLogger(__name__)

PLANNING = "planning-conservative"

# ---------------------------------------------------------------------------
# Route definitions
# ---------------------------------------------------------------------------

ROUTES: tuple[RouteDescriptor, ...] = (
    # Fast neutron routes (14 MeV)
    RouteDescriptor(
        route_id="zn67-np-cu67",
        category="fast",
        target_isotope="Zn-67",
        reaction=ReactionType.N_P,
        threshold_mev=0.0,
        nominal_sigma_barns=0.020,
        data_quality=PLANNING,
        product_isotope="Cu-67",
        product_half_life_days=2.58,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Cu-64 from Zn-64(n,p)",
            "Zn-65 from Zn-67(n,γ)",
            "Ni-63 from Cu-63(n,p)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="ti47-np-sc47",
        category="fast",
        target_isotope="Ti-47",
        reaction=ReactionType.N_P,
        threshold_mev=0.0,
        nominal_sigma_barns=0.012,
        data_quality=PLANNING,
        product_isotope="Sc-47",
        product_half_life_days=3.35,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Sc-46 from Sc-47(n,γ)",
            "Ti-48 from Ti-47(n,γ)",
            "Ca-47 from Sc-47 decay",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="ti48-nd-sc47",
        category="fast",
        target_isotope="Ti-48",
        reaction=ReactionType.N_D,
        threshold_mev=2.0,
        nominal_sigma_barns=0.008,
        data_quality=PLANNING,
        product_isotope="Sc-47",
        product_half_life_days=3.35,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Sc-46 from Sc-47(n,γ)",
            "Ti-49 from Ti-48(n,γ)",
            "Ca-47 from Sc-47 decay",
        ),
        regulatory_flag=RegulatoryFlag.CONSTRAINED,
    ),
    RouteDescriptor(
        route_id="mo100-n2n-mo99",
        category="fast",
        target_isotope="Mo-100",
        reaction=ReactionType.N_2N,
        threshold_mev=8.0,
        nominal_sigma_barns=0.4,
        data_quality=PLANNING,
        product_isotope="Mo-99",
        product_half_life_days=2.75,
        chemical_separable=True,
        carrier_added_acceptable=True,
        impurity_risks=(
            "Mo-98 from Mo-99(n,2n)",
            "Mo-100 from Mo-99(n,γ)",
            "Tc-99m from Mo-99 decay (desired daughter)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    # Moderated capture routes
    RouteDescriptor(
        route_id="ho165-ng-ho166",
        category="moderated",
        target_isotope="Ho-165",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=55.0,
        data_quality=PLANNING,
        product_isotope="Ho-166",
        product_half_life_days=1.12,
        chemical_separable=True,
        carrier_added_acceptable=False,
        resonance_dominated=True,
        impurity_risks=(
            "Ho-166m from Ho-165(n,γ)",
            "Dy-166 from Ho-166 decay",
            "Er-166 from Ho-166(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="sm152-ng-sm153",
        category="moderated",
        target_isotope="Sm-152",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=180.0,
        data_quality=PLANNING,
        product_isotope="Sm-153",
        product_half_life_days=1.93,
        chemical_separable=True,
        carrier_added_acceptable=False,
        resonance_dominated=True,
        impurity_risks=(
            "Sm-154 from Sm-153(n,γ)",
            "Pm-153 from Sm-153 decay",
            "Eu-153 from Sm-153(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="dy164-ng-dy165",
        category="moderated",
        target_isotope="Dy-164",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=2400.0,
        data_quality=PLANNING,
        product_isotope="Dy-165",
        product_half_life_days=0.097,
        chemical_separable=True,
        carrier_added_acceptable=False,
        resonance_dominated=True,
        impurity_risks=(
            "Dy-166 from Dy-165(n,γ)",
            "Tb-165 from Dy-165 decay",
            "Ho-165 from Dy-165(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="re185-ng-re186",
        category="moderated",
        target_isotope="Re-185",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=100.0,
        data_quality=PLANNING,
        product_isotope="Re-186",
        product_half_life_days=3.72,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Re-187 from Re-186(n,γ)",
            "Os-186 from Re-186 decay",
            "W-186 from Re-186(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="au197-ng-au198",
        category="moderated",
        target_isotope="Au-197",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=90.0,
        data_quality=PLANNING,
        product_isotope="Au-198",
        product_half_life_days=2.7,
        chemical_separable=True,
        carrier_added_acceptable=True,
        impurity_risks=(
            "Au-199 from Au-198(n,γ)",
            "Hg-198 from Au-198 decay",
            "Pt-198 from Au-198(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="lu176-ng-lu177",
        category="moderated",
        target_isotope="Lu-176",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=2090.0,
        data_quality=PLANNING,
        product_isotope="Lu-177",
        product_half_life_days=6.647,
        chemical_separable=True,
        carrier_added_acceptable=False,
        resonance_dominated=True,
        impurity_risks=(
            "Lu-177m (metastable state)",
            "Lu-178 from Lu-177(n,γ)",
            "Hf-177 from Lu-177 decay",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="y89-ng-y90",
        category="moderated",
        target_isotope="Y-89",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=1.28,
        data_quality=PLANNING,
        product_isotope="Y-90",
        product_half_life_days=2.67,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Y-91 from Y-90(n,γ)",
            "Sr-90 from Y-90 decay (daughter)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    # Generator parents
    RouteDescriptor(
        route_id="mo99-tc99m-generator",
        category="generator",
        target_isotope="Mo-98",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=0.13,
        data_quality=PLANNING,
        product_isotope="Mo-99",
        product_half_life_days=2.75,
        chemical_separable=True,
        carrier_added_acceptable=True,
        impurity_risks=(
            "Mo-100 from Mo-99(n,γ)",
            "Tc-99m from Mo-99 decay (desired daughter)",
            "Tc-99g from Mo-99 decay",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="w188-re188-generator",
        category="generator",
        target_isotope="W-186",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=35.0,
        data_quality=PLANNING,
        product_isotope="W-188",
        product_half_life_days=69.4,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "W-189 from W-188(n,γ)",
            "Re-188 from W-188 decay (desired daughter)",
            "Os-188 from W-188 decay",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="sn117m-generator",
        category="generator",
        target_isotope="Sn-116",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=0.5,
        data_quality=PLANNING,
        product_isotope="Sn-117m",
        product_half_life_days=13.6,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Sn-117g from Sn-117m decay",
            "Sn-118 from Sn-117m(n,γ)",
            "In-117 from Sn-117m decay",
        ),
        regulatory_flag=RegulatoryFlag.CONSTRAINED,
    ),
    # Alpha / precursor routes
    RouteDescriptor(
        route_id="ra226-n2n-ra225-ac225",
        category="alpha",
        target_isotope="Ra-226",
        reaction=ReactionType.N_2N,
        threshold_mev=7.5,
        nominal_sigma_barns=0.040,
        data_quality=PLANNING,
        product_isotope="Ra-225",
        product_half_life_days=14.9,
        chemical_separable=True,
        carrier_added_acceptable=False,
        impurity_risks=(
            "Ac-225 from Ra-225 decay (desired product)",
            "Ra-224 from Ra-225(n,γ)",
            "Rn-221 from Ra-225 decay",
            "Fr-221 from Ac-225 decay",
            "Bi-213 from Ac-225 decay chain",
        ),
        regulatory_flag=RegulatoryFlag.EXPLORATORY,
        notes="Ra-226 handling requires special facilities.",
    ),
    # Industrial routes
    RouteDescriptor(
        route_id="ir191-ng-ir192",
        category="industrial",
        target_isotope="Ir-191",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=850.0,
        data_quality=PLANNING,
        product_isotope="Ir-192",
        product_half_life_days=73.8,
        chemical_separable=True,
        carrier_added_acceptable=True,
        impurity_risks=(
            "Ir-192m from Ir-191(n,γ)",
            "Ir-193 from Ir-192(n,γ)",
            "Os-192 from Ir-192 decay",
            "Pt-192 from Ir-192(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
    RouteDescriptor(
        route_id="co59-ng-co60",
        category="industrial",
        target_isotope="Co-59",
        reaction=ReactionType.CAPTURE,
        nominal_sigma_barns=33.0,
        data_quality=PLANNING,
        product_isotope="Co-60",
        product_half_life_days=1925.0,
        chemical_separable=True,
        carrier_added_acceptable=True,
        impurity_risks=(
            "Co-60m from Co-59(n,γ)",
            "Ni-60 from Co-60 decay",
            "Fe-60 from Co-60(n,γ)",
        ),
        regulatory_flag=RegulatoryFlag.STANDARD,
    ),
)
"""Bundled planning routes."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class RouteRegistry:
    """Read-only lookup of routes by id and by product isotope

    Parameters
    ----------
    routes : iterable of RouteDescriptor
        Routes to register; ids must be unique.

    Raises
    ------
    RegistryError
        If two routes share an id.
    """

    def __init__(self, routes: Iterable[RouteDescriptor]) -> None:
        self._routes: dict[str, RouteDescriptor] = {}
        for route in routes:
            if route.route_id in self._routes:
                raise RegistryError(f"Duplicate route id {route.route_id!r}.")
            self._routes[route.route_id] = route
        logger.debug("Route registry loaded with %d routes.", len(self._routes))

    def get(self, route_id: str) -> RouteDescriptor:
        """Return the route registered as *route_id*

        Raises
        ------
        RegistryError
            If no route has that id.
        """
        try:
            return self._routes[route_id]
        except KeyError:
            raise RegistryError(f"Unknown route id {route_id!r}.") from None

    def find_by_product(self, product_isotope: str) -> list[RouteDescriptor]:
        """All routes that produce *product_isotope*, in registration order"""
        return [r for r in self._routes.values() if r.product_isotope == product_isotope]

    def ids(self) -> list[str]:
        return list(self._routes)

    def __contains__(self, route_id: object) -> bool:
        return route_id in self._routes

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)


def default_registry() -> RouteRegistry:
    """Registry populated with :data:`ROUTES`"""
    return RouteRegistry(ROUTES)
