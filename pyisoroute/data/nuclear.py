#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Nuclear-data capability consumed by the route evaluator

The evaluator never imports lookup tables directly.  It receives a
:class:`NuclearDataProvider` and asks it for atomic masses, natural
isotopic abundances and canonical pathway overrides.  Two providers
ship with the package:

* :class:`NullNuclearData`: knows nothing; every lookup returns ``None``
  and the evaluator falls back to its conservative defaults.
* :class:`BuiltinNuclearData`: serves the bundled planning-grade tables
  below and the pathway registry from :mod:`pyisoroute.data.pathways`.

References
----------
.. [1] NIST Standard Reference Database 144, "Atomic Weights and
   Isotopic Compositions with Relative Atomic Masses" (2023).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pyisoroute.models.records import Pathway

if TYPE_CHECKING:
    from pyisoroute.models.records import RouteDescriptor

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Standard atomic weights (g/mol)
# ---------------------------------------------------------------------------

ATOMIC_MASSES: dict[str, float] = {
    # Lanthanides
    "Lu": 174.9668,
    "Ho": 164.93033,
    "Sm": 150.36,
    "Dy": 162.500,
    "Tm": 168.93422,
    "Er": 167.259,
    "Eu": 151.964,
    "Tb": 158.925354,
    "Yb": 173.045,
    # Transition metals
    "Sc": 44.955908,
    "Ti": 47.867,
    "Fe": 55.845,
    "Co": 58.933194,
    "Ni": 58.6934,
    "Cu": 63.546,
    "Zn": 65.38,
    "Y": 88.90584,
    "Mo": 95.95,
    "Tc": 98.0,
    "W": 183.84,
    "Re": 186.207,
    "Os": 190.23,
    "Ir": 192.217,
    "Pt": 195.084,
    "Au": 196.966569,
    # Post-transition and others
    "H": 1.00794,
    "O": 15.999,
    "Ca": 40.078,
    "In": 114.818,
    "Sn": 118.710,
    "Xe": 131.293,
    "Tl": 204.3833,
    "Pb": 207.2,
    "Bi": 208.98040,
    # Actinides and heavy radioelements (mass of the common isotope)
    "Rn": 222.0,
    "Fr": 223.0,
    "Ra": 226.0,
    "Ac": 227.0,
    "Th": 232.0377,
    "U": 238.02891,
}
"""Standard atomic weights by element symbol."""

COMPOUND_FORMULAS: dict[str, tuple[tuple[str, int], ...]] = {
    "Lu2O3": (("Lu", 2), ("O", 3)),
    "MoO3": (("Mo", 1), ("O", 3)),
    "TiO2": (("Ti", 1), ("O", 2)),
}
"""Stoichiometry of the common oxide target forms."""


# ---------------------------------------------------------------------------
# Natural isotopic abundances (atom fraction)
# ---------------------------------------------------------------------------

ISOTOPIC_ABUNDANCES: dict[str, dict[int, float]] = {
    "Zn": {64: 0.492, 66: 0.278, 67: 0.041, 68: 0.188},
    "Ti": {46: 0.0825, 47: 0.0744, 48: 0.7372, 49: 0.0541, 50: 0.0518},
    "Mo": {92: 0.1484, 94: 0.0925, 95: 0.1592, 96: 0.1668, 97: 0.0955, 98: 0.2413, 100: 0.0963},
    "Lu": {175: 0.9741, 176: 0.0259},
    "Ho": {165: 1.0},
    "Sm": {144: 0.0307, 147: 0.1499, 148: 0.1124, 149: 0.1382, 150: 0.0738, 152: 0.2675, 154: 0.2275},
    "Dy": {156: 0.0006, 158: 0.0010, 160: 0.0234, 161: 0.1889, 162: 0.2548, 163: 0.2486, 164: 0.2826},
    "Re": {185: 0.3740, 187: 0.6260},
    "Au": {197: 1.0},
    "W": {180: 0.0012, 182: 0.2650, 183: 0.1431, 184: 0.3064, 186: 0.2843},
    "Sn": {112: 0.0097, 114: 0.0066, 115: 0.0034, 116: 0.1454, 117: 0.0768,
           118: 0.2422, 119: 0.0859, 120: 0.3259, 122: 0.0463, 124: 0.0579},
    "Ir": {191: 0.373, 193: 0.627},
    "Co": {59: 1.0},
    "Cu": {63: 0.6915, 65: 0.3085},
    "Sc": {45: 1.0},
    "Y": {89: 1.0},
}
"""Natural abundances keyed by element symbol, then mass number."""


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

class NuclearDataProvider(ABC):
    """Abstract capability for nuclear-data lookups

    Every method returns ``None`` when the value is unknown; callers
    decide which conservative default to substitute and whether to warn.
    """

    @abstractmethod
    def get_atomic_mass(self, symbol: str) -> float | None:
        """Standard atomic weight (g/mol) of element *symbol*, or ``None``"""

    @abstractmethod
    def get_abundance(self, symbol: str, mass_number: int) -> float | None:
        """Natural atom fraction of isotope ``symbol-mass_number``, or ``None``"""

    @abstractmethod
    def lookup_pathway(self, route: RouteDescriptor) -> Pathway | None:
        """Canonical pathway matching *route*, or ``None``"""

    @property
    def provides_pathways(self) -> bool:
        """Whether a ``None`` from :meth:`lookup_pathway` means "not registered" """
        return False


class NullNuclearData(NuclearDataProvider):
    """Provider that knows nothing; the evaluator's default"""

    def get_atomic_mass(self, symbol: str) -> float | None:
        return None

    def get_abundance(self, symbol: str, mass_number: int) -> float | None:
        return None

    def lookup_pathway(self, route: RouteDescriptor) -> Pathway | None:
        return None


class BuiltinNuclearData(NuclearDataProvider):
    """Provider backed by the bundled planning-grade tables

    Parameters
    ----------
    pathways : iterable of Pathway, optional
        Canonical pathways to serve.  Defaults to
        :data:`pyisoroute.data.pathways.PATHWAYS`.
    atomic_masses, abundances : dict, optional
        Replacement tables, mainly for tests.
    """

    def __init__(self, pathways=None, atomic_masses=None, abundances=None) -> None:
        if pathways is None:
            from pyisoroute.data.pathways import PATHWAYS
            pathways = PATHWAYS
        self._pathways: tuple[Pathway, ...] = tuple(pathways)
        self._masses = dict(ATOMIC_MASSES if atomic_masses is None else atomic_masses)
        self._abundances = ISOTOPIC_ABUNDANCES if abundances is None else abundances

    def get_atomic_mass(self, symbol: str) -> float | None:
        mass = self._masses.get(symbol.strip())
        if mass is None:
            logger.debug("No atomic mass tabulated for %r.", symbol)
        return mass

    def get_compound_mass(self, formula: str) -> float | None:
        """Average atomic mass per atom of an oxide target, or ``None``

        Examples
        --------
        >>> round(BuiltinNuclearData().get_compound_mass("Lu2O3"), 2)
        79.59
        """
        parts = COMPOUND_FORMULAS.get(formula)
        if parts is None:
            return None
        total_mass = 0.0
        total_atoms = 0
        for symbol, count in parts:
            mass = self.get_atomic_mass(symbol)
            if mass is None:
                return None
            total_mass += mass * count
            total_atoms += count
        return total_mass / total_atoms

    def get_abundance(self, symbol: str, mass_number: int) -> float | None:
        return self._abundances.get(symbol, {}).get(int(mass_number))

    def lookup_pathway(self, route: RouteDescriptor) -> Pathway | None:
        candidates = [
            p for p in self._pathways
            if p.target_isotope == route.target_isotope
            and p.product_isotope == route.product_isotope
            and p.reaction is route.reaction
        ]
        if not candidates:
            return None
        for pathway in candidates:
            if pathway.carrier_added_acceptable in (None, route.carrier_added_acceptable):
                logger.debug("Route %s matched pathway %s.", route.route_id, pathway.pathway_id)
                return pathway
        return candidates[0]

    @property
    def provides_pathways(self) -> bool:
        return bool(self._pathways)
