#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Impurity catalogs used by the contamination-risk assessment

Three fixed tables:

* :data:`LONG_LIVED_IMPURITIES`: species historically observed to
  accumulate across production cycles.
* :data:`IMPURITY_HALF_LIVES`: half-lives (days) of impurities that
  appear in route descriptors; ``math.inf`` marks a stable nuclide.
* :data:`IMPURITY_CROSS_SECTIONS`: planning-grade production cross
  sections (barns) keyed ``"<parent>(<reaction>)<impurity>"``.

All values are planning estimates, not evaluated nuclear data.
"""

from __future__ import annotations

import math

LONG_LIVED_IMPURITIES: frozenset[str] = frozenset({
    "Mo-100", "Sr-90", "Co-60", "Lu-178", "W-188", "Ni-59",
    "Cu-65", "Zn-67", "Ho-166", "Tm-170", "Bi-210", "Tl-204",
})
"""Isotopes flagged for cross-cycle accumulation risk."""

IMPURITY_HALF_LIVES: dict[str, float] = {
    "Mo-100": 1e6,
    "Sr-90": 10512.0,
    "Co-60": 1925.0,
    "Lu-178": 28.4,
    "W-188": 69.4,
    "Ni-59": 2.5e6,
    "Cu-65": math.inf,
    "Zn-67": 2.4,
    "Ho-166": 1.12,
    "Tm-170": 128.6,
    "Bi-210": 5.0,
    "Tl-204": 3.78,
    "Cu-64": 0.53,
    "Zn-65": 244.0,
    "Ni-63": 96.0 * 365.25,
    "Sc-46": 83.8,
    "Ti-48": math.inf,
    "Ca-47": 4.54,
    "Ti-49": math.inf,
    "Mo-98": math.inf,
    "Tc-99m": 0.25,
    "Tc-99g": 2.13e5,
    "Re-188": 0.71,
    "Os-188": math.inf,
    "Sn-117g": math.inf,
    "Sn-118": math.inf,
    "In-117": 0.25,
    "Ra-224": 3.66,
    "Rn-221": 0.0003,
    "Fr-221": 0.0003,
    "Bi-213": 0.0007,
    "Ir-192m": 241.0,
    "Ir-193": math.inf,
    "Os-192": math.inf,
    "Pt-192": math.inf,
    "Co-60m": 0.0004,
    "Ni-60": math.inf,
    "Fe-60": 1e6,
}
"""Impurity half-lives in days (``inf`` = stable)."""

IMPURITY_CROSS_SECTIONS: dict[str, float] = {
    "Zn-64(n,p)Cu-64": 0.015,
    "Zn-67(n,γ)Zn-65": 0.1,
    "Cu-63(n,p)Ni-63": 0.008,
    "Sc-47(n,γ)Sc-46": 0.05,
    "Ti-47(n,γ)Ti-48": 0.05,
    "Ti-48(n,γ)Ti-49": 0.05,
    "Mo-99(n,γ)Mo-100": 0.15,
    "Mo-99(n,2n)Mo-98": 0.3,
    "Ho-165(n,γ)Ho-166m": 0.5,
    "Sm-153(n,γ)Sm-154": 0.2,
    "Dy-165(n,γ)Dy-166": 0.3,
    "Re-186(n,γ)Re-187": 0.12,
    "Au-198(n,γ)Au-199": 0.25,
    "Lu-177(n,γ)Lu-178": 0.2,
    "W-188(n,γ)W-189": 0.15,
    "Sn-117m(n,γ)Sn-118": 0.08,
    "Ra-225(n,γ)Ra-224": 0.1,
    "Ir-192(n,γ)Ir-193": 0.18,
    "Co-60(n,γ)Co-61": 0.2,
}
"""Impurity production cross sections in barns."""


def impurity_reaction_key(parent: str, reaction: str, impurity: str) -> str:
    """Catalog key for an impurity production channel

    Examples
    --------
    >>> impurity_reaction_key("Zn-64", "n,p", "Cu-64")
    'Zn-64(n,p)Cu-64'
    """
    return f"{parent}({reaction}){impurity}"
