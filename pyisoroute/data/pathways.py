#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Canonical production pathways

Pathways carry the best available production data for well-known
routes.  When :class:`~pyisoroute.data.nuclear.BuiltinNuclearData`
matches a route to a pathway, the evaluator uses these values in place
of the route's planning metadata.  Cross sections are stored in cm².
"""

from __future__ import annotations

from pyisoroute.models.records import Pathway, ReactionType
from pyisoroute.utils.constants import BARN_TO_CM2

PATHWAYS: tuple[Pathway, ...] = (
    Pathway(
        pathway_id="LU177_NCA",
        target_isotope="Lu-176",
        product_isotope="Lu-177",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=2090 * BARN_TO_CM2,
        carrier_added_acceptable=False,
        default_chemistry_yield=0.9,
        resonance_dominated=True,
        product_burn_sigma_cm2=2.0e-21,
    ),
    Pathway(
        pathway_id="LU177_CA",
        target_isotope="Lu-176",
        product_isotope="Lu-177",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=2090 * BARN_TO_CM2,
        carrier_added_acceptable=True,
        default_chemistry_yield=0.95,
    ),
    Pathway(
        pathway_id="HO166",
        target_isotope="Ho-165",
        product_isotope="Ho-166",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=60 * BARN_TO_CM2,
        default_chemistry_yield=0.95,
    ),
    Pathway(
        pathway_id="SM153",
        target_isotope="Sm-152",
        product_isotope="Sm-153",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=206 * BARN_TO_CM2,
        default_chemistry_yield=0.9,
    ),
    Pathway(
        pathway_id="MO99_TC99M",
        target_isotope="Mo-98",
        product_isotope="Mo-99",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=0.13 * BARN_TO_CM2,
        default_chemistry_yield=0.85,
    ),
    Pathway(
        pathway_id="W188_RE188",
        target_isotope="W-186",
        product_isotope="W-188",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=37.9 * BARN_TO_CM2,
        default_chemistry_yield=0.85,
    ),
    Pathway(
        pathway_id="CU64",
        target_isotope="Cu-63",
        product_isotope="Cu-64",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=4.5 * BARN_TO_CM2,
        default_chemistry_yield=0.9,
    ),
    Pathway(
        pathway_id="Y90",
        target_isotope="Y-89",
        product_isotope="Y-90",
        reaction=ReactionType.CAPTURE,
        sigma_cm2=1.28 * BARN_TO_CM2,
        default_chemistry_yield=0.9,
    ),
    Pathway(
        pathway_id="CU67_FAST",
        target_isotope="Zn-67",
        product_isotope="Cu-67",
        reaction=ReactionType.N_P,
        sigma_cm2=0.100 * BARN_TO_CM2,
        default_chemistry_yield=0.7,
    ),
    Pathway(
        pathway_id="SC47_FAST",
        target_isotope="Ti-47",
        product_isotope="Sc-47",
        reaction=ReactionType.N_P,
        sigma_cm2=0.080 * BARN_TO_CM2,
        default_chemistry_yield=0.8,
    ),
)
"""Bundled canonical pathways."""
