#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Static reference data: routes, canonical pathways, nuclear constants

Everything here is immutable module-level data plus the
:class:`~pyisoroute.data.nuclear.NuclearDataProvider` interface through
which the evaluator reads it.
"""

from __future__ import annotations

from pyisoroute.data.nuclear import (
    BuiltinNuclearData,
    NuclearDataProvider,
    NullNuclearData,
)
from pyisoroute.data.routes import ROUTES, RouteRegistry, default_registry

__all__ = [
    "BuiltinNuclearData",
    "NuclearDataProvider",
    "NullNuclearData",
    "ROUTES",
    "RouteRegistry",
    "default_registry",
]
