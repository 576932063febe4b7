#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyIsoRoute - planning core for radioisotope production routes

Evaluate whether a target / reaction / product route can deliver a
useful activity under given irradiation conditions, flag impurity
traps, and rank routes on a transparent six-criterion score.

Pipeline
--------
1. **Registry** of production routes:
   ``pyisoroute list``

2. **Evaluate** one route (activation, burn-up, decay, gates):
   ``pyisoroute evaluate lu176-ng-lu177 --flux 1e14 --days 5``

3. **Score** the evaluation:
   ``pyisoroute score lu176-ng-lu177``

4. **Rank** every route:
   ``pyisoroute batch``

Modules
-------
physics
    Activation kinetics, burn-up, Bateman chain solvers and the
    time-dependent / spatial / Monte Carlo extensions.
routing
    Route evaluator and impurity assessment.
scoring
    Priority scorer.
data
    Route registry, canonical pathways and nuclear constants.
models
    Typed dataclass records shared by every layer.
utils
    Parsing helpers, validators and physical constants.

Examples
--------
>>> from pyisoroute import OperatingConditions, RouteEvaluator, default_registry, score_route
>>> route = default_registry().get("lu176-ng-lu177")
>>> result = RouteEvaluator().evaluate(route, OperatingConditions(neutron_flux=1e14))
>>> breakdown = score_route(route, result)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyisoroute.models.records import (
    Advisory,
    ChainIsotope,
    Classification,
    DecayChainSpec,
    EvaluationResult,
    OperatingConditions,
    Priority,
    ReactionType,
    RiskLevel,
    RouteDescriptor,
    ScoreBreakdown,
)
from pyisoroute.data.nuclear import BuiltinNuclearData, NuclearDataProvider, NullNuclearData
from pyisoroute.data.routes import RouteRegistry, default_registry
from pyisoroute.physics.bateman import ChainSolution, solve_chain
from pyisoroute.routing.evaluator import RouteEvaluator, evaluate_route
from pyisoroute.scoring.scorer import score_route
from pyisoroute.exceptions import (
    PyIsoRouteError,
    InvalidInputError,
    InvalidParameterError,
    ParseError,
    RegistryError,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "Advisory",
    "ChainIsotope",
    "Classification",
    "DecayChainSpec",
    "EvaluationResult",
    "OperatingConditions",
    "Priority",
    "ReactionType",
    "RiskLevel",
    "RouteDescriptor",
    "ScoreBreakdown",
    # Data
    "BuiltinNuclearData",
    "NuclearDataProvider",
    "NullNuclearData",
    "RouteRegistry",
    "default_registry",
    # Physics
    "ChainSolution",
    "solve_chain",
    # Evaluation and scoring
    "RouteEvaluator",
    "evaluate_route",
    "score_route",
    # Exceptions
    "PyIsoRouteError",
    "InvalidInputError",
    "InvalidParameterError",
    "ParseError",
    "RegistryError",
]
