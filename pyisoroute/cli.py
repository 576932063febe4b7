#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyIsoRoute command-line interface

Commands:

1. **list**     : Show the bundled planning routes
2. **evaluate** : Feasibility verdict and physics figures for one route
3. **score**    : Evaluate one route and print its priority breakdown
4. **batch**    : Evaluate and score every route, ranked by total score
5. **chain**    : Solve a linear decay chain

Usage
-----
::

    # Lu-177 from enriched Lu-176, 5 days at 1e14
    pyisoroute evaluate lu176-ng-lu177 --flux 1e14 --enrichment 0.75 --days 5

    # Rank every route for industrial use, as JSON
    pyisoroute batch --context industrial --json

    # Mo-99 -> Tc-99m populations after one day
    pyisoroute chain --half-lives 2.75 0.25 --n0 1e18 0 --time 86400

Exit codes: 0 on success, 1 for an unknown route id, 2 for invalid
parameters.  Evaluations use the bundled nuclear data.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from pyisoroute.data.nuclear import BuiltinNuclearData
from pyisoroute.data.routes import default_registry
from pyisoroute.exceptions import InvalidInputError, RegistryError
from pyisoroute.models.records import (
    ApplicationContext,
    ChainIsotope,
    DecayChainSpec,
    OperatingConditions,
    ThresholdMode,
)
from pyisoroute.physics.bateman import SOLVER_METHODS, solve_chain
from pyisoroute.physics.kinetics import decay_constant
from pyisoroute.routing.evaluator import RouteEvaluator
from pyisoroute.scoring.scorer import score_route
from pyisoroute.utils.constants import BQ_PER_GBQ, BQ_PER_TBQ, SECONDS_PER_DAY

logger = logging.getLogger("pyisoroute.cli")

EXIT_UNKNOWN_ROUTE = 1
EXIT_INVALID_PARAMETERS = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _conditions(args) -> OperatingConditions:
    return OperatingConditions(
        neutron_flux=args.flux,
        neutron_energy_mev=args.energy,
        target_mass_g=args.mass,
        enrichment=args.enrichment,
        irradiation_time_s=args.days * SECONDS_PER_DAY,
        self_shielding=args.self_shielding,
        target_density_atoms_cm3=args.density,
        target_thickness_cm=args.thickness,
        chemistry_delay_hours=args.delay_hours,
        transport_time_hours=args.transport_hours,
        application_context=ApplicationContext(args.context),
        threshold_mode=ThresholdMode.ENERGY_SCALED if args.energy_scaled else ThresholdMode.STEP,
        pure_thermal_spectrum=args.pure_thermal,
    )


def _fmt(value: float | None, scale: float = 1.0, spec: str = ".4g") -> str:
    if value is None:
        return "-"
    return format(value / scale, spec)


def _print_evaluation(result) -> None:
    print(f"Route:              {result.route_id}")
    print(f"Classification:     {result.classification.value}")
    print(f"Impurity risk:      {result.impurity_risk_level.value}")
    print(f"Reaction rate:      {_fmt(result.reaction_rate, spec='.3e')} 1/s")
    print(f"Saturation:         {_fmt(result.saturation)}")
    print(f"Activity (EOB):     {_fmt(result.activity_eob_bq, BQ_PER_GBQ)} GBq")
    print(f"Delivered activity: {_fmt(result.delivered_activity_bq, BQ_PER_GBQ)} GBq")
    print(f"Specific activity:  {_fmt(result.specific_activity_bq_per_g, BQ_PER_TBQ)} TBq/g")
    for reason in result.reasons:
        print(f"  reason:  {reason}")
    for advisory in result.warnings:
        print(f"  warning: [{advisory.severity.value}] {advisory.message}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_list(args) -> int:
    registry = default_registry()
    if args.json:
        print(json.dumps([
            {
                "route_id": r.route_id,
                "category": r.category,
                "target": r.target_isotope,
                "product": r.product_isotope,
                "reaction": r.reaction.value,
                "half_life_days": r.product_half_life_days,
            }
            for r in registry
        ], indent=2))
        return 0
    for r in registry:
        print(
            f"{r.route_id:<26s} {r.category:<11s} "
            f"{r.target_isotope:>7s} ({r.reaction.value}) {r.product_isotope:<8s} "
            f"T1/2={r.product_half_life_days:g} d"
        )
    return 0


def cmd_evaluate(args) -> int:
    route = default_registry().get(args.route_id)
    result = RouteEvaluator(BuiltinNuclearData()).evaluate(route, _conditions(args))
    if args.json:
        print(json.dumps(result.as_dict(), indent=2))
    else:
        _print_evaluation(result)
    return 0


def cmd_score(args) -> int:
    route = default_registry().get(args.route_id)
    result = RouteEvaluator(BuiltinNuclearData()).evaluate(route, _conditions(args))
    breakdown = score_route(route, result)
    if args.json:
        print(json.dumps({"evaluation": result.as_dict(), "score": breakdown.as_dict()}, indent=2))
        return 0
    _print_evaluation(result)
    print()
    for label, value in breakdown.as_dict().items():
        if label in ("total", "priority"):
            continue
        print(f"  {label:<18s} {value:4.2f}")
    print(f"  {'total':<18s} {breakdown.total:4.2f}  ({breakdown.priority.value})")
    return 0


def cmd_batch(args) -> int:
    registry = default_registry()
    evaluator = RouteEvaluator(BuiltinNuclearData())
    conditions = _conditions(args)
    rows = []
    for route in registry:
        result = evaluator.evaluate(route, conditions)
        rows.append((route, result, score_route(route, result)))
    rows.sort(key=lambda row: row[2].total, reverse=True)

    if args.json:
        print(json.dumps([
            {
                "route_id": route.route_id,
                "classification": result.classification.value,
                "activity_eob_gbq": result.activity_eob_gbq,
                "score": breakdown.as_dict(),
            }
            for route, result, breakdown in rows
        ], indent=2))
        return 0

    print(f"{'#':>3s}  {'route':<26s} {'classification':<26s} {'A_EOB [GBq]':>12s} {'score':>6s}  priority")
    for rank, (route, result, breakdown) in enumerate(rows, start=1):
        print(
            f"{rank:3d}  {route.route_id:<26s} {result.classification.value:<26s} "
            f"{_fmt(result.activity_eob_bq, BQ_PER_GBQ, '.3g'):>12s} "
            f"{breakdown.total:6.2f}  {breakdown.priority.value}"
        )
    return 0


def cmd_chain(args) -> int:
    half_lives = args.half_lives
    n0 = args.n0 if args.n0 is not None else [1.0] + [0.0] * (len(half_lives) - 1)
    if len(n0) != len(half_lives):
        raise InvalidInputError(
            f"--n0 has {len(n0)} values but --half-lives has {len(half_lives)}."
        )
    names = args.names if args.names is not None else [f"N{i}" for i in range(len(half_lives))]
    if len(names) != len(half_lives):
        raise InvalidInputError(
            f"--names has {len(names)} values but --half-lives has {len(half_lives)}."
        )

    members = []
    for i, (name, half_life) in enumerate(zip(names, half_lives)):
        lam = 0.0 if half_life <= 0 else decay_constant(half_life)
        parents = ((names[i - 1], 1.0),) if i > 0 else ()
        members.append(ChainIsotope(name, lam, parents))
    method = args.method
    if method is None:
        # the closed form only feeds from direct parents
        method = "rk4" if len(members) >= 3 else "auto"
    solution = solve_chain(DecayChainSpec(tuple(members)), n0, args.time, method=method)

    if args.json:
        print(json.dumps({
            "time_s": solution.time_s,
            "method": solution.method,
            "populations": dict(zip(solution.names, solution.populations.tolist())),
            "activities_bq": dict(zip(solution.names, solution.activities.tolist())),
            "advisories": [a.message for a in solution.advisories],
        }, indent=2))
        return 0
    print(f"t = {solution.time_s:g} s  (method: {solution.method})")
    for name, atoms, act in zip(solution.names, solution.populations, solution.activities):
        print(f"  {name:<10s} N = {atoms:.6e}   A = {act:.6e} Bq")
    for advisory in solution.advisories:
        print(f"  warning: {advisory.message}")
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _condition_options() -> argparse.ArgumentParser:
    opts = argparse.ArgumentParser(add_help=False)
    opts.add_argument("--flux", type=float, default=None,
                      help="Neutron flux in cm^-2 s^-1 (default: reaction-type default)")
    opts.add_argument("--energy", type=float, default=14.1,
                      help="Neutron energy in MeV (default: 14.1)")
    opts.add_argument("--mass", type=float, default=1.0,
                      help="Target mass in g (default: 1.0)")
    opts.add_argument("--enrichment", type=float, default=1.0,
                      help="Target-isotope enrichment fraction (default: 1.0)")
    opts.add_argument("--days", type=float, default=1.0,
                      help="Irradiation time in days (default: 1.0)")
    opts.add_argument("--self-shielding", type=float, default=1.0,
                      help="Production self-shielding factor (default: 1.0)")
    opts.add_argument("--thickness", type=float, default=None,
                      help="Target thickness in cm (default: 0.2 where needed)")
    opts.add_argument("--density", type=float, default=None,
                      help="Target atom density in atoms/cm^3 (default: 5e22 where needed)")
    opts.add_argument("--delay-hours", type=float, default=0.0,
                      help="Chemistry delay after EOB in hours")
    opts.add_argument("--transport-hours", type=float, default=0.0,
                      help="Transport time after chemistry in hours")
    opts.add_argument("--context", choices=[c.value for c in ApplicationContext], default="medical",
                      help="Application context for activity thresholds (default: medical)")
    opts.add_argument("--energy-scaled", action="store_true",
                      help="Scale threshold cross sections with energy instead of a step")
    opts.add_argument("--pure-thermal", action="store_true",
                      help="Declare a pure thermal spectrum (silences resonance warnings)")
    opts.add_argument("--json", action="store_true", help="Print JSON instead of text")
    return opts


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyisoroute",
        description="Radioisotope production route planning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    conditions = _condition_options()
    sub = parser.add_subparsers(dest="command", help="Command to run")

    p_list = sub.add_parser("list", help="List the bundled production routes")
    p_list.add_argument("--json", action="store_true", help="Print JSON instead of text")

    p_eval = sub.add_parser("evaluate", parents=[conditions], help="Evaluate one route")
    p_eval.add_argument("route_id", help="Route identifier (see 'list')")

    p_score = sub.add_parser("score", parents=[conditions], help="Evaluate and score one route")
    p_score.add_argument("route_id", help="Route identifier (see 'list')")

    sub.add_parser("batch", parents=[conditions], help="Evaluate, score and rank every route")

    p_chain = sub.add_parser("chain", help="Solve a linear decay chain")
    p_chain.add_argument("--half-lives", type=float, nargs="+", required=True,
                         help="Half-lives in days, parent first (0 = stable)")
    p_chain.add_argument("--n0", type=float, nargs="+", default=None,
                         help="Initial atoms per member (default: 1 parent atom)")
    p_chain.add_argument("--names", nargs="+", default=None,
                         help="Member names (default: N0, N1, ...)")
    p_chain.add_argument("--time", type=float, required=True, help="Elapsed time in s")
    p_chain.add_argument("--method", choices=SOLVER_METHODS, default=None,
                         help="Solver (default: closed form for 2 members, rk4 for longer chains)")
    p_chain.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    t0 = time.time()

    commands = {
        "list": cmd_list,
        "evaluate": cmd_evaluate,
        "score": cmd_score,
        "batch": cmd_batch,
        "chain": cmd_chain,
    }

    try:
        rc = commands[args.command](args)
    except RegistryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNKNOWN_ROUTE
    except InvalidInputError as exc:
        print(f"error: invalid parameters: {exc}", file=sys.stderr)
        return EXIT_INVALID_PARAMETERS
    elapsed = time.time() - t0
    logger.debug("Completed in %.3fs", elapsed)
    return rc


if __name__ == "__main__":
    sys.exit(main())
