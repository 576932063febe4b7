#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the pyisoroute command-line interface
"""

from __future__ import annotations

import json
import math

import pytest

from pyisoroute.cli import EXIT_INVALID_PARAMETERS, EXIT_UNKNOWN_ROUTE, build_parser, main


class TestParser:
    """Tests for build_parser"""

    def test_condition_defaults(self) -> None:
        args = build_parser().parse_args(["evaluate", "lu176-ng-lu177"])
        assert args.flux is None
        assert args.energy == 14.1
        assert args.context == "medical"
        assert not args.json

    def test_bad_context(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["batch", "--context", "military"])

    def test_no_command(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestCommands:
    """Tests for the list, evaluate, score and batch commands"""

    def test_list(self, capsys) -> None:
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "lu176-ng-lu177" in out
        assert len(out.strip().splitlines()) == 17

    def test_list_json(self, capsys) -> None:
        assert main(["list", "--json"]) == 0
        routes = json.loads(capsys.readouterr().out)
        assert routes[0]["route_id"] == "zn67-np-cu67"
        assert {"target", "product", "reaction", "half_life_days"} <= set(routes[0])

    def test_evaluate(self, capsys) -> None:
        argv = ["evaluate", "lu176-ng-lu177", "--flux", "1e14", "--enrichment", "0.75", "--days", "5"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "Route:              lu176-ng-lu177" in out
        assert "Classification:" in out

    def test_evaluate_json(self, capsys) -> None:
        assert main(["evaluate", "mo100-n2n-mo99", "--energy", "2.5", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["classification"] == "Not recommended"
        assert data["activity_eob_bq"] is None

    def test_score_json(self, capsys) -> None:
        assert main(["score", "co59-ng-co60", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["evaluation"]["route_id"] == "co59-ng-co60"
        assert 0.0 <= data["score"]["total"] <= 5.0

    def test_score_text(self, capsys) -> None:
        assert main(["score", "ho165-ng-ho166"]) == 0
        out = capsys.readouterr().out
        assert "total" in out
        assert "physics" in out

    def test_batch_is_ranked(self, capsys) -> None:
        assert main(["batch", "--json"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 17
        totals = [row["score"]["total"] for row in rows]
        assert totals == sorted(totals, reverse=True)


class TestChain:
    """Tests for the chain command"""

    def test_mo99_tc99m(self, capsys) -> None:
        argv = [
            "chain", "--half-lives", "2.75", "0.25", "--n0", "1e18", "0",
            "--names", "Mo-99", "Tc-99m", "--time", "86400", "--json",
        ]
        assert main(argv) == 0
        data = json.loads(capsys.readouterr().out)
        lam1 = math.log(2) / (2.75 * 86400.0)
        lam2 = math.log(2) / (0.25 * 86400.0)
        t = 86400.0
        tc = 1e18 * lam1 / (lam2 - lam1) * (math.exp(-lam1 * t) - math.exp(-lam2 * t))
        assert data["method"] == "recursive"
        assert data["populations"]["Mo-99"] == pytest.approx(1e18 * math.exp(-lam1 * t), rel=1e-9)
        assert data["populations"]["Tc-99m"] == pytest.approx(tc, rel=1e-9)

    def test_three_member_chain_conserves_atoms(self, capsys) -> None:
        argv = [
            "chain", "--half-lives", "2.75", "0.25", "0", "--n0", "1e18", "0", "0",
            "--names", "Mo-99", "Tc-99m", "Tc-99", "--time", "864000", "--json",
        ]
        assert main(argv) == 0
        data = json.loads(capsys.readouterr().out)
        populations = data["populations"]
        lam1 = math.log(2) / (2.75 * 86400.0)
        lam2 = math.log(2) / (0.25 * 86400.0)
        t = 864000.0
        tc99m = 1e18 * lam1 / (lam2 - lam1) * (math.exp(-lam1 * t) - math.exp(-lam2 * t))
        assert data["method"] == "rk4"
        assert sum(populations.values()) == pytest.approx(1e18, rel=1e-9)
        assert populations["Mo-99"] == pytest.approx(1e18 * math.exp(-lam1 * t), rel=1e-4)
        assert populations["Tc-99m"] == pytest.approx(tc99m, rel=1e-4)
        assert populations["Tc-99"] == pytest.approx(1e18 - 1e18 * math.exp(-lam1 * t) - tc99m, rel=1e-4)

    def test_explicit_method_is_kept(self, capsys) -> None:
        argv = ["chain", "--half-lives", "2.75", "0.25", "0", "--time", "3600", "--method", "euler", "--json"]
        assert main(argv) == 0
        assert json.loads(capsys.readouterr().out)["method"] == "euler"

    def test_stable_daughter_text(self, capsys) -> None:
        assert main(["chain", "--half-lives", "1.0", "0", "--time", "86400"]) == 0
        out = capsys.readouterr().out
        assert "N0" in out and "N1" in out
        assert "method: recursive" in out


# -----------------------------------------------------------------------
# Exit codes
# -----------------------------------------------------------------------

class TestExitCodes:
    """Tests for error exit codes"""

    def test_unknown_route(self, capsys) -> None:
        assert main(["evaluate", "no-such-route"]) == EXIT_UNKNOWN_ROUTE
        assert "no-such-route" in capsys.readouterr().err

    def test_invalid_conditions(self, capsys) -> None:
        assert main(["evaluate", "lu176-ng-lu177", "--enrichment", "1.5"]) == EXIT_INVALID_PARAMETERS
        assert "invalid parameters" in capsys.readouterr().err

    def test_chain_length_mismatch(self, capsys) -> None:
        argv = ["chain", "--half-lives", "1.0", "2.0", "--n0", "1.0", "--time", "10"]
        assert main(argv) == EXIT_INVALID_PARAMETERS

    def test_negative_time(self) -> None:
        assert main(["chain", "--half-lives", "1.0", "--time", "-5"]) == EXIT_INVALID_PARAMETERS
