#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Decay-chain (Bateman) solver

Populations of an isotope network evolve as ``dN/dt = Λ · N`` where the
decay matrix has ``Λ[i][i] = −λᵢ`` and ``Λ[i][j] = BR_{j→i} · λⱼ``.
Two solution paths are provided:

* :func:`bateman_recursive`: closed form, used for chains of up to
  four members.  Every parent feeding an isotope contributes the
  two-term exponential difference, with the secular-equilibrium limit
  when the decay constants coincide.
* :func:`bateman_euler`: explicit Euler matrix integration with a
  stability guard (``λ_max · dt ≤ 0.2``) and a hard step cap, used for
  longer networks.

:func:`bateman_runge_kutta` is an RK4 alternative for stiff cross-checks,
and :func:`solve_chain` wraps all of them for :class:`DecayChainSpec`
inputs, returning populations together with any advisories raised.

Checked Constraints
-------------------
* Initial vectors and matrices must be finite, 1-D / square, conformant.
* Time must be non-negative.
* Branching ratios must lie in [0, 1]; a parent whose branching ratios
  sum above 1 is reported as a data-quality advisory.
* Populations are clamped at zero after every step.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from pyisoroute.exceptions import InvalidInputError
from pyisoroute.models.records import Advisory, DecayChainSpec, Severity
from pyisoroute.utils.constants import (
    EQUAL_LAMBDA_EPS,
    EULER_INITIAL_DT,
    EULER_STABILITY_LIMIT,
    MAX_EULER_STEPS,
    RECURSIVE_MAX_CHAIN,
)
from pyisoroute.utils.validation import require_fraction, require_non_negative, validate_chain_inputs

logger = logging.getLogger(__name__)

BRANCHING_TOLERANCE: float = 1e-9
"""Slack allowed on a parent's branching-ratio sum before it is flagged."""


# ---------------------------------------------------------------------------
# Chain specification → matrix
# ---------------------------------------------------------------------------

def build_decay_matrix(chain: DecayChainSpec) -> np.ndarray:
    """Decay matrix Λ for *chain*

    Parameters
    ----------
    chain : DecayChainSpec
        Ordered isotope network.

    Returns
    -------
    numpy.ndarray
        Square ``(n, n)`` matrix with ``Λ[i][i] = −λᵢ`` and
        ``Λ[i][j] = BR_{j→i} · λⱼ``.

    Examples
    --------
    >>> from pyisoroute.models.records import ChainIsotope, DecayChainSpec
    >>> chain = DecayChainSpec((ChainIsotope("A", 0.1), ChainIsotope("B", 0.0, (("A", 1.0),))))
    >>> build_decay_matrix(chain).tolist()
    [[-0.1, 0.0], [0.1, -0.0]]
    """
    n = len(chain)
    matrix = np.zeros((n, n), dtype="f8")
    for i, iso in enumerate(chain.isotopes):
        matrix[i, i] = -iso.decay_constant
        for parent, ratio in iso.parents:
            j = chain.index(parent)
            if j == i:
                raise InvalidInputError(f"Isotope {iso.name!r} lists itself as a parent.")
            matrix[i, j] += ratio * chain.isotopes[j].decay_constant
    for advisory in branching_advisories(chain):
        logger.warning(advisory.message)
    return matrix


def branching_advisories(chain: DecayChainSpec) -> list[Advisory]:
    """Advisories for parents whose outgoing branching ratios sum above 1"""
    totals: dict[str, float] = {}
    for iso in chain.isotopes:
        for parent, ratio in iso.parents:
            totals[parent] = totals.get(parent, 0.0) + ratio
    return [
        Advisory(
            f"Branching ratios from {parent} sum to {total:.4f} (> 1) - decay probability not conserved",
            Severity.MODERATE,
            "bateman",
        )
        for parent, total in totals.items()
        if total > 1.0 + BRANCHING_TOLERANCE
    ]


# ---------------------------------------------------------------------------
# Closed-form solutions
# ---------------------------------------------------------------------------

def _feed_term(n_parent0: float, ratio: float, lam_parent: float, lam_daughter: float, t: float) -> float:
    """Daughter atoms at *t* fed by an initially pure parent population"""
    if abs(lam_daughter - lam_parent) < EQUAL_LAMBDA_EPS:
        return n_parent0 * ratio * lam_parent * t * math.exp(-lam_parent * t)
    return (
        n_parent0 * ratio * (lam_parent / (lam_daughter - lam_parent))
        * (math.exp(-lam_parent * t) - math.exp(-lam_daughter * t))
    )


def bateman_one_step(
    n_parent0: float,
    branching_ratio: float,
    lam_parent: float,
    lam_daughter: float,
    t: float,
) -> tuple[float, float]:
    """Parent and daughter populations of a two-member chain

    The daughter starts empty.  This is the direct closed form for the
    common parent→daughter case.

    Parameters
    ----------
    n_parent0 : float
        Parent atoms at ``t = 0``.
    branching_ratio : float
        Fraction of parent decays feeding the daughter, in [0, 1].
    lam_parent, lam_daughter : float
        Decay constants (1/s).
    t : float
        Elapsed time (s).

    Returns
    -------
    tuple[float, float]
        ``(N_parent(t), N_daughter(t))``, both ≥ 0.
    """
    n_parent0 = require_non_negative(n_parent0, "n_parent0")
    branching_ratio = require_fraction(branching_ratio, "branching_ratio")
    lam_parent = require_non_negative(lam_parent, "lam_parent")
    lam_daughter = require_non_negative(lam_daughter, "lam_daughter")
    t = require_non_negative(t, "t")
    n_parent = n_parent0 * math.exp(-lam_parent * t)
    n_daughter = _feed_term(n_parent0, branching_ratio, lam_parent, lam_daughter, t)
    return max(n_parent, 0.0), max(n_daughter, 0.0)


def bateman_recursive(n0, matrix, t: float) -> np.ndarray:
    """Closed-form populations for a short chain

    For each isotope i the result is its own decayed inventory plus,
    for every parent j with a positive feed, the two-term exponential
    difference ``N₀ⱼ·BR·λⱼ/(λᵢ−λⱼ)·(e^(−λⱼt) − e^(−λᵢt))``.  Parents are
    scanned regardless of index order, so branching networks with
    several parents per daughter are supported.

    Parameters
    ----------
    n0 : array_like
        Initial populations, shape ``(n,)``.
    matrix : array_like
        Decay matrix Λ, shape ``(n, n)``.
    t : float
        Elapsed time (s).

    Returns
    -------
    numpy.ndarray
        Populations at *t*, clamped at zero.
    """
    vec, mat, t = validate_chain_inputs(n0, matrix, t)
    lam = -np.diag(mat)
    result = vec * np.exp(-lam * t)
    n = vec.size
    for i in range(n):
        for j in range(n):
            if i == j or mat[i, j] <= 0 or vec[j] <= 0 or lam[j] <= 0:
                continue
            ratio = mat[i, j] / lam[j]
            result[i] += _feed_term(vec[j], ratio, lam[j], lam[i], t)
    return np.maximum(result, 0.0)


# ---------------------------------------------------------------------------
# Numerical integrators
# ---------------------------------------------------------------------------

def _max_decay_constant(mat: np.ndarray) -> float:
    return float(max(np.max(-np.diag(mat)), 0.0))


def bateman_euler(
    n0,
    matrix,
    t: float,
    max_steps: int = MAX_EULER_STEPS,
    advisories: list[Advisory] | None = None,
) -> np.ndarray:
    """Adaptive explicit-Euler integration of ``dN/dt = Λ · N``

    The time step starts at ``min(t/1000, 0.1 s)``.  If that violates
    ``λ_max · dt ≤ 0.2`` it is reduced to ``0.2/λ_max`` and a warning is
    emitted.  If the resulting step count exceeds *max_steps*, the step
    is widened to ``t/max_steps`` as long as stability allows; otherwise
    the solve is refused.

    Parameters
    ----------
    n0 : array_like
        Initial populations, shape ``(n,)``.
    matrix : array_like
        Decay matrix Λ, shape ``(n, n)``.
    t : float
        Elapsed time (s).
    max_steps : int, optional
        Upper bound on the number of integration steps.
    advisories : list of Advisory, optional
        When given, a stability-guard advisory is appended to it.

    Returns
    -------
    numpy.ndarray
        Populations at *t*, clamped at zero after every step.

    Raises
    ------
    InvalidInputError
        If the inputs are malformed, or if a stable integration would
        need more than *max_steps* steps.
    """
    vec, mat, t = validate_chain_inputs(n0, matrix, t)
    if t == 0.0:
        return np.maximum(vec, 0.0)
    if max_steps < 1:
        raise InvalidInputError(f"max_steps must be at least 1, got {max_steps}.")

    lam_max = _max_decay_constant(mat)
    dt = min(t / 1000.0, EULER_INITIAL_DT)
    if lam_max > 0 and lam_max * dt > EULER_STABILITY_LIMIT:
        dt = EULER_STABILITY_LIMIT / lam_max
        message = (
            f"Euler stability guard reduced time step to {dt:.3e} s "
            f"(lambda_max = {lam_max:.3e} 1/s)"
        )
        logger.warning(message)
        if advisories is not None:
            advisories.append(Advisory(message, Severity.INFO, "bateman"))

    steps = math.ceil(t / dt)
    if steps > max_steps:
        widened = t / max_steps
        if lam_max > 0 and lam_max * widened > EULER_STABILITY_LIMIT:
            raise InvalidInputError(
                f"Stable Euler integration to t={t:.3e} s needs {steps} steps, "
                f"more than the limit of {max_steps}."
            )
        logger.debug("Euler step widened from %.3e s to %.3e s.", dt, widened)
        dt = widened
        steps = max_steps

    final_dt = t - (steps - 1) * dt
    logger.debug("Euler integration: n=%d, dt=%.3e s, steps=%d.", vec.size, dt, steps)
    state = vec.copy()
    for step in range(steps):
        h = final_dt if step == steps - 1 else dt
        state = state + h * (mat @ state)
        np.maximum(state, 0.0, out=state)
    return state


def bateman_runge_kutta(n0, matrix, t: float, max_steps: int = MAX_EULER_STEPS) -> np.ndarray:
    """Classical fourth-order Runge-Kutta integration of ``dN/dt = Λ · N``

    Uses ``dt = min(t/100, 0.5/λ_max)`` with a final partial step.
    Populations are clamped at zero after every step.
    """
    vec, mat, t = validate_chain_inputs(n0, matrix, t)
    if t == 0.0:
        return np.maximum(vec, 0.0)
    lam_max = _max_decay_constant(mat)
    dt = min(t / 100.0, 0.5 / (lam_max or 1e-10))
    steps = math.ceil(t / dt)
    if steps > max_steps:
        raise InvalidInputError(
            f"RK4 integration to t={t:.3e} s needs {steps} steps, more than the limit of {max_steps}."
        )
    final_dt = t - (steps - 1) * dt

    state = vec.copy()
    for step in range(steps):
        h = final_dt if step == steps - 1 else dt
        k1 = mat @ state
        k2 = mat @ (state + 0.5 * h * k1)
        k3 = mat @ (state + 0.5 * h * k2)
        k4 = mat @ (state + h * k3)
        state = state + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
        np.maximum(state, 0.0, out=state)
    return state


def bateman_multi_step(n0, matrix, t: float, advisories: list[Advisory] | None = None) -> np.ndarray:
    """Populations at *t*, dispatching on chain length

    Chains of up to four members use :func:`bateman_recursive`; longer
    chains use :func:`bateman_euler`.
    """
    vec, mat, t = validate_chain_inputs(n0, matrix, t)
    if vec.size <= RECURSIVE_MAX_CHAIN:
        logger.debug("Chain of %d solved with the closed form.", vec.size)
        return bateman_recursive(vec, mat, t)
    logger.debug("Chain of %d solved with adaptive Euler.", vec.size)
    return bateman_euler(vec, mat, t, advisories=advisories)


# ---------------------------------------------------------------------------
# Chain-level API
# ---------------------------------------------------------------------------

SOLVER_METHODS: tuple[str, ...] = ("auto", "recursive", "euler", "rk4")
"""Accepted values of the ``method`` argument of :func:`solve_chain`."""


@dataclass(frozen=True)
class ChainSolution:
    """Populations of a decay chain at one instant

    Parameters
    ----------
    names : tuple[str, ...]
        Isotope names in matrix order.
    populations : numpy.ndarray
        Atom counts, shape ``(n,)``.
    decay_constants : numpy.ndarray
        λ of every member (1/s).
    time_s : float
        Elapsed time (s).
    method : str
        Solver that produced the result.
    advisories : tuple[Advisory, ...]
        Data-quality and stability advisories.
    """

    names: tuple[str, ...]
    populations: np.ndarray
    decay_constants: np.ndarray
    time_s: float
    method: str
    advisories: tuple[Advisory, ...] = field(default=())

    @property
    def activities(self) -> np.ndarray:
        """Activities (Bq) of every member"""
        return self.decay_constants * self.populations

    def population(self, name: str) -> float:
        return float(self.populations[self.names.index(name)])


def _initial_vector(chain: DecayChainSpec, n0) -> np.ndarray:
    if isinstance(n0, dict):
        vec = np.zeros(len(chain), dtype="f8")
        for name, value in n0.items():
            vec[chain.index(name)] = float(value)
        return vec
    return n0


def solve_chain(chain: DecayChainSpec, n0, t: float, method: str = "auto") -> ChainSolution:
    """Solve *chain* from initial populations *n0* to time *t*

    Parameters
    ----------
    chain : DecayChainSpec
        Isotope network.
    n0 : array_like or dict
        Initial populations in chain order, or a ``{name: atoms}`` map
        (missing members start empty).
    t : float
        Elapsed time (s).
    method : str, optional
        ``"auto"`` (dispatch on length), ``"recursive"``, ``"euler"`` or
        ``"rk4"``.

    Returns
    -------
    ChainSolution
    """
    if method not in SOLVER_METHODS:
        raise InvalidInputError(f"Unknown solver method {method!r}; expected one of {SOLVER_METHODS}.")
    advisories = branching_advisories(chain)
    matrix = build_decay_matrix(chain)
    vec = _initial_vector(chain, n0)

    if method == "auto":
        method = "recursive" if len(chain) <= RECURSIVE_MAX_CHAIN else "euler"
    if method == "recursive":
        populations = bateman_recursive(vec, matrix, t)
    elif method == "euler":
        populations = bateman_euler(vec, matrix, t, advisories=advisories)
    else:
        populations = bateman_runge_kutta(vec, matrix, t)

    return ChainSolution(
        names=chain.names,
        populations=populations,
        decay_constants=np.array([iso.decay_constant for iso in chain.isotopes], dtype="f8"),
        time_s=float(t),
        method=method,
        advisories=tuple(advisories),
    )


def chain_time_series(chain: DecayChainSpec, n0, times, method: str = "auto") -> np.ndarray:
    """Populations of every member sampled at each of *times*

    Returns
    -------
    numpy.ndarray
        Shape ``(len(times), n)``.
    """
    t = np.asarray(times, dtype="f8")
    if t.ndim != 1:
        raise InvalidInputError(f"Sample times must be 1-D, got shape {t.shape}.")
    rows = [solve_chain(chain, n0, float(ti), method=method).populations for ti in t]
    if not rows:
        return np.zeros((0, len(chain)), dtype="f8")
    return np.vstack(rows)
