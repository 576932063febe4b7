#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Domain validation routines for kinetics inputs and decay-chain arrays

Scalar checks raise :class:`~pyisoroute.exceptions.InvalidParameterError`
and array checks raise :class:`~pyisoroute.exceptions.InvalidInputError`.
Primitives call these before computing anything, so a bad value fails
fast with the argument name in the message instead of surfacing as a
NaN several stages later.

Checked Constraints
-------------------
* Physical magnitudes (flux, cross section, mass, time) are non-negative.
* Half-lives, decay constants used as divisors and heat capacities are
  strictly positive.
* Fractions (enrichment, saturation, yield, branching) lie in [0, 1].
* Decay vectors and matrices are finite, 1-D / square and conformant.

Design Note
-----------
Validation functions accept raw scalars or NumPy arrays, **not** record
instances, so that the ``models`` layer can call them from
``__post_init__`` without an import cycle::

    utils ← models ← physics ← routing ← scoring
"""

from __future__ import annotations

import logging
import math

import numpy as np

from pyisoroute.exceptions import InvalidInputError, InvalidParameterError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scalar checks
# ---------------------------------------------------------------------------

def _as_real(value: float, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise InvalidParameterError(
            f"'{label}' must be a real number, got {type(value).__name__}."
        )
    value = float(value)
    if math.isnan(value):
        raise InvalidParameterError(f"'{label}' must not be NaN.")
    return value


def require_non_negative(value: float, label: str = "value") -> float:
    """Verify that *value* is a real number ≥ 0 and return it as ``float``

    Parameters
    ----------
    value : float
        Quantity to check.
    label : str, optional
        Argument name used in the error message.

    Returns
    -------
    float

    Raises
    ------
    InvalidParameterError
        If *value* is negative, NaN or not a number.

    Examples
    --------
    >>> require_non_negative(0.0)
    0.0
    >>> require_non_negative(-1.0, "flux")  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyisoroute.exceptions.InvalidParameterError: ...
    """
    value = _as_real(value, label)
    if value < 0:
        raise InvalidParameterError(f"'{label}' must be non-negative, got {value:.6g}.")
    return value


def require_positive(value: float, label: str = "value") -> float:
    """Verify that *value* is a real number > 0 and return it as ``float``

    Raises
    ------
    InvalidParameterError
        If *value* is zero, negative, NaN or not a number.

    Examples
    --------
    >>> require_positive(6.647, "half_life_days")
    6.647
    """
    value = _as_real(value, label)
    if value <= 0:
        raise InvalidParameterError(f"'{label}' must be positive, got {value:.6g}.")
    return value


def require_fraction(value: float, label: str = "fraction") -> float:
    """Verify that *value* lies in the closed interval [0, 1]

    Raises
    ------
    InvalidParameterError
        If *value* is outside [0, 1], NaN or not a number.
    """
    value = _as_real(value, label)
    if not (0.0 <= value <= 1.0):
        raise InvalidParameterError(f"'{label}' must lie in [0, 1], got {value:.6g}.")
    return value


# ---------------------------------------------------------------------------
# Array checks
# ---------------------------------------------------------------------------

def validate_chain_inputs(
    n0: np.ndarray,
    matrix: np.ndarray,
    t: float,
) -> tuple[np.ndarray, np.ndarray, float]:
    """Validate a decay-chain initial vector, decay matrix and time

    Parameters
    ----------
    n0 : array_like
        Initial atom populations, shape ``(n,)``.
    matrix : array_like
        Decay matrix Λ, shape ``(n, n)``.
    t : float
        Elapsed time (s), must be ≥ 0.

    Returns
    -------
    tuple[numpy.ndarray, numpy.ndarray, float]
        Float copies of *n0* and *matrix* plus *t* as ``float``.

    Raises
    ------
    InvalidInputError
        If either input is not array-like, the shapes do not conform,
        any entry is non-finite or *t* is negative.
    """
    if not isinstance(n0, (list, tuple, np.ndarray)):
        raise InvalidInputError(
            f"Initial populations must be an array, got {type(n0).__name__}."
        )
    if not isinstance(matrix, (list, tuple, np.ndarray)):
        raise InvalidInputError(
            f"Decay matrix must be an array, got {type(matrix).__name__}."
        )
    try:
        vec = np.array(n0, dtype="f8")
        mat = np.array(matrix, dtype="f8")
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Chain inputs are not numeric: {exc}") from exc

    if vec.ndim != 1:
        raise InvalidInputError(f"Initial populations must be 1-D, got shape {vec.shape}.")
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise InvalidInputError(f"Decay matrix must be square, got shape {mat.shape}.")
    if mat.shape[0] != vec.size:
        raise InvalidInputError(
            f"Initial population length {vec.size} does not match decay matrix "
            f"dimension {mat.shape[0]}."
        )
    if not (np.all(np.isfinite(vec)) and np.all(np.isfinite(mat))):
        raise InvalidInputError("Chain inputs contain non-finite values.")
    if isinstance(t, bool) or not isinstance(t, (int, float, np.integer, np.floating)):
        raise InvalidInputError(f"Time must be a real number, got {type(t).__name__}.")
    t = float(t)
    if not math.isfinite(t) or t < 0:
        raise InvalidInputError(f"Time must be finite and non-negative, got {t!r}.")

    logger.debug("Chain inputs (n=%d, t=%.6g s) passed validation.", vec.size, t)
    return vec, mat, t
