#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyIsoRoute package

All exceptions raised by PyIsoRoute inherit from :class:`PyIsoRouteError`,
making it possible to catch every library-specific error with a single
``except`` clause while still allowing fine-grained handling when needed.

Route infeasibility is *not* an error: a route that cannot be produced
is reported through a "Not recommended" evaluation result.  Exceptions
are reserved for malformed input that indicates a bug in the caller or
in the registry data.

Exception Hierarchy
-------------------
::

    PyIsoRouteError
    ├── InvalidInputError           # Malformed input (shapes, time, records)
    │   └── InvalidParameterError   # Physical-domain violation in a primitive
    ├── ParseError                  # Unparseable isotope / reaction string
    └── RegistryError               # Unknown or duplicate route id
"""

from __future__ import annotations


class PyIsoRouteError(Exception):
    """Base exception for all PyIsoRoute errors

    Every exception raised by PyIsoRoute is a subclass of this type.
    Catching ``PyIsoRouteError`` therefore catches any library-specific
    failure while still allowing standard Python exceptions (``KeyError``,
    ``TypeError``, etc.) to propagate normally.
    """


class InvalidInputError(PyIsoRouteError):
    """Raised when an argument or record is structurally invalid

    This includes decay vectors whose length does not match the decay
    matrix, non-square matrices, negative times, branching ratios outside
    ``[0, 1]`` and record fields that break a construction-time invariant
    (for example an enrichment of 1.5).

    Parameters
    ----------
    message : str
        Description of the failed check, including the field name,
        expected constraint, and actual value.
    """


class InvalidParameterError(InvalidInputError):
    """Raised when a kinetics primitive receives a physically invalid value

    Negative flux, cross section or mass, a non-positive half-life, a
    saturation factor outside ``[0, 1]`` and a non-positive divisor
    (mass flow, heat capacity) all raise this error.

    Parameters
    ----------
    message : str
        Description of the violated domain constraint.
    """


class ParseError(PyIsoRouteError):
    """Raised when an isotope, reaction or impurity string cannot be parsed

    Strict parsers raise this error.  The route evaluator uses the
    lenient variants and reports unparseable impurity descriptors as
    warnings instead.

    Parameters
    ----------
    message : str
        Description of the parse failure, including the offending text.
    """


class RegistryError(PyIsoRouteError):
    """Raised when a route registry lookup or registration fails

    Parameters
    ----------
    message : str
        Description of the failure, including the route id.
    """
