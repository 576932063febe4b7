#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared isotope, reaction and impurity-descriptor parsing helpers

Route data identifies nuclides with short human-readable strings
(``"Lu-177"``, ``"Ho-166m"``) and describes contamination pathways with
free-text descriptors such as ``"Cu-64 from Zn-64(n,p)"``.  All of the
string handling lives here so that the evaluator and the impurity
assessment never duplicate regular expressions.

Descriptor Grammar
------------------
::

    <isotope> [from <parent> [(<reaction>) | decay] [<free text>]]

* ``isotope`` / ``parent``: ``Sym-A`` with an optional state suffix
  (``m``, ``m2``, ``g``).
* ``reaction``: any projectile/ejectile pair, normalised with
  :func:`normalize_reaction_label` (``n,gamma`` → ``n,γ``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pyisoroute.exceptions import ParseError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

ELEMENT_SYMBOL_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][a-z]?")
"""Leading element symbol of an isotope string (``Lu`` in ``Lu-177``)."""

ISOTOPE_PATTERN: re.Pattern[str] = re.compile(r"([A-Z][a-z]?)-(\d+)(m\d?|g)?(?![A-Za-z0-9])")
"""Isotope token: symbol, mass number and optional isomeric-state suffix."""

IMPURITY_PATTERN: re.Pattern[str] = re.compile(
    r"^\s*(?P<isotope>[A-Z][a-z]?-\d+(?:m\d?|g)?)"
    r"(?:\s+from\s+(?P<parent>[A-Z][a-z]?-\d+(?:m\d?|g)?)"
    r"(?:\s*\((?P<reaction>[^)]+)\)|\s+(?P<decay>decay))?)?"
)
"""Impurity descriptor: impurity isotope, optional parent and mechanism."""

_REACTION_ALIASES: dict[str, str] = {
    "gamma": "γ",
    "g": "γ",
    "alpha": "α",
    "a": "α",
}


# ---------------------------------------------------------------------------
# Parsed value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Isotope:
    """A parsed nuclide identifier

    Parameters
    ----------
    symbol : str
        Element symbol, e.g. ``"Lu"``.
    mass_number : int
        Mass number A.
    state : str
        Isomeric-state suffix (``""``, ``"m"``, ``"m2"`` or ``"g"``).
    """

    symbol: str
    mass_number: int
    state: str = ""

    def __str__(self) -> str:
        return f"{self.symbol}-{self.mass_number}{self.state}"


@dataclass(frozen=True)
class ImpurityPath:
    """Parsed ``<isotope> from <parent>(<reaction>)`` descriptor"""

    isotope: Isotope
    parent: Isotope | None = None
    reaction: str | None = None
    from_decay: bool = False


# ---------------------------------------------------------------------------
# Parsing functions
# ---------------------------------------------------------------------------

def extract_element_symbol(text: str) -> str | None:
    """Return the leading element symbol of *text*, or ``None``

    Examples
    --------
    >>> extract_element_symbol("Lu-176")
    'Lu'
    >>> extract_element_symbol("176Lu") is None
    True
    """
    if not isinstance(text, str):
        return None
    match = ELEMENT_SYMBOL_PATTERN.match(text.strip())
    return match.group(0) if match else None


def parse_isotope(text: str) -> Isotope:
    """Parse a ``Sym-A[state]`` isotope string

    Parameters
    ----------
    text : str
        Isotope identifier such as ``"Lu-177"`` or ``"Sn-117m"``.

    Returns
    -------
    Isotope

    Raises
    ------
    ParseError
        If *text* is not a complete isotope identifier.

    Examples
    --------
    >>> parse_isotope("Sn-117m")
    Isotope(symbol='Sn', mass_number=117, state='m')
    """
    if not isinstance(text, str):
        raise ParseError(f"Isotope must be a string, got {type(text).__name__}.")
    match = ISOTOPE_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ParseError(f"Cannot parse isotope identifier {text!r}.")
    symbol, mass, state = match.groups()
    return Isotope(symbol, int(mass), state or "")


def find_isotope(text: str) -> Isotope | None:
    """Return the first isotope token found anywhere in *text*, or ``None``"""
    if not isinstance(text, str):
        return None
    match = ISOTOPE_PATTERN.search(text)
    if match is None:
        return None
    symbol, mass, state = match.groups()
    return Isotope(symbol, int(mass), state or "")


def normalize_reaction_label(text: str) -> str:
    """Canonicalise a reaction label to ``projectile,ejectile`` form

    Parentheses and whitespace are removed, case is folded, and the
    ASCII spellings ``gamma``/``g``/``alpha``/``a`` are replaced with
    ``γ``/``α``.

    Examples
    --------
    >>> normalize_reaction_label("(N, Gamma)")
    'n,γ'
    >>> normalize_reaction_label("n,2n")
    'n,2n'
    """
    if not isinstance(text, str):
        raise ParseError(f"Reaction must be a string, got {type(text).__name__}.")
    label = re.sub(r"[\s()]", "", text).lower()
    if "," not in label:
        return label
    projectile, _, ejectile = label.partition(",")
    projectile = _REACTION_ALIASES.get(projectile, projectile)
    ejectile = _REACTION_ALIASES.get(ejectile, ejectile)
    return f"{projectile},{ejectile}"


def parse_impurity_descriptor(text: str) -> ImpurityPath:
    """Parse an impurity-risk descriptor

    Parameters
    ----------
    text : str
        Descriptor such as ``"Cu-64 from Zn-64(n,p)"``,
        ``"Hf-177 from Lu-177 decay"`` or ``"Lu-177m (metastable state)"``.

    Returns
    -------
    ImpurityPath

    Raises
    ------
    ParseError
        If *text* does not start with an isotope identifier.

    Examples
    --------
    >>> path = parse_impurity_descriptor("Zn-65 from Zn-67(n,gamma)")
    >>> str(path.isotope), str(path.parent), path.reaction
    ('Zn-65', 'Zn-67', 'n,γ')
    """
    if not isinstance(text, str):
        raise ParseError(f"Impurity descriptor must be a string, got {type(text).__name__}.")
    match = IMPURITY_PATTERN.match(text)
    if match is None:
        raise ParseError(f"Cannot parse impurity descriptor {text!r}.")

    isotope = parse_isotope(match.group("isotope"))
    parent = match.group("parent")
    reaction = match.group("reaction")
    if reaction is not None and "," not in reaction:
        # "(desired daughter)" and similar annotations are not reactions
        reaction = None
    path = ImpurityPath(
        isotope=isotope,
        parent=parse_isotope(parent) if parent else None,
        reaction=normalize_reaction_label(reaction) if reaction else None,
        from_decay=match.group("decay") is not None,
    )
    logger.debug("Parsed impurity descriptor %r -> %s", text, path)
    return path
