#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for production routes, conditions and verdicts

Every model is a frozen ``dataclass`` that validates its own invariants
in ``__post_init__``.  A record that exists is therefore well formed, and
the physics and routing layers never re-check field ranges deep inside a
pipeline.

Hierarchy
---------
::

    ReactionType          : closed set of reaction kinds (single normaliser)
    ImpurityRisk          : one impurity descriptor from the route registry
    Pathway               : canonical override data for a known route
    RouteDescriptor       : one production pathway (static registry entry)
    OperatingConditions   : per-evaluation irradiation parameters
    ChainIsotope          : one node of a decay network
    DecayChainSpec        : ordered decay network
    Advisory              : structured, non-fatal warning record
    ImpurityTrap          : detected contamination trap
    ImpurityActivity      : quantitative impurity activity estimate
    EvaluationResult      : feasibility verdict for (route, conditions)
    ScoreBreakdown        : six-criterion priority score

Units
-----
* Half-lives are in **days**; decay constants and times in **seconds**.
* Microscopic cross sections on routes are in **barns**; burn-up cross
  sections and all computed cross sections are in **cm²**.
* Fluxes are in **cm⁻² s⁻¹**; activities in **Bq**; masses in **g**.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum

from pyisoroute.exceptions import InvalidInputError, ParseError
from pyisoroute.utils.parsing import (
    ImpurityPath,
    Isotope,
    normalize_reaction_label,
    parse_impurity_descriptor,
    parse_isotope,
)
from pyisoroute.utils.validation import (
    require_fraction,
    require_non_negative,
    require_positive,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ReactionType(str, Enum):
    """Closed set of production reaction kinds"""

    CAPTURE = "n,γ"
    N_P = "n,p"
    N_2N = "n,2n"
    N_D = "n,d"
    N_ALPHA = "n,α"
    CHARGED_PARTICLE = "charged"
    GENERATOR = "generator"

    @classmethod
    def parse(cls, value: "ReactionType | str") -> "ReactionType":
        """Normalise a reaction label or alias to a :class:`ReactionType`

        Accepts the canonical values plus ASCII spellings and
        parenthesised forms: ``"n,gamma"``, ``"(n,γ)"``, ``"N,G"``,
        ``"alpha"``, ``"p,n"`` and so on.

        Raises
        ------
        ParseError
            If *value* names no known reaction kind.

        Examples
        --------
        >>> ReactionType.parse("(n,gamma)") is ReactionType.CAPTURE
        True
        """
        if isinstance(value, cls):
            return value
        label = normalize_reaction_label(value)
        if label in _REACTION_LOOKUP:
            return _REACTION_LOOKUP[label]
        projectile = label.partition(",")[0]
        if projectile in _CHARGED_PROJECTILES:
            return cls.CHARGED_PARTICLE
        raise ParseError(f"Unknown reaction type {value!r}.")

    @property
    def is_threshold(self) -> bool:
        """True for fast-neutron reactions that have an energy threshold"""
        return self in (ReactionType.N_P, ReactionType.N_2N, ReactionType.N_D, ReactionType.N_ALPHA)

    @property
    def is_capture_like(self) -> bool:
        """True for thermal capture and capture-produced generator parents"""
        return self in (ReactionType.CAPTURE, ReactionType.GENERATOR)


_REACTION_LOOKUP: dict[str, ReactionType] = {
    "n,γ": ReactionType.CAPTURE,
    "capture": ReactionType.CAPTURE,
    "n,p": ReactionType.N_P,
    "n,2n": ReactionType.N_2N,
    "n,d": ReactionType.N_D,
    "n,α": ReactionType.N_ALPHA,
    "α": ReactionType.CHARGED_PARTICLE,
    "alpha": ReactionType.CHARGED_PARTICLE,
    "charged": ReactionType.CHARGED_PARTICLE,
    "generator": ReactionType.GENERATOR,
}

_CHARGED_PROJECTILES: frozenset[str] = frozenset({"p", "d", "α", "t", "3he", "he"})


class RegulatoryFlag(str, Enum):
    STANDARD = "standard"
    CONSTRAINED = "constrained"
    EXPLORATORY = "exploratory"


class ApplicationContext(str, Enum):
    MEDICAL = "medical"
    INDUSTRIAL = "industrial"
    RESEARCH = "research"


class ThresholdMode(str, Enum):
    STEP = "step"
    ENERGY_SCALED = "energy_scaled"


class Classification(str, Enum):
    FEASIBLE = "Feasible"
    FEASIBLE_WITH_CONSTRAINTS = "Feasible with constraints"
    NOT_RECOMMENDED = "Not recommended"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"


class Priority(str, Enum):
    HIGH = "High Priority"
    CONDITIONAL = "Conditional"
    LOW = "Low Priority"


class Severity(str, Enum):
    INFO = "info"
    MODERATE = "moderate"
    HIGH = "high"


def _coerce_enum(enum_type, value, label: str):
    try:
        return enum_type(value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_type)
        raise InvalidInputError(
            f"'{label}' must be one of {choices}; got {value!r}."
        ) from exc


# ---------------------------------------------------------------------------
# Registry records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImpurityRisk:
    """A known impurity-risk descriptor attached to a route

    The descriptor text is kept verbatim; the structured view is parsed
    on demand so that an unparseable descriptor is still a valid record
    (the evaluator reports it as a data-quality warning).

    Parameters
    ----------
    descriptor : str
        Free text such as ``"Cu-64 from Zn-64(n,p)"``.
    """

    descriptor: str

    @property
    def path(self) -> ImpurityPath | None:
        """Structured descriptor, or ``None`` if unparseable"""
        try:
            return parse_impurity_descriptor(self.descriptor)
        except ParseError:
            return None

    @property
    def isotope(self) -> Isotope | None:
        path = self.path
        return path.isotope if path is not None else None

    @property
    def element(self) -> str | None:
        isotope = self.isotope
        return isotope.symbol if isotope is not None else None

    @property
    def parent_isotope(self) -> Isotope | None:
        path = self.path
        return path.parent if path is not None else None

    @property
    def reaction(self) -> str | None:
        """Normalised production reaction (``"n,p"``), if the descriptor names one"""
        path = self.path
        return path.reaction if path is not None else None

    def __str__(self) -> str:
        return self.descriptor


@dataclass(frozen=True)
class Pathway:
    """Canonical production data that overrides route metadata

    Every optional field left as ``None`` falls back to the value on the
    :class:`RouteDescriptor` being evaluated.

    Parameters
    ----------
    pathway_id : str
        Registry key, e.g. ``"LU177_NCA"``.
    target_isotope, product_isotope : str
        Nuclides the pathway connects.
    reaction : ReactionType
        Production reaction.
    threshold_mev : float | None
        Reaction threshold (MeV).
    sigma_cm2 : float | None
        Production cross section (cm²).
    chemical_separable, carrier_added_acceptable : bool | None
        Chemistry overrides.
    default_chemistry_yield : float | None
        Separation yield (fraction).
    resonance_dominated : bool | None
        Whether capture is dominated by epithermal resonances.
    product_burn_sigma_cm2 : float | None
        Product burn-up cross section (cm²).
    """

    pathway_id: str
    target_isotope: str
    product_isotope: str
    reaction: ReactionType
    threshold_mev: float | None = None
    sigma_cm2: float | None = None
    chemical_separable: bool | None = None
    carrier_added_acceptable: bool | None = None
    default_chemistry_yield: float | None = None
    resonance_dominated: bool | None = None
    product_burn_sigma_cm2: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "reaction", ReactionType.parse(self.reaction))
        for label in ("threshold_mev", "sigma_cm2", "product_burn_sigma_cm2"):
            value = getattr(self, label)
            if value is not None:
                require_non_negative(value, label)
        if self.default_chemistry_yield is not None:
            require_fraction(self.default_chemistry_yield, "default_chemistry_yield")


@dataclass(frozen=True)
class RouteDescriptor:
    """One radioisotope production pathway

    Routes are loaded once from a static registry and never mutated;
    many routes coexist independently.

    Parameters
    ----------
    route_id : str
        Unique registry key.
    target_isotope, product_isotope : str
        ``Sym-A`` identifiers of the irradiated and produced nuclides.
    reaction : ReactionType
        Reaction kind; strings are normalised through
        :meth:`ReactionType.parse`.
    product_half_life_days : float
        Product half-life (days), > 0.
    nominal_sigma_barns : float | None
        Thermal (capture) or 14.1 MeV reference (fast) cross section.
    threshold_mev : float | None
        Reaction threshold energy (MeV).
    chemical_separable : bool
        Whether the product can be chemically separated from the target.
    carrier_added_acceptable : bool
        Whether a carrier-added (low specific activity) product is usable.
    impurity_risks : tuple[ImpurityRisk, ...]
        Known contamination pathways; plain strings are wrapped.
    regulatory_flag : RegulatoryFlag
        ``standard``, ``constrained`` or ``exploratory``.
    product_burn_sigma_cm2 : float | None
        Product burn-up cross section (cm²); enables burn-up coupling.
    category : str
        ``fast``, ``moderated``, ``generator``, ``alpha`` or ``industrial``.
    data_quality : str | None
        Provenance tag, e.g. ``"planning-conservative"``.
    carrier_mass_g : float | None
        Carrier mass for carrier-added routes; defaults to target mass.
    chemistry_yield : float | None
        Explicit separation yield (fraction).
    resonance_dominated : bool
        Capture dominated by epithermal resonances.
    notes : str
        Free-text provenance notes.
    """

    route_id: str
    target_isotope: str
    product_isotope: str
    reaction: ReactionType
    product_half_life_days: float
    nominal_sigma_barns: float | None = None
    threshold_mev: float | None = None
    chemical_separable: bool = True
    carrier_added_acceptable: bool = False
    impurity_risks: tuple[ImpurityRisk, ...] = ()
    regulatory_flag: RegulatoryFlag = RegulatoryFlag.STANDARD
    product_burn_sigma_cm2: float | None = None
    category: str = "moderated"
    data_quality: str | None = None
    carrier_mass_g: float | None = None
    chemistry_yield: float | None = None
    resonance_dominated: bool = False
    notes: str = ""

    def __post_init__(self) -> None:
        if not self.route_id:
            raise InvalidInputError("Route id must be a non-empty string.")
        try:
            parse_isotope(self.target_isotope)
            parse_isotope(self.product_isotope)
        except ParseError as exc:
            raise InvalidInputError(f"Route {self.route_id!r}: {exc}") from exc
        object.__setattr__(self, "reaction", ReactionType.parse(self.reaction))
        object.__setattr__(
            self, "regulatory_flag",
            _coerce_enum(RegulatoryFlag, self.regulatory_flag, "regulatory_flag"),
        )
        object.__setattr__(
            self, "impurity_risks",
            tuple(r if isinstance(r, ImpurityRisk) else ImpurityRisk(str(r)) for r in self.impurity_risks),
        )
        require_positive(self.product_half_life_days, "product_half_life_days")
        for label in ("nominal_sigma_barns", "threshold_mev", "product_burn_sigma_cm2", "carrier_mass_g"):
            value = getattr(self, label)
            if value is not None:
                require_non_negative(value, label)
        if self.chemistry_yield is not None:
            require_fraction(self.chemistry_yield, "chemistry_yield")

    @property
    def is_nca(self) -> bool:
        """True when the route targets a no-carrier-added product"""
        return not self.carrier_added_acceptable


# ---------------------------------------------------------------------------
# Evaluation inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OperatingConditions:
    """Irradiation parameters for a single evaluation

    Parameters
    ----------
    neutron_flux : float | None
        Flux (cm⁻² s⁻¹); ``None`` selects the reaction-type default.
    neutron_energy_mev : float
        Neutron energy for threshold reactions (MeV).
    target_mass_g : float
        Target mass (g), > 0.
    enrichment : float
        Target-isotope enrichment fraction, in (0, 1].
    irradiation_time_s : float
        Irradiation time (s), ≥ 0.
    self_shielding : float
        Production self-shielding factor, in (0, 1].
    target_density_atoms_cm3, target_thickness_cm : float | None
        Optional target geometry used for burn-up shielding.
    chemistry_delay_hours, transport_time_hours : float
        Post-EOB decay intervals before delivery.
    application_context : ApplicationContext
        Selects activity-viability thresholds.
    threshold_mode : ThresholdMode
        Threshold-activation model for fast reactions.
    pure_thermal_spectrum : bool
        Suppresses the resonance-dominated capture warning.
    """

    neutron_flux: float | None = None
    neutron_energy_mev: float = 14.1
    target_mass_g: float = 1.0
    enrichment: float = 1.0
    irradiation_time_s: float = 86400.0
    self_shielding: float = 1.0
    target_density_atoms_cm3: float | None = None
    target_thickness_cm: float | None = None
    chemistry_delay_hours: float = 0.0
    transport_time_hours: float = 0.0
    application_context: ApplicationContext = ApplicationContext.MEDICAL
    threshold_mode: ThresholdMode = ThresholdMode.STEP
    pure_thermal_spectrum: bool = False

    def __post_init__(self) -> None:
        if self.neutron_flux is not None:
            require_non_negative(self.neutron_flux, "neutron_flux")
        require_non_negative(self.neutron_energy_mev, "neutron_energy_mev")
        require_positive(self.target_mass_g, "target_mass_g")
        if require_positive(self.enrichment, "enrichment") > 1.0:
            raise InvalidInputError(f"'enrichment' must lie in (0, 1], got {self.enrichment:.6g}.")
        require_non_negative(self.irradiation_time_s, "irradiation_time_s")
        if require_positive(self.self_shielding, "self_shielding") > 1.0:
            raise InvalidInputError(f"'self_shielding' must lie in (0, 1], got {self.self_shielding:.6g}.")
        for label in ("target_density_atoms_cm3", "target_thickness_cm"):
            value = getattr(self, label)
            if value is not None:
                require_positive(value, label)
        require_non_negative(self.chemistry_delay_hours, "chemistry_delay_hours")
        require_non_negative(self.transport_time_hours, "transport_time_hours")
        object.__setattr__(
            self, "application_context",
            _coerce_enum(ApplicationContext, self.application_context, "application_context"),
        )
        object.__setattr__(
            self, "threshold_mode",
            _coerce_enum(ThresholdMode, self.threshold_mode, "threshold_mode"),
        )


@dataclass(frozen=True)
class ChainIsotope:
    """One member of a decay network

    Parameters
    ----------
    name : str
        Isotope label, unique within the chain.
    decay_constant : float
        λ (1/s), ≥ 0; zero marks a stable member.
    parents : tuple[tuple[str, float], ...]
        ``(parent name, branching ratio)`` pairs feeding this isotope.
    """

    name: str
    decay_constant: float
    parents: tuple[tuple[str, float], ...] = ()

    def __post_init__(self) -> None:
        require_non_negative(self.decay_constant, f"{self.name} decay_constant")
        parents = tuple((str(p), float(br)) for p, br in self.parents)
        for parent, ratio in parents:
            if not (0.0 <= ratio <= 1.0) or math.isnan(ratio):
                raise InvalidInputError(
                    f"Branching ratio {parent} -> {self.name} must lie in [0, 1], got {ratio!r}."
                )
        object.__setattr__(self, "parents", parents)


@dataclass(frozen=True)
class DecayChainSpec:
    """Ordered decay network

    Row and column order of the derived decay matrix follows the order
    of :attr:`isotopes`.  Parents may appear before or after their
    daughters.
    """

    isotopes: tuple[ChainIsotope, ...]

    def __post_init__(self) -> None:
        isotopes = tuple(self.isotopes)
        if not isotopes:
            raise InvalidInputError("A decay chain needs at least one isotope.")
        names = [iso.name for iso in isotopes]
        if len(set(names)) != len(names):
            raise InvalidInputError(f"Duplicate isotope names in decay chain: {names}.")
        known = set(names)
        for iso in isotopes:
            for parent, _ in iso.parents:
                if parent not in known:
                    raise InvalidInputError(
                        f"Isotope {iso.name!r} lists unknown parent {parent!r}."
                    )
        object.__setattr__(self, "isotopes", isotopes)

    def __len__(self) -> int:
        return len(self.isotopes)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(iso.name for iso in self.isotopes)

    def index(self, name: str) -> int:
        """Row index of isotope *name*"""
        try:
            return self.names.index(name)
        except ValueError as exc:
            raise InvalidInputError(f"Isotope {name!r} is not part of the chain.") from exc


# ---------------------------------------------------------------------------
# Evaluation outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Advisory:
    """Structured non-fatal warning

    Parameters
    ----------
    message : str
        Human-readable text.
    severity : Severity
        ``info``, ``moderate`` or ``high``.
    source : str
        Short tag of the emitting component (``"evaluator"``,
        ``"impurity"``, ``"bateman"``, ...).
    """

    message: str
    severity: Severity = Severity.INFO
    source: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ImpurityTrap:
    """A detected contamination trap

    ``kind`` is one of ``long_lived``, ``stable_accumulator``,
    ``same_element`` or ``long_lived_inseparable``.
    """

    kind: str
    severity: Severity
    message: str


@dataclass(frozen=True)
class ImpurityActivity:
    """Quantitative activity estimate for one tabulated impurity"""

    isotope: str
    reaction_key: str
    cross_section_barns: float
    activity_bq: float
    fraction_of_product: float


@dataclass(frozen=True)
class EvaluationResult:
    """Feasibility verdict for one (route, conditions) pair

    Numeric fields are ``None`` when a terminal gate fired before they
    were computed.
    """

    route_id: str
    feasible: bool
    classification: Classification
    reasons: tuple[str, ...] = ()
    warnings: tuple[Advisory, ...] = ()
    impurity_risk_level: RiskLevel = RiskLevel.UNKNOWN
    reaction_rate: float | None = None
    activity_eob_bq: float | None = None
    specific_activity_bq_per_g: float | None = None
    delivered_activity_bq: float | None = None
    product_atoms_eob: float | None = None
    saturation: float | None = None
    cross_section_cm2: float | None = None
    flux: float | None = None
    burn_up_rate: float | None = None
    chemistry_yield: float | None = None
    impurity_traps: tuple[ImpurityTrap, ...] = ()
    impurity_activities: tuple[ImpurityActivity, ...] = ()

    @property
    def activity_eob_gbq(self) -> float | None:
        if self.activity_eob_bq is None:
            return None
        return self.activity_eob_bq / 1e9

    @property
    def specific_activity_tbq_per_g(self) -> float | None:
        if self.specific_activity_bq_per_g is None:
            return None
        return self.specific_activity_bq_per_g / 1e12

    def as_dict(self) -> dict:
        """Plain-``dict`` view with enum values flattened to strings"""
        data = asdict(self)
        data["classification"] = self.classification.value
        data["impurity_risk_level"] = self.impurity_risk_level.value
        data["warnings"] = [
            {"message": w.message, "severity": w.severity.value, "source": w.source}
            for w in self.warnings
        ]
        data["impurity_traps"] = [
            {"kind": t.kind, "severity": t.severity.value, "message": t.message}
            for t in self.impurity_traps
        ]
        return data


@dataclass(frozen=True)
class ScoreBreakdown:
    """Six category scores, each clamped to [0, 5]"""

    physics: float
    production_yield: float
    specific_activity: float
    impurity: float
    logistics: float
    regulatory: float
    details: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        for label in CATEGORY_NAMES:
            value = float(getattr(self, label))
            object.__setattr__(self, label, min(5.0, max(0.0, value)))

    @property
    def total(self) -> float:
        return sum(getattr(self, label) for label in CATEGORY_NAMES) / len(CATEGORY_NAMES)

    @property
    def priority(self) -> Priority:
        total = self.total
        if total >= 4.0:
            return Priority.HIGH
        if total >= 2.5:
            return Priority.CONDITIONAL
        return Priority.LOW

    def as_dict(self) -> dict:
        data = {label: getattr(self, label) for label in CATEGORY_NAMES}
        data["total"] = self.total
        data["priority"] = self.priority.value
        return data


CATEGORY_NAMES: tuple[str, ...] = (
    "physics",
    "production_yield",
    "specific_activity",
    "impurity",
    "logistics",
    "regulatory",
)
"""Score categories in reporting order."""
