from .results import (
    Severity, TierPolicy, ValidationResult, ConstraintResult,
    RULE_TIER_POLICY, CONSTRAINT_TIER_POLICY,
)
from .settings import (
    BeamSettings, StirrupSettings, CurtailmentSettings, RuleSettings, DesignSettings,
)
from .profile import BarPosition, RebarProfile, StirrupChoice, StirrupZone, StirrupProfile, ZoneType
from .solution import RebarSpec, BeamSolution
from .beam import Span, BeamGroup, SpanResult
from .constraints import NeighborDesign, ProjectConstraints, ExternalConstraint
from .filling import FillingContext, FillingResult
from .sections import SectionArrangement, BackboneCandidate, DesignSection
from .context import ConflictReport, DesignContext
from .floor import BeamRequest, BeamOutcome, FloorSolution

__all__ = [
    "Severity", "TierPolicy", "ValidationResult", "ConstraintResult",
    "RULE_TIER_POLICY", "CONSTRAINT_TIER_POLICY",
    "BeamSettings", "StirrupSettings", "CurtailmentSettings", "RuleSettings", "DesignSettings",
    "BarPosition", "RebarProfile", "StirrupChoice", "StirrupZone", "StirrupProfile", "ZoneType",
    "RebarSpec", "BeamSolution",
    "Span", "BeamGroup", "SpanResult",
    "NeighborDesign", "ProjectConstraints", "ExternalConstraint",
    "FillingContext", "FillingResult",
    "SectionArrangement", "BackboneCandidate", "DesignSection",
    "ConflictReport", "DesignContext",
    "BeamRequest", "BeamOutcome", "FloorSolution",
]
