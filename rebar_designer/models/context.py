"""Design context — accumulates state for one candidate while it moves through the pipeline."""

from __future__ import annotations
from typing import Any
from pydantic import BaseModel

from .beam import BeamGroup, SpanResult
from .constraints import ExternalConstraint, ProjectConstraints
from .profile import RebarProfile
from .results import ConstraintResult, Severity, ValidationResult
from .sections import DesignSection
from .settings import DesignSettings
from .solution import BeamSolution


class ConflictReport(BaseModel):
    """A non-fatal design conflict worth showing to the engineer."""
    conflict_type: str
    span_id: str
    description: str
    suggested_fix: str = ""


class DesignContext(BaseModel):
    """
    Holds all state for one design candidate of one beam.

    The pipeline starts from a single seed. Stages clone it into
    siblings (one per backbone option), fill in the solution, and
    mark contexts invalid. Invalid contexts are dropped, never revived.

    `project_constraints` is shared by every sibling of a beam.
    """
    # Input
    group: BeamGroup
    span_results: list[SpanResult] = []
    settings: DesignSettings
    project_constraints: ProjectConstraints
    external_constraint: ExternalConstraint | None = None

    # Scenario (set by the backbone stage)
    scenario_id: str = ""
    top_backbone_diameter: int = 0
    bot_backbone_diameter: int = 0
    top_backbone_count: int = 0
    bot_backbone_count: int = 0
    stirrup_leg_count: int = 2

    # Output (populated by stages)
    current_solution: BeamSolution | None = None
    sections: list[DesignSection] = []
    rebar_profile: RebarProfile | None = None
    conflicts: list[ConflictReport] = []

    # Validation state
    validation_results: list[ValidationResult] = []
    constraint_results: list[ConstraintResult] = []
    total_penalty: float = 0.0
    preferred_diameter_bonus: float = 0.0
    accumulated_waste_count: int = 0
    is_valid: bool = True
    fail_stage: str | None = None

    @property
    def beam_width(self) -> float:
        return self.group.min_width

    @property
    def has_critical_error(self) -> bool:
        return any(r.severity.is_blocking for r in self.validation_results)

    def clone(self, **changes: Any) -> DesignContext:
        """
        Shallow sibling: inputs and project constraints are shared,
        result lists are fresh copies.
        """
        update: dict[str, Any] = {
            "validation_results": list(self.validation_results),
            "constraint_results": list(self.constraint_results),
            "conflicts": list(self.conflicts),
            "sections": list(self.sections),
        }
        update.update(changes)
        return self.model_copy(update=update)

    def fail(self, stage: str, message: str = "") -> None:
        self.is_valid = False
        self.fail_stage = stage
        if self.current_solution is not None:
            self.current_solution.is_valid = False
            if message:
                self.current_solution.validation_message = message

    def record_constraints(self, stage: str, results: list[ConstraintResult]) -> None:
        """Fold constraint-tier results into the context."""
        self.constraint_results.extend(results)
        for r in results:
            if not r.passed and r.severity.is_blocking:
                self.fail(stage, r.message)
                return
            if not r.passed and r.severity == Severity.WARNING:
                self.total_penalty += r.penalty
