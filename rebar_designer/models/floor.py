"""Floor-level requests and results for multi-beam solving."""

from __future__ import annotations
from pydantic import BaseModel

from .beam import BeamGroup, SpanResult
from .constraints import ProjectConstraints
from .solution import BeamSolution


class BeamRequest(BaseModel):
    """One beam to solve and the analysis results of its spans."""
    group: BeamGroup
    span_results: list[SpanResult] = []


class BeamOutcome(BaseModel):
    """Result of one beam solve plus the floor state to hand to the next beam."""
    group_name: str
    solution: BeamSolution | None = None
    proposals: list[BeamSolution] = []
    constraints: ProjectConstraints
    message: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.solution is not None


class FloorSolution(BaseModel):
    solutions: dict[str, BeamSolution] = {}
    unresolved: dict[str, str] = {}  # group name -> reason
    constraints: ProjectConstraints
