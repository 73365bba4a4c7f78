"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from rebar_designer.models import (
    BeamGroup, BeamRequest, BeamSolution, DesignSettings, ProjectConstraints, SpanResult,
)


class BeamDesignRequest(BaseModel):
    """Request body for the /design/beam endpoint."""
    group: BeamGroup
    span_results: list[SpanResult]
    settings: DesignSettings = DesignSettings()
    constraints: ProjectConstraints = ProjectConstraints()


class BeamDesignResponse(BaseModel):
    proposals: list[BeamSolution]
    proposal_count: int


class FloorDesignRequest(BaseModel):
    """Request body for the /design/floor endpoint. Beams are solved in list order."""
    beams: list[BeamRequest]
    settings: DesignSettings = DesignSettings()
    constraints: ProjectConstraints | None = None


class FloorDesignResponse(BaseModel):
    solutions: dict[str, BeamSolution]
    unresolved: dict[str, str]
    constraints: ProjectConstraints


class ConstraintInfo(BaseModel):
    name: str
    description: str
    category: str
    priority: int
    enabled: bool
