"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter

from rebar_designer.services.design_service import DesignService
from rebar_designer.api.schemas import (
    BeamDesignRequest, BeamDesignResponse, ConstraintInfo,
    FloorDesignRequest, FloorDesignResponse,
)

router = APIRouter()

# Shared service instance
_service = DesignService()


@router.post("/design/beam", response_model=BeamDesignResponse)
async def design_beam(request: BeamDesignRequest) -> BeamDesignResponse:
    """Rank up to five arrangements for one beam."""
    proposals = _service.design_beam(
        request.group, request.span_results, request.settings, request.constraints,
    )
    return BeamDesignResponse(proposals=proposals, proposal_count=len(proposals))


@router.post("/design/floor", response_model=FloorDesignResponse)
async def design_floor(request: FloorDesignRequest) -> FloorDesignResponse:
    """Solve a floor's beams in order, carrying diameter preferences forward."""
    floor = _service.design_floor(request.beams, request.settings, request.constraints)
    return FloorDesignResponse(
        solutions=floor.solutions,
        unresolved=floor.unresolved,
        constraints=floor.constraints,
    )


@router.get("/constraints", response_model=list[ConstraintInfo])
async def list_constraints() -> list[ConstraintInfo]:
    """List the registered design constraints."""
    return [ConstraintInfo(**c) for c in _service.list_constraints()]


@router.get("/rules", response_model=list[str])
async def list_rules() -> list[str]:
    """List the design rules in evaluation order."""
    return _service.list_rules()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
