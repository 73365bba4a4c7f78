"""Beam input models — groups, spans, and the analysis results they carry."""

from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from .solution import BeamSolution


class Span(BaseModel):
    """One span of a continuous beam."""
    span_id: str
    length: float       # mm
    width: float = 300.0   # mm
    height: float = 500.0  # mm


class BeamGroup(BaseModel):
    """A continuous beam made of one or more spans, designed as a unit."""
    name: str
    spans: list[Span] = []
    locked_at: datetime | None = None
    selected_design: BeamSolution | None = None

    @property
    def total_length(self) -> float:
        """Total length in meters."""
        return sum(s.length for s in self.spans) / 1000.0

    @property
    def min_width(self) -> float:
        widths = [s.width for s in self.spans if s.width > 0]
        return min(widths) if widths else 300.0

    @property
    def is_locked(self) -> bool:
        return self.locked_at is not None and self.selected_design is not None


class SpanResult(BaseModel):
    """
    Required areas for one span, as produced by structural analysis.

    Each list holds [left support, mid-span, right support].
    Longitudinal areas are cm², shear and torsion areas are cm²/cm.
    """
    top_area: list[float] = [0.0, 0.0, 0.0]
    bot_area: list[float] = [0.0, 0.0, 0.0]
    shear_area: list[float] = [0.0, 0.0, 0.0]
    torsion_area: list[float] = [0.0, 0.0, 0.0]

    def required(self, is_top: bool, position: int) -> float:
        values = self.top_area if is_top else self.bot_area
        if position >= len(values):
            return 0.0
        return max(values[position], 0.0)
