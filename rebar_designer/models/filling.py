"""Input and output of a layer-filling strategy."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

from .settings import DesignSettings


class FillingContext(BaseModel):
    """Everything a strategy needs to pack bars at one location."""
    model_config = ConfigDict(frozen=True)

    required_area: float        # cm²
    backbone_area: float        # cm²
    backbone_count: int
    backbone_diameter: int      # mm
    layer_capacity: int         # Bars that fit in one layer
    stirrup_leg_count: int = 2
    max_layers: int = 2
    settings: DesignSettings = Field(default_factory=DesignSettings)


class FillingResult(BaseModel):
    """Per-layer bar counts, or the reason none could be found."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    layer_counts: list[int] = []
    waste_count: int = 0
    fail_reason: str = ""

    @property
    def total_bars(self) -> int:
        return sum(self.layer_counts)

    @classmethod
    def failed(cls, reason: str) -> FillingResult:
        return cls(is_valid=False, fail_reason=reason)
