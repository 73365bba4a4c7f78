"""Intermediate design objects checked by the constraint engine."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class SectionArrangement(BaseModel):
    """A concrete bar layout at one cross-section."""
    model_config = ConfigDict(frozen=True)

    diameter: int
    bars_per_layer: list[int]
    clear_spacing: float = 0.0  # mm between layer-1 bars
    strategy: str = ""

    @property
    def total_count(self) -> int:
        return sum(self.bars_per_layer)

    @property
    def layer_count(self) -> int:
        return sum(1 for n in self.bars_per_layer if n > 0)


class BackboneCandidate(BaseModel):
    """Continuous top and bottom bars running the full beam length."""
    model_config = ConfigDict(frozen=True)

    diameter_top: int
    diameter_bot: int
    count_top: int
    count_bot: int

    @property
    def option_id(self) -> str:
        return f"T:{self.count_top}D{self.diameter_top}/B:{self.count_bot}D{self.diameter_bot}"


class DesignSection(BaseModel):
    """A designed location along the beam and the arrangements that passed there."""
    section_id: str             # e.g. "S1_Top_Right"
    span_index: int
    position: int               # 0 left support, 1 mid-span, 2 right support
    width: float                # mm
    required_top: float = 0.0   # cm²
    required_bot: float = 0.0   # cm²
    valid_arrangements_top: list[SectionArrangement] = []
    valid_arrangements_bot: list[SectionArrangement] = []

    @property
    def is_support(self) -> bool:
        return self.position != 1
