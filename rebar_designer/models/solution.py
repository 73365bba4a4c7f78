"""Beam solution output models."""

from __future__ import annotations
from pydantic import BaseModel

from .profile import StirrupProfile


class RebarSpec(BaseModel):
    """Local reinforcement added on top of the backbone at one location."""
    diameter: int
    count: int                      # Bars added, backbone excluded
    layer: int                      # Number of layers used at this location
    position: str                   # "top" | "bot"
    layer_breakdown: list[int] = []  # Bars per layer, backbone included in layer 1


class BeamSolution(BaseModel):
    """One complete arrangement for a continuous beam."""
    option_name: str
    backbone_diameter: int          # Top backbone diameter
    backbone_diameter_bot: int = 0  # 0 means same as top
    backbone_count_top: int
    backbone_count_bot: int
    as_backbone_top: float = 0.0    # cm²
    as_backbone_bot: float = 0.0    # cm²

    # Keys look like "S1_Top_Left", "S2_Bot_Mid"
    reinforcements: dict[str, RebarSpec] = {}
    stirrup_designs: dict[str, str] = {}
    stirrup_profile: StirrupProfile | None = None

    is_valid: bool = True
    validation_message: str = ""

    total_steel_weight: float = 0.0  # kg
    waste_bar_count: int = 0
    efficiency_score: float = 0.0
    constructability_score: float = 0.0
    weight_score: float = 0.0
    total_score: float = 0.0
    description: str = ""

    @property
    def bottom_diameter(self) -> int:
        return self.backbone_diameter_bot or self.backbone_diameter

    def zone_counts(self) -> dict[str, int]:
        """Total bars per reinforced location, backbone included."""
        counts: dict[str, int] = {}
        for key, spec in self.reinforcements.items():
            backbone = self.backbone_count_top if spec.position == "top" else self.backbone_count_bot
            counts[key] = backbone + spec.count
        return counts
