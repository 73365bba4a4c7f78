"""Design settings — the knobs the host application exposes to the designer."""

from __future__ import annotations
from pathlib import Path
from pydantic import BaseModel, Field


class BeamSettings(BaseModel):
    """Longitudinal bar layout preferences."""
    prefer_symmetric: bool = True           # Round odd layer counts up when room allows
    min_bars_per_layer: int = 2
    max_layers: int = 2
    min_clear_spacing: float = 25.0         # mm
    max_clear_spacing: float = 300.0        # mm, above this cracking is likely
    prefer_single_diameter: bool = True     # Same backbone diameter top and bottom
    max_steel_weight_per_meter: float = 50.0  # kg/m, 0 disables the check
    cover_side: float = 25.0                # mm
    cover_top: float = 25.0                 # mm
    estimated_stirrup_diameter: float = 10.0  # mm
    main_bar_diameters: list[int] = [16, 18, 20, 22, 25]
    auto_legs_rules: str = "250-2 400-4 600-6"  # "<max width>-<legs>" pairs
    aggregate_size: int = 20                # mm


class StirrupSettings(BaseModel):
    """Transverse reinforcement catalogue."""
    diameters: list[int] = [8, 10]
    spacings: list[int] = [100, 150, 200, 250]
    allow_odd_legs: bool = False
    support_zone_ratio: float = 0.25        # Share of the span at each end with support spacing


class CurtailmentSettings(BaseModel):
    """Bar lengths of local reinforcement as a share of the span length."""
    support_reinf_ratio: float = 0.33
    mid_span_reinf_ratio: float = 0.8


class RuleSettings(BaseModel):
    safety_factor: float = 0.98  # Provided area may fall this far below required


class DesignSettings(BaseModel):
    """Complete configuration for one design run."""
    beam: BeamSettings = Field(default_factory=BeamSettings)
    stirrup: StirrupSettings = Field(default_factory=StirrupSettings)
    curtailment: CurtailmentSettings = Field(default_factory=CurtailmentSettings)
    rules: RuleSettings = Field(default_factory=RuleSettings)

    @classmethod
    def from_json_file(cls, path: str | Path) -> DesignSettings:
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
