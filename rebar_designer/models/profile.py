"""Geometry-facing descriptions of a chosen arrangement.

These say *where* bars and stirrups sit once the designer has picked
counts. The drawing layer consumes them; the designer fills them in.
"""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict


class BarPosition(BaseModel):
    """One longitudinal bar in the cross-section."""
    x: float            # mm from the left face
    y: float            # mm from the bottom face
    diameter: int       # mm
    layer: int          # 1, 2, ...
    requires_tie: bool = True
    is_corner: bool = False


class RebarProfile(BaseModel):
    """Bar positions of a governing cross-section, by layer."""
    top_layer1: list[BarPosition] = []
    top_layer2: list[BarPosition] = []
    bot_layer1: list[BarPosition] = []
    bot_layer2: list[BarPosition] = []
    side_bars: list[BarPosition] = []

    def bars_requiring_ties(self) -> list[BarPosition]:
        bars = self.top_layer1 + self.top_layer2 + self.bot_layer1 + self.bot_layer2
        return [b for b in bars if b.requires_tie]

    def outer_bar_count(self) -> int:
        """Bars in the outer rows that a stirrup has to enclose."""
        top_outer = sum(1 for b in self.top_layer1 if b.is_corner or b.requires_tie)
        bot_outer = sum(1 for b in self.bot_layer1 if b.is_corner or b.requires_tie)
        return top_outer + bot_outer + len(self.side_bars)


class ZoneType(str, Enum):
    SUPPORT = "support"
    MID_SPAN = "mid_span"


class StirrupZone(BaseModel):
    """A stretch of the beam with one stirrup spacing."""
    start: float        # m from the beam start
    end: float          # m
    spacing: int        # mm
    diameter: int       # mm
    leg_count: int
    zone_type: ZoneType


class StirrupProfile(BaseModel):
    zones: list[StirrupZone] = []
    main_diameter: int = 0
    typical_leg_count: int = 0


class StirrupChoice(BaseModel):
    """One stirrup pick: legs, diameter and spacing at a location."""
    model_config = ConfigDict(frozen=True)

    legs: int
    diameter: int       # mm
    spacing: int        # mm
    overloaded: bool = False  # No listed option met demand; densest fallback used

    def __str__(self) -> str:
        mark = "*" if self.overloaded else ""
        return f"{self.legs}-d{self.diameter}a{self.spacing}{mark}"
