"""Bar geometry and weight helpers shared by strategies and stages."""

from __future__ import annotations
import math

from rebar_designer.models import DesignSettings


AREA_TOLERANCE = 0.01       # cm², "backbone already covers it"
BACKBONE_LAP_FACTOR = 1.02  # Extra length for lap splices on continuous bars


def bar_area(diameter: float) -> float:
    """Cross-section area of one bar in cm² (diameter in mm)."""
    return math.pi * diameter * diameter / 400.0


def bar_weight(diameter: float, length_mm: float, count: int = 1) -> float:
    """Steel weight in kg using the d²/162 kg/m rule."""
    return diameter * diameter / 162.0 * (length_mm / 1000.0) * count


def usable_width(width: float, settings: DesignSettings) -> float:
    beam = settings.beam
    return width - 2 * beam.cover_side - 2 * beam.estimated_stirrup_diameter


def layer_capacity(width: float, diameter: int, settings: DesignSettings) -> int:
    """Maximum bars of one diameter that fit side by side in one layer."""
    usable = usable_width(width, settings)
    if usable <= 0:
        return 0
    spacing = max(diameter, settings.beam.min_clear_spacing)
    return max(0, math.floor((usable + spacing) / (diameter + spacing)))


def clear_spacing(width: float, diameter: int, count: int, settings: DesignSettings) -> float:
    """Clear gap between adjacent bars when `count` bars are spread evenly."""
    if count <= 1:
        return usable_width(width, settings)
    return (usable_width(width, settings) - count * diameter) / (count - 1)


def parse_leg_rules(rules: str) -> list[tuple[int, int]]:
    """Parse "250-2 400-4 600-6" into [(250, 2), (400, 4), (600, 6)], sorted by width."""
    parsed: list[tuple[int, int]] = []
    for part in rules.replace(",", " ").split():
        bits = part.split("-")
        if len(bits) != 2:
            continue
        try:
            width, legs = int(bits[0]), int(bits[1])
        except ValueError:
            continue
        if width > 0:
            parsed.append((width, legs))
    parsed.sort()
    return parsed


def stirrup_leg_count(width: float, settings: DesignSettings) -> int:
    """Stirrup legs for a beam width, from the auto-legs rules."""
    rules = parse_leg_rules(settings.beam.auto_legs_rules)
    if not rules:
        if width < 300:
            return 2
        if width < 500:
            return 4
        return 6

    for max_width, legs in rules:
        if width <= max_width:
            return legs
    return rules[-1][1]
