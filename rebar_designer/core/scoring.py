"""Scoring — constructability, weight normalization and the final blend."""

from __future__ import annotations
from typing import Callable

from rebar_designer.models import BeamGroup, BeamSolution, DesignSettings


WEIGHT_SHARE = 0.6
CONSTRUCTABILITY_SHARE = 0.4
MIN_WEIGHT_RANGE = 0.001  # kg

ConstructabilityScorer = Callable[[BeamSolution, BeamGroup, DesignSettings], float]


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def score_constructability(solution: BeamSolution, group: BeamGroup, settings: DesignSettings) -> float:
    """
    0-100, higher is easier to build.

    Starts at 100 and deducts for multi-layer locations, mixed
    diameters, unequal top/bottom backbones, waste bars, and every
    reinforced location.
    """
    score = 100.0
    specs = list(solution.reinforcements.values())

    score -= 8.0 * sum(1 for s in specs if s.layer >= 2)

    diameters = {solution.backbone_diameter, solution.bottom_diameter}
    diameters.update(s.diameter for s in specs)
    score -= 3.0 * (len(diameters) - 1)

    if solution.backbone_count_top != solution.backbone_count_bot:
        score -= 5.0
    score -= 2.0 * solution.waste_bar_count
    score -= 1.0 * len(specs)

    return clamp(score)


def weight_scores(weights: list[float]) -> list[float]:
    """
    Lightest scores 100, heaviest 0, linear between.

    Every candidate scores 100 when the spread is below 1 g or no
    candidate carries a positive weight.
    """
    if not weights or not any(w > 0 for w in weights):
        return [100.0] * len(weights)

    heaviest, lightest = max(weights), min(weights)
    spread = heaviest - lightest
    if spread < MIN_WEIGHT_RANGE:
        return [100.0] * len(weights)
    return [clamp((heaviest - w) / spread * 100.0) for w in weights]


def total_score(weight_score: float, constructability: float, penalty: float, bonus: float) -> float:
    """Component scores are clamped; penalty and bonus are not."""
    return (
        WEIGHT_SHARE * clamp(weight_score)
        + CONSTRUCTABILITY_SHARE * clamp(constructability)
        - penalty
        + bonus
    )
