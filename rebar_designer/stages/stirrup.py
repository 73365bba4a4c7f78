"""Stirrup design — legs, diameter and spacing from shear and torsion demand."""

from __future__ import annotations
import logging

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.analyzer import POSITION_NAMES
from rebar_designer.core.sizing import bar_area
from rebar_designer.models import (
    DesignContext, DesignSettings, SpanResult, StirrupChoice, StirrupProfile,
    StirrupZone, ZoneType,
)
from rebar_designer.stages.base import PipelineStage

logger = logging.getLogger(__name__)


MIN_ACCEPTABLE_SPACING = 100  # mm
NO_DEMAND = 0.001             # cm²/cm


def stirrup_demand(result: SpanResult, position: int) -> float:
    """Transverse steel per unit length, Av/s + 2·At/s (cm²/cm)."""
    def value(values: list[float]) -> float:
        if position >= len(values):
            return 0.0
        return max(values[position], 0.0)
    return value(result.shear_area) + 2 * value(result.torsion_area)


def leg_options(base_legs: int, allow_odd: bool) -> list[int]:
    options = [base_legs, base_legs + 1, base_legs + 2]
    if base_legs - 1 >= 2:
        options.insert(0, base_legs - 1)
    if not allow_odd:
        options = [n for n in options if n % 2 == 0]
    return options or [2, 4]


def design_stirrup(demand: float, base_legs: int, settings: DesignSettings) -> StirrupChoice | None:
    """
    Cheapest stirrup meeting `demand`, or None when there is no demand.

    Smaller diameters are tried first, then more legs; for each, the
    widest listed spacing of at least 100 mm that carries the demand
    wins. If nothing does, the densest option is returned flagged as
    overloaded.
    """
    if demand <= NO_DEMAND:
        return None

    stirrup = settings.stirrup
    diameters = sorted(stirrup.diameters) or [8]
    spacings = sorted(stirrup.spacings, reverse=True) or [100, 150, 200, 250]
    legs_to_try = leg_options(base_legs, stirrup.allow_odd_legs)

    for diameter in diameters:
        for legs in legs_to_try:
            # Largest spacing (mm) one set of legs can cover
            max_spacing = bar_area(diameter) * legs / demand * 10.0
            for spacing in spacings:
                if MIN_ACCEPTABLE_SPACING <= spacing <= max_spacing:
                    return StirrupChoice(legs=legs, diameter=diameter, spacing=spacing)

    return StirrupChoice(
        legs=legs_to_try[-1], diameter=max(diameters), spacing=min(spacings), overloaded=True,
    )


class StirrupStage(PipelineStage):

    order = 3

    def get_name(self) -> str:
        return "Stirrup"

    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        for ctx in contexts:
            if ctx.is_valid and ctx.current_solution is not None:
                self._design(ctx)
        return contexts

    def _design(self, ctx: DesignContext) -> None:
        solution = ctx.current_solution
        settings = ctx.settings
        legs = ctx.stirrup_leg_count
        n_spans = min(len(ctx.group.spans), len(ctx.span_results))

        zones: list[StirrupZone] = []
        main_diameter = 0
        start = 0.0

        for i in range(n_spans):
            span = ctx.group.spans[i]
            result = ctx.span_results[i]
            choices: list[StirrupChoice | None] = []

            for position, name in enumerate(POSITION_NAMES):
                choice = design_stirrup(stirrup_demand(result, position), legs, settings)
                solution.stirrup_designs[f"{span.span_id}_Stirrup_{name}"] = str(choice) if choice else "-"
                choices.append(choice)

            governing = max(range(3), key=lambda p: stirrup_demand(result, p))
            choice = choices[governing]
            solution.stirrup_designs[f"{span.span_id}_Stirrup_Governing"] = str(choice) if choice else "-"
            if choice is not None:
                main_diameter = max(main_diameter, choice.diameter)

            length = span.length / 1000.0
            zones.extend(self._span_zones(start, length, choices, legs, settings))
            start += length

        solution.stirrup_profile = StirrupProfile(
            zones=zones,
            main_diameter=main_diameter or min(settings.stirrup.diameters, default=8),
            typical_leg_count=legs,
        )

    def _span_zones(
        self,
        start: float,
        length: float,
        choices: list[StirrupChoice | None],
        legs: int,
        settings: DesignSettings,
    ) -> list[StirrupZone]:
        """Support zones at both ends, mid-span zone between them."""
        ratio = settings.stirrup.support_zone_ratio
        end_zone = length * ratio
        # Nominal stirrups where there is no demand
        nominal = StirrupChoice(
            legs=legs,
            diameter=min(settings.stirrup.diameters, default=8),
            spacing=max(settings.stirrup.spacings, default=250),
        )

        bounds = [
            (start, start + end_zone, ZoneType.SUPPORT),
            (start + end_zone, start + length - end_zone, ZoneType.MID_SPAN),
            (start + length - end_zone, start + length, ZoneType.SUPPORT),
        ]
        zones: list[StirrupZone] = []
        for (zone_start, zone_end, zone_type), choice in zip(bounds, choices):
            if zone_end - zone_start <= 0:
                continue
            picked = choice or nominal
            zones.append(StirrupZone(
                start=round(zone_start, 3),
                end=round(zone_end, 3),
                spacing=picked.spacing,
                diameter=picked.diameter,
                leg_count=picked.legs,
                zone_type=zone_type,
            ))
        return zones
