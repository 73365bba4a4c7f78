"""Arrangement constraints — bar count, layer count and spacing at one section."""

from __future__ import annotations

from rebar_designer.constraints.base import ArrangementConstraint
from rebar_designer.models import (
    ConstraintResult, DesignSection, DesignSettings, SectionArrangement,
)


class MinBarsConstraint(ArrangementConstraint):
    """Every occupied layer needs enough bars to be tied into a cage."""

    priority = 1

    def __init__(self, settings: DesignSettings) -> None:
        self.min_bars = settings.beam.min_bars_per_layer

    def get_name(self) -> str:
        return "MinBars"

    def get_description(self) -> str:
        return f"At least {self.min_bars} bars per layer"

    def check(self, arrangement: SectionArrangement, section: DesignSection) -> ConstraintResult:
        if arrangement.total_count == 0:
            return ConstraintResult.ok(self.get_name())

        for count in arrangement.bars_per_layer:
            if 0 < count < self.min_bars:
                return ConstraintResult.critical(
                    self.get_name(),
                    f"{section.section_id}: layer with {count} bars < minimum {self.min_bars}",
                    f"Raise to {self.min_bars} bars or use a larger diameter",
                )
        return ConstraintResult.ok(self.get_name())


class MaxLayersConstraint(ArrangementConstraint):

    priority = 2

    def __init__(self, settings: DesignSettings) -> None:
        self.max_layers = settings.beam.max_layers

    def get_name(self) -> str:
        return "MaxLayers"

    def get_description(self) -> str:
        return f"At most {self.max_layers} layers"

    def check(self, arrangement: SectionArrangement, section: DesignSection) -> ConstraintResult:
        if arrangement.layer_count > self.max_layers:
            return ConstraintResult.critical(
                self.get_name(),
                f"{section.section_id}: needs {arrangement.layer_count} layers > {self.max_layers} allowed",
                "Use a larger diameter or a wider beam",
            )
        return ConstraintResult.ok(self.get_name())


class SpacingConstraint(ArrangementConstraint):
    """Clear gap between layer-1 bars: concrete must pass, cracks must stay small."""

    priority = 3

    def __init__(self, settings: DesignSettings) -> None:
        self.min_spacing = settings.beam.min_clear_spacing
        self.max_spacing = settings.beam.max_clear_spacing

    def get_name(self) -> str:
        return "Spacing"

    def get_description(self) -> str:
        return f"Clear spacing {self.min_spacing:g}-{self.max_spacing:g} mm"

    def check(self, arrangement: SectionArrangement, section: DesignSection) -> ConstraintResult:
        if arrangement.total_count <= 1:
            return ConstraintResult.ok(self.get_name())

        if arrangement.clear_spacing < self.min_spacing:
            return ConstraintResult.critical(
                self.get_name(),
                f"Clear spacing {arrangement.clear_spacing:.0f}mm < {self.min_spacing:g}mm minimum",
                "Use fewer bars or a smaller diameter",
            )
        if arrangement.clear_spacing > self.max_spacing:
            return ConstraintResult.warning(
                self.get_name(),
                f"Clear spacing {arrangement.clear_spacing:.0f}mm > {self.max_spacing:g}mm (cracking?)",
                5.0,
            )
        return ConstraintResult.ok(self.get_name())
