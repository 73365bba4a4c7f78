"""Pyramid rule — an upper layer may never hold more bars than the layer below it."""

from __future__ import annotations

from rebar_designer.rules.base import DesignRule
from rebar_designer.models import DesignContext, ValidationResult


class PyramidRule(DesignRule):
    """Final guard on layer ordering; strategies already enforce it while filling."""

    priority = 1  # Check first

    def get_name(self) -> str:
        return "Pyramid"

    def validate(self, context: DesignContext) -> ValidationResult:
        profile = context.rebar_profile
        if profile is not None:
            if len(profile.top_layer2) > len(profile.top_layer1):
                return ValidationResult.critical(
                    self.get_name(),
                    f"Top layer 2 ({len(profile.top_layer2)}) exceeds layer 1 ({len(profile.top_layer1)})",
                )
            if len(profile.bot_layer2) > len(profile.bot_layer1):
                return ValidationResult.critical(
                    self.get_name(),
                    f"Bottom layer 2 ({len(profile.bot_layer2)}) exceeds layer 1 ({len(profile.bot_layer1)})",
                )

        solution = context.current_solution
        if solution is None:
            return ValidationResult.passed(self.get_name())

        for key, spec in solution.reinforcements.items():
            layers = spec.layer_breakdown
            for i in range(1, len(layers)):
                if layers[i] > layers[i - 1]:
                    return ValidationResult.critical(
                        self.get_name(),
                        f"{key}: layer {i + 1} ({layers[i]}) exceeds layer {i} ({layers[i - 1]})",
                    )

        return ValidationResult.passed(self.get_name())
