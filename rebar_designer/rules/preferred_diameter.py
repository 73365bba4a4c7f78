"""Preferred-diameter rule — reports whether the backbone follows the floor standard.

Informational only; the matching bonus itself is granted when the
backbone scenario is created.
"""

from __future__ import annotations

from rebar_designer.rules.base import DesignRule
from rebar_designer.models import DesignContext, ValidationResult


class PreferredDiameterRule(DesignRule):

    priority = 10  # Check last

    def get_name(self) -> str:
        return "PreferredDiameter"

    def validate(self, context: DesignContext) -> ValidationResult:
        preferred = context.project_constraints.preferred_main_diameter
        if preferred is None:
            return ValidationResult.passed(self.get_name())

        top_match = context.top_backbone_diameter == preferred
        bot_match = context.bot_backbone_diameter == preferred

        if top_match and bot_match:
            return ValidationResult.info(
                self.get_name(), f"Diameter matches the project preference (D{preferred})",
            )
        if top_match or bot_match:
            return ValidationResult.info(
                self.get_name(), f"Diameter partly matches the project preference (D{preferred})",
            )
        return ValidationResult.passed(self.get_name())
