"""Symmetry rule — even backbone counts sit symmetrically about the section axis."""

from __future__ import annotations

from rebar_designer.rules.base import DesignRule
from rebar_designer.models import DesignContext, ValidationResult


PENALTY_PER_ODD_LAYER = 2.0


class SymmetryRule(DesignRule):

    priority = 5

    def get_name(self) -> str:
        return "Symmetry"

    def validate(self, context: DesignContext) -> ValidationResult:
        if not context.settings.beam.prefer_symmetric:
            return ValidationResult.passed(self.get_name())

        n_top = context.top_backbone_count
        n_bot = context.bot_backbone_count
        odd = (n_top % 2) + (n_bot % 2)

        if odd > 0:
            return ValidationResult.warning(
                self.get_name(),
                f"Odd bar counts ({n_top}/{n_bot}) are not perfectly symmetric",
                odd * PENALTY_PER_ODD_LAYER,
            )
        return ValidationResult.passed(self.get_name())
