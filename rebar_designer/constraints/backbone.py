"""Backbone constraints — properties of the continuous top and bottom bars."""

from __future__ import annotations

from rebar_designer.constraints.base import BackboneConstraint
from rebar_designer.models import (
    BackboneCandidate, ConstraintResult, DesignSection, DesignSettings,
)


class DiameterUniformityConstraint(BackboneConstraint):
    """Backbones are one diameter per face by construction; kept as a hook."""

    priority = 10

    def __init__(self, settings: DesignSettings) -> None:
        self.prefer = settings.beam.prefer_single_diameter

    def get_name(self) -> str:
        return "DiameterUniformity"

    def get_description(self) -> str:
        return "Prefer a single backbone diameter"

    def is_enabled(self) -> bool:
        return self.prefer

    def check(self, candidate: BackboneCandidate, sections: list[DesignSection]) -> ConstraintResult:
        return ConstraintResult.ok(self.get_name())


class CountSymmetryConstraint(BackboneConstraint):

    priority = 15

    def get_name(self) -> str:
        return "CountSymmetry"

    def get_description(self) -> str:
        return "Prefer equal top and bottom backbone counts"

    def check(self, candidate: BackboneCandidate, sections: list[DesignSection]) -> ConstraintResult:
        if candidate.count_top != candidate.count_bot:
            diff = abs(candidate.count_top - candidate.count_bot)
            return ConstraintResult.warning(
                self.get_name(),
                f"Top={candidate.count_top}, Bot={candidate.count_bot} (differ by {diff})",
                diff * 2.0,
            )
        return ConstraintResult.ok(self.get_name())
