"""Solution constraints — checks on a fully assembled beam."""

from __future__ import annotations

from rebar_designer.constraints.base import SolutionConstraint
from rebar_designer.models import BeamGroup, BeamSolution, ConstraintResult, DesignSettings


MIN_BEAM_LENGTH = 0.001  # m; shorter beams are treated as 1 m long


class SteelDeficitConstraint(SolutionConstraint):
    """Rejects solutions that the filler already flagged as short of steel."""

    priority = 1

    def __init__(self, settings: DesignSettings) -> None:
        self.tolerance = settings.rules.safety_factor

    def get_name(self) -> str:
        return "SteelDeficit"

    def get_description(self) -> str:
        return f"Provided steel must reach {self.tolerance:.0%} of the required area"

    def check(self, solution: BeamSolution, group: BeamGroup | None) -> ConstraintResult:
        if not solution.is_valid and solution.validation_message:
            return ConstraintResult.critical(self.get_name(), solution.validation_message)
        return ConstraintResult.ok(self.get_name())


class MaxWeightConstraint(SolutionConstraint):

    priority = 20

    def __init__(self, settings: DesignSettings) -> None:
        self.max_weight_per_meter = settings.beam.max_steel_weight_per_meter

    def get_name(self) -> str:
        return "MaxWeight"

    def get_description(self) -> str:
        return f"At most {self.max_weight_per_meter:g} kg/m"

    def is_enabled(self) -> bool:
        return self.max_weight_per_meter > 0

    def check(self, solution: BeamSolution, group: BeamGroup | None) -> ConstraintResult:
        length = group.total_length if group is not None else 1.0
        if length < MIN_BEAM_LENGTH:
            length = 1.0
        per_meter = solution.total_steel_weight / length

        if per_meter > self.max_weight_per_meter:
            return ConstraintResult.warning(
                self.get_name(),
                f"Steel {per_meter:.1f}kg/m > {self.max_weight_per_meter:g}kg/m",
                10.0,
            )
        return ConstraintResult.ok(self.get_name())
