"""Section-pair constraints — compatibility across a shared support."""

from __future__ import annotations

from rebar_designer.constraints.base import SectionPairConstraint
from rebar_designer.models import ConstraintResult, DesignSection


class SupportContinuityConstraint(SectionPairConstraint):
    """Top bars run through the column, so both faces need a usable arrangement."""

    priority = 5

    def get_name(self) -> str:
        return "SupportContinuity"

    def get_description(self) -> str:
        return "Support top steel must be continuous through the column"

    def check(self, left: DesignSection | None, right: DesignSection | None) -> ConstraintResult:
        if left is None or right is None:
            return ConstraintResult.ok(self.get_name())

        if not left.valid_arrangements_top or not right.valid_arrangements_top:
            return ConstraintResult.critical(
                self.get_name(),
                f"No shared arrangement at support (L={left.section_id}, R={right.section_id})",
            )
        return ConstraintResult.ok(self.get_name())
