"""Constraint engine — registers pluggable constraints and runs them per category."""

from __future__ import annotations
import logging
from typing import Callable

from rebar_designer.constraints.base import Constraint, ConstraintCategory
from rebar_designer.models import (
    BackboneCandidate, BeamGroup, BeamSolution, ConstraintResult, DesignSection,
    DesignSettings, SectionArrangement, Severity, CONSTRAINT_TIER_POLICY,
)

logger = logging.getLogger(__name__)


class ConstraintEngine:
    """
    Holds constraints per category, sorted by ascending priority.

    Registration is idempotent by name. Every check entry point runs
    the enabled constraints of its category and returns all results;
    only a fatal result stops the category early.
    """

    policy = CONSTRAINT_TIER_POLICY

    def __init__(self, settings: DesignSettings | None = None, register_defaults: bool = True) -> None:
        self.settings = settings or DesignSettings()
        self._by_category: dict[ConstraintCategory, list[Constraint]] = {
            category: [] for category in ConstraintCategory
        }
        if register_defaults:
            self.register_defaults()

    def register(self, constraint: Constraint) -> None:
        """Add a constraint. A name that is already registered is ignored."""
        if not isinstance(constraint, Constraint):
            raise TypeError(f"Expected a Constraint, got {type(constraint).__name__}")

        name = constraint.get_name()
        if self.get(name) is not None:
            logger.debug("Constraint %s already registered, skipping", name)
            return

        bucket = self._by_category[constraint.category]
        bucket.append(constraint)
        bucket.sort(key=lambda c: c.priority)

    def unregister(self, name: str) -> bool:
        for bucket in self._by_category.values():
            for constraint in bucket:
                if constraint.get_name() == name:
                    bucket.remove(constraint)
                    return True
        return False

    def get(self, name: str) -> Constraint | None:
        for bucket in self._by_category.values():
            for constraint in bucket:
                if constraint.get_name() == name:
                    return constraint
        return None

    def constraints_for(self, category: ConstraintCategory) -> list[Constraint]:
        return list(self._by_category[category])

    def all_constraints(self) -> list[Constraint]:
        result: list[Constraint] = []
        for category in ConstraintCategory:
            result.extend(self._by_category[category])
        return result

    def register_defaults(self) -> None:
        from rebar_designer.constraints.arrangement import (
            MaxLayersConstraint, MinBarsConstraint, SpacingConstraint,
        )
        from rebar_designer.constraints.backbone import (
            CountSymmetryConstraint, DiameterUniformityConstraint,
        )
        from rebar_designer.constraints.solution import (
            MaxWeightConstraint, SteelDeficitConstraint,
        )
        from rebar_designer.constraints.section_pair import SupportContinuityConstraint

        for cls in (
            MinBarsConstraint, MaxLayersConstraint, SpacingConstraint,
            DiameterUniformityConstraint, CountSymmetryConstraint,
            SteelDeficitConstraint, MaxWeightConstraint,
            SupportContinuityConstraint,
        ):
            self.register(cls(self.settings))

    def check_arrangement(
        self, arrangement: SectionArrangement, section: DesignSection,
    ) -> list[ConstraintResult]:
        return self._run(
            ConstraintCategory.ARRANGEMENT,
            lambda c: c.check(arrangement, section),  # type: ignore[attr-defined]
        )

    def check_backbone(
        self, candidate: BackboneCandidate, sections: list[DesignSection],
    ) -> list[ConstraintResult]:
        return self._run(
            ConstraintCategory.BACKBONE,
            lambda c: c.check(candidate, sections),  # type: ignore[attr-defined]
        )

    def check_solution(
        self, solution: BeamSolution, group: BeamGroup | None = None,
    ) -> list[ConstraintResult]:
        return self._run(
            ConstraintCategory.SOLUTION,
            lambda c: c.check(solution, group),  # type: ignore[attr-defined]
        )

    def check_section_pair(
        self, left: DesignSection | None, right: DesignSection | None,
    ) -> list[ConstraintResult]:
        return self._run(
            ConstraintCategory.SECTION_PAIR,
            lambda c: c.check(left, right),  # type: ignore[attr-defined]
        )

    def _run(
        self,
        category: ConstraintCategory,
        call: Callable[[Constraint], ConstraintResult],
    ) -> list[ConstraintResult]:
        results: list[ConstraintResult] = []
        for constraint in self._by_category[category]:
            if not constraint.is_enabled():
                continue

            try:
                result = call(constraint)
            except Exception as ex:
                logger.warning("Constraint %s raised: %s", constraint.get_name(), ex)
                result = ConstraintResult.warning(constraint.get_name(), f"Exception: {ex}", 0.0)

            results.append(result)
            if self.policy.halts(result.severity):
                break
        return results

    @staticmethod
    def has_critical_failure(results: list[ConstraintResult]) -> bool:
        return any(not r.passed and r.severity.is_blocking for r in results)

    @staticmethod
    def total_penalty(results: list[ConstraintResult]) -> float:
        return sum(r.penalty for r in results if not r.passed and r.severity == Severity.WARNING)
