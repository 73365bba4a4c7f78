"""Base classes for pluggable design constraints.

Each constraint belongs to exactly one category, and each category has
its own `check()` signature:

- Arrangement: one bar layout at one section
- Backbone: a backbone candidate against every designed section
- Solution: a fully assembled beam solution against its group
- SectionPair: two sections facing each other across a support
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from rebar_designer.models import (
    BackboneCandidate, BeamGroup, BeamSolution, ConstraintResult,
    DesignSection, DesignSettings, SectionArrangement,
)


class ConstraintCategory(str, Enum):
    ARRANGEMENT = "arrangement"
    BACKBONE = "backbone"
    SOLUTION = "solution"
    SECTION_PAIR = "section_pair"


class Constraint(ABC):
    """Common surface of every constraint, whatever its category."""

    category: ClassVar[ConstraintCategory]

    # Lower priority = checked first. Default 100.
    priority: int = 100

    def __init__(self, settings: DesignSettings | None = None) -> None:
        """Built-ins read their thresholds from settings here; the base keeps none."""

    @abstractmethod
    def get_name(self) -> str:
        """Unique name within the engine (e.g., 'MinBars')."""
        ...

    def get_description(self) -> str:
        return ""

    def is_enabled(self) -> bool:
        return True


class ArrangementConstraint(Constraint):
    category = ConstraintCategory.ARRANGEMENT

    @abstractmethod
    def check(self, arrangement: SectionArrangement, section: DesignSection) -> ConstraintResult:
        ...


class BackboneConstraint(Constraint):
    category = ConstraintCategory.BACKBONE

    @abstractmethod
    def check(self, candidate: BackboneCandidate, sections: list[DesignSection]) -> ConstraintResult:
        ...


class SolutionConstraint(Constraint):
    category = ConstraintCategory.SOLUTION

    @abstractmethod
    def check(self, solution: BeamSolution, group: BeamGroup | None) -> ConstraintResult:
        ...


class SectionPairConstraint(Constraint):
    category = ConstraintCategory.SECTION_PAIR

    @abstractmethod
    def check(self, left: DesignSection | None, right: DesignSection | None) -> ConstraintResult:
        ...
