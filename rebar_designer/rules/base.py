"""Abstract base class for legacy design rules.

Rules are the final gate before scoring. They are:
- Single-purpose: each checks one design preference or code rule
- Ordered: the rule engine runs them by ascending priority
- Graded: each returns one ValidationResult with a severity
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from rebar_designer.models import DesignContext, ValidationResult


class DesignRule(ABC):
    """
    Base class for all design rules.

    Subclasses implement `get_name()` and `validate()`.
    """

    # Lower priority = checked first. Default 100.
    priority: int = 100

    @abstractmethod
    def get_name(self) -> str:
        """Name used in results and for removal (e.g., 'Pyramid')."""
        ...

    @abstractmethod
    def validate(self, context: DesignContext) -> ValidationResult:
        """Check the context; must not modify it."""
        ...
