"""Abstract base class for pipeline stages.

A stage takes the surviving design contexts of one beam and returns
the next generation of them:
- Fan-out: one context may become many siblings (one per option)
- Filtering: a stage marks contexts invalid; the pipeline drops them
- Ordered: the pipeline runs stages by ascending `order`
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.models import DesignContext


class PipelineStage(ABC):
    """
    Base class for all pipeline stages.

    Subclasses implement `get_name()` and `execute()`. Contexts that
    arrive invalid are passed through untouched.
    """

    # Lower order = runs first. Default 100.
    order: int = 100

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        ...
