"""Solution check — runs the solution constraints on each assembled beam."""

from __future__ import annotations

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.models import DesignContext
from rebar_designer.stages.base import PipelineStage


class SolutionCheckStage(PipelineStage):

    order = 5

    def get_name(self) -> str:
        return "SolutionCheck"

    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        for ctx in contexts:
            if not ctx.is_valid or ctx.current_solution is None:
                continue
            results = engine.check_solution(ctx.current_solution, ctx.group)
            ctx.record_constraints(self.get_name(), results)
        return contexts
