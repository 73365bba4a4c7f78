"""Design pipeline — runs one beam's candidates through stages, rules and scoring."""

from __future__ import annotations
import logging

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.rule_engine import RuleEngine, create_default_rule_engine
from rebar_designer.core.scoring import (
    ConstructabilityScorer, score_constructability, total_score, weight_scores,
)
from rebar_designer.models import (
    BeamGroup, BeamSolution, DesignContext, DesignSettings, ExternalConstraint,
    ProjectConstraints, SpanResult,
)
from rebar_designer.stages.base import PipelineStage

logger = logging.getLogger(__name__)


MAX_PROPOSALS = 5


class RebarPipeline:
    """
    Stateless per-beam designer.

    Starts from a single seed context, lets the stages fan it out and
    filter it, then validates, scores, deduplicates and ranks whatever
    survives.
    """

    def __init__(
        self,
        stages: list[PipelineStage] | None = None,
        rule_engine: RuleEngine | None = None,
        constraint_engine: ConstraintEngine | None = None,
        constructability_scorer: ConstructabilityScorer = score_constructability,
    ) -> None:
        self._stages: list[PipelineStage] = sorted(stages or [], key=lambda s: s.order)
        self.rule_engine = rule_engine or RuleEngine()
        self.constraint_engine = constraint_engine
        self.constructability_scorer = constructability_scorer

    def add_stage(self, stage: PipelineStage) -> None:
        self._stages.append(stage)
        self._stages.sort(key=lambda s: s.order)

    def stage_names(self) -> list[str]:
        return [s.get_name() for s in self._stages]

    def execute(
        self,
        group: BeamGroup,
        span_results: list[SpanResult],
        settings: DesignSettings,
        project_constraints: ProjectConstraints,
        external: ExternalConstraint | None = None,
    ) -> list[BeamSolution]:
        """Return at most five proposals, best first. Empty when nothing survives."""
        engine = self.constraint_engine or ConstraintEngine(settings)
        seed = DesignContext(
            group=group,
            span_results=span_results,
            settings=settings,
            project_constraints=project_constraints,
            external_constraint=external,
        )

        contexts = [seed]
        for stage in self._stages:
            contexts = [c for c in stage.execute(contexts, engine) if c.is_valid]
            if not contexts:
                logger.info("%s: every candidate failed at stage %s", group.name, stage.get_name())
                return []
            logger.debug("%s: %d candidates after %s", group.name, len(contexts), stage.get_name())

        validated: list[DesignContext] = []
        for ctx in contexts:
            self.rule_engine.validate_all(ctx)
            if not ctx.has_critical_error:
                validated.append(ctx)

        scored = [c for c in validated if c.current_solution is not None]
        self._score(scored)
        return self._rank([c.current_solution for c in scored])

    def _score(self, contexts: list[DesignContext]) -> None:
        weights = [c.current_solution.total_steel_weight for c in contexts]
        for ctx, weight_score in zip(contexts, weight_scores(weights)):
            solution = ctx.current_solution
            solution.weight_score = weight_score
            solution.constructability_score = self.constructability_scorer(
                solution, ctx.group, ctx.settings,
            )
            solution.total_score = total_score(
                weight_score, solution.constructability_score,
                ctx.total_penalty, ctx.preferred_diameter_bonus,
            )

    def _rank(self, solutions: list[BeamSolution]) -> list[BeamSolution]:
        best: dict[str, BeamSolution] = {}
        for solution in solutions:
            kept = best.get(solution.option_name)
            if kept is None or solution.total_score > kept.total_score:
                best[solution.option_name] = solution

        ranked = sorted(best.values(), key=lambda s: (-s.total_score, s.total_steel_weight))
        return ranked[:MAX_PROPOSALS]


def create_default_pipeline(constraint_engine: ConstraintEngine | None = None) -> RebarPipeline:
    """Create a pipeline with the standard stages and design rules."""
    from rebar_designer.stages.backbone import BackboneScenarioStage
    from rebar_designer.stages.filler import ReinforcementFillerStage
    from rebar_designer.stages.stirrup import StirrupStage
    from rebar_designer.stages.conflicts import ConflictReviewStage
    from rebar_designer.stages.solution_check import SolutionCheckStage

    return RebarPipeline(
        stages=[
            BackboneScenarioStage(),
            ReinforcementFillerStage(),
            StirrupStage(),
            ConflictReviewStage(),
            SolutionCheckStage(),
        ],
        rule_engine=create_default_rule_engine(),
        constraint_engine=constraint_engine,
    )
