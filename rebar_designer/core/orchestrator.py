"""Multi-beam orchestration — solves a floor's beams in order, standardizing as it goes."""

from __future__ import annotations
import logging

from rebar_designer.core.pipeline import RebarPipeline, create_default_pipeline
from rebar_designer.models import (
    BeamGroup, BeamOutcome, BeamRequest, BeamSolution, DesignSettings, ExternalConstraint,
    FloorSolution, NeighborDesign, ProjectConstraints, SpanResult,
)

logger = logging.getLogger(__name__)


DEFAULT_STIRRUP_DIAMETER = 10  # mm, recorded for neighbors until a stirrup is chosen


def lock_constraint(group: BeamGroup) -> ExternalConstraint | None:
    """Force a locked beam's previously selected backbone."""
    if not group.is_locked:
        return None
    design = group.selected_design
    return ExternalConstraint(
        forced_backbone_diameter=design.backbone_diameter,
        forced_backbone_count_top=design.backbone_count_top,
        forced_backbone_count_bot=design.backbone_count_bot,
        source="UserLock",
    )


class MultiBeamOrchestrator:
    """
    Sequential floor solver.

    Beams must be solved in priority order: each accepted design is
    recorded as a neighbor and may set the floor's preferred diameter,
    which later beams are scored against. The floor state is threaded
    explicitly; inputs are never modified.
    """

    def __init__(self, pipeline: RebarPipeline | None = None) -> None:
        self.pipeline = pipeline or create_default_pipeline()

    def solve_beam(
        self,
        group: BeamGroup,
        span_results: list[SpanResult],
        settings: DesignSettings,
        constraints: ProjectConstraints,
    ) -> BeamOutcome:
        external = lock_constraint(group)
        proposals = self.pipeline.execute(group, span_results, settings, constraints, external)

        if not proposals:
            return BeamOutcome(
                group_name=group.name,
                constraints=constraints,
                message="No feasible arrangement; relax the settings or widen the beam",
            )

        best = proposals[0]
        neighbor = NeighborDesign(
            backbone_diameter=best.backbone_diameter,
            backbone_count=best.backbone_count_top,
            stirrup_diameter=constraints.preferred_stirrup_diameter or DEFAULT_STIRRUP_DIAMETER,
        )
        return BeamOutcome(
            group_name=group.name,
            solution=best,
            proposals=proposals,
            constraints=constraints.with_neighbor(group.name, neighbor),
        )

    def solve_floor(
        self,
        beams: list[BeamRequest],
        settings: DesignSettings,
        initial_constraints: ProjectConstraints | None = None,
    ) -> FloorSolution:
        """Solve beams in the given order; the order matters."""
        state = initial_constraints if initial_constraints is not None else ProjectConstraints()
        solutions: dict[str, BeamSolution] = {}
        unresolved: dict[str, str] = {}

        for beam in beams:
            outcome = self.solve_beam(beam.group, beam.span_results, settings, state)
            if outcome.solution is None:
                logger.warning("Beam %s unresolved: %s", beam.group.name, outcome.message)
                unresolved[beam.group.name] = outcome.message
                continue

            solutions[beam.group.name] = outcome.solution
            state = outcome.constraints
            logger.info(
                "Beam %s: %s (score %.1f)", beam.group.name,
                outcome.solution.option_name, outcome.solution.total_score,
            )

        return FloorSolution(solutions=solutions, unresolved=unresolved, constraints=state)

    def recalculate_single(
        self,
        group: BeamGroup,
        span_results: list[SpanResult],
        settings: DesignSettings,
        constraints: ProjectConstraints,
    ) -> list[BeamSolution]:
        """
        Re-solve one beam interactively; no lock applied, no state updated.

        Returns every ranked proposal so the engineer can pick another;
        the best one is first.
        """
        return self.pipeline.execute(group, span_results, settings, constraints)
