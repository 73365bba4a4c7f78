"""High-level beam design service — facade for the API layer."""

from __future__ import annotations

from rebar_designer.models import (
    BeamGroup, BeamRequest, BeamSolution, DesignSettings, FloorSolution,
    ProjectConstraints, SpanResult,
)
from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.orchestrator import MultiBeamOrchestrator
from rebar_designer.core.pipeline import RebarPipeline, create_default_pipeline


class DesignService:
    """Fills in defaults, delegates to the pipeline or orchestrator."""

    def __init__(self, pipeline: RebarPipeline | None = None) -> None:
        self.pipeline = pipeline or create_default_pipeline()
        self.orchestrator = MultiBeamOrchestrator(self.pipeline)

    def design_beam(
        self,
        group: BeamGroup,
        span_results: list[SpanResult],
        settings: DesignSettings | None = None,
        constraints: ProjectConstraints | None = None,
    ) -> list[BeamSolution]:
        if settings is None:
            settings = DesignSettings()
        if constraints is None:
            constraints = ProjectConstraints()

        return self.orchestrator.recalculate_single(group, span_results, settings, constraints)

    def design_floor(
        self,
        beams: list[BeamRequest],
        settings: DesignSettings | None = None,
        constraints: ProjectConstraints | None = None,
    ) -> FloorSolution:
        if settings is None:
            settings = DesignSettings()

        return self.orchestrator.solve_floor(beams, settings, constraints)

    def list_rules(self) -> list[str]:
        return self.pipeline.rule_engine.rule_names()

    def list_constraints(self, settings: DesignSettings | None = None) -> list[dict[str, object]]:
        engine = self.pipeline.constraint_engine or ConstraintEngine(settings or DesignSettings())
        return [
            {
                "name": c.get_name(),
                "description": c.get_description(),
                "category": c.category.value,
                "priority": c.priority,
                "enabled": c.is_enabled(),
            }
            for c in engine.all_constraints()
        ]
