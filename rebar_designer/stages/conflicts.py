"""Conflict review — flags buildability problems without rejecting anything."""

from __future__ import annotations
import logging

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.sizing import usable_width
from rebar_designer.models import BeamSolution, ConflictReport, ConstraintResult, DesignContext
from rebar_designer.stages.base import PipelineStage

logger = logging.getLogger(__name__)


AGGREGATE_SPACING_FACTOR = 1.33  # Clear gap must pass 1.33 × max aggregate size
MAX_DIAMETER_RATIO = 1.5


def layer1_max(solution: BeamSolution) -> int:
    """Most bars in layer 1 anywhere along the beam, top or bottom."""
    most = max(solution.backbone_count_top, solution.backbone_count_bot)
    for spec in solution.reinforcements.values():
        if spec.layer_breakdown:
            most = max(most, spec.layer_breakdown[0])
    return most


class ConflictReviewStage(PipelineStage):
    """
    Reports, never rejects. Each finding becomes a ConflictReport on
    the context and a zero-penalty info result.
    """

    order = 4

    def get_name(self) -> str:
        return "ConflictReview"

    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        for ctx in contexts:
            if not ctx.is_valid or ctx.current_solution is None:
                continue
            found = (
                self._stirrup_legs(ctx)
                + self._clear_spacing(ctx)
                + self._layer_jumps(ctx)
                + self._diameter_jumps(ctx)
            )
            for report in found:
                ctx.conflicts.append(report)
                ctx.constraint_results.append(
                    ConstraintResult.info(report.conflict_type, report.description)
                )
            if found:
                logger.debug("%s: %d conflicts", ctx.scenario_id, len(found))
        return contexts

    def _stirrup_legs(self, ctx: DesignContext) -> list[ConflictReport]:
        legs = ctx.stirrup_leg_count if ctx.stirrup_leg_count > 0 else 2
        bars = layer1_max(ctx.current_solution)
        if bars <= legs:
            return []
        return [ConflictReport(
            conflict_type="StirrupLegDeficit",
            span_id="All",
            description=f"Stirrup legs ({legs}) fewer than layer-1 bars ({bars}); some bars are not tied directly",
            suggested_fix=f"Raise the leg count to {bars} or add cross-ties",
        )]

    def _clear_spacing(self, ctx: DesignContext) -> list[ConflictReport]:
        settings = ctx.settings
        usable = usable_width(ctx.beam_width, settings)
        bars = layer1_max(ctx.current_solution)
        if usable <= 0 or bars <= 1:
            return []

        beam = settings.beam
        needed = max(beam.min_clear_spacing, AGGREGATE_SPACING_FACTOR * beam.aggregate_size)
        diameter = ctx.current_solution.backbone_diameter
        actual = (usable - bars * diameter) / (bars - 1)
        if actual >= needed:
            return []
        return [ConflictReport(
            conflict_type="InsufficientClearSpacing",
            span_id="All",
            description=f"Actual clear spacing ({actual:.0f}mm) < required ({needed:.0f}mm); aggregate may not pass",
            suggested_fix="Use fewer layer-1 bars, a wider beam or a smaller diameter",
        )]

    def _layer_jumps(self, ctx: DesignContext) -> list[ConflictReport]:
        span_layers: dict[str, int] = {}
        for key, spec in ctx.current_solution.reinforcements.items():
            span_id = key.rsplit("_", 2)[0]
            layers = len(spec.layer_breakdown) or 1
            span_layers[span_id] = max(span_layers.get(span_id, 1), layers)

        reports: list[ConflictReport] = []
        span_ids = [s.span_id for s in ctx.group.spans]
        for a, b in zip(span_ids, span_ids[1:]):
            la, lb = span_layers.get(a, 1), span_layers.get(b, 1)
            if abs(la - lb) > 1:
                reports.append(ConflictReport(
                    conflict_type="LayerJump",
                    span_id=f"{a}-{b}",
                    description=f"Span {a} has {la} layers, span {b} has {lb}; continuous bars are hard to bend",
                    suggested_fix="Match the layer count of adjacent spans",
                ))
        return reports

    def _diameter_jumps(self, ctx: DesignContext) -> list[ConflictReport]:
        solution = ctx.current_solution
        backbone = solution.backbone_diameter
        if backbone <= 0:
            return []

        for key, spec in solution.reinforcements.items():
            if spec.count <= 0 or spec.diameter <= 0:
                continue
            ratio = spec.diameter / backbone
            if ratio > MAX_DIAMETER_RATIO:
                # One report per solution
                return [ConflictReport(
                    conflict_type="DiameterJump",
                    span_id=key,
                    description=f"Reinforcement D{spec.diameter} exceeds 1.5x backbone D{backbone} (ratio {ratio:.2f})",
                    suggested_fix="Use a diameter closer to the backbone",
                )]
        return []
