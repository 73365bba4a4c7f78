"""Reinforcement filling — local bars on top of the backbone, span by span.

Every location runs all filling strategies. Their valid plans become
section arrangements; the constraint engine vets each one, and the
leanest survivor (fewest bars, then least waste) is kept.
"""

from __future__ import annotations
import logging

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.analyzer import (
    MID, SectionAnalyzer, location_key, support_pairs,
)
from rebar_designer.core.profile_builder import build_rebar_profile
from rebar_designer.core.sizing import (
    BACKBONE_LAP_FACTOR, bar_area, bar_weight, clear_spacing, layer_capacity, stirrup_leg_count,
)
from rebar_designer.models import (
    BeamSolution, ConstraintResult, DesignContext, DesignSection, FillingContext,
    FillingResult, RebarSpec, SectionArrangement,
)
from rebar_designer.stages.base import PipelineStage
from rebar_designer.strategies.balanced import BalancedFillingStrategy
from rebar_designer.strategies.base import FillingStrategy
from rebar_designer.strategies.greedy import GreedyFillingStrategy

logger = logging.getLogger(__name__)


OPTIONAL_FILL_RATIO = 1.05  # Fill optional locations only above this share of the backbone
DESCRIPTIONS = {2: "Economical", 3: "Balanced", 4: "Safe"}


class ReinforcementFillerStage(PipelineStage):

    order = 2

    def __init__(self, strategies: list[FillingStrategy] | None = None) -> None:
        # Earlier strategies win ties
        self.strategies = strategies or [GreedyFillingStrategy(), BalancedFillingStrategy()]
        self.analyzer = SectionAnalyzer()

    def get_name(self) -> str:
        return "ReinforcementFiller"

    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        for ctx in contexts:
            if ctx.is_valid:
                self._solve(ctx, engine)
        return contexts

    def _solve(self, ctx: DesignContext, engine: ConstraintEngine) -> None:
        if not ctx.group.spans or not ctx.span_results:
            ctx.fail(self.get_name(), "Beam has no spans with analysis results")
            return

        settings = ctx.settings
        n_top, n_bot = ctx.top_backbone_count, ctx.bot_backbone_count
        d_top, d_bot = ctx.top_backbone_diameter, ctx.bot_backbone_diameter

        solution = BeamSolution(
            option_name=ctx.scenario_id,
            backbone_diameter=d_top,
            backbone_diameter_bot=d_bot,
            backbone_count_top=n_top,
            backbone_count_bot=n_bot,
            as_backbone_top=n_top * bar_area(d_top),
            as_backbone_bot=n_bot * bar_area(d_bot),
        )
        ctx.current_solution = solution

        ext = ctx.external_constraint
        if ext is not None and ext.forced_stirrup_legs:
            ctx.stirrup_leg_count = ext.forced_stirrup_legs
        else:
            ctx.stirrup_leg_count = stirrup_leg_count(ctx.beam_width, settings)

        # Fresh sections: arrangements are recorded per candidate
        ctx.sections = self.analyzer.analyze(ctx.group, ctx.span_results)
        governing = {True: [n_top], False: [n_bot]}
        deficits: list[str] = []

        for section in ctx.sections:
            span = ctx.group.spans[section.span_index]
            for is_top in (True, False):
                required = section.required_top if is_top else section.required_bot
                backbone_area = solution.as_backbone_top if is_top else solution.as_backbone_bot
                key = location_key(span.span_id, is_top, section.position)
                mandatory = (is_top and section.position != MID) or (not is_top and section.position == MID)
                if not mandatory and required <= backbone_area * OPTIONAL_FILL_RATIO:
                    # Backbone alone stays here, but it still has to carry the demand
                    if backbone_area < required * settings.rules.safety_factor:
                        deficits.append(f"{key}: {backbone_area:.2f} < {required:.2f} cm²")
                    continue

                counts = self._fill_location(ctx, engine, section, key, is_top, required)
                if counts is None:
                    ctx.fail(self.get_name(), f"No arrangement fits at {key} (req={required:.2f} cm²)")
                    return

                if sum(counts) > sum(governing[is_top]):
                    governing[is_top] = counts

                diameter = d_top if is_top else d_bot
                provided = sum(counts) * bar_area(diameter)
                if provided < required * settings.rules.safety_factor:
                    deficits.append(f"{key}: {provided:.2f} < {required:.2f} cm²")

        for left, right in support_pairs(ctx.sections):
            ctx.record_constraints(self.get_name(), engine.check_section_pair(left, right))
            if not ctx.is_valid:
                return

        if deficits:
            solution.is_valid = False
            solution.validation_message = "Insufficient steel at " + "; ".join(deficits)

        ctx.rebar_profile = build_rebar_profile(
            governing[True], d_top, governing[False], d_bot,
            ctx.beam_width, min(s.height for s in ctx.group.spans), settings,
        )
        self._calculate_metrics(ctx, solution)
        logger.debug(
            "%s: %.1f kg, %d reinforced locations", solution.option_name,
            solution.total_steel_weight, len(solution.reinforcements),
        )

    def _fill_location(
        self,
        ctx: DesignContext,
        engine: ConstraintEngine,
        section: DesignSection,
        key: str,
        is_top: bool,
        required: float,
    ) -> list[int] | None:
        """Pick and record the arrangement for one location; None if nothing fits."""
        settings = ctx.settings
        diameter = ctx.top_backbone_diameter if is_top else ctx.bot_backbone_diameter
        backbone_count = ctx.top_backbone_count if is_top else ctx.bot_backbone_count
        capacity = layer_capacity(ctx.beam_width, diameter, settings)
        if backbone_count > capacity:
            return None

        fill = FillingContext(
            required_area=required,
            backbone_area=backbone_count * bar_area(diameter),
            backbone_count=backbone_count,
            backbone_diameter=diameter,
            layer_capacity=capacity,
            stirrup_leg_count=ctx.stirrup_leg_count,
            max_layers=settings.beam.max_layers,
            settings=settings,
        )

        survivors: list[tuple[FillingResult, list[ConstraintResult]]] = []
        for strategy in self.strategies:
            plan = strategy.calculate(fill)
            if not plan.is_valid:
                logger.debug("%s %s: %s", key, strategy.get_name(), plan.fail_reason)
                continue

            arrangement = SectionArrangement(
                diameter=diameter,
                bars_per_layer=plan.layer_counts,
                clear_spacing=clear_spacing(section.width, diameter, plan.layer_counts[0], settings),
                strategy=strategy.get_name(),
            )
            checks = engine.check_arrangement(arrangement, section)
            if engine.has_critical_failure(checks):
                continue

            arrangements = section.valid_arrangements_top if is_top else section.valid_arrangements_bot
            arrangements.append(arrangement)
            survivors.append((plan, checks))

        if not survivors:
            return None

        best, checks = min(survivors, key=lambda s: (s[0].total_bars, s[0].waste_count))
        ctx.record_constraints(self.get_name(), checks)
        ctx.accumulated_waste_count += best.waste_count

        counts = best.layer_counts
        added = max(0, counts[0] - backbone_count) + sum(counts[1:])
        if added > 0:
            ctx.current_solution.reinforcements[key] = RebarSpec(
                diameter=diameter,
                count=added,
                layer=len(counts),
                position="top" if is_top else "bot",
                layer_breakdown=list(counts),
            )
        return counts

    def _calculate_metrics(self, ctx: DesignContext, solution: BeamSolution) -> None:
        group = ctx.group
        curtailment = ctx.settings.curtailment
        total_length = sum(s.length for s in group.spans)

        weight = bar_weight(solution.backbone_diameter, total_length, solution.backbone_count_top)
        weight += bar_weight(solution.bottom_diameter, total_length, solution.backbone_count_bot)
        weight *= BACKBONE_LAP_FACTOR

        span_lengths = {s.span_id: s.length for s in group.spans}
        for key, spec in solution.reinforcements.items():
            span_id = key.rsplit("_", 2)[0]
            span_length = span_lengths.get(span_id, 0.0)
            is_support = key.endswith(("_Left", "_Right"))
            ratio = curtailment.support_reinf_ratio if is_support else curtailment.mid_span_reinf_ratio
            weight += bar_weight(spec.diameter, span_length * ratio, spec.count)

        solution.total_steel_weight = weight
        solution.waste_bar_count = ctx.accumulated_waste_count

        efficiency = 10000.0 / (weight + 1.0)
        if any(spec.layer >= 2 for spec in solution.reinforcements.values()):
            efficiency *= 0.95
        if solution.backbone_count_top != solution.backbone_count_bot:
            efficiency *= 0.98
        solution.efficiency_score = efficiency
        solution.description = DESCRIPTIONS.get(solution.backbone_count_top, "")
