"""Backbone scenarios — one sibling context per continuous top/bottom bar option."""

from __future__ import annotations
import itertools
import logging

from rebar_designer.constraints.engine import ConstraintEngine
from rebar_designer.core.analyzer import SectionAnalyzer, max_required
from rebar_designer.core.sizing import bar_area, layer_capacity
from rebar_designer.models import BackboneCandidate, DesignContext, DesignSection
from rebar_designer.stages.base import PipelineStage

logger = logging.getLogger(__name__)


OVER_REINFORCED_RATIO = 1.10


class BackboneScenarioStage(PipelineStage):
    """
    Fans each context out into backbone candidates.

    A user lock or other external constraint replaces the search with
    its forced values. Otherwise every allowed diameter and every count
    from the minimum up to the layer capacity is tried, minus backbones
    that already over-reinforce both faces.
    """

    order = 1

    def __init__(self) -> None:
        self.analyzer = SectionAnalyzer()

    def get_name(self) -> str:
        return "BackboneScenario"

    def execute(self, contexts: list[DesignContext], engine: ConstraintEngine) -> list[DesignContext]:
        out: list[DesignContext] = []
        for ctx in contexts:
            if not ctx.is_valid:
                out.append(ctx)
                continue
            out.extend(self._expand(ctx, engine))
        return out

    def _expand(self, ctx: DesignContext, engine: ConstraintEngine) -> list[DesignContext]:
        sections = self.analyzer.analyze(ctx.group, ctx.span_results)
        candidates = self.candidates(ctx, sections)
        if not candidates:
            ctx.fail(self.get_name(), "No backbone candidate fits the beam width")
            return [ctx]

        pc = ctx.project_constraints
        siblings: list[DesignContext] = []
        for candidate in candidates:
            child = ctx.clone(
                scenario_id=candidate.option_id,
                top_backbone_diameter=candidate.diameter_top,
                bot_backbone_diameter=candidate.diameter_bot,
                top_backbone_count=candidate.count_top,
                bot_backbone_count=candidate.count_bot,
                sections=sections,
            )
            child.record_constraints(self.get_name(), engine.check_backbone(candidate, sections))
            if pc.matches_standard(candidate.diameter_top):
                child.preferred_diameter_bonus = pc.neighbor_match_bonus
            siblings.append(child)

        logger.debug("%s: %d backbone scenarios", ctx.group.name, len(siblings))
        return siblings

    def candidates(self, ctx: DesignContext, sections: list[DesignSection]) -> list[BackboneCandidate]:
        """Backbone options for this beam, in a stable order."""
        settings = ctx.settings
        beam = settings.beam
        ext = ctx.external_constraint
        width = ctx.beam_width
        min_count = max(2, beam.min_bars_per_layer)

        forced_diameter = ext.forced_backbone_diameter if ext else None
        forced_top = ext.forced_backbone_count_top if ext else None
        forced_bot = ext.forced_backbone_count_bot if ext else None
        is_forced = any(v is not None for v in (forced_diameter, forced_top, forced_bot))

        if forced_diameter is not None:
            diameters = [forced_diameter]
        else:
            diameters = self._allowed_diameters(ctx)

        if forced_diameter is not None or beam.prefer_single_diameter:
            pairs = [(d, d) for d in diameters]
        else:
            pairs = list(itertools.product(diameters, diameters))

        max_top = max_required(sections, True)
        max_bot = max_required(sections, False)

        candidates: list[BackboneCandidate] = []
        for d_top, d_bot in pairs:
            top_counts = self._counts(forced_top, min_count, layer_capacity(width, d_top, settings))
            bot_counts = self._counts(forced_bot, min_count, layer_capacity(width, d_bot, settings))
            for n_top, n_bot in itertools.product(top_counts, bot_counts):
                candidate = BackboneCandidate(
                    diameter_top=d_top, diameter_bot=d_bot, count_top=n_top, count_bot=n_bot,
                )
                if is_forced or (n_top == min_count and n_bot == min_count):
                    candidates.append(candidate)
                    continue
                if (n_top * bar_area(d_top) > max_top * OVER_REINFORCED_RATIO
                        and n_bot * bar_area(d_bot) > max_bot * OVER_REINFORCED_RATIO):
                    continue
                candidates.append(candidate)

        return candidates

    def _allowed_diameters(self, ctx: DesignContext) -> list[int]:
        diameters = sorted(set(ctx.settings.beam.main_bar_diameters))
        override = ctx.project_constraints.allowed_diameters_override
        if override:
            diameters = [d for d in diameters if d in override]
        return diameters

    def _counts(self, forced: int | None, min_count: int, capacity: int) -> list[int]:
        if forced is not None:
            return [forced]
        return list(range(min_count, capacity + 1))
