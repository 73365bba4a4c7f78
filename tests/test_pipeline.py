"""Tests for the per-beam pipeline: filtering, scoring, dedup and ranking."""

import pytest

from rebar_designer.core.pipeline import MAX_PROPOSALS, RebarPipeline, create_default_pipeline
from rebar_designer.core.rule_engine import RuleEngine
from rebar_designer.core.scoring import score_constructability, total_score, weight_scores
from rebar_designer.core.sizing import bar_area
from rebar_designer.models import (
    BeamSolution, DesignSettings, ExternalConstraint, ProjectConstraints, RebarSpec, SpanResult,
    ValidationResult,
)
from rebar_designer.rules.base import DesignRule
from rebar_designer.stages.base import PipelineStage


def solution(name, weight=10.0, **kwargs):
    fields = {
        "option_name": name, "backbone_diameter": 20,
        "backbone_count_top": 2, "backbone_count_bot": 2,
        "total_steel_weight": weight,
    }
    fields.update(kwargs)
    return BeamSolution(**fields)


class PresetStage(PipelineStage):
    """Replaces the seed with one context per preset (solution, bonus)."""

    order = 1

    def __init__(self, presets):
        self.presets = presets

    def get_name(self):
        return "Preset"

    def execute(self, contexts, engine):
        seed = contexts[0]
        return [
            seed.clone(scenario_id=s.option_name, current_solution=s, preferred_diameter_bonus=bonus)
            for s, bonus in self.presets
        ]


class RejectAll(PipelineStage):

    order = 2

    def get_name(self):
        return "RejectAll"

    def execute(self, contexts, engine):
        for ctx in contexts:
            ctx.fail(self.get_name())
        return contexts


class BlockOddNames(DesignRule):

    def get_name(self):
        return "BlockOdd"

    def validate(self, context):
        if context.scenario_id.endswith("odd"):
            return ValidationResult.critical(self.get_name(), "odd")
        return ValidationResult.passed(self.get_name())


def flat_scorer(solution, group, settings):
    return 100.0


def run(presets, group, results, settings, rules=None):
    pipeline = RebarPipeline(
        stages=[PresetStage(presets)],
        rule_engine=RuleEngine(rules or []),
        constructability_scorer=flat_scorer,
    )
    return pipeline.execute(group, results, settings, ProjectConstraints())


class TestRanking:

    def test_dedup_keeps_best_score(self, single_span_group, single_span_results, settings):
        low, high = solution("A"), solution("A")
        ranked = run([(low, 0.0), (high, 3.0)], single_span_group, single_span_results, settings)
        assert len(ranked) == 1
        assert ranked[0] is high
        assert ranked[0].total_score == pytest.approx(103.0)

    def test_lighter_scores_higher(self, single_span_group, single_span_results, settings):
        ranked = run(
            [(solution("Heavy", 20.0), 0.0), (solution("Light", 10.0), 0.0)],
            single_span_group, single_span_results, settings,
        )
        assert [s.option_name for s in ranked] == ["Light", "Heavy"]
        assert ranked[0].weight_score == 100.0
        assert ranked[1].weight_score == 0.0

    def test_equal_scores_break_on_weight(self, single_span_group, single_span_results, settings):
        # Spread below 1 g: both candidates score 100 on weight
        ranked = run(
            [(solution("X", 10.0005), 0.0), (solution("Y", 10.0), 0.0)],
            single_span_group, single_span_results, settings,
        )
        assert ranked[0].total_score == ranked[1].total_score
        assert [s.option_name for s in ranked] == ["Y", "X"]

    def test_keeps_top_five(self, single_span_group, single_span_results, settings):
        presets = [(solution(f"O{i}", 10.0 + i), 0.0) for i in range(8)]
        ranked = run(presets, single_span_group, single_span_results, settings)
        assert len(ranked) == MAX_PROPOSALS
        assert [s.option_name for s in ranked] == ["O0", "O1", "O2", "O3", "O4"]

    def test_bonus_outranks_weight(self, single_span_group, single_span_results, settings):
        ranked = run(
            [(solution("Light", 10.0), 0.0), (solution("Standard", 10.5), 65.0)],
            single_span_group, single_span_results, settings,
        )
        assert ranked[0].option_name == "Standard"

    def test_critical_rule_drops_candidate(self, single_span_group, single_span_results, settings):
        ranked = run(
            [(solution("keep"), 0.0), (solution("odd"), 0.0)],
            single_span_group, single_span_results, settings, rules=[BlockOddNames()],
        )
        assert [s.option_name for s in ranked] == ["keep"]


class TestFiltering:

    def test_wipe_out_returns_empty(self, single_span_group, single_span_results, settings):
        pipeline = RebarPipeline(stages=[PresetStage([(solution("A"), 0.0)]), RejectAll()])
        assert pipeline.execute(single_span_group, single_span_results, settings, ProjectConstraints()) == []

    def test_narrow_beam_has_no_proposals(self, narrow_group, single_span_results, settings):
        pipeline = create_default_pipeline()
        assert pipeline.execute(narrow_group, single_span_results, settings, ProjectConstraints()) == []

    def test_stages_sorted_by_order(self):
        pipeline = RebarPipeline(stages=[RejectAll()])
        pipeline.add_stage(PresetStage([]))
        assert pipeline.stage_names() == ["Preset", "RejectAll"]


class TestDefaultPipeline:

    def test_stage_order(self):
        assert create_default_pipeline().stage_names() == [
            "BackboneScenario", "ReinforcementFiller", "Stirrup", "ConflictReview", "SolutionCheck",
        ]

    def test_sample_beam(self, single_span_group, single_span_results, settings):
        proposals = create_default_pipeline().execute(
            single_span_group, single_span_results, settings, ProjectConstraints(),
        )
        assert 0 < len(proposals) <= MAX_PROPOSALS
        names = [p.option_name for p in proposals]
        assert len(set(names)) == len(names)
        scores = [p.total_score for p in proposals]
        assert scores == sorted(scores, reverse=True)
        for p in proposals:
            assert p.is_valid
            assert p.stirrup_profile is not None
            assert p.backbone_diameter == p.bottom_diameter

    def test_two_span_beam(self, two_span_group, two_span_results, settings):
        proposals = create_default_pipeline().execute(
            two_span_group, two_span_results, settings, ProjectConstraints(),
        )
        assert proposals
        assert "S2_Stirrup_Governing" in proposals[0].stirrup_designs

    def test_user_lock_yields_single_proposal(self, single_span_group, single_span_results, settings):
        lock = ExternalConstraint(
            forced_backbone_diameter=20, forced_backbone_count_top=3,
            forced_backbone_count_bot=3, source="UserLock",
        )
        proposals = create_default_pipeline().execute(
            single_span_group, single_span_results, settings, ProjectConstraints(), lock,
        )
        assert [p.option_name for p in proposals] == ["T:3D20/B:3D20"]

    def test_short_unfilled_supports_never_proposed(self, single_span_group):
        settings = DesignSettings()
        settings.beam.main_bar_diameters = [20]
        two_bars = 2 * bar_area(20)
        results = [SpanResult(
            top_area=[9.0, 0.5, 9.0],
            bot_area=[1.04 * two_bars, 0.5 * two_bars, 1.04 * two_bars],
        )]
        proposals = create_default_pipeline().execute(
            single_span_group, results, settings, ProjectConstraints(),
        )

        assert proposals
        assert all(p.is_valid for p in proposals)
        # Two bottom bars fall 4% short at both supports
        assert all(p.backbone_count_bot >= 3 for p in proposals)

    def test_deterministic(self, single_span_group, single_span_results, settings):
        pipeline = create_default_pipeline()
        first = pipeline.execute(single_span_group, single_span_results, settings, ProjectConstraints())
        second = pipeline.execute(single_span_group, single_span_results, settings, ProjectConstraints())
        assert [p.option_name for p in first] == [p.option_name for p in second]


class TestScoring:

    def test_weight_scores(self):
        assert weight_scores([]) == []
        assert weight_scores([0.0, 0.0]) == [100.0, 100.0]
        assert weight_scores([10.0, 20.0, 15.0]) == [100.0, 0.0, 50.0]

    def test_constructability(self, single_span_group, settings):
        specs = {
            "S1_Top_Left": RebarSpec(diameter=20, count=3, layer=2, position="top", layer_breakdown=[3, 2]),
            "S1_Bot_Mid": RebarSpec(diameter=20, count=1, layer=1, position="bot", layer_breakdown=[3]),
        }
        s = solution("X", backbone_count_bot=3, waste_bar_count=1, reinforcements=specs)
        # 100 - 8 (two layers) - 5 (counts differ) - 2 (waste) - 2 (locations)
        assert score_constructability(s, single_span_group, settings) == 83.0

    def test_constructability_mixed_diameters(self, single_span_group, settings):
        s = solution("X", backbone_diameter_bot=16)
        assert score_constructability(s, single_span_group, settings) == 97.0

    def test_total_score(self):
        assert total_score(100.0, 100.0, 5.0, 2.0) == pytest.approx(97.0)
        # Components are clamped before blending
        assert total_score(150.0, -10.0, 0.0, 0.0) == pytest.approx(60.0)
