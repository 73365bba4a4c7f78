"""Tests for multi-beam orchestration and floor-state threading."""

import logging
from datetime import datetime

import pytest

from rebar_designer.core.orchestrator import MultiBeamOrchestrator, lock_constraint
from rebar_designer.models import (
    BeamRequest, BeamSolution, DesignContext, DesignSettings, NeighborDesign, ProjectConstraints,
    Severity,
)
from rebar_designer.rules.preferred_diameter import PreferredDiameterRule


class RecordingPipeline:
    """Returns one fixed proposal per beam and records the floor state it was given."""

    def __init__(self, diameters):
        self.diameters = diameters
        self.calls = []

    def execute(self, group, span_results, settings, project_constraints, external=None):
        self.calls.append((group.name, project_constraints, external))
        diameter = self.diameters.get(group.name)
        if diameter is None:
            return []
        return [BeamSolution(
            option_name=f"T:2D{diameter}/B:2D{diameter}", backbone_diameter=diameter,
            backbone_count_top=2, backbone_count_bot=2,
        )]


@pytest.fixture
def locked_group(single_span_group):
    design = BeamSolution(
        option_name="T:3D20/B:3D20", backbone_diameter=20, backbone_count_top=3, backbone_count_bot=3,
    )
    return single_span_group.model_copy(update={"locked_at": datetime(2024, 5, 1), "selected_design": design})


def request(group, results):
    return BeamRequest(group=group, span_results=results)


class TestStateThreading:

    def test_first_beam_sets_preference(self, single_span_group, single_span_results, settings):
        pipeline = RecordingPipeline({"B1": 20, "B1b": 16})
        second = single_span_group.model_copy(update={"name": "B1b"})
        floor = MultiBeamOrchestrator(pipeline).solve_floor(
            [request(single_span_group, single_span_results), request(second, single_span_results)],
            settings,
        )

        assert floor.constraints.preferred_main_diameter == 20
        assert set(floor.constraints.neighbor_designs) == {"B1", "B1b"}
        assert floor.constraints.neighbor_designs["B1b"].backbone_diameter == 16

        # The second beam saw the first beam's result
        seen = pipeline.calls[1][1]
        assert seen.preferred_main_diameter == 20
        assert "B1" in seen.neighbor_designs

    def test_initial_constraints_untouched(self, single_span_group, single_span_results, settings):
        initial = ProjectConstraints()
        MultiBeamOrchestrator(RecordingPipeline({"B1": 20})).solve_floor(
            [request(single_span_group, single_span_results)], settings, initial,
        )
        assert initial.preferred_main_diameter is None
        assert initial.neighbor_designs == {}

    def test_existing_preference_kept(self, single_span_group, single_span_results, settings):
        initial = ProjectConstraints(preferred_main_diameter=25)
        floor = MultiBeamOrchestrator(RecordingPipeline({"B1": 20})).solve_floor(
            [request(single_span_group, single_span_results)], settings, initial,
        )
        assert floor.constraints.preferred_main_diameter == 25

    def test_unresolved_beam_skipped(self, single_span_group, narrow_group, single_span_results, settings, caplog):
        pipeline = RecordingPipeline({"B1": 20})
        with caplog.at_level(logging.WARNING, logger="rebar_designer.core.orchestrator"):
            floor = MultiBeamOrchestrator(pipeline).solve_floor(
                [request(narrow_group, single_span_results), request(single_span_group, single_span_results)],
                settings,
            )

        assert set(floor.solutions) == {"B1"}
        assert "Narrow" in floor.unresolved
        assert "Narrow" not in floor.constraints.neighbor_designs
        assert "Narrow" in caplog.text
        # A failed beam hands the unchanged state to the next one
        assert pipeline.calls[1][1].neighbor_designs == {}

    def test_empty_floor(self, settings):
        floor = MultiBeamOrchestrator(RecordingPipeline({})).solve_floor([], settings)
        assert floor.solutions == {}
        assert floor.unresolved == {}


class TestLocks:

    def test_lock_constraint(self, locked_group, single_span_group):
        assert lock_constraint(single_span_group) is None
        ext = lock_constraint(locked_group)
        assert ext.source == "UserLock"
        assert ext.forced_backbone_diameter == 20
        assert ext.forced_backbone_count_top == 3

    def test_solve_beam_passes_lock(self, locked_group, single_span_results, settings):
        pipeline = RecordingPipeline({"B1": 20})
        MultiBeamOrchestrator(pipeline).solve_beam(
            locked_group, single_span_results, settings, ProjectConstraints(),
        )
        assert pipeline.calls[0][2].source == "UserLock"

    def test_recalculate_ignores_lock(self, locked_group, single_span_results, settings):
        pipeline = RecordingPipeline({"B1": 20})
        initial = ProjectConstraints()
        MultiBeamOrchestrator(pipeline).recalculate_single(
            locked_group, single_span_results, settings, initial,
        )
        assert pipeline.calls[0][2] is None
        assert initial.neighbor_designs == {}


class TestWithDefaultPipeline:

    def test_single_diameter_floor(self, single_span_group, two_span_group, single_span_results, two_span_results):
        settings = DesignSettings()
        settings.beam.main_bar_diameters = [20]
        floor = MultiBeamOrchestrator().solve_floor(
            [request(single_span_group, single_span_results), request(two_span_group, two_span_results)],
            settings,
        )

        assert set(floor.solutions) == {"B1", "B2"}
        assert all(s.backbone_diameter == 20 for s in floor.solutions.values())
        assert floor.constraints.preferred_main_diameter == 20

        # Later beams are reported as matching the floor's standard
        best = floor.solutions["B2"]
        ctx = DesignContext(
            group=two_span_group, span_results=two_span_results, settings=settings,
            project_constraints=floor.constraints,
            top_backbone_diameter=best.backbone_diameter, bot_backbone_diameter=best.bottom_diameter,
        )
        assert PreferredDiameterRule().validate(ctx).severity == Severity.INFO

    def test_locked_beam_single_proposal(self, locked_group, single_span_results, settings):
        outcome = MultiBeamOrchestrator().solve_beam(
            locked_group, single_span_results, settings, ProjectConstraints(),
        )
        assert outcome.is_resolved
        assert [p.option_name for p in outcome.proposals] == ["T:3D20/B:3D20"]
        assert outcome.constraints.neighbor_designs["B1"] == NeighborDesign(
            backbone_diameter=20, backbone_count=3, stirrup_diameter=10,
        )

    def test_recalculate_offers_alternatives(self, locked_group, single_span_results, settings):
        proposals = MultiBeamOrchestrator().recalculate_single(
            locked_group, single_span_results, settings, ProjectConstraints(),
        )
        assert len(proposals) > 1
        scores = [p.total_score for p in proposals]
        assert scores == sorted(scores, reverse=True)

    def test_narrow_beam_outcome(self, narrow_group, single_span_results, settings):
        initial = ProjectConstraints()
        outcome = MultiBeamOrchestrator().solve_beam(narrow_group, single_span_results, settings, initial)
        assert not outcome.is_resolved
        assert outcome.proposals == []
        assert outcome.constraints is initial
        assert outcome.message
