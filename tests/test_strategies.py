"""Tests for the layer-filling strategies and their shared adjustment pass."""

import pytest

from rebar_designer.core.sizing import bar_area
from rebar_designer.models import DesignSettings, FillingContext
from rebar_designer.strategies.balanced import (
    BalancedFillingStrategy, determine_layers_needed, distribute_balanced,
)
from rebar_designer.strategies.base import apply_layer_constraints, first_pyramid_violation
from rebar_designer.strategies.greedy import GreedyFillingStrategy


STRATEGIES = [GreedyFillingStrategy(), BalancedFillingStrategy()]


def fill_context(required, backbone_count=4, capacity=6, diameter=20, legs=2, max_layers=2, **beam):
    settings = DesignSettings()
    if beam:
        settings = DesignSettings(beam=settings.beam.model_copy(update=beam))
    return FillingContext(
        required_area=required,
        backbone_area=backbone_count * bar_area(diameter),
        backbone_count=backbone_count,
        backbone_diameter=diameter,
        layer_capacity=capacity,
        stirrup_leg_count=legs,
        max_layers=max_layers,
        settings=settings,
    )


class TestBackboneShortcut:

    @pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.get_name())
    def test_zero_demand_returns_backbone_layer(self, strategy):
        result = strategy.calculate(fill_context(0.0, backbone_count=3))
        assert result.is_valid
        assert result.layer_counts == [3]
        assert result.waste_count == 0

    @pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.get_name())
    def test_demand_within_tolerance_of_backbone(self, strategy):
        ctx = fill_context(4 * bar_area(20) + 0.005)
        assert strategy.calculate(ctx).layer_counts == [4]


class TestGreedy:

    def test_fills_first_layer_to_capacity(self):
        # ceil(30 / 3.14) = 10 bars of D20
        result = GreedyFillingStrategy().calculate(fill_context(30.0))
        assert result.is_valid
        assert result.layer_counts == [6, 4]

    def test_fails_when_bars_remain(self):
        result = GreedyFillingStrategy().calculate(fill_context(30.0, backbone_count=2, capacity=3))
        assert not result.is_valid
        assert "Cannot place 10 bars" in result.fail_reason

    def test_snaps_to_stirrup_legs(self):
        # ceil(27 / 3.14) = 9 bars: [6, 3] snaps to [6, 4] with four legs
        result = GreedyFillingStrategy().calculate(
            fill_context(27.0, legs=4, prefer_symmetric=False),
        )
        assert result.is_valid
        assert result.layer_counts == [6, 4]

    def test_snap_that_breaks_pyramid_fails(self):
        # Six bars at capacity 3: [3, 3] snaps to [3, 4] with four legs
        ctx = fill_context(6 * bar_area(20) - 0.01, backbone_count=3, capacity=3, legs=4)
        result = GreedyFillingStrategy().calculate(ctx)
        assert not result.is_valid
        assert "pyramid" in result.fail_reason


class TestBalanced:

    def test_even_split_without_symmetry_rounding(self):
        result = BalancedFillingStrategy().calculate(fill_context(30.0, prefer_symmetric=False))
        assert result.is_valid
        assert result.layer_counts == [5, 5]

    def test_symmetry_rounds_odd_layers_up(self):
        result = BalancedFillingStrategy().calculate(fill_context(30.0))
        assert result.layer_counts == [6, 6]

    def test_too_many_layers_fails(self):
        result = BalancedFillingStrategy().calculate(fill_context(60.0))
        assert not result.is_valid
        assert "layers" in result.fail_reason

    def test_determine_layers_needed(self):
        assert determine_layers_needed(5, 6, 2) == 1
        assert determine_layers_needed(10, 6, 2) == 2
        assert determine_layers_needed(20, 6, 2) == 3

    def test_backbone_deficit_borrowed_from_lower_layers(self):
        assert distribute_balanced(8, 2, 6, 6) == [6, 2]

    def test_overflow_pushed_down(self):
        assert distribute_balanced(9, 2, 4, 5) is None
        assert distribute_balanced(7, 2, 4, 2) == [4, 3]


class TestLayerConstraints:

    def test_pyramid_violation_rejected(self):
        result = apply_layer_constraints([3, 5], 6, 2, False, 2)
        assert not result.is_valid
        assert "Pyramid" in result.fail_reason

    def test_capacity_exceeded_rejected(self):
        result = apply_layer_constraints([7, 2], 6, 2, False, 2)
        assert not result.is_valid
        assert "capacity" in result.fail_reason

    def test_leg_snap(self):
        result = apply_layer_constraints([6, 3], 6, 4, False, 2)
        assert result.layer_counts == [6, 4]

    def test_leg_snap_past_predecessor_rejected(self):
        # [3, 3] snaps to [3, 4], which the final pyramid check refuses
        result = apply_layer_constraints([3, 3], 6, 4, False, 2)
        assert not result.is_valid
        assert "pyramid" in result.fail_reason

    def test_symmetry_can_repair_leg_snap(self):
        # [3, 4] after the snap, then layer 1 rounds up to 4
        result = apply_layer_constraints([3, 3], 6, 4, True, 2)
        assert result.is_valid
        assert result.layer_counts == [4, 4]

    def test_symmetry_capped_by_predecessor(self):
        result = apply_layer_constraints([5, 5], 5, 2, True, 2)
        assert result.layer_counts == [5, 5]

    def test_min_bars_counts_waste(self):
        result = apply_layer_constraints([5, 1], 6, 2, False, 2)
        assert result.is_valid
        assert result.layer_counts == [5, 2]
        assert result.waste_count == 1

    def test_min_bars_without_room_fails(self):
        result = apply_layer_constraints([1, 1], 6, 2, False, 2)
        assert not result.is_valid

    def test_first_pyramid_violation(self):
        assert first_pyramid_violation([4, 4, 2]) is None
        assert first_pyramid_violation([4, 2, 3]) == 2


class TestInvariants:

    @pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.get_name())
    def test_pyramid_and_backbone_dominance(self, strategy):
        for capacity in range(2, 8):
            for backbone in range(2, capacity + 1):
                for bars in range(0, 2 * capacity + 3):
                    for legs in (2, 4, 6):
                        ctx = fill_context(
                            bars * bar_area(20), backbone_count=backbone, capacity=capacity, legs=legs,
                        )
                        result = strategy.calculate(ctx)
                        if not result.is_valid:
                            continue
                        counts = result.layer_counts
                        assert counts[0] >= backbone
                        assert first_pyramid_violation(counts) is None
                        assert len(counts) <= ctx.max_layers

    @pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.get_name())
    def test_deterministic(self, strategy):
        ctx = fill_context(27.0, legs=4)
        assert strategy.calculate(ctx) == strategy.calculate(ctx)
