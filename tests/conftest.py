"""Shared fixtures for rebar designer tests."""

import pytest

from rebar_designer.models import (
    BeamGroup, DesignContext, DesignSettings, ProjectConstraints, Span, SpanResult,
)


@pytest.fixture
def settings():
    return DesignSettings()


@pytest.fixture
def single_span_group():
    """One 6 m span, 300x500."""
    return BeamGroup(name="B1", spans=[Span(span_id="S1", length=6000, width=300, height=500)])


@pytest.fixture
def single_span_results():
    return [SpanResult(
        top_area=[6.0, 2.0, 6.0],
        bot_area=[3.0, 8.0, 3.0],
        shear_area=[0.05, 0.02, 0.05],
        torsion_area=[0.0, 0.0, 0.0],
    )]


@pytest.fixture
def two_span_group():
    return BeamGroup(name="B2", spans=[
        Span(span_id="S1", length=5000, width=300, height=500),
        Span(span_id="S2", length=5000, width=300, height=500),
    ])


@pytest.fixture
def two_span_results():
    return [
        SpanResult(top_area=[4.0, 1.0, 7.0], bot_area=[2.0, 6.0, 2.0], shear_area=[0.04, 0.01, 0.06]),
        SpanResult(top_area=[6.5, 1.0, 4.0], bot_area=[2.0, 6.0, 2.0], shear_area=[0.06, 0.01, 0.04]),
    ]


@pytest.fixture
def narrow_group():
    """Too narrow for two bars of any diameter."""
    return BeamGroup(name="Narrow", spans=[Span(span_id="S1", length=4000, width=100, height=300)])


@pytest.fixture
def make_context(single_span_group, single_span_results, settings):
    """Build a design context; keyword arguments override fields."""
    def _make(**changes):
        fields = {
            "group": single_span_group,
            "span_results": single_span_results,
            "settings": settings,
            "project_constraints": ProjectConstraints(),
        }
        fields.update(changes)
        return DesignContext(**fields)
    return _make
