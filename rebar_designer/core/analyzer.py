"""Section analysis — design locations along a beam and the steel they demand."""

from __future__ import annotations

from rebar_designer.models import BeamGroup, DesignSection, SpanResult


POSITION_NAMES = ("Left", "Mid", "Right")
LEFT, MID, RIGHT = 0, 1, 2


def location_key(span_id: str, is_top: bool, position: int) -> str:
    """Reinforcement key, e.g. "S1_Top_Left"."""
    face = "Top" if is_top else "Bot"
    return f"{span_id}_{face}_{POSITION_NAMES[position]}"


class SectionAnalyzer:
    """Builds the three design sections of every span."""

    def analyze(self, group: BeamGroup, span_results: list[SpanResult]) -> list[DesignSection]:
        """
        Return sections in span order, three per span (left, mid, right).

        Supports shared by two spans carry the envelope (max) of both
        faces, so the steel over a column is continuous.
        """
        sections: list[DesignSection] = []
        n_spans = min(len(group.spans), len(span_results))

        for i in range(n_spans):
            span = group.spans[i]
            width = span.width if span.width > 0 else group.min_width
            for position in (LEFT, MID, RIGHT):
                sections.append(DesignSection(
                    section_id=f"{span.span_id}_{POSITION_NAMES[position]}",
                    span_index=i,
                    position=position,
                    width=width,
                    required_top=self._enveloped(span_results, i, n_spans, True, position),
                    required_bot=self._enveloped(span_results, i, n_spans, False, position),
                ))

        return sections

    def _enveloped(
        self, span_results: list[SpanResult], index: int, n_spans: int, is_top: bool, position: int,
    ) -> float:
        required = span_results[index].required(is_top, position)
        if position == LEFT and index > 0:
            required = max(required, span_results[index - 1].required(is_top, RIGHT))
        elif position == RIGHT and index < n_spans - 1:
            required = max(required, span_results[index + 1].required(is_top, LEFT))
        return required


def max_required(sections: list[DesignSection], is_top: bool) -> float:
    if not sections:
        return 0.0
    return max(s.required_top if is_top else s.required_bot for s in sections)


def support_pairs(sections: list[DesignSection]) -> list[tuple[DesignSection, DesignSection]]:
    """(right support of span i, left support of span i+1) for every interior support."""
    by_span: dict[int, dict[int, DesignSection]] = {}
    for section in sections:
        by_span.setdefault(section.span_index, {})[section.position] = section

    pairs: list[tuple[DesignSection, DesignSection]] = []
    indices = sorted(by_span)
    for a, b in zip(indices, indices[1:]):
        left = by_span[a].get(RIGHT)
        right = by_span[b].get(LEFT)
        if left is not None and right is not None:
            pairs.append((left, right))
    return pairs
