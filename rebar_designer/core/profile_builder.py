"""Bar positions in the governing cross-section."""

from __future__ import annotations

from rebar_designer.core.sizing import usable_width
from rebar_designer.models import BarPosition, DesignSettings, RebarProfile


MIN_LAYER_GAP = 25.0  # mm, vertical clear gap between layers


def layer_positions(
    counts: list[int],
    diameter: int,
    width: float,
    height: float,
    is_top: bool,
    settings: DesignSettings,
) -> list[list[BarPosition]]:
    """
    Spread each layer's bars evenly across the usable width.

    Layer 1 sits against the stirrup; later layers step inward by one
    bar diameter plus the vertical gap. Only layer-1 bars are tied.
    """
    beam = settings.beam
    usable = usable_width(width, settings)
    x0 = beam.cover_side + beam.estimated_stirrup_diameter + diameter / 2.0
    y1 = beam.cover_top + beam.estimated_stirrup_diameter + diameter / 2.0
    step = diameter + max(float(diameter), MIN_LAYER_GAP)

    layers: list[list[BarPosition]] = []
    for index, count in enumerate(counts):
        offset = y1 + index * step
        y = height - offset if is_top else offset
        row: list[BarPosition] = []
        for k in range(count):
            if count == 1:
                x = width / 2.0
            else:
                x = x0 + k * (usable - diameter) / (count - 1)
            row.append(BarPosition(
                x=round(x, 1),
                y=round(y, 1),
                diameter=diameter,
                layer=index + 1,
                requires_tie=index == 0,
                is_corner=index == 0 and k in (0, count - 1),
            ))
        layers.append(row)
    return layers


def build_rebar_profile(
    top_counts: list[int],
    top_diameter: int,
    bot_counts: list[int],
    bot_diameter: int,
    width: float,
    height: float,
    settings: DesignSettings,
) -> RebarProfile:
    top = layer_positions(top_counts, top_diameter, width, height, True, settings)
    bot = layer_positions(bot_counts, bot_diameter, width, height, False, settings)
    return RebarProfile(
        top_layer1=top[0] if len(top) > 0 else [],
        top_layer2=top[1] if len(top) > 1 else [],
        bot_layer1=bot[0] if len(bot) > 0 else [],
        bot_layer2=bot[1] if len(bot) > 1 else [],
    )
