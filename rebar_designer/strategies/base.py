"""Abstract base class for layer-filling strategies.

A strategy decides how many bars go into each layer at one location:
- Pure: same FillingContext in, same FillingResult out
- Non-throwing: infeasible packings come back as invalid results
- Pyramid-safe: a valid result never has a layer larger than the one below it
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod

from rebar_designer.core.sizing import AREA_TOLERANCE, bar_area
from rebar_designer.models import FillingContext, FillingResult


class FillingStrategy(ABC):
    """
    Base class for filling strategies.

    Subclasses implement `_distribute()`. The shared `calculate()` handles
    the backbone-only shortcut and the post-distribution adjustment pass.
    """

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    def _distribute(self, context: FillingContext, total_needed: int) -> FillingResult | list[int]:
        """Return raw per-layer counts, or an invalid result explaining why not."""
        ...

    def calculate(self, context: FillingContext) -> FillingResult:
        missing = context.required_area - context.backbone_area
        if missing <= AREA_TOLERANCE:
            return FillingResult(is_valid=True, layer_counts=[context.backbone_count])

        total_needed = math.ceil(context.required_area / bar_area(context.backbone_diameter))
        distributed = self._distribute(context, total_needed)
        if isinstance(distributed, FillingResult):
            return distributed

        beam = context.settings.beam
        return apply_layer_constraints(
            distributed,
            capacity=context.layer_capacity,
            leg_count=context.stirrup_leg_count,
            prefer_symmetric=beam.prefer_symmetric,
            min_bars_per_layer=beam.min_bars_per_layer,
        )


def first_pyramid_violation(layer_counts: list[int]) -> int | None:
    """Index of the first layer holding more bars than the layer below it."""
    for i in range(1, len(layer_counts)):
        if layer_counts[i] > layer_counts[i - 1]:
            return i
    return None


def apply_layer_constraints(
    layer_counts: list[int],
    capacity: int,
    leg_count: int,
    prefer_symmetric: bool,
    min_bars_per_layer: int,
) -> FillingResult:
    """
    Adjust a raw distribution to the structural rules, or reject it.

    Runs in order: pyramid check, layer-1 capacity, snap to stirrup legs,
    symmetry rounding, minimum bars per layer, pyramid re-check.
    """
    counts = list(layer_counts)
    waste = 0

    bad = first_pyramid_violation(counts)
    if bad is not None:
        return FillingResult.failed(
            f"Pyramid rule violated: L{bad + 1}={counts[bad]} > L{bad}={counts[bad - 1]}"
        )

    if counts and counts[0] > capacity:
        return FillingResult.failed(f"L1={counts[0]} exceeds capacity={capacity}")

    # Give inner stirrup legs a bar to tie; the final re-check rejects a snap that breaks the pyramid
    if leg_count > 2:
        for i in range(1, len(counts)):
            n = counts[i]
            if n > 0 and n == leg_count - 1 and n <= counts[i - 1]:
                counts[i] = leg_count

    if prefer_symmetric:
        for i in range(len(counts)):
            n = counts[i]
            ceiling = capacity if i == 0 else counts[i - 1]
            if n % 2 != 0 and n + 1 <= ceiling:
                counts[i] = n + 1

    for i in range(1, len(counts)):
        n = counts[i]
        if 0 < n < min_bars_per_layer:
            if min_bars_per_layer <= counts[i - 1]:
                waste += min_bars_per_layer - n
                counts[i] = min_bars_per_layer
            else:
                return FillingResult.failed(
                    f"L{i + 1} has only {n} bars, needs at least {min_bars_per_layer}"
                )

    bad = first_pyramid_violation(counts)
    if bad is not None:
        return FillingResult.failed(
            f"Adjustments broke the pyramid rule: L{bad + 1}={counts[bad]} > L{bad}={counts[bad - 1]}"
        )

    return FillingResult(is_valid=True, layer_counts=counts, waste_count=waste)
