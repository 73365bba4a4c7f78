"""Greedy filling — pack layer 1 first, spill into later layers only when needed.

Keeps steel concentrated near the extreme fibre and leaves room to
compact the concrete. Each later layer is capped by the one below it,
so the pyramid rule holds by construction.
"""

from __future__ import annotations

from rebar_designer.models import FillingContext, FillingResult
from rebar_designer.strategies.base import FillingStrategy


class GreedyFillingStrategy(FillingStrategy):

    def get_name(self) -> str:
        return "Greedy"

    def _distribute(self, context: FillingContext, total_needed: int) -> FillingResult | list[int]:
        capacity = context.layer_capacity
        layer_counts: list[int] = []
        remaining = total_needed

        for layer in range(context.max_layers):
            if remaining <= 0:
                break
            ceiling = capacity if layer == 0 else layer_counts[layer - 1]
            bars = min(remaining, ceiling)
            if layer == 0:
                # Layer 1 always carries the backbone
                bars = max(bars, context.backbone_count)
            layer_counts.append(bars)
            remaining -= bars

        if remaining > 0:
            return FillingResult.failed(
                f"Cannot place {total_needed} bars in {context.max_layers} layers "
                f"(capacity={capacity})"
            )
        return layer_counts
