"""Cross-beam design state and per-beam forced choices."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class NeighborDesign(BaseModel):
    """Snapshot of a finished beam, kept for standardization."""
    model_config = ConfigDict(frozen=True)

    backbone_diameter: int
    backbone_count: int
    stirrup_diameter: int


class ProjectConstraints(BaseModel):
    """
    Floor-wide preferences read by every rule and constraint.

    The orchestrator threads this through the beam loop; each solved
    beam yields an updated copy rather than editing it in place.
    """
    preferred_main_diameter: int | None = None
    preferred_stirrup_diameter: int | None = None
    allowed_diameters_override: list[int] | None = None
    neighbor_designs: dict[str, NeighborDesign] = {}
    neighbor_match_bonus: float = 5.0

    def matches_standard(self, diameter: int) -> bool:
        """True if diameter equals the preferred one or any neighbor's backbone."""
        if self.preferred_main_diameter == diameter:
            return True
        return any(n.backbone_diameter == diameter for n in self.neighbor_designs.values())

    def with_neighbor(self, group_name: str, neighbor: NeighborDesign) -> ProjectConstraints:
        """
        Return a copy that records a finished beam.

        The first finished beam also sets the floor's preferred diameter.
        """
        neighbors = dict(self.neighbor_designs)
        neighbors[group_name] = neighbor
        update: dict[str, object] = {"neighbor_designs": neighbors}
        if self.preferred_main_diameter is None:
            update["preferred_main_diameter"] = neighbor.backbone_diameter
        return self.model_copy(update=update)


class ExternalConstraint(BaseModel):
    """Hard choices for a single beam, e.g. from a user lock."""
    model_config = ConfigDict(frozen=True)

    forced_backbone_diameter: int | None = None
    forced_backbone_count_top: int | None = None
    forced_backbone_count_bot: int | None = None
    forced_stirrup_legs: int | None = None
    source: str = ""  # "UserLock", "MultiBeamSync", ...
