from __future__ import annotations
from binpack3d.models import Container, Placement


def placement_volume(p: Placement) -> float:
    w, h, d = p.dimensions
    return float(w) * float(h) * float(d)


def compute_metrics(container: Container, placements: list[Placement] | None = None) -> tuple[float, float, float]:
    """Return (used_volume, container_volume, utilization) for the container's placements."""
    if placements is None:
        placements = container.placements
    used_volume = sum(placement_volume(p) for p in placements)
    container_volume = float(container.width) * float(container.height) * float(container.depth)
    utilization = 0.0 if container_volume == 0 else used_volume / container_volume
    return used_volume, container_volume, utilization
