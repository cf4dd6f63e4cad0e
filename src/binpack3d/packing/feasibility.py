# src/binpack3d/packing/feasibility.py

from __future__ import annotations

import logging
from typing import Optional

from binpack3d.config import PackingConfig
from binpack3d.metrics import compute_metrics
from binpack3d.models import Container, Item, PackingResult
from binpack3d.packing.constraints import VolumeConstraint, WeightConstraint
from binpack3d.packing.placement import commit, find_position, new_index
from binpack3d.packing.strategies import rule_for

logger = logging.getLogger(__name__)


def check_feasibility(
    items: list[Item],
    container: Container,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """
    Decide whether ALL items fit into one container.
    - Rejects up front when total volume (or weight) exceeds the container
    - Orders items once by the strategy's rule
    - Places them in turn on an empty copy of the container
    - Stops at the first item that has no position in any orientation
    - Deterministic (no randomness)
    The caller's container is left untouched; placements are in the result.
    """
    config = config or PackingConfig()
    total = len(items)

    if not VolumeConstraint().check(items, container):
        total_volume = sum(item.volume for item in items)
        logger.info(f"Volume check failed: {total_volume:.2f} > {container.volume:.2f}")
        return PackingResult(
            success=False,
            packed_count=0,
            total_count=total,
            container_volume=container.volume,
            message=f"Total item volume {total_volume:.2f} exceeds container volume {container.volume:.2f}",
            unpacked=list(items),
        )

    if not WeightConstraint().check(items, container):
        total_weight = sum(item.weight for item in items)
        logger.info(f"Weight check failed: {total_weight:.2f} > {container.max_weight:.2f}")
        return PackingResult(
            success=False,
            packed_count=0,
            total_count=total,
            container_volume=container.volume,
            message=f"Total item weight {total_weight:.2f} exceeds container capacity {container.max_weight:.2f}",
            unpacked=list(items),
        )

    rule = rule_for(config.strategy)
    bin_ = container.empty_copy()
    index = new_index(bin_, config.octree_capacity, config.octree_max_depth) if config.use_spatial_index else None

    ordered = rule.order(items)
    unpacked: list[Item] = []

    for position, item in enumerate(ordered):
        placement = find_position(item, bin_, rule, config.allow_rotation, index)
        if placement is None or not commit(bin_, placement, index):
            unpacked = ordered[position:]
            break

    packed = bin_.items_count
    used_volume, container_volume, utilization = compute_metrics(bin_)
    success = packed == total

    if success:
        message = f"Packed all {packed} items, utilization {utilization * 100:.2f}%"
    else:
        utilization = 0.0
        message = f"Only {packed}/{total} items could be packed"

    logger.info(f"Feasibility [{rule.strategy.value}] {container.id}: {message}")

    return PackingResult(
        success=success,
        packed_count=packed,
        total_count=total,
        container_volume=container_volume,
        used_volume=used_volume,
        utilization=utilization,
        message=message,
        placements=list(bin_.placements),
        unpacked=unpacked,
    )
