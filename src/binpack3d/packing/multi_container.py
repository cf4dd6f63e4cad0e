from __future__ import annotations

import logging
from typing import Optional

from binpack3d.config import PackingConfig
from binpack3d.models import Container, Item, MultiPackingResult, PackingResult
from binpack3d.packing.placement import commit, find_position, new_index
from binpack3d.packing.strategies import rule_for

logger = logging.getLogger(__name__)


def _fill(container: Container, items: list[Item], config: PackingConfig) -> list[Item]:
    """Place every item that fits, in order. Returns the items left over."""
    rule = rule_for(config.strategy)
    index = new_index(container, config.octree_capacity, config.octree_max_depth) if config.use_spatial_index else None

    leftover: list[Item] = []
    for item in items:
        placement = find_position(item, container, rule, config.allow_rotation, index)
        if placement is None or not commit(container, placement, index):
            leftover.append(item)
    return leftover


def pack_multiple(
    items: list[Item],
    template: Container,
    config: Optional[PackingConfig] = None,
    max_containers: Optional[int] = None,
) -> MultiPackingResult:
    """
    Pack items into as many containers shaped like template as needed.

    Items are ordered by volume, largest first. Each new container takes
    every remaining item it can; the rest roll over to the next one.
    Stops early when a fresh container accepts nothing (those items can never
    be placed) or when max_containers is reached.
    """
    config = config or PackingConfig()
    remaining = sorted(items, key=lambda item: item.volume, reverse=True)
    containers: list[Container] = []

    while remaining:
        if max_containers is not None and len(containers) >= max_containers:
            logger.info(f"Container limit {max_containers} reached with {len(remaining)} items left")
            break

        current = template.empty_copy(id=f"{template.id}_{len(containers)}")
        leftover = _fill(current, remaining, config)

        # Progress guard: an empty container that takes nothing never will
        if not current.placements:
            logger.warning(
                f"{len(remaining)} items do not fit an empty {template.width}x{template.height}x{template.depth} container"
            )
            break

        logger.debug(f"{current.id}: placed {current.items_count}, {len(leftover)} left")
        containers.append(current)
        remaining = leftover

    total = len(items)
    packed = sum(c.items_count for c in containers)
    container_volume = sum(c.volume for c in containers)
    used_volume = sum(c.used_volume for c in containers)
    utilization = 0.0 if container_volume == 0 else used_volume / container_volume
    success = packed == total

    if success:
        message = f"Packed all {total} items into {len(containers)} containers"
    else:
        message = f"Packed {packed}/{total} items into {len(containers)} containers"

    logger.info(message)

    return MultiPackingResult(
        containers=containers,
        result=PackingResult(
            success=success,
            packed_count=packed,
            total_count=total,
            container_volume=container_volume,
            used_volume=used_volume,
            utilization=utilization,
            message=message,
            placements=[p for c in containers for p in c.placements],
            unpacked=remaining,
        ),
    )
