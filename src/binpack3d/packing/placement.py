# src/binpack3d/packing/placement.py

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Iterator, Optional

from binpack3d.config import POINT_EPSILON
from binpack3d.geometry import AABB, ORIGIN, Point
from binpack3d.models import Container, Item, Placement
from binpack3d.packing.strategies import StrategyRule
from binpack3d.spatial_index import Octree

logger = logging.getLogger(__name__)


def _compare_points(a: Point, b: Point) -> int:
    # z first, then y, then x; coordinates within POINT_EPSILON fall through
    for ka, kb in ((a.z, b.z), (a.y, b.y)):
        if abs(ka - kb) > POINT_EPSILON:
            return -1 if ka < kb else 1
    if a.x < b.x:
        return -1
    if a.x > b.x:
        return 1
    return 0


def generate_candidate_points(container: Container) -> list[Point]:
    """
    Anchor points for the lower corner of the next item:
      the origin,
      the 8 corners of every placed box (in placement order),
      the container's axis midpoints (W/2,0,0), (0,H/2,0), (0,0,D/2).
    Sorted bottom-left-back first: by z, then y, then x.
    """
    points: list[Point] = [ORIGIN]

    for p in container.placements:
        points.extend(p.box.corners())

    points.append(Point(container.width / 2, 0.0, 0.0))
    points.append(Point(0.0, container.height / 2, 0.0))
    points.append(Point(0.0, 0.0, container.depth / 2))

    # sorted() is stable, so equal points keep generation order
    return sorted(points, key=cmp_to_key(_compare_points))


def orientations(item: Item, allow_rotation: bool) -> list[tuple[int, Item]]:
    """
    (orientation code, oriented item) pairs in search order: the item as
    given, then permutations 1..5. Identical permutations are not skipped.
    """
    if not allow_rotation:
        return [(0, item)]
    rotated = item.rotations()
    return [(0, item)] + [(code, rotated[code]) for code in range(1, len(rotated))]


def can_place_at(
    item: Item,
    position: Point,
    container: Container,
    index: Optional[Octree] = None,
) -> bool:
    """
    Check if an item (in its current orientation) can go at position:
    - inside container bounds
    - no contact with existing placements (octree if given, else a full scan)
    """
    item_box = AABB.from_origin(position, item.width, item.height, item.depth)
    if not container.bounding_box.contains_box(item_box):
        return False

    if index is not None:
        return not index.has_collision(item_box)
    return not container.has_collision(item.width, item.height, item.depth, position)


def _feasible_points(
    item: Item,
    candidates: list[Point],
    container: Container,
    index: Optional[Octree],
) -> Iterator[Point]:
    for point in candidates:
        if can_place_at(item, point, container, index):
            yield point


def find_position(
    item: Item,
    container: Container,
    rule: StrategyRule,
    allow_rotation: bool = True,
    index: Optional[Octree] = None,
) -> Optional[Placement]:
    """
    Find a placement for item in the container's current state.

    Orientations are tried in order and the FIRST one for which the rule
    selects a point wins; later orientations are never compared against it.
    Returns None when no orientation fits or the container cannot carry the
    item's weight. The container and index are not modified.
    """
    if not container.can_carry(item.weight):
        logger.debug(f"Item {item.id} rejected: weight {item.weight} over remaining capacity of {container.id}")
        return None

    candidates = generate_candidate_points(container)

    for code, oriented in orientations(item, allow_rotation):
        point = rule.select(oriented, _feasible_points(oriented, candidates, container, index))
        if point is not None:
            logger.debug(
                f"Item {item.id} -> ({point.x}, {point.y}, {point.z}) "
                f"orientation {code} in {container.id} [{rule.strategy.value}]"
            )
            return Placement.of(item, point, code)

    logger.debug(f"Item {item.id} has no feasible position in {container.id}")
    return None


def commit(container: Container, placement: Placement, index: Optional[Octree] = None) -> bool:
    """Record a placement in the container and, if given, the octree."""
    if not container.add_item(placement):
        return False
    if index is not None:
        index.insert(placement)
    return True


def new_index(container: Container, capacity: int, max_depth: int) -> Octree:
    """Fresh octree over the container's space, seeded with its placements."""
    index = Octree(container.bounding_box, capacity=capacity, max_depth=max_depth)
    for p in container.placements:
        index.insert(p)
    return index
