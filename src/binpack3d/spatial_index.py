"""
Octree over a container's space, used to answer "does this box hit anything
already placed" without scanning every placement.

Nodes own their eight children. A node stores up to `capacity` items
locally; the next insert subdivides it (unless it is at `max_depth`) and
pushes everything down. An item whose box crosses octant boundaries is
stored in every child it touches, so `size()` counts references and can be
larger than the number of distinct items inserted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from binpack3d.config import OCTREE_CAPACITY, OCTREE_MAX_DEPTH
from binpack3d.geometry import AABB, Point

logger = logging.getLogger(__name__)


class Boxed(Protocol):
    @property
    def box(self) -> AABB: ...


@dataclass(frozen=True)
class OctreeStats:
    total_objects: int
    max_depth: int
    total_nodes: int
    leaf_nodes: int

    def __str__(self) -> str:
        return (
            f"OctreeStats(objects={self.total_objects}, maxDepth={self.max_depth}, "
            f"totalNodes={self.total_nodes}, leafNodes={self.leaf_nodes})"
        )


class Octree:
    def __init__(
        self,
        bounds: AABB,
        depth: int = 0,
        capacity: int = OCTREE_CAPACITY,
        max_depth: int = OCTREE_MAX_DEPTH,
    ):
        self.bounds = bounds
        self.depth = depth
        self.capacity = capacity
        self.max_depth = max_depth
        self.objects: list[Boxed] = []
        self.children: Optional[list[Octree]] = None

    @property
    def divided(self) -> bool:
        return self.children is not None

    def insert(self, item: Boxed) -> bool:
        """
        Store item in this subtree. Returns False only when the item's box
        does not touch this node's region at all.
        """
        if not self.bounds.intersects(item.box):
            return False

        if not self.divided and (len(self.objects) < self.capacity or self.depth >= self.max_depth):
            self.objects.append(item)
            return True

        if not self.divided:
            self._subdivide()

        inserted = False
        for child in self.children:
            # every child must see the item, no short-circuit
            if child.insert(item):
                inserted = True

        if not inserted:
            self.objects.append(item)

        return True

    def _subdivide(self) -> None:
        center = self.bounds.center
        half_w = self.bounds.width / 2
        half_h = self.bounds.height / 2
        half_d = self.bounds.depth / 2
        lo = self.bounds.min

        children = []
        for index in range(8):
            origin = Point(
                center.x if index & 1 else lo.x,
                center.y if index & 2 else lo.y,
                center.z if index & 4 else lo.z,
            )
            children.append(
                Octree(
                    AABB.from_origin(origin, half_w, half_h, half_d),
                    depth=self.depth + 1,
                    capacity=self.capacity,
                    max_depth=self.max_depth,
                )
            )
        self.children = children
        logger.debug(f"Octree node at depth {self.depth} subdivided ({len(self.objects)} items redistributed)")

        current = self.objects
        self.objects = []
        for item in current:
            self.insert(item)

    def query(self, search: AABB) -> list[Boxed]:
        """Distinct items whose box intersects search, in first-found order."""
        found: list[Boxed] = []
        self._query(search, found, set())
        return found

    def _query(self, search: AABB, found: list[Boxed], seen: set[int]) -> None:
        if not self.bounds.intersects(search):
            return

        for item in self.objects:
            if id(item) in seen:
                continue
            if item.box.intersects(search):
                seen.add(id(item))
                found.append(item)

        if self.divided:
            for child in self.children:
                child._query(search, found, seen)

    def has_collision(self, test_box: AABB) -> bool:
        return any(item.box.intersects(test_box) for item in self.query(test_box))

    def remove(self, item: Boxed) -> bool:
        """Drop every stored reference to item (by identity) from the subtree."""
        before = len(self.objects)
        self.objects = [obj for obj in self.objects if obj is not item]
        removed = len(self.objects) != before

        if self.divided:
            for child in self.children:
                if child.remove(item):
                    removed = True

        return removed

    def clear(self) -> None:
        self.objects = []
        self.children = None

    def size(self) -> int:
        count = len(self.objects)
        if self.divided:
            count += sum(child.size() for child in self.children)
        return count

    def __len__(self) -> int:
        return self.size()

    def deepest_level(self) -> int:
        if not self.divided:
            return self.depth
        return max(child.deepest_level() for child in self.children)

    def node_count(self) -> int:
        if not self.divided:
            return 1
        return 1 + sum(child.node_count() for child in self.children)

    def leaf_count(self) -> int:
        if not self.divided:
            return 1
        return sum(child.leaf_count() for child in self.children)

    def stats(self) -> OctreeStats:
        return OctreeStats(self.size(), self.deepest_level(), self.node_count(), self.leaf_count())
