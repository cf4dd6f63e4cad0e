"""Geometry primitives for 3D placement: points and axis-aligned boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


Bounds = tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class Point:
    """A point in container space. x runs along width, y height, z depth."""

    x: float
    y: float
    z: float

    def add(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def distance(self, other: Point) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ORIGIN = Point(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class AABB:
    """
    Axis-aligned bounding box given by its min and max corners.

    All comparisons are non-strict: two boxes that only share a face, an
    edge or a corner intersect.
    """

    min: Point
    max: Point

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z:
            raise ValueError(f"AABB min {self.min} must not exceed max {self.max}")

    @classmethod
    def from_origin(cls, origin: Point, width: float, height: float, depth: float) -> AABB:
        return cls(origin, Point(origin.x + width, origin.y + height, origin.z + depth))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def depth(self) -> float:
        return self.max.z - self.min.z

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def center(self) -> Point:
        return Point(
            (self.min.x + self.max.x) / 2,
            (self.min.y + self.max.y) / 2,
            (self.min.z + self.max.z) / 2,
        )

    def corners(self) -> list[Point]:
        """The eight corners, min corner first, max corner last."""
        lo, hi = self.min, self.max
        return [
            Point(lo.x, lo.y, lo.z),
            Point(hi.x, lo.y, lo.z),
            Point(lo.x, hi.y, lo.z),
            Point(lo.x, lo.y, hi.z),
            Point(hi.x, hi.y, lo.z),
            Point(hi.x, lo.y, hi.z),
            Point(lo.x, hi.y, hi.z),
            Point(hi.x, hi.y, hi.z),
        ]

    def bounds(self) -> Bounds:
        return (self.min.x, self.min.y, self.min.z, self.max.x, self.max.y, self.max.z)

    def contains_point(self, point: Point) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )

    def contains_box(self, other: AABB) -> bool:
        """True if other lies entirely inside this box (shared faces allowed)."""
        return (
            self.min.x <= other.min.x and self.max.x >= other.max.x
            and self.min.y <= other.min.y and self.max.y >= other.max.y
            and self.min.z <= other.min.z and self.max.z >= other.max.z
        )

    def intersects(self, other: AABB) -> bool:
        return boxes_overlap(self.bounds(), other.bounds())

    def intersection(self, other: AABB) -> Optional[AABB]:
        """Overlapping region, or None when disjoint. Touching boxes give a flat box."""
        if not self.intersects(other):
            return None
        return AABB(
            Point(
                max(self.min.x, other.min.x),
                max(self.min.y, other.min.y),
                max(self.min.z, other.min.z),
            ),
            Point(
                min(self.max.x, other.max.x),
                min(self.max.y, other.max.y),
                min(self.max.z, other.max.z),
            ),
        )

    def intersection_volume(self, other: AABB) -> float:
        overlap = self.intersection(other)
        return 0.0 if overlap is None else overlap.volume


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Touching faces/edges (ax2 == bx1) IS considered overlap: a zero-width
    gap does not separate two boxes.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return not (
        ax2 < bx1 or ax1 > bx2
        or ay2 < by1 or ay1 > by2
        or az2 < bz1 or az1 > bz2
    )
