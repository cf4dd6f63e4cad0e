from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from binpack3d.geometry import AABB, ORIGIN, Point

# Axis permutations of (width, height, depth), indexed by orientation code.
ORIENTATIONS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (0, 2, 1),
    (1, 0, 2),
    (1, 2, 0),
    (2, 0, 1),
    (2, 1, 0),
)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


class Item(BaseModel):
    """Rectangular item to pack. x extent = width, y = height, z = depth."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_short_id, description="Identifier of the item")
    width: float = Field(gt=0, description="Extent along x")
    height: float = Field(gt=0, description="Extent along y")
    depth: float = Field(gt=0, description="Extent along z")
    weight: float = Field(default=1.0, ge=0, description="Weight, used against container max_weight")

    @property
    def dimensions(self) -> tuple[float, float, float]:
        return (self.width, self.height, self.depth)

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def longest_edge(self) -> float:
        return max(self.dimensions)

    @property
    def shortest_edge(self) -> float:
        return min(self.dimensions)

    @property
    def surface_area(self) -> float:
        w, h, d = self.dimensions
        return 2 * (w * h + w * d + h * d)

    @property
    def surface_ratio(self) -> float:
        """(wh + wd + hd) / volume; larger means flatter."""
        return (self.surface_area / 2) / self.volume

    @property
    def aspect_ratio(self) -> float:
        return self.longest_edge / self.shortest_edge

    def bounding_box(self, position: Optional[Point] = None) -> AABB:
        """Box at position, or at the origin when unplaced (volume use only)."""
        return AABB.from_origin(position or ORIGIN, self.width, self.height, self.depth)

    def rotations(self) -> list[Item]:
        """
        The six axis permutations of this item, in orientation-code order:
        (w,h,d), (w,d,h), (h,w,d), (h,d,w), (d,w,h), (d,h,w).

        Permutations only, so equal edges give numerically identical variants.
        """
        dims = self.dimensions
        return [
            Item(
                id=f"{self.id}_rot{code}",
                width=dims[a],
                height=dims[b],
                depth=dims[c],
                weight=self.weight,
            )
            for code, (a, b, c) in enumerate(ORIENTATIONS)
        ]


class Placement(BaseModel):
    """Placement record: where an item sits and in which orientation."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Identifier of the placed item")
    x: float = Field(ge=0, description="X coordinate of the lower corner")
    y: float = Field(ge=0, description="Y coordinate of the lower corner")
    z: float = Field(ge=0, description="Z coordinate of the lower corner")

    # Oriented dimensions actually occupied in the container
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    depth: float = Field(gt=0)
    orientation: int = Field(default=0, ge=0, le=5, description="Index into Item.rotations()")
    weight: float = Field(default=0.0, ge=0)

    @classmethod
    def of(cls, item: Item, position: Point, orientation: int = 0) -> Placement:
        """Place item at position, turned by the given orientation code."""
        dims = item.dimensions
        a, b, c = ORIENTATIONS[orientation]
        return cls(
            item_id=item.id,
            x=position.x,
            y=position.y,
            z=position.z,
            width=dims[a],
            height=dims[b],
            depth=dims[c],
            orientation=orientation,
            weight=item.weight,
        )

    @property
    def position(self) -> Point:
        return Point(self.x, self.y, self.z)

    @property
    def dimensions(self) -> tuple[float, float, float]:
        return (self.width, self.height, self.depth)

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def box(self) -> AABB:
        return AABB.from_origin(self.position, self.width, self.height, self.depth)


class Container(BaseModel):
    """Container with fixed dimensions and the placements made inside it."""

    id: str = Field(default="container", description="Identifier of the container")
    width: float = Field(gt=0, description="Extent along x")
    height: float = Field(gt=0, description="Extent along y")
    depth: float = Field(gt=0, description="Extent along z")
    max_weight: Optional[float] = Field(
        default=None,
        gt=0,
        description="Weight capacity; None means unlimited")
    placements: list[Placement] = Field(default_factory=list)

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def used_volume(self) -> float:
        return sum(p.volume for p in self.placements)

    @property
    def used_weight(self) -> float:
        return sum(p.weight for p in self.placements)

    @property
    def utilization(self) -> float:
        return self.used_volume / self.volume

    @property
    def items_count(self) -> int:
        return len(self.placements)

    @property
    def bounding_box(self) -> AABB:
        return AABB.from_origin(ORIGIN, self.width, self.height, self.depth)

    def empty_copy(self, id: Optional[str] = None) -> Container:
        return Container(
            id=self.id if id is None else id,
            width=self.width,
            height=self.height,
            depth=self.depth,
            max_weight=self.max_weight,
        )

    def can_carry(self, weight: float) -> bool:
        if self.max_weight is None:
            return True
        return self.used_weight + weight <= self.max_weight

    def add_item(self, placement: Placement) -> bool:
        """
        Record a placement. Geometry is not checked here.

        Returns False, leaving the container untouched, when the placement
        would push the load over max_weight.
        """
        if not self.can_carry(placement.weight):
            return False
        self.placements.append(placement)
        return True

    def remove_item(self, item_id: str) -> Optional[Placement]:
        """Unplace the first placement of item_id and return it."""
        for i, p in enumerate(self.placements):
            if p.item_id == item_id:
                return self.placements.pop(i)
        return None

    def is_placed(self, item_id: str) -> bool:
        return any(p.item_id == item_id for p in self.placements)

    def has_collision(self, width: float, height: float, depth: float, position: Point) -> bool:
        """Naive O(k) check of a candidate box against every placed box."""
        candidate = AABB.from_origin(position, width, height, depth)
        return any(p.box.intersects(candidate) for p in self.placements)


class PackingResult(BaseModel):
    """Outcome of one packing run. Not packing everything is not an error."""

    model_config = ConfigDict(frozen=True)

    success: bool
    packed_count: int = Field(ge=0)
    total_count: int = Field(ge=0)
    container_volume: float = 0.0
    used_volume: float = 0.0
    utilization: float = 0.0
    message: str = ""
    placements: list[Placement] = Field(default_factory=list)
    unpacked: list[Item] = Field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"PackingResult(success={self.success}, packed={self.packed_count}/{self.total_count}, "
            f"volume={self.used_volume:.2f}/{self.container_volume:.2f}, "
            f"utilization={self.utilization * 100:.2f}%, message='{self.message}')"
        )


class MultiPackingResult(BaseModel):
    """Filled containers plus the aggregate result of a multi-container run."""

    model_config = ConfigDict(frozen=True)

    containers: list[Container] = Field(default_factory=list)
    result: PackingResult

    @property
    def container_count(self) -> int:
        return len(self.containers)
