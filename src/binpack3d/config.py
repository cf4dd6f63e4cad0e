# src/binpack3d/config.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Coordinates closer than this compare equal when sorting candidate points.
POINT_EPSILON = 0.001

# Weight of the item aspect ratio in the greedy position score.
ASPECT_WEIGHT = 0.1

# Octree defaults: local capacity before subdividing, and subdivision limit.
OCTREE_CAPACITY = 10
OCTREE_MAX_DEPTH = 5


class PackingStrategy(str, Enum):
    """Item ordering + position selection rule used by the engine."""

    BOTTOM_LEFT_FILL = "bottom_left_fill"
    BEST_FIT = "best_fit"
    FIRST_FIT = "first_fit"
    GREEDY_HEURISTIC = "greedy_heuristic"


class PackingConfig(BaseModel):
    """Engine configuration, fixed for the lifetime of a PackingEngine."""

    model_config = ConfigDict(frozen=True)

    strategy: PackingStrategy = Field(
        default=PackingStrategy.GREEDY_HEURISTIC,
        description="Ordering and position selection strategy")
    allow_rotation: bool = Field(
        default=True,
        description="Try the five non-identity axis permutations when the item does not fit as given")
    use_spatial_index: bool = Field(
        default=True,
        description="Use an octree for collision checks instead of scanning every placed item")
    octree_capacity: int = Field(
        default=OCTREE_CAPACITY,
        gt=0,
        description="Items a node stores before it subdivides")
    octree_max_depth: int = Field(
        default=OCTREE_MAX_DEPTH,
        ge=0,
        description="Depth below which nodes no longer subdivide")
