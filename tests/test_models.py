from __future__ import annotations

import pytest
from pydantic import ValidationError

from binpack3d.config import PackingConfig, PackingStrategy
from binpack3d.geometry import Point
from binpack3d.metrics import compute_metrics
from binpack3d.models import Container, Item, Placement


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0, "height": 1, "depth": 1},
        {"width": 1, "height": -2, "depth": 1},
        {"width": 1, "height": 1, "depth": 0},
        {"width": 1, "height": 1, "depth": 1, "weight": -0.5},
    ],
)
def test_item_rejects_invalid_geometry(kwargs) -> None:
    with pytest.raises(ValidationError):
        Item(id="bad", **kwargs)


def test_container_rejects_invalid_geometry() -> None:
    with pytest.raises(ValidationError):
        Container(width=10, height=0, depth=10)
    with pytest.raises(ValidationError):
        Container(width=10, height=10, depth=10, max_weight=0)


def test_config_rejects_unknown_strategy() -> None:
    with pytest.raises(ValidationError):
        PackingConfig(strategy="next_fit")


def test_config_defaults() -> None:
    config = PackingConfig()
    assert config.strategy is PackingStrategy.GREEDY_HEURISTIC
    assert config.allow_rotation is True
    assert config.use_spatial_index is True
    assert PackingConfig(strategy="best_fit").strategy is PackingStrategy.BEST_FIT


def test_item_defaults() -> None:
    a = Item(width=1, height=2, depth=3)
    b = Item(width=1, height=2, depth=3)
    assert a.weight == 1.0
    assert a.id != b.id


def test_item_derived_values() -> None:
    item = Item(id="A", width=2, height=4, depth=1)
    assert item.volume == 8
    assert item.longest_edge == 4
    assert item.shortest_edge == 1
    assert item.surface_area == 28
    assert item.surface_ratio == 14 / 8
    assert item.aspect_ratio == 4


def test_unplaced_bounding_box_sits_at_origin() -> None:
    item = Item(id="A", width=2, height=3, depth=4)
    b = item.bounding_box()
    assert b.min == Point(0, 0, 0)
    assert b.max == Point(2, 3, 4)
    assert item.bounding_box(Point(1, 1, 1)).max == Point(3, 4, 5)


def test_rotations_order_and_identity() -> None:
    item = Item(id="A", width=1, height=2, depth=3, weight=7)
    rotations = item.rotations()

    assert [r.dimensions for r in rotations] == [
        (1, 2, 3),
        (1, 3, 2),
        (2, 1, 3),
        (2, 3, 1),
        (3, 1, 2),
        (3, 2, 1),
    ]
    assert [r.id for r in rotations] == [f"A_rot{i}" for i in range(6)]
    assert all(r.weight == 7 for r in rotations)


def test_rotations_of_cube_are_identical_permutations() -> None:
    rotations = Item(id="C", width=2, height=2, depth=2).rotations()
    assert len(rotations) == 6
    assert len({r.dimensions for r in rotations}) == 1


def test_placement_applies_orientation() -> None:
    item = Item(id="A", width=1, height=2, depth=3, weight=4)
    p = Placement.of(item, Point(5, 0, 1), orientation=3)
    assert p.item_id == "A"
    assert p.dimensions == (2, 3, 1)
    assert p.weight == 4
    assert p.box.max == Point(7, 3, 2)
    assert p.volume == item.volume


def test_container_add_and_remove() -> None:
    container = Container(id="C", width=10, height=10, depth=10)
    a = Placement.of(Item(id="A", width=2, height=2, depth=2), Point(0, 0, 0))

    assert container.add_item(a) is True
    assert container.is_placed("A")
    assert container.used_volume == 8
    assert container.utilization == 8 / 1000

    assert container.remove_item("A") is a
    assert not container.is_placed("A")
    assert container.remove_item("A") is None
    assert container.used_volume == 0


def test_weighted_container_rejects_overload_without_mutation() -> None:
    container = Container(width=10, height=10, depth=10, max_weight=1000)
    a = Placement.of(Item(id="A", width=2, height=2, depth=2, weight=600), Point(0, 0, 0))
    b = Placement.of(Item(id="B", width=2, height=2, depth=2, weight=600), Point(5, 0, 0))

    assert container.add_item(a) is True
    assert container.add_item(b) is False
    assert [p.item_id for p in container.placements] == ["A"]
    assert container.used_weight == 600


def test_container_naive_collision() -> None:
    container = Container(width=10, height=10, depth=10)
    container.add_item(Placement.of(Item(id="A", width=3, height=3, depth=3), Point(0, 0, 0)))

    assert container.has_collision(2, 2, 2, Point(1, 1, 1))
    # touching the placed box counts as a collision
    assert container.has_collision(2, 2, 2, Point(3, 0, 0))
    assert not container.has_collision(2, 2, 2, Point(5, 0, 0))


def test_empty_copy() -> None:
    container = Container(id="C", width=4, height=5, depth=6, max_weight=50)
    container.add_item(Placement.of(Item(id="A", width=1, height=1, depth=1), Point(0, 0, 0)))

    copy = container.empty_copy(id="C_1")
    assert copy.id == "C_1"
    assert (copy.width, copy.height, copy.depth, copy.max_weight) == (4, 5, 6, 50)
    assert copy.placements == []
    assert container.items_count == 1


def test_compute_metrics() -> None:
    container = Container(width=10, height=10, depth=10)
    container.add_item(Placement.of(Item(id="A", width=2, height=5, depth=10), Point(0, 0, 0)))

    used, total, utilization = compute_metrics(container)
    assert (used, total, utilization) == (100, 1000, 0.1)
    assert compute_metrics(container, [])[0] == 0
