from __future__ import annotations

import pytest

from binpack3d.geometry import AABB, Point, boxes_overlap


def box(x1, y1, z1, x2, y2, z2) -> AABB:
    return AABB(Point(x1, y1, z1), Point(x2, y2, z2))


def test_boxes_overlap_overlapping() -> None:
    """Test that overlapping boxes are detected."""
    # Box a: (0, 0, 0) to (2, 2, 2)
    a = (0.0, 0.0, 0.0, 2.0, 2.0, 2.0)
    # Box b: (1, 1, 1) to (3, 3, 3) - overlaps with a
    b = (1.0, 1.0, 1.0, 3.0, 3.0, 3.0)

    assert boxes_overlap(a, b) is True


def test_boxes_overlap_not_overlapping() -> None:
    """Test that non-overlapping boxes are detected."""
    # Box a: (0, 0, 0) to (1, 1, 1)
    a = (0.0, 0.0, 0.0, 1.0, 1.0, 1.0)
    # Box b: (2, 2, 2) to (3, 3, 3) - does not overlap with a
    b = (2.0, 2.0, 2.0, 3.0, 3.0, 3.0)

    assert boxes_overlap(a, b) is False


@pytest.mark.parametrize(
    "other",
    [
        box(2, 0, 0, 4, 2, 2),  # shared face
        box(2, 2, 0, 4, 4, 2),  # shared edge
        box(2, 2, 2, 4, 4, 4),  # shared corner
    ],
)
def test_touching_boxes_intersect(other: AABB) -> None:
    a = box(0, 0, 0, 2, 2, 2)
    assert a.intersects(other)
    assert other.intersects(a)


def test_separated_by_tiny_gap_does_not_intersect() -> None:
    a = box(0, 0, 0, 2, 2, 2)
    b = box(2.0001, 0, 0, 4, 2, 2)
    assert not a.intersects(b)


def test_inverted_bounds_rejected() -> None:
    with pytest.raises(ValueError):
        AABB(Point(1, 0, 0), Point(0, 1, 1))


def test_derived_dimensions() -> None:
    b = AABB.from_origin(Point(1, 2, 3), 4, 5, 6)
    assert (b.width, b.height, b.depth) == (4, 5, 6)
    assert b.volume == 120
    assert b.center == Point(3, 4.5, 6)
    assert b.bounds() == (1, 2, 3, 5, 7, 9)


def test_corners() -> None:
    corners = box(0, 0, 0, 1, 2, 3).corners()
    assert len(corners) == 8
    assert len(set(corners)) == 8
    assert corners[0] == Point(0, 0, 0)
    assert corners[-1] == Point(1, 2, 3)


def test_contains_point_includes_boundary() -> None:
    b = box(0, 0, 0, 2, 2, 2)
    assert b.contains_point(Point(2, 2, 2))
    assert b.contains_point(Point(1, 1, 1))
    assert not b.contains_point(Point(2.5, 1, 1))


def test_contains_box() -> None:
    outer = box(0, 0, 0, 10, 10, 10)
    assert outer.contains_box(box(0, 0, 0, 10, 10, 10))
    assert outer.contains_box(box(2, 2, 2, 3, 3, 3))
    assert not outer.contains_box(box(8, 0, 0, 11, 1, 1))
    assert not box(2, 2, 2, 3, 3, 3).contains_box(outer)


def test_intersection() -> None:
    a = box(0, 0, 0, 4, 4, 4)
    b = box(2, 2, 2, 6, 6, 6)
    assert a.intersection(b) == box(2, 2, 2, 4, 4, 4)
    assert a.intersection_volume(b) == 8
    assert a.intersection(box(5, 5, 5, 6, 6, 6)) is None


def test_intersection_of_touching_boxes_is_flat() -> None:
    a = box(0, 0, 0, 2, 2, 2)
    b = box(2, 0, 0, 4, 2, 2)
    overlap = a.intersection(b)
    assert overlap is not None
    assert overlap.volume == 0
    assert a.intersection_volume(b) == 0


def test_point_helpers() -> None:
    p = Point(1, 2, 3)
    q = Point(4, 6, 3)
    assert p.add(q) == Point(5, 8, 6)
    assert q.subtract(p) == Point(3, 4, 0)
    assert p.distance(q) == 5.0
    assert p.as_tuple() == (1, 2, 3)
