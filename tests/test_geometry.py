"""Tests for the rectangle primitives."""

import pytest

from cropstage.core.geometry import (
    EMPTY_RECT,
    ImageTransform,
    Point,
    Rect,
    StageBounds,
    clamp,
    intersect,
    rect_within_stage,
)


def test_intersect_overlapping_rects():
    a = Rect(0, 0, 100, 100)
    b = Rect(50, 25, 100, 100)
    assert intersect(a, b) == Rect(50, 25, 50, 75)


def test_intersect_is_commutative():
    a = Rect(10, 20, 30, 40)
    b = Rect(25, 5, 50, 30)
    assert intersect(a, b) == intersect(b, a)


def test_intersect_contained_rect_returns_inner():
    outer = Rect(0, 0, 200, 200)
    inner = Rect(20, 30, 40, 50)
    assert intersect(outer, inner) == inner


def test_intersect_disjoint_is_empty():
    assert intersect(Rect(0, 0, 10, 10), Rect(20, 20, 5, 5)) == EMPTY_RECT


def test_intersect_touching_edges_is_empty():
    """Rectangles that only share an edge do not overlap."""
    assert intersect(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10)) == EMPTY_RECT
    assert intersect(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10)) == EMPTY_RECT


def test_intersect_result_lies_inside_both():
    a = Rect(-15.5, 3.25, 80, 60)
    b = Rect(12, -7, 33.5, 90)
    result = intersect(a, b)
    for rect in (a, b):
        assert result.x >= rect.x
        assert result.y >= rect.y
        assert result.right <= rect.right
        assert result.bottom <= rect.bottom


def test_clamp_applies_lower_then_upper():
    assert clamp(5, 0, 10) == 5
    assert clamp(-3, 0, 10) == 0
    assert clamp(12, 0, 10) == 10
    # Crossed limits: the upper limit wins.
    assert clamp(5, 8, 6) == 6


def test_rect_properties():
    rect = Rect(10, 20, 30, 40)
    assert rect.right == 40
    assert rect.bottom == 60
    assert rect.center == Point(25, 40)
    assert rect.aspect_ratio == pytest.approx(0.75)
    assert not rect.is_empty()
    assert Rect(0, 0, 0, 10).is_empty()
    assert Rect(0, 0, 10, 0).aspect_ratio == 0.0


def test_rect_contains_is_half_open():
    rect = Rect(0, 0, 10, 10)
    assert rect.contains(Point(0, 0))
    assert rect.contains(Point(9.99, 9.99))
    assert not rect.contains(Point(10, 5))
    assert not rect.contains(Point(5, 10))


def test_point_arithmetic():
    assert Point(5, 7) - Point(2, 3) == Point(3, 4)
    assert Point(1, 1) + Point(2, -3) == Point(3, -2)


def test_stage_bounds_rejects_non_positive_size():
    with pytest.raises(ValueError):
        StageBounds(0, 100)
    with pytest.raises(ValueError):
        StageBounds(100, -1)


def test_image_transform_displayed_rect():
    transform = ImageTransform(10, 20, 0.5, 0.25)
    assert transform.displayed_rect(200, 400) == Rect(10, 20, 100, 100)
    assert transform.moved_to(1, 2) == ImageTransform(1, 2, 0.5, 0.25)
    assert transform.position == Point(10, 20)


def test_rect_within_stage():
    stage = StageBounds(400, 300)
    assert rect_within_stage(Rect(4, 4, 392, 292), stage, 4)
    assert not rect_within_stage(Rect(3, 4, 10, 10), stage, 4)
    assert not rect_within_stage(Rect(390, 4, 10, 10), stage, 4)


def test_rect_translated_keeps_size():
    assert Rect(10, 20, 30, 40).translated(-5, 5) == Rect(5, 25, 30, 40)
