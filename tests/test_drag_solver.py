"""Tests for the drag constraint solver."""

import itertools

import pytest

from cropstage.config import MIN_SIZE, STAGE_MARGIN
from cropstage.core.geometry import Point, Rect, StageBounds, rect_within_stage
from cropstage.crop.model import initial_box
from cropstage.crop.sizing import Free, RatioLocked
from cropstage.crop.solver import solve
from cropstage.crop.utils import CropHandle

FREE_BOX = Rect(100, 50, 200, 200)
WIDE_BOX = Rect(100, 100, 200, 100)

EDGES = [CropHandle.TOP, CropHandle.RIGHT, CropHandle.BOTTOM, CropHandle.LEFT]
CORNERS = [
    CropHandle.TOP_LEFT,
    CropHandle.TOP_RIGHT,
    CropHandle.BOTTOM_RIGHT,
    CropHandle.BOTTOM_LEFT,
]
DELTAS = [-600, -250, -30, 0, 45, 300, 700]


def _assert_rect(actual: Rect, expected: Rect) -> None:
    assert actual.as_tuple() == pytest.approx(expected.as_tuple())


# ----------------------------------------------------------------------
# Free cropping
# ----------------------------------------------------------------------
def test_bottom_right_drag_clamps_to_stage_margin(stage):
    result = solve(CropHandle.BOTTOM_RIGHT, FREE_BOX, Point(500, 500), stage)
    _assert_rect(result, Rect(100, 50, 296, 246))
    assert result.right == pytest.approx(stage.width - STAGE_MARGIN)
    assert result.bottom == pytest.approx(stage.height - STAGE_MARGIN)


def test_top_left_drag_clamps_to_stage_margin(stage):
    result = solve(CropHandle.TOP_LEFT, FREE_BOX, Point(-500, -500), stage)
    _assert_rect(result, Rect(4, 4, 296, 246))


def test_corner_shrink_stops_at_min_size(stage):
    result = solve(CropHandle.TOP_RIGHT, FREE_BOX, Point(-500, 500), stage)
    _assert_rect(result, Rect(100, 234, 16, 16))


def test_free_corner_axes_are_independent(stage):
    result = solve(CropHandle.BOTTOM_LEFT, FREE_BOX, Point(-20, 10), stage)
    _assert_rect(result, Rect(80, 50, 220, 210))


def test_top_edge_moves_only_top(stage):
    _assert_rect(solve(CropHandle.TOP, FREE_BOX, Point(33, -100), stage), Rect(100, 4, 200, 246))
    _assert_rect(solve(CropHandle.TOP, FREE_BOX, Point(0, 500), stage), Rect(100, 234, 200, 16))


def test_side_edges_move_only_their_side(stage):
    _assert_rect(solve(CropHandle.RIGHT, FREE_BOX, Point(50, 80), stage), Rect(100, 50, 250, 200))
    _assert_rect(solve(CropHandle.LEFT, FREE_BOX, Point(-20, 0), stage), Rect(80, 50, 220, 200))
    _assert_rect(solve(CropHandle.BOTTOM, FREE_BOX, Point(0, 30), stage), Rect(100, 50, 200, 230))


def test_move_translates_and_clamps(stage):
    _assert_rect(solve(CropHandle.MOVE, FREE_BOX, Point(20, -10), stage), Rect(120, 40, 200, 200))
    _assert_rect(solve(CropHandle.MOVE, FREE_BOX, Point(500, -500), stage), Rect(196, 4, 200, 200))


def test_zero_delta_is_identity(stage):
    for handle in EDGES + CORNERS + [CropHandle.MOVE]:
        _assert_rect(solve(handle, FREE_BOX, Point(0, 0), stage), FREE_BOX)


def test_non_box_handles_are_rejected(stage):
    with pytest.raises(ValueError):
        solve(CropHandle.IMAGE, FREE_BOX, Point(1, 1), stage)
    with pytest.raises(ValueError):
        solve(CropHandle.NONE, FREE_BOX, Point(1, 1), stage)


# ----------------------------------------------------------------------
# Locked ratio
# ----------------------------------------------------------------------
def test_edges_are_disabled_under_ratio_lock(stage):
    for handle in EDGES:
        assert solve(handle, WIDE_BOX, Point(40, -40), stage, 2.0) == WIDE_BOX


def test_locked_bottom_right_grows_to_margin(stage):
    result = solve(CropHandle.BOTTOM_RIGHT, WIDE_BOX, Point(500, 500), stage, 2.0)
    _assert_rect(result, Rect(100, 100, 296, 148))


def test_locked_top_left_grows_to_margin(stage):
    result = solve(CropHandle.TOP_LEFT, WIDE_BOX, Point(-500, -500), stage, 2.0)
    _assert_rect(result, Rect(4, 52, 296, 148))


def test_locked_shrink_stops_at_min_size_on_short_side(stage):
    result = solve(CropHandle.BOTTOM_RIGHT, WIDE_BOX, Point(-500, -500), stage, 2.0)
    _assert_rect(result, Rect(100, 100, 32, 16))


def test_locked_tall_ratio_limited_by_stage_height(stage):
    start = initial_box(stage, RatioLocked(0.5))
    _assert_rect(start, Rect(150, 50, 100, 200))
    result = solve(CropHandle.BOTTOM_RIGHT, start, Point(100, 100), stage, 0.5)
    _assert_rect(result, Rect(150, 50, 123, 246))


def test_locked_wide_ratio_follows_horizontal_delta(stage):
    result = solve(CropHandle.BOTTOM_RIGHT, WIDE_BOX, Point(40, -1000), stage, 2.0)
    _assert_rect(result, Rect(100, 100, 240, 120))


def test_locked_tall_ratio_follows_vertical_delta(stage):
    start = Rect(150, 50, 100, 200)
    result = solve(CropHandle.BOTTOM_LEFT, start, Point(1000, -40), stage, 0.5)
    _assert_rect(result, Rect(170, 50, 80, 160))


# ----------------------------------------------------------------------
# Invariants over a sweep of drags
# ----------------------------------------------------------------------
def _anchor(handle: CropHandle, box: Rect) -> tuple[float, float]:
    return {
        CropHandle.TOP_LEFT: (box.right, box.bottom),
        CropHandle.TOP_RIGHT: (box.x, box.bottom),
        CropHandle.BOTTOM_RIGHT: (box.x, box.y),
        CropHandle.BOTTOM_LEFT: (box.right, box.y),
    }[handle]


@pytest.mark.parametrize("ratio", [None, 0.5, 1.0, 16 / 9, 2.0])
@pytest.mark.parametrize("handle", CORNERS)
def test_corner_drags_keep_invariants(stage, ratio, handle):
    mode = Free() if ratio is None else RatioLocked(ratio)
    start = initial_box(stage, mode)
    assert rect_within_stage(start, stage, STAGE_MARGIN)
    for dx, dy in itertools.product(DELTAS, DELTAS):
        result = solve(handle, start, Point(dx, dy), stage, ratio)
        assert rect_within_stage(result, stage, STAGE_MARGIN, tolerance=1e-6)
        assert result.width >= MIN_SIZE - 1e-6
        assert result.height >= MIN_SIZE - 1e-6
        assert _anchor(handle, result) == pytest.approx(_anchor(handle, start))
        if ratio is not None:
            assert result.width / result.height == pytest.approx(ratio)


@pytest.mark.parametrize("handle", EDGES)
def test_edge_drags_keep_invariants(stage, handle):
    for dx, dy in itertools.product(DELTAS, DELTAS):
        result = solve(handle, FREE_BOX, Point(dx, dy), stage)
        assert rect_within_stage(result, stage, STAGE_MARGIN, tolerance=1e-6)
        assert result.width >= MIN_SIZE - 1e-6
        assert result.height >= MIN_SIZE - 1e-6
        if handle in (CropHandle.TOP, CropHandle.BOTTOM):
            assert (result.x, result.width) == (FREE_BOX.x, FREE_BOX.width)
        else:
            assert (result.y, result.height) == (FREE_BOX.y, FREE_BOX.height)


def test_move_keeps_size_and_stays_on_stage():
    stage = StageBounds(640, 480)
    start = Rect(20, 30, 250, 120)
    for dx, dy in itertools.product(DELTAS, DELTAS):
        result = solve(CropHandle.MOVE, start, Point(dx, dy), stage)
        assert (result.width, result.height) == (start.width, start.height)
        assert rect_within_stage(result, stage, STAGE_MARGIN)
