"""
Drag constraint solver for crop box handles.

Every box handle maps to one constraint function taking the box as it was
when the drag started, the total pointer delta since then, the stage and
the optional locked ratio.  Each function returns a new rectangle that
respects the minimum size, the stage margin and, when locked, the ratio.

Drags are never rejected: a delta that would break a constraint is clamped,
so the box stops at the limit and keeps following the pointer once it
comes back.

Per corner, the locked-ratio case runs two ordered passes:

1. Derive the outer limit pair.  The margin limit on the horizontal axis is
   taken first and the matching vertical limit derived from it through the
   ratio; when that derived limit would cross the stage margin the vertical
   limit is pinned to the margin and the horizontal limit re-derived from it.
2. Pick the dominant axis (``ratio > 1`` follows the horizontal delta,
   otherwise the vertical one), derive the other coordinate from it and set
   the minimum-size limits on the opposite side.

Both coordinates are then clamped independently.  Because every pair of
limits is coupled through the ratio, clamping one coordinate always clamps
its partner to the matching value.
"""

from __future__ import annotations

from collections.abc import Callable

from ..config import MIN_SIZE, STAGE_MARGIN
from ..core.geometry import Point, Rect, StageBounds, clamp
from .utils import CropHandle

ConstraintFn = Callable[[Rect, Point, StageBounds, float | None], Rect]


# ----------------------------------------------------------------------
# Edges: one side moves, disabled under a ratio lock
# ----------------------------------------------------------------------
def _drag_top(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    if ratio:
        return box
    x, y, w, h = box.as_tuple()
    ny = clamp(y + delta.y, STAGE_MARGIN, y + h - MIN_SIZE)
    return Rect(x, ny, w, y + h - ny)


def _drag_right(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    if ratio:
        return box
    x, y, w, h = box.as_tuple()
    nx = clamp(x + w + delta.x, x + MIN_SIZE, stage.width - STAGE_MARGIN)
    return Rect(x, y, nx - x, h)


def _drag_bottom(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    if ratio:
        return box
    x, y, w, h = box.as_tuple()
    ny = clamp(y + h + delta.y, y + MIN_SIZE, stage.height - STAGE_MARGIN)
    return Rect(x, y, w, ny - y)


def _drag_left(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    if ratio:
        return box
    x, y, w, h = box.as_tuple()
    nx = clamp(x + delta.x, STAGE_MARGIN, x + w - MIN_SIZE)
    return Rect(nx, y, x + w - nx, h)


# ----------------------------------------------------------------------
# Corners: the opposite corner is the anchor
# ----------------------------------------------------------------------
def _drag_top_left(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    x, y, w, h = box.as_tuple()
    if not ratio:
        nx = x + delta.x
        ny = y + delta.y
        min_nx, max_nx = STAGE_MARGIN, x + w - MIN_SIZE
        min_ny, max_ny = STAGE_MARGIN, y + h - MIN_SIZE
    else:
        # Which of width or height reaches the margin first.
        min_nx = STAGE_MARGIN
        min_ny = y + h - (x + w - STAGE_MARGIN) / ratio
        if min_ny <= STAGE_MARGIN:
            min_ny = STAGE_MARGIN
            min_nx = x + w - (y + h - STAGE_MARGIN) * ratio
        if ratio > 1:
            nx = x + delta.x
            ny = y + h - (x + w - nx) / ratio
            max_ny = y + h - MIN_SIZE
            max_nx = x + w - MIN_SIZE * ratio
        else:
            ny = y + delta.y
            nx = x + w - (y + h - ny) * ratio
            max_nx = x + w - MIN_SIZE
            max_ny = y + h - MIN_SIZE / ratio
    nx = clamp(nx, min_nx, max_nx)
    ny = clamp(ny, min_ny, max_ny)
    return Rect(nx, ny, x + w - nx, y + h - ny)


def _drag_top_right(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    x, y, w, h = box.as_tuple()
    if not ratio:
        nx = x + w + delta.x
        ny = y + delta.y
        min_nx, max_nx = x + MIN_SIZE, stage.width - STAGE_MARGIN
        min_ny, max_ny = STAGE_MARGIN, y + h - MIN_SIZE
    else:
        max_nx = stage.width - STAGE_MARGIN
        min_ny = y + h - (max_nx - x) / ratio
        if min_ny <= STAGE_MARGIN:
            min_ny = STAGE_MARGIN
            max_nx = x + (y + h - STAGE_MARGIN) * ratio
        if ratio > 1:
            nx = x + w + delta.x
            ny = y + h - (nx - x) / ratio
            max_ny = y + h - MIN_SIZE
            min_nx = x + MIN_SIZE * ratio
        else:
            ny = y + delta.y
            nx = x + (y + h - ny) * ratio
            min_nx = x + MIN_SIZE
            max_ny = y + h - MIN_SIZE / ratio
    nx = clamp(nx, min_nx, max_nx)
    ny = clamp(ny, min_ny, max_ny)
    return Rect(x, ny, nx - x, y + h - ny)


def _drag_bottom_right(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    x, y, w, h = box.as_tuple()
    if not ratio:
        nx = x + w + delta.x
        ny = y + h + delta.y
        min_nx, max_nx = x + MIN_SIZE, stage.width - STAGE_MARGIN
        min_ny, max_ny = y + MIN_SIZE, stage.height - STAGE_MARGIN
    else:
        max_nx = stage.width - STAGE_MARGIN
        max_ny = y + (max_nx - x) / ratio
        if max_ny >= stage.height - STAGE_MARGIN:
            max_ny = stage.height - STAGE_MARGIN
            max_nx = x + (max_ny - y) * ratio
        if ratio > 1:
            nx = x + w + delta.x
            ny = y + (nx - x) / ratio
            min_ny = y + MIN_SIZE
            min_nx = x + MIN_SIZE * ratio
        else:
            ny = y + h + delta.y
            nx = x + (ny - y) * ratio
            min_nx = x + MIN_SIZE
            min_ny = y + MIN_SIZE / ratio
    nx = clamp(nx, min_nx, max_nx)
    ny = clamp(ny, min_ny, max_ny)
    return Rect(x, y, nx - x, ny - y)


def _drag_bottom_left(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    x, y, w, h = box.as_tuple()
    if not ratio:
        nx = x + delta.x
        ny = y + h + delta.y
        min_nx, max_nx = STAGE_MARGIN, x + w - MIN_SIZE
        min_ny, max_ny = y + MIN_SIZE, stage.height - STAGE_MARGIN
    else:
        min_nx = STAGE_MARGIN
        max_ny = y + (x + w - STAGE_MARGIN) / ratio
        if max_ny >= stage.height - STAGE_MARGIN:
            max_ny = stage.height - STAGE_MARGIN
            min_nx = x + w - (max_ny - y) * ratio
        if ratio > 1:
            nx = x + delta.x
            ny = y + (x + w - nx) / ratio
            min_ny = y + MIN_SIZE
            max_nx = x + w - MIN_SIZE * ratio
        else:
            ny = y + h + delta.y
            nx = x + w - (ny - y) * ratio
            max_nx = x + w - MIN_SIZE
            min_ny = y + MIN_SIZE / ratio
    nx = clamp(nx, min_nx, max_nx)
    ny = clamp(ny, min_ny, max_ny)
    return Rect(nx, y, x + w - nx, ny - y)


# ----------------------------------------------------------------------
# Move: translation only
# ----------------------------------------------------------------------
def _drag_move(box: Rect, delta: Point, stage: StageBounds, ratio: float | None) -> Rect:
    x, y, w, h = box.as_tuple()
    nx = clamp(x + delta.x, STAGE_MARGIN, stage.width - STAGE_MARGIN - w)
    ny = clamp(y + delta.y, STAGE_MARGIN, stage.height - STAGE_MARGIN - h)
    return Rect(nx, ny, w, h)


_CONSTRAINTS: dict[CropHandle, ConstraintFn] = {
    CropHandle.TOP: _drag_top,
    CropHandle.RIGHT: _drag_right,
    CropHandle.BOTTOM: _drag_bottom,
    CropHandle.LEFT: _drag_left,
    CropHandle.TOP_LEFT: _drag_top_left,
    CropHandle.TOP_RIGHT: _drag_top_right,
    CropHandle.BOTTOM_RIGHT: _drag_bottom_right,
    CropHandle.BOTTOM_LEFT: _drag_bottom_left,
    CropHandle.MOVE: _drag_move,
}


def solve(
    handle: CropHandle,
    start_box: Rect,
    delta: Point,
    stage: StageBounds,
    locked_ratio: float | None = None,
) -> Rect:
    """Return the crop box after dragging *handle* by *delta*.

    Parameters
    ----------
    handle:
        One of the nine box handles (edges, corners or ``MOVE``).
    start_box:
        The crop box when the drag started.
    delta:
        Total pointer movement since the drag started.
    stage:
        Stage bounds used for the margin limits.
    locked_ratio:
        ``width / height`` to preserve, or ``None`` for free cropping.

    Raises
    ------
    ValueError
        If *handle* does not edit the crop box (``NONE`` or ``IMAGE``).
    """
    try:
        constraint = _CONSTRAINTS[handle]
    except KeyError:
        raise ValueError(f"{handle!r} is not a crop box handle") from None
    return constraint(start_box, delta, stage, locked_ratio)


__all__ = ["solve"]
