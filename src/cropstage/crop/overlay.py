"""Geometry of the overlay drawn over the stage around the crop box."""

from __future__ import annotations

from ..core.geometry import Point, Rect, StageBounds

Segment = tuple[Point, Point]


def cover_rects(stage: StageBounds, box: Rect) -> tuple[Rect, Rect, Rect, Rect]:
    """Return the four bands that dim the stage outside *box*.

    The bands are top and bottom across the full stage width, then right and
    left beside the box.  Together with the box they tile the stage.
    """
    return (
        Rect(0.0, 0.0, stage.width, box.y),
        Rect(0.0, box.bottom, stage.width, stage.height - box.bottom),
        Rect(box.right, box.y, stage.width - box.right, box.height),
        Rect(0.0, box.y, box.x, box.height),
    )


def crop_mesh_lines(box: Rect) -> tuple[Segment, ...]:
    """Return the rule-of-thirds guide lines inside *box*.

    Two vertical lines come first, then two horizontal ones.
    """
    lines: list[Segment] = []
    for third in (1, 2):
        x = box.x + box.width * third / 3
        lines.append((Point(x, box.y), Point(x, box.bottom)))
    for third in (1, 2):
        y = box.y + box.height * third / 3
        lines.append((Point(box.x, y), Point(box.right, y)))
    return tuple(lines)


__all__ = ["Segment", "cover_rects", "crop_mesh_lines"]
