"""
Rectangle primitives and pure rectangle math.

Everything in this module is free of UI state: rectangles are immutable
values in either stage space (the crop box) or image space (projected
sampling regions).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A position or a delta in stage coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class StageBounds:
    """Size of the interactive surface; fixed for the lifetime of a session."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"stage must have a positive size, got {self.width}x{self.height}")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.y + self.height * 0.5)

    @property
    def aspect_ratio(self) -> float:
        """Return ``width / height`` or ``0.0`` for a degenerate rectangle."""
        if self.height <= 0.0:
            return 0.0
        return self.width / self.height

    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def contains(self, point: Point) -> bool:
        """Half-open containment test: the right and bottom edges are outside."""
        return self.x <= point.x < self.right and self.y <= point.y < self.bottom

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


EMPTY_RECT = Rect(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ImageTransform:
    """Placement of the displayed image on the stage.

    ``x``/``y`` locate the top-left corner of the displayed image in stage
    space; ``scale_x``/``scale_y`` relate displayed size to texture size.
    """

    x: float = 0.0
    y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def moved_to(self, x: float, y: float) -> ImageTransform:
        return ImageTransform(x, y, self.scale_x, self.scale_y)

    def displayed_rect(self, texture_width: float, texture_height: float) -> Rect:
        """Return the stage-space bounds of a texture drawn with this transform."""
        return Rect(self.x, self.y, texture_width * self.scale_x, texture_height * self.scale_y)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``.

    The lower limit is applied first and the upper limit second, so when the
    limits cross the upper limit wins.  Crop geometry relies on this order.
    """
    if value <= low:
        value = low
    if value >= high:
        value = high
    return value


def intersect(a: Rect, b: Rect) -> Rect:
    """Return the overlap of *a* and *b*.

    Rectangles that do not overlap, including those that merely share an
    edge, produce the degenerate ``Rect(0, 0, 0, 0)``.
    """
    x0 = max(a.x, b.x)
    x1 = min(a.right, b.right)
    if x1 <= x0:
        return EMPTY_RECT
    y0 = max(a.y, b.y)
    y1 = min(a.bottom, b.bottom)
    if y1 <= y0:
        return EMPTY_RECT
    return Rect(x0, y0, x1 - x0, y1 - y0)


def rect_within_stage(rect: Rect, stage: StageBounds, margin: float, tolerance: float = 1e-9) -> bool:
    """Return True when *rect* lies inside the stage shrunk by *margin*."""
    return (
        rect.x >= margin - tolerance
        and rect.y >= margin - tolerance
        and rect.right <= stage.width - margin + tolerance
        and rect.bottom <= stage.height - margin + tolerance
    )


__all__ = [
    "EMPTY_RECT",
    "ImageTransform",
    "Point",
    "Rect",
    "StageBounds",
    "clamp",
    "intersect",
    "rect_within_stage",
]
