"""
Displayed image state: native texture size plus stage placement.

The image is panned and zoomed independently of the crop box.  Zooming
always preserves the image's own aspect ratio; there is no ratio lock for
the image.
"""

from __future__ import annotations

import logging

from ..config import MIN_IMAGE_SIZE, VIEWPORT_PADDING
from ..core.geometry import ImageTransform, Point, Rect, StageBounds

_LOGGER = logging.getLogger(__name__)


def fit_image_to_stage(
    stage: StageBounds,
    texture_width: float,
    texture_height: float,
) -> ImageTransform:
    """Return the transform that shows a freshly loaded image.

    The image keeps its native size unless it exceeds the stage minus
    ``VIEWPORT_PADDING``, in which case it is scaled down along its limiting
    axis.  Either way it is centred on the stage.
    """
    view_w = stage.width - VIEWPORT_PADDING
    view_h = stage.height - VIEWPORT_PADDING
    width = float(texture_width)
    height = float(texture_height)
    image_ratio = width / height
    if image_ratio >= view_w / view_h:
        if view_w <= texture_width:
            width = view_w
            height = view_w / image_ratio
    elif view_h <= texture_height:
        height = view_h
        width = view_h * image_ratio
    return ImageTransform(
        (stage.width - width) / 2,
        (stage.height - height) / 2,
        width / texture_width,
        height / texture_height,
    )


class ImageLayer:
    """Tracks the loaded image and where it is drawn on the stage."""

    def __init__(self) -> None:
        self._texture_size: tuple[int, int] | None = None
        self._transform = ImageTransform()

    # ------------------------------------------------------------------
    # Image lifecycle
    # ------------------------------------------------------------------
    def has_image(self) -> bool:
        return self._texture_size is not None

    @property
    def texture_size(self) -> tuple[int, int] | None:
        return self._texture_size

    @property
    def transform(self) -> ImageTransform:
        return self._transform

    def set_image(self, texture_width: int, texture_height: int, stage: StageBounds) -> ImageTransform:
        """Adopt a new image and fit it to *stage*."""
        if texture_width <= 0 or texture_height <= 0:
            raise ValueError(f"image must have a positive size, got {texture_width}x{texture_height}")
        self._texture_size = (int(texture_width), int(texture_height))
        self._transform = fit_image_to_stage(stage, texture_width, texture_height)
        return self._transform

    def clear(self) -> None:
        self._texture_size = None
        self._transform = ImageTransform()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def displayed_rect(self) -> Rect | None:
        """Return the image bounds in stage space, or ``None`` without an image."""
        if self._texture_size is None:
            return None
        tex_w, tex_h = self._texture_size
        return self._transform.displayed_rect(tex_w, tex_h)

    def contains(self, point: Point) -> bool:
        rect = self.displayed_rect()
        return rect is not None and rect.contains(point)

    # ------------------------------------------------------------------
    # Pan / zoom
    # ------------------------------------------------------------------
    def pan_to(self, position: Point) -> None:
        """Place the image's top-left corner at *position*; panning is unconstrained."""
        self._transform = self._transform.moved_to(position.x, position.y)

    def zoom(self, wheel_delta_y: float, anchor: Point | None = None) -> bool:
        """Resize the image by a wheel step.

        The displayed height shrinks by *wheel_delta_y* (negative deltas
        grow the image).  Height and width are floored at
        ``MIN_IMAGE_SIZE``; when the width floor is hit the height is
        re-derived from it so the aspect ratio is always preserved.  The
        image point under *anchor* stays put.

        Returns True when the image size changed.
        """
        rect = self.displayed_rect()
        if rect is None or self._texture_size is None:
            return False
        tex_w, tex_h = self._texture_size
        ratio = rect.width / rect.height
        new_h = rect.height - wheel_delta_y
        if new_h <= MIN_IMAGE_SIZE:
            new_h = MIN_IMAGE_SIZE
        new_w = new_h * ratio
        if new_w <= MIN_IMAGE_SIZE:
            new_w = MIN_IMAGE_SIZE
            new_h = new_w / ratio
        if abs(new_w - rect.width) <= 1e-9 and abs(new_h - rect.height) <= 1e-9:
            return False

        old = self._transform
        scale_x = new_w / tex_w
        scale_y = new_h / tex_h
        if anchor is None:
            anchor = Point(old.x, old.y)
        local_x = (anchor.x - old.x) / old.scale_x
        local_y = (anchor.y - old.y) / old.scale_y
        self._transform = ImageTransform(
            anchor.x - local_x * scale_x,
            anchor.y - local_y * scale_y,
            scale_x,
            scale_y,
        )
        _LOGGER.debug("Image zoomed to %.1fx%.1f", new_w, new_h)
        return True


__all__ = ["ImageLayer", "fit_image_to_stage"]
