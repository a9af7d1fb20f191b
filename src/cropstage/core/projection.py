"""
Projection of stage-space crop geometry into image space.

The crop box lives in stage coordinates while the image may be panned and
zoomed independently.  Preview and export both sample the source texture,
so they need the crop box expressed in unscaled texture coordinates.

## Spaces

**Stage space**: the interactive surface.  The crop box and the displayed
image bounds are expressed here.

**Image space**: texture pixels of the source image, origin at its top-left
corner, unaffected by the current zoom.
"""

from __future__ import annotations

import math

from .geometry import ImageTransform, Rect, intersect


def crop_relative_to_image(box: Rect, transform: ImageTransform) -> Rect:
    """Map the stage-space *box* into image space.

    Parameters
    ----------
    box:
        Crop rectangle in stage coordinates.
    transform:
        Current placement of the displayed image.

    Returns
    -------
    Rect
        The crop rectangle in unscaled texture coordinates.  The result is
        not clipped; it may extend beyond the texture.
    """
    return Rect(
        (box.x - transform.x) / transform.scale_x,
        (box.y - transform.y) / transform.scale_y,
        box.width / transform.scale_x,
        box.height / transform.scale_y,
    )


def image_rect_to_stage(rect: Rect, transform: ImageTransform) -> Rect:
    """Inverse of :func:`crop_relative_to_image`."""
    return Rect(
        rect.x * transform.scale_x + transform.x,
        rect.y * transform.scale_y + transform.y,
        rect.width * transform.scale_x,
        rect.height * transform.scale_y,
    )


def export_region(
    box: Rect,
    transform: ImageTransform,
    texture_width: float,
    texture_height: float,
) -> Rect:
    """Return the sampled texture region, clipped to the texture bounds.

    A crop box that does not overlap the image at all yields the degenerate
    ``Rect(0, 0, 0, 0)``.
    """
    relative = crop_relative_to_image(box, transform)
    return intersect(relative, Rect(0.0, 0.0, float(texture_width), float(texture_height)))


def preview_placement(region: Rect, preview_width: float, preview_height: float) -> Rect:
    """Return where *region* is drawn inside a preview surface.

    The region keeps its own size when it fits; otherwise it is shrunk along
    its limiting axis while preserving its aspect ratio.  The result is
    centred in the preview.
    """
    width = region.width
    height = region.height
    if width <= 0.0 or height <= 0.0:
        return Rect(preview_width * 0.5, preview_height * 0.5, 0.0, 0.0)
    if width / height > preview_width / preview_height:
        if width > preview_width:
            factor = width / preview_width
            width = preview_width
            height = height / factor
    elif height > preview_height:
        factor = height / preview_height
        height = preview_height
        width = width / factor
    return Rect((preview_width - width) / 2, (preview_height - height) / 2, width, height)


def output_size(
    box: Rect,
    transform: ImageTransform,
    fixed_size: tuple[int, int] | None = None,
) -> tuple[int, int]:
    """Return the pixel size an export of *box* would produce.

    Fixed-output sizing overrides the projected size entirely; otherwise the
    projected size is rounded up to whole pixels.
    """
    if fixed_size is not None:
        return (int(fixed_size[0]), int(fixed_size[1]))
    width = box.width / transform.scale_x
    height = box.height / transform.scale_y
    return (math.ceil(width), math.ceil(height))


def format_size_label(size: tuple[int, int]) -> str:
    """Render an output size the way the crop overlay labels it."""
    return f"{size[0]} × {size[1]}"


__all__ = [
    "crop_relative_to_image",
    "export_region",
    "format_size_label",
    "image_rect_to_stage",
    "output_size",
    "preview_placement",
]
