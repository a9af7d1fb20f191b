"""Pure geometry shared by the crop engine, preview and export."""

from .geometry import EMPTY_RECT, ImageTransform, Point, Rect, StageBounds, clamp, intersect
from .projection import (
    crop_relative_to_image,
    export_region,
    format_size_label,
    image_rect_to_stage,
    output_size,
    preview_placement,
)

__all__ = [
    "EMPTY_RECT",
    "ImageTransform",
    "Point",
    "Rect",
    "StageBounds",
    "clamp",
    "crop_relative_to_image",
    "export_region",
    "format_size_label",
    "image_rect_to_stage",
    "intersect",
    "output_size",
    "preview_placement",
]
