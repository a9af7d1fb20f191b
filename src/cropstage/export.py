"""Immutable export descriptions.

An :class:`ExportPlan` captures everything needed to render the cropped
output at the moment it was requested; later drags or zooms do not affect
a plan that has already been handed to a renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .core.geometry import ImageTransform, Rect
from .core.projection import export_region
from .crop.sizing import SizingMode


@dataclass(frozen=True)
class ExportPlan:
    """Source region in texture pixels plus the requested output size."""

    source_region: Rect
    output_width: int
    output_height: int
    sizing_mode: SizingMode

    def is_empty(self) -> bool:
        """Return True when the crop box does not overlap the image at all."""
        return self.source_region.is_empty()

    @property
    def output_size(self) -> tuple[int, int]:
        return (self.output_width, self.output_height)


def build_export_plan(
    box: Rect,
    transform: ImageTransform,
    texture_size: tuple[int, int],
    mode: SizingMode,
) -> ExportPlan:
    """Return the export plan for *box* over an image drawn with *transform*.

    The source region is the projected crop box clipped to the texture.
    Fixed-output modes force their own size; otherwise the source region is
    rounded up to whole pixels.
    """
    region = export_region(box, transform, texture_size[0], texture_size[1])
    fixed = mode.fixed_size
    if fixed is not None:
        width, height = fixed
    else:
        width, height = math.ceil(region.width), math.ceil(region.height)
    return ExportPlan(region, int(width), int(height), mode)


__all__ = ["ExportPlan", "build_export_plan"]
