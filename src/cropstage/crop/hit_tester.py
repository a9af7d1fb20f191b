"""
Hit testing logic for crop handles.

This module contains pure geometric functions for detecting which crop handle
(if any) is under a given stage point, with no dependencies on pointer events
or UI state.
"""

from __future__ import annotations

from ..config import (
    CORNER_HANDLE_SIZE,
    EDGE_HANDLE_INSET,
    EDGE_HANDLE_THICKNESS,
    HANDLE_OFFSET,
    MOVE_REGION_INSET,
)
from ..core.geometry import Point, Rect
from .utils import CropHandle


class HitTester:
    """Pure-function hit tester for crop box handles."""

    def __init__(
        self,
        corner_size: float = CORNER_HANDLE_SIZE,
        edge_thickness: float = EDGE_HANDLE_THICKNESS,
    ) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        corner_size:
            Side length of the square corner handles, in stage units.
        edge_thickness:
            Thickness of the edge handle strips, in stage units.
        """
        self._corner_size = float(corner_size)
        self._edge_thickness = float(edge_thickness)

    def handle_regions(self, box: Rect) -> list[tuple[CropHandle, Rect]]:
        """Return the hit area of every box handle, top-most first."""
        x, y, w, h = box.as_tuple()
        corner = self._corner_size
        edge = self._edge_thickness
        off = HANDLE_OFFSET
        inset = EDGE_HANDLE_INSET
        far_x = x + w - corner + off
        far_y = y + h - corner + off
        return [
            (
                CropHandle.MOVE,
                Rect(
                    x + MOVE_REGION_INSET,
                    y + MOVE_REGION_INSET,
                    w - 2 * MOVE_REGION_INSET,
                    h - 2 * MOVE_REGION_INSET,
                ),
            ),
            (CropHandle.TOP_LEFT, Rect(x - off, y - off, corner, corner)),
            (CropHandle.TOP_RIGHT, Rect(far_x, y - off, corner, corner)),
            (CropHandle.BOTTOM_RIGHT, Rect(far_x, far_y, corner, corner)),
            (CropHandle.BOTTOM_LEFT, Rect(x - off, far_y, corner, corner)),
            (CropHandle.TOP, Rect(x + inset, y - off, w - 2 * inset, edge)),
            (CropHandle.RIGHT, Rect(x + w - edge + off, y + inset, edge, h - 2 * inset)),
            (CropHandle.BOTTOM, Rect(x + inset, y + h - edge + off, w - 2 * inset, edge)),
            (CropHandle.LEFT, Rect(x - off, y + inset, edge, h - 2 * inset)),
        ]

    def test(self, point: Point, box: Rect, image_bounds: Rect | None = None) -> CropHandle:
        """Determine which handle (if any) is under *point*.

        Parameters
        ----------
        point:
            The point to test in stage coordinates.
        box:
            The current crop box.
        image_bounds:
            Displayed image bounds, or ``None`` when no image is loaded.

        Returns
        -------
        CropHandle:
            The handle that was hit, ``CropHandle.IMAGE`` when only the image
            is under the point, or ``CropHandle.NONE``.
        """
        for handle, region in self.handle_regions(box):
            if region.contains(point):
                return handle
        if image_bounds is not None and image_bounds.contains(point):
            return CropHandle.IMAGE
        return CropHandle.NONE
