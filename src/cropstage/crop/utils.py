"""
Crop handle identifiers and handle-related helpers.

This module contains the handle enumeration shared by the hit tester, the
constraint solver and the interaction controller, plus the mapping from a
logical handle to the cursor shape a host widget should display.
"""

from __future__ import annotations

import enum

from PySide6.QtCore import Qt


class CropHandle(str, enum.Enum):
    """Interactive control points of the crop overlay."""

    NONE = "none"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"
    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    BOTTOM_RIGHT = "bottomRight"
    BOTTOM_LEFT = "bottomLeft"
    MOVE = "move"
    # Pseudo handle: drags the image instead of the crop box.
    IMAGE = "image"

    @property
    def is_edge(self) -> bool:
        return self in _EDGES

    @property
    def is_corner(self) -> bool:
        return self in _CORNERS

    @property
    def moves_box(self) -> bool:
        """Return True for the nine handles that edit the crop box."""
        return self in _EDGES or self in _CORNERS or self is CropHandle.MOVE

    @classmethod
    def parse(cls, value: str | CropHandle | None) -> CropHandle:
        """Return the handle for *value*; ``None`` and ``""`` map to ``NONE``."""
        if value is None or value == "":
            return cls.NONE
        if isinstance(value, cls):
            return value
        return cls(value)


_EDGES = frozenset({CropHandle.TOP, CropHandle.RIGHT, CropHandle.BOTTOM, CropHandle.LEFT})
_CORNERS = frozenset(
    {CropHandle.TOP_LEFT, CropHandle.TOP_RIGHT, CropHandle.BOTTOM_RIGHT, CropHandle.BOTTOM_LEFT}
)


def cursor_for_handle(handle: CropHandle) -> Qt.CursorShape:
    """Return the appropriate cursor shape for a given crop handle."""
    return {
        CropHandle.TOP: Qt.CursorShape.SizeVerCursor,
        CropHandle.BOTTOM: Qt.CursorShape.SizeVerCursor,
        CropHandle.LEFT: Qt.CursorShape.SizeHorCursor,
        CropHandle.RIGHT: Qt.CursorShape.SizeHorCursor,
        CropHandle.TOP_LEFT: Qt.CursorShape.SizeFDiagCursor,
        CropHandle.BOTTOM_RIGHT: Qt.CursorShape.SizeFDiagCursor,
        CropHandle.TOP_RIGHT: Qt.CursorShape.SizeBDiagCursor,
        CropHandle.BOTTOM_LEFT: Qt.CursorShape.SizeBDiagCursor,
        CropHandle.MOVE: Qt.CursorShape.SizeAllCursor,
        CropHandle.IMAGE: Qt.CursorShape.SizeAllCursor,
    }.get(handle, Qt.CursorShape.ArrowCursor)


__all__ = ["CropHandle", "cursor_for_handle"]
