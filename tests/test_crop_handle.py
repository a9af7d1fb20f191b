"""Tests for crop handle identifiers and cursor mapping."""

import pytest
from PySide6.QtCore import Qt

from cropstage.crop.utils import CropHandle, cursor_for_handle


def test_parse_accepts_values_and_members():
    assert CropHandle.parse("topLeft") is CropHandle.TOP_LEFT
    assert CropHandle.parse(CropHandle.MOVE) is CropHandle.MOVE
    assert CropHandle.parse(None) is CropHandle.NONE
    assert CropHandle.parse("") is CropHandle.NONE


def test_parse_rejects_unknown_names():
    with pytest.raises(ValueError):
        CropHandle.parse("middle")


def test_handle_groups():
    assert CropHandle.TOP.is_edge
    assert not CropHandle.TOP.is_corner
    assert CropHandle.BOTTOM_LEFT.is_corner
    assert CropHandle.MOVE.moves_box
    assert not CropHandle.IMAGE.moves_box
    assert not CropHandle.NONE.moves_box


@pytest.mark.parametrize(
    ("handle", "cursor"),
    [
        (CropHandle.TOP, Qt.CursorShape.SizeVerCursor),
        (CropHandle.BOTTOM, Qt.CursorShape.SizeVerCursor),
        (CropHandle.LEFT, Qt.CursorShape.SizeHorCursor),
        (CropHandle.RIGHT, Qt.CursorShape.SizeHorCursor),
        (CropHandle.TOP_LEFT, Qt.CursorShape.SizeFDiagCursor),
        (CropHandle.BOTTOM_RIGHT, Qt.CursorShape.SizeFDiagCursor),
        (CropHandle.TOP_RIGHT, Qt.CursorShape.SizeBDiagCursor),
        (CropHandle.BOTTOM_LEFT, Qt.CursorShape.SizeBDiagCursor),
        (CropHandle.MOVE, Qt.CursorShape.SizeAllCursor),
        (CropHandle.IMAGE, Qt.CursorShape.SizeAllCursor),
        (CropHandle.NONE, Qt.CursorShape.ArrowCursor),
    ],
)
def test_cursor_for_handle(handle, cursor):
    assert cursor_for_handle(handle) == cursor
