"""
Move strategy: translate the whole crop box.
"""

from __future__ import annotations

from collections.abc import Callable

from ...core.geometry import Point, Rect
from ..model import CropBoxModel
from ..solver import solve
from ..utils import CropHandle
from .abstract import InteractionStrategy


class MoveStrategy(InteractionStrategy):
    """Strategy for moving the crop box without changing its size."""

    def __init__(
        self,
        *,
        model: CropBoxModel,
        start_box: Rect,
        on_crop_changed: Callable[[], None],
    ) -> None:
        self._model = model
        self._start_box = start_box
        self._on_crop_changed = on_crop_changed

    def on_drag(self, delta: Point) -> None:
        """Handle move drag movement; the box stays inside the stage margin."""
        snapshot = self._model.create_snapshot()
        self._model.box = solve(CropHandle.MOVE, self._start_box, delta, self._model.stage)
        if self._model.has_changed(snapshot):
            self._on_crop_changed()

    def on_end(self) -> None:
        """Handle end of move interaction."""
        # No special cleanup needed
