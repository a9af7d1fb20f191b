"""
Resize strategy for crop box edge/corner dragging.
"""

from __future__ import annotations

from collections.abc import Callable

from ...core.geometry import Point, Rect
from ..model import CropBoxModel
from ..solver import solve
from ..utils import CropHandle
from .abstract import InteractionStrategy


class ResizeStrategy(InteractionStrategy):
    """Strategy for resizing the crop box via edge/corner dragging."""

    def __init__(
        self,
        *,
        handle: CropHandle,
        model: CropBoxModel,
        start_box: Rect,
        locked_ratio: float | None,
        on_crop_changed: Callable[[], None],
    ) -> None:
        """Initialize resize strategy.

        Parameters
        ----------
        handle:
            The edge or corner handle being dragged.
        model:
            Crop box model receiving the solved rectangle.
        start_box:
            The crop box when the drag started.
        locked_ratio:
            Ratio captured at drag start, or ``None`` for free resizing.
        on_crop_changed:
            Callback when the crop box changes.
        """
        if not (handle.is_edge or handle.is_corner):
            raise ValueError(f"{handle!r} does not resize the crop box")
        self._handle = handle
        self._model = model
        self._start_box = start_box
        self._locked_ratio = locked_ratio
        self._on_crop_changed = on_crop_changed

    def on_drag(self, delta: Point) -> None:
        """Handle resize drag movement."""
        snapshot = self._model.create_snapshot()
        self._model.box = solve(
            self._handle,
            self._start_box,
            delta,
            self._model.stage,
            self._locked_ratio,
        )
        if self._model.has_changed(snapshot):
            self._on_crop_changed()

    def on_end(self) -> None:
        """Handle end of resize interaction."""
        # No special cleanup needed
