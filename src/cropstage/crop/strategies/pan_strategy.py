"""
Pan strategy for dragging the image underneath the crop box.
"""

from __future__ import annotations

from collections.abc import Callable

from ...core.geometry import Point
from ..image_layer import ImageLayer
from .abstract import InteractionStrategy


class PanStrategy(InteractionStrategy):
    """Strategy for panning the displayed image.

    Panning is unconstrained: the image may be dragged partly or completely
    away from the crop box.
    """

    def __init__(
        self,
        *,
        image: ImageLayer,
        start_position: Point,
        on_image_changed: Callable[[], None],
    ) -> None:
        """Initialize pan strategy.

        Parameters
        ----------
        image:
            Image layer whose position is updated.
        start_position:
            Top-left corner of the displayed image when the drag started.
        on_image_changed:
            Callback when the image position changes.
        """
        self._image = image
        self._start_position = start_position
        self._on_image_changed = on_image_changed

    def on_drag(self, delta: Point) -> None:
        """Handle pan drag movement."""
        previous = self._image.transform.position
        target = self._start_position + delta
        if target == previous:
            return
        self._image.pan_to(target)
        self._on_image_changed()

    def on_end(self) -> None:
        """Handle end of pan interaction."""
        # No special cleanup needed
