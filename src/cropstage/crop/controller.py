"""
Crop interaction controller (coordinator).

This module turns pointer and wheel events into crop box and image updates,
delegating the geometry to the hit tester, the constraint solver and the
interaction strategies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from PySide6.QtCore import Qt

from ..core.geometry import Point, Rect
from .hit_tester import HitTester
from .image_layer import ImageLayer
from .model import CropBoxModel
from .strategies import InteractionStrategy, MoveStrategy, PanStrategy, ResizeStrategy
from .utils import CropHandle, cursor_for_handle

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragSession:
    """State captured when a drag starts; immutable for the drag's lifetime."""

    handle: CropHandle
    start_pointer: Point
    start_box: Rect
    locked_ratio: float | None
    start_image_position: Point


class InteractionController:
    """Idle / dragging state machine for crop box and image interactions."""

    def __init__(
        self,
        *,
        model: CropBoxModel,
        image: ImageLayer,
        on_request_update: Callable[[], None],
        on_cursor_change: Callable[[Qt.CursorShape | None], None] | None = None,
    ) -> None:
        """Initialize the interaction controller.

        Parameters
        ----------
        model:
            Crop box model edited by box drags.
        image:
            Image layer edited by pans and wheel zoom.
        on_request_update:
            Callback to request a redraw after any state change.
        on_cursor_change:
            Optional callback to change the cursor, signature:
            (cursor_shape or None to unset).
        """
        self._model = model
        self._image = image
        self._on_request_update = on_request_update
        self._on_cursor_change = on_cursor_change
        self._hit_tester = HitTester()

        self._session: DragSession | None = None
        self._current_strategy: InteractionStrategy | None = None
        self._hovering_image: bool = False
        self._hover_pos: Point | None = None

    # ------------------------------------------------------------------
    # Readouts
    # ------------------------------------------------------------------
    @property
    def active_handle(self) -> CropHandle:
        return self._session.handle if self._session is not None else CropHandle.NONE

    @property
    def session(self) -> DragSession | None:
        return self._session

    def is_dragging(self) -> bool:
        return self._session is not None

    def is_hovering_image(self) -> bool:
        return self._hovering_image

    @property
    def hover_position(self) -> Point | None:
        return self._hover_pos

    def hit_test(self, point: Point) -> CropHandle:
        """Return the handle under *point* for the current box and image."""
        return self._hit_tester.test(point, self._model.box, self._image.displayed_rect())

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def pointer_down(self, handle: CropHandle | str | None, pos: Point) -> bool:
        """Start a drag on *handle*; return True when a drag started."""
        handle = CropHandle.parse(handle)
        if self._session is not None:
            _LOGGER.debug("Ignoring pointer down on %s while dragging", handle.value)
            return False
        if handle is CropHandle.NONE:
            return False
        if handle is CropHandle.IMAGE and not self._image.has_image():
            _LOGGER.debug("Ignoring image drag without an image")
            return False

        self._session = DragSession(
            handle=handle,
            start_pointer=pos,
            start_box=self._model.box,
            locked_ratio=self._model.locked_ratio,
            start_image_position=self._image.transform.position,
        )
        self._current_strategy = self._create_strategy(self._session)
        self._set_cursor(cursor_for_handle(handle))
        return True

    def pointer_move(self, pos: Point) -> None:
        """Continue the active drag, or track hover when idle."""
        if self._session is None:
            self._hover_pos = pos
            self._hovering_image = self._image.contains(pos)
            self._set_cursor(cursor_for_handle(self.hit_test(pos)))
            return

        # The pointer is owned by the drag, not hovering the image.
        self._hover_pos = pos
        self._hovering_image = False
        if self._current_strategy is not None:
            self._current_strategy.on_drag(pos - self._session.start_pointer)

    def pointer_up(self) -> None:
        """End the active drag; the last solved state is kept."""
        self._end_drag()

    def pointer_up_outside(self) -> None:
        """End the active drag when the pointer is released off the stage."""
        self._end_drag()

    def pointer_leave(self) -> None:
        """Forget hover state when the pointer leaves the stage."""
        self._hovering_image = False
        self._hover_pos = None
        if self._session is None:
            self._set_cursor(None)

    def wheel(self, delta_y: float) -> bool:
        """Zoom the image when idle and hovering it.

        Returns True when the wheel event was consumed, in which case the
        host should suppress its default scrolling.
        """
        if self._session is not None:
            _LOGGER.debug("Ignoring wheel while dragging")
            return False
        if not self._hovering_image or not self._image.has_image():
            _LOGGER.debug("Ignoring wheel outside the image")
            return False
        if self._image.zoom(delta_y, self._hover_pos):
            self._on_request_update()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _create_strategy(self, session: DragSession) -> InteractionStrategy:
        if session.handle is CropHandle.IMAGE:
            return PanStrategy(
                image=self._image,
                start_position=session.start_image_position,
                on_image_changed=self._on_request_update,
            )
        if session.handle is CropHandle.MOVE:
            return MoveStrategy(
                model=self._model,
                start_box=session.start_box,
                on_crop_changed=self._on_request_update,
            )
        return ResizeStrategy(
            handle=session.handle,
            model=self._model,
            start_box=session.start_box,
            locked_ratio=session.locked_ratio,
            on_crop_changed=self._on_request_update,
        )

    def _end_drag(self) -> None:
        if self._current_strategy is not None:
            self._current_strategy.on_end()
            self._current_strategy = None
        self._session = None
        self._set_cursor(None)

    def _set_cursor(self, cursor: Qt.CursorShape | None) -> None:
        if self._on_cursor_change is not None:
            self._on_cursor_change(cursor)


__all__ = ["DragSession", "InteractionController"]
