"""
Crop session facade.

:class:`CropSession` is the single object a host embeds: it owns the crop
box model, the image layer and the interaction controller, forwards pointer
and wheel events, and answers geometry queries for preview and export.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass

from PySide6.QtCore import Qt

from .config import DEFAULT_CROP_BOX_SIZE
from .core.geometry import ImageTransform, Point, Rect, StageBounds
from .core.projection import (
    crop_relative_to_image,
    export_region,
    format_size_label,
    output_size,
    preview_placement,
)
from .crop.controller import InteractionController
from .crop.image_layer import ImageLayer
from .crop.model import CropBoxModel
from .crop.overlay import Segment, cover_rects, crop_mesh_lines
from .crop.sizing import SizingMode
from .crop.utils import CropHandle
from .errors import NoImageLoadedError
from .export import ExportPlan, build_export_plan
from .io.image_loader import ImageLoadCoordinator, ImageSource, probe_image_size
from .settings.manager import SettingsManager
from .utils.signal import Signal

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropState:
    """What a renderer needs after a change, emitted by ``CropSession.changed``."""

    box: Rect
    image_transform: ImageTransform
    texture_size: tuple[int, int] | None
    sizing_mode: SizingMode
    show_crop_mesh: bool


@dataclass(frozen=True)
class LoadFailure:
    """Payload of ``CropSession.loadFailed``."""

    source: ImageSource
    message: str


class CropSession:
    """Interactive crop box over a pannable, zoomable image."""

    def __init__(
        self,
        stage: StageBounds,
        *,
        on_redraw: Callable[[], None] | None = None,
        mode: SizingMode | None = None,
        preferred_size: float = DEFAULT_CROP_BOX_SIZE,
        on_cursor_change: Callable[[Qt.CursorShape | None], None] | None = None,
        show_crop_mesh: bool = True,
        executor: Executor | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
    ) -> None:
        """Create a session on *stage*.

        Parameters
        ----------
        stage:
            Size of the interactive surface.
        on_redraw:
            Called after every state change.
        mode:
            Initial sizing mode; free cropping when omitted.
        preferred_size:
            Longer side of the initial crop box.
        on_cursor_change:
            Receives the cursor for the handle under the pointer.
        show_crop_mesh:
            Whether the rule-of-thirds guides are drawn inside the box.
        executor:
            Enables :meth:`request_image` when given.
        dispatch:
            Required with *executor*.  Queues finished loads onto the
            thread that owns the session, typically its event loop.

        Raises
        ------
        ValueError
            If *executor* is given without *dispatch*.
        """
        if executor is not None and dispatch is None:
            raise ValueError("an executor needs a dispatch callable that runs on the session thread")
        self._on_redraw = on_redraw
        self._show_crop_mesh = bool(show_crop_mesh)
        self._model = CropBoxModel(stage, mode, preferred_size)
        self._image = ImageLayer()
        self._controller = InteractionController(
            model=self._model,
            image=self._image,
            on_request_update=self._notify,
            on_cursor_change=on_cursor_change,
        )
        self._loader: ImageLoadCoordinator | None = None
        if executor is not None:
            self._loader = ImageLoadCoordinator(
                executor,
                on_loaded=self._on_image_loaded,
                on_failed=self._on_image_failed,
                dispatch=dispatch,
            )
        self.changed: Signal[CropState] = Signal("changed")
        self.loadFailed: Signal[LoadFailure] = Signal("loadFailed")

    @classmethod
    def from_settings(
        cls,
        settings: SettingsManager,
        **kwargs,
    ) -> CropSession:
        """Build a session from the options held by *settings*."""
        kwargs.setdefault("show_crop_mesh", settings.show_crop_mesh())
        return cls(
            settings.stage_bounds(),
            mode=settings.sizing_mode(),
            preferred_size=settings.default_box_size(),
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def on_pointer_down(self, handle: CropHandle | str | None, pos: Point) -> bool:
        return self._controller.pointer_down(handle, pos)

    def on_pointer_move(self, pos: Point) -> None:
        self._controller.pointer_move(pos)

    def on_pointer_up(self) -> None:
        self._controller.pointer_up()

    def on_pointer_up_outside(self) -> None:
        self._controller.pointer_up_outside()

    def on_pointer_leave(self) -> None:
        self._controller.pointer_leave()

    def on_wheel(self, delta_y: float) -> bool:
        """Forward a wheel step; True means the host should not scroll."""
        return self._controller.wheel(delta_y)

    def hit_test(self, pos: Point) -> CropHandle:
        return self._controller.hit_test(pos)

    @property
    def controller(self) -> InteractionController:
        return self._controller

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def stage(self) -> StageBounds:
        return self._model.stage

    @property
    def sizing_mode(self) -> SizingMode:
        return self._model.sizing_mode

    def current_box(self) -> Rect:
        return self._model.box

    def current_image_transform(self) -> ImageTransform:
        return self._image.transform

    def has_image(self) -> bool:
        return self._image.has_image()

    @property
    def texture_size(self) -> tuple[int, int] | None:
        return self._image.texture_size

    def state(self) -> CropState:
        return CropState(
            box=self._model.box,
            image_transform=self._image.transform,
            texture_size=self._image.texture_size,
            sizing_mode=self._model.sizing_mode,
            show_crop_mesh=self._show_crop_mesh,
        )

    @property
    def show_crop_mesh(self) -> bool:
        return self._show_crop_mesh

    @show_crop_mesh.setter
    def show_crop_mesh(self, show: bool) -> None:
        show = bool(show)
        if show != self._show_crop_mesh:
            self._show_crop_mesh = show
            self._notify()

    def set_sizing_mode(self, mode: SizingMode) -> None:
        """Switch sizing mode; the crop box is re-initialised for it.

        A drag in progress is ended first, since it captured the previous
        mode's ratio.
        """
        if self._controller.is_dragging():
            _LOGGER.debug("Ending active drag before sizing mode change")
            self._controller.pointer_up()
        self._model.set_sizing_mode(mode)
        self._notify()

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------
    def set_image(self, width: int, height: int) -> None:
        """Show an image of native size *width* x *height*.

        The image is fitted to the stage and the crop box is re-initialised.
        """
        if self._controller.is_dragging():
            self._controller.pointer_up()
        self._image.set_image(width, height, self._model.stage)
        self._model.reset()
        _LOGGER.info("Image set to %dx%d", width, height)
        self._notify()

    def load_image(self, source: ImageSource) -> tuple[int, int]:
        """Read the size of *source* and show it; raises ``ImageLoadError``."""
        if self._loader is not None:
            self._loader.cancel()
        width, height = probe_image_size(source)
        self.set_image(width, height)
        return width, height

    def request_image(self, source: ImageSource) -> int:
        """Probe *source* in the background and return the request generation.

        Only the newest request is applied; older ones are discarded.
        """
        if self._loader is None:
            raise RuntimeError("CropSession was created without an executor")
        return self._loader.request(source)

    def clear_image(self) -> None:
        """Remove the image and invalidate pending loads."""
        if self._loader is not None:
            self._loader.cancel()
        if self._controller.is_dragging():
            self._controller.pointer_up()
        self._controller.pointer_leave()
        self._image.clear()
        self._notify()

    # ------------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------------
    def cover_rects(self) -> tuple[Rect, Rect, Rect, Rect]:
        """Return the stage bands dimmed around the crop box."""
        return cover_rects(self._model.stage, self._model.box)

    def mesh_lines(self) -> tuple[Segment, ...]:
        """Return the guide lines to draw, or nothing when the mesh is hidden."""
        if not self._show_crop_mesh:
            return ()
        return crop_mesh_lines(self._model.box)

    # ------------------------------------------------------------------
    # Projection / export
    # ------------------------------------------------------------------
    def _require_texture(self) -> tuple[int, int]:
        size = self._image.texture_size
        if size is None:
            raise NoImageLoadedError("No image is loaded")
        return size

    def projected_image_region(self) -> Rect:
        """Return the crop box in image pixels, unclipped."""
        self._require_texture()
        return crop_relative_to_image(self._model.box, self._image.transform)

    def try_projected_image_region(self) -> Rect | None:
        try:
            return self.projected_image_region()
        except NoImageLoadedError:
            _LOGGER.debug("No image loaded; skipping projection")
            return None

    def export_region(self) -> Rect:
        """Return the projected crop box clipped to the image."""
        tex_w, tex_h = self._require_texture()
        return export_region(self._model.box, self._image.transform, tex_w, tex_h)

    def export_plan(self) -> ExportPlan:
        """Return an immutable snapshot of what an export would render."""
        texture = self._require_texture()
        return build_export_plan(
            self._model.box, self._image.transform, texture, self._model.sizing_mode
        )

    def output_size(self) -> tuple[int, int]:
        self._require_texture()
        return output_size(
            self._model.box, self._image.transform, self._model.sizing_mode.fixed_size
        )

    def try_output_size(self) -> tuple[int, int] | None:
        try:
            return self.output_size()
        except NoImageLoadedError:
            _LOGGER.debug("No image loaded; no output size")
            return None

    def size_label(self) -> str | None:
        """Return the ``"W × H"`` label, or ``None`` without an image."""
        size = self.try_output_size()
        if size is None:
            return None
        return format_size_label(size)

    def preview_placement(self, preview_width: float, preview_height: float) -> Rect | None:
        """Return where the projected region is drawn in a preview surface."""
        region = self.try_projected_image_region()
        if region is None:
            return None
        return preview_placement(region, preview_width, preview_height)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        if self._on_redraw is not None:
            self._on_redraw()
        self.changed.emit(self.state())

    def _on_image_loaded(self, source: ImageSource, width: int, height: int) -> None:
        self.set_image(width, height)

    def _on_image_failed(self, source: ImageSource, message: str) -> None:
        self.loadFailed.emit(LoadFailure(source, message))


__all__ = ["CropSession", "CropState", "LoadFailure"]
