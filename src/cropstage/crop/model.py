"""
Crop box model for state management.

This module owns the crop rectangle, the stage it lives on and the active
sizing mode, without any direct UI interaction.
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_CROP_BOX_SIZE, MIN_SIZE
from ..core.geometry import Rect, StageBounds
from .sizing import Free, SizingMode

_LOGGER = logging.getLogger(__name__)


def initial_box(
    stage: StageBounds,
    mode: SizingMode,
    preferred_size: float = DEFAULT_CROP_BOX_SIZE,
) -> Rect:
    """Return the centred crop box a fresh session starts with.

    Free cropping starts from a square of *preferred_size*.  Under a ratio
    lock the longer side is *preferred_size* and the shorter side follows
    from the ratio; when the shorter side would end up at or below
    ``MIN_SIZE`` it is pinned there and the longer side is recomputed, so
    even extreme ratios respect the minimum size.  The box is not clamped to
    the stage.
    """
    width = float(preferred_size)
    height = float(preferred_size)
    ratio = mode.locked_ratio
    if ratio is not None:
        if ratio >= 1:
            width = preferred_size
            height = preferred_size / ratio
            if height <= MIN_SIZE:
                height = MIN_SIZE
                width = MIN_SIZE * ratio
        else:
            height = preferred_size
            width = preferred_size * ratio
            if width <= MIN_SIZE:
                width = MIN_SIZE
                height = MIN_SIZE / ratio
    x = (stage.width - width) / 2
    y = (stage.height - height) / 2
    return Rect(x, y, width, height)


class CropBoxModel:
    """Manages the crop rectangle and the sizing mode it obeys."""

    def __init__(
        self,
        stage: StageBounds,
        mode: SizingMode | None = None,
        preferred_size: float = DEFAULT_CROP_BOX_SIZE,
    ) -> None:
        self._stage = stage
        self._mode: SizingMode = mode if mode is not None else Free()
        self._preferred_size = float(preferred_size)
        self._box = initial_box(self._stage, self._mode, self._preferred_size)

    @property
    def stage(self) -> StageBounds:
        return self._stage

    @property
    def box(self) -> Rect:
        return self._box

    @box.setter
    def box(self, value: Rect) -> None:
        self._box = value

    @property
    def sizing_mode(self) -> SizingMode:
        return self._mode

    @property
    def locked_ratio(self) -> float | None:
        return self._mode.locked_ratio

    @property
    def preferred_size(self) -> float:
        return self._preferred_size

    def set_sizing_mode(self, mode: SizingMode) -> Rect:
        """Switch to *mode* and re-derive the crop box from scratch."""
        self._mode = mode
        _LOGGER.info("Sizing mode changed to %s", mode.name)
        return self.reset()

    def reset(self) -> Rect:
        """Re-initialise the crop box for the current sizing mode."""
        self._box = initial_box(self._stage, self._mode, self._preferred_size)
        return self._box

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def create_snapshot(self) -> tuple[float, float, float, float]:
        """Return a tuple describing the current crop rectangle."""
        return self._box.as_tuple()

    def restore_snapshot(self, snapshot: tuple[float, float, float, float]) -> None:
        """Restore the crop rectangle from *snapshot*."""
        self._box = Rect(*snapshot)

    def has_changed(self, snapshot: tuple[float, float, float, float]) -> bool:
        """Return True when the current crop differs from *snapshot*."""
        current = self.create_snapshot()
        return any(abs(a - b) > 1e-9 for a, b in zip(snapshot, current, strict=True))


__all__ = ["CropBoxModel", "initial_box"]
