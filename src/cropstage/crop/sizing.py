"""
Crop sizing modes.

Exactly one mode is active at a time:

* :class:`Free` leaves width and height independent.
* :class:`RatioLocked` keeps ``width / height`` constant.
* :class:`FixedOutput` locks the ratio to ``width / height`` of the requested
  output and forces that output size at export time.

Modes validate themselves on construction so a malformed configuration is
rejected before it can reach a drag.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import InvalidSizingModeError


class SizingMode:
    """Common interface of the sizing modes."""

    name: str = ""

    @property
    def locked_ratio(self) -> float | None:
        """Return the enforced ``width / height`` or ``None`` when free."""
        return None

    @property
    def fixed_size(self) -> tuple[int, int] | None:
        """Return the enforced export size, if any."""
        return None

    def as_mapping(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Free(SizingMode):
    name = "free"

    def as_mapping(self) -> dict[str, Any]:
        return {"mode": self.name}


@dataclass(frozen=True)
class RatioLocked(SizingMode):
    ratio: float
    name = "ratio"

    def __post_init__(self) -> None:
        _require_positive("ratio", self.ratio)

    @property
    def locked_ratio(self) -> float | None:
        return float(self.ratio)

    def as_mapping(self) -> dict[str, Any]:
        return {"mode": self.name, "ratio": float(self.ratio)}


@dataclass(frozen=True)
class FixedOutput(SizingMode):
    width: int
    height: int
    name = "fixed"

    def __post_init__(self) -> None:
        _require_pixel_count("crop_width", self.width)
        _require_pixel_count("crop_height", self.height)

    @property
    def locked_ratio(self) -> float | None:
        return float(self.width) / float(self.height)

    @property
    def fixed_size(self) -> tuple[int, int] | None:
        return (int(self.width), int(self.height))

    def as_mapping(self) -> dict[str, Any]:
        return {"mode": self.name, "crop_width": int(self.width), "crop_height": int(self.height)}


def _require_positive(label: str, value: Any) -> None:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSizingModeError(f"{label} must be a number, got {value!r}") from exc
    if not math.isfinite(number) or number <= 0.0:
        raise InvalidSizingModeError(f"{label} must be a positive finite number, got {value!r}")


def _require_pixel_count(label: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSizingModeError(f"{label} must be a whole number of pixels, got {value!r}")
    _require_positive(label, value)
    if not float(value).is_integer():
        raise InvalidSizingModeError(f"{label} must be a whole number of pixels, got {value!r}")


def sizing_mode_from_mapping(values: Mapping[str, Any] | None) -> SizingMode:
    """Build a sizing mode from an options mapping.

    The mapping uses the keys of the ``crop`` options section: ``mode``
    (``"free"``, ``"ratio"`` or ``"fixed"``), ``ratio``, ``crop_width`` and
    ``crop_height``.  A missing mapping or mode means free cropping.

    Raises
    ------
    InvalidSizingModeError
        For unknown modes and for missing or non-positive parameters.
    """
    if not values:
        return Free()
    mode = values.get("mode", "free")
    if mode == "free":
        return Free()
    if mode == "ratio":
        if values.get("ratio") is None:
            raise InvalidSizingModeError("ratio mode requires a 'ratio' value")
        _require_positive("ratio", values["ratio"])
        return RatioLocked(float(values["ratio"]))
    if mode == "fixed":
        width = values.get("crop_width")
        height = values.get("crop_height")
        if width is None or height is None:
            raise InvalidSizingModeError("fixed mode requires 'crop_width' and 'crop_height'")
        _require_pixel_count("crop_width", width)
        _require_pixel_count("crop_height", height)
        return FixedOutput(int(width), int(height))
    raise InvalidSizingModeError(f"unknown sizing mode {mode!r}")


__all__ = ["FixedOutput", "Free", "RatioLocked", "SizingMode", "sizing_mode_from_mapping"]
