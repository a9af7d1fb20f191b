"""Custom exception hierarchy for cropstage."""

from __future__ import annotations


class CropStageError(Exception):
    """Base class for all custom errors raised by cropstage."""


# --- Geometry preconditions ---

class NoImageLoadedError(CropStageError):
    """Raised when image-relative geometry is requested before an image is set."""


class InvalidSizingModeError(CropStageError, ValueError):
    """Raised when a sizing mode is configured with a non-positive ratio or size."""


# --- Image sources ---

class ImageLoadError(CropStageError):
    """Raised when an image source cannot be opened or identified."""


# --- Settings ---

class SettingsError(CropStageError):
    """Base class for options file related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the options file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when options data fails schema validation."""


# --- CLI ---

class ReplayScriptError(CropStageError):
    """Raised when an event replay script is malformed."""


__all__ = [
    "CropStageError",
    "ImageLoadError",
    "InvalidSizingModeError",
    "NoImageLoadedError",
    "ReplayScriptError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
