"""cropstage: interactive crop box geometry over a pannable, zoomable image."""

from .core.geometry import ImageTransform, Point, Rect, StageBounds
from .crop.sizing import FixedOutput, Free, RatioLocked, SizingMode
from .crop.utils import CropHandle
from .errors import CropStageError, NoImageLoadedError
from .export import ExportPlan
from .session import CropSession, CropState, LoadFailure

__all__ = [
    "CropHandle",
    "CropSession",
    "CropStageError",
    "CropState",
    "ExportPlan",
    "FixedOutput",
    "Free",
    "ImageTransform",
    "LoadFailure",
    "NoImageLoadedError",
    "Point",
    "RatioLocked",
    "Rect",
    "SizingMode",
    "StageBounds",
]
