"""Interactive crop engine: box model, drag constraints and pointer handling."""

from .controller import DragSession, InteractionController
from .hit_tester import HitTester
from .image_layer import ImageLayer, fit_image_to_stage
from .model import CropBoxModel, initial_box
from .overlay import cover_rects, crop_mesh_lines
from .sizing import FixedOutput, Free, RatioLocked, SizingMode, sizing_mode_from_mapping
from .solver import solve
from .utils import CropHandle, cursor_for_handle

__all__ = [
    "CropBoxModel",
    "CropHandle",
    "DragSession",
    "FixedOutput",
    "Free",
    "HitTester",
    "ImageLayer",
    "InteractionController",
    "RatioLocked",
    "SizingMode",
    "cover_rects",
    "crop_mesh_lines",
    "cursor_for_handle",
    "fit_image_to_stage",
    "initial_box",
    "sizing_mode_from_mapping",
    "solve",
]
