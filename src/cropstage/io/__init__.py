"""Image source helpers."""

from .image_loader import ImageLoadCoordinator, ImageSource, probe_image_size

__all__ = ["ImageLoadCoordinator", "ImageSource", "probe_image_size"]
