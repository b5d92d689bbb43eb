"""Qt widgets hosting the crop engine."""

from .crop_canvas import CropCanvas

__all__ = ["CropCanvas"]
