"""Pure crop geometry, region model and export rendering."""

from .export import ExportRenderer, SourceImage, compute_output_size, image_to_array
from .geometry import RenderTransform, ViewState, compute_contain_scale
from .region import CropHandle, CropRegion, resolve_aspect_ratio

__all__ = [
    "CropHandle",
    "CropRegion",
    "ExportRenderer",
    "RenderTransform",
    "SourceImage",
    "ViewState",
    "compute_contain_scale",
    "compute_output_size",
    "image_to_array",
    "resolve_aspect_ratio",
]
