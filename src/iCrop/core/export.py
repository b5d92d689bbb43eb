"""Render the committed crop region from the full-resolution source image."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QImage, QTransform

from .. import config
from ..errors import RenderUnavailableError
from .geometry import RenderTransform, ViewState
from .region import CropRegion

_LOGGER = logging.getLogger(__name__)

_SNAP_EPSILON = 1e-6


@dataclass(frozen=True)
class SourceImage:
    """Decoded raster supplied by the surrounding application."""

    image: QImage

    @property
    def width(self) -> int:
        return self.image.width()

    @property
    def height(self) -> int:
        return self.image.height()

    def is_null(self) -> bool:
        return self.image.isNull() or self.width <= 0 or self.height <= 0

    @classmethod
    def from_array(cls, array: np.ndarray) -> SourceImage:
        """Wrap an ``H×W×3`` or ``H×W×4`` ``uint8`` array."""

        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"expected an HxWx3 or HxWx4 array, got shape {array.shape}")
        data = np.ascontiguousarray(array, dtype=np.uint8)
        height, width, channels = data.shape
        fmt = QImage.Format.Format_RGB888 if channels == 3 else QImage.Format.Format_RGBA8888
        # ``copy`` detaches the QImage from the numpy buffer it was built on.
        image = QImage(data.data, width, height, data.strides[0], fmt).copy()
        return cls(image)


def image_to_array(image: QImage) -> np.ndarray:
    """Return an ``H×W×4`` RGBA ``uint8`` copy of *image*."""

    img = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = img.width()
    height = img.height()
    ptr = img.constBits()
    byte_count = img.sizeInBytes()
    if hasattr(ptr, "setsize"):
        ptr.setsize(byte_count)
    bytes_per_line = img.bytesPerLine()
    arr = np.frombuffer(ptr, dtype=np.uint8, count=byte_count).reshape((height, bytes_per_line))
    return arr[:, : width * 4].reshape((height, width, 4)).copy()


def compute_output_size(
    crop_width: float,
    crop_height: float,
    max_dimension: int = config.PREVIEW_MAX_DIMENSION,
    min_dimension: int = config.PREVIEW_MIN_DIMENSION,
) -> tuple[int, int]:
    """Fit the crop aspect into *max_dimension*, flooring each side at *min_dimension*."""

    if crop_width <= 0.0 or crop_height <= 0.0:
        return (min_dimension, min_dimension)
    scale = float(max_dimension) / max(crop_width, crop_height)
    out_w = max(min_dimension, int(round(crop_width * scale)))
    out_h = max(min_dimension, int(round(crop_height * scale)))
    return (out_w, out_h)


def source_pixel_rect(transform: RenderTransform, region: CropRegion) -> QRect:
    """Return the integer source rectangle covering *region*."""

    left, top, width, height = transform.map_rect_to_source(region.as_rect())
    # Snap away trig noise (e.g. cos(90°) != 0) before rounding outwards.
    px_left = int(math.floor(left + _SNAP_EPSILON))
    px_top = int(math.floor(top + _SNAP_EPSILON))
    px_right = min(transform.source_width, int(math.ceil(left + width - _SNAP_EPSILON)))
    px_bottom = min(transform.source_height, int(math.ceil(top + height - _SNAP_EPSILON)))
    return QRect(px_left, px_top, max(0, px_right - px_left), max(0, px_bottom - px_top))


class ExportRenderer:
    """Produce cropped rasters from the committed view and crop state."""

    def __init__(
        self,
        *,
        preview_max_dimension: int = config.PREVIEW_MAX_DIMENSION,
        preview_min_dimension: int = config.PREVIEW_MIN_DIMENSION,
    ) -> None:
        self._preview_max = int(preview_max_dimension)
        self._preview_min = int(preview_min_dimension)

    def render(
        self,
        source: SourceImage | None,
        view: ViewState,
        region: CropRegion | None,
        *,
        preview: bool = True,
    ) -> QImage:
        """Return the cropped image.

        With ``preview=True`` the result is scaled to the preview bounds;
        otherwise the extracted source pixels are returned at full resolution.

        Raises
        ------
        RenderUnavailableError
            If there is no source image or crop region, the region does not
            overlap the image, or the output surface cannot be allocated.
        """
        if source is None or source.is_null():
            raise RenderUnavailableError("no source image loaded")
        if region is None:
            raise RenderUnavailableError("no crop region defined")
        if not view.has_viewport():
            raise RenderUnavailableError("viewport size is unknown")

        transform = RenderTransform(source.width, source.height, view)
        rect = source_pixel_rect(transform, region)
        if rect.isEmpty():
            raise RenderUnavailableError("crop region does not overlap the source image")

        extracted = source.image.copy(rect)
        if extracted.isNull():
            raise RenderUnavailableError("failed to extract the source sub-region")

        # The extracted pixels are rotated as a whole so the output shows the
        # content as it appeared in the rotated viewport.
        degrees = math.fmod(view.rotation_degrees, 360.0)
        if abs(degrees) > 1e-9:
            rotated = extracted.transformed(
                QTransform().rotate(degrees),
                Qt.TransformationMode.SmoothTransformation,
            )
        else:
            rotated = extracted

        if not preview:
            result = rotated.convertToFormat(QImage.Format.Format_ARGB32)
        else:
            out_w, out_h = compute_output_size(
                region.width, region.height, self._preview_max, self._preview_min
            )
            result = rotated.scaled(
                out_w,
                out_h,
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            ).convertToFormat(QImage.Format.Format_ARGB32)

        if result.isNull():
            raise RenderUnavailableError("could not allocate the output surface")
        _LOGGER.debug(
            "Rendered crop source=%s output=%dx%d rotation=%.2f",
            (rect.x(), rect.y(), rect.width(), rect.height()),
            result.width(),
            result.height(),
            degrees,
        )
        return result


__all__ = [
    "ExportRenderer",
    "SourceImage",
    "compute_output_size",
    "image_to_array",
    "source_pixel_rect",
]
