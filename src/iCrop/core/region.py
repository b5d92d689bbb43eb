"""
Crop rectangle data model.

The region is an immutable value expressed in display-space pixels.  Every
mutating operation returns a new, validated :class:`CropRegion` so that a
redraw can never observe a half-updated rectangle.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace

from .. import config
from ..errors import InvalidGeometryError, UnsupportedAspectRatioError


class CropHandle(enum.IntEnum):
    """Enumeration of crop box interaction handles."""

    NONE = 0
    NW = 1
    NE = 2
    SE = 3
    SW = 4
    INSIDE = -1


_LEFT_HANDLES = (CropHandle.NW, CropHandle.SW)
_TOP_HANDLES = (CropHandle.NW, CropHandle.NE)
CORNER_HANDLES = (CropHandle.NW, CropHandle.NE, CropHandle.SE, CropHandle.SW)


def resolve_aspect_ratio(name: str) -> float | None:
    """Return the numeric width/height ratio for a preset *name*.

    Raises :class:`UnsupportedAspectRatioError` for unknown names.
    """
    key = str(name).strip().lower()
    if key not in config.ASPECT_RATIOS:
        raise UnsupportedAspectRatioError(name)
    return config.ASPECT_RATIOS[key]


def _require_finite(*values: float) -> None:
    for value in values:
        if not math.isfinite(value):
            raise InvalidGeometryError(f"non-finite geometry value: {value!r}")


@dataclass(frozen=True)
class CropRegion:
    """Axis-aligned crop rectangle clamped to the viewport bounds."""

    x: float
    y: float
    width: float
    height: float
    viewport_width: float
    viewport_height: float
    aspect_lock: float | None = None
    min_size: float = config.MIN_SIZE

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def centered_at(
        cls,
        cx: float,
        cy: float,
        width: float,
        height: float,
        viewport_width: float,
        viewport_height: float,
        *,
        aspect_lock: float | None = None,
        min_size: float = config.MIN_SIZE,
    ) -> CropRegion:
        """Return a region of the given size centred on ``(cx, cy)``."""
        _require_finite(cx, cy, width, height)
        region = cls(
            x=cx - width * 0.5,
            y=cy - height * 0.5,
            width=width,
            height=height,
            viewport_width=viewport_width,
            viewport_height=viewport_height,
            aspect_lock=aspect_lock,
            min_size=min_size,
        )
        if aspect_lock is not None:
            # Recompute height about the same centre before clamping.
            height = width / aspect_lock
            region = replace(region, y=cy - height * 0.5, height=height)
        return region.clamped()

    @classmethod
    def default(
        cls,
        viewport_width: float,
        viewport_height: float,
        *,
        aspect_lock: float | None = None,
        min_size: float = config.MIN_SIZE,
    ) -> CropRegion:
        """Half-viewport rectangle centred in the viewport.

        Falls back to :data:`config.DEFAULT_REGION_SIZE` while the viewport
        dimensions are unknown.
        """
        if viewport_width > 0.0 and viewport_height > 0.0:
            width = viewport_width * 0.5
            height = viewport_height * 0.5
        else:
            width, height = config.DEFAULT_REGION_SIZE
        return cls.centered_at(
            viewport_width * 0.5,
            viewport_height * 0.5,
            width,
            height,
            viewport_width,
            viewport_height,
            aspect_lock=aspect_lock,
            min_size=min_size,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width * 0.5, self.y + self.height * 0.5)

    def as_rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def corners(self) -> dict[CropHandle, tuple[float, float]]:
        """Return the four corner positions keyed by handle."""
        return {
            CropHandle.NW: (self.x, self.y),
            CropHandle.NE: (self.right, self.y),
            CropHandle.SE: (self.right, self.bottom),
            CropHandle.SW: (self.x, self.bottom),
        }

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def move_by(self, dx: float, dy: float) -> CropRegion:
        """Translate the rectangle, clamping each axis independently."""
        _require_finite(dx, dy)
        return replace(self, x=self.x + dx, y=self.y + dy).clamped()

    def resize_from_handle(self, handle: CropHandle, dx: float, dy: float) -> CropRegion:
        """Drag the corner *handle* by ``(dx, dy)``.

        The two edges incident to the handle move; the opposite edges stay
        fixed.  Width is authoritative under an aspect lock.
        """
        _require_finite(dx, dy)
        if handle not in CORNER_HANDLES:
            return self
        left, top, right, bottom = self.x, self.y, self.right, self.bottom
        vw, vh = self.viewport_width, self.viewport_height
        min_w, min_h = self._minimum_dimensions()

        if handle in _LEFT_HANDLES:
            left = max(0.0, min(left + dx, right - min_w))
        else:
            right = min(vw, max(right + dx, left + min_w))

        if handle in _TOP_HANDLES:
            top = max(0.0, min(top + dy, bottom - min_h))
        else:
            bottom = min(vh, max(bottom + dy, top + min_h))

        if self.aspect_lock is None:
            return replace(self, x=left, y=top, width=right - left, height=bottom - top).clamped()

        ratio = self.aspect_lock
        # Room left for the rectangle once the edges opposite the handle are pinned.
        room_w = right if handle in _LEFT_HANDLES else vw - left
        room_h = bottom if handle in _TOP_HANDLES else vh - top
        width = max(min_w, min(right - left, room_w, room_h * ratio))
        height = width / ratio
        new_left = right - width if handle in _LEFT_HANDLES else left
        new_top = bottom - height if handle in _TOP_HANDLES else top
        return replace(self, x=new_left, y=new_top, width=width, height=height).clamped()

    def with_aspect_lock(self, ratio: float | None) -> CropRegion:
        """Set or clear the aspect lock, recomputing height from width."""
        if ratio is None:
            return replace(self, aspect_lock=None)
        _require_finite(ratio)
        if ratio <= 0.0:
            raise InvalidGeometryError(f"aspect ratio must be positive, got {ratio!r}")
        return replace(self, aspect_lock=float(ratio), height=self.width / float(ratio)).clamped()

    def with_viewport(self, viewport_width: float, viewport_height: float) -> CropRegion:
        """Re-clamp against new viewport bounds."""
        return replace(
            self,
            viewport_width=max(0.0, float(viewport_width)),
            viewport_height=max(0.0, float(viewport_height)),
        ).clamped()

    def reset(self, viewport_width: float | None = None, viewport_height: float | None = None) -> CropRegion:
        """Return the default rectangle for the given (or current) viewport."""
        vw = self.viewport_width if viewport_width is None else viewport_width
        vh = self.viewport_height if viewport_height is None else viewport_height
        return CropRegion.default(vw, vh, aspect_lock=self.aspect_lock, min_size=self.min_size)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _minimum_dimensions(self) -> tuple[float, float]:
        """Smallest width and height that honour ``min_size`` and the lock."""
        if self.aspect_lock is None:
            return self.min_size, self.min_size
        min_w = max(self.min_size, self.min_size * self.aspect_lock)
        return min_w, min_w / self.aspect_lock

    def clamped(self) -> CropRegion:
        """Return a copy satisfying the minimum-size and containment invariants."""
        _require_finite(self.x, self.y, self.width, self.height)
        vw, vh = self.viewport_width, self.viewport_height
        min_w, min_h = self._minimum_dimensions()
        width = max(min_w, self.width)
        height = max(min_h, self.height)
        if vw > 0.0:
            width = max(min_w, min(width, vw))
        if vh > 0.0:
            height = max(min_h, min(height, vh))
        if self.aspect_lock is not None:
            if vh > 0.0:
                width = max(min_w, min(width, vh * self.aspect_lock))
            height = width / self.aspect_lock
        x = self.x
        y = self.y
        if vw > 0.0:
            x = max(0.0, min(vw - width, x))
        if vh > 0.0:
            y = max(0.0, min(vh - height, y))
        return replace(self, x=x, y=y, width=width, height=height)


__all__ = [
    "CORNER_HANDLES",
    "CropHandle",
    "CropRegion",
    "resolve_aspect_ratio",
]
