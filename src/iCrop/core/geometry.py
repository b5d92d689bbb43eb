"""
Coordinate transformation between source-image space and display space.

## Coordinate Systems

**Source Space**: the native pixel grid of the decoded image, origin at the
top-left corner, Y growing downwards.

**Display Space**: the pixel grid of the rendering viewport, also top-left
origin with Y growing downwards.  The crop rectangle lives here.

The forward mapping is ``display = rotate(scale(source) + offset)``:

1. ``scale`` multiplies by the effective scale (contain scale × zoom).
2. ``offset`` centres the drawn image in the viewport and adds the pan.
3. ``rotate`` turns the result by ``rotation_degrees`` about the viewport
   centre.  Positive angles turn clockwise on screen, matching
   :meth:`QTransform.rotate`.

:meth:`RenderTransform.to_source` strictly reverses that order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from PySide6.QtGui import QTransform

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


def compute_contain_scale(
    source_size: tuple[int, int],
    view_width: float,
    view_height: float,
) -> float:
    """Return the scale that fits *source_size* inside the viewport dimensions."""

    src_w, src_h = source_size
    if src_w <= 0 or src_h <= 0:
        return 1.0
    if view_width <= 0.0 or view_height <= 0.0:
        return 1.0
    width_ratio = view_width / float(src_w)
    height_ratio = view_height / float(src_h)
    scale = min(width_ratio, height_ratio)
    return 1.0 if scale <= 0.0 else scale


def rotate_point(point: Point, centre: Point, degrees: float) -> Point:
    """Rotate *point* about *centre* by *degrees* (clockwise on a Y-down surface)."""

    if abs(degrees) <= 1e-12:
        return (float(point[0]), float(point[1]))
    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    dx = float(point[0]) - centre[0]
    dy = float(point[1]) - centre[1]
    return (
        centre[0] + dx * cos_t - dy * sin_t,
        centre[1] + dx * sin_t + dy * cos_t,
    )


def bounding_rect(points: list[Point]) -> Rect:
    """Return the axis-aligned ``(x, y, width, height)`` enclosing *points*."""

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left, top = min(xs), min(ys)
    return (left, top, max(xs) - left, max(ys) - top)


@dataclass(frozen=True)
class ViewState:
    """Zoom, rotation, pan and viewport size of the rendering surface."""

    zoom: float = 1.0
    rotation_degrees: float = 0.0
    viewport_width: float = 0.0
    viewport_height: float = 0.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    @property
    def viewport_centre(self) -> Point:
        return (self.viewport_width * 0.5, self.viewport_height * 0.5)

    def has_viewport(self) -> bool:
        return self.viewport_width > 0.0 and self.viewport_height > 0.0

    def with_viewport(self, width: float, height: float) -> ViewState:
        return replace(self, viewport_width=max(0.0, float(width)), viewport_height=max(0.0, float(height)))

    def with_zoom(self, zoom: float, minimum: float, maximum: float) -> ViewState:
        """Return a copy with *zoom* clamped into ``[minimum, maximum]``."""
        return replace(self, zoom=max(minimum, min(maximum, float(zoom))))

    def with_rotation(self, degrees: float) -> ViewState:
        return replace(self, rotation_degrees=float(degrees))

    def panned_by(self, dx: float, dy: float) -> ViewState:
        return replace(self, pan_x=self.pan_x + float(dx), pan_y=self.pan_y + float(dy))

    def without_pan(self) -> ViewState:
        return replace(self, pan_x=0.0, pan_y=0.0)


@dataclass(frozen=True)
class RenderTransform:
    """Pure mapping between source pixels and display pixels for one view state."""

    source_width: int
    source_height: int
    view: ViewState

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------
    @property
    def contain_scale(self) -> float:
        return compute_contain_scale(
            (self.source_width, self.source_height),
            self.view.viewport_width,
            self.view.viewport_height,
        )

    @property
    def effective_scale(self) -> float:
        """Contain scale multiplied by the zoom factor."""
        return max(self.contain_scale * self.view.zoom, 1e-6)

    @property
    def drawn_size(self) -> tuple[float, float]:
        scale = self.effective_scale
        return (self.source_width * scale, self.source_height * scale)

    @property
    def offset(self) -> Point:
        """Top-left of the drawn (unrotated) image inside the viewport, pan included."""
        drawn_w, drawn_h = self.drawn_size
        return (
            (self.view.viewport_width - drawn_w) * 0.5 + self.view.pan_x,
            (self.view.viewport_height - drawn_h) * 0.5 + self.view.pan_y,
        )

    # ------------------------------------------------------------------
    # Point mapping
    # ------------------------------------------------------------------
    def to_display(self, point: Point) -> Point:
        """Map a source-space point to display space."""
        scale = self.effective_scale
        off_x, off_y = self.offset
        unrotated = (float(point[0]) * scale + off_x, float(point[1]) * scale + off_y)
        return rotate_point(unrotated, self.view.viewport_centre, self.view.rotation_degrees)

    def to_source(self, point: Point) -> Point:
        """Map a display-space point back to source space."""
        unrotated = rotate_point(point, self.view.viewport_centre, -self.view.rotation_degrees)
        scale = self.effective_scale
        off_x, off_y = self.offset
        return ((unrotated[0] - off_x) / scale, (unrotated[1] - off_y) / scale)

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------
    def map_rect_to_source(self, rect: Rect) -> Rect:
        """Return the source-space bounding box of a display rectangle.

        All four corners are mapped because rotation makes the display
        rectangle non-axis-aligned in source space.  The result is clamped
        to the source bounds and may therefore be empty.
        """
        x, y, width, height = rect
        corners = [
            self.to_source((x, y)),
            self.to_source((x + width, y)),
            self.to_source((x + width, y + height)),
            self.to_source((x, y + height)),
        ]
        left, top, box_w, box_h = bounding_rect(corners)
        right = min(float(self.source_width), left + box_w)
        bottom = min(float(self.source_height), top + box_h)
        left = max(0.0, left)
        top = max(0.0, top)
        return (left, top, max(0.0, right - left), max(0.0, bottom - top))

    def image_corners(self) -> list[Point]:
        """Return the drawn image corners in display space (TL, TR, BR, BL)."""
        w = float(self.source_width)
        h = float(self.source_height)
        return [
            self.to_display((0.0, 0.0)),
            self.to_display((w, 0.0)),
            self.to_display((w, h)),
            self.to_display((0.0, h)),
        ]

    def qtransform(self) -> QTransform:
        """Return the forward mapping as a :class:`QTransform` for painting."""
        cx, cy = self.view.viewport_centre
        off_x, off_y = self.offset
        scale = self.effective_scale
        transform = QTransform()
        transform.translate(cx, cy)
        transform.rotate(self.view.rotation_degrees)
        transform.translate(-cx, -cy)
        transform.translate(off_x, off_y)
        transform.scale(scale, scale)
        return transform


__all__ = [
    "Point",
    "Rect",
    "RenderTransform",
    "ViewState",
    "bounding_rect",
    "compute_contain_scale",
    "rotate_point",
]
