"""Default configuration values for iCrop."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Crop region geometry (display-space pixels)
# ---------------------------------------------------------------------------

MIN_SIZE: Final[float] = 20.0
# Size of the rectangle spawned when the user presses on empty canvas.
NEW_REGION_SIZE: Final[float] = 100.0
# Fallback used by ``reset`` while the viewport dimensions are still unknown.
DEFAULT_REGION_SIZE: Final[tuple[float, float]] = (100.0, 100.0)

# ---------------------------------------------------------------------------
# Handles and pointer interaction
# ---------------------------------------------------------------------------

HANDLE_SIZE: Final[float] = 8.0
# Grab radius around each corner.
HANDLE_HIT_TOLERANCE: Final[float] = 12.0
PAN_DAMPING: Final[float] = 0.5

# ---------------------------------------------------------------------------
# Zoom and rotation
# ---------------------------------------------------------------------------

ZOOM_IN_FACTOR: Final[float] = 1.2
ZOOM_OUT_FACTOR: Final[float] = 0.8
WHEEL_ZOOM_FACTOR: Final[float] = 1.1
MIN_ZOOM: Final[float] = 0.1
MAX_ZOOM: Final[float] = 5.0
ROTATION_STEP: Final[float] = 90.0

# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

PREVIEW_MAX_DIMENSION: Final[int] = 300
PREVIEW_MIN_DIMENSION: Final[int] = 50

# One redraw per frame at roughly 60 Hz.
REDRAW_INTERVAL_MS: Final[int] = 16

# Named aspect ratios exposed to the UI (width / height).  ``None`` means the
# rectangle can be resized freely.
ASPECT_RATIOS: Final[dict[str, float | None]] = {
    "free": None,
    "square": 1.0,
    "4:3": 4.0 / 3.0,
    "16:9": 16.0 / 9.0,
    "3:2": 3.0 / 2.0,
    "2:3": 2.0 / 3.0,
    "9:16": 9.0 / 16.0,
}
