"""
Hit testing logic for crop handles.

This module contains pure geometric functions for detecting which crop handle
(if any) is under a given point, with no dependencies on Qt events or UI state.
"""

from __future__ import annotations

import math

from PySide6.QtCore import QPointF

from ...config import HANDLE_HIT_TOLERANCE
from ...core.region import CropHandle, CropRegion


class HitTester:
    """Pure-function hit tester for crop box handles."""

    def __init__(self, hit_padding: float = HANDLE_HIT_TOLERANCE) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        hit_padding:
            Distance threshold for detecting corner hits, in viewport pixels.
        """
        self._hit_padding = float(hit_padding)

    @property
    def hit_padding(self) -> float:
        return self._hit_padding

    def test(self, point: QPointF, region: CropRegion | None) -> CropHandle:
        """Determine which crop handle (if any) is under the cursor.

        Corners win over the interior so a handle remains grabbable even when
        its tolerance disc overlaps the rectangle.

        Returns
        -------
        CropHandle:
            A corner handle, ``CropHandle.INSIDE`` or ``CropHandle.NONE``.
        """
        if region is None:
            return CropHandle.NONE

        px, py = point.x(), point.y()
        best_handle = CropHandle.NONE
        best_distance = math.inf
        for handle, (cx, cy) in region.corners().items():
            distance = math.hypot(px - cx, py - cy)
            if distance <= self._hit_padding and distance < best_distance:
                best_handle = handle
                best_distance = distance
        if best_handle != CropHandle.NONE:
            return best_handle

        if region.contains(px, py):
            return CropHandle.INSIDE

        return CropHandle.NONE
