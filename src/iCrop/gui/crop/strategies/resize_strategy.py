"""
Resize strategy for crop box corner dragging.
"""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QPointF

from ....core.region import CORNER_HANDLES, CropHandle, CropRegion
from .abstract import InteractionStrategy


class ResizeStrategy(InteractionStrategy):
    """Strategy for resizing the crop box via one of its corners."""

    def __init__(
        self,
        *,
        handle: CropHandle,
        region_provider: Callable[[], CropRegion | None],
        commit_region: Callable[[CropRegion], bool],
    ) -> None:
        """Initialize resize strategy.

        Parameters
        ----------
        handle:
            The corner handle being dragged.
        region_provider:
            Callable returning the committed crop region.
        commit_region:
            Callable storing a new region; returns True if it differs.
        """
        if handle not in CORNER_HANDLES:
            raise ValueError(f"resize requires a corner handle, got {handle!r}")
        self._handle = handle
        self._region_provider = region_provider
        self._commit_region = commit_region

    @property
    def handle(self) -> CropHandle:
        return self._handle

    def on_drag(self, delta_view: QPointF) -> bool:
        region = self._region_provider()
        if region is None:
            return False
        resized = region.resize_from_handle(
            self._handle, float(delta_view.x()), float(delta_view.y())
        )
        return self._commit_region(resized)
