"""
Move strategy for dragging the whole crop box.
"""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QPointF

from ....core.region import CropRegion
from .abstract import InteractionStrategy


class MoveStrategy(InteractionStrategy):
    """Strategy for translating the crop box inside the viewport."""

    def __init__(
        self,
        *,
        region_provider: Callable[[], CropRegion | None],
        commit_region: Callable[[CropRegion], bool],
    ) -> None:
        self._region_provider = region_provider
        self._commit_region = commit_region

    def on_drag(self, delta_view: QPointF) -> bool:
        region = self._region_provider()
        if region is None:
            return False
        return self._commit_region(region.move_by(float(delta_view.x()), float(delta_view.y())))
