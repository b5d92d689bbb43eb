"""
Pan strategy for shifting the viewport content.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from PySide6.QtCore import QPointF

from ....config import PAN_DAMPING
from ....core.geometry import ViewState
from ....errors import InvalidGeometryError
from .abstract import InteractionStrategy


class PanStrategy(InteractionStrategy):
    """Strategy for panning the view; the crop region is left untouched."""

    def __init__(
        self,
        *,
        view_provider: Callable[[], ViewState],
        commit_view: Callable[[ViewState], bool],
        damping: float = PAN_DAMPING,
    ) -> None:
        self._view_provider = view_provider
        self._commit_view = commit_view
        self._damping = float(damping)

    def on_drag(self, delta_view: QPointF) -> bool:
        dx = float(delta_view.x()) * self._damping
        dy = float(delta_view.y()) * self._damping
        if not (math.isfinite(dx) and math.isfinite(dy)):
            raise InvalidGeometryError(f"non-finite pan delta: {(dx, dy)!r}")
        if dx == 0.0 and dy == 0.0:
            return False
        return self._commit_view(self._view_provider().panned_by(dx, dy))
