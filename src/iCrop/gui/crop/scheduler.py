"""
Frame-coalescing redraw scheduler.

Event handlers only mark the display dirty.  The scheduler runs the
``recompute`` callback followed by the ``repaint`` callback once per tick, no
matter how many mutations were recorded in between.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer

from ...config import REDRAW_INTERVAL_MS

_LOGGER = logging.getLogger(__name__)


class RedrawScheduler:
    """Coalesces redraw requests into a single deferred recompute + repaint."""

    def __init__(
        self,
        *,
        recompute: Callable[[], None],
        repaint: Callable[[], None],
        interval_ms: int = REDRAW_INTERVAL_MS,
        timer_parent: QObject | None = None,
    ) -> None:
        """Initialize the scheduler.

        Parameters
        ----------
        recompute:
            Pull-based refresh of the derived display state.
        repaint:
            Callback that asks the surface to repaint.
        interval_ms:
            Delay of the single-shot frame timer.
        timer_parent:
            Parent QObject for the timer (optional).
        """
        self._recompute = recompute
        self._repaint = repaint
        self._pending = False
        self._frames = 0

        self._timer = QTimer(timer_parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(interval_ms)))
        self._timer.timeout.connect(self.flush)

    def schedule(self) -> None:
        """Mark the display dirty; starts the frame timer if it is idle."""
        if self._pending:
            return
        self._pending = True
        self._timer.start()

    def is_pending(self) -> bool:
        return self._pending

    def frame_count(self) -> int:
        """Return how many redraws have been executed so far."""
        return self._frames

    def cancel(self) -> None:
        self._pending = False
        self._timer.stop()

    def flush(self) -> bool:
        """Run a pending redraw now.  Returns False when nothing was pending."""
        self._timer.stop()
        if not self._pending:
            return False
        self._pending = False
        self._frames += 1
        self._recompute()
        self._repaint()
        _LOGGER.debug("Redraw frame %d flushed", self._frames)
        return True
