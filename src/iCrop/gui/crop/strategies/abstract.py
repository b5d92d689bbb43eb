"""
Abstract base class for crop interaction strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from PySide6.QtCore import QPointF


class InteractionStrategy(ABC):
    """Base class for crop interaction strategies (move, resize, pan)."""

    @abstractmethod
    def on_drag(self, delta_view: QPointF) -> bool:
        """Handle drag movement in viewport coordinates.

        Parameters
        ----------
        delta_view:
            Movement since the previous pointer event, in viewport pixels.

        Returns
        -------
        bool:
            True if any spatial state changed.
        """

    def on_end(self) -> None:
        """Handle end of interaction (pointer release or leave)."""
