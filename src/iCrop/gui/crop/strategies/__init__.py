"""
Interaction strategies for crop mode.

This package implements the Strategy pattern for the pointer gestures
(move, resize, pan), allowing clean separation of logic.
"""

from .abstract import InteractionStrategy
from .move_strategy import MoveStrategy
from .pan_strategy import PanStrategy
from .resize_strategy import ResizeStrategy

__all__ = [
    "InteractionStrategy",
    "MoveStrategy",
    "PanStrategy",
    "ResizeStrategy",
]
