"""
Crop interaction module.

This package provides the pointer state machine for the crop canvas,
implementing Strategy and State patterns for better maintainability.
"""

from .controller import CropInteractionController
from .hit_tester import HitTester
from .scheduler import RedrawScheduler
from .state import InteractionMode, InteractionState
from .utils import cursor_for_handle

__all__ = [
    "CropInteractionController",
    "HitTester",
    "InteractionMode",
    "InteractionState",
    "RedrawScheduler",
    "cursor_for_handle",
]
