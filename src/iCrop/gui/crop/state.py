"""Pointer interaction state for the crop controller."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from PySide6.QtCore import QPointF

from ...core.region import CropHandle


class InteractionMode(enum.Enum):
    """The four modes of the pointer state machine."""

    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"
    PANNING = "panning"


@dataclass(frozen=True)
class InteractionState:
    """Per-gesture state; created on pointer-down and dropped on pointer-up."""

    mode: InteractionMode = InteractionMode.IDLE
    active_handle: CropHandle = CropHandle.NONE
    anchor_point: QPointF | None = None

    @classmethod
    def idle(cls) -> InteractionState:
        return cls()

    def is_idle(self) -> bool:
        return self.mode is InteractionMode.IDLE

    def moved_to(self, point: QPointF) -> InteractionState:
        return InteractionState(self.mode, self.active_handle, QPointF(point))
