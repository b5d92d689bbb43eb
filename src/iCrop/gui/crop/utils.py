"""Qt helpers shared by the crop interaction modules."""

from __future__ import annotations

from PySide6.QtCore import Qt

from ...core.region import CropHandle


def cursor_for_handle(handle: CropHandle) -> Qt.CursorShape:
    """Return the appropriate cursor shape for a given crop handle."""
    return {
        CropHandle.NW: Qt.CursorShape.SizeFDiagCursor,
        CropHandle.SE: Qt.CursorShape.SizeFDiagCursor,
        CropHandle.NE: Qt.CursorShape.SizeBDiagCursor,
        CropHandle.SW: Qt.CursorShape.SizeBDiagCursor,
        CropHandle.INSIDE: Qt.CursorShape.OpenHandCursor,
    }.get(handle, Qt.CursorShape.CrossCursor)
