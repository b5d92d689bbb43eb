"""Canvas widget that paints the source image and the crop overlay."""

from __future__ import annotations

import logging

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QColor,
    QImage,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPaintEvent,
    QPen,
    QResizeEvent,
    QWheelEvent,
)
from PySide6.QtWidgets import QWidget

from ...core.region import CropRegion
from ...errors import RenderUnavailableError, UnsupportedAspectRatioError
from ...settings import CropSettings
from ..crop import CropInteractionController

_LOGGER = logging.getLogger(__name__)

_BACKDROP = QColor(32, 32, 32)
_SHADE = QColor(0, 0, 0, 140)
_FRAME = QColor(255, 255, 255)
_HANDLE_FILL = QColor(74, 144, 226)


class CropCanvas(QWidget):
    """Interactive crop surface.

    Keyboard shortcuts: ``+``/``-``/``0`` zoom in, out and reset; ``R`` and
    ``Shift+R`` rotate clockwise and counter-clockwise; ``Esc`` recentres the
    crop region; ``Delete``/``Backspace`` clears it; ``P`` requests a preview.
    Holding ``Space`` turns a drag into a pan.
    """

    statusChanged = Signal(float, float)
    cropRegionChanged = Signal(object)
    previewReady = Signal(QImage)
    previewFailed = Signal(str)

    def __init__(self, parent: QWidget | None = None, *, settings: CropSettings | None = None) -> None:
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._settings = settings or CropSettings()
        self._controller = CropInteractionController(
            on_request_update=self.update,
            on_status_changed=self.statusChanged.emit,
            on_region_changed=self.cropRegionChanged.emit,
            on_cursor_change=self._handle_cursor_change,
            settings=self._settings,
            timer_parent=self,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def controller(self) -> CropInteractionController:
        return self._controller

    def set_image(self, image: QImage | None) -> None:
        """Show *image* and reset the crop state."""
        self._controller.resize_viewport(self.width(), self.height())
        self._controller.set_source_image(image)

    def set_aspect_ratio(self, name: str) -> bool:
        """Apply a preset; returns False when the name was rejected."""
        try:
            self._controller.set_aspect_ratio(name)
        except UnsupportedAspectRatioError:
            return False
        return True

    def request_preview(self) -> QImage | None:
        """Render the preview and announce the outcome through signals."""
        try:
            image = self._controller.request_preview()
        except RenderUnavailableError as exc:
            _LOGGER.warning("Crop preview unavailable: %s", exc)
            self.previewFailed.emit(str(exc))
            return None
        self.previewReady.emit(image)
        return image

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        size = event.size()
        self._controller.resize_viewport(size.width(), size.height())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        self._controller.handle_mouse_press(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._controller.handle_mouse_move(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self._controller.handle_mouse_release(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._controller.handle_pointer_leave()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        self._controller.handle_wheel(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        controller = self._controller
        if key == Qt.Key.Key_Space:
            if not event.isAutoRepeat():
                controller.set_space_held(True)
        elif key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            controller.zoom_in()
        elif key == Qt.Key.Key_Minus:
            controller.zoom_out()
        elif key == Qt.Key.Key_0:
            controller.zoom_reset()
        elif key == Qt.Key.Key_R:
            if event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
                controller.rotate_ccw()
            else:
                controller.rotate_cw()
        elif key == Qt.Key.Key_Escape:
            controller.reset()
        elif key in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            controller.clear()
        elif key == Qt.Key.Key_P:
            self.request_preview()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Space and not event.isAutoRepeat():
            self._controller.set_space_held(False)
            event.accept()
            return
        super().keyReleaseEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.fillRect(self.rect(), _BACKDROP)

            transform = self._controller.render_transform()
            source = self._controller.source_image()
            if transform is not None and source is not None:
                painter.save()
                painter.setTransform(transform.qtransform())
                painter.drawImage(QPointF(0.0, 0.0), source.image)
                painter.restore()

            region = self._controller.crop_region()
            if region is not None:
                self._paint_overlay(painter, region)
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _paint_overlay(self, painter: QPainter, region: CropRegion) -> None:
        crop_rect = QRectF(region.x, region.y, region.width, region.height)
        shade = QPainterPath()
        shade.setFillRule(Qt.FillRule.OddEvenFill)
        shade.addRect(QRectF(self.rect()))
        shade.addRect(crop_rect)
        painter.fillPath(shade, _SHADE)

        painter.setPen(QPen(_FRAME, 1.5))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(crop_rect)

        half = self._settings.handle_size * 0.5
        painter.setPen(QPen(_FRAME, 1.0))
        painter.setBrush(_HANDLE_FILL)
        for cx, cy in region.corners().values():
            painter.drawRect(QRectF(cx - half, cy - half, half * 2.0, half * 2.0))

    def _handle_cursor_change(self, cursor: Qt.CursorShape | None) -> None:
        """Handle cursor change request from the controller."""
        if cursor is None:
            self.unsetCursor()
        else:
            self.setCursor(cursor)
