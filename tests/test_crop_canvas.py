"""Tests for the CropCanvas widget."""

import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QColor, QImage, QKeyEvent, QMouseEvent

from iCrop.gui.crop.state import InteractionMode
from iCrop.gui.widgets import CropCanvas


def key_event(key, modifiers=Qt.KeyboardModifier.NoModifier, event_type=QEvent.Type.KeyPress, text=""):
    return QKeyEvent(event_type, key, modifiers, text)


@pytest.fixture
def canvas(qapp):
    widget = CropCanvas()
    widget.resize(800, 600)
    image = QImage(1600, 1200, QImage.Format.Format_ARGB32)
    image.fill(QColor(90, 120, 200))
    widget.set_image(image)
    widget.controller().scheduler.flush()
    yield widget
    widget.deleteLater()


def test_set_image_initialises_region(canvas):
    region = canvas.controller().crop_region()
    assert region.as_rect() == pytest.approx((200.0, 150.0, 400.0, 300.0))


def test_grab_paints_without_error(canvas):
    pixmap = canvas.grab()
    assert not pixmap.isNull()
    assert (pixmap.width(), pixmap.height()) == (800, 600)


def test_zoom_keys(canvas):
    statuses = []
    canvas.statusChanged.connect(lambda zoom, rotation: statuses.append((zoom, rotation)))
    canvas.keyPressEvent(key_event(Qt.Key.Key_Plus, text="+"))
    assert canvas.controller().view_state().zoom == pytest.approx(1.2)
    assert statuses[-1] == (pytest.approx(120.0), 0.0)

    canvas.keyPressEvent(key_event(Qt.Key.Key_0, text="0"))
    assert canvas.controller().view_state().zoom == 1.0


def test_rotation_keys(canvas):
    canvas.keyPressEvent(key_event(Qt.Key.Key_R, text="r"))
    assert canvas.controller().rotation_degrees() == 90.0
    canvas.keyPressEvent(key_event(Qt.Key.Key_R, Qt.KeyboardModifier.ShiftModifier, text="R"))
    canvas.keyPressEvent(key_event(Qt.Key.Key_R, Qt.KeyboardModifier.ShiftModifier, text="R"))
    assert canvas.controller().rotation_degrees() == 270.0


def test_delete_and_escape_keys(canvas):
    regions = []
    canvas.cropRegionChanged.connect(regions.append)
    canvas.keyPressEvent(key_event(Qt.Key.Key_Delete))
    assert canvas.controller().crop_region() is None
    assert regions[-1] is None
    canvas.keyPressEvent(key_event(Qt.Key.Key_Escape))
    assert canvas.controller().crop_region() is not None


def test_space_key_toggles_panning(canvas):
    canvas.keyPressEvent(key_event(Qt.Key.Key_Space, text=" "))
    canvas.controller().handle_pointer_press(QPointF(400, 300))
    assert canvas.controller().mode is InteractionMode.PANNING
    canvas.controller().handle_pointer_release()
    canvas.keyReleaseEvent(key_event(Qt.Key.Key_Space, event_type=QEvent.Type.KeyRelease, text=" "))
    canvas.controller().handle_pointer_press(QPointF(400, 300))
    assert canvas.controller().mode is InteractionMode.DRAGGING


def mouse_event(event_type, x, y, button, buttons):
    pos = QPointF(x, y)
    return QMouseEvent(event_type, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


def test_mouse_drag_moves_region(canvas):
    left = Qt.MouseButton.LeftButton
    canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, 400, 300, left, left))
    canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, 430, 320, Qt.MouseButton.NoButton, left))
    canvas.mouseReleaseEvent(
        mouse_event(QEvent.Type.MouseButtonRelease, 430, 320, left, Qt.MouseButton.NoButton)
    )
    region = canvas.controller().crop_region()
    assert (region.x, region.y) == pytest.approx((230.0, 170.0))
    assert canvas.controller().mode is InteractionMode.IDLE


def test_right_button_is_ignored(canvas):
    right = Qt.MouseButton.RightButton
    canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, 400, 300, right, right))
    assert canvas.controller().mode is InteractionMode.IDLE


def test_preview_signals(canvas):
    ready = []
    canvas.previewReady.connect(ready.append)
    image = canvas.request_preview()
    assert image is not None
    assert (image.width(), image.height()) == (300, 225)
    assert len(ready) == 1


def test_preview_failure_is_reported(qapp):
    widget = CropCanvas()
    widget.resize(400, 300)
    failed = []
    widget.previewFailed.connect(failed.append)
    assert widget.request_preview() is None
    assert len(failed) == 1
    widget.deleteLater()


def test_set_aspect_ratio_reports_rejection(canvas):
    assert canvas.set_aspect_ratio("4:3") is True
    assert canvas.set_aspect_ratio("nope") is False
    assert canvas.controller().aspect_lock() is None
