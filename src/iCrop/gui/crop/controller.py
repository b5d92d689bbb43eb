"""
Crop interaction controller (coordinator).

This module acts as the orchestrator, delegating to specialized modules
for hit testing, redraw scheduling and interaction strategies.  It is the
sole owner of the crop region, the view state and the pointer interaction
state; collaborators only read committed values or replace the source image.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from PySide6.QtCore import QObject, QPointF, Qt
from PySide6.QtGui import QImage, QMouseEvent, QWheelEvent

from ...core.export import ExportRenderer, SourceImage
from ...core.geometry import RenderTransform, ViewState
from ...core.region import CORNER_HANDLES, CropHandle, CropRegion, resolve_aspect_ratio
from ...errors import InvalidGeometryError, UnsupportedAspectRatioError
from ...settings import CropSettings
from .hit_tester import HitTester
from .scheduler import RedrawScheduler
from .state import InteractionMode, InteractionState
from .strategies import InteractionStrategy, MoveStrategy, PanStrategy, ResizeStrategy
from .utils import cursor_for_handle

_LOGGER = logging.getLogger(__name__)


class CropInteractionController:
    """Translates pointer and keyboard input into crop and view changes."""

    def __init__(
        self,
        *,
        on_request_update: Callable[[], None],
        on_status_changed: Callable[[float, float], None] | None = None,
        on_region_changed: Callable[[CropRegion | None], None] | None = None,
        on_cursor_change: Callable[[Qt.CursorShape | None], None] | None = None,
        settings: CropSettings | None = None,
        timer_parent: QObject | None = None,
    ) -> None:
        """Initialize the crop interaction controller.

        Parameters
        ----------
        on_request_update:
            Callback to request a repaint; invoked at most once per frame.
        on_status_changed:
            Callback receiving ``(zoom_percent, rotation_degrees)``.
        on_region_changed:
            Callback receiving the newly committed crop region (or None).
        on_cursor_change:
            Callback to change cursor, signature: (cursor_shape or None to unset).
        settings:
            Engine settings; defaults are used when omitted.
        timer_parent:
            Parent QObject for the redraw timer (optional).
        """
        self._settings = settings or CropSettings()
        self._on_request_update = on_request_update
        self._on_status_changed = on_status_changed
        self._on_region_changed = on_region_changed
        self._on_cursor_change = on_cursor_change

        self._hit_tester = HitTester(hit_padding=self._settings.handle_hit_tolerance)
        self._renderer = ExportRenderer(
            preview_max_dimension=self._settings.preview_max_dimension,
            preview_min_dimension=self._settings.preview_min_dimension,
        )
        self._scheduler = RedrawScheduler(
            recompute=self.recompute_display,
            repaint=self._on_request_update,
            interval_ms=self._settings.redraw_interval_ms,
            timer_parent=timer_parent,
        )

        self._source: SourceImage | None = None
        self._view = ViewState()
        self._region: CropRegion | None = None
        self._aspect_lock: float | None = None
        self._transform: RenderTransform | None = None

        self._interaction = InteractionState.idle()
        self._strategy: InteractionStrategy | None = None
        self._space_held: bool = False

    # ------------------------------------------------------------------
    # Committed state (read-only for collaborators)
    # ------------------------------------------------------------------
    @property
    def scheduler(self) -> RedrawScheduler:
        return self._scheduler

    @property
    def mode(self) -> InteractionMode:
        return self._interaction.mode

    def interaction_state(self) -> InteractionState:
        return self._interaction

    def source_image(self) -> SourceImage | None:
        return self._source

    def view_state(self) -> ViewState:
        return self._view

    def crop_region(self) -> CropRegion | None:
        return self._region

    def aspect_lock(self) -> float | None:
        return self._aspect_lock

    def render_transform(self) -> RenderTransform | None:
        """Return the transform computed by the last :meth:`recompute_display`."""
        return self._transform

    def zoom_percent(self) -> float:
        return self._view.zoom * 100.0

    def rotation_degrees(self) -> float:
        return self._view.rotation_degrees

    # ------------------------------------------------------------------
    # Collaborator inputs
    # ------------------------------------------------------------------
    def set_source_image(self, image: SourceImage | QImage | None) -> None:
        """Replace the source image and reset view and crop state."""
        if isinstance(image, QImage):
            image = SourceImage(image)
        if image is not None and image.is_null():
            image = None
        self._end_gesture()
        self._source = image
        self._view = ViewState(
            viewport_width=self._view.viewport_width,
            viewport_height=self._view.viewport_height,
        )
        self._region = self._default_region() if self._view.has_viewport() else None
        _LOGGER.debug(
            "Source image replaced: %s",
            None if image is None else (image.width, image.height),
        )
        self._notify_region()
        self._notify_status()
        self._scheduler.schedule()

    def resize_viewport(self, width: float, height: float) -> None:
        """Track the rendering surface size and keep the region inside it."""
        had_viewport = self._view.has_viewport()
        view = self._view.with_viewport(width, height)
        if view == self._view:
            return
        self._view = view
        if view.has_viewport():
            if self._region is None and not had_viewport:
                self._commit_region(self._default_region())
            elif self._region is not None:
                self._commit_region(
                    self._region.with_viewport(view.viewport_width, view.viewport_height)
                )
        self._scheduler.schedule()

    def recompute_display(self) -> None:
        """Refresh derived display state from the committed values."""
        if self._source is None or not self._view.has_viewport():
            self._transform = None
            return
        self._transform = RenderTransform(self._source.width, self._source.height, self._view)

    # ------------------------------------------------------------------
    # Pointer state machine
    # ------------------------------------------------------------------
    def set_space_held(self, held: bool) -> None:
        """Record whether the pan modifier (space bar) is held."""
        self._space_held = bool(held)

    def handle_pointer_press(self, pos: QPointF) -> None:
        """Start a gesture: pan, resize, move or spawn a new region."""
        if not self._view.has_viewport():
            return
        if not self._interaction.is_idle():
            self._end_gesture()

        point = QPointF(pos)
        if self._space_held:
            self._begin(InteractionMode.PANNING, CropHandle.NONE, point)
            self._strategy = PanStrategy(
                view_provider=self.view_state,
                commit_view=self._commit_view,
                damping=self._settings.pan_damping,
            )
            self._set_cursor(Qt.CursorShape.ClosedHandCursor)
            return

        handle = self._hit_tester.test(point, self._region)
        if handle in CORNER_HANDLES:
            self._begin(InteractionMode.RESIZING, handle, point)
            self._strategy = ResizeStrategy(
                handle=handle,
                region_provider=self.crop_region,
                commit_region=self._commit_region,
            )
            self._set_cursor(cursor_for_handle(handle))
            return

        if handle == CropHandle.NONE:
            size = self._settings.new_region_size
            try:
                spawned = CropRegion.centered_at(
                    point.x(),
                    point.y(),
                    size,
                    size,
                    self._view.viewport_width,
                    self._view.viewport_height,
                    aspect_lock=self._aspect_lock,
                    min_size=self._settings.min_size,
                )
            except InvalidGeometryError as exc:
                _LOGGER.debug("Ignoring pointer press: %s", exc)
                return
            self._commit_region(spawned)

        self._begin(InteractionMode.DRAGGING, CropHandle.NONE, point)
        self._strategy = MoveStrategy(
            region_provider=self.crop_region,
            commit_region=self._commit_region,
        )
        self._set_cursor(Qt.CursorShape.ClosedHandCursor)

    def handle_pointer_move(self, pos: QPointF) -> None:
        """Apply the incremental pointer delta to the active gesture."""
        point = QPointF(pos)
        if not (math.isfinite(point.x()) and math.isfinite(point.y())):
            _LOGGER.debug("Dropping pointer move to non-finite position")
            return
        if self._interaction.is_idle() or self._strategy is None:
            self._set_cursor(cursor_for_handle(self._hit_tester.test(point, self._region)))
            return

        anchor = self._interaction.anchor_point or point
        delta = point - anchor
        self._interaction = self._interaction.moved_to(point)
        if delta.x() == 0.0 and delta.y() == 0.0:
            return
        try:
            self._strategy.on_drag(delta)
        except InvalidGeometryError as exc:
            _LOGGER.debug("Dropping pointer move: %s", exc)

    def handle_pointer_release(self) -> None:
        """Finish the current gesture and return to idle."""
        self._end_gesture()
        self._set_cursor(None)

    def handle_pointer_leave(self) -> None:
        """Pointer left the surface; same cleanup as a release."""
        self._end_gesture()
        self._set_cursor(None)

    # Qt event adapters ------------------------------------------------
    def handle_mouse_press(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.handle_pointer_press(event.position())
        event.accept()

    def handle_mouse_move(self, event: QMouseEvent) -> None:
        self.handle_pointer_move(event.position())

    def handle_mouse_release(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.handle_pointer_release()
        event.accept()

    def handle_wheel(self, event: QWheelEvent) -> None:
        self.zoom_by_wheel(event.angleDelta().y())
        event.accept()

    # ------------------------------------------------------------------
    # Commands (bypass the pointer state machine)
    # ------------------------------------------------------------------
    def zoom_in(self) -> None:
        self.set_zoom(self._view.zoom * self._settings.zoom_in_factor)

    def zoom_out(self) -> None:
        self.set_zoom(self._view.zoom * self._settings.zoom_out_factor)

    def zoom_reset(self) -> None:
        """Restore zoom to exactly 1.0 and drop any pan offset."""
        self._commit_view(ViewState(
            zoom=1.0,
            rotation_degrees=self._view.rotation_degrees,
            viewport_width=self._view.viewport_width,
            viewport_height=self._view.viewport_height,
        ))

    def zoom_by_wheel(self, angle_delta: int) -> None:
        """Zoom one wheel notch in or out depending on the sign of *angle_delta*."""
        if angle_delta > 0:
            self.set_zoom(self._view.zoom * self._settings.wheel_zoom_factor)
        elif angle_delta < 0:
            self.set_zoom(self._view.zoom / self._settings.wheel_zoom_factor)

    def set_zoom(self, factor: float) -> None:
        if not math.isfinite(factor) or factor <= 0.0:
            _LOGGER.debug("Ignoring invalid zoom factor %r", factor)
            return
        self._commit_view(
            self._view.with_zoom(factor, self._settings.min_zoom, self._settings.max_zoom)
        )

    def rotate_cw(self) -> None:
        self.rotate_by(self._settings.rotation_step)

    def rotate_ccw(self) -> None:
        self.rotate_by(-self._settings.rotation_step)

    def rotate_by(self, degrees: float) -> None:
        """Rotate the view by *degrees*; the angle is kept in ``[0, 360)``."""
        if not math.isfinite(degrees):
            _LOGGER.debug("Ignoring invalid rotation %r", degrees)
            return
        angle = (self._view.rotation_degrees + float(degrees)) % 360.0
        self._commit_view(self._view.with_rotation(angle))

    def reset(self) -> None:
        """Recentre a default-sized crop region."""
        if not self._view.has_viewport():
            return
        self._commit_region(self._default_region())

    def clear(self) -> None:
        """Remove the crop region; a press on the canvas creates a new one."""
        self._commit_region(None)

    def set_aspect_ratio(self, name: str) -> None:
        """Apply a named aspect ratio preset.

        Unknown names fall back to ``free`` before the error is re-raised.
        """
        try:
            ratio = resolve_aspect_ratio(name)
        except UnsupportedAspectRatioError:
            _LOGGER.warning("Unsupported aspect ratio %r; falling back to free", name)
            self._apply_aspect_lock(None)
            raise
        self._apply_aspect_lock(ratio)

    def request_preview(self) -> QImage:
        """Render the committed crop at preview size.

        Raises :class:`RenderUnavailableError` when nothing can be rendered.
        """
        return self._renderer.render(self._source, self._view, self._region, preview=True)

    def request_export(self) -> QImage:
        """Render the committed crop at full source resolution."""
        return self._renderer.render(self._source, self._view, self._region, preview=False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _default_region(self) -> CropRegion:
        return CropRegion.default(
            self._view.viewport_width,
            self._view.viewport_height,
            aspect_lock=self._aspect_lock,
            min_size=self._settings.min_size,
        )

    def _apply_aspect_lock(self, ratio: float | None) -> None:
        self._aspect_lock = ratio
        if self._region is not None:
            self._commit_region(self._region.with_aspect_lock(ratio))

    def _begin(self, mode: InteractionMode, handle: CropHandle, point: QPointF) -> None:
        self._interaction = InteractionState(mode=mode, active_handle=handle, anchor_point=point)
        _LOGGER.debug("Interaction %s (handle=%s)", mode.value, handle.name)

    def _end_gesture(self) -> None:
        if self._strategy is not None:
            self._strategy.on_end()
            self._strategy = None
        if not self._interaction.is_idle():
            _LOGGER.debug("Interaction %s finished", self._interaction.mode.value)
        self._interaction = InteractionState.idle()

    def _commit_region(self, region: CropRegion | None) -> bool:
        if region == self._region:
            return False
        self._region = region
        self._notify_region()
        self._scheduler.schedule()
        return True

    def _commit_view(self, view: ViewState) -> bool:
        if view == self._view:
            return False
        status_changed = (
            view.zoom != self._view.zoom
            or view.rotation_degrees != self._view.rotation_degrees
        )
        self._view = view
        if status_changed:
            self._notify_status()
        self._scheduler.schedule()
        return True

    def _notify_region(self) -> None:
        if self._on_region_changed is not None:
            self._on_region_changed(self._region)

    def _notify_status(self) -> None:
        if self._on_status_changed is not None:
            self._on_status_changed(self.zoom_percent(), self.rotation_degrees())

    def _set_cursor(self, shape: Qt.CursorShape | None) -> None:
        if self._on_cursor_change is not None:
            self._on_cursor_change(shape)
