"""
HUD Drag Machine for MAXCO.

Drag gesture and visibility for the floating voice control:
Idle -> Dragging -> Idle, driven by uniform pointer events.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..models.hud import DragState, HudPosition, HudState, PointerEvent, PointerKind

logger = logging.getLogger("maxco.hud_drag")

DEFAULT_CLICK_SUPPRESSION_MS = 50


class HudDragMachine(QObject):
    """
    Owns the floating control's position and visibility.

    A press on the close affordance never starts a drag. While dragging,
    the control follows the pointer at the offset captured on press. A
    click arriving within the suppression window after a drag that moved
    is swallowed so releasing the control does not toggle voice capture.
    """

    # Signals
    position_changed = pyqtSignal(int, int)
    visibility_changed = pyqtSignal(bool)
    drag_started = pyqtSignal()
    drag_finished = pyqtSignal(bool)  # moved
    clicked = pyqtSignal()

    def __init__(self, hud: HudState, click_suppression_ms: int = DEFAULT_CLICK_SUPPRESSION_MS):
        super().__init__()
        self._hud = hud
        self._suppression_ms = click_suppression_ms
        self._state = DragState.IDLE
        self._offset_x = 0
        self._offset_y = 0
        self._moved = False
        self._suppress_until: Optional[int] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def position(self) -> HudPosition:
        return self._hud.position

    @property
    def visible(self) -> bool:
        return self._hud.visible

    @property
    def is_dragging(self) -> bool:
        return self._state == DragState.DRAGGING

    def handle(self, event: PointerEvent) -> bool:
        """
        Apply a pointer event.

        Returns:
            True if the event was consumed (a drag step or an accepted click)
        """
        if event.kind == PointerKind.PRESS:
            return self._on_press(event)
        if event.kind == PointerKind.MOVE:
            return self._on_move(event)
        if event.kind == PointerKind.RELEASE:
            return self._on_release(event)
        if event.kind == PointerKind.CLICK:
            return self._on_click(event)
        return False

    def _on_press(self, event: PointerEvent) -> bool:
        if event.on_close:
            logger.debug("Press on close affordance, not dragging")
            return False

        self._offset_x = event.x - self._hud.position.x
        self._offset_y = event.y - self._hud.position.y
        self._moved = False
        self._suppress_until = None
        self._state = DragState.DRAGGING
        logger.debug(f"Drag started at ({event.x}, {event.y}), offset ({self._offset_x}, {self._offset_y})")
        self.drag_started.emit()
        return True

    def _on_move(self, event: PointerEvent) -> bool:
        if self._state != DragState.DRAGGING:
            return False

        self._moved = True
        self._hud.position = HudPosition(event.x - self._offset_x, event.y - self._offset_y)
        self.position_changed.emit(self._hud.position.x, self._hud.position.y)
        return True

    def _on_release(self, event: PointerEvent) -> bool:
        if self._state != DragState.DRAGGING:
            return False

        self._state = DragState.IDLE
        moved = self._moved
        self._moved = False
        if moved:
            self._suppress_until = event.timestamp + self._suppression_ms
        logger.debug(f"Drag finished at ({self._hud.position.x}, {self._hud.position.y}), moved={moved}")
        self.drag_finished.emit(moved)
        return True

    def _on_click(self, event: PointerEvent) -> bool:
        if event.on_close:
            return False
        if self._suppress_until is not None and event.timestamp <= self._suppress_until:
            logger.debug("Click suppressed after drag")
            return False

        self._suppress_until = None
        self.clicked.emit()
        return True

    def move_to(self, x: int, y: int) -> None:
        """Place the control without a drag gesture (e.g. viewport change)."""
        self._hud.position = HudPosition(x, y)
        self.position_changed.emit(x, y)

    def hide(self) -> None:
        """Hide the control; any voice session keeps running."""
        if not self._hud.visible:
            return
        self._hud.visible = False
        self._state = DragState.IDLE
        logger.info("Floating voice control hidden")
        self.visibility_changed.emit(False)

    def show(self) -> None:
        """Re-enable the control from the sidebar."""
        if self._hud.visible:
            return
        self._hud.visible = True
        logger.info("Floating voice control enabled")
        self.visibility_changed.emit(True)
