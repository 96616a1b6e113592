"""
Floating control (HUD) models for MAXCO.

Position, visibility and the pointer events that drive the drag gesture.
"""

from dataclasses import dataclass
from enum import Enum


class DragState(Enum):
    """Drag gesture states."""
    IDLE = "idle"
    DRAGGING = "dragging"


class PointerKind(Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    CLICK = "click"


@dataclass(frozen=True)
class PointerEvent:
    """
    Uniform pointer event for the drag machine.

    Attributes:
        kind: Press, move, release or click
        x, y: Pointer position in screen coordinates
        timestamp: Event time in milliseconds
        on_close: True when the event targets the close affordance
    """
    kind: PointerKind
    x: int = 0
    y: int = 0
    timestamp: int = 0
    on_close: bool = False


@dataclass
class HudPosition:
    """Top-left corner of the floating control in screen coordinates."""
    x: int
    y: int


# Offsets from the bottom-right corner of the viewport at load
HUD_OFFSET_RIGHT = 90
HUD_OFFSET_BOTTOM = 150


def initial_hud_position(viewport_width: int, viewport_height: int,
                         offset_right: int = HUD_OFFSET_RIGHT,
                         offset_bottom: int = HUD_OFFSET_BOTTOM) -> HudPosition:
    """Corner position derived from the viewport size."""
    return HudPosition(viewport_width - offset_right, viewport_height - offset_bottom)


@dataclass
class HudState:
    """Mutable floating control state, written only by the drag machine."""
    position: HudPosition
    visible: bool = True
