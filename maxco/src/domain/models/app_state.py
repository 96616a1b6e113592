"""
Application State Model for MAXCO.

Single explicit container for session state. Each field has exactly one
writer: the command router owns the view, the last command and the job
notes; the HUD drag machine owns the floating control state.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .app_view import AppView, DEFAULT_VIEW, VoiceCommand
from .hud import HudPosition, HudState


@dataclass
class ApplicationState:
    """In-memory session state; never persisted."""
    active_view: AppView = DEFAULT_VIEW
    last_command: Optional[VoiceCommand] = None
    job_notes: Tuple[str, ...] = ()
    hud: HudState = field(default_factory=lambda: HudState(HudPosition(0, 0)))
