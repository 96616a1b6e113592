"""
Voice session models for MAXCO.

Defines the push-to-talk session states, the uniform event type produced
by speech capture adapters and the record emitted on every transition.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class VoiceState(Enum):
    """Push-to-talk session states."""
    IDLE = "idle"
    LISTENING = "listening"
    FINALIZING = "finalizing"
    ERRORING = "erroring"


class VoiceEventKind(Enum):
    """Kinds of events a speech capture session can report."""
    STARTED = "started"
    INTERIM = "interim"
    FINAL = "final"
    ERROR = "error"
    END = "end"


@dataclass(frozen=True)
class VoiceEvent:
    """
    Event reported by a capture session.

    ``text`` carries the hypothesis for interim/final events and the error
    code for error events.
    """
    kind: VoiceEventKind
    text: str = ""

    @classmethod
    def started(cls) -> "VoiceEvent":
        return cls(VoiceEventKind.STARTED)

    @classmethod
    def interim(cls, text: str) -> "VoiceEvent":
        return cls(VoiceEventKind.INTERIM, text)

    @classmethod
    def final(cls, text: str) -> "VoiceEvent":
        return cls(VoiceEventKind.FINAL, text)

    @classmethod
    def error(cls, code: str) -> "VoiceEvent":
        return cls(VoiceEventKind.ERROR, code)

    @classmethod
    def end(cls) -> "VoiceEvent":
        return cls(VoiceEventKind.END)


@dataclass
class VoiceStateChangeEvent:
    """Represents a voice state change with metadata."""
    from_state: VoiceState
    to_state: VoiceState
    timestamp: datetime
    trigger: str  # toggle, final, error, end, stop
    session_id: Optional[int] = None
