"""
Speech capability interface.

Higher layers never query the platform for speech support themselves; a
check returns one of the two variants below and the voice session acts
on whichever it receives.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Union

from .voice_session import VoiceEvent

EventSink = Callable[[VoiceEvent], None]


class SpeechSession(ABC):
    """A single-utterance capture session."""

    @abstractmethod
    def start(self) -> None:
        """Begin capturing; events are reported to the sink given at open."""

    @abstractmethod
    def abort(self) -> None:
        """Stop capturing immediately and discard any pending result."""


@dataclass(frozen=True)
class SpeechAvailable:
    """Speech capture can be used; ``open_session`` builds a new session."""
    open_session: Callable[[EventSink], SpeechSession]


@dataclass(frozen=True)
class SpeechUnavailable:
    """Speech capture cannot be used on this machine."""
    reason: str


SpeechCapability = Union[SpeechAvailable, SpeechUnavailable]
SpeechCheck = Callable[[], SpeechCapability]
