"""
Voice Session Machine for MAXCO.

Push-to-talk lifecycle: Idle -> Listening -> (Finalizing | Erroring) -> Idle.
Only one capture session is open at a time; starting while listening is a
stop request.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..models.speech import SpeechAvailable, SpeechCheck, SpeechSession
from ..models.voice_session import (
    VoiceEvent,
    VoiceEventKind,
    VoiceState,
    VoiceStateChangeEvent,
)
from ...utils.timing import Scheduler, qt_scheduler

logger = logging.getLogger("maxco.voice_session")

LISTENING_PLACEHOLDER = "Listening..."
ERROR_TRANSCRIPT = "Error listening."
UNAVAILABLE_MESSAGE = "Voice control is not supported on this system."
DEFAULT_CLEAR_DELAY_MS = 2000


class VoiceSessionMachine(QObject):
    """
    State machine driving a push-to-talk capture session.

    Features:
    - Capability checked on every start attempt
    - Interim hypotheses replace the transcript, never append
    - Final transcripts are handed to the submit callback
    - Events from closed or aborted sessions are ignored
    - Transcript cleared after a short delay so the final state is readable
    """

    # Signals
    state_changed = pyqtSignal(VoiceStateChangeEvent)
    transcript_changed = pyqtSignal(str)
    unavailable = pyqtSignal(str)  # user-facing notice

    VALID_TRANSITIONS = {
        VoiceState.IDLE: {VoiceState.LISTENING},
        VoiceState.LISTENING: {VoiceState.FINALIZING, VoiceState.ERRORING, VoiceState.IDLE},
        VoiceState.FINALIZING: {VoiceState.IDLE},
        VoiceState.ERRORING: {VoiceState.IDLE},
    }

    def __init__(self, check: SpeechCheck,
                 submit: Callable[[str], object],
                 scheduler: Optional[Scheduler] = None,
                 clear_delay_ms: int = DEFAULT_CLEAR_DELAY_MS):
        super().__init__()
        self._check = check
        self._submit = submit
        self._schedule = scheduler or qt_scheduler
        self._clear_delay_ms = clear_delay_ms

        self._state = VoiceState.IDLE
        self._transcript = ""
        self._session: Optional[SpeechSession] = None
        self._session_id = 0
        self._transition_history: List[VoiceStateChangeEvent] = []

    @property
    def state(self) -> VoiceState:
        return self._state

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def is_listening(self) -> bool:
        return self._state == VoiceState.LISTENING

    def toggle(self) -> None:
        """Start a session, or stop the open one."""
        if self._state == VoiceState.LISTENING:
            self.stop()
        else:
            self.start()

    def start(self) -> bool:
        """
        Open a capture session if speech is available.

        Returns:
            True if a session was opened
        """
        if self._state == VoiceState.LISTENING:
            # Toggle semantics: never a second concurrent session
            self.stop()
            return False

        capability = self._check()
        if not isinstance(capability, SpeechAvailable):
            logger.warning(f"Speech capture unavailable: {capability.reason}")
            self.unavailable.emit(UNAVAILABLE_MESSAGE)
            return False

        self._session_id += 1
        session_id = self._session_id
        try:
            self._session = capability.open_session(
                lambda event: self.handle_event(event, session_id)
            )
        except Exception as e:
            logger.error(f"Failed to open speech session: {e}")
            self.unavailable.emit(UNAVAILABLE_MESSAGE)
            return False

        self._transition_to(VoiceState.LISTENING, "toggle")
        self._set_transcript(LISTENING_PLACEHOLDER)
        self._session.start()
        return True

    def stop(self) -> None:
        """Abort the open session at once and clear the transcript."""
        if self._state != VoiceState.LISTENING:
            return
        session = self._close_session()
        if session is not None:
            try:
                session.abort()
            except Exception as e:
                logger.warning(f"Error aborting speech session: {e}")
        self._transition_to(VoiceState.IDLE, "stop")
        self._set_transcript("")

    def handle_event(self, event: VoiceEvent, session_id: Optional[int] = None) -> None:
        """
        Apply a capture event.

        Args:
            event: Event reported by the capture session
            session_id: Session that produced the event; stale ids are dropped
        """
        if session_id is not None and session_id != self._session_id:
            logger.debug(f"Dropping {event.kind.value} from stale session {session_id}")
            return
        if self._state != VoiceState.LISTENING:
            logger.debug(f"Ignoring {event.kind.value} while {self._state.value}")
            return

        if event.kind == VoiceEventKind.STARTED:
            self._set_transcript(LISTENING_PLACEHOLDER)

        elif event.kind == VoiceEventKind.INTERIM:
            self._set_transcript(event.text)

        elif event.kind == VoiceEventKind.FINAL:
            self._set_transcript(event.text)
            self._transition_to(VoiceState.FINALIZING, "final")
            session = self._close_session()
            try:
                self._submit(event.text)
            finally:
                self._release(session)
                self._transition_to(VoiceState.IDLE, "final")
                self._schedule_clear()

        elif event.kind == VoiceEventKind.ERROR:
            logger.error(f"Speech error: {event.text}")
            self._set_transcript(ERROR_TRANSCRIPT)
            self._transition_to(VoiceState.ERRORING, "error")
            self._release(self._close_session())
            self._transition_to(VoiceState.IDLE, "error")
            self._schedule_clear()

        elif event.kind == VoiceEventKind.END:
            self._close_session()
            self._transition_to(VoiceState.IDLE, "end")
            self._schedule_clear()

    def _close_session(self) -> Optional[SpeechSession]:
        session = self._session
        self._session = None
        return session

    def _release(self, session: Optional[SpeechSession]) -> None:
        # Capture may still be running after a final result or an error
        if session is not None:
            try:
                session.abort()
            except Exception as e:
                logger.debug(f"Error releasing speech session: {e}")

    def _schedule_clear(self) -> None:
        session_id = self._session_id

        def clear():
            if self._state == VoiceState.IDLE and self._session_id == session_id:
                self._set_transcript("")

        self._schedule(self._clear_delay_ms, clear)

    def _set_transcript(self, text: str) -> None:
        if text != self._transcript:
            self._transcript = text
            self.transcript_changed.emit(text)

    def _transition_to(self, target: VoiceState, trigger: str) -> None:
        if target not in self.VALID_TRANSITIONS[self._state]:
            logger.warning(f"Invalid voice transition {self._state.value} -> {target.value}")
            return

        event = VoiceStateChangeEvent(
            from_state=self._state,
            to_state=target,
            timestamp=datetime.now(),
            trigger=trigger,
            session_id=self._session_id
        )
        self._state = target
        self._transition_history.append(event)
        if len(self._transition_history) > 100:
            self._transition_history = self._transition_history[-100:]

        logger.info(f"Voice transition: {event.from_state.value} -> {target.value} ({trigger})")
        self.state_changed.emit(event)

    def get_transition_history(self, limit: int = 10) -> List[VoiceStateChangeEvent]:
        """Get recent transition history."""
        return self._transition_history[-limit:]
