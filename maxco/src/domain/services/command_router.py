"""
Command Router for MAXCO.

Owns the active view, the last broadcast command and the AI job notes.
Typed searches, final voice transcripts and live agent requests all pass
through here; every accepted input yields a fresh timestamped command
published to whichever view is active.
"""

import logging
from typing import List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..models.app_state import ApplicationState
from ..models.app_view import AppView, VoiceCommand, view_for_agent_key
from ...utils.timing import Clock, Scheduler, qt_scheduler, system_clock_ms
from .intent_classifier import classify

logger = logging.getLogger("maxco.router")

DEFAULT_AGENT_COMMAND_DELAY_MS = 500


class CommandRouter(QObject):
    """
    Routes free-text input to views and broadcasts commands.

    Features:
    - Keyword classification against the current view
    - Strictly increasing command timestamps
    - Delayed relay of agent queries so the destination panel is mounted
      before it receives the command
    - Append-only job notes fed by AI panels
    """

    # Signals
    view_changed = pyqtSignal(object, object)  # previous AppView, new AppView
    command_published = pyqtSignal(object)  # VoiceCommand
    job_notes_changed = pyqtSignal(tuple)
    # Delayed agent command landed on a different view than intended
    delayed_command_misrouted = pyqtSignal(object, object, object)  # VoiceCommand, intended, actual

    def __init__(self, state: ApplicationState,
                 clock: Optional[Clock] = None,
                 scheduler: Optional[Scheduler] = None,
                 agent_command_delay_ms: int = DEFAULT_AGENT_COMMAND_DELAY_MS):
        super().__init__()
        self._state = state
        self._clock = clock or system_clock_ms
        self._schedule = scheduler or qt_scheduler
        self._agent_delay_ms = agent_command_delay_ms
        self._last_timestamp = state.last_command.timestamp if state.last_command else 0
        self._history: List[VoiceCommand] = []

        logger.info(f"CommandRouter created (view={state.active_view.value}, "
                    f"agent_delay={agent_command_delay_ms}ms)")

    @property
    def active_view(self) -> AppView:
        return self._state.active_view

    @property
    def last_command(self) -> Optional[VoiceCommand]:
        return self._state.last_command

    @property
    def job_notes(self) -> tuple:
        return self._state.job_notes

    @property
    def agent_command_delay_ms(self) -> int:
        return self._agent_delay_ms

    def set_active_view(self, view: AppView, trigger: str = "navigation") -> bool:
        """
        Switch the active view without publishing a command.

        Returns:
            True if the view changed
        """
        previous = self._state.active_view
        if view == previous:
            logger.debug(f"Already on {view.value}, no transition needed")
            return False

        self._state.active_view = view
        logger.info(f"View transition: {previous.value} -> {view.value} ({trigger})")
        self.view_changed.emit(previous, view)
        return True

    def submit(self, raw_text: str) -> VoiceCommand:
        """
        Route ``raw_text`` and broadcast it to the resulting view.

        Pure navigation ("go to dashboard") still delivers a command to the
        destination; panels decide whether it is actionable.
        """
        target = classify(raw_text, self._state.active_view)
        if target != self._state.active_view:
            self.set_active_view(target, trigger="command")
        return self._publish(raw_text)

    def navigate_from_agent(self, view_key: str, query: Optional[str] = None) -> bool:
        """
        Navigation requested by the live agent.

        The view switches at once; a query is published after the relay
        delay to whatever view is active at that moment. Unknown keys are
        ignored.

        Returns:
            True if the key was recognised
        """
        target = view_for_agent_key(view_key)
        if target is None:
            logger.debug(f"Ignoring unknown agent view key: {view_key!r}")
            return False

        self.set_active_view(target, trigger="agent")

        if query:
            logger.debug(f"Relaying agent query to {target.value} in {self._agent_delay_ms}ms")
            self._schedule(self._agent_delay_ms, lambda: self._deliver_delayed(query, target))
        return True

    def _deliver_delayed(self, query: str, intended: AppView) -> None:
        command = self._publish(query)
        actual = self._state.active_view
        if actual != intended:
            logger.warning(f"Agent command intended for {intended.value} delivered to {actual.value}")
            self.delayed_command_misrouted.emit(command, intended, actual)

    def log_note(self, note: str) -> None:
        """Append a note to the job sheet notes."""
        self._state.job_notes = self._state.job_notes + (note,)
        logger.info(f"Job note logged ({len(self._state.job_notes)} total)")
        self.job_notes_changed.emit(self._state.job_notes)

    def _next_timestamp(self) -> int:
        timestamp = max(int(self._clock()), self._last_timestamp + 1)
        self._last_timestamp = timestamp
        return timestamp

    def _publish(self, text: str) -> VoiceCommand:
        command = VoiceCommand(text=text, timestamp=self._next_timestamp())
        self._state.last_command = command
        self._history.append(command)
        if len(self._history) > 100:
            self._history = self._history[-100:]

        logger.info(f"Command published to {self._state.active_view.value}: '{text[:60]}'")
        self.command_published.emit(command)
        return command

    def get_command_history(self, limit: int = 10) -> List[VoiceCommand]:
        """Get recent commands."""
        return self._history[-limit:]
