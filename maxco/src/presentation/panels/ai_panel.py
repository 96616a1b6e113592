"""Panels whose answers come from the Gemini API."""

import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QVBoxLayout

from ...domain.models.app_view import AppView, VoiceCommand
from ...infrastructure.ai.ai_service import AIRequest
from ...infrastructure.ai.api_client import extract_text, model_turn, user_turn
from .base_panel import BasePanel, render_markdown

logger = logging.getLogger("maxco.panels.ai")

THINKING_STATUS = "Analyzing..."


class AIPanel(BasePanel):
    """
    A query box backed by a single generateContent call per question.

    Subclasses set ``system_instruction`` and ``model_role`` (one of
    ``text``, ``reasoning`` or ``fast``).
    """

    system_instruction = ""
    model_role = "text"
    placeholder = "Describe the device and the fault..."

    def __init__(self, context, parent=None):
        super().__init__(context, parent)
        self.pending = False
        self.last_answer = ""
        self._pending_query: Optional[str] = None
        self._queued: List[str] = []

    def _build_body(self, layout: QVBoxLayout) -> None:
        row = QHBoxLayout()
        self.query_input = QLineEdit()
        self.query_input.setPlaceholderText(self.placeholder)
        self.query_input.returnPressed.connect(self._on_ask_clicked)
        row.addWidget(self.query_input, 1)

        self.ask_button = QPushButton("Ask")
        self.ask_button.clicked.connect(self._on_ask_clicked)
        row.addWidget(self.ask_button)
        layout.addLayout(row)

        super()._build_body(layout)

    @property
    def model(self) -> str:
        config = self.context.ai_config
        return {
            "reasoning": config.reasoning_model,
            "fast": config.fast_model,
        }.get(self.model_role, config.text_model)

    def _on_ask_clicked(self) -> None:
        query = self.query_input.text().strip()
        if query:
            self.query_input.clear()
            self.request_answer(query)

    def handle_query(self, query: str, command: Optional[VoiceCommand] = None) -> None:
        self.query_input.setText(query)
        self.request_answer(query)

    def request_answer(self, query: str) -> None:
        """Ask now, or once the reply already in flight has arrived."""
        if self.pending:
            self._queued.append(query)
            self.set_status(f"Queued: {query}")
            logger.debug(f"{type(self).__name__} queued a question ({len(self._queued)} waiting)")
            return
        self.ask(query)

    def _ask_next(self) -> None:
        if self._queued and not self.pending:
            self.ask(self._queued.pop(0))

    def build_contents(self, query: str) -> List[Dict[str, Any]]:
        return [user_turn(query)]

    def ask(self, query: str) -> None:
        """Send ``query`` to the model on a worker thread."""
        logger.info(f"{type(self).__name__} asking {self.model}: '{query[:60]}'")
        self.pending = True
        self._pending_query = query
        self.set_status(THINKING_STATUS)
        self.ask_button.setEnabled(False)

        request = AIRequest(
            model=self.model,
            contents=self.build_contents(query),
            system_instruction=self.system_instruction or None,
        )
        self.context.ai_service.submit(request, self.on_response, self.on_error)

    def on_response(self, data: dict) -> None:
        self.pending = False
        self.ask_button.setEnabled(True)
        text = extract_text(data) or "No answer was returned."
        self.last_answer = text
        self._pending_query = None
        self.show_answer(text)
        self.set_status("Done.")
        self._ask_next()

    def show_answer(self, text: str) -> None:
        self.output.setHtml(render_markdown(text))

    def on_error(self, error_type: str, message: str) -> None:
        self.pending = False
        self.ask_button.setEnabled(True)
        self._pending_query = None
        logger.warning(f"{type(self).__name__} request failed ({error_type}): {message}")
        self.set_status(message)
        self._ask_next()

    def shutdown(self) -> None:
        self._queued.clear()


class ChatDiagnosticPanel(AIPanel):
    """Multi-turn diagnostic chat on the reasoning model."""

    view = AppView.CHAT_DIAGNOSTIC
    description = "Deep reasoning mode to solve complex hardware faults."
    system_instruction = (
        "You are MAXCO, a senior mobile device repair engineer. Diagnose hardware and "
        "software faults step by step. Ask for measurements when they are needed, name "
        "the likely components and the rails involved, and keep answers practical for a "
        "technician at the bench."
    )
    model_role = "reasoning"
    placeholder = "Ask a diagnostic question..."

    def __init__(self, context, parent=None):
        super().__init__(context, parent)
        self.history: List[Dict[str, Any]] = []

    def build_contents(self, query: str) -> List[Dict[str, Any]]:
        return self.history + [user_turn(query)]

    def on_response(self, data: dict) -> None:
        text = extract_text(data) or "No answer was returned."
        if self._pending_query is not None:
            self.history.append(user_turn(self._pending_query))
            self.history.append(model_turn(text))
        super().on_response(data)

    def show_answer(self, text: str) -> None:
        blocks = []
        for turn in self.history:
            speaker = "**You**" if turn["role"] == "user" else "**MAXCO**"
            blocks.append(f"{speaker}\n\n{turn['parts'][0]['text']}")
        self.output.setHtml(render_markdown("\n\n---\n\n".join(blocks) or text))
        self.output.verticalScrollBar().setValue(self.output.verticalScrollBar().maximum())

    def clear_history(self) -> None:
        self.history.clear()
        self.output.clear()
