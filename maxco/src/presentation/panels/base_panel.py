"""
Base panel for MAXCO views.

Every view mounted by the view host is a BasePanel. The host forwards each
published command through ``apply_command``; a panel reacts once per
command timestamp.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from markdown_it import MarkdownIt
from PyQt6.QtWidgets import QFrame, QLabel, QTextBrowser, QVBoxLayout, QWidget

from ...domain.models.app_view import AppView, VoiceCommand
from ...domain.services.command_router import CommandRouter
from ...domain.services.intent_classifier import extract_query
from ...infrastructure.ai.ai_service import AIConfig, AIService

logger = logging.getLogger("maxco.panels")

_markdown = (
    MarkdownIt("commonmark", {"html": False, "breaks": True})
    .enable(["table", "strikethrough"])
)


def render_markdown(text: str) -> str:
    """Render model output to HTML; raw HTML in the input is not passed through."""
    return _markdown.render(text or "")


@dataclass
class PanelContext:
    """Services shared by all panels."""
    router: CommandRouter
    ai_service: AIService
    ai_config: AIConfig


class BasePanel(QWidget):
    """
    Common panel chrome: title, description, status line and an output area.

    Subclasses override :meth:`handle_query` to act on the actionable part
    of a command and may override :meth:`on_navigation_command` for
    commands that only selected this view.
    """

    view: Optional[AppView] = None
    description = ""

    def __init__(self, context: PanelContext, parent=None):
        super().__init__(parent)
        self.context = context
        self._last_timestamp: Optional[int] = None
        self.setObjectName(f"panel_{self.view.value.lower()}" if self.view else "panel")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(24, 20, 24, 20)
        self._layout.setSpacing(10)

        self.title_label = QLabel(self.view.label if self.view else "")
        self.title_label.setObjectName("panelTitle")
        self._layout.addWidget(self.title_label)

        if self.description:
            self.description_label = QLabel(self.description)
            self.description_label.setObjectName("panelDescription")
            self.description_label.setWordWrap(True)
            self._layout.addWidget(self.description_label)

        self.status_label = QLabel("")
        self.status_label.setObjectName("panelStatus")
        self.status_label.setWordWrap(True)

        self._build_body(self._layout)
        self._layout.addWidget(self.status_label)

    def _build_body(self, layout: QVBoxLayout) -> None:
        """Add panel-specific widgets. The default is a read-only output area."""
        self.output = self._make_output()
        layout.addWidget(self.output, 1)

    def _make_output(self) -> QTextBrowser:
        output = QTextBrowser()
        output.setObjectName("panelOutput")
        output.setOpenExternalLinks(True)
        output.setFrameShape(QFrame.Shape.NoFrame)
        return output

    @property
    def status(self) -> str:
        return self.status_label.text()

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def apply_command(self, command: Optional[VoiceCommand]) -> bool:
        """
        React to a published command.

        Returns:
            True if the command was new to this panel and handled
        """
        if command is None:
            return False
        if self._last_timestamp is not None and command.timestamp <= self._last_timestamp:
            logger.debug(f"{type(self).__name__} skipping already seen command {command.timestamp}")
            return False
        self._last_timestamp = command.timestamp

        query = extract_query(command.text)
        if not query:
            self.on_navigation_command(command)
        else:
            self.handle_query(query, command)
        return True

    def on_navigation_command(self, command: VoiceCommand) -> None:
        self.set_status("Ready. Say or type what you need.")

    def handle_query(self, query: str, command: Optional[VoiceCommand] = None) -> None:
        self.set_status(f"Received: {query}")

    def shutdown(self) -> None:
        """Called before the panel is unmounted."""
