"""Firmware Hub: search links for flash files and service tools."""

import html
import logging
from typing import List, Optional, Tuple
from urllib.parse import quote_plus

from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QVBoxLayout

from ...domain.models.app_view import AppView, VoiceCommand
from .base_panel import BasePanel

logger = logging.getLogger("maxco.panels.firmware")

# (label, search URL template); {q} receives the URL-encoded query
FIRMWARE_SOURCES: Tuple[Tuple[str, str], ...] = (
    ("Web search", "https://www.google.com/search?q={q}+firmware+flash+file"),
    ("XDA Forums", "https://www.google.com/search?q=site%3Axdaforums.com+{q}"),
    ("SamFW (Samsung)", "https://www.google.com/search?q=site%3Asamfw.com+{q}"),
    ("Halabtech", "https://www.google.com/search?q=site%3Ahalabtech.com+{q}"),
    ("FRP tools", "https://www.google.com/search?q={q}+FRP+bypass+tool"),
    ("GitHub", "https://github.com/search?q={q}+firmware&type=repositories"),
)


def build_search_links(query: str) -> List[Tuple[str, str]]:
    """Search links for ``query`` across the firmware sources."""
    encoded = quote_plus(query.strip())
    if not encoded:
        return []
    return [(label, template.format(q=encoded)) for label, template in FIRMWARE_SOURCES]


class FirmwareFinderPanel(BasePanel):
    """Works without an API key; links open in the system browser."""

    view = AppView.FIRMWARE_FINDER
    description = "Locate flash files, FRP tools and unlockers for Oppo, Vivo, Xiaomi, Samsung."

    def _build_body(self, layout: QVBoxLayout) -> None:
        row = QHBoxLayout()
        self.query_input = QLineEdit()
        self.query_input.setPlaceholderText("Model number, e.g. SM-A525F")
        self.query_input.returnPressed.connect(self._on_search_clicked)
        row.addWidget(self.query_input, 1)
        search_button = QPushButton("Search")
        search_button.clicked.connect(self._on_search_clicked)
        row.addWidget(search_button)
        layout.addLayout(row)
        super()._build_body(layout)
        self.links: List[Tuple[str, str]] = []

    def _on_search_clicked(self) -> None:
        self.search(self.query_input.text())

    def handle_query(self, query: str, command: Optional[VoiceCommand] = None) -> None:
        self.query_input.setText(query)
        self.search(query)

    def search(self, query: str) -> None:
        self.links = build_search_links(query)
        if not self.links:
            self.set_status("Enter a model number to search.")
            return

        items = "".join(f'<li><a href="{html.escape(url)}">{label}</a></li>' for label, url in self.links)
        self.output.setHtml(f"<p>Sources for <b>{html.escape(query.strip())}</b>:</p><ul>{items}</ul>")
        self.set_status(f"{len(self.links)} sources for '{query.strip()}'")
        logger.info(f"Firmware search links built for '{query.strip()}'")
