"""Job Sheet & Estimate: technician entries and notes logged by the live agent."""

import logging
from typing import List, Optional

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QListWidget, QPushButton, QVBoxLayout

from ...domain.models.app_view import AppView, VoiceCommand
from .base_panel import BasePanel

logger = logging.getLogger("maxco.panels.job_sheet")


class JobSheetPanel(BasePanel):
    view = AppView.JOB_SHEET
    description = "Work notes for the current job. Notes logged by the voice agent appear live."

    def __init__(self, context, parent=None):
        super().__init__(context, parent)
        self.entries: List[str] = []
        context.router.job_notes_changed.connect(self._on_notes_changed)
        self._on_notes_changed(context.router.job_notes)

    def _build_body(self, layout: QVBoxLayout) -> None:
        layout.addWidget(QLabel("AI job notes"))
        self.notes_list = QListWidget()
        self.notes_list.setObjectName("jobNotes")
        layout.addWidget(self.notes_list, 1)

        layout.addWidget(QLabel("Sheet entries"))
        self.entries_list = QListWidget()
        self.entries_list.setObjectName("jobEntries")
        layout.addWidget(self.entries_list, 1)

        row = QHBoxLayout()
        self.entry_input = QLineEdit()
        self.entry_input.setPlaceholderText("Add an entry (part, labour, observation)...")
        self.entry_input.returnPressed.connect(self._on_add_clicked)
        row.addWidget(self.entry_input, 1)
        add_button = QPushButton("Add")
        add_button.clicked.connect(self._on_add_clicked)
        row.addWidget(add_button)
        layout.addLayout(row)

    def _on_notes_changed(self, notes: tuple) -> None:
        self.notes_list.clear()
        self.notes_list.addItems([note.strip() for note in notes])

    def _on_add_clicked(self) -> None:
        text = self.entry_input.text().strip()
        if text:
            self.entry_input.clear()
            self.add_entry(text)

    def handle_query(self, query: str, command: Optional[VoiceCommand] = None) -> None:
        self.add_entry(query)

    def add_entry(self, text: str) -> None:
        self.entries.append(text)
        self.entries_list.addItem(text)
        self.set_status(f"Added: {text}")
        logger.debug(f"Job sheet entry added ({len(self.entries)} total)")

    def shutdown(self) -> None:
        self.context.router.job_notes_changed.disconnect(self._on_notes_changed)
