"""
View host: keeps exactly one panel mounted for the active view.

A panel is built fresh each time its view becomes active and destroyed
when the view changes. Commands are forwarded to whichever panel is
mounted when they are published; a newly mounted panel is not replayed
commands that were published before it existed.
"""

import logging
from typing import Dict, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from ...domain.models.app_view import AppView, VoiceCommand
from ...domain.services.command_router import CommandRouter
from ..panels.base_panel import BasePanel
from ..panels.registry import PanelFactory

logger = logging.getLogger("maxco.view_host")


class ViewHost(QWidget):
    """Container that swaps panels as the router changes view."""

    panel_mounted = pyqtSignal(object)  # AppView

    def __init__(self, router: CommandRouter, factories: Dict[AppView, PanelFactory], parent=None):
        super().__init__(parent)
        self.router = router
        self.factories = factories
        self.current_view: Optional[AppView] = None
        self.current_panel: Optional[BasePanel] = None

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)

        router.view_changed.connect(self._on_view_changed)
        router.command_published.connect(self._on_command_published)

        self.mount(router.active_view)

    def mount(self, view: AppView) -> BasePanel:
        """Replace the mounted panel with a new one for ``view``."""
        if self.current_panel is not None:
            old = self.current_panel
            self.current_panel = None
            old.shutdown()
            self._layout.removeWidget(old)
            old.hide()
            old.deleteLater()

        panel = self.factories[view]()
        self._layout.addWidget(panel)
        panel.show()
        self.current_view = view
        self.current_panel = panel
        logger.debug(f"Mounted {type(panel).__name__} for {view.value}")
        self.panel_mounted.emit(view)
        return panel

    def _on_view_changed(self, previous: AppView, view: AppView) -> None:
        if view != self.current_view:
            self.mount(view)

    def _on_command_published(self, command: VoiceCommand) -> None:
        if self.current_panel is not None:
            self.current_panel.apply_command(command)
