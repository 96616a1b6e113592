"""
Main Window for MAXCO.

Sidebar navigation, the global search box and the panel area, with the
floating voice control overlaid on top.
"""

import logging
from typing import Dict

from PyQt6.QtWidgets import (
    QButtonGroup, QFrame, QHBoxLayout, QLabel, QLineEdit, QMainWindow,
    QPushButton, QVBoxLayout, QWidget
)
from PyQt6.QtCore import pyqtSignal, Qt
from PyQt6.QtGui import QCloseEvent, QShortcut, QKeySequence

from ...domain.models.app_view import AppView, VIEW_LABELS
from ...domain.models.hud import initial_hud_position
from ...domain.models.settings import HudSettings
from ...domain.services.command_router import CommandRouter
from ...domain.services.hud_drag import HudDragMachine
from ...domain.services.voice_session import VoiceSessionMachine
from ..panels.registry import PanelFactory
from ..widgets.floating_voice_control import FloatingVoiceControl
from ..widgets.view_host import ViewHost

logger = logging.getLogger("maxco.main_window")

SEARCH_SHORTCUT = "Ctrl+K"


class MainWindow(QMainWindow):
    """
    Application shell.

    Owns the search shortcut; it is destroyed with the window.
    """

    # Signals
    close_requested = pyqtSignal()

    def __init__(self, router: CommandRouter, voice: VoiceSessionMachine, hud: HudDragMachine,
                 factories: Dict[AppView, PanelFactory], hud_settings: HudSettings = None):
        super().__init__()
        self.router = router
        self.voice = voice
        self.hud = hud
        self.hud_settings = hud_settings or HudSettings()
        self._hud_placed = False
        self.nav_buttons: Dict[AppView, QPushButton] = {}

        self._init_ui(factories)
        self._setup_window()
        self._setup_keyboard_shortcuts()

        router.view_changed.connect(self._on_view_changed)
        hud.visibility_changed.connect(self._on_hud_visibility_changed)
        self._on_view_changed(None, router.active_view)
        self._on_hud_visibility_changed(hud.visible)

        logger.info("MainWindow initialized")

    def _init_ui(self, factories: Dict[AppView, PanelFactory]):
        central = QWidget()
        root = QHBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        root.addWidget(self._build_sidebar())

        main_area = QWidget()
        main_layout = QVBoxLayout(main_area)
        main_layout.setContentsMargins(16, 12, 16, 12)

        self.search_input = QLineEdit()
        self.search_input.setObjectName("globalSearch")
        self.search_input.setPlaceholderText(f"Search tools or ask MAXCO... ({SEARCH_SHORTCUT})")
        self.search_input.returnPressed.connect(self._on_search_submitted)
        main_layout.addWidget(self.search_input)

        self.view_host = ViewHost(self.router, factories)
        main_layout.addWidget(self.view_host, 1)
        root.addWidget(main_area, 1)

        self.setCentralWidget(central)

        self.voice_control = FloatingVoiceControl(self.hud, self.voice, parent=central)
        logger.debug("UI components initialized")

    def _build_sidebar(self) -> QWidget:
        sidebar = QFrame()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(230)
        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 16, 12, 16)

        brand = QLabel("MAXCO\nRepair AI")
        brand.setObjectName("brand")
        layout.addWidget(brand)

        self.nav_group = QButtonGroup(self)
        self.nav_group.setExclusive(True)
        for view, label in VIEW_LABELS.items():
            button = QPushButton(label)
            button.setCheckable(True)
            button.setObjectName("navButton")
            button.clicked.connect(lambda _checked=False, v=view: self.router.set_active_view(v, trigger="sidebar"))
            self.nav_group.addButton(button)
            self.nav_buttons[view] = button
            layout.addWidget(button)

        layout.addStretch(1)

        self.enable_voice_button = QPushButton("Enable Voice Control")
        self.enable_voice_button.setObjectName("enableVoice")
        self.enable_voice_button.clicked.connect(self.hud.show)
        layout.addWidget(self.enable_voice_button)
        return sidebar

    def _setup_window(self):
        """Setup window properties."""
        self.setWindowTitle("MAXCO Repair AI")
        self.resize(1200, 800)
        self.setMinimumSize(800, 560)

    def _setup_keyboard_shortcuts(self):
        """Ctrl+K (Cmd+K on macOS) focuses the search box."""
        self.search_shortcut = QShortcut(QKeySequence(SEARCH_SHORTCUT), self)
        self.search_shortcut.setContext(Qt.ShortcutContext.WindowShortcut)
        self.search_shortcut.activated.connect(self.focus_search)
        logger.debug(f"MainWindow keyboard shortcuts configured: {SEARCH_SHORTCUT} to search")

    def focus_search(self):
        self.search_input.setFocus(Qt.FocusReason.ShortcutFocusReason)
        self.search_input.selectAll()

    def _on_search_submitted(self):
        text = self.search_input.text()
        self.search_input.clear()
        self.search_input.clearFocus()
        self.router.submit(text)

    def _on_view_changed(self, previous, view: AppView):
        button = self.nav_buttons.get(view)
        if button is not None:
            button.setChecked(True)
        self.voice_control.set_active_view(view)

    def _on_hud_visibility_changed(self, visible: bool):
        self.enable_voice_button.setVisible(not visible)

    def place_voice_control(self):
        """Put the voice control at its initial corner of the current window."""
        central = self.centralWidget()
        position = initial_hud_position(
            central.width(), central.height(),
            self.hud_settings.offset_right, self.hud_settings.offset_bottom
        )
        self.hud.move_to(position.x, position.y)
        self._hud_placed = True

    def showEvent(self, event):
        super().showEvent(event)
        if not self._hud_placed:
            self.place_voice_control()

    def closeEvent(self, event: QCloseEvent):
        """Handle window close event."""
        self.voice.stop()
        self.close_requested.emit()
        super().closeEvent(event)
        logger.debug("Window close event")
