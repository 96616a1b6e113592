"""
Application Coordinator for MAXCO.

Composition root: builds the state, the routing and voice machines, the AI
service and the main window, runs the startup checks and tears everything
down on exit.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtWidgets import QApplication

from ..domain.models.app_state import ApplicationState
from ..domain.models.app_view import AppView, DEFAULT_VIEW
from ..domain.models.hud import HudPosition, HudState
from ..domain.models.settings import MaxcoSettings
from ..domain.models.speech import SpeechCheck
from ..domain.services.command_router import CommandRouter
from ..domain.services.hud_drag import HudDragMachine
from ..domain.services.voice_session import VoiceSessionMachine
from ..infrastructure.ai.ai_service import AIConfig, AIService
from ..infrastructure.ai.session_manager import session_manager
from ..infrastructure.speech.recognizer_adapter import detect_speech_capability
from ..infrastructure.storage.settings_manager import SettingsManager, get_settings
from ..presentation.panels.base_panel import PanelContext
from ..presentation.panels.registry import build_panel_factories
from ..ui.components.notice_manager import NoticeManager
from .settings_loader import load_app_settings, resolve_api_key

logger = logging.getLogger("maxco.coordinator")

MISSING_KEY_MESSAGE = (
    "Gemini API key is missing. Set MAXCO_GEMINI_API_KEY (or GEMINI_API_KEY) "
    "or store ai.api_key in the settings. AI features are disabled."
)


class AppCoordinator(QObject):
    """
    Central coordinator managing the MAXCO application.

    Responsibilities:
    - Build ApplicationState and the machines that write it
    - Wire the router, voice session, HUD and view host together
    - Run the one-time startup checks (API key, deep link)
    - Release threads and network resources on shutdown
    """

    # Application lifecycle signals
    app_initialized = pyqtSignal()
    app_shutdown = pyqtSignal()

    def __init__(self, settings_manager: Optional[SettingsManager] = None,
                 initial_view: AppView = DEFAULT_VIEW,
                 speech_check: Optional[SpeechCheck] = None,
                 interactive: bool = True):
        super().__init__()
        self._settings_manager = settings_manager
        self._initial_view = initial_view
        self._speech_check = speech_check
        self._interactive = interactive

        self.settings: Optional[MaxcoSettings] = None
        self.state: Optional[ApplicationState] = None
        self.router: Optional[CommandRouter] = None
        self.voice: Optional[VoiceSessionMachine] = None
        self.hud: Optional[HudDragMachine] = None
        self.ai_service: Optional[AIService] = None
        self.notices: Optional[NoticeManager] = None
        self.main_window = None
        self.api_key_source = ""
        self._initialized = False

        logger.info("AppCoordinator created")

    def initialize(self) -> bool:
        """
        Initialize the application and all its components.

        Returns:
            True if initialization successful, False otherwise
        """
        logger.info("Initializing MAXCO application...")

        if not QApplication.instance():
            logger.error("QApplication not found - must be created before AppCoordinator")
            return False

        manager = self._settings_manager or get_settings()
        self.settings = load_app_settings(manager)
        api_key, self.api_key_source = resolve_api_key(manager)

        self.notices = NoticeManager(interactive=self._interactive)

        self.state = ApplicationState(
            active_view=self._initial_view,
            hud=HudState(HudPosition(0, 0), visible=self.settings.hud.visible),
        )
        self.router = CommandRouter(
            self.state,
            agent_command_delay_ms=self.settings.routing.agent_command_delay_ms,
        )
        self.router.delayed_command_misrouted.connect(self._on_command_misrouted)

        voice_settings = self.settings.voice
        check = self._speech_check or (lambda: detect_speech_capability(voice_settings))
        self.voice = VoiceSessionMachine(
            check,
            self.router.submit,
            clear_delay_ms=voice_settings.transcript_clear_delay_ms,
        )
        self.voice.unavailable.connect(self._on_speech_unavailable)

        self.hud = HudDragMachine(self.state.hud, click_suppression_ms=self.settings.hud.click_suppression_ms)

        ai = self.settings.ai
        self.ai_service = AIService(AIConfig(
            api_key=api_key,
            base_url=ai.base_url,
            text_model=ai.text_model,
            reasoning_model=ai.reasoning_model,
            fast_model=ai.fast_model,
            temperature=ai.temperature,
            max_output_tokens=ai.max_output_tokens,
            timeout=ai.timeout,
            retry_attempts=ai.retry_attempts,
        ))

        self._initialize_ui_components()

        self._initialized = True
        self.app_initialized.emit()
        logger.info(f"MAXCO application initialized (view={self.state.active_view.value})")
        return True

    def _initialize_ui_components(self):
        """Create the main window and its panels."""
        from ..presentation.ui.main_window import MainWindow

        context = PanelContext(
            router=self.router,
            ai_service=self.ai_service,
            ai_config=self.ai_service.config,
        )
        factories = build_panel_factories(
            context,
            on_navigate=self.router.navigate_from_agent,
            on_log_note=self.router.log_note,
        )
        self.main_window = MainWindow(self.router, self.voice, self.hud, factories, self.settings.hud)
        self.main_window.close_requested.connect(self.shutdown)
        self.notices.parent_widget = self.main_window

    def show(self):
        """Show the main window and run the startup checks once it is up."""
        if self.main_window is None:
            return
        self.main_window.show()
        QTimer.singleShot(0, self.check_api_key)

    def check_api_key(self) -> bool:
        """Report a missing Gemini key once; panels still mount without it."""
        if self.ai_service is not None and self.ai_service.is_configured:
            logger.info(f"Gemini API key found ({self.api_key_source})")
            return True
        logger.error("Gemini API key is missing")
        self.notices.error("MAXCO", MISSING_KEY_MESSAGE)
        return False

    def _on_speech_unavailable(self, message: str):
        self.notices.error("Voice Control", message)

    def _on_command_misrouted(self, command, intended: AppView, actual: AppView):
        self.notices.warning(
            "Voice Agent",
            f"'{command.text}' was meant for {intended.label} but {actual.label} is open."
        )

    def shutdown(self):
        """Shutdown the application cleanly."""
        if not self._initialized:
            return
        logger.info("Shutting down MAXCO application...")
        self._initialized = False

        if self.voice:
            self.voice.stop()
        if self.ai_service:
            self.ai_service.shutdown()
        session_manager.close()

        self.app_shutdown.emit()
        logger.info("MAXCO application shutdown complete")
