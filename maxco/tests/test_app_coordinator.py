"""
Tests for application wiring: coordinator, main window and voice control.
"""

import pytest

from maxco.src.application.app_coordinator import MISSING_KEY_MESSAGE, AppCoordinator
from maxco.src.domain.models.app_view import AppView
from maxco.src.domain.models.hud import PointerEvent, PointerKind
from maxco.src.domain.models.speech import SpeechUnavailable
from maxco.src.domain.services.voice_session import UNAVAILABLE_MESSAGE
from maxco.src.infrastructure.storage.settings_manager import SettingsManager
from maxco.src.ui.components.notice_manager import NoticeType


@pytest.fixture
def coordinator(qapp, settings_dir, monkeypatch):
    monkeypatch.delenv("MAXCO_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    coordinator = AppCoordinator(
        SettingsManager(settings_dir),
        speech_check=lambda: SpeechUnavailable("no microphone"),
        interactive=False,
    )
    assert coordinator.initialize() is True
    yield coordinator
    coordinator.shutdown()


@pytest.fixture
def window(coordinator):
    return coordinator.main_window


class TestCoordinator:

    def test_missing_key_reported(self, coordinator):
        assert coordinator.check_api_key() is False
        notice = coordinator.notices.history[-1]
        assert notice.notice_type == NoticeType.ERROR
        assert notice.message == MISSING_KEY_MESSAGE

    def test_key_from_environment(self, qapp, settings_dir, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        coordinator = AppCoordinator(SettingsManager(settings_dir), interactive=False,
                                     speech_check=lambda: SpeechUnavailable("none"))
        coordinator.initialize()

        assert coordinator.check_api_key() is True
        assert coordinator.api_key_source == "GEMINI_API_KEY"
        coordinator.shutdown()

    def test_deep_link_view(self, qapp, settings_dir):
        coordinator = AppCoordinator(SettingsManager(settings_dir), initial_view=AppView.SCHEMATIC_LAB,
                                     speech_check=lambda: SpeechUnavailable("none"), interactive=False)
        coordinator.initialize()
        assert coordinator.main_window.view_host.current_view == AppView.SCHEMATIC_LAB
        coordinator.shutdown()

    def test_voice_unavailable_notice(self, coordinator):
        coordinator.hud.handle(PointerEvent(PointerKind.CLICK, 0, 0, 10_000))
        notice = coordinator.notices.history[-1]
        assert notice.title == "Voice Control"
        assert notice.message == UNAVAILABLE_MESSAGE

    def test_misrouted_agent_command_warns(self, coordinator):
        coordinator.router.delayed_command_misrouted.emit(
            coordinator.router.submit("job"), AppView.SCHEMATIC_LAB, AppView.JOB_SHEET)
        assert coordinator.notices.history[-1].notice_type == NoticeType.WARNING

    def test_shutdown_once(self, coordinator):
        shutdowns = []
        coordinator.app_shutdown.connect(lambda: shutdowns.append(True))
        coordinator.shutdown()
        coordinator.shutdown()
        assert shutdowns == [True]


class TestMainWindow:

    def test_search_submits_and_clears(self, window, coordinator):
        window.search_input.setText("open firmware")
        window._on_search_submitted()

        assert coordinator.router.active_view == AppView.FIRMWARE_FINDER
        assert window.search_input.text() == ""
        assert window.nav_buttons[AppView.FIRMWARE_FINDER].isChecked()

    def test_sidebar_navigation(self, window, coordinator):
        published = []
        coordinator.router.command_published.connect(published.append)

        window.nav_buttons[AppView.HARDWARE_LAB].click()

        assert coordinator.router.active_view == AppView.HARDWARE_LAB
        assert window.view_host.current_view == AppView.HARDWARE_LAB
        assert published == []

    def test_search_shortcut(self, window):
        assert window.search_shortcut.key().toString() == "Ctrl+K"

    def test_voice_control_hidden_on_live_agent(self, window, coordinator):
        assert not window.voice_control.isHidden()
        coordinator.router.set_active_view(AppView.LIVE_ASSISTANT)
        assert window.voice_control.isHidden()
        coordinator.router.set_active_view(AppView.DASHBOARD)
        assert not window.voice_control.isHidden()

    def test_close_button_hides_and_enable_restores(self, window, coordinator):
        assert window.enable_voice_button.isHidden()

        window.voice_control.close_button.click()
        assert coordinator.hud.visible is False
        assert window.voice_control.isHidden()
        assert not window.enable_voice_button.isHidden()

        window.enable_voice_button.click()
        assert coordinator.hud.visible is True
        assert not window.voice_control.isHidden()

    def test_initial_placement(self, window, coordinator):
        window.place_voice_control()
        central = window.centralWidget()
        assert coordinator.hud.position.x == central.width() - 90
        assert coordinator.hud.position.y == central.height() - 150
