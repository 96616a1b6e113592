"""
Tests for the command router.

Covers view switching, command publication, timestamps, the delayed
agent relay and job notes.
"""

from unittest.mock import Mock

from maxco.src.domain.models.app_view import AppView, VoiceCommand
from maxco.src.domain.services.command_router import CommandRouter


class TestSubmit:

    def test_switches_view_then_publishes(self, router):
        events = []
        router.view_changed.connect(lambda prev, new: events.append(("view", prev, new)))
        router.command_published.connect(lambda cmd: events.append(("command", cmd.text)))

        command = router.submit("open schematic for iPhone 12")

        assert router.active_view == AppView.SCHEMATIC_LAB
        assert events == [
            ("view", AppView.DASHBOARD, AppView.SCHEMATIC_LAB),
            ("command", "open schematic for iPhone 12"),
        ]
        assert command.text == "open schematic for iPhone 12"
        assert router.last_command == command

    def test_no_view_change_still_publishes(self, router):
        router.set_active_view(AppView.LOG_ANALYZER)
        view_listener = Mock()
        router.view_changed.connect(view_listener)

        command = router.submit("xyz123")

        view_listener.assert_not_called()
        assert router.active_view == AppView.LOG_ANALYZER
        assert router.last_command == command

    def test_dashboard_fallback_to_chat(self, router):
        router.submit("why is my phone hot")
        assert router.active_view == AppView.CHAT_DIAGNOSTIC

    def test_empty_submit_publishes_without_switch(self, router):
        command = router.submit("")
        assert router.active_view == AppView.DASHBOARD
        assert command.text == ""

    def test_timestamps_strictly_increase_for_same_text(self, router, clock):
        first = router.submit("job")
        second = router.submit("job")
        clock.advance(5)
        third = router.submit("job")

        assert first != second
        assert first.timestamp < second.timestamp < third.timestamp
        assert third.timestamp == clock.now

    def test_timestamps_survive_clock_going_backwards(self, router, clock):
        first = router.submit("hello")
        clock.advance(-1000)
        second = router.submit("hello")
        assert second.timestamp > first.timestamp

    def test_command_history(self, router):
        for i in range(3):
            router.submit(f"job {i}")
        assert [c.text for c in router.get_command_history()] == ["job 0", "job 1", "job 2"]


class TestSetActiveView:

    def test_direct_navigation_publishes_nothing(self, router):
        published = Mock()
        router.command_published.connect(published)

        assert router.set_active_view(AppView.FIRMWARE_FINDER) is True
        assert router.active_view == AppView.FIRMWARE_FINDER
        published.assert_not_called()

    def test_same_view_is_noop(self, router):
        assert router.set_active_view(AppView.DASHBOARD) is False


class TestNavigateFromAgent:

    def test_switches_immediately_and_delivers_after_delay(self, router, scheduler):
        published = []
        router.command_published.connect(published.append)

        assert router.navigate_from_agent("chipset", "AP_ICE reading 0V") is True

        assert router.active_view == AppView.CHIPSET_INTEL
        assert published == []
        assert scheduler.delays == [500]

        scheduler.run_all()
        assert [c.text for c in published] == ["AP_ICE reading 0V"]

    def test_without_query_no_command(self, router, scheduler):
        assert router.navigate_from_agent("firmware") is True
        assert router.active_view == AppView.FIRMWARE_FINDER
        assert scheduler.pending == []

    def test_unknown_key_ignored(self, router, scheduler):
        view_listener = Mock()
        router.view_changed.connect(view_listener)

        assert router.navigate_from_agent("toaster", "anything") is False
        assert router.active_view == AppView.DASHBOARD
        assert scheduler.pending == []
        view_listener.assert_not_called()

    def test_all_agent_keys(self, router):
        expected = {
            "firmware": AppView.FIRMWARE_FINDER,
            "schematic": AppView.SCHEMATIC_LAB,
            "hardware": AppView.HARDWARE_LAB,
            "jobsheet": AppView.JOB_SHEET,
            "chipset": AppView.CHIPSET_INTEL,
        }
        for key, view in expected.items():
            router.navigate_from_agent(key)
            assert router.active_view == view

    def test_delayed_command_lands_on_current_view(self, router, scheduler):
        misrouted = []
        router.delayed_command_misrouted.connect(lambda c, i, a: misrouted.append((c.text, i, a)))

        router.navigate_from_agent("schematic", "U2 short")
        router.set_active_view(AppView.JOB_SHEET)
        scheduler.run_all()

        assert router.last_command.text == "U2 short"
        assert misrouted == [("U2 short", AppView.SCHEMATIC_LAB, AppView.JOB_SHEET)]

    def test_configurable_delay(self, state, clock, scheduler, qapp):
        router = CommandRouter(state, clock=clock, scheduler=scheduler, agent_command_delay_ms=1200)
        router.navigate_from_agent("hardware", "backlight")
        assert scheduler.delays == [1200]


class TestJobNotes:

    def test_log_note_appends(self, router):
        seen = []
        router.job_notes_changed.connect(seen.append)

        router.log_note("Replaced U2")
        router.log_note("  PP_VDD_MAIN 4.2V  ")

        assert router.job_notes == ("Replaced U2", "  PP_VDD_MAIN 4.2V  ")
        assert seen[-1] == ("Replaced U2", "  PP_VDD_MAIN 4.2V  ")

    def test_notes_stored_as_given(self, router):
        router.log_note("   ")
        router.log_note("")
        assert router.job_notes == ("   ", "")

    def test_state_is_shared(self, router, state):
        router.log_note("note")
        router.submit("job")
        assert state.job_notes == ("note",)
        assert state.active_view == AppView.JOB_SHEET
        assert isinstance(state.last_command, VoiceCommand)
