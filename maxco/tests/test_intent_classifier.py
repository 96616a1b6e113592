"""
Tests for keyword intent classification.

Covers rule order, the dashboard fallback and query extraction.
"""

import pytest

from maxco.src.domain.models.app_view import AppView
from maxco.src.domain.services.intent_classifier import (
    ROUTING_RULES,
    classify,
    extract_query,
    is_navigation_only,
    match_rule,
)


class TestClassify:
    """Routing of free text to views."""

    @pytest.mark.parametrize("text", [
        "schematic", "SCHEMATIC", "Open the Schematic please", "iphone 12 sChEmAtIc",
    ])
    def test_schematic_matches_regardless_of_case(self, text):
        for view in AppView:
            assert classify(text, view) == AppView.SCHEMATIC_LAB

    @pytest.mark.parametrize("text, expected", [
        ("go home", AppView.DASHBOARD),
        ("board lab", AppView.SCHEMATIC_LAB),
        ("engineering tools", AppView.HARDWARE_LAB),
        ("flash file for A52", AppView.FIRMWARE_FINDER),
        ("ai help needed", AppView.CHAT_DIAGNOSTIC),
        ("make an estimate", AppView.JOB_SHEET),
        ("kernel panic", AppView.LOG_ANALYZER),
        ("find a donor board", AppView.CHIPSET_INTEL),
        ("repair flow for pixel 7", AppView.REPAIR_FLOW),
        ("talk to the agent", AppView.LIVE_ASSISTANT),
    ])
    def test_each_rule(self, text, expected):
        assert classify(text, AppView.HARDWARE_LAB if expected != AppView.HARDWARE_LAB
                        else AppView.DASHBOARD) == expected

    def test_first_match_wins(self):
        assert classify("job log error", AppView.DASHBOARD) == AppView.JOB_SHEET
        assert classify("job log error", AppView.LOG_ANALYZER) == AppView.JOB_SHEET

    def test_dashboard_keyword_beats_everything(self):
        assert classify("dashboard schematic", AppView.LOG_ANALYZER) == AppView.DASHBOARD

    def test_substring_matching(self):
        # "ic" is a substring rule, so it matches inside other words
        assert classify("music", AppView.SCHEMATIC_LAB) == AppView.CHIPSET_INTEL
        assert classify("catalog", AppView.DASHBOARD) == AppView.LOG_ANALYZER

    def test_empty_input_on_dashboard_stays(self):
        assert classify("", AppView.DASHBOARD) == AppView.DASHBOARD
        assert classify("   ", AppView.DASHBOARD) == AppView.DASHBOARD

    def test_unroutable_on_dashboard_goes_to_chat(self):
        assert classify("xyz123", AppView.DASHBOARD) == AppView.CHAT_DIAGNOSTIC

    def test_unroutable_elsewhere_stays(self):
        assert classify("xyz123", AppView.SCHEMATIC_LAB) == AppView.SCHEMATIC_LAB
        assert classify("", AppView.JOB_SHEET) == AppView.JOB_SHEET

    def test_never_raises_on_odd_input(self):
        for text in ["\n\t", "🔧🔧", "a" * 5000, "?!"]:
            assert isinstance(classify(text, AppView.DASHBOARD), AppView)


class TestRules:

    def test_rule_order(self):
        assert [rule.view for rule in ROUTING_RULES] == [
            AppView.DASHBOARD,
            AppView.SCHEMATIC_LAB,
            AppView.HARDWARE_LAB,
            AppView.FIRMWARE_FINDER,
            AppView.CHAT_DIAGNOSTIC,
            AppView.JOB_SHEET,
            AppView.LOG_ANALYZER,
            AppView.CHIPSET_INTEL,
            AppView.REPAIR_FLOW,
            AppView.LIVE_ASSISTANT,
        ]

    def test_match_rule_none(self):
        assert match_rule("xyz123") is None


class TestExtractQuery:

    @pytest.mark.parametrize("text", [
        "go to the firmware page",
        "Open schematic",
        "take me to the job sheet please",
        "dashboard",
        "",
    ])
    def test_navigation_only(self, text):
        assert extract_query(text) == ""
        assert is_navigation_only(text)

    def test_keeps_query_with_original_casing(self):
        assert extract_query("chipset AP_ICE reading 0V") == "AP_ICE reading 0V"

    def test_strips_routing_keyword(self):
        assert extract_query("open schematic for iPhone 12") == "for iPhone 12"

    def test_whole_words_only(self):
        # "ic" must not be cut out of "music"
        assert extract_query("music app crash") == "music app crash"

    def test_model_numbers_survive(self):
        assert extract_query("firmware SM-A525F") == "SM-A525F"
        assert extract_query("schematic: U2 short") == "U2 short"

    def test_unroutable_text_is_returned_whole(self):
        assert extract_query("xyz123") == "xyz123"
        assert not is_navigation_only("xyz123")
