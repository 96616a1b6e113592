"""Tests for launch-time deep links."""

import pytest

from maxco.src.application.deep_link import parse_launch_url, resolve_initial_view
from maxco.src.domain.models.app_view import AppView


@pytest.mark.parametrize("url", [
    "maxco://open?mode=analysis",
    "maxco://open?prompt=board+not+booting",
    "https://maxco.local/?analysis=1&other=x",
    "mode=diagnose",
    "maxco://open?mode=",
    "maxco://open?prompt=",
    "maxco://open?analysis",
])
def test_deep_link_opens_schematic_lab(url):
    assert resolve_initial_view(url) == AppView.SCHEMATIC_LAB


@pytest.mark.parametrize("url", [
    None,
    "",
    "maxco://open",
    "maxco://open?other=1",
    "maxco://open?modes=1",
])
def test_plain_launch_opens_dashboard(url):
    assert resolve_initial_view(url) == AppView.DASHBOARD


def test_cli_params():
    assert resolve_initial_view(cli_params={"mode": "analysis"}) == AppView.SCHEMATIC_LAB
    assert resolve_initial_view(cli_params={"prompt": ""}) == AppView.SCHEMATIC_LAB
    assert resolve_initial_view(cli_params={"mode": None, "analysis": None, "prompt": None}) == AppView.DASHBOARD


def test_parse_launch_url():
    assert parse_launch_url("maxco://open?mode=a&mode=b&prompt=") == {"mode": "a", "prompt": ""}
    assert parse_launch_url("maxco://open?analysis") == {"analysis": ""}
    assert parse_launch_url(None) == {}
