"""
Intent Classifier - keyword routing of free text to a view.

Ordered substring rules, first match wins. Unroutable text typed on the
dashboard is treated as a diagnostic question for the AI chat.
"""

import logging
import re
from dataclasses import dataclass
from typing import Tuple

from ..models.app_view import AppView

logger = logging.getLogger("maxco.intent")


@dataclass(frozen=True)
class RoutingRule:
    """
    A keyword rule mapping text to a view.

    Attributes:
        view: View selected when any keyword matches
        keywords: Lower-case substrings tested against the input
    """
    view: AppView
    keywords: Tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(keyword in text_lower for keyword in self.keywords)


# Order is authoritative: "job sheet error log" routes to the job sheet.
ROUTING_RULES: Tuple[RoutingRule, ...] = (
    RoutingRule(AppView.DASHBOARD, ("dashboard", "home")),
    RoutingRule(AppView.SCHEMATIC_LAB, ("schematic", "board lab")),
    RoutingRule(AppView.HARDWARE_LAB, ("hardware", "engineering")),
    RoutingRule(AppView.FIRMWARE_FINDER, ("firmware", "flash")),
    RoutingRule(AppView.CHAT_DIAGNOSTIC, ("chat", "ai help")),
    RoutingRule(AppView.JOB_SHEET, ("job", "sheet", "estimate")),
    RoutingRule(AppView.LOG_ANALYZER, ("log", "panic", "error")),
    RoutingRule(AppView.CHIPSET_INTEL, ("chipset", "ic", "donor")),
    RoutingRule(AppView.REPAIR_FLOW, ("repair flow", "guide")),
    RoutingRule(AppView.LIVE_ASSISTANT, ("live", "agent")),
)

# Phrases that only express navigation and carry no query
NAVIGATION_FILLER: Tuple[str, ...] = (
    "take me to", "switch to", "navigate to", "go to", "go back to",
    "bring up", "open up", "open", "show me", "show", "launch",
    "the", "please", "page", "panel", "view", "screen", "tab", "lab",
)


def match_rule(text: str):
    """Return the first rule matching ``text``, or None."""
    lower = text.lower()
    for rule in ROUTING_RULES:
        if rule.matches(lower):
            return rule
    return None


def classify(text: str, current_view: AppView) -> AppView:
    """
    Resolve the view a piece of free text should route to.

    Args:
        text: Typed query or final voice transcript
        current_view: View active when the text was submitted

    Returns:
        Target view; ``current_view`` when nothing routes
    """
    lower = text.lower()
    rule = match_rule(text)

    if rule is not None:
        target = rule.view
    elif (current_view == AppView.DASHBOARD
          and text.strip()
          and "dashboard" not in lower):
        # Dashboard searches without a destination become diagnostic questions
        target = AppView.CHAT_DIAGNOSTIC
    else:
        target = current_view

    logger.debug(f"Classified '{text[:50]}' from {current_view.value} -> {target.value}")
    return target


def extract_query(text: str) -> str:
    """
    Strip navigation phrasing and return the actionable remainder.

    Only whole words and phrases are removed so that a query such as
    "iPhone 12 no image after flash" keeps its meaning apart from the
    routing keyword itself.
    """
    remainder = text

    phrases = list(NAVIGATION_FILLER)
    for rule in ROUTING_RULES:
        phrases.extend(rule.keywords)

    # Longest phrases first so "repair flow" goes before "flow"
    for phrase in sorted(phrases, key=len, reverse=True):
        remainder = re.sub(rf"(?<!\w){re.escape(phrase)}(?!\w)", " ", remainder,
                           flags=re.IGNORECASE)

    if not re.search(r"\w", remainder):
        return ""
    return " ".join(remainder.split()).strip(" ,.;:!?")


def is_navigation_only(text: str) -> bool:
    """True when ``text`` names a destination and nothing else."""
    return extract_query(text) == ""
