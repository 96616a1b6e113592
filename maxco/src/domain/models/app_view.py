"""
View and command models for MAXCO.

Defines the closed set of screens the application can show and the
timestamped command payload broadcast to whichever screen is mounted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class AppView(Enum):
    """Mutually exclusive screens; exactly one is active at any time."""
    DASHBOARD = "DASHBOARD"
    LIVE_ASSISTANT = "LIVE_ASSISTANT"
    SCHEMATIC_LAB = "SCHEMATIC_LAB"
    HARDWARE_LAB = "HARDWARE_LAB"
    FIRMWARE_FINDER = "FIRMWARE_FINDER"
    CHAT_DIAGNOSTIC = "CHAT_DIAGNOSTIC"
    JOB_SHEET = "JOB_SHEET"
    CHIPSET_INTEL = "CHIPSET_INTEL"
    LOG_ANALYZER = "LOG_ANALYZER"
    REPAIR_FLOW = "REPAIR_FLOW"

    @property
    def label(self) -> str:
        """Sidebar label for this view."""
        return VIEW_LABELS[self]


DEFAULT_VIEW = AppView.DASHBOARD

VIEW_LABELS: Dict[AppView, str] = {
    AppView.DASHBOARD: "Dashboard",
    AppView.SCHEMATIC_LAB: "Schematic Lab",
    AppView.HARDWARE_LAB: "Hardware Lab",
    AppView.REPAIR_FLOW: "Smart Repair Flow",
    AppView.LOG_ANALYZER: "Log & Error Decoder",
    AppView.CHIPSET_INTEL: "IC DNA & Donors",
    AppView.FIRMWARE_FINDER: "Firmware Hub",
    AppView.CHAT_DIAGNOSTIC: "AI Chat",
    AppView.JOB_SHEET: "Job Sheet & Estimate",
    AppView.LIVE_ASSISTANT: "Live Voice Agent",
}

# Keys the live agent may use to request navigation. Closed contract.
AGENT_VIEW_KEYS: Dict[str, AppView] = {
    "firmware": AppView.FIRMWARE_FINDER,
    "schematic": AppView.SCHEMATIC_LAB,
    "hardware": AppView.HARDWARE_LAB,
    "jobsheet": AppView.JOB_SHEET,
    "chipset": AppView.CHIPSET_INTEL,
}


def view_for_agent_key(view_key: str) -> Optional[AppView]:
    """Map an agent navigation key to a view, or None for unknown keys."""
    return AGENT_VIEW_KEYS.get(view_key)


@dataclass(frozen=True)
class VoiceCommand:
    """
    Immutable command broadcast to the active view.

    Attributes:
        text: Raw text as typed or spoken
        timestamp: Issue time in milliseconds; distinguishes repeated text
    """
    text: str
    timestamp: int
