"""Which panel class renders which view."""

from typing import Callable, Dict, Optional, Type

from ...domain.models.app_view import AppView
from .ai_panel import ChatDiagnosticPanel
from .ai_panels import (
    ChipsetIntelPanel,
    HardwareLabPanel,
    LogAnalyzerPanel,
    RepairFlowPanel,
    SchematicLabPanel,
)
from .base_panel import BasePanel, PanelContext
from .dashboard_panel import DashboardPanel
from .firmware_panel import FirmwareFinderPanel
from .job_sheet_panel import JobSheetPanel
from .live_assistant_panel import LiveAssistantPanel, LogNoteCallback, NavigateCallback

PanelFactory = Callable[[], BasePanel]

PANEL_CLASSES: Dict[AppView, Type[BasePanel]] = {
    AppView.DASHBOARD: DashboardPanel,
    AppView.LIVE_ASSISTANT: LiveAssistantPanel,
    AppView.SCHEMATIC_LAB: SchematicLabPanel,
    AppView.HARDWARE_LAB: HardwareLabPanel,
    AppView.FIRMWARE_FINDER: FirmwareFinderPanel,
    AppView.CHAT_DIAGNOSTIC: ChatDiagnosticPanel,
    AppView.JOB_SHEET: JobSheetPanel,
    AppView.CHIPSET_INTEL: ChipsetIntelPanel,
    AppView.LOG_ANALYZER: LogAnalyzerPanel,
    AppView.REPAIR_FLOW: RepairFlowPanel,
}


def build_panel_factories(context: PanelContext,
                          on_navigate: Optional[NavigateCallback] = None,
                          on_log_note: Optional[LogNoteCallback] = None) -> Dict[AppView, PanelFactory]:
    """One factory per view; the live agent also receives the cross-panel callbacks."""
    factories: Dict[AppView, PanelFactory] = {}
    for view, panel_class in PANEL_CLASSES.items():
        if panel_class is LiveAssistantPanel:
            factories[view] = lambda: LiveAssistantPanel(context, on_navigate, on_log_note)
        else:
            factories[view] = lambda cls=panel_class: cls(context)
    return factories
