"""Dashboard: shortcut cards into each tool."""

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QGridLayout, QPushButton, QVBoxLayout

from ...domain.models.app_view import AppView
from .base_panel import BasePanel

logger = logging.getLogger("maxco.panels.dashboard")

DASHBOARD_CARDS = (
    (AppView.SCHEMATIC_LAB, "Schematic & Board Lab",
     "Analyze circuit boards, clean up schematics, map screw risks."),
    (AppView.HARDWARE_LAB, "Hardware Engineering Lab",
     "Jumper Finder, Diode Values, and ISP/Test Point Locator."),
    (AppView.REPAIR_FLOW, "Smart Repair Flow",
     "Step-by-step voice guided repair roadmaps for any device."),
    (AppView.LOG_ANALYZER, "Log & Error Decoder",
     "Decode 'Panic Full' logs, iTunes errors, and Android CrashDumps instantly."),
    (AppView.CHIPSET_INTEL, "IC DNA & Donor Finder",
     "Find compatible donor boards for ICs and view chipset datasheets."),
    (AppView.FIRMWARE_FINDER, "Firmware Finder",
     "Locate Flash Files, FRP Tools, and Unlockers for Oppo, Vivo, Xiaomi, Samsung."),
    (AppView.CHAT_DIAGNOSTIC, "AI Diagnostic Chat",
     "Deep reasoning mode to solve complex hardware faults."),
    (AppView.LIVE_ASSISTANT, "Live Voice Agent",
     "Hands-free real-time assistance while you solder."),
)


class DashboardPanel(BasePanel):
    view = AppView.DASHBOARD
    description = "Pick a tool, or type a question in the search box."

    def _build_body(self, layout: QVBoxLayout) -> None:
        grid = QGridLayout()
        grid.setSpacing(12)
        self.cards = {}
        for index, (view, title, desc) in enumerate(DASHBOARD_CARDS):
            card = QPushButton(f"{title}\n\n{desc}")
            card.setObjectName("dashboardCard")
            card.setMinimumHeight(110)
            card.setCursor(Qt.CursorShape.PointingHandCursor)
            card.clicked.connect(lambda _checked=False, v=view: self.open_view(v))
            grid.addWidget(card, index // 2, index % 2)
            self.cards[view] = card
        layout.addLayout(grid)
        layout.addStretch(1)

    def open_view(self, view: AppView) -> None:
        logger.debug(f"Dashboard card selected: {view.value}")
        self.context.router.set_active_view(view, trigger="dashboard")
