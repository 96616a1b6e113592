"""User-facing notices: non-blocking toasts and blocking alerts."""

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QMessageBox, QApplication, QWidget
import logging
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional


class NoticeType(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class NoticeConfig:
    title: str
    message: str
    notice_type: NoticeType = NoticeType.INFO


_ICONS = {
    NoticeType.INFO: QMessageBox.Icon.Information,
    NoticeType.WARNING: QMessageBox.Icon.Warning,
    NoticeType.ERROR: QMessageBox.Icon.Critical,
}


class NoticeManager(QObject):
    """
    Shows notices to the technician.

    Toasts go to the log and the console. Alerts are modal message boxes
    when ``interactive`` is set; otherwise they are only logged.
    """

    notice_shown = pyqtSignal(object)  # NoticeConfig

    def __init__(self, parent_widget: Optional[QWidget] = None, interactive: bool = True):
        super().__init__()
        self.logger = logging.getLogger("maxco.notices")
        self.parent_widget = parent_widget
        self.interactive = interactive
        self.history: List[NoticeConfig] = []

    def show_toast(self, config: NoticeConfig):
        """Non-blocking notice."""
        self._log(config)
        print(f"{config.title}: {config.message}")
        self._record(config)

    def alert(self, config: NoticeConfig):
        """Blocking notice; returns once the technician dismisses it."""
        self._log(config)
        self._record(config)
        if not self.interactive or QApplication.instance() is None:
            return

        msg_box = QMessageBox(self.parent_widget)
        msg_box.setWindowTitle(config.title)
        msg_box.setText(config.message)
        msg_box.setIcon(_ICONS.get(config.notice_type, QMessageBox.Icon.Information))
        msg_box.exec()

    def _log(self, config: NoticeConfig):
        if config.notice_type == NoticeType.ERROR:
            self.logger.error(f"NOTICE - {config.title}: {config.message}")
        elif config.notice_type == NoticeType.WARNING:
            self.logger.warning(f"NOTICE - {config.title}: {config.message}")
        else:
            self.logger.info(f"NOTICE - {config.title}: {config.message}")

    def _record(self, config: NoticeConfig):
        self.history.append(config)
        self.notice_shown.emit(config)

    # Convenience methods
    def warning(self, title: str, message: str):
        self.show_toast(NoticeConfig(title, message, NoticeType.WARNING))

    def error(self, title: str, message: str):
        self.alert(NoticeConfig(title, message, NoticeType.ERROR))
