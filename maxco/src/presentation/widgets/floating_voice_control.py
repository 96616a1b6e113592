"""
Floating voice control for MAXCO.

Draggable microphone button overlaid on the main window. Clicking toggles
push-to-talk; dragging moves it; the close button hides it until the
sidebar re-enables it. Position and visibility live in the drag machine.
"""

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QPoint
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ...domain.models.app_view import AppView
from ...domain.models.hud import PointerEvent, PointerKind
from ...domain.models.voice_session import VoiceState, VoiceStateChangeEvent
from ...domain.services.hud_drag import HudDragMachine
from ...domain.services.voice_session import VoiceSessionMachine

logger = logging.getLogger("maxco.floating_voice_control")

IDLE_STYLE = "background-color: #2563eb; color: white; border-radius: 28px; font-size: 22px;"
LISTENING_STYLE = "background-color: #dc2626; color: white; border-radius: 28px; font-size: 22px;"


class FloatingVoiceControl(QWidget):
    """
    Overlay widget rendering the HUD drag machine and the voice session.

    Features:
    - Mouse grabbed only while a drag is in progress
    - Release after a moving drag does not toggle voice
    - Transcript bubble above the microphone
    - Hidden while the live voice agent is the active view
    """

    def __init__(self, hud: HudDragMachine, voice: VoiceSessionMachine, parent=None):
        super().__init__(parent)
        self.hud = hud
        self.voice = voice
        self._active_view: Optional[AppView] = None
        self._grabbing = False

        self._init_ui()

        hud.position_changed.connect(self._on_position_changed)
        hud.visibility_changed.connect(lambda _visible: self._refresh_visibility())
        hud.clicked.connect(self.voice.toggle)
        voice.state_changed.connect(self._on_voice_state_changed)
        voice.transcript_changed.connect(self._on_transcript_changed)

        self.move(hud.position.x, hud.position.y)
        self._refresh_visibility()
        logger.info("FloatingVoiceControl initialized")

    def _init_ui(self):
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFixedSize(260, 110)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.transcript_label = QLabel("")
        self.transcript_label.setObjectName("voiceTranscript")
        self.transcript_label.setWordWrap(True)
        self.transcript_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignBottom)
        self.transcript_label.setStyleSheet(
            "background-color: rgba(17, 24, 39, 220); color: white; border-radius: 8px; padding: 4px 8px;"
        )
        self.transcript_label.setVisible(False)
        # Mouse events fall through to the control
        self.transcript_label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        layout.addWidget(self.transcript_label, 1)

        row = QHBoxLayout()
        row.addStretch(1)
        self.mic_label = QLabel("\U0001F3A4")
        self.mic_label.setObjectName("voiceMic")
        self.mic_label.setFixedSize(56, 56)
        self.mic_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.mic_label.setStyleSheet(IDLE_STYLE)
        self.mic_label.setToolTip("Click to talk, drag to move")
        self.mic_label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        row.addWidget(self.mic_label)

        self.close_button = QPushButton("×")
        self.close_button.setObjectName("voiceClose")
        self.close_button.setFixedSize(20, 20)
        self.close_button.setToolTip("Hide voice control")
        self.close_button.clicked.connect(self.hud.hide)
        row.addWidget(self.close_button, 0, Qt.AlignmentFlag.AlignTop)
        layout.addLayout(row)

    def set_active_view(self, view: AppView) -> None:
        self._active_view = view
        self._refresh_visibility()

    def _refresh_visibility(self) -> None:
        show = self.hud.visible and self._active_view != AppView.LIVE_ASSISTANT
        self.setVisible(show)
        if show:
            self.raise_()

    def _is_on_close(self, pos: QPoint) -> bool:
        return self.close_button.geometry().contains(pos)

    def _pointer(self, kind: PointerKind, event: QMouseEvent) -> PointerEvent:
        # Parent coordinates, so the control's own movement does not skew the offset
        parent = self.parentWidget()
        global_point = event.globalPosition().toPoint()
        point = parent.mapFromGlobal(global_point) if parent else global_point
        return PointerEvent(
            kind=kind,
            x=point.x(),
            y=point.y(),
            timestamp=int(event.timestamp()),
            on_close=self._is_on_close(event.position().toPoint()),
        )

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        if self.hud.handle(self._pointer(PointerKind.PRESS, event)):
            self.grabMouse()
            self._grabbing = True
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if self.hud.is_dragging:
            self.hud.handle(self._pointer(PointerKind.MOVE, event))
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        release = self._pointer(PointerKind.RELEASE, event)
        self.hud.handle(release)
        self._release_grab()
        # Qt has no separate click event; a click follows every release
        self.hud.handle(PointerEvent(PointerKind.CLICK, release.x, release.y,
                                     release.timestamp, release.on_close))
        event.accept()

    def _release_grab(self) -> None:
        if self._grabbing:
            self.releaseMouse()
            self._grabbing = False

    def _on_position_changed(self, x: int, y: int) -> None:
        self.move(x, y)

    def _on_voice_state_changed(self, event: VoiceStateChangeEvent) -> None:
        listening = event.to_state == VoiceState.LISTENING
        self.mic_label.setStyleSheet(LISTENING_STYLE if listening else IDLE_STYLE)
        self.mic_label.setToolTip("Listening - click to stop" if listening else "Click to talk, drag to move")

    def _on_transcript_changed(self, text: str) -> None:
        self.transcript_label.setText(text)
        self.transcript_label.setVisible(bool(text))

    def hideEvent(self, event):
        self._release_grab()
        super().hideEvent(event)
