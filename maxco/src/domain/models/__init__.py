"""Domain models for MAXCO."""

from .app_view import AppView, VoiceCommand, AGENT_VIEW_KEYS, DEFAULT_VIEW
from .app_state import ApplicationState
from .hud import DragState, HudPosition, HudState, PointerEvent, PointerKind
from .voice_session import VoiceEvent, VoiceEventKind, VoiceState, VoiceStateChangeEvent
from .settings import (
    AIProviderSettings,
    VoiceSettings,
    RoutingSettings,
    HudSettings,
    AdvancedSettings,
    MaxcoSettings
)

__all__ = [
    'AppView',
    'VoiceCommand',
    'AGENT_VIEW_KEYS',
    'DEFAULT_VIEW',
    'ApplicationState',
    'DragState',
    'HudPosition',
    'HudState',
    'PointerEvent',
    'PointerKind',
    'VoiceEvent',
    'VoiceEventKind',
    'VoiceState',
    'VoiceStateChangeEvent',
    'AIProviderSettings',
    'VoiceSettings',
    'RoutingSettings',
    'HudSettings',
    'AdvancedSettings',
    'MaxcoSettings'
]
