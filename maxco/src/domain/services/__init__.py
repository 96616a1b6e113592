"""Domain services for MAXCO."""

from .intent_classifier import classify, extract_query, is_navigation_only, ROUTING_RULES
from .command_router import CommandRouter
from .voice_session import VoiceSessionMachine
from .hud_drag import HudDragMachine

__all__ = [
    'classify',
    'extract_query',
    'is_navigation_only',
    'ROUTING_RULES',
    'CommandRouter',
    'VoiceSessionMachine',
    'HudDragMachine'
]
