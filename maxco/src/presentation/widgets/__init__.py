"""Reusable widgets for the main window."""

from .view_host import ViewHost
from .floating_voice_control import FloatingVoiceControl

__all__ = ['ViewHost', 'FloatingVoiceControl']
