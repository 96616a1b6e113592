"""Speech capture backends."""

from .recognizer_adapter import RecognizerSpeechSession, detect_speech_capability

__all__ = ['RecognizerSpeechSession', 'detect_speech_capability']
