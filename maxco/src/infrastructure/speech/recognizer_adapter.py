"""
Speech capture over the SpeechRecognition library.

A session listens for a single utterance on the default microphone using
the recognizer's background listener thread, transcribes it and reports
``started``/``final``/``error``/``end`` events. Events cross back to the
GUI thread through a Qt signal before they reach the sink.
"""

import logging
from typing import Callable, Optional

import speech_recognition as sr
from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ...domain.models.settings import VoiceSettings
from ...domain.models.speech import (
    EventSink,
    SpeechAvailable,
    SpeechCapability,
    SpeechSession,
    SpeechUnavailable,
)
from ...domain.models.voice_session import VoiceEvent, VoiceEventKind

logger = logging.getLogger("maxco.speech")

NO_SPEECH = "no-speech"
NETWORK = "network"
AUDIO_CAPTURE = "audio-capture"


class _EventBridge(QObject):
    """Carries events from the listener thread to the GUI thread."""

    event = pyqtSignal(object)


class RecognizerSpeechSession(SpeechSession):
    """One push-to-talk utterance."""

    def __init__(self, sink: EventSink, language: str = "en-US",
                 no_speech_timeout_ms: int = 8000, phrase_time_limit: float = 10.0,
                 recognizer_factory: Callable[[], sr.Recognizer] = sr.Recognizer,
                 microphone_factory: Callable[[], sr.Microphone] = sr.Microphone):
        self._sink = sink
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._recognizer_factory = recognizer_factory
        self._microphone_factory = microphone_factory

        self._recognizer: Optional[sr.Recognizer] = None
        self._stopper: Optional[Callable[..., None]] = None
        self._heard = False
        self._closed = False

        self._bridge = _EventBridge()
        self._bridge.event.connect(self._dispatch)

        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.setInterval(no_speech_timeout_ms)
        self._timer.timeout.connect(self._on_no_speech)

    def start(self) -> None:
        try:
            self._recognizer = self._recognizer_factory()
            microphone = self._microphone_factory()
            self._stopper = self._recognizer.listen_in_background(
                microphone, self._on_audio, phrase_time_limit=self._phrase_time_limit
            )
        except (OSError, AttributeError) as e:
            logger.error(f"Microphone could not be opened: {e}")
            self._bridge.event.emit(VoiceEvent.error(AUDIO_CAPTURE))
            return

        self._timer.start()
        logger.debug(f"Speech session started ({self._language})")
        self._bridge.event.emit(VoiceEvent.started())

    def abort(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._timer.stop()
        self._stop_listener()
        logger.debug("Speech session aborted")

    def _stop_listener(self) -> None:
        if self._stopper is not None:
            stopper, self._stopper = self._stopper, None
            stopper(wait_for_stop=False)

    def _on_audio(self, recognizer: sr.Recognizer, audio: sr.AudioData) -> None:
        # Runs on the listener thread; one phrase per session
        if self._heard or self._closed:
            return
        self._heard = True
        self._stop_listener()

        try:
            text = recognizer.recognize_google(audio, language=self._language)
        except sr.UnknownValueError:
            logger.info("Speech was not understood")
            self._bridge.event.emit(VoiceEvent.end())
            return
        except sr.RequestError as e:
            logger.error(f"Speech service request failed: {e}")
            self._bridge.event.emit(VoiceEvent.error(NETWORK))
            return

        self._bridge.event.emit(VoiceEvent.final(text.strip()))
        self._bridge.event.emit(VoiceEvent.end())

    def _on_no_speech(self) -> None:
        if self._heard or self._closed:
            return
        logger.info("No speech detected before timeout")
        self._stop_listener()
        self._dispatch(VoiceEvent.error(NO_SPEECH))

    def _dispatch(self, event: VoiceEvent) -> None:
        if self._closed:
            return
        if event.kind is not VoiceEventKind.STARTED:
            self._timer.stop()
        self._sink(event)


def detect_speech_capability(voice: Optional[VoiceSettings] = None) -> SpeechCapability:
    """
    Check for a usable microphone.

    Returns:
        SpeechAvailable whose ``open_session`` builds a RecognizerSpeechSession,
        or SpeechUnavailable with the reason
    """
    voice = voice or VoiceSettings()
    try:
        names = sr.Microphone.list_microphone_names()
    except (AttributeError, OSError) as e:
        # AttributeError is how SpeechRecognition reports a missing PyAudio
        logger.warning(f"Speech capture unavailable: {e}")
        return SpeechUnavailable(str(e))

    if not names:
        logger.warning("Speech capture unavailable: no microphone found")
        return SpeechUnavailable("No microphone found")

    def open_session(sink: EventSink) -> SpeechSession:
        return RecognizerSpeechSession(
            sink,
            language=voice.language,
            no_speech_timeout_ms=voice.no_speech_timeout_ms,
            phrase_time_limit=voice.phrase_time_limit,
        )

    return SpeechAvailable(open_session)
