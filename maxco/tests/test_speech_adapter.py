"""
Tests for the SpeechRecognition-backed capture session.
"""

from unittest.mock import Mock, patch

import pytest
import speech_recognition as sr

from maxco.src.domain.models.speech import SpeechAvailable, SpeechUnavailable
from maxco.src.domain.models.voice_session import VoiceEvent
from maxco.src.infrastructure.speech.recognizer_adapter import (
    AUDIO_CAPTURE,
    NETWORK,
    NO_SPEECH,
    RecognizerSpeechSession,
    detect_speech_capability,
)


@pytest.fixture
def recognizer():
    fake = Mock()
    fake.stopper = Mock()
    fake.listen_in_background.return_value = fake.stopper
    return fake


@pytest.fixture
def events():
    return []


@pytest.fixture
def session(qapp, recognizer, events):
    return RecognizerSpeechSession(
        events.append,
        language="en-GB",
        recognizer_factory=lambda: recognizer,
        microphone_factory=Mock,
    )


class TestSession:

    def test_start_reports_started(self, session, recognizer, events):
        session.start()
        assert events == [VoiceEvent.started()]
        recognizer.listen_in_background.assert_called_once()

    def test_microphone_failure_reports_audio_capture(self, qapp, events):
        session = RecognizerSpeechSession(
            events.append,
            recognizer_factory=Mock,
            microphone_factory=Mock(side_effect=OSError("device busy")),
        )
        session.start()
        assert events == [VoiceEvent.error(AUDIO_CAPTURE)]

    def test_recognized_phrase(self, session, recognizer, events):
        session.start()
        recognizer.recognize_google.return_value = "  open firmware "

        session._on_audio(recognizer, Mock())

        assert events[1:] == [VoiceEvent.final("open firmware"), VoiceEvent.end()]
        recognizer.stopper.assert_called_once_with(wait_for_stop=False)
        assert recognizer.recognize_google.call_args.kwargs["language"] == "en-GB"

    def test_second_phrase_ignored(self, session, recognizer, events):
        session.start()
        recognizer.recognize_google.return_value = "dashboard"
        session._on_audio(recognizer, Mock())
        session._on_audio(recognizer, Mock())
        assert recognizer.recognize_google.call_count == 1

    def test_unintelligible_speech_just_ends(self, session, recognizer, events):
        session.start()
        recognizer.recognize_google.side_effect = sr.UnknownValueError()

        session._on_audio(recognizer, Mock())

        assert events[1:] == [VoiceEvent.end()]

    def test_service_failure_reports_network(self, session, recognizer, events):
        session.start()
        recognizer.recognize_google.side_effect = sr.RequestError("unreachable")

        session._on_audio(recognizer, Mock())

        assert events[1:] == [VoiceEvent.error(NETWORK)]

    def test_no_speech_timeout(self, session, recognizer, events):
        session.start()
        session._on_no_speech()
        assert events[1:] == [VoiceEvent.error(NO_SPEECH)]
        recognizer.stopper.assert_called_once_with(wait_for_stop=False)

    def test_abort_discards_pending_result(self, session, recognizer, events):
        session.start()
        session.abort()
        recognizer.recognize_google.return_value = "too late"

        session._on_audio(recognizer, Mock())
        session._on_no_speech()

        assert events == [VoiceEvent.started()]
        recognizer.stopper.assert_called_once_with(wait_for_stop=False)


class TestDetectCapability:

    @patch('maxco.src.infrastructure.speech.recognizer_adapter.sr.Microphone.list_microphone_names')
    def test_missing_pyaudio(self, mock_names):
        mock_names.side_effect = AttributeError("Could not find PyAudio")
        capability = detect_speech_capability()
        assert isinstance(capability, SpeechUnavailable)
        assert "PyAudio" in capability.reason

    @patch('maxco.src.infrastructure.speech.recognizer_adapter.sr.Microphone.list_microphone_names')
    def test_no_microphone(self, mock_names):
        mock_names.return_value = []
        assert detect_speech_capability() == SpeechUnavailable("No microphone found")

    @patch('maxco.src.infrastructure.speech.recognizer_adapter.sr.Microphone.list_microphone_names')
    def test_available(self, mock_names, qapp):
        mock_names.return_value = ["Built-in Microphone"]
        capability = detect_speech_capability()
        assert isinstance(capability, SpeechAvailable)
        assert isinstance(capability.open_session(Mock()), RecognizerSpeechSession)
