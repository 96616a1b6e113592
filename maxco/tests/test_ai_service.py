"""
Tests for the AI service and its worker thread.
"""

from unittest.mock import Mock

import pytest

from maxco.src.infrastructure.ai.ai_service import AIConfig, AIRequest, AIRequestWorker, AIService
from maxco.src.infrastructure.ai.api_client import APIResponse, user_turn


@pytest.fixture
def request_():
    return AIRequest(model="gemini-2.5-flash", contents=[user_turn("no power")],
                     system_instruction="Be brief.")


class TestAIService:

    def test_missing_key_reports_config_error(self, qapp, request_):
        service = AIService(AIConfig(api_key=""))
        on_response, on_error = Mock(), Mock()

        assert service.is_configured is False
        assert service.submit(request_, on_response, on_error) is None

        on_response.assert_not_called()
        error_type, message = on_error.call_args[0]
        assert error_type == "config_error"
        assert "API key" in message

    def test_configured(self, qapp):
        assert AIService(AIConfig(api_key="k")).is_configured is True


class TestAIRequestWorker:
    """The worker runs synchronously here; ``run`` is called directly."""

    def run_worker(self, response, request_):
        client = Mock()
        client.generate_content.return_value = response
        worker = AIRequestWorker(client, request_, AIConfig(api_key="k", temperature=0.1))
        results, errors = [], []
        worker.response_ready.connect(results.append)
        worker.error_occurred.connect(lambda kind, msg: errors.append(kind))
        worker.run()
        return client, results, errors

    def test_success(self, qapp, request_):
        client, results, errors = self.run_worker(
            APIResponse(success=True, data={"candidates": []}, status_code=200), request_)

        assert results == [{"candidates": []}]
        assert errors == []
        kwargs = client.generate_content.call_args.kwargs
        assert kwargs["system_instruction"] == "Be brief."
        assert kwargs["tools"] is None
        assert kwargs["temperature"] == 0.1

    @pytest.mark.parametrize("status, kind", [
        (401, "auth_error"),
        (403, "auth_error"),
        (429, "rate_limit"),
        (None, "network_error"),
        (400, "api_error"),
    ])
    def test_error_kinds(self, qapp, request_, status, kind):
        _, results, errors = self.run_worker(
            APIResponse(success=False, error="failed", status_code=status), request_)
        assert results == []
        assert errors == [kind]

    def test_unexpected_exception(self, qapp, request_):
        client = Mock()
        client.generate_content.side_effect = RuntimeError("boom")
        worker = AIRequestWorker(client, request_, AIConfig(api_key="k"))
        errors = []
        worker.error_occurred.connect(lambda kind, msg: errors.append((kind, msg)))

        worker.run()

        assert errors == [("unexpected_error", "Unexpected error: boom")]
