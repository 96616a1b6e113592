"""AI service integration for MAXCO panels."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from ..logging.logging_config import log_performance
from .api_client import GeminiClient, DEFAULT_BASE_URL

logger = logging.getLogger("maxco.ai_service")


@dataclass
class AIConfig:
    """AI service configuration."""
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    text_model: str = "gemini-2.5-flash"
    reasoning_model: str = "gemini-3-pro-preview"
    fast_model: str = "gemini-2.5-flash-lite-latest"
    temperature: float = 0.7
    max_output_tokens: int = 8192
    timeout: int = 60
    retry_attempts: int = 2


@dataclass
class AIRequest:
    """A single generateContent call."""
    model: str
    contents: List[Dict[str, Any]]
    system_instruction: Optional[str] = None
    tools: List[Dict[str, Any]] = field(default_factory=list)


class AIServiceError(Exception):
    """Base exception for AI service errors."""
    pass


class AIConfigurationError(AIServiceError):
    """AI service is missing required configuration."""
    pass


class AIRequestWorker(QThread):
    """Worker thread for AI requests to avoid blocking the UI."""

    response_ready = pyqtSignal(dict)
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self, client: GeminiClient, request: AIRequest, config: AIConfig, parent=None):
        super().__init__(parent)
        self.client = client
        self.request = request
        self.config = config

    def run(self):
        """Execute the AI request in background thread."""
        started = time.perf_counter()
        try:
            response = self.client.generate_content(
                self.request.model,
                self.request.contents,
                system_instruction=self.request.system_instruction,
                tools=self.request.tools or None,
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_output_tokens
            )
            log_performance("ai_request", time.perf_counter() - started,
                            {"model": self.request.model, "success": response.success})

            if response.success:
                self.response_ready.emit(response.data or {})
            elif response.status_code in (401, 403):
                self.error_occurred.emit("auth_error", "Invalid API key. Please check your Gemini API key.")
            elif response.status_code == 429:
                self.error_occurred.emit("rate_limit", "Rate limit exceeded. Please try again later.")
            elif response.status_code is None:
                self.error_occurred.emit("network_error", response.error or "Network error")
            else:
                self.error_occurred.emit("api_error", response.error or "Unknown API error")

        except Exception as e:
            logger.error(f"Unexpected error in AI request: {e}", exc_info=True)
            self.error_occurred.emit("unexpected_error", f"Unexpected error: {str(e)}")


class AIService(QObject):
    """Shared entry point panels use to reach the generative model."""

    request_started = pyqtSignal()
    request_finished = pyqtSignal()

    def __init__(self, config: AIConfig):
        super().__init__()
        self.config = config
        self._client: Optional[GeminiClient] = None
        self._workers: List[AIRequestWorker] = []

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def _get_client(self) -> GeminiClient:
        if not self.is_configured:
            raise AIConfigurationError("AI features are disabled. Gemini API key is missing.")
        if self._client is None:
            self._client = GeminiClient(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.retry_attempts
            )
        return self._client

    def submit(self, request: AIRequest,
               on_response: Callable[[dict], None],
               on_error: Callable[[str, str], None]) -> Optional[AIRequestWorker]:
        """
        Run ``request`` on a worker thread.

        Missing configuration is reported through ``on_error`` immediately.

        Returns:
            The started worker, or None when the request could not start
        """
        try:
            client = self._get_client()
        except AIConfigurationError as e:
            logger.warning(str(e))
            on_error("config_error", str(e))
            return None

        worker = AIRequestWorker(client, request, self.config)
        worker.response_ready.connect(on_response)
        worker.error_occurred.connect(on_error)
        worker.finished.connect(lambda: self._on_worker_finished(worker))
        self._workers.append(worker)

        self.request_started.emit()
        worker.start()
        logger.debug(f"AI request started on {request.model}")
        return worker

    def _on_worker_finished(self, worker: AIRequestWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()
        self.request_finished.emit()

    def shutdown(self) -> None:
        """Wait for in-flight requests before exit."""
        for worker in list(self._workers):
            worker.wait(2000)
        self._workers.clear()
        if self._client:
            self._client.close()
            self._client = None
