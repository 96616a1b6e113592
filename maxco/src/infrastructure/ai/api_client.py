"""
Gemini API Client for MAXCO.

Provides an HTTP client for the Gemini ``generateContent`` REST endpoint
with error classification, authentication and retry logic.
"""

import json
import logging
import time
from typing import Dict, Any, Optional, List
from urllib.parse import urljoin
import requests
from dataclasses import dataclass

from .session_manager import session_manager

logger = logging.getLogger("maxco.api_client")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass
class APIResponse:
    """Standard API response wrapper."""
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    headers: Optional[Dict[str, str]] = None


@dataclass
class FunctionCall:
    """Function call requested by the model."""
    name: str
    args: Dict[str, Any]


class APIClientError(Exception):
    """Base exception for API client errors."""
    pass


class AuthenticationError(APIClientError):
    """Authentication failed."""
    pass


class RateLimitError(APIClientError):
    """Rate limit exceeded."""
    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class APIServerError(APIClientError):
    """Server-side error (5xx responses)."""
    pass


class GeminiClient:
    """
    HTTP client for the Gemini generative language API.

    Supports plain prompts, multi-turn contents, system instructions and
    function declarations.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 60,
        max_retries: int = 2,
        retry_delay: float = 1.0
    ):
        """
        Initialize the API client.

        Args:
            api_key: Gemini API key
            base_url: Base API URL
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries for failed requests
            retry_delay: Base delay between retries in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        session_manager.install_passthrough()
        self._setup_headers()

        logger.info(f"API client initialized: {self.base_url}")

    def _setup_headers(self):
        """Setup default headers for requests."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key
        session_manager.update_headers(headers)
        logger.debug("API client headers configured")

    def _handle_error_response(self, response: requests.Response) -> APIClientError:
        """Convert HTTP error responses to appropriate exceptions."""
        try:
            error_data = response.json()
            error_message = error_data.get("error", {}).get("message", "Unknown error")
        except (json.JSONDecodeError, KeyError, ValueError, AttributeError):
            error_message = f"HTTP {response.status_code}: {response.text[:200]}"

        if response.status_code in (401, 403):
            return AuthenticationError(f"Authentication failed: {error_message}")
        elif response.status_code == 429:
            retry_after = None
            if "retry-after" in response.headers:
                try:
                    retry_after = int(response.headers["retry-after"])
                except ValueError:
                    pass
            return RateLimitError(f"Rate limit exceeded: {error_message}", retry_after)
        elif response.status_code >= 500:
            return APIServerError(f"Server error: {error_message}")
        else:
            return APIClientError(f"API error ({response.status_code}): {error_message}")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> APIResponse:
        """
        Make HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (relative to base_url)
            data: Request body data
            params: URL parameters

        Returns:
            APIResponse object with success/error information
        """
        url = urljoin(f"{self.base_url}/", endpoint.lstrip('/'))

        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"API request attempt {attempt + 1}: {method} {endpoint}")

                response = session_manager.make_request(
                    method=method,
                    url=url,
                    json=data if data else None,
                    params=params,
                    timeout=self.timeout
                )

                if response.status_code < 400:
                    try:
                        return APIResponse(
                            success=True,
                            data=response.json(),
                            status_code=response.status_code,
                            headers=dict(response.headers)
                        )
                    except (json.JSONDecodeError, ValueError):
                        return APIResponse(
                            success=True,
                            data={"text": response.text},
                            status_code=response.status_code,
                            headers=dict(response.headers)
                        )

                error = self._handle_error_response(response)

                # For rate limits, respect retry-after header
                if isinstance(error, RateLimitError) and error.retry_after:
                    if attempt < self.max_retries:
                        logger.warning(f"Rate limited, waiting {error.retry_after}s before retry")
                        time.sleep(error.retry_after)
                        continue

                # For server errors, retry with exponential backoff
                if isinstance(error, APIServerError) and attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(f"Server error, retrying in {delay}s: {error}")
                    time.sleep(delay)
                    continue

                return APIResponse(
                    success=False,
                    error=str(error),
                    status_code=response.status_code,
                    headers=dict(response.headers)
                )

            except requests.Timeout as e:
                if attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(f"Request timeout, retrying in {delay}s: {e}")
                    time.sleep(delay)
                    continue

                return APIResponse(
                    success=False,
                    error=f"Request timeout after {self.timeout}s",
                    status_code=None
                )

            except requests.ConnectionError as e:
                if attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(f"Connection error, retrying in {delay}s: {e}")
                    time.sleep(delay)
                    continue

                return APIResponse(
                    success=False,
                    error=f"Connection error: {str(e)}",
                    status_code=None
                )

            except requests.RequestException as e:
                return APIResponse(
                    success=False,
                    error=f"Network error: {str(e)}",
                    status_code=None
                )

        return APIResponse(
            success=False,
            error="Maximum retries exceeded",
            status_code=None
        )

    def generate_content(
        self,
        model: str,
        contents: List[Dict[str, Any]],
        system_instruction: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None
    ) -> APIResponse:
        """
        Call ``models/{model}:generateContent``.

        Args:
            model: Model name
            contents: Conversation turns in Gemini ``contents`` format
            system_instruction: Optional system prompt
            tools: Optional tool list (function declarations)
            temperature: Sampling temperature
            max_output_tokens: Maximum tokens to generate

        Returns:
            APIResponse with the raw candidate payload
        """
        data: Dict[str, Any] = {"contents": contents}
        if system_instruction:
            data["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        if tools:
            data["tools"] = tools

        generation_config = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens
        if generation_config:
            data["generationConfig"] = generation_config

        logger.debug(f"generateContent request: model={model}, turns={len(contents)}")
        return self._make_request("POST", f"models/{model}:generateContent", data)

    def close(self):
        """Close the HTTP client."""
        # Session is managed globally
        logger.debug("API client closed")


def user_turn(text: str) -> Dict[str, Any]:
    return {"role": "user", "parts": [{"text": text}]}


def model_turn(text: str) -> Dict[str, Any]:
    return {"role": "model", "parts": [{"text": text}]}


def _candidate_parts(data: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not data:
        return []
    candidates = data.get("candidates") or []
    if not candidates:
        return []
    content = candidates[0].get("content") or {}
    return content.get("parts") or []


def extract_text(data: Optional[Dict[str, Any]]) -> str:
    """Concatenate the text parts of the first candidate."""
    return "".join(part.get("text", "") for part in _candidate_parts(data)).strip()


def extract_function_calls(data: Optional[Dict[str, Any]]) -> List[FunctionCall]:
    """Function calls requested by the first candidate, in order."""
    calls = []
    for part in _candidate_parts(data):
        call = part.get("functionCall")
        if call and call.get("name"):
            calls.append(FunctionCall(name=call["name"], args=dict(call.get("args") or {})))
    return calls
