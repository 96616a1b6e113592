"""
Centralized Session Manager for HTTP requests in MAXCO.

Provides thread-safe session management with connection pooling and a
pass-through adapter: every request goes to the network as issued, with
no response caching and no offline fallback.
"""

import threading
import logging
from typing import Optional, Dict, Any
from contextlib import contextmanager

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("maxco.session_manager")


class PassthroughAdapter(HTTPAdapter):
    """
    Network-only adapter.

    Forwards each prepared request unmodified and returns the live
    response. Counts forwarded requests for diagnostics.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.forwarded = 0

    def send(self, request, **kwargs):
        self.forwarded += 1
        logger.debug(f"Pass-through {request.method} {request.url}")
        return super().send(request, **kwargs)


class SessionManager:
    """
    Thread-safe session manager for HTTP requests.

    Features:
    - Single session object shared across the application
    - Pass-through adapters mounted for http and https
    - Thread-safe access with proper locking
    - Retry logic with exponential backoff
    - Proper resource cleanup
    """

    _instance: Optional['SessionManager'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'SessionManager':
        """Singleton pattern to ensure single session manager instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the session manager (called only once due to singleton)."""
        if self._initialized:
            return

        self._session: Optional[requests.Session] = None
        self._session_lock = threading.RLock()  # Reentrant lock for nested calls
        self._adapters: Dict[str, PassthroughAdapter] = {}
        self._default_timeout = 30
        self._initialized = True

        logger.info("SessionManager initialized")

    def configure_session(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        backoff_factor: float = 0.3,
        pool_connections: int = 10,
        pool_maxsize: int = 20,
        pool_block: bool = False
    ) -> None:
        """
        Configure the session with connection pooling and retry settings.

        Args:
            timeout: Default timeout for requests in seconds
            max_retries: Maximum number of retries for failed requests
            backoff_factor: Factor for exponential backoff between retries
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections in each pool
            pool_block: Whether to block when pool is at max capacity
        """
        with self._session_lock:
            # Close existing session if it exists
            if self._session:
                self._close_session()

            self._session = requests.Session()
            self._default_timeout = timeout

            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=backoff_factor,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["HEAD", "GET", "OPTIONS", "POST"]
            )

            for scheme in ("http", "https"):
                adapter = PassthroughAdapter(
                    max_retries=retry_strategy,
                    pool_connections=pool_connections,
                    pool_maxsize=pool_maxsize,
                    pool_block=pool_block
                )
                self._session.mount(f"{scheme}://", adapter)
                self._adapters[scheme] = adapter

            self._session.headers.update({
                "User-Agent": "MAXCO-RepairAI/0.1.0",
                "Accept": "application/json",
                "Content-Type": "application/json"
            })

            logger.info(f"Session configured: timeout={timeout}s, retries={max_retries}, pool_size={pool_maxsize}")

    def install_passthrough(self) -> None:
        """Install the network-only session with defaults if none is configured."""
        with self._session_lock:
            if self._session is None:
                self.configure_session()
                logger.info("Network pass-through installed")

    @contextmanager
    def get_session(self):
        """
        Get the configured session in a thread-safe manner.

        Yields:
            requests.Session: The configured session object

        Raises:
            RuntimeError: If session is not configured
        """
        with self._session_lock:
            if self._session is None:
                raise RuntimeError("Session not configured. Call configure_session() first.")

            try:
                yield self._session
            except Exception as e:
                logger.error(f"Error during session usage: {e}")
                raise

    def make_request(
        self,
        method: str,
        url: str,
        timeout: Optional[int] = None,
        **kwargs
    ) -> requests.Response:
        """
        Make an HTTP request using the managed session.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            timeout: Request timeout (uses default if None)
            **kwargs: Additional arguments passed to requests

        Returns:
            requests.Response: The response object

        Raises:
            requests.RequestException: For request-related errors
            RuntimeError: If session is not configured
        """
        if timeout is None:
            timeout = self._default_timeout

        with self.get_session() as session:
            logger.debug(f"Making {method} request to {url.split('?')[0]}")

            try:
                response = session.request(
                    method=method,
                    url=url,
                    timeout=timeout,
                    **kwargs
                )

                logger.debug(f"Request completed: {method} -> {response.status_code}")
                return response

            except requests.RequestException as e:
                logger.error(f"Request failed: {method} -> {type(e).__name__}: {e}")
                raise

    def update_headers(self, headers: Dict[str, str]) -> None:
        """
        Update default headers for all requests.

        Args:
            headers: Dictionary of headers to add/update
        """
        with self._session_lock:
            if self._session:
                self._session.headers.update(headers)
                logger.debug(f"Headers updated: {list(headers.keys())}")
            else:
                logger.warning("Cannot update headers: session not configured")

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get information about the current session.

        Returns:
            Dict with session and adapter information
        """
        info = {
            "session_configured": self._session is not None,
            "adapters": list(self._adapters.keys()),
            "default_timeout": self._default_timeout,
            "forwarded": {scheme: adapter.forwarded for scheme, adapter in self._adapters.items()},
        }
        return info

    def _close_session(self) -> None:
        """Close the current session and clean up resources."""
        if self._session:
            try:
                self._session.close()
                logger.debug("Session closed")
            except Exception as e:
                logger.warning(f"Error closing session: {e}")
            finally:
                self._session = None
                self._adapters.clear()

    def close(self) -> None:
        """Close the session manager and clean up all resources."""
        with self._session_lock:
            self._close_session()

        logger.info("SessionManager closed")

    @property
    def is_configured(self) -> bool:
        """Check if the session is configured and ready to use."""
        with self._session_lock:
            return self._session is not None


# Global session manager instance
session_manager = SessionManager()
