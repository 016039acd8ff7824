"""Shared HTTP client for providers.

Handles raw GET requests with retries. No data transformation - just
fetch and return JSON. Provider clients subclass this and add their
endpoints.
"""

import logging
import random
import threading
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Retry backoff configuration
RETRY_BASE_DELAY = 0.5  # Start at 500ms
RETRY_MAX_DELAY = 8.0
RETRY_JITTER = 0.3  # ±30% randomization


class JSONHTTPClient:
    """Low-level JSON-over-HTTP client with retry and lazy connection pool."""

    # Tag used in log lines, e.g. "[BOVADA]"
    LOG_TAG = "HTTP"

    def __init__(
        self,
        timeout: float = 10.0,
        retry_count: int = 2,
        headers: dict[str, str] | None = None,
    ):
        self._timeout = timeout
        self._retry_count = max(1, retry_count)
        self._headers = headers or {}
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        headers=self._headers,
                        follow_redirects=True,
                    )
        return self._client

    def _calculate_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter: 0.5, 1, 2... capped."""
        base_delay = RETRY_BASE_DELAY * (2**attempt)
        capped = min(base_delay, RETRY_MAX_DELAY)
        jitter = capped * RETRY_JITTER * (2 * random.random() - 1)
        return max(0.1, capped + jitter)

    def _request(self, url: str, params: dict | None = None) -> Any | None:
        """GET a URL and decode JSON.

        Client errors (4xx) are not retried. Returns None when every attempt
        failed.
        """
        for attempt in range(self._retry_count):
            try:
                response = self._get_client().get(url, params=params)
                response.raise_for_status()
                logger.debug("[FETCH] %s", url)
                return response.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                logger.warning("[%s] HTTP %d for %s", self.LOG_TAG, status, url)
                if status < 500 and status != 429:
                    return None
            except (httpx.RequestError, RuntimeError, OSError) as e:
                # RuntimeError: client was closed; OSError: stale socket
                logger.warning("[%s] Request failed for %s: %s", self.LOG_TAG, url, e)
            except ValueError as e:
                logger.warning("[%s] Invalid JSON from %s: %s", self.LOG_TAG, url, e)
                return None

            if attempt < self._retry_count - 1:
                time.sleep(self._calculate_delay(attempt))

        return None

    def close(self) -> None:
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()
