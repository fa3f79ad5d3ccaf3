# src/scrapers/base_client.py

"""Shared HTTP plumbing for the Shopee, Gemini and image clients."""

import logging
import time
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings


class BaseClient:
    """curl_cffi session with retries and a circuit breaker."""

    def __init__(self, client_name: str, timeout: int | None = None) -> None:
        self.client_name = client_name
        self.logger = logging.getLogger(f"promo_cards.{client_name}")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._consecutive_failures: int = 0
        self._circuit_open: bool = False
        self._circuit_opened_at: float = 0.0
        self._request_timeout: int = (
            timeout if timeout is not None else self.settings.REQUEST_TIMEOUT
        )

    def _check_circuit(self) -> bool:
        """Return True if the circuit breaker blocks this request.

        After CIRCUIT_BREAKER_COOLDOWN seconds the breaker enters
        a half-open state, allowing a single trial request through.
        """
        if not self._circuit_open:
            return False
        elapsed = time.time() - self._circuit_opened_at
        if elapsed >= self.settings.CIRCUIT_BREAKER_COOLDOWN:
            self.logger.info(
                "[%s] Circuit breaker half-open after %.0fs",
                self.client_name,
                elapsed,
            )
            self._circuit_open = False
            return False
        return True

    def _record_success(self) -> None:
        """Reset failure counters after a successful call."""
        self._consecutive_failures = 0
        self._circuit_open = False
        self._circuit_opened_at = 0.0

    def _record_failure(self) -> None:
        """Track failure and open circuit breaker if needed."""
        self._consecutive_failures += 1
        if self._consecutive_failures >= self.settings.CIRCUIT_BREAKER_THRESHOLD:
            self._circuit_open = True
            self._circuit_opened_at = time.time()
            self.logger.error(
                "[%s] Circuit breaker opened after %d consecutive failures",
                self.client_name,
                self._consecutive_failures,
            )

    def _request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: str | bytes | None = None,
        json: dict[str, Any] | None = None,
        retry_statuses: tuple[int, ...] = (429, 500, 502, 503, 504),
    ) -> curl_requests.Response | None:
        """Send a request with retries.

        Returns the first 200 response, or the last non-retryable
        response so callers can read the error body.  Returns ``None``
        when the breaker is open or every attempt raised.
        """
        if self._check_circuit():
            self.logger.warning(
                "[%s] Circuit open, skipping %s %s",
                self.client_name,
                method,
                url[:80],
            )
            return None

        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.request(
                    method,
                    url,
                    headers=headers,
                    data=data,
                    json=json,
                    timeout=self._request_timeout,
                )
                if resp.status_code == 200:
                    self._record_success()
                    return resp
                self.logger.warning(
                    "[%s] HTTP %d on attempt %d",
                    self.client_name,
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code not in retry_statuses:
                    self._record_failure()
                    return resp
                time.sleep(self.settings.RETRY_DELAY * (attempt + 1))
            except Exception as exc:
                self.logger.warning(
                    "[%s] Request error on attempt %d: %s",
                    self.client_name,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                time.sleep(self.settings.RETRY_DELAY * (attempt + 1))
        self._record_failure()
        return None

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> curl_requests.Response | None:
        """GET with retries and circuit breaker."""
        return self._request("GET", url, headers=headers)

    def _fetch_post(
        self,
        url: str,
        headers: dict[str, str],
        payload: str | dict[str, Any],
    ) -> curl_requests.Response | None:
        """POST a raw body (pre-serialised, e.g. for signing) or a JSON dict."""
        if isinstance(payload, dict):
            return self._request("POST", url, headers=headers, json=payload)
        return self._request("POST", url, headers=headers, data=payload)
