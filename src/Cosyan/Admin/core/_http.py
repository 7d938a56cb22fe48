# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with automatic retry logic, timeout handling, and optional session support.

This module provides :class:`~Cosyan.Admin.core._http._HttpClient`, a wrapper
around the requests library that adds configurable retry behavior for transient
network errors and status codes, timeout defaults based on HTTP method types,
and optional connection pooling via session reuse.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Optional

import requests

_LOGGER = logging.getLogger(__name__)


class _HttpClient:
    """
    HTTP client with configurable retry logic, timeout handling, and optional session support.

    :param retries: Maximum number of attempts. Default is 5.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between retry attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param max_backoff: Upper bound for any single retry delay. Default is 60.0.
    :type max_backoff: :class:`float` | None
    :param jitter: Add +/-25% random variation to retry delays.
    :type jitter: :class:`bool`
    :param retry_transient_errors: Retry on 429, 502, 503 and 504 responses.
    :type retry_transient_errors: :class:`bool`
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        *,
        max_backoff: Optional[float] = None,
        jitter: bool = True,
        retry_transient_errors: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = retries if retries is not None else 5
        self.base_delay = backoff if backoff is not None else 0.5
        self.max_backoff = max_backoff if max_backoff is not None else 60.0
        self.default_timeout: Optional[float] = timeout
        self.jitter = jitter
        self.retry_transient_errors = retry_transient_errors
        self.transient_status_codes = {429, 502, 503, 504}
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request with automatic retry logic and timeout management.

        Applies default timeouts based on HTTP method (120s for POST/DELETE, 10s for others)
        and retries on network errors and transient status codes with exponential backoff.

        :param method: HTTP method (GET, POST, ...).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including params, headers, etc.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If all retry attempts fail.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "delete") else 10

        attempts = max(1, self.max_attempts)
        for attempt in range(attempts):
            try:
                if self._session is not None:
                    response = self._session.request(method, url, **kwargs)
                else:
                    response = requests.request(method, url, **kwargs)
            except requests.exceptions.RequestException as exc:
                if attempt == attempts - 1:
                    raise
                delay = self._calculate_retry_delay(attempt)
                _LOGGER.debug("%s %s failed (%s), retrying in %.2fs", method, url, exc, delay)
                time.sleep(delay)
                continue

            if (
                self.retry_transient_errors
                and response.status_code in self.transient_status_codes
                and attempt < attempts - 1
            ):
                delay = self._calculate_retry_delay(attempt, response)
                _LOGGER.debug("%s %s returned %s, retrying in %.2fs", method, url, response.status_code, delay)
                time.sleep(delay)
                continue
            return response

        raise RuntimeError("Unexpected end of retry loop")

    def _calculate_retry_delay(self, attempt: int, response: Optional[requests.Response] = None) -> float:
        """
        Delay before the next attempt.

        A valid integer ``Retry-After`` header wins (capped at ``max_backoff``);
        otherwise ``base_delay * 2**attempt`` capped at ``max_backoff``, with
        +/-25% jitter when enabled.
        """
        if response is not None and "Retry-After" in (response.headers or {}):
            try:
                return min(int(response.headers["Retry-After"]), self.max_backoff)
            except (ValueError, TypeError):
                pass

        delay = min(self.base_delay * (2**attempt), self.max_backoff)
        if self.jitter:
            jitter_range = delay * 0.25
            delay = max(0, delay + random.uniform(-jitter_range, jitter_range))
        return delay

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
