# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_ENV_PREFIX = "COSYAN_ADMIN_"


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _env_bool(env: Mapping[str, str], name: str) -> Optional[bool]:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AdminConfig:
    """
    Configuration settings for Cosyan admin client operations.

    :param http_retries: Maximum number of attempts for HTTP requests (default: 5).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_max_backoff: Maximum delay between retry attempts in seconds (default: 60.0).
    :type http_max_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param http_jitter: Whether to add jitter to retry delays (default: True).
    :type http_jitter: bool or None
    :param http_retry_transient_errors: Whether to retry 429, 502, 503, 504 responses (default: True).
    :type http_retry_transient_errors: bool or None
    :param enable_logging: Apply ``log_level`` to the package logger.
    :type enable_logging: bool
    :param log_level: Level name for the package logger (default: ``"WARNING"``).
    :type log_level: str
    :param logger_name: Root logger name of the package.
    :type logger_name: str
    """

    # HTTP retry and resilience configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_max_backoff: Optional[float] = None
    http_timeout: Optional[float] = None
    http_jitter: Optional[bool] = None
    http_retry_transient_errors: Optional[bool] = None

    # Logging configuration
    enable_logging: bool = False
    log_level: str = "WARNING"
    logger_name: str = "Cosyan.Admin"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AdminConfig":
        """
        Create a configuration instance from ``COSYAN_ADMIN_*`` environment variables.

        Unset variables keep their defaults, which are resolved later by the
        HTTP client (5 attempts, 0.5s backoff, 60s max backoff, jitter on).

        :param env: Mapping to read instead of :data:`os.environ`.
        :return: Configuration instance.
        :rtype: ~Cosyan.Admin.core.config.AdminConfig
        """
        env = os.environ if env is None else env
        log_level = env.get(_ENV_PREFIX + "LOG_LEVEL")
        return cls(
            http_retries=_env_int(env, "HTTP_RETRIES"),
            http_backoff=_env_float(env, "HTTP_BACKOFF"),
            http_max_backoff=_env_float(env, "HTTP_MAX_BACKOFF"),
            http_timeout=_env_float(env, "HTTP_TIMEOUT"),
            http_jitter=_env_bool(env, "HTTP_JITTER"),
            http_retry_transient_errors=_env_bool(env, "HTTP_RETRY_TRANSIENT_ERRORS"),
            enable_logging=bool(log_level),
            log_level=(log_level or "WARNING").upper(),
        )
