# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Package logger setup driven by :class:`~Cosyan.Admin.core.config.AdminConfig`."""

from __future__ import annotations

import logging

from .config import AdminConfig


def _configure_logging(config: AdminConfig) -> logging.Logger:
    """
    Return the package root logger, applying the configured level when enabled.

    Module loggers (``logging.getLogger(__name__)``) sit below this logger, so
    the level set here governs the whole package. Handlers are left to the
    application.
    """
    logger = logging.getLogger(config.logger_name)
    if config.enable_logging:
        logger.setLevel(getattr(logging, config.log_level.upper(), logging.WARNING))
    return logger
