# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exception hierarchy for the Cosyan admin client.

Every error carries a stable ``code`` (the error family) and an optional
``subcode`` from :mod:`~Cosyan.Admin.core._error_codes` so callers can branch
on the failure without parsing messages.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class AdminError(Exception):
    """Base structured error for the Cosyan admin client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(AdminError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class MetadataError(AdminError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="metadata_error", subcode=subcode, details=details, source="client")


class RemoteError(AdminError):
    """
    Failure reported by (or on the way to) the Cosyan server.

    ``message`` is the server's error text verbatim when the response carried
    one, so it can be shown to the user as-is.

    :param message: Error text.
    :type message: :class:`str`
    :param status_code: HTTP status, or ``None`` for transport failures.
    :type status_code: :class:`int` | None
    :param subcode: Subcode constant, e.g. ``http_500`` or ``transport_error``.
    :type subcode: :class:`str` | None
    :param operation: Name of the remote operation that failed.
    :type operation: :class:`str` | None
    :param body_excerpt: Leading part of a non-JSON response body.
    :type body_excerpt: :class:`str` | None
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        *,
        subcode: Optional[str] = None,
        operation: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if operation is not None:
            d["operation"] = operation
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="remote_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
        )


__all__ = ["AdminError", "RemoteError", "ValidationError", "MetadataError"]
