# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Session credentials threaded explicitly into the remote service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SessionContext:
    """
    Opaque session values the Cosyan server expects on every request.

    :param token: User token issued by the server's login endpoint.
    :type token: str | None
    :param session_id: Server-side session id, when the caller opened one.
    :type session_id: str | None

    Example::

        ctx = SessionContext(token="f3a9...")
        with AdminClient("http://localhost:7070", ctx) as client:
            meta = client.metadata.load_all()
    """

    token: Optional[str] = None
    session_id: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        """Query parameters identifying this session; empty for an anonymous context."""
        params: Dict[str, str] = {}
        if self.token:
            params["token"] = self.token
        if self.session_id:
            params["session"] = self.session_id
        return params

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()
