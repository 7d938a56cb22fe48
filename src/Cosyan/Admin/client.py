# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Optional

import requests

from .controller import EntitySessionController
from .core._logging import _configure_logging
from .core.config import AdminConfig
from .core.session import SessionContext
from .data._remote import _RemoteService
from .operations.entities import EntityOperations
from .operations.metadata import MetadataOperations


class AdminClient:
    """
    High-level client for the Cosyan server's entity administration endpoints.

    Handles the session context and delegates HTTP operations to an internal
    :class:`~Cosyan.Admin.data._remote._RemoteService`.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases it on exit::

            with AdminClient("http://localhost:7070", SessionContext(token)) as client:
                meta = client.metadata.load_all()

    Operations are organized under namespaces:

    - ``client.metadata``: entity type descriptors (memoized) and lookup
    - ``client.entities``: search, get, new, save and delete entities

    :meth:`controller` returns an
    :class:`~Cosyan.Admin.controller.EntitySessionController` that drives a
    single interactive view over these operations.

    :param base_url: Cosyan server root, e.g. ``"http://localhost:7070"``.
        Trailing slash is automatically removed.
    :type base_url: :class:`str`
    :param session_context: Token and session values sent with every request.
    :type session_context: ~Cosyan.Admin.core.session.SessionContext or None
    :param config: Optional retry, timeout and logging configuration. If not
        provided, :meth:`~Cosyan.Admin.core.config.AdminConfig.from_env` is used.
    :type config: ~Cosyan.Admin.core.config.AdminConfig or None

    :raises ValueError: If ``base_url`` is missing or empty after trimming.

    .. note::
        The internal remote service is created lazily on first use, so
        constructing a client makes no network calls.
    """

    def __init__(
        self,
        base_url: str,
        session_context: Optional[SessionContext] = None,
        config: Optional[AdminConfig] = None,
    ) -> None:
        self._base_url = (base_url or "").strip().rstrip("/")
        if not self._base_url:
            raise ValueError("base_url is required.")
        self.session_context = session_context or SessionContext.anonymous()
        self._config = config or AdminConfig.from_env()
        self._logger = _configure_logging(self._config)
        self._remote: Optional[_RemoteService] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.metadata = MetadataOperations(self)
        self.entities = EntityOperations(self)

    def __enter__(self) -> "AdminClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling. Requests made within the
        context reuse it.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            if self._remote is not None:
                # Rebuild so the pooled session is picked up.
                self._remote.close()
                self._remote = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources. Safe to call multiple times.
        """
        if self._remote is not None:
            self._remote.close()
            self._remote = None
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
        self._owns_session = False

    def _get_remote(self) -> _RemoteService:
        """
        Get or create the internal remote service.

        :rtype: ~Cosyan.Admin.data._remote._RemoteService
        """
        if self._remote is None:
            self._remote = _RemoteService(
                self._base_url,
                self.session_context,
                self._config,
                session=self._session,
            )
        return self._remote

    def controller(self) -> EntitySessionController:
        """
        Create a controller for one interactive entity view.

        :rtype: ~Cosyan.Admin.controller.EntitySessionController
        """
        return EntitySessionController(self)


__all__ = ["AdminClient"]
