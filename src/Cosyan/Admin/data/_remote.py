# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level client for the Cosyan server's entity endpoints.

All endpoints are plain GETs taking query parameters and answering JSON. A
non-2xx answer carries ``{"error": "<text>"}`` or ``{"error": {"msg": "<text>"}}``;
either is raised as :class:`~Cosyan.Admin.core.errors.RemoteError` with the
text verbatim.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..common.constants import (
    ENDPOINT_DELETE_ENTITY,
    ENDPOINT_ENTITY_META,
    ENDPOINT_LOAD_ENTITY,
    ENDPOINT_SEARCH_ENTITY,
    ENDPOINT_SQL,
    ID_PARAM,
    TABLE_PARAM,
)
from ..core._error_codes import TRANSPORT_ERROR, TRANSPORT_INVALID_JSON, http_subcode
from ..core._http import _HttpClient
from ..core.config import AdminConfig
from ..core.errors import RemoteError
from ..core.session import SessionContext
from ..models.entity import Entity
from ..models.entity_meta import EntityMeta
from ..models.query_builder import SearchQuery

_LOGGER = logging.getLogger(__name__)

_BODY_EXCERPT_LENGTH = 200


def _error_message(body: Any) -> Optional[str]:
    """Extract the server's error text from a decoded response body."""
    if not isinstance(body, dict) or "error" not in body:
        return None
    error = body["error"]
    if isinstance(error, dict):
        msg = error.get("msg", error.get("message"))
        return str(msg) if msg is not None else None
    return str(error) if error is not None else None


class _RemoteService:
    """
    Cosyan entity endpoints: metadata, search, load, delete and SQL.

    :param base_url: Server root, e.g. ``"http://localhost:7070"``. Trailing slash is removed.
    :type base_url: :class:`str`
    :param session_context: Token/session values attached to every request.
    :type session_context: ~Cosyan.Admin.core.session.SessionContext
    :param config: Retry and timeout settings.
    :type config: ~Cosyan.Admin.core.config.AdminConfig | None
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    :raises ValueError: If ``base_url`` is empty.
    """

    def __init__(
        self,
        base_url: str,
        session_context: Optional[SessionContext] = None,
        config: Optional[AdminConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").strip().rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.session_context = session_context or SessionContext.anonymous()
        self.config = config or AdminConfig.from_env()
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            max_backoff=self.config.http_max_backoff,
            jitter=self.config.http_jitter if self.config.http_jitter is not None else True,
            retry_transient_errors=(
                self.config.http_retry_transient_errors
                if self.config.http_retry_transient_errors is not None
                else True
            ),
            session=session,
        )

    def close(self) -> None:
        self._http.close()

    # ----------------------------- transport ---------------------------------

    def _get(self, operation: str, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        GET ``endpoint`` with session parameters added and return the decoded JSON body.

        :raises ~Cosyan.Admin.core.errors.RemoteError: On transport failure, a
            non-2xx status, or an undecodable success body.
        """
        url = f"{self.base_url}{endpoint}"
        query: Dict[str, Any] = dict(params or {})
        query.update(self.session_context.to_params())
        _LOGGER.debug("%s GET %s", operation, endpoint)
        try:
            r = self._http._request("get", url, params=query, headers={"Accept": "application/json"})
        except requests.exceptions.RequestException as exc:
            _LOGGER.warning("%s failed: %s", operation, exc)
            raise RemoteError(str(exc), subcode=TRANSPORT_ERROR, operation=operation) from exc

        try:
            body = r.json() if r.text else {}
        except ValueError:
            body = None

        if r.status_code >= 400:
            message = _error_message(body)
            excerpt = None
            if message is None:
                excerpt = (r.text or "")[:_BODY_EXCERPT_LENGTH]
                message = f"{operation} failed with HTTP {r.status_code}."
            _LOGGER.warning("%s returned %s: %s", operation, r.status_code, message)
            raise RemoteError(
                message,
                r.status_code,
                subcode=http_subcode(r.status_code),
                operation=operation,
                body_excerpt=excerpt,
            )
        if body is None:
            raise RemoteError(
                f"{operation} returned a response that is not JSON.",
                r.status_code,
                subcode=TRANSPORT_INVALID_JSON,
                operation=operation,
                body_excerpt=(r.text or "")[:_BODY_EXCERPT_LENGTH],
            )
        message = _error_message(body)
        if message is not None:
            raise RemoteError(message, r.status_code, operation=operation)
        return body

    @staticmethod
    def _first_result(body: Any) -> Any:
        result = body.get("result") if isinstance(body, dict) else None
        if not isinstance(result, list) or not result:
            return None
        return result[0]

    # ----------------------------- operations --------------------------------

    def fetch_entity_meta(self) -> EntityMeta:
        """Fetch every entity type descriptor."""
        body = self._get("fetch_entity_meta", ENDPOINT_ENTITY_META)
        return EntityMeta.from_api_response(body)

    def search_entities(self, type_name: str, filters: Optional[Mapping[str, Optional[str]]] = None) -> List[Entity]:
        """
        Search instances of ``type_name``.

        :param type_name: Entity type name.
        :type type_name: str
        :param filters: Field name to raw filter text; unpopulated entries are dropped.
        :type filters: dict[str, str] | None
        :return: Matching entities in server order.
        :rtype: list[Entity]
        """
        params = SearchQuery(type_name).where_all(filters).build()
        body = self._get("search_entities", ENDPOINT_SEARCH_ENTITY, params)
        rows = self._first_result(body) or []
        return [Entity.from_api_response(row) for row in rows]

    def fetch_entity(self, type_name: str, id: str) -> Entity:
        """
        Load one instance by id.

        :raises ~Cosyan.Admin.core.errors.RemoteError: If the server reports an
            error or returns no row.
        """
        body = self._get("fetch_entity", ENDPOINT_LOAD_ENTITY, {TABLE_PARAM: type_name, ID_PARAM: id})
        row = self._first_result(body)
        if not isinstance(row, dict):
            raise RemoteError(f"No '{type_name}' entity with id '{id}'.", operation="fetch_entity")
        return Entity.from_api_response(row)

    def delete_entity(self, type_name: str, id: str) -> None:
        self._get("delete_entity", ENDPOINT_DELETE_ENTITY, {TABLE_PARAM: type_name, ID_PARAM: id})

    def execute_sql(self, sql: str) -> Dict[str, Any]:
        """Run a statement through the server's SQL endpoint and return its body."""
        return self._get("execute_sql", ENDPOINT_SQL, {"sql": sql})
