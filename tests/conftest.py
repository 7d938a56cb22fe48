# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Cosyan admin client tests.

Sample payloads follow the server's JSON shapes for entity metadata and
loaded entities.
"""

import copy
import json
from unittest.mock import Mock

import pytest

from Cosyan.Admin.core.config import AdminConfig
from Cosyan.Admin.core.session import SessionContext

ENTITY_META_PAYLOAD = {
    "entities": [
        {
            "name": "user",
            "fields": [
                {"name": "id", "type": {"type": "id"}},
                {"name": "name", "type": {"type": "varchar"}},
                {"name": "age", "type": {"type": "integer"}},
                {"name": "created", "type": {"type": "timestamp"}},
            ],
            "foreignKeys": [
                {"name": "fk_team", "type": {"type": "id"}, "refTable": "team", "column": "team"},
            ],
            "reverseForeignKeys": [],
        },
        {
            "name": "team",
            "fields": [
                {"name": "id", "type": {"type": "id"}},
                {"name": "kind", "type": {"type": "enum", "values": ["internal", "external"]}},
            ],
            "foreignKeys": [],
            "reverseForeignKeys": [
                {"name": "members", "refTable": "user", "refColumn": "team"},
            ],
        },
    ]
}

LOADED_USER_PAYLOAD = {
    "type": "user",
    "pk": "id",
    "fields": [
        {"name": "id", "type": "id", "value": "7"},
        {"name": "name", "type": "varchar", "value": "alice"},
        {"name": "age", "type": "integer", "value": "30"},
        {"name": "created", "type": "timestamp", "value": "2020-01-01"},
    ],
    "foreignKeys": [
        {"columnName": "team", "type": "id", "name": "fk_team", "refTable": "team", "value": "1"},
    ],
    "reverseForeignKeys": [],
}


def make_response(status=200, body=None, text=None):
    """Build a response double; ``body`` is served as JSON, ``text`` as a non-JSON body."""
    r = Mock()
    r.status_code = status
    r.headers = {}
    if body is not None:
        r.text = json.dumps(body)
        r.json.return_value = body
    else:
        r.text = text or ""
        r.json.side_effect = ValueError("non-json")
    return r


@pytest.fixture
def entity_meta_payload():
    """Metadata endpoint body with a ``user`` and a ``team`` type."""
    return copy.deepcopy(ENTITY_META_PAYLOAD)


@pytest.fixture
def loaded_user_payload():
    """Load endpoint row for user 7."""
    return copy.deepcopy(LOADED_USER_PAYLOAD)


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return AdminConfig(http_retries=1, http_backoff=0.1, http_timeout=5)


@pytest.fixture
def session_context():
    return SessionContext(token="test_token_12345")


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "http://cosyan.example.com:7070"


@pytest.fixture
def response_factory():
    """Factory for response doubles, see :func:`make_response`."""
    return make_response
