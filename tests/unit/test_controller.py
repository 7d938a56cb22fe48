# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for EntitySessionController view-state transitions."""

from unittest.mock import MagicMock

import pytest

from Cosyan.Admin.client import AdminClient
from Cosyan.Admin.controller import EntitySessionController, ViewState
from Cosyan.Admin.core.errors import RemoteError, ValidationError
from Cosyan.Admin.models.entity import Entity
from Cosyan.Admin.models.entity_meta import EntityMeta


@pytest.fixture
def meta(entity_meta_payload):
    return EntityMeta.from_api_response(entity_meta_payload)


@pytest.fixture
def client(meta):
    c = MagicMock()
    c.metadata.fetch.return_value = meta
    c.entities.search.return_value = []
    return c


@pytest.fixture
def view(client):
    return EntitySessionController(client)


@pytest.fixture
def user(loaded_user_payload):
    return Entity.from_api_response(loaded_user_payload)


class TestInitialState:

    def test_everything_absent(self, view):
        assert view.meta is None
        assert view.active_type is None
        assert view.entity_list is None
        assert view.loaded_entity is None
        assert view.error is None
        assert view.error_message is None
        assert view.state is ViewState.IDLE


class TestLoadMeta:

    def test_success(self, view, meta):
        view.load_meta()

        assert view.meta is meta
        assert view.error is None
        assert view.state is ViewState.META_LOADED

    def test_failure_clears_everything(self, view, client, user):
        view.load_meta()
        view.select_type("user")
        view.loaded_entity = user
        client.metadata.fetch.side_effect = RemoteError("boom")

        view.load_meta()

        assert view.meta is None
        assert view.active_type is None
        assert view.entity_list is None
        assert view.loaded_entity is None
        assert view.error_message == "boom"
        assert view.state is ViewState.IDLE

    def test_reload_reresolves_active_type(self, view, client, entity_meta_payload):
        view.load_meta()
        view.select_type("user")
        fresh = EntityMeta.from_api_response(entity_meta_payload)
        client.metadata.fetch.return_value = fresh

        view.load_meta()

        assert view.active_type is fresh.find("user")
        assert view.state is ViewState.ENTITY_SELECTED

    def test_reload_drops_vanished_type(self, view, client):
        view.load_meta()
        view.select_type("user")
        client.metadata.fetch.return_value = EntityMeta(entities=())

        view.load_meta()

        assert view.active_type is None

    def test_success_clears_previous_error(self, view, client, meta):
        client.metadata.fetch.side_effect = [RemoteError("boom"), meta]
        view.load_meta()
        view.load_meta()

        assert view.error is None
        assert view.meta is meta


class TestSelectType:

    def test_known_type(self, view):
        view.load_meta()
        view.select_type("team")
        assert view.active_type.name == "team"

    def test_unknown_type_is_noop(self, view):
        view.load_meta()
        view.select_type("team")
        view.select_type("order")
        assert view.active_type.name == "team"

    def test_before_meta_is_noop(self, view):
        view.select_type("user")
        assert view.active_type is None


class TestSearch:

    def test_without_type_makes_no_request(self, view, client):
        view.load_meta()
        view.search({"name": "alice"})

        client.entities.search.assert_not_called()
        assert view.entity_list is None

    def test_success(self, view, client, user):
        client.entities.search.return_value = [user]
        view.load_meta()
        view.select_type("user")

        view.search({"name": "alice"})

        client.entities.search.assert_called_once_with("user", {"name": "alice"})
        assert view.entity_list == [user]
        assert view.search_fields == {"name": "alice"}
        assert view.state is ViewState.SEARCHING

    def test_empty_result_is_not_absent(self, view):
        view.load_meta()
        view.select_type("user")

        view.search({})

        assert view.entity_list == []
        assert view.state is ViewState.SEARCHING

    def test_failure(self, view, client, user):
        view.load_meta()
        view.select_type("user")
        view.search({})
        view.loaded_entity = user
        client.entities.search.side_effect = RemoteError("bad filter")

        view.search({"age": "x"})

        assert view.entity_list is None
        assert view.loaded_entity is None
        assert view.error_message == "bad filter"
        assert view.meta is not None
        assert view.active_type is not None

    def test_none_repeats_previous_filters(self, view, client):
        view.load_meta()
        view.select_type("user")
        view.search({"name": "alice"})

        view.search()

        assert client.entities.search.call_count == 2
        client.entities.search.assert_called_with("user", {"name": "alice"})


class TestOpen:

    def test_success_keeps_list(self, view, client, user):
        client.entities.search.return_value = [user]
        client.entities.get.return_value = user
        view.load_meta()
        view.select_type("user")
        view.search({})

        view.open("user", "7")

        client.entities.get.assert_called_once_with("user", "7")
        assert view.loaded_entity is user
        assert view.entity_list == [user]
        assert view.state is ViewState.ENTITY_OPEN

    def test_failure_keeps_list(self, view, client, user):
        client.entities.search.return_value = [user]
        client.entities.get.side_effect = RemoteError("gone")
        view.load_meta()
        view.select_type("user")
        view.search({})

        view.open("user", "7")

        assert view.loaded_entity is None
        assert view.entity_list == [user]
        assert view.error_message == "gone"


class TestCreateNew:

    def test_builds_blank_entity_locally(self, view, client):
        view.load_meta()
        view.select_type("user")

        view.create_new()

        entity = view.loaded_entity
        assert entity.type == "user"
        assert all(entity[key] is None for key in entity)
        assert view.state is ViewState.ENTITY_NEW
        client.entities.get.assert_not_called()
        client.entities.search.assert_not_called()

    def test_without_type(self, view):
        view.load_meta()
        view.create_new()
        assert view.loaded_entity is None


class TestRemove:

    def test_researches_with_same_filters(self, view, client, user):
        view.load_meta()
        view.select_type("user")
        view.search({"name": "alice"})
        client.entities.search.return_value = []

        view.remove("user", "7")

        client.entities.delete.assert_called_once_with("user", "7")
        assert client.entities.search.call_count == 2
        client.entities.search.assert_called_with("user", {"name": "alice"})
        assert view.entity_list == []

    def test_failed_delete_still_researches(self, view, client):
        view.load_meta()
        view.select_type("user")
        view.search({"name": "alice"})
        client.entities.delete.side_effect = RemoteError("locked")

        view.remove("user", "7")

        assert client.entities.search.call_count == 2
        assert view.error is None


class TestSave:

    def test_success_keeps_entity(self, view, client, user):
        view.load_meta()
        view.loaded_entity = user
        view.error = RemoteError("old")

        view.save()

        client.entities.save.assert_called_once_with(user)
        assert view.loaded_entity is user
        assert view.error is None

    def test_failure_keeps_entity(self, view, client, user):
        view.load_meta()
        view.loaded_entity = user
        client.entities.save.side_effect = ValidationError("no id")

        view.save()

        assert view.loaded_entity is user
        assert view.error_message == "no id"

    def test_nothing_open(self, view, client):
        view.save()
        client.entities.save.assert_not_called()

    def test_insert_closes_new_entity_and_researches(self, view, client):
        view.load_meta()
        view.select_type("user")
        view.search({"name": "alice"})
        view.create_new()
        blank = view.loaded_entity

        view.save()

        client.entities.save.assert_called_once_with(blank)
        assert view.loaded_entity is None
        assert client.entities.search.call_count == 2
        client.entities.search.assert_called_with("user", {"name": "alice"})
        assert view.state is ViewState.SEARCHING

    def test_insert_without_search_does_not_search(self, view, client):
        view.load_meta()
        view.select_type("user")
        view.create_new()

        view.save()

        assert view.loaded_entity is None
        client.entities.search.assert_not_called()
        assert view.state is ViewState.ENTITY_SELECTED

    def test_failed_insert_keeps_new_entity(self, view, client):
        view.load_meta()
        view.select_type("user")
        view.create_new()
        blank = view.loaded_entity
        client.entities.save.side_effect = RemoteError("constraint")

        view.save()

        assert view.loaded_entity is blank
        assert view.state is ViewState.ENTITY_NEW
        assert view.error_message == "constraint"


class TestSaveThroughClient:

    def test_new_entity_inserted_once(self, entity_meta_payload):
        admin = AdminClient("http://cosyan.example.com")
        admin._remote = MagicMock()
        admin._remote.fetch_entity_meta.return_value = EntityMeta.from_api_response(entity_meta_payload)
        admin._remote.search_entities.return_value = []
        view = admin.controller()
        view.load_meta()
        view.select_type("user")
        view.search({})
        view.create_new()
        view.loaded_entity["name"] = "carol"

        view.save()
        view.save()

        inserts = [
            c.args[0] for c in admin._remote.execute_sql.call_args_list if c.args[0].startswith("insert into user")
        ]
        assert inserts == ["insert into user (id, name, age, created, team) values (null, 'carol', null, null, null);"]
        assert view.loaded_entity is None


class TestStaleResponses:

    def test_newer_search_wins(self, view, client, user):
        view.load_meta()
        view.select_type("user")
        newer = [user]

        def reentrant(type_name, filters):
            if filters.get("name") == "first":
                view.search({"name": "second"})
                return ["stale"]
            return newer

        client.entities.search.side_effect = reentrant

        view.search({"name": "first"})

        assert view.entity_list is newer
        assert view.search_fields == {"name": "second"}

    def test_stale_failure_ignored(self, view, client, user):
        view.load_meta()

        def reentrant(table, id):
            if id == "1":
                view.open("user", "7")
                raise RemoteError("stale")
            return user

        client.entities.get.side_effect = reentrant

        view.open("user", "1")

        assert view.loaded_entity is user
        assert view.error is None
