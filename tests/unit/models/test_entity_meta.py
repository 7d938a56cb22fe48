# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for entity type descriptors, EntityMeta and lookup."""

import pytest

from Cosyan.Admin.core._error_codes import METADATA_DUPLICATE_ENTITY_TYPE, METADATA_MALFORMED_PAYLOAD
from Cosyan.Admin.core.errors import MetadataError
from Cosyan.Admin.models.entity_meta import (
    EntityMeta,
    EntityTypeDescriptor,
    FieldDescriptor,
    ForeignKeyDescriptor,
    lookup,
)
from Cosyan.Admin.models.field_type import FieldKind, FieldType


class TestEntityMetaParsing:
    """Parsing the metadata endpoint body."""

    def test_entities_in_order(self, entity_meta_payload):
        meta = EntityMeta.from_api_response(entity_meta_payload)
        assert len(meta) == 2
        assert meta.names == ["user", "team"]

    def test_field_order_and_types(self, entity_meta_payload):
        user = EntityMeta.from_api_response(entity_meta_payload).find("user")
        assert user.field_names == ["id", "name", "age", "created"]
        assert [f.type.kind for f in user.fields] == [
            FieldKind.ID,
            FieldKind.VARCHAR,
            FieldKind.INTEGER,
            FieldKind.TIMESTAMP,
        ]

    def test_foreign_key_column(self, entity_meta_payload):
        user = EntityMeta.from_api_response(entity_meta_payload).find("user")
        assert user.foreign_keys == (
            ForeignKeyDescriptor(name="fk_team", type=FieldType.of("id"), ref_table="team", column_name="team"),
        )

    def test_foreign_key_column_name_spelling(self):
        fk = ForeignKeyDescriptor.from_api_response(
            {"name": "fk", "type": {"type": "id"}, "refTable": "t", "columnName": "c"}
        )
        assert fk.column_name == "c"

    def test_reverse_foreign_keys(self, entity_meta_payload):
        team = EntityMeta.from_api_response(entity_meta_payload).find("team")
        assert len(team.reverse_foreign_keys) == 1
        rfk = team.reverse_foreign_keys[0]
        assert (rfk.name, rfk.ref_table, rfk.ref_column) == ("members", "user", "team")

    def test_missing_optional_lists(self):
        meta = EntityMeta.from_api_response({"entities": [{"name": "bare"}]})
        bare = meta.find("bare")
        assert bare.fields == ()
        assert bare.foreign_keys == ()

    def test_duplicate_names_rejected(self, entity_meta_payload):
        entity_meta_payload["entities"].append({"name": "user", "fields": []})
        with pytest.raises(MetadataError) as exc_info:
            EntityMeta.from_api_response(entity_meta_payload)
        assert exc_info.value.subcode == METADATA_DUPLICATE_ENTITY_TYPE

    def test_missing_entities_list(self):
        with pytest.raises(MetadataError) as exc_info:
            EntityMeta.from_api_response({"tables": []})
        assert exc_info.value.subcode == METADATA_MALFORMED_PAYLOAD

    def test_descriptor_without_name(self):
        with pytest.raises(MetadataError):
            EntityMeta.from_api_response({"entities": [{"fields": []}]})

    def test_contains_and_iter(self, entity_meta_payload):
        meta = EntityMeta.from_api_response(entity_meta_payload)
        assert "team" in meta
        assert "nope" not in meta
        assert [d.name for d in meta] == ["user", "team"]


class TestLookup:
    """lookup() returns the unique match or None and never raises."""

    def setup_method(self):
        self.age = FieldDescriptor("age", FieldType.of("int"))
        self.meta = EntityMeta(
            entities=(
                EntityTypeDescriptor("user", fields=(self.age,)),
                EntityTypeDescriptor("team"),
            )
        )

    def test_found(self):
        assert lookup(self.meta, "user").fields == (self.age,)
        assert lookup(self.meta, "team").name == "team"

    def test_not_found(self):
        assert lookup(self.meta, "order") is None

    def test_case_sensitive(self):
        assert lookup(self.meta, "USER") is None

    def test_meta_not_loaded(self):
        assert lookup(None, "user") is None

    def test_plain_sequence(self):
        assert lookup(list(self.meta), "team") is self.meta.find("team")
