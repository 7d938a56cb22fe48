# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity type metadata models.

Descriptors are fetched once per session from the server's entity metadata
endpoint and are immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core._error_codes import METADATA_DUPLICATE_ENTITY_TYPE, METADATA_MALFORMED_PAYLOAD
from ..core.errors import MetadataError
from .field_type import FieldType


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One column of an entity type.

    :param name: Column name.
    :type name: str
    :param type: Column type.
    :type type: ~Cosyan.Admin.models.field_type.FieldType
    """

    name: str
    type: FieldType

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "FieldDescriptor":
        return cls(
            name=response_data.get("name", ""),
            type=FieldType.from_api_response(response_data.get("type")),
        )


@dataclass(frozen=True)
class ForeignKeyDescriptor:
    """
    Reference from one entity type to another.

    :param name: Foreign key name.
    :type name: str
    :param type: Type of the referencing column.
    :type type: ~Cosyan.Admin.models.field_type.FieldType
    :param ref_table: Name of the referenced entity type.
    :type ref_table: str
    :param column_name: Physical join column in the referencing table.
    :type column_name: str
    """

    name: str
    type: FieldType
    ref_table: str
    column_name: str

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "ForeignKeyDescriptor":
        # Metadata spells the join column "column"; loaded rows use "columnName".
        column_name = response_data.get("column", response_data.get("columnName", ""))
        return cls(
            name=response_data.get("name", ""),
            type=FieldType.from_api_response(response_data.get("type")),
            ref_table=response_data.get("refTable", ""),
            column_name=column_name,
        )


@dataclass(frozen=True)
class ReverseForeignKeyDescriptor:
    """
    Reference into this entity type from another one.

    :param name: Reverse foreign key name.
    :type name: str
    :param ref_table: Referencing entity type.
    :type ref_table: str
    :param ref_column: Column of ``ref_table`` holding the reference.
    :type ref_column: str
    """

    name: str
    ref_table: str
    ref_column: str

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "ReverseForeignKeyDescriptor":
        return cls(
            name=response_data.get("name", ""),
            ref_table=response_data.get("refTable", ""),
            ref_column=response_data.get("refColumn", ""),
        )


@dataclass(frozen=True)
class EntityTypeDescriptor:
    """
    Schema description of one entity type.

    :param name: Entity type name, unique within an :class:`EntityMeta`.
    :type name: str
    :param fields: Columns in server order.
    :type fields: tuple[FieldDescriptor, ...]
    :param foreign_keys: Outgoing references in server order.
    :type foreign_keys: tuple[ForeignKeyDescriptor, ...]
    :param reverse_foreign_keys: Incoming references in server order.
    :type reverse_foreign_keys: tuple[ReverseForeignKeyDescriptor, ...]
    """

    name: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    foreign_keys: Tuple[ForeignKeyDescriptor, ...] = field(default_factory=tuple)
    reverse_foreign_keys: Tuple[ReverseForeignKeyDescriptor, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "EntityTypeDescriptor":
        """
        Create a descriptor from one element of the metadata payload's ``entities`` list.

        :param response_data: Raw descriptor dictionary.
        :type response_data: dict[str, Any]
        :return: EntityTypeDescriptor instance.
        :rtype: EntityTypeDescriptor
        :raises ~Cosyan.Admin.core.errors.MetadataError: If the descriptor has no name.
        """
        if not isinstance(response_data, dict) or not response_data.get("name"):
            raise MetadataError(
                "Entity type descriptor without a name.",
                subcode=METADATA_MALFORMED_PAYLOAD,
                details={"descriptor": response_data},
            )
        return cls(
            name=response_data["name"],
            fields=tuple(FieldDescriptor.from_api_response(f) for f in response_data.get("fields") or ()),
            foreign_keys=tuple(
                ForeignKeyDescriptor.from_api_response(fk) for fk in response_data.get("foreignKeys") or ()
            ),
            reverse_foreign_keys=tuple(
                ReverseForeignKeyDescriptor.from_api_response(rfk)
                for rfk in response_data.get("reverseForeignKeys") or ()
            ),
        )


@dataclass(frozen=True)
class EntityMeta:
    """
    The full, ordered set of entity type descriptors known to the server.

    Supports iteration, ``len()`` and ``in`` by type name.

    Example::

        meta = client.metadata.load_all()
        for descriptor in meta:
            print(descriptor.name, descriptor.field_names)
        user = meta.find("user")
    """

    entities: Tuple[EntityTypeDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen = set()
        for descriptor in self.entities:
            if descriptor.name in seen:
                raise MetadataError(
                    f"Duplicate entity type '{descriptor.name}' in metadata.",
                    subcode=METADATA_DUPLICATE_ENTITY_TYPE,
                    details={"name": descriptor.name},
                )
            seen.add(descriptor.name)

    def __iter__(self) -> Iterator[EntityTypeDescriptor]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, name: object) -> bool:
        return any(e.name == name for e in self.entities)

    @property
    def names(self) -> List[str]:
        return [e.name for e in self.entities]

    def find(self, name: str) -> Optional[EntityTypeDescriptor]:
        return lookup(self.entities, name)

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "EntityMeta":
        """
        Create the collection from the metadata endpoint body (``{"entities": [...]}``).

        :raises ~Cosyan.Admin.core.errors.MetadataError: If the body is not a dict
            with an ``entities`` list, or a type name repeats.
        """
        entities = response_data.get("entities") if isinstance(response_data, dict) else None
        if not isinstance(entities, list):
            raise MetadataError(
                "Entity metadata response has no 'entities' list.",
                subcode=METADATA_MALFORMED_PAYLOAD,
            )
        return cls(entities=tuple(EntityTypeDescriptor.from_api_response(e) for e in entities))


def lookup(meta: Optional[Iterable[EntityTypeDescriptor]], name: str) -> Optional[EntityTypeDescriptor]:
    """
    Find the descriptor named ``name``.

    Returns ``None`` when there is no match or ``meta`` itself is ``None``;
    metadata that has not arrived yet is a normal state, not an error.
    """
    if meta is None:
        return None
    for descriptor in meta:
        if descriptor.name == name:
            return descriptor
    return None


__all__ = [
    "FieldDescriptor",
    "ForeignKeyDescriptor",
    "ReverseForeignKeyDescriptor",
    "EntityTypeDescriptor",
    "EntityMeta",
    "lookup",
]
