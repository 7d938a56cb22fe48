# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity instance model for the Cosyan admin client.

An :class:`Entity` is one row of an entity type, held as an ordered list of
typed field values so it can be rendered and edited generically. Entities
come from two places: :func:`build_entity` creates a blank one from its
type descriptor, and :meth:`Entity.from_api_response` wraps a row loaded
from the server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .entity_meta import EntityTypeDescriptor, ReverseForeignKeyDescriptor
from .field_type import FieldType


@dataclass
class FieldValue:
    """
    Value of one column.

    ``value is None`` means no value has been entered, which is distinct
    from an empty string or zero.

    :param name: Column name.
    :type name: str
    :param type: Column type, copied from the descriptor.
    :type type: ~Cosyan.Admin.models.field_type.FieldType
    :param value: Scalar value or ``None``.
    """

    name: str
    type: FieldType
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.name, "value": self.value}


@dataclass
class ForeignKeyValue:
    """
    Value of a referencing column, with enough metadata to pick the referenced entity.

    :param name: Foreign key name.
    :type name: str
    :param type: Type of the referencing column.
    :type type: ~Cosyan.Admin.models.field_type.FieldType
    :param ref_table: Referenced entity type.
    :type ref_table: str
    :param column_name: Referencing column name.
    :type column_name: str
    :param value: Id of the referenced entity or ``None``.
    """

    name: str
    type: FieldType
    ref_table: str
    column_name: str
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.name,
            "refTable": self.ref_table,
            "columnName": self.column_name,
            "value": self.value,
        }


@dataclass
class Entity:
    """
    One instance of an entity type.

    Provides dict-like access to values by column name. Foreign key values are
    addressed by their column name.

    :param type: Entity type name.
    :type type: str
    :param fields: Field values in descriptor order.
    :type fields: list[FieldValue]
    :param foreign_keys: Foreign key values in descriptor order.
    :type foreign_keys: list[ForeignKeyValue]
    :param reverse_foreign_keys: Incoming references, for navigation.
    :type reverse_foreign_keys: list[ReverseForeignKeyDescriptor]
    :param pk: Name of the primary key field; ``None`` for a blank entity.
    :type pk: str | None

    Example::

        entity = client.entities.get("user", "17")
        print(entity.id, entity["name"])
        entity["age"] = 42
    """

    type: str
    fields: List[FieldValue] = field(default_factory=list)
    foreign_keys: List[ForeignKeyValue] = field(default_factory=list)
    reverse_foreign_keys: List[ReverseForeignKeyDescriptor] = field(default_factory=list)
    pk: Optional[str] = None

    def _find(self, key: str) -> Any:
        for f in self.fields:
            if f.name == key:
                return f
        for fk in self.foreign_keys:
            if fk.column_name == key:
                return fk
        raise KeyError(key)

    def __getitem__(self, key: str) -> Any:
        return self._find(key).value

    def __setitem__(self, key: str, value: Any) -> None:
        self._find(key).value = value

    def __contains__(self, key: object) -> bool:
        return any(k == key for k in self)

    def __iter__(self) -> Iterator[str]:
        for f in self.fields:
            yield f.name
        for fk in self.foreign_keys:
            yield fk.column_name

    def __len__(self) -> int:
        return len(self.fields) + len(self.foreign_keys)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    @property
    def is_new(self) -> bool:
        """True for an entity that has not been loaded from the server."""
        return self.pk is None

    @property
    def id(self) -> Any:
        """Primary key value, or ``None`` for a blank entity."""
        if self.pk is None:
            return None
        return self.get(self.pk)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain ``{column: value}`` dictionary.

        :rtype: dict[str, Any]
        """
        return {key: self[key] for key in self}

    def to_full_dict(self) -> Dict[str, Any]:
        """Convert to the server's entity JSON shape."""
        result: Dict[str, Any] = {
            "type": self.type,
            "fields": [f.to_dict() for f in self.fields],
            "foreignKeys": [fk.to_dict() for fk in self.foreign_keys],
            "reverseForeignKeys": [
                {"name": r.name, "refTable": r.ref_table, "refColumn": r.ref_column}
                for r in self.reverse_foreign_keys
            ],
        }
        if self.pk is not None:
            result["pk"] = self.pk
        return result

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "Entity":
        """
        Create an Entity from a row returned by the load or search endpoints.

        :param response_data: Raw entity dictionary.
        :type response_data: dict[str, Any]
        :return: Entity instance.
        :rtype: Entity
        """
        fields = [
            FieldValue(
                name=f.get("name", ""),
                type=FieldType.from_api_response(f.get("type")),
                value=f.get("value"),
            )
            for f in response_data.get("fields") or ()
        ]
        foreign_keys = [
            ForeignKeyValue(
                name=fk.get("name", ""),
                type=FieldType.from_api_response(fk.get("type")),
                ref_table=fk.get("refTable", ""),
                column_name=fk.get("columnName", fk.get("column", "")),
                value=fk.get("value"),
            )
            for fk in response_data.get("foreignKeys") or ()
        ]
        reverse_foreign_keys = [
            ReverseForeignKeyDescriptor.from_api_response(rfk)
            for rfk in response_data.get("reverseForeignKeys") or ()
        ]
        return cls(
            type=response_data.get("type", ""),
            fields=fields,
            foreign_keys=foreign_keys,
            reverse_foreign_keys=reverse_foreign_keys,
            pk=response_data.get("pk"),
        )


def build_entity(descriptor: Optional[EntityTypeDescriptor]) -> Optional[Entity]:
    """
    Build a blank entity of the given type.

    Every field and foreign key gets ``value=None``; names, types and order
    are copied from the descriptor. Returns ``None`` when ``descriptor`` is
    ``None`` so callers can invoke it before a type has been selected.

    :param descriptor: Entity type to instantiate.
    :type descriptor: ~Cosyan.Admin.models.entity_meta.EntityTypeDescriptor | None
    :return: Blank entity, or ``None``.
    :rtype: Entity | None

    Example::

        user = client.metadata.lookup("user")
        blank = build_entity(user)
        blank["age"] = 42
    """
    if descriptor is None:
        return None
    return Entity(
        type=descriptor.name,
        fields=[FieldValue(name=f.name, type=f.type, value=None) for f in descriptor.fields],
        foreign_keys=[
            ForeignKeyValue(
                name=fk.name,
                type=fk.type,
                ref_table=fk.ref_table,
                column_name=fk.column_name,
                value=None,
            )
            for fk in descriptor.foreign_keys
        ],
        reverse_foreign_keys=list(descriptor.reverse_foreign_keys),
    )


__all__ = ["FieldValue", "ForeignKeyValue", "Entity", "build_entity"]
