# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Field type tags for Cosyan entity metadata.

The server describes column types by name. :class:`FieldKind` closes that set
so value formatting can branch exhaustively instead of guessing from strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class FieldKind(str, Enum):
    """Closed set of column type tags."""

    VARCHAR = "varchar"
    ENUM = "enum"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    ID = "id"
    OTHER = "other"

    @property
    def is_string_like(self) -> bool:
        """Values of this kind are always rendered as quoted literals."""
        return self in (FieldKind.VARCHAR, FieldKind.ENUM)

    @property
    def is_numeric(self) -> bool:
        """Values of this kind render unquoted when they coerce to a number."""
        return self in (FieldKind.BOOLEAN, FieldKind.INTEGER, FieldKind.FLOAT, FieldKind.ID, FieldKind.OTHER)


_KIND_ALIASES: Dict[str, FieldKind] = {
    "varchar": FieldKind.VARCHAR,
    "string": FieldKind.VARCHAR,
    "enum": FieldKind.ENUM,
    "timestamp": FieldKind.TIMESTAMP,
    "boolean": FieldKind.BOOLEAN,
    "bool": FieldKind.BOOLEAN,
    "integer": FieldKind.INTEGER,
    "int": FieldKind.INTEGER,
    "long": FieldKind.INTEGER,
    "float": FieldKind.FLOAT,
    "double": FieldKind.FLOAT,
    "id": FieldKind.ID,
}


def kind_from_name(type_name: str) -> FieldKind:
    """Resolve a server type name; unknown names fall into the numeric ``OTHER`` kind."""
    return _KIND_ALIASES.get((type_name or "").strip().lower(), FieldKind.OTHER)


@dataclass(frozen=True)
class FieldType:
    """
    Column type as described by the server.

    :param name: Raw type name from the server (e.g. ``"varchar"``, ``"int"``).
    :type name: str
    :param kind: Closed tag derived from ``name``.
    :type kind: FieldKind
    :param values: Allowed values for enum columns, empty otherwise.
    :type values: tuple[str, ...]
    """

    name: str
    kind: FieldKind
    values: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, type_name: str, values: Tuple[str, ...] = ()) -> "FieldType":
        return cls(name=type_name, kind=kind_from_name(type_name), values=tuple(values))

    @classmethod
    def from_api_response(cls, response_data: Any) -> "FieldType":
        """
        Create a FieldType from either server shape.

        Entity metadata describes a type as an object (``{"type": "int"}``,
        enums add ``"values"``); loaded rows carry the bare name (``"integer"``).

        :param response_data: Type object or type name.
        :return: FieldType instance.
        :rtype: FieldType
        """
        if isinstance(response_data, dict):
            type_name = str(response_data.get("type") or response_data.get("name") or "")
            values = response_data.get("values") or ()
            return cls.of(type_name, tuple(str(v) for v in values))
        return cls.of(str(response_data or ""))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.name}
        if self.values:
            result["values"] = list(self.values)
        return result


__all__ = ["FieldKind", "FieldType", "kind_from_name"]
