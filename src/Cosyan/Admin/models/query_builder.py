# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Literal formatting and query construction for the Cosyan query language.

:func:`format_value` renders one typed field value as a query literal.
:class:`SearchQuery` turns search filters into request parameters, and
:func:`insert_statement` / :func:`update_statement` build the statements
that persist an edited entity.

.. note::
    Embedded single quotes are not escaped. A value such as ``O'Brien``
    produces an invalid (or injectable) literal until the server's escaping
    rule is settled.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

from ..common.constants import (
    DATE_LITERAL_PREFIX,
    FILTER_PARAM_PREFIX,
    NULL_MARKER,
    TABLE_PARAM,
)
from ..core._error_codes import VALIDATION_MISSING_PRIMARY_KEY
from ..core.errors import ValidationError
from .entity import Entity, FieldValue, ForeignKeyValue
from .field_type import FieldKind


_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _is_numeric(value: Any) -> bool:
    """Whether ``value`` coerces to a finite number written in ASCII decimal notation."""
    if isinstance(value, (bool, int)):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return _NUMBER_RE.fullmatch(value.strip()) is not None
    return False


def _raw(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote(value: Any) -> str:
    return f"'{value}'"


def format_value(field: Union[FieldValue, ForeignKeyValue]) -> str:
    """
    Render a field value as a query literal.

    - ``None`` renders as ``null`` whatever the type.
    - ``timestamp`` values render as ``dt '<value>'``, value verbatim.
    - ``varchar`` and ``enum`` values, and any value that does not coerce to a
      number, render single-quoted.
    - Anything else renders unquoted.

    :param field: Field value with its declared type.
    :type field: ~Cosyan.Admin.models.entity.FieldValue
    :return: Query literal.
    :rtype: str

    Example::

        format_value(FieldValue("age", FieldType.of("int"), 42))          # "42"
        format_value(FieldValue("age", FieldType.of("int"), None))        # "null"
        format_value(FieldValue("created", FieldType.of("timestamp"), "2020-01-01"))
        # "dt '2020-01-01'"
    """
    value = field.value
    if value is None:
        return NULL_MARKER

    kind = field.type.kind
    if kind is FieldKind.TIMESTAMP:
        return f"{DATE_LITERAL_PREFIX} {_quote(value)}"
    if kind.is_string_like:
        return _quote(value)
    if kind.is_numeric:
        return _raw(value) if _is_numeric(value) else _quote(value)
    raise ValueError(f"Unhandled field kind: {kind!r}")


def _populated(value: Optional[str]) -> bool:
    return value is not None and value != ""


@dataclass
class SearchQuery:
    """
    Search request for one entity type.

    Each populated filter is sent as a ``filter_<field>`` parameter; filters
    whose value is ``None`` or ``""`` are left out.

    :param type_name: Entity type to search.
    :type type_name: str

    Example::

        params = SearchQuery("user").where("name", "alice").where("age", None).build()
        # {"table": "user", "filter_name": "alice"}
    """

    type_name: str
    _filters: Dict[str, str] = field(default_factory=dict)

    def where(self, field_name: str, value: Optional[str]) -> "SearchQuery":
        if _populated(value):
            self._filters[field_name] = value
        else:
            self._filters.pop(field_name, None)
        return self

    def where_all(self, filters: Optional[Mapping[str, Optional[str]]]) -> "SearchQuery":
        for name, value in (filters or {}).items():
            self.where(name, value)
        return self

    @property
    def filters(self) -> Dict[str, str]:
        return dict(self._filters)

    def build(self) -> Dict[str, str]:
        """
        Build the request parameter dictionary.

        :rtype: dict[str, str]
        """
        params = {TABLE_PARAM: self.type_name}
        for name, value in self._filters.items():
            params[FILTER_PARAM_PREFIX + name] = value
        return params


def _columns(entity: Entity) -> List[Union[FieldValue, ForeignKeyValue]]:
    return [*entity.fields, *entity.foreign_keys]


def _column_name(value: Union[FieldValue, ForeignKeyValue]) -> str:
    if isinstance(value, ForeignKeyValue):
        return value.column_name
    return value.name


def insert_statement(entity: Entity) -> str:
    """
    ``insert`` statement creating ``entity``, columns in entity order.

    Fields without a value are sent as ``null``.
    """
    columns = _columns(entity)
    names = ", ".join(_column_name(c) for c in columns)
    values = ", ".join(format_value(c) for c in columns)
    return f"insert into {entity.type} ({names}) values ({values});"


def update_statement(entity: Entity) -> str:
    """
    ``update`` statement writing every column of ``entity`` except its primary key.

    :raises ~Cosyan.Admin.core.errors.ValidationError: If the entity has no
        primary key or the primary key has no value.
    """
    if entity.pk is None or entity.id is None:
        raise ValidationError(
            f"Cannot update '{entity.type}' without a primary key value.",
            subcode=VALIDATION_MISSING_PRIMARY_KEY,
        )
    pk_field = next(c for c in _columns(entity) if _column_name(c) == entity.pk)
    assignments = ", ".join(
        f"{_column_name(c)} = {format_value(c)}" for c in _columns(entity) if c is not pk_field
    )
    return f"update {entity.type} set {assignments} where {entity.pk} = {format_value(pk_field)};"


__all__ = ["format_value", "SearchQuery", "insert_statement", "update_statement"]
