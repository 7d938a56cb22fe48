# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Entity instance operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

import pandas as pd

from ..models.entity import Entity, build_entity
from ..models.query_builder import insert_statement, update_statement
from ..utils._pandas import entities_to_dataframe

if TYPE_CHECKING:
    from ..client import AdminClient


class EntityOperations:
    """
    Entity instance operations.

    Accessed via ``client.entities``.

    Example::

        users = client.entities.search("user", {"name": "alice"})
        user = client.entities.get("user", users[0].id)
        user["age"] = 43
        client.entities.save(user)

        blank = client.entities.new("user")
        client.entities.delete("user", user.id)
    """

    def __init__(self, client: "AdminClient") -> None:
        self._client = client

    def search(self, type_name: str, filters: Optional[Mapping[str, Optional[str]]] = None) -> List[Entity]:
        """
        Search entities of a type.

        :param type_name: Entity type name.
        :type type_name: str
        :param filters: Field name to raw filter text. ``None`` and empty
            values are not sent.
        :type filters: dict[str, str] | None
        :rtype: list[~Cosyan.Admin.models.entity.Entity]
        :raises ~Cosyan.Admin.core.errors.RemoteError: If the request fails.
        """
        return self._client._get_remote().search_entities(type_name, filters)

    def search_dataframe(
        self, type_name: str, filters: Optional[Mapping[str, Optional[str]]] = None
    ) -> pd.DataFrame:
        """
        Search entities of a type and return them as a DataFrame, one column per field.

        :rtype: ~pandas.DataFrame
        """
        return entities_to_dataframe(self.search(type_name, filters))

    def get(self, type_name: str, id: str) -> Entity:
        """
        Load one entity by id.

        :raises ~Cosyan.Admin.core.errors.RemoteError: If the request fails or
            the entity does not exist.
        """
        return self._client._get_remote().fetch_entity(type_name, id)

    def new(self, type_name: str) -> Optional[Entity]:
        """
        Blank entity of ``type_name`` built from the memoized metadata.

        Returns ``None`` if the type is unknown. No request is made once the
        metadata is loaded.
        """
        return build_entity(self._client.metadata.lookup(type_name))

    def save(self, entity: Entity) -> Dict[str, Any]:
        """
        Persist ``entity``: ``insert`` when it is new, ``update`` when it was loaded.

        :return: The server's response body.
        :raises ~Cosyan.Admin.core.errors.ValidationError: If a loaded entity has no id value.
        :raises ~Cosyan.Admin.core.errors.RemoteError: If the statement fails.
        """
        sql = insert_statement(entity) if entity.is_new else update_statement(entity)
        return self._client._get_remote().execute_sql(sql)

    def delete(self, type_name: str, id: str) -> None:
        """
        Delete one entity by id.

        :raises ~Cosyan.Admin.core.errors.RemoteError: If the request fails.
        """
        self._client._get_remote().delete_entity(type_name, id)
