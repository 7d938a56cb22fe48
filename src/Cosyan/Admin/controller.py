# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
View-state controller for the entity administration screen.

:class:`EntitySessionController` holds the state of one interactive view
(metadata, active type, search results, open entity, current error) and
updates it in response to user actions. Errors never coexist with the data
they invalidate: every failure clears the affected view data and records the
error, every success clears the error.
"""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from .core.errors import AdminError
from .models.entity import Entity, build_entity
from .models.entity_meta import EntityMeta, EntityTypeDescriptor, lookup

if TYPE_CHECKING:
    from .client import AdminClient

_LOGGER = logging.getLogger(__name__)


class ViewState(str, Enum):
    """Screen states, derived from the controller's view fields."""

    IDLE = "idle"
    META_LOADED = "meta_loaded"
    ENTITY_SELECTED = "entity_selected"
    SEARCHING = "searching"
    ENTITY_OPEN = "entity_open"
    ENTITY_NEW = "entity_new"


# Action kinds sharing a ticket sequence. Opening, creating and saving all
# replace the open entity, so they supersede each other.
_META = "meta"
_SEARCH = "search"
_ENTITY = "entity"


class EntitySessionController:
    """
    Single-view controller over :class:`~Cosyan.Admin.client.AdminClient`.

    Each action issues a ticket for its kind; a result is applied only if no
    newer action of the same kind was issued meanwhile.

    :param client: Client providing metadata and entity operations.
    :type client: ~Cosyan.Admin.client.AdminClient

    Example::

        view = client.controller()
        view.load_meta()
        view.select_type("user")
        view.search({"name": "alice"})
        for entity in view.entity_list or []:
            print(entity.id)
        view.remove("user", view.entity_list[0].id)  # re-searches
    """

    def __init__(self, client: "AdminClient") -> None:
        self._client = client
        self.meta: Optional[EntityMeta] = None
        self.active_type: Optional[EntityTypeDescriptor] = None
        self.entity_list: Optional[List[Entity]] = None
        self.loaded_entity: Optional[Entity] = None
        self.error: Optional[AdminError] = None
        self.search_fields: Dict[str, Optional[str]] = {}
        self._counter = itertools.count(1)
        self._tickets: Dict[str, int] = {}

    # ------------------------------------------------------------- state

    @property
    def state(self) -> ViewState:
        if self.meta is None:
            return ViewState.IDLE
        if self.loaded_entity is not None:
            return ViewState.ENTITY_NEW if self.loaded_entity.is_new else ViewState.ENTITY_OPEN
        if self.entity_list is not None:
            return ViewState.SEARCHING
        if self.active_type is not None:
            return ViewState.ENTITY_SELECTED
        return ViewState.META_LOADED

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def _issue(self, kind: str) -> int:
        ticket = next(self._counter)
        self._tickets[kind] = ticket
        return ticket

    def _is_current(self, kind: str, ticket: int) -> bool:
        if self._tickets.get(kind) == ticket:
            return True
        _LOGGER.debug("Discarding stale %s response (ticket %d)", kind, ticket)
        return False

    # ----------------------------------------------------------- actions

    def load_meta(self) -> None:
        """
        Fetch entity metadata.

        On success the active type is re-resolved by name in the new metadata;
        results, open entity and error are cleared. On failure everything but
        the error is cleared.
        """
        ticket = self._issue(_META)
        try:
            meta = self._client.metadata.fetch()
        except AdminError as exc:
            if not self._is_current(_META, ticket):
                return
            self.meta = None
            self.active_type = None
            self.entity_list = None
            self.loaded_entity = None
            self.error = exc
            return
        if not self._is_current(_META, ticket):
            return
        self.meta = meta
        if self.active_type is not None:
            self.active_type = lookup(meta, self.active_type.name)
        self.entity_list = None
        self.loaded_entity = None
        self.error = None
        _LOGGER.debug("Loaded metadata for %d entity types", len(meta))

    def select_type(self, name: str) -> None:
        """Make ``name`` the active type. Unknown names are ignored."""
        descriptor = lookup(self.meta, name)
        if descriptor is not None:
            self.active_type = descriptor

    def search(self, filters: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """
        Search the active type.

        :param filters: Field name to raw filter text. ``None`` repeats the
            previous search's filters.
        :type filters: dict[str, str] | None
        """
        if self.active_type is None:
            return
        if filters is not None:
            self.search_fields = dict(filters)
        ticket = self._issue(_SEARCH)
        try:
            result = self._client.entities.search(self.active_type.name, self.search_fields)
        except AdminError as exc:
            if not self._is_current(_SEARCH, ticket):
                return
            self.entity_list = None
            self.loaded_entity = None
            self.error = exc
            return
        if not self._is_current(_SEARCH, ticket):
            return
        self.entity_list = result
        self.loaded_entity = None
        self.error = None

    def open(self, table: str, id: str) -> None:
        """Load one entity into the view. Search results are kept."""
        ticket = self._issue(_ENTITY)
        try:
            entity = self._client.entities.get(table, id)
        except AdminError as exc:
            if not self._is_current(_ENTITY, ticket):
                return
            self.loaded_entity = None
            self.error = exc
            return
        if not self._is_current(_ENTITY, ticket):
            return
        self.loaded_entity = entity
        self.error = None

    def create_new(self) -> None:
        """Open a blank entity of the active type. No request is made."""
        if self.active_type is None:
            return
        self._issue(_ENTITY)
        self.loaded_entity = build_entity(self.active_type)
        self.error = None

    def save(self) -> None:
        """
        Persist the open entity.

        A loaded entity stays open after its update. A new entity is closed
        once inserted and the current search is repeated so the new row is
        listed. Failure keeps the open entity so it can be corrected and
        saved again.
        """
        entity = self.loaded_entity
        if entity is None:
            return
        inserting = entity.is_new
        ticket = self._issue(_ENTITY)
        try:
            self._client.entities.save(entity)
        except AdminError as exc:
            if self._is_current(_ENTITY, ticket):
                self.error = exc
            return
        if not self._is_current(_ENTITY, ticket):
            return
        self.error = None
        if inserting:
            self.loaded_entity = None
            if self.entity_list is not None:
                self.search()

    def remove(self, table: str, id: str) -> None:
        """
        Delete one entity, then repeat the last search.

        The search runs whether or not the delete succeeded, so the list
        reflects the server's state either way.
        """
        try:
            self._client.entities.delete(table, id)
        except AdminError as exc:
            _LOGGER.warning("Deleting %s %s failed: %s", table, id, exc.message)
        self.search()


__all__ = ["EntitySessionController", "ViewState"]
