# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Entity type metadata namespace."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..models.entity_meta import EntityMeta, EntityTypeDescriptor, lookup

if TYPE_CHECKING:
    from ..client import AdminClient

_LOGGER = logging.getLogger(__name__)


class MetadataOperations:
    """
    Entity type metadata, fetched once and memoized for the client's lifetime.

    Accessed via ``client.metadata``.

    Example::

        meta = client.metadata.load_all()      # one request
        meta = client.metadata.load_all()      # served from memory
        user = client.metadata.lookup("user")  # None if unknown
    """

    def __init__(self, client: "AdminClient") -> None:
        self._client = client
        self._cached: Optional[EntityMeta] = None

    def fetch(self) -> EntityMeta:
        """
        Request the metadata from the server, bypassing the memoized copy.

        The memoized copy is left untouched.

        :rtype: ~Cosyan.Admin.models.entity_meta.EntityMeta
        :raises ~Cosyan.Admin.core.errors.RemoteError: If the request fails.
        """
        return self._client._get_remote().fetch_entity_meta()

    def load_all(self) -> EntityMeta:
        """
        Return the entity metadata, requesting it only on the first call.

        A failed first request is not memoized; the next call retries.

        :rtype: ~Cosyan.Admin.models.entity_meta.EntityMeta
        :raises ~Cosyan.Admin.core.errors.RemoteError: If the request fails.
        """
        if self._cached is None:
            self._cached = self.fetch()
            _LOGGER.debug("Memoized metadata for %d entity types", len(self._cached))
        return self._cached

    def lookup(self, name: str) -> Optional[EntityTypeDescriptor]:
        """Descriptor named ``name`` from :meth:`load_all`, or ``None``."""
        return lookup(self.load_all(), name)
