# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the Cosyan admin client.

- :mod:`~Cosyan.Admin.models.field_type`: closed column type tags.
- :mod:`~Cosyan.Admin.models.entity_meta`: entity type descriptors and lookup.
- :mod:`~Cosyan.Admin.models.entity`: entity instances and the blank-entity builder.
- :mod:`~Cosyan.Admin.models.query_builder`: literal formatting, search parameters and save statements.

Import directly from the specific module files.
"""

__all__ = []
