# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Cosyan admin client.

- MetadataOperations: entity type metadata, memoized per client
- EntityOperations: search, load, create, save and delete entities
"""

__all__ = []
