# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Cosyan admin client.

This package contains configuration, the session context, the retrying HTTP
client and the structured error hierarchy.
"""

from .config import AdminConfig
from .errors import AdminError, MetadataError, RemoteError, ValidationError
from .session import SessionContext

__all__ = [
    "AdminConfig",
    "SessionContext",
    "AdminError",
    "MetadataError",
    "RemoteError",
    "ValidationError",
]
