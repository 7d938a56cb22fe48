# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Cosyan admin client.

This package contains the low-level client for the server's entity
endpoints. Users should use :class:`~Cosyan.Admin.client.AdminClient` instead.
"""

__all__ = []
