# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client-side data layer for Cosyan entity administration.

Entry point: :class:`~Cosyan.Admin.client.AdminClient`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
