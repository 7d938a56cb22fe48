# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Shared constants for the Cosyan admin client."""

__all__ = []
