# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Utility helpers for the Cosyan admin client."""

__all__ = []
