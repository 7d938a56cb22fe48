#!/usr/bin/env python3
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Cosyan Admin Client - Quickstart

Walks through the entity administration flow against a running Cosyan server:
- Load entity metadata and list the entity types
- Search one type and show the result as a DataFrame
- Open the first search result
- Fill in and save a new entity

Prerequisites:
- A Cosyan server reachable over HTTP (default http://localhost:7070)
- Optionally COSYAN_ADMIN_TOKEN set to an authenticated session token

Usage:
    python examples/basic/quickstart.py
"""

import os
import sys

from Cosyan.Admin.client import AdminClient
from Cosyan.Admin.core.errors import AdminError
from Cosyan.Admin.core.session import SessionContext


def get_server_url() -> str:
    """Get the Cosyan server URL from user input."""
    if not sys.stdin.isatty():
        return "http://localhost:7070"
    entered = input("Enter Cosyan server URL (default http://localhost:7070): ").strip()
    return (entered or "http://localhost:7070").rstrip("/")


def show_types(client: AdminClient) -> None:
    print("\nEntity types")
    print("=" * 50)
    for descriptor in client.metadata.load_all():
        columns = ", ".join(f"{f.name}:{f.type.name}" for f in descriptor.fields)
        print(f" - {descriptor.name} ({columns})")


def main() -> None:
    session = SessionContext(token=os.environ.get("COSYAN_ADMIN_TOKEN"))
    with AdminClient(get_server_url(), session) as client:
        try:
            show_types(client)
        except AdminError as e:
            print(f"Could not load metadata: {e}")
            sys.exit(1)

        names = client.metadata.load_all().names
        if not names:
            print("Server has no entity types.")
            return
        type_name = input(f"Entity type to browse [{names[0]}]: ").strip() if sys.stdin.isatty() else ""
        type_name = type_name or names[0]

        # Same flow through the view controller
        view = client.controller()
        view.load_meta()
        view.select_type(type_name)
        view.search({})
        if view.error_message:
            print(f"Search failed: {view.error_message}")
            return
        print(f"\n{len(view.entity_list)} '{type_name}' entities")
        print(client.entities.search_dataframe(type_name).head(10))

        if view.entity_list:
            first = view.entity_list[0]
            view.open(type_name, str(first.id))
            print("\nOpened:", view.loaded_entity.to_dict() if view.loaded_entity else view.error_message)

        view.create_new()
        blank = view.loaded_entity
        print("\nBlank entity:", blank.to_dict())
        for key in blank:
            if key == "id":
                continue
            value = input(f"  {key} (empty for null): ").strip() if sys.stdin.isatty() else ""
            blank[key] = value or None
        view.save()
        if view.error_message:
            print(f"Save failed: {view.error_message}")
        else:
            print("Saved.")
            print(f"{len(view.entity_list or [])} '{type_name}' entities after save")


if __name__ == "__main__":
    main()
