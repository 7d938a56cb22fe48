# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Cosyan query language and server endpoints.
"""

# Query language literals
NULL_MARKER = "null"
DATE_LITERAL_PREFIX = "dt"

# Search request parameter naming
TABLE_PARAM = "table"
ID_PARAM = "id"
FILTER_PARAM_PREFIX = "filter_"

# Server endpoints, relative to the base URL
ENDPOINT_ENTITY_META = "/cosyan/entityMeta"
ENDPOINT_SEARCH_ENTITY = "/cosyan/searchEntity"
ENDPOINT_LOAD_ENTITY = "/cosyan/loadEntity"
ENDPOINT_DELETE_ENTITY = "/cosyan/deleteEntity"
ENDPOINT_SQL = "/cosyan/sql"
