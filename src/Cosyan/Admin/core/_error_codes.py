# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Subcode constants attached to :class:`~Cosyan.Admin.core.errors.AdminError` instances."""

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

# Transport subcodes
TRANSPORT_ERROR = "transport_error"
TRANSPORT_INVALID_JSON = "transport_invalid_json"

# Validation subcodes
VALIDATION_MISSING_PRIMARY_KEY = "validation_missing_primary_key"

# Metadata subcodes
METADATA_DUPLICATE_ENTITY_TYPE = "metadata_duplicate_entity_type"
METADATA_MALFORMED_PAYLOAD = "metadata_malformed_payload"


def http_subcode(status_code: int) -> str:
    """Map an HTTP status code to its subcode string (``http_<status>``)."""
    return f"http_{status_code}"
