# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the structured error hierarchy."""

import unittest

from Cosyan.Admin.core._error_codes import HTTP_500, http_subcode
from Cosyan.Admin.core.errors import AdminError, MetadataError, RemoteError, ValidationError


class TestErrors(unittest.TestCase):

    def test_remote_error_fields(self):
        err = RemoteError(
            "Table 'x' not found.",
            500,
            subcode=HTTP_500,
            operation="fetch_entity",
        )
        self.assertIsInstance(err, AdminError)
        self.assertEqual(str(err), "Table 'x' not found.")
        self.assertEqual(err.code, "remote_error")
        self.assertEqual(err.source, "server")
        self.assertEqual(err.status_code, 500)
        self.assertEqual(err.details, {"operation": "fetch_entity"})

    def test_remote_error_body_excerpt(self):
        err = RemoteError("boom", 502, body_excerpt="<html>")
        self.assertEqual(err.details["body_excerpt"], "<html>")

    def test_remote_error_does_not_mutate_details(self):
        details = {"sql": "select 1"}
        err = RemoteError("boom", 400, operation="execute_sql", body_excerpt="x", details=details)
        self.assertEqual(details, {"sql": "select 1"})
        self.assertEqual(err.details, {"sql": "select 1", "operation": "execute_sql", "body_excerpt": "x"})

    def test_to_dict(self):
        d = ValidationError("bad", subcode="validation_x").to_dict()
        self.assertEqual(d["message"], "bad")
        self.assertEqual(d["code"], "validation_error")
        self.assertEqual(d["subcode"], "validation_x")
        self.assertEqual(d["source"], "client")
        self.assertIsNone(d["status_code"])
        self.assertIn("timestamp", d)

    def test_metadata_error(self):
        err = MetadataError("dup", details={"name": "user"})
        self.assertEqual(err.code, "metadata_error")
        self.assertEqual(err.details, {"name": "user"})

    def test_http_subcode(self):
        self.assertEqual(http_subcode(404), "http_404")


if __name__ == "__main__":
    unittest.main()
