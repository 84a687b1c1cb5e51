"""
Tests for JSON formatter output.

Ensures stable JSON output with:
- camelCase result keys
- the raw key named after the identifier type
- error objects carrying the error kind
"""

import json

import pytest

from gs1_translator import ValidationException, convert_to_urn
from gs1_translator.json_formatter import (
    error_to_dict,
    error_to_json,
    result_to_dict,
    result_to_json,
)


class TestResultOutput:
    """Conversion results as dictionaries and JSON."""

    def test_sgtin_json(self):
        """Test URI to URN result with serial."""
        result = convert_to_urn("https://id.gs1.org/01/12345678901231/21/9999", 6)

        data = json.loads(result_to_json(result))

        assert data == {
            "asCaptured": "https://id.gs1.org/01/12345678901231/21/9999",
            "asURN": "urn:epc:id:sgtin:234567.1890123.9999",
            "canonicalDL": "https://id.gs1.org/01/12345678901231/21/9999",
            "serial": "9999",
            "gtin": "12345678901231",
        }

    def test_key_order(self):
        result = convert_to_urn("https://id.gs1.org/01/12345678901231/21/9999", 6)
        assert list(result_to_dict(result)) == [
            "asCaptured", "asURN", "canonicalDL", "serial", "gtin"
        ]

    def test_sgln_without_extension_has_no_serial(self):
        """Test SGLN with the default extension omits the serial field."""
        result = convert_to_urn("https://id.gs1.org/414/1234567890128", 10)

        data = result_to_dict(result)

        assert data["asURN"] == "urn:epc:id:sgln:1234567890.12.0"
        assert "serial" not in data
        assert data["sgln"] == "1234567890128"

    def test_foreign_domain_captured_as_is(self):
        result = convert_to_urn("https://example.com/8004/123456789012123", 12)
        data = result_to_dict(result)
        assert data["asCaptured"] == "https://example.com/8004/123456789012123"
        assert data["canonicalDL"] == "https://id.gs1.org/8004/123456789012123"
        assert data["giai"] == "123456789012123"

    def test_uri_result(self):
        """Test URN to URI results carry the captured URN."""
        data = result_to_dict("https://id.gs1.org/00/012345666638689852",
                              as_captured="urn:epc:id:sscc:123456.06663868985")
        assert data == {
            "asCaptured": "urn:epc:id:sscc:123456.06663868985",
            "canonicalDL": "https://id.gs1.org/00/012345666638689852",
        }

    def test_indent(self):
        output = result_to_json("https://id.gs1.org/417/1234567890128", indent=None)
        assert "\n" not in output


class TestErrorOutput:
    """Errors as dictionaries and JSON."""

    def test_error_dict(self):
        with pytest.raises(ValidationException) as exc_info:
            convert_to_urn("https://id.gs1.org/01/12345678901231/21/9999", 5)

        data = error_to_dict(exc_info.value)

        assert data["kind"] == "GCP"
        assert "Invalid GCP Length" in data["error"]

    def test_error_json(self):
        error = ValidationException("Invalid SSCC URN")
        assert json.loads(error_to_json(error)) == {
            "error": "Invalid SSCC URN",
            "kind": "GRAMMAR",
        }
