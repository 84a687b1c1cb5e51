"""
JSON Formatter for GS1 EPC translation results

Provides stable JSON output with:
- camelCase result keys (asCaptured, asURN, canonicalDL, serial, raw key)
- error objects carrying the message and error kind
"""

from __future__ import annotations

import json
from typing import Any, Dict, Union

from .core.converter import CanonicalResult
from .exceptions import ValidationException


def result_to_dict(result: Union[CanonicalResult, str], as_captured: str = "") -> Dict[str, Any]:
    """
    Dictionary for a conversion result.

    Args:
        result: CanonicalResult (URI to URN) or the Digital Link URI (URN to URI)
        as_captured: The URN that was converted, for URN to URI results

    Example:
        >>> result_to_dict(convert_to_urn("https://id.gs1.org/414/1234567890128", 10))
        {'asCaptured': 'https://id.gs1.org/414/1234567890128',
         'asURN': 'urn:epc:id:sgln:1234567890.12.0',
         'canonicalDL': 'https://id.gs1.org/414/1234567890128',
         'sgln': '1234567890128'}
    """
    if isinstance(result, CanonicalResult):
        return result.to_dict()
    return {"asCaptured": as_captured, "canonicalDL": result}


def result_to_json(result: Union[CanonicalResult, str], as_captured: str = "",
                   indent: int = 2) -> str:
    """Format a conversion result as JSON."""
    return json.dumps(result_to_dict(result, as_captured), ensure_ascii=False, indent=indent)


def error_to_dict(error: ValidationException) -> Dict[str, Any]:
    """Dictionary with the error message and its kind."""
    return {"error": error.message, "kind": error.kind.value}


def error_to_json(error: ValidationException, indent: int = 2) -> str:
    """Format an error as JSON."""
    return json.dumps(error_to_dict(error), ensure_ascii=False, indent=indent)
