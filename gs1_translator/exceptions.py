"""
Exceptions raised by the GS1 EPC translator.

Every failure surfaced by the public API is a ValidationException (or its
subclass UnsupportedGS1IdentifierException) carrying an ErrorKind, so callers
can branch on the category without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Error categories."""
    GRAMMAR = "GRAMMAR"
    GCP = "GCP"
    CHECKSUM = "CHECKSUM"
    RESOLUTION = "RESOLUTION"
    UNSUPPORTED = "UNSUPPORTED"


class ValidationException(ValueError):
    """Identifier is malformed, has a bad GCP length or a wrong check digit."""

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind or ErrorKind.GRAMMAR

    def __str__(self) -> str:
        return self.message


class UnsupportedGS1IdentifierException(ValidationException):
    """Identifier type or its GCP length could not be determined."""

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message, kind or ErrorKind.UNSUPPORTED)
