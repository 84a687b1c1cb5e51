"""
GS1 EPC Translator

Converts GS1 identifiers between EPC URNs (urn:epc:id:..., urn:epc:idpat:...)
and GS1 Digital Link Web URIs (https://id.gs1.org/01/...), and validates
both forms: syntax, key widths, GS1 Company Prefix length and check digits.

Based on the GS1 EPC Tag Data Standard and the GS1 Digital Link Standard.
"""

import logging

from .ai_descriptors import (
    AIDescriptor,
    ApplicationIdentifierType,
    GS1_IDENTIFIER_DOMAIN,
    candidates,
    get_descriptor,
    sniff,
)
from .core.converter import (
    CanonicalResult,
    Converter,
    Err,
    Ok,
    convert_to_digital_link,
    convert_to_digital_link_for_class_level,
    convert_to_urn,
    convert_to_urn_for_class_level,
    to_uri,
    to_urn,
    try_convert_to_digital_link,
    try_convert_to_digital_link_for_class_level,
    try_convert_to_urn,
    try_convert_to_urn_for_class_level,
)
from .core.matchers import ValidationContext
from .core.validation import validate, validate_digital_link
from .exceptions import ErrorKind, UnsupportedGS1IdentifierException, ValidationException
from .gcp_length import GCPLengthProvider, resolve_gcp_length
from .normalizer import canonicalize_domain, normalize_digital_link, short_name_replacer
from .validators.checksum import compute_check_digit, verify_check_digit

__version__ = "1.0.0"
__all__ = [
    "AIDescriptor",
    "ApplicationIdentifierType",
    "GS1_IDENTIFIER_DOMAIN",
    "candidates",
    "get_descriptor",
    "sniff",
    "CanonicalResult",
    "Converter",
    "Err",
    "Ok",
    "convert_to_digital_link",
    "convert_to_digital_link_for_class_level",
    "convert_to_urn",
    "convert_to_urn_for_class_level",
    "to_uri",
    "to_urn",
    "try_convert_to_digital_link",
    "try_convert_to_digital_link_for_class_level",
    "try_convert_to_urn",
    "try_convert_to_urn_for_class_level",
    "ValidationContext",
    "validate",
    "validate_digital_link",
    "ErrorKind",
    "UnsupportedGS1IdentifierException",
    "ValidationException",
    "GCPLengthProvider",
    "resolve_gcp_length",
    "canonicalize_domain",
    "normalize_digital_link",
    "short_name_replacer",
    "compute_check_digit",
    "verify_check_digit",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
