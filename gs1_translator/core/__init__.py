"""
Validation and conversion engine.
"""

from .converter import (
    CanonicalResult,
    Converter,
    Err,
    Ok,
    ParsedIdentifier,
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
from .matchers import Matcher, RuleSet, ValidationContext, run_chain
from .validation import validate, validate_digital_link

__all__ = [
    "CanonicalResult",
    "Converter",
    "Err",
    "Matcher",
    "Ok",
    "ParsedIdentifier",
    "RuleSet",
    "ValidationContext",
    "convert_to_digital_link",
    "convert_to_digital_link_for_class_level",
    "convert_to_urn",
    "convert_to_urn_for_class_level",
    "run_chain",
    "to_uri",
    "to_urn",
    "try_convert_to_digital_link",
    "try_convert_to_digital_link_for_class_level",
    "try_convert_to_urn",
    "try_convert_to_urn_for_class_level",
    "validate",
    "validate_digital_link",
]
