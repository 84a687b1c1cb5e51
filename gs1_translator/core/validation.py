"""
Identifier validation entry points.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..ai_descriptors import ApplicationIdentifierType, get_descriptor, is_urn, sniff
from ..exceptions import ErrorKind, UnsupportedGS1IdentifierException, ValidationException
from ..gcp_length import GCPLengthProvider, get_default_provider
from ..normalizer import normalize_digital_link
from .matchers import Chain, ValidationContext, run_chain
from .rules import rules_for

logger = logging.getLogger(__name__)

UNKNOWN_IDENTIFIER_MESSAGE = "Identifier did not match any GS1 identifiers format: %s"
MISSING_GCP_MESSAGE = (
    "Digital Link URI detected. Use validate(identifier, ValidationContext(gcp_length=N)) "
    "to validate Digital Link URIs with a GCP length."
)


def select_chain(ai_type: ApplicationIdentifierType, identifier: str) -> Chain:
    """Pick the URN/URI, instance/class chain matching the shape of ``identifier``."""
    descriptor = get_descriptor(ai_type)
    rules = rules_for(ai_type)
    if is_urn(identifier):
        return rules.select(True, descriptor.is_class_level_urn(identifier))
    return rules.select(False, descriptor.is_class_level_uri(identifier))


def validate(identifier: str, context: Optional[ValidationContext] = None) -> bool:
    """
    Validate an EPC URN or Digital Link URI against the rules of its type.

    The type is detected from the identifier; URNs with ``urn:epc:idpat:``
    and Digital Link URIs without a serial are validated as class level.

    Args:
        identifier: EPC URN or Digital Link URI
        context: Options; Digital Link URIs need ``gcp_length``

    Returns:
        True when the identifier is valid

    Raises:
        UnsupportedGS1IdentifierException: no identifier type recognized
        ValidationException: first failing rule
    """
    context = context or ValidationContext()

    ai_type = sniff(identifier)
    if ai_type is None:
        raise UnsupportedGS1IdentifierException(UNKNOWN_IDENTIFIER_MESSAGE % identifier)

    if not is_urn(identifier) and context.gcp_length is None:
        raise ValidationException(MISSING_GCP_MESSAGE, ErrorKind.GCP)

    chain = select_chain(ai_type, identifier)
    if not chain:
        raise UnsupportedGS1IdentifierException(UNKNOWN_IDENTIFIER_MESSAGE % identifier)

    logger.debug("Validating %s as %s", identifier, ai_type.name)
    return run_chain(chain, identifier, context)


def validate_digital_link(
    uri: str,
    context: Optional[ValidationContext] = None,
    gcp_length_provider: Optional[GCPLengthProvider] = None,
) -> str:
    """
    Normalize and validate a Digital Link URI.

    Short codes are replaced with AI codes first. Without a GCP length in
    ``context`` it is resolved from the prefix table.

    Returns:
        The normalized URI

    Raises:
        ValidationException: "Invalid GS1 Digital Link URI: ..." chained to the cause
    """
    context = context or ValidationContext()
    normalized = normalize_digital_link(uri)
    try:
        if context.gcp_length is None:
            provider = gcp_length_provider or get_default_provider()
            ai_type = sniff(normalized)
            ai_code = get_descriptor(ai_type).ai_code if ai_type else None
            context = ValidationContext(
                gcp_length=provider.resolve(normalized, ai_code),
                validate_check_digit=context.validate_check_digit,
            )
        validate(normalized, context)
    except ValidationException as exc:
        raise ValidationException(
            f"Invalid GS1 Digital Link URI: {uri}\n{exc.message}", exc.kind
        ) from exc
    return normalized
