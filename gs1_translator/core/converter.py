"""
EPC URN <-> GS1 Digital Link conversion

One table-driven engine for every supported identifier type:

    detect type -> validate input -> extract fields -> render
                -> re-validate the rendered output

Fields are split at dots in a URN and at the GCP length in a Digital Link
URI. Check digits are always recomputed when rendering a URI, never copied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from ..ai_descriptors import (
    CLASS_LEVEL_TYPES,
    GS1_IDENTIFIER_DOMAIN,
    INSTANCE_LEVEL_TYPES,
    AIDescriptor,
    ApplicationIdentifierType,
    KeyLayout,
    SerialPlacement,
    get_descriptor,
    is_urn,
    sniff,
)
from ..exceptions import ErrorKind, UnsupportedGS1IdentifierException, ValidationException
from ..gcp_length import GCPLengthProvider, get_default_provider
from ..normalizer import normalize_digital_link
from ..validators.checksum import compute_check_digit
from .matchers import ValidationContext, run_chain
from .rules import rules_for, uri_payload

logger = logging.getLogger(__name__)


URN_UNSUPPORTED_MESSAGE = (
    "Provided URN format does not match with any of the GS1 identifiers format.\n"
    "Please check the URN: %s"
)
URI_UNSUPPORTED_MESSAGE = (
    "Provided URI format does not match with any of the GS1 identifiers format.\n"
    "Please check the URI: %s"
)


# =============================================================================
# Data model
# =============================================================================

@dataclass
class ParsedIdentifier:
    """Fields of an identifier between parsing and rendering."""
    type: ApplicationIdentifierType
    gcp: str
    item_reference: str
    serial: Optional[str] = None
    is_class_level: bool = False
    check_digit: Optional[str] = None
    piece: Optional[str] = None
    total: Optional[str] = None


@dataclass
class CanonicalResult:
    """
    Result of a Digital Link to URN conversion.

    Attributes:
        as_captured: The URI exactly as provided
        as_urn: The EPC URN
        canonical_dl: The URI on the GS1 resolver domain
        raw_key: Name of the raw value field (e.g. 'gtin')
        raw_value: Primary key value as carried in the URI
        serial: Serial (or lot) component, if any
    """
    as_captured: str
    as_urn: str
    canonical_dl: str
    raw_key: str
    raw_value: str
    serial: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "asCaptured": self.as_captured,
            "asURN": self.as_urn,
            "canonicalDL": self.canonical_dl,
        }
        if self.serial is not None:
            result["serial"] = self.serial
        result[self.raw_key] = self.raw_value
        return result


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: ValidationException

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Ok, Err]


# =============================================================================
# Field extraction and rendering
# =============================================================================

def parse_urn(descriptor: AIDescriptor, urn: str, class_level: bool = False) -> ParsedIdentifier:
    """Split an already validated URN into its fields."""
    prefix = descriptor.class_urn_prefix if class_level else descriptor.urn_prefix
    body = urn[len(prefix):]
    piece = total = serial = None

    if descriptor.type is ApplicationIdentifierType.ITIP:
        gcp, ref, piece, total, serial = body.split(".", 4)
    elif descriptor.urn_fields == 3:
        gcp, ref, serial = body.split(".", 2)
    else:
        gcp, ref = body.split(".", 1)

    if serial == "*":
        serial = None
    return ParsedIdentifier(descriptor.type, gcp, ref, serial, class_level, piece=piece, total=total)


def _render_key(descriptor: AIDescriptor, parsed: ParsedIdentifier) -> str:
    gcp, ref = parsed.gcp, parsed.item_reference
    if descriptor.layout is KeyLayout.PLAIN:
        return gcp + ref

    if descriptor.layout is KeyLayout.INDICATOR:
        digits = ref[:1] + gcp + ref[1:]
    else:
        digits = gcp + ref
    parsed.check_digit = compute_check_digit(digits)
    key = digits + parsed.check_digit

    if descriptor.type is ApplicationIdentifierType.ITIP:
        key += parsed.piece + parsed.total
    return key


def render_uri(descriptor: AIDescriptor, parsed: ParsedIdentifier) -> str:
    """Render parsed fields as a Digital Link URI on the GS1 resolver domain."""
    uri = GS1_IDENTIFIER_DOMAIN + descriptor.uri_prefix + _render_key(descriptor, parsed)

    serial = parsed.serial
    if serial is None:
        return uri
    if descriptor.serial_placement is SerialPlacement.MARKER:
        # SGLN extension 0 means no extension
        if descriptor.type is ApplicationIdentifierType.SGLN and serial == "0":
            return uri
        return uri + descriptor.serial_uri_prefix + serial
    if descriptor.serial_placement is SerialPlacement.APPENDED:
        return uri + serial
    return uri


def parse_uri(descriptor: AIDescriptor, uri: str, gcp_length: int,
              class_level: bool = False) -> ParsedIdentifier:
    """Split an already validated Digital Link URI at ``gcp_length``."""
    value = descriptor.value_after_code(uri)
    payload = uri_payload(descriptor, uri)
    g = gcp_length
    piece = total = check_digit = serial = None

    if descriptor.serial_placement is SerialPlacement.MARKER:
        marker = descriptor.serial_uri_prefix
        if marker in value:
            serial = value[value.index(marker) + len(marker):]
    elif descriptor.serial_placement is SerialPlacement.APPENDED:
        serial = value[descriptor.max_width:] or None

    if descriptor.layout is KeyLayout.INDICATOR:
        key = payload[:descriptor.key_width]
        gcp = key[1:g + 1]
        ref = key[0] + key[g + 1:-1]
        check_digit = key[-1]
        if descriptor.type is ApplicationIdentifierType.ITIP:
            piece, total = payload[14:16], payload[16:18]
    elif descriptor.layout is KeyLayout.CHECKED:
        key = payload[:descriptor.key_width]
        gcp, ref, check_digit = key[:g], key[g:-1], key[-1]
    else:
        gcp, ref = payload[:g], payload[g:]

    if descriptor.type is ApplicationIdentifierType.SGLN and serial is None:
        serial = "0"

    return ParsedIdentifier(descriptor.type, gcp, ref, serial, class_level,
                            check_digit, piece, total)


def render_urn(descriptor: AIDescriptor, parsed: ParsedIdentifier) -> str:
    """Render parsed fields as an EPC URN (``.*`` for class level)."""
    prefix = descriptor.class_urn_prefix if parsed.is_class_level else descriptor.urn_prefix
    tail = parsed.serial if parsed.serial is not None else "*"

    if descriptor.type is ApplicationIdentifierType.ITIP:
        return f"{prefix}{parsed.gcp}.{parsed.item_reference}.{parsed.piece}.{parsed.total}.{tail}"
    if descriptor.urn_fields == 3:
        return f"{prefix}{parsed.gcp}.{parsed.item_reference}.{tail}"
    return f"{prefix}{parsed.gcp}.{parsed.item_reference}"


def canonical_digital_link(descriptor: AIDescriptor, uri: str) -> str:
    """The URI from its primary key segment onward, on the GS1 resolver domain."""
    return GS1_IDENTIFIER_DOMAIN + uri[uri.index(descriptor.uri_prefix):]


# =============================================================================
# Converter
# =============================================================================

class Converter:
    """
    Converts identifiers between EPC URN and GS1 Digital Link URI.

    Args:
        gcp_length_provider: Resolves GCP lengths for Digital Link URIs
            converted without an explicit length. Defaults to the shared
            provider built from the environment.
    """

    def __init__(self, gcp_length_provider: Optional[GCPLengthProvider] = None):
        self._gcp_length_provider = gcp_length_provider

    @property
    def gcp_length_provider(self) -> GCPLengthProvider:
        if self._gcp_length_provider is None:
            self._gcp_length_provider = get_default_provider()
        return self._gcp_length_provider

    # -- URN to Digital Link ---------------------------------------------

    def convert_to_digital_link(self, urn: str) -> str:
        """
        Convert an instance level EPC URN to a Digital Link URI.

        Example:
            urn:epc:id:sgtin:234567890.1123.9999
                -> https://id.gs1.org/01/12345678901231/21/9999
        """
        return self._to_digital_link(urn, class_level=False)

    def convert_to_digital_link_for_class_level(self, urn: str) -> str:
        """
        Convert a class level EPC URN (urn:epc:idpat:, urn:epc:class:lgtin:)
        to a Digital Link URI.
        """
        return self._to_digital_link(urn, class_level=True)

    def _to_digital_link(self, urn: str, class_level: bool) -> str:
        descriptor = self._descriptor_for(urn, True, class_level)
        logger.debug("Converting %s URN %s (class level: %s)", descriptor.name, urn, class_level)

        rules = rules_for(descriptor.type)
        try:
            run_chain(rules.urn_class if class_level else rules.urn, urn)
            parsed = parse_urn(descriptor, urn, class_level)
            uri = render_uri(descriptor, parsed)
            run_chain(rules.uri_class if class_level else rules.uri, uri,
                      ValidationContext(gcp_length=len(parsed.gcp)))
        except ValidationException as exc:
            raise ValidationException(
                f"Exception occurred during the conversion of {descriptor.name} identifier "
                f"from URN to digital link WebURI,\n"
                f"Please check the provided identifier : {urn}\n{exc.message}",
                exc.kind,
            ) from exc
        return uri

    # -- Digital Link to URN ---------------------------------------------

    def convert_to_urn(self, uri: str, gcp_length: Optional[int] = None,
                       validate_check_digit: bool = False) -> CanonicalResult:
        """
        Convert an instance level Digital Link URI to an EPC URN.

        Args:
            uri: Digital Link URI on any host
            gcp_length: GCP length; resolved from the prefix table when None
            validate_check_digit: Reject URIs whose key has a wrong check digit

        Returns:
            CanonicalResult
        """
        return self._to_urn(uri, gcp_length, validate_check_digit, class_level=False)

    def convert_to_urn_for_class_level(self, uri: str, gcp_length: Optional[int] = None,
                                       validate_check_digit: bool = False) -> CanonicalResult:
        """Convert a Digital Link URI without serial to a class level EPC URN."""
        return self._to_urn(uri, gcp_length, validate_check_digit, class_level=True)

    def _to_urn(self, uri: str, gcp_length: Optional[int], validate_check_digit: bool,
                class_level: bool) -> CanonicalResult:
        descriptor = self._descriptor_for(uri, False, class_level)

        if gcp_length is None:
            gcp_length = self.gcp_length_provider.resolve(uri, descriptor.ai_code)
        logger.debug("Converting %s URI %s with GCP length %s (class level: %s)",
                     descriptor.name, uri, gcp_length, class_level)

        rules = rules_for(descriptor.type)
        context = ValidationContext(gcp_length=gcp_length, validate_check_digit=validate_check_digit)
        try:
            run_chain(rules.uri_class if class_level else rules.uri, uri, context)
            parsed = parse_uri(descriptor, uri, gcp_length, class_level)
            urn = render_urn(descriptor, parsed)
            run_chain(rules.urn_class if class_level else rules.urn, urn)
        except ValidationException as exc:
            raise ValidationException(
                f"Exception occurred during the conversion of {descriptor.name} identifier "
                f"from digital link WebURI to URN,\n"
                f"Please check the provided identifier : {uri} GCP Length : {gcp_length}\n"
                f"{exc.message}",
                exc.kind,
            ) from exc

        serial = parsed.serial
        if descriptor.type is ApplicationIdentifierType.SGLN and serial == "0":
            serial = None

        return CanonicalResult(
            as_captured=uri,
            as_urn=urn,
            canonical_dl=canonical_digital_link(descriptor, uri),
            raw_key=descriptor.raw_key,
            raw_value=uri_payload(descriptor, uri),
            serial=serial,
        )

    # -- Dispatch ----------------------------------------------------------

    @staticmethod
    def _descriptor_for(identifier: str, urn: bool, class_level: bool) -> AIDescriptor:
        message = URN_UNSUPPORTED_MESSAGE if urn else URI_UNSUPPORTED_MESSAGE
        ai_type = None
        if identifier and is_urn(identifier) == urn:
            ai_type = sniff(identifier)
        supported = CLASS_LEVEL_TYPES if class_level else INSTANCE_LEVEL_TYPES
        if ai_type not in supported:
            raise UnsupportedGS1IdentifierException(message % identifier)
        return get_descriptor(ai_type)

    def to_uri(self, urn: str) -> str:
        """Convert a URN, choosing the instance or class path from its prefix."""
        ai_type = sniff(urn) if urn and is_urn(urn) else None
        if ai_type is None:
            raise UnsupportedGS1IdentifierException(URN_UNSUPPORTED_MESSAGE % urn)
        if get_descriptor(ai_type).is_class_level_urn(urn):
            return self.convert_to_digital_link_for_class_level(urn)
        return self.convert_to_digital_link(urn)

    def to_urn(self, uri: str, gcp_length: Optional[int] = None,
               validate_check_digit: bool = False) -> CanonicalResult:
        """
        Normalize short codes, then convert a Digital Link URI, choosing the
        instance or class path from the shape of the URI.
        """
        normalized = normalize_digital_link(uri)
        ai_type = sniff(normalized) if normalized and not is_urn(normalized) else None
        if ai_type is None:
            raise UnsupportedGS1IdentifierException(URI_UNSUPPORTED_MESSAGE % uri)
        if get_descriptor(ai_type).is_class_level_uri(normalized):
            result = self.convert_to_urn_for_class_level(normalized, gcp_length, validate_check_digit)
        else:
            result = self.convert_to_urn(normalized, gcp_length, validate_check_digit)
        return replace(result, as_captured=uri)


# =============================================================================
# Module level API
# =============================================================================

_DEFAULT_CONVERTER: Optional[Converter] = None


def get_default_converter() -> Converter:
    """Shared converter using the default GCP length provider."""
    global _DEFAULT_CONVERTER
    if _DEFAULT_CONVERTER is None:
        _DEFAULT_CONVERTER = Converter()
    return _DEFAULT_CONVERTER


def convert_to_digital_link(urn: str) -> str:
    """Convert an instance level EPC URN with the shared converter."""
    return get_default_converter().convert_to_digital_link(urn)


def convert_to_digital_link_for_class_level(urn: str) -> str:
    """Convert a class level EPC URN with the shared converter."""
    return get_default_converter().convert_to_digital_link_for_class_level(urn)


def convert_to_urn(uri: str, gcp_length: Optional[int] = None,
                   validate_check_digit: bool = False) -> CanonicalResult:
    """Convert an instance level Digital Link URI with the shared converter."""
    return get_default_converter().convert_to_urn(uri, gcp_length, validate_check_digit)


def convert_to_urn_for_class_level(uri: str, gcp_length: Optional[int] = None,
                                   validate_check_digit: bool = False) -> CanonicalResult:
    """Convert a class level Digital Link URI with the shared converter."""
    return get_default_converter().convert_to_urn_for_class_level(
        uri, gcp_length, validate_check_digit)


def to_uri(urn: str) -> str:
    """Convert any supported EPC URN, instance or class level."""
    return get_default_converter().to_uri(urn)


def to_urn(uri: str, gcp_length: Optional[int] = None,
           validate_check_digit: bool = False) -> CanonicalResult:
    """Normalize and convert any supported Digital Link URI."""
    return get_default_converter().to_urn(uri, gcp_length, validate_check_digit)


def _attempt(func, *args) -> Result:
    try:
        return Ok(func(*args))
    except ValidationException as exc:
        return Err(exc)


def try_convert_to_digital_link(urn: str) -> Result:
    """Like convert_to_digital_link, returning Ok(uri) or Err(error)."""
    return _attempt(convert_to_digital_link, urn)


def try_convert_to_digital_link_for_class_level(urn: str) -> Result:
    """Like convert_to_digital_link_for_class_level, returning Ok or Err."""
    return _attempt(convert_to_digital_link_for_class_level, urn)


def try_convert_to_urn(uri: str, gcp_length: Optional[int] = None,
                       validate_check_digit: bool = False) -> Result:
    """Like convert_to_urn, returning Ok(CanonicalResult) or Err(error)."""
    return _attempt(convert_to_urn, uri, gcp_length, validate_check_digit)


def try_convert_to_urn_for_class_level(uri: str, gcp_length: Optional[int] = None,
                                       validate_check_digit: bool = False) -> Result:
    """Like convert_to_urn_for_class_level, returning Ok or Err."""
    return _attempt(convert_to_urn_for_class_level, uri, gcp_length, validate_check_digit)


__all__ = [
    "CanonicalResult",
    "Converter",
    "Err",
    "Ok",
    "ParsedIdentifier",
    "Result",
    "convert_to_digital_link",
    "convert_to_digital_link_for_class_level",
    "convert_to_urn",
    "convert_to_urn_for_class_level",
    "get_default_converter",
    "to_uri",
    "to_urn",
    "try_convert_to_digital_link",
    "try_convert_to_digital_link_for_class_level",
    "try_convert_to_urn",
    "try_convert_to_urn_for_class_level",
]
