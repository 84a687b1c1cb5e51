"""
Validation chains for every GS1 identifier type.

Each type gets four chains (URN instance, URN class, URI instance, URI class),
built once at import from the descriptor table and the grammar below. Types
without class level support get empty class chains; LGTIN only has class
chains.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from ..ai_descriptors import (
    DESCRIPTORS,
    AIDescriptor,
    ApplicationIdentifierType as T,
    SerialPlacement,
)
from ..exceptions import ErrorKind, ValidationException
from ..validators.checksum import check_digit_at
from .matchers import Chain, Check, Matcher, RuleSet, ValidationContext

# Characters allowed in serials, lots and GIAI/GINC references (GS1 AI encodable set 82)
SERIAL_CHARS = r"[\x21-\x22\x25-\x2F\x30-\x39\x3A-\x3F\x41-\x5A\x5F\x61-\x7A]"
# Characters allowed in a CPI reference (encodable set 39)
CPI_CHARS = r"[\x23\x2D\x2F\x30-\x39\x41-\x5A]"

URI_PREFIX = r"(http|https)://.*"
GCP = r"[0-9]{6,12}"

MAX_VARIABLE_KEY_LENGTH = 30

GCP_BOUNDS_MESSAGE = (
    "Invalid GCP Length, GCP Length should be between 6-12 digits. "
    "Please check the provided GCP Length: %s"
)

URN_HINT = "Please check the provided URN: %s"
URI_HINT = "Please check the provided URI : %s"


def _serial(low: int, high: int) -> str:
    return f"{SERIAL_CHARS}{{{low},{high}}}"


def _cpi(low: int, high: int) -> str:
    return f"{CPI_CHARS}{{{low},{high}}}"


# ---------------------------------------------------------------------------
# URN checks
# ---------------------------------------------------------------------------

def _urn_fields(identifier: str, prefix: str):
    return identifier[len(prefix):].split(".")


def _combined_width(prefix: str, width: int, label: str, name: str) -> Check:
    """GCP and the next field must add up to ``width`` digits."""
    def check(identifier: str, context: ValidationContext) -> None:
        fields = _urn_fields(identifier, prefix)
        if len(fields[0]) + len(fields[1]) != width:
            raise ValidationException(
                f"Invalid {name}, the length of the combined GCP and {label} "
                f"should be {width} digits. {URN_HINT % identifier}"
            )
    return check


def _combined_max(prefix: str, name: str) -> Check:
    def check(identifier: str, context: ValidationContext) -> None:
        fields = _urn_fields(identifier, prefix)
        if len(fields[0]) + len(fields[1]) > MAX_VARIABLE_KEY_LENGTH:
            raise ValidationException(
                f"Invalid {name}, the combined GCP and reference cannot exceed "
                f"{MAX_VARIABLE_KEY_LENGTH} characters. {URN_HINT % identifier}"
            )
    return check


# ---------------------------------------------------------------------------
# URI checks
# ---------------------------------------------------------------------------

def uri_payload(descriptor: AIDescriptor, identifier: str) -> str:
    """The primary key value of a Digital Link URI, without any serial marker part."""
    value = descriptor.value_after_code(identifier)
    marker = descriptor.serial_uri_prefix
    if marker and descriptor.serial_placement is SerialPlacement.MARKER and marker in value:
        value = value[:value.index(marker)]
    return value


def _uri_gcp(descriptor: AIDescriptor, numeric_gcp: bool = False,
             max_length: Optional[int] = None) -> Check:
    """GCP bounds, GCP within the payload and the optional check digit."""
    name = descriptor.name

    def check(identifier: str, context: ValidationContext) -> None:
        gcp_length = context.gcp_length
        low, high = descriptor.gcp_bounds
        if (not isinstance(gcp_length, int) or isinstance(gcp_length, bool)
                or not low <= gcp_length <= high):
            raise ValidationException(GCP_BOUNDS_MESSAGE % gcp_length, ErrorKind.GCP)

        payload = uri_payload(descriptor, identifier)
        if gcp_length > len(payload):
            raise ValidationException(
                f"GCP Length cannot be more than the {name} length, {URI_HINT % identifier}",
                ErrorKind.GCP,
            )
        if numeric_gcp and not payload[:gcp_length].isdigit():
            raise ValidationException(
                f"Invalid {name}, the GCP should consist of {gcp_length} digits. "
                f"{URI_HINT % identifier}",
                ErrorKind.GCP,
            )
        if max_length is not None and len(payload) > max_length:
            raise ValidationException(
                f"Invalid {name}, the {name} cannot exceed {max_length} characters. "
                f"{URI_HINT % identifier}"
            )

        if context.validate_check_digit and descriptor.checksum_required:
            check_digit_at(identifier, descriptor.uri_prefix, descriptor.key_width - 1, name)

    return check


# ---------------------------------------------------------------------------
# Chain builders
# ---------------------------------------------------------------------------

def urn_chain(descriptor: AIDescriptor, prefix: str, body: str, example: str,
              check: Optional[Check] = None) -> Chain:
    name = descriptor.name
    return (
        Matcher(
            re.escape(prefix) + ".*",
            f'Invalid {name}, {name} should start with "{prefix}" (Ex: {example}). {URN_HINT}',
        ),
        Matcher(
            re.escape(prefix) + body,
            f"Invalid {name}, {name} should follow the format {example}. {URN_HINT}",
            check=check,
        ),
    )


def uri_chain(descriptor: AIDescriptor, key: str, key_hint: str, body: str,
              example: str, check: Check) -> Chain:
    name = descriptor.name
    head = URI_PREFIX + re.escape(descriptor.uri_prefix)
    return (
        Matcher(
            URI_PREFIX,
            f"Invalid {name} URI, it should start with http:// or https:// (Ex: {example}). {URI_HINT}",
        ),
        Matcher(
            head + key + ".*",
            f"Invalid {name} URI, {name} should contain {key_hint} after "
            f"{descriptor.uri_prefix} (Ex: {example}). {URI_HINT}",
        ),
        Matcher(
            head + body,
            f"Invalid {name} URI, {name} should follow the format {example}. {URI_HINT}",
            check=check,
        ),
    )


def _fixed_width_rules(ai_type: T, urn_body: str, width: int, label: str,
                       urn_example: str, uri_body: str, uri_example: str,
                       class_urn_body: Optional[str] = None,
                       class_urn_example: str = "",
                       class_uri_body: Optional[str] = None,
                       class_uri_example: str = "") -> RuleSet:
    """Rules for the keys whose GCP and reference add up to a fixed width."""
    d = DESCRIPTORS[ai_type]
    digits = f"[0-9]{{{d.max_width}}}"
    hint = f"{d.max_width} digits"
    uri_check = _uri_gcp(d)

    urn = ()
    if d.instance_level:
        urn = urn_chain(d, d.urn_prefix, urn_body, urn_example,
                        _combined_width(d.urn_prefix, width, label, d.name))
    uri = ()
    if d.instance_level:
        uri = uri_chain(d, digits, hint, uri_body, uri_example, uri_check)

    urn_class = uri_class = ()
    if class_urn_body is not None:
        urn_class = urn_chain(d, d.class_urn_prefix, class_urn_body, class_urn_example,
                              _combined_width(d.class_urn_prefix, width, label, d.name))
        uri_class = uri_chain(d, digits, hint, class_uri_body, class_uri_example, uri_check)

    return RuleSet(urn=urn, urn_class=urn_class, uri=uri, uri_class=uri_class)


def _variable_width_rules(ai_type: T, ref: str, urn_example: str, uri_body: str,
                          uri_example: str, numeric_gcp: bool = True) -> RuleSet:
    """GIAI and GINC: numeric GCP followed by a free-form reference."""
    d = DESCRIPTORS[ai_type]
    return RuleSet(
        urn=urn_chain(d, d.urn_prefix, rf"{GCP}\.{ref}", urn_example,
                      _combined_max(d.urn_prefix, d.name)),
        uri=uri_chain(d, GCP, "the GCP digits", uri_body, uri_example,
                      _uri_gcp(d, numeric_gcp=numeric_gcp, max_length=MAX_VARIABLE_KEY_LENGTH)),
    )


def _cpi_rules() -> RuleSet:
    d = DESCRIPTORS[T.CPI]
    uri_check = _uri_gcp(d, numeric_gcp=True, max_length=MAX_VARIABLE_KEY_LENGTH)
    return RuleSet(
        urn=urn_chain(d, d.urn_prefix, rf"{GCP}\.{_cpi(1, 24)}\.[0-9]{{1,12}}",
                      "urn:epc:id:cpi:0614141.123ABC.123456789",
                      _combined_max(d.urn_prefix, d.name)),
        urn_class=urn_chain(d, d.class_urn_prefix, rf"{GCP}\.{_cpi(0, 24)}\.\*",
                            "urn:epc:idpat:cpi:0614141.123ABC.*",
                            _combined_max(d.class_urn_prefix, d.name)),
        uri=uri_chain(d, _cpi(7, 30), "7-30 characters", f"{_cpi(7, 30)}/8011/[0-9]{{1,12}}",
                      "https://id.gs1.org/8010/0614141123ABC/8011/123456789", uri_check),
        uri_class=uri_chain(d, _cpi(7, 30), "7-30 characters", _cpi(7, 30),
                            "https://id.gs1.org/8010/0614141123ABC", uri_check),
    )


def _lgtin_rules() -> RuleSet:
    d = DESCRIPTORS[T.LGTIN]
    return RuleSet(
        urn_class=urn_chain(d, d.class_urn_prefix, rf"{GCP}\.[0-9]{{1,7}}\.{_serial(1, 20)}",
                            "urn:epc:class:lgtin:4023333.002000.2019-10-07",
                            _combined_width(d.class_urn_prefix, 13, "item reference", d.name)),
        uri_class=uri_chain(d, "[0-9]{14}", "14 digits", rf"[0-9]{{14}}/10/{_serial(1, 20)}",
                            "https://id.gs1.org/01/04023333020008/10/2019-10-07", _uri_gcp(d)),
    )


def _build_rules() -> Dict[T, RuleSet]:
    s20 = _serial(1, 20)
    return {
        T.SGTIN: _fixed_width_rules(
            T.SGTIN, rf"{GCP}\.[0-9]{{1,7}}\.{s20}", 13, "item reference",
            "urn:epc:id:sgtin:1234567.890123.1234",
            rf"[0-9]{{14}}/21/{s20}", "https://id.gs1.org/01/12345678901231/21/1234",
            class_urn_body=rf"{GCP}\.[0-9]{{1,7}}\.\*",
            class_urn_example="urn:epc:idpat:sgtin:1234567.890123.*",
            class_uri_body="[0-9]{14}",
            class_uri_example="https://id.gs1.org/01/12345678901231",
        ),
        T.SSCC: _fixed_width_rules(
            T.SSCC, rf"{GCP}\.[0-9]{{5,11}}", 17, "serial reference",
            "urn:epc:id:sscc:123456.12345678901",
            "[0-9]{18}", "https://id.gs1.org/00/112345678901234568",
        ),
        T.SGLN: _fixed_width_rules(
            T.SGLN, rf"{GCP}\.[0-9]{{0,6}}\.{s20}", 12, "location reference",
            "urn:epc:id:sgln:1234567890.12.1234",
            rf"[0-9]{{13}}(/254/{s20})?", "https://id.gs1.org/414/1234567890128/254/1234",
        ),
        T.GRAI: _fixed_width_rules(
            T.GRAI, rf"{GCP}\.[0-9]{{0,6}}\.{_serial(1, 16)}", 12, "asset type",
            "urn:epc:id:grai:1234567890.12.ABC",
            rf"[0-9]{{13}}{_serial(1, 16)}", "https://id.gs1.org/8003/1234567890128ABC",
            class_urn_body=rf"{GCP}\.[0-9]{{0,6}}\.\*",
            class_urn_example="urn:epc:idpat:grai:1234567890.12.*",
            class_uri_body="[0-9]{13}",
            class_uri_example="https://id.gs1.org/8003/1234567890128",
        ),
        T.GIAI: _variable_width_rules(
            T.GIAI, _serial(1, 24), "urn:epc:id:giai:1234567890.ABC123",
            rf"{GCP}{_serial(1, 24)}", "https://id.gs1.org/8004/1234567890ABC123",
        ),
        T.GSRN: _fixed_width_rules(
            T.GSRN, rf"{GCP}\.[0-9]{{5,11}}", 17, "service reference",
            "urn:epc:id:gsrn:1234567890.1234567",
            "[0-9]{18}", "https://id.gs1.org/8018/123456789012345675",
        ),
        T.GSRNP: _fixed_width_rules(
            T.GSRNP, rf"{GCP}\.[0-9]{{5,11}}", 17, "service reference",
            "urn:epc:id:gsrnp:1234567890.1234567",
            "[0-9]{18}", "https://id.gs1.org/8017/123456789012345675",
        ),
        T.GDTI: _fixed_width_rules(
            T.GDTI, rf"{GCP}\.[0-9]{{0,6}}\.{_serial(1, 17)}", 12, "document type",
            "urn:epc:id:gdti:1234567890.12.ABC",
            rf"[0-9]{{13}}{_serial(1, 17)}", "https://id.gs1.org/253/1234567890128ABC",
            class_urn_body=rf"{GCP}\.[0-9]{{0,6}}\.\*",
            class_urn_example="urn:epc:idpat:gdti:1234567890.12.*",
            class_uri_body="[0-9]{13}",
            class_uri_example="https://id.gs1.org/253/1234567890128",
        ),
        T.CPI: _cpi_rules(),
        T.GCN: _fixed_width_rules(
            T.GCN, rf"{GCP}\.[0-9]{{0,6}}\.[0-9]{{1,12}}", 12, "coupon reference",
            "urn:epc:id:sgcn:1234567890.12.1234",
            "[0-9]{13}[0-9]{1,12}", "https://id.gs1.org/255/12345678901281234",
            class_urn_body=rf"{GCP}\.[0-9]{{0,6}}\.\*",
            class_urn_example="urn:epc:idpat:sgcn:1234567890.12.*",
            class_uri_body="[0-9]{13}",
            class_uri_example="https://id.gs1.org/255/1234567890128",
        ),
        T.GINC: _variable_width_rules(
            T.GINC, _serial(1, 24), "urn:epc:id:ginc:1234567890.ABC123",
            rf"{GCP}{_serial(1, 24)}", "https://id.gs1.org/401/1234567890ABC123",
        ),
        T.GSIN: _fixed_width_rules(
            T.GSIN, rf"{GCP}\.[0-9]{{4,10}}", 16, "shipper reference",
            "urn:epc:id:gsin:123456.7890123456",
            "[0-9]{17}", "https://id.gs1.org/402/12345678901234560",
        ),
        T.ITIP: _fixed_width_rules(
            T.ITIP, rf"{GCP}\.[0-9]{{1,7}}\.[0-9]{{2}}\.[0-9]{{2}}\.{s20}", 13, "item reference",
            "urn:epc:id:itip:1234567.890123.01.02.1234",
            rf"[0-9]{{18}}/21/{s20}", "https://id.gs1.org/8006/123456789012310102/21/1234",
            class_urn_body=rf"{GCP}\.[0-9]{{1,7}}\.[0-9]{{2}}\.[0-9]{{2}}\.\*",
            class_urn_example="urn:epc:idpat:itip:1234567.890123.01.02.*",
            class_uri_body="[0-9]{18}",
            class_uri_example="https://id.gs1.org/8006/123456789012310102",
        ),
        T.UPUI: _fixed_width_rules(
            T.UPUI, rf"{GCP}\.[0-9]{{1,7}}\.{_serial(1, 28)}", 13, "item reference",
            "urn:epc:id:upui:1234567.890123.1234ABC",
            rf"[0-9]{{14}}/235/{_serial(1, 28)}",
            "https://id.gs1.org/01/12345678901231/235/1234ABC",
        ),
        T.LGTIN: _lgtin_rules(),
        T.PGLN: _fixed_width_rules(
            T.PGLN, rf"{GCP}\.[0-9]{{0,6}}", 12, "party reference",
            "urn:epc:id:pgln:1234567890.12",
            "[0-9]{13}", "https://id.gs1.org/417/1234567890128",
        ),
    }


RULES: Dict[T, RuleSet] = _build_rules()


def rules_for(ai_type: T) -> RuleSet:
    return RULES[ai_type]

