"""
AI Descriptor Table for the GS1 EPC translator

Static per-type metadata for the GS1 keys that have both an EPC URN and a
GS1 Digital Link representation: URN scheme, Digital Link AI code, serial
component, key width, check digit layout and supported levels.

Based on the GS1 EPC Tag Data Standard (TDS 2.x, section 6) and the
GS1 Digital Link Standard: URI Syntax (AI primary keys and qualifiers).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


GS1_IDENTIFIER_DOMAIN = "https://id.gs1.org"

GCP_MIN_LENGTH = 6
GCP_MAX_LENGTH = 12

ID_URN_PREFIX = "urn:epc:id:"
CLASS_URN_PREFIX = "urn:epc:idpat:"
LGTIN_URN_PREFIX = "urn:epc:class:lgtin:"


class ApplicationIdentifierType(str, Enum):
    """Supported GS1 identifier types, valued by their EPC scheme name."""
    SGTIN = "sgtin"
    SSCC = "sscc"
    SGLN = "sgln"
    GRAI = "grai"
    GIAI = "giai"
    GSRN = "gsrn"
    GSRNP = "gsrnp"
    GDTI = "gdti"
    CPI = "cpi"
    GCN = "sgcn"
    GINC = "ginc"
    GSIN = "gsin"
    ITIP = "itip"
    UPUI = "upui"
    LGTIN = "lgtin"
    PGLN = "pgln"


class KeyLayout(str, Enum):
    """How the URN fields map onto the Digital Link key."""
    INDICATOR = "indicator"  # first reference digit moves in front of the GCP, check digit appended
    CHECKED = "checked"      # GCP + reference, check digit appended
    PLAIN = "plain"          # GCP + reference, no check digit


class SerialPlacement(str, Enum):
    """Where the serial sits in the Digital Link URI."""
    MARKER = "marker"        # behind its own AI segment, e.g. /21/
    APPENDED = "appended"    # directly after the fixed-width key
    NONE = "none"


@dataclass(frozen=True)
class AIDescriptor:
    """
    Metadata for one GS1 identifier type.

    Attributes:
        type: The identifier type
        urn_scheme: EPC scheme name used in the URN (e.g. 'sgtin')
        ai_code: Digital Link primary key AI (e.g. '01')
        serial_ai_code: Qualifier AI holding the serial, if any (e.g. '21')
        min_width: Minimum key width in the Digital Link URI
        max_width: Maximum key width in the Digital Link URI
        layout: Check digit and indicator handling
        serial_placement: Where the serial is carried in the URI
        urn_fields: Number of dot separated fields after the URN scheme
        instance_level: Instance URNs (urn:epc:id:) are supported
        class_level_supported: Pattern URNs (urn:epc:idpat:) are supported
        raw_key: Result field holding the raw Digital Link value
        title: Human-readable name
        requires: Other AI segments that must be present for sniffing
        excludes: AI segments that rule this type out when sniffing
        gcp_bounds: Inclusive GS1 Company Prefix length bounds
    """
    type: ApplicationIdentifierType
    urn_scheme: str
    ai_code: str
    serial_ai_code: Optional[str]
    min_width: int
    max_width: int
    layout: KeyLayout
    serial_placement: SerialPlacement
    urn_fields: int
    instance_level: bool
    class_level_supported: bool
    raw_key: str
    title: str
    requires: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()
    gcp_bounds: Tuple[int, int] = field(default=(GCP_MIN_LENGTH, GCP_MAX_LENGTH))

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def uri_prefix(self) -> str:
        """Digital Link path segment, e.g. '/01/'."""
        return f"/{self.ai_code}/"

    @property
    def serial_uri_prefix(self) -> Optional[str]:
        return f"/{self.serial_ai_code}/" if self.serial_ai_code else None

    @property
    def urn_prefix(self) -> str:
        if self.type is ApplicationIdentifierType.LGTIN:
            return LGTIN_URN_PREFIX
        return f"{ID_URN_PREFIX}{self.urn_scheme}:"

    @property
    def class_urn_prefix(self) -> str:
        if self.type is ApplicationIdentifierType.LGTIN:
            return LGTIN_URN_PREFIX
        return f"{CLASS_URN_PREFIX}{self.urn_scheme}:"

    @property
    def checksum_required(self) -> bool:
        return self.layout is not KeyLayout.PLAIN

    @property
    def has_serial(self) -> bool:
        return self.serial_placement is not SerialPlacement.NONE

    @property
    def fixed_width(self) -> Optional[int]:
        return self.min_width if self.min_width == self.max_width else None

    @property
    def key_width(self) -> int:
        """Width of the check-digit bearing key (GTIN-14 inside an ITIP)."""
        if self.type is ApplicationIdentifierType.ITIP:
            return 14
        return self.max_width

    def matches_urn(self, identifier: str) -> bool:
        return f":{self.urn_scheme}:" in identifier

    def matches_uri(self, identifier: str) -> bool:
        if self.uri_prefix not in identifier:
            return False
        if any(f"/{ai}/" not in identifier for ai in self.requires):
            return False
        return not any(f"/{ai}/" in identifier for ai in self.excludes)

    def value_after_code(self, identifier: str) -> str:
        """Everything after the primary key segment of a Digital Link URI."""
        idx = identifier.find(self.uri_prefix)
        if idx < 0:
            return ""
        return identifier[idx + len(self.uri_prefix):]

    def is_class_level_urn(self, identifier: str) -> bool:
        if not self.instance_level:
            return True
        return CLASS_URN_PREFIX in identifier

    def is_class_level_uri(self, identifier: str) -> bool:
        """
        A Digital Link URI is class level when its serial marker is absent,
        or, for appended serials, when the value is exactly the key width.
        """
        if not self.class_level_supported:
            return False
        if not self.instance_level:
            return True
        value = self.value_after_code(identifier)
        if self.serial_placement is SerialPlacement.MARKER:
            return self.serial_uri_prefix not in value
        return len(value) == self.max_width


# GS1 identifier descriptor table.
# Width is the Digital Link key width ("7..30" for variable keys).
# Levels: i = instance (urn:epc:id), c = class (urn:epc:idpat / urn:epc:class).
RAW_DESCRIPTOR_TABLE = """
# Type   Scheme  AI    Serial  Width   Layout     Serial    Fields  Levels  Raw    Attributes      Title
SGTIN    sgtin   01    21      14      indicator  marker    3       ic      gtin   ex=10,235       # Serialised Global Trade Item Number
SSCC     sscc    00    -       18      indicator  none      2       i       sscc   -               # Serial Shipping Container Code
SGLN     sgln    414   254     13      checked    marker    3       i       sgln   -               # Global Location Number with extension
GRAI     grai    8003  -       13      checked    appended  3       ic      grai   -               # Global Returnable Asset Identifier
GIAI     giai    8004  -       7..30   plain      none      2       i       giai   -               # Global Individual Asset Identifier
GSRN     gsrn    8018  -       18      checked    none      2       i       gsrn   -               # Global Service Relation Number (recipient)
GSRNP    gsrnp   8017  -       18      checked    none      2       i       gsrnp  -               # Global Service Relation Number (provider)
GDTI     gdti    253   -       13      checked    appended  3       ic      gdti   -               # Global Document Type Identifier
CPI      cpi     8010  8011    7..30   plain      marker    3       ic      cpi    -               # Component / Part Identifier
GCN      sgcn    255   -       13      checked    appended  3       ic      sgcn   -               # Global Coupon Number
GINC     ginc    401   -       7..30   plain      none      2       i       ginc   -               # Global Identification Number for Consignment
GSIN     gsin    402   -       17      checked    none      2       i       gsin   -               # Global Shipment Identification Number
ITIP     itip    8006  21      18      indicator  marker    5       ic      itip   -               # Individual Trade Item Piece
UPUI     upui    01    235     14      indicator  marker    3       i       upui   req=235 ex=10   # Unit Pack Identifier
LGTIN    lgtin   01    10      14      indicator  marker    3       c       lgtin  req=10 ex=235   # GTIN with batch/lot
PGLN     pgln    417   -       13      checked    none      2       i       pgln   -               # Party Global Location Number
"""


def _parse_width(spec: str) -> Tuple[int, int]:
    """
    Parse a width column.

    Examples:
        "14" -> (14, 14)
        "7..30" -> (7, 30)
    """
    if '..' in spec:
        low, high = spec.split('..')
        return int(low), int(high)
    return int(spec), int(spec)


def _parse_attributes(tokens: List[str]) -> Dict[str, Tuple[str, ...]]:
    """Parse 'req=..' / 'ex=..' attribute tokens."""
    attrs: Dict[str, Tuple[str, ...]] = {}
    for token in tokens:
        if '=' not in token:
            continue
        key, value = token.split('=', 1)
        attrs[key] = tuple(v for v in value.split(',') if v)
    return attrs


def _parse_raw_table() -> Dict[ApplicationIdentifierType, AIDescriptor]:
    descriptors: Dict[ApplicationIdentifierType, AIDescriptor] = {}

    for line in RAW_DESCRIPTOR_TABLE.strip().split('\n'):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        body, _, title = line.partition('#')
        parts = body.split()
        (type_name, scheme, ai_code, serial_ai, width,
         layout, placement, fields, levels, raw_key) = parts[:10]
        attrs = _parse_attributes(parts[10:])
        min_width, max_width = _parse_width(width)
        ai_type = ApplicationIdentifierType[type_name]

        descriptors[ai_type] = AIDescriptor(
            type=ai_type,
            urn_scheme=scheme,
            ai_code=ai_code,
            serial_ai_code=None if serial_ai == '-' else serial_ai,
            min_width=min_width,
            max_width=max_width,
            layout=KeyLayout(layout),
            serial_placement=SerialPlacement(placement),
            urn_fields=int(fields),
            instance_level='i' in levels,
            class_level_supported='c' in levels,
            raw_key=raw_key,
            title=title.strip(),
            requires=attrs.get('req', ()),
            excludes=attrs.get('ex', ()),
        )

    return descriptors


DESCRIPTORS: Dict[ApplicationIdentifierType, AIDescriptor] = _parse_raw_table()

INSTANCE_LEVEL_TYPES = tuple(t for t, d in DESCRIPTORS.items() if d.instance_level)
CLASS_LEVEL_TYPES = tuple(t for t, d in DESCRIPTORS.items() if d.class_level_supported)


def get_descriptor(ai_type: ApplicationIdentifierType) -> AIDescriptor:
    """Get the descriptor of an identifier type."""
    return DESCRIPTORS[ai_type]


def descriptor_for_scheme(scheme: str) -> Optional[AIDescriptor]:
    """Find a descriptor by EPC URN scheme name ('sgtin', 'sgcn', ...)."""
    for descriptor in DESCRIPTORS.values():
        if descriptor.urn_scheme == scheme.lower():
            return descriptor
    return None


def descriptors_for_ai(ai_code: str) -> List[AIDescriptor]:
    """All descriptors keyed by a Digital Link AI code ('01' yields three)."""
    return [d for d in DESCRIPTORS.values() if d.ai_code == ai_code]


def is_urn(identifier: str) -> bool:
    """True for EPC URNs ('urn:...'), False for Digital Link URIs."""
    return identifier.startswith("urn:")


def candidates(identifier: Optional[str]) -> List[ApplicationIdentifierType]:
    """
    Every identifier type whose URN scheme or Digital Link markers match.

    Args:
        identifier: EPC URN or Digital Link URI

    Returns:
        Matching types in table order (empty if none)
    """
    if not identifier:
        return []
    if is_urn(identifier):
        return [t for t, d in DESCRIPTORS.items() if d.matches_urn(identifier)]
    return [t for t, d in DESCRIPTORS.items() if d.matches_uri(identifier)]


def sniff(identifier: Optional[str]) -> Optional[ApplicationIdentifierType]:
    """
    Detect the identifier type of a URN or Digital Link URI.

    Every descriptor is tested, so the result does not depend on table
    order. Strings matching no type, or more than one, yield None.
    """
    found = candidates(identifier)
    return found[0] if len(found) == 1 else None
