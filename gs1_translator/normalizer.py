"""
Domain and alias normalization for GS1 Digital Link URIs.

- short_name_replacer: legacy short-name path segments (/gtin/, /ser/, ...)
  to numeric AI codes, moving primary keys onto the GS1 resolver domain
- canonicalize_domain: scheme and host to https://id.gs1.org
- normalize_digital_link: GS1 Digital Link short codes in the path and in
  query keys to AI codes
"""

from __future__ import annotations

import re
from typing import Dict, Optional
from urllib.parse import urlsplit

from .ai_descriptors import GS1_IDENTIFIER_DOMAIN

# Order matters: /gsrnp/ must be replaced before /gsrn/
SHORT_NAMES: Dict[str, str] = {
    "/gtin/": "/01/",
    "/itip/": "/8006/",
    "/cpi/": "/8010/",
    "/gln/": "/414/",
    "/party/": "/417/",
    "/gsrnp/": "/8017/",
    "/gsrn/": "/8018/",
    "/gcn/": "/255/",
    "/sscc/": "/00/",
    "/gdti/": "/253/",
    "/ginc/": "/401/",
    "/gsin/": "/402/",
    "/grai/": "/8003/",
    "/giai/": "/8004/",
    "/cpv/": "/22/",
    "/lot/": "/10/",
    "/ser/": "/21/",
}

# Qualifiers: the segment is replaced but the domain is left alone
QUALIFIER_SEGMENTS = frozenset({"/lot/", "/ser/", "/10/", "/21/"})

DIGITAL_LINK_SHORT_CODES: Dict[str, str] = {
    "gtin": "01",
    "lot": "10",
    "ser": "21",
    "exp": "17",
    "cpv": "22",
    "sscc": "00",
    "gln": "414",
    "party": "417",
    "glnx": "254",
    "gdti": "253",
    "gcn": "255",
    "ginc": "401",
    "gsin": "402",
    "grai": "8003",
    "giai": "8004",
    "itip": "8006",
    "cpid": "8010",
    "gsrnp": "8017",
    "gsrn": "8018",
}

_AI_CODES = frozenset(DIGITAL_LINK_SHORT_CODES.values()) | {"235", "8011"}
_AI_PATH_SEGMENT = re.compile(r"/\d{2,4}/")


def short_name_replacer(identifier: Optional[str]) -> Optional[str]:
    """
    Replace legacy short names in a Digital Link URI with AI codes.

    For primary keys, everything in front of the key is replaced with the
    GS1 resolver domain. A URI that already uses a numeric primary key on a
    foreign host is moved onto the resolver domain as well. Strings without
    any known segment are returned unchanged.

    Examples:
        "https://example.org/giai/4000001111" -> "https://id.gs1.org/8004/4000001111"
        "https://id.gs1.de/01/84384384898340/ser/12" -> "https://id.gs1.org/01/84384384898340/21/12"
    """
    if not identifier:
        return identifier

    result = identifier
    for short_name, code in SHORT_NAMES.items():
        if short_name in result:
            if short_name not in QUALIFIER_SEGMENTS:
                result = GS1_IDENTIFIER_DOMAIN + result[result.index(short_name):]
            result = result.replace(short_name, code)
        elif (code in result and code not in QUALIFIER_SEGMENTS
                and not result.startswith(GS1_IDENTIFIER_DOMAIN)):
            result = GS1_IDENTIFIER_DOMAIN + result[result.index(code):]
    return result


def canonicalize_domain(identifier: Optional[str]) -> Optional[str]:
    """
    Move a Digital Link URI onto https://id.gs1.org.

    Only http(s) URIs whose path carries a numeric AI segment are touched;
    path and query are kept as they are.
    """
    if not identifier:
        return identifier

    parts = urlsplit(identifier)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return identifier
    if not _AI_PATH_SEGMENT.search(parts.path + "/"):
        return identifier

    return _join(GS1_IDENTIFIER_DOMAIN, parts.path, parts.query, parts.fragment)


def _join(base: str, path: str, query: str, fragment: str) -> str:
    uri = base + path
    if query:
        uri += "?" + query
    if fragment:
        uri += "#" + fragment
    return uri


def _normalize_path(path: str) -> str:
    segments = path.split("/")
    i = 0
    while i < len(segments):
        segment = segments[i]
        if segment in DIGITAL_LINK_SHORT_CODES or segment in _AI_CODES:
            segments[i] = DIGITAL_LINK_SHORT_CODES.get(segment, segment)
            # the next segment is the value
            i += 2
        else:
            i += 1
    return "/".join(segments)


def _normalize_query(query: str) -> str:
    params = []
    for param in query.split("&"):
        key, sep, value = param.partition("=")
        params.append(DIGITAL_LINK_SHORT_CODES.get(key, key) + sep + value)
    return "&".join(params)


def normalize_digital_link(uri: Optional[str]) -> Optional[str]:
    """
    Normalize GS1 Digital Link short codes to numeric AI codes.

    Path segments and query keys are rewritten (gtin -> 01, lot -> 10,
    ser -> 21, exp -> 17, ...); a trailing slash is dropped. Query values
    and non-AI query keys are kept. Non-http strings pass through.

    Examples:
        "https://id.gs1.org/gtin/09506000164908/lot/ABC123"
            -> "https://id.gs1.org/01/09506000164908/10/ABC123"
        "https://id.gs1.org?gtin=09506000164908&lot=ABC123"
            -> "https://id.gs1.org?01=09506000164908&10=ABC123"
    """
    if not uri:
        return uri

    parts = urlsplit(uri)
    if parts.scheme not in ("http", "https"):
        return uri

    path = _normalize_path(parts.path).rstrip("/")
    query = _normalize_query(parts.query) if parts.query else parts.query
    return _join(f"{parts.scheme}://{parts.netloc}", path, query, parts.fragment)
