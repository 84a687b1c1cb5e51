"""
GS1 Company Prefix length resolution.

Digital Link URIs do not mark where the GCP ends, so converting them to an
EPC URN needs the GCP length. It is looked up in a GS1 prefix format list
(the ``gcpprefixformatlist.json`` dataset published by GS1) by longest
matching prefix.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from .exceptions import ErrorKind, UnsupportedGS1IdentifierException

logger = logging.getLogger(__name__)


_DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "gcpprefixformatlist.json"
_TABLE_CACHE: Dict[Path, List[Tuple[str, int]]] = {}

TABLE_PATH_ENV = "GS1_GCP_PREFIX_TABLE"
DEFAULT_LENGTH_ENV = "GS1_DEFAULT_GCP_LENGTH"

NO_GCP_HINT = "Visit GEPIR (https://gepir.gs1.org/) or contact your GS1 MO."

# AIs whose value starts with the GCP itself (no indicator or extension digit in front)
AI_CODES_WITH_FULL_GCP = frozenset({
    "8010", "255", "253", "8004", "401", "402", "8018", "8017", "417", "414",
})

_AI_SEGMENT = re.compile(r"(/|^)(\d+/|/\d+/)([^/]+)")


def _sort_entries(entries: Mapping[str, int]) -> List[Tuple[str, int]]:
    """Longest prefix first, then lexicographic."""
    return sorted(
        ((str(prefix), int(length)) for prefix, length in entries.items()),
        key=lambda entry: (-len(entry[0]), entry[0]),
    )


def _load_table(path: Path) -> List[Tuple[str, int]]:
    """Load a GCP prefix format list with a small in-process cache."""
    if path in _TABLE_CACHE:
        return _TABLE_CACHE[path]

    logger.info("Loading GCP prefix table %s", path)
    data = json.loads(path.read_text(encoding="utf-8"))
    records = data.get("GCPPrefixFormatList", {}).get("entry", [])
    entries = _sort_entries({r["prefix"]: r["gcpLength"] for r in records})
    logger.info("Loaded %d GCP prefixes", len(entries))

    _TABLE_CACHE[path] = entries
    return entries


def _not_found(identifier: Optional[str]) -> UnsupportedGS1IdentifierException:
    return UnsupportedGS1IdentifierException(
        f"GCP length not found for: {identifier}. {NO_GCP_HINT}",
        ErrorKind.RESOLUTION,
    )


class GCPLengthProvider:
    """
    Resolves the GCP length of a Digital Link URI from a prefix table.

    Args:
        table_path: Prefix format list JSON. Defaults to $GS1_GCP_PREFIX_TABLE,
            then to the sample table shipped with the package.
        entries: Ready-made ``{prefix: gcp_length}`` mapping; takes
            precedence over ``table_path``.
        default_gcp_length: Length returned when no prefix matches.
            Defaults to $GS1_DEFAULT_GCP_LENGTH when set.
    """

    def __init__(
        self,
        table_path: Optional[Path] = None,
        entries: Optional[Mapping[str, int]] = None,
        default_gcp_length: Optional[int] = None,
    ):
        env_path = os.getenv(TABLE_PATH_ENV, "")
        self.table_path = Path(table_path or env_path or _DEFAULT_TABLE_PATH)
        self._entries = _sort_entries(entries) if entries is not None else None

        if default_gcp_length is None:
            env_default = os.getenv(DEFAULT_LENGTH_ENV, "").strip()
            if env_default:
                try:
                    default_gcp_length = int(env_default)
                except ValueError as exc:
                    raise ValueError(f"Invalid default GCP length value: {env_default}") from exc
        self.default_gcp_length = default_gcp_length

    @property
    def entries(self) -> List[Tuple[str, int]]:
        if self._entries is None:
            self._entries = _load_table(self.table_path)
        return self._entries

    def resolve(self, identifier: Optional[str], ai_code: Optional[str] = None) -> int:
        """
        Resolve the GCP length of a Digital Link URI.

        Args:
            identifier: Digital Link URI (or a bare ``/AI/value`` path)
            ai_code: Primary key AI; when given, the value is read right
                after ``/ai_code/`` instead of after the first numeric segment

        Returns:
            GCP length

        Raises:
            UnsupportedGS1IdentifierException: blank input, URN, no AI
                segment, or no matching prefix without a default
        """
        if not identifier or not identifier.strip() or "urn:" in identifier:
            raise _not_found(identifier)

        if ai_code:
            marker = f"/{ai_code}/"
            idx = identifier.find(marker)
            value = identifier[idx + len(marker):].split("/", 1)[0] if idx >= 0 else ""
        else:
            match = _AI_SEGMENT.search(identifier)
            if match:
                ai_code = match.group(2).strip("/")
                value = match.group(3)
            else:
                value = ""
        if not value:
            raise _not_found(identifier)

        return self.resolve_value(value, ai_code, identifier)

    def resolve_value(self, value: str, ai_code: str, identifier: Optional[str] = None) -> int:
        """Look up the GCP length of a primary key value carried under ``ai_code``."""
        if ai_code not in AI_CODES_WITH_FULL_GCP and len(value) > 13:
            value = value[1:]

        for prefix, length in self.entries:
            if value.startswith(prefix):
                return length

        if self.default_gcp_length is not None:
            return self.default_gcp_length

        raise _not_found(identifier or value)


_DEFAULT_PROVIDER: Optional[GCPLengthProvider] = None


def get_default_provider() -> GCPLengthProvider:
    """Shared provider built from the environment on first use."""
    global _DEFAULT_PROVIDER
    if _DEFAULT_PROVIDER is None:
        _DEFAULT_PROVIDER = GCPLengthProvider()
    return _DEFAULT_PROVIDER


def resolve_gcp_length(identifier: Optional[str], ai_code: Optional[str] = None) -> int:
    """Resolve with the shared default provider."""
    return get_default_provider().resolve(identifier, ai_code)
