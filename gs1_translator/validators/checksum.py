"""
GS1 Check Digit Functions

Implements the GS1 Mod10 check digit used by the numeric keys that carry one:
- GTIN-14 (SGTIN, LGTIN, UPUI, ITIP), SSCC-18
- GLN-13 (SGLN, PGLN)
- GRAI, GDTI, GCN (13-digit keys)
- GSRN, GSRNP (18 digits), GSIN (17 digits)

Based on GS1 General Specifications, section 7.9.1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..exceptions import ErrorKind, ValidationException


@dataclass
class ValidationResult:
    """Result of a check digit validation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def calculate_check_digit_mod10(digits: str) -> int:
    """
    Calculate GS1 Mod10 check digit.

    Algorithm (GS1 General Specifications):
    1. From right to left, alternate multipliers 3 and 1
    2. Sum all products
    3. Check digit = (10 - (sum mod 10)) mod 10

    Args:
        digits: Numeric string without check digit

    Returns:
        Calculated check digit (0-9)
    """
    if not digits or not digits.isdigit():
        raise ValueError("Input must be a non-empty numeric string")

    total = 0
    for i, digit in enumerate(reversed(digits)):
        multiplier = 3 if i % 2 == 0 else 1
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def compute_check_digit(digits: str) -> str:
    """Check digit for ``digits`` as a single character."""
    return str(calculate_check_digit_mod10(digits))


def verify_check_digit(value: str) -> bool:
    """
    Verify a numeric value whose last digit is its check digit.

    Args:
        value: Digits including the trailing check digit

    Returns:
        True if the trailing digit matches the recomputed one
    """
    if len(value) < 2 or not value.isdigit():
        return False
    return compute_check_digit(value[:-1]) == value[-1]


def validate_check_digit(value: str, name: str = "") -> ValidationResult:
    """
    Validate the trailing check digit of ``value``.

    Args:
        value: The complete value including check digit
        name: Optional identifier name used in error messages

    Returns:
        ValidationResult with check digit status in meta
    """
    result = ValidationResult(valid=True)

    if not value or not value.isdigit():
        result.valid = False
        result.errors.append("Value must be numeric for check digit validation")
        return result

    if len(value) < 2:
        result.valid = False
        result.errors.append("Value too short for check digit validation")
        return result

    provided_check = int(value[-1])
    calculated_check = calculate_check_digit_mod10(value[:-1])

    result.meta['calculated_check_digit'] = calculated_check
    result.meta['provided_check_digit'] = provided_check
    result.meta['check_digit_valid'] = (provided_check == calculated_check)

    if provided_check != calculated_check:
        result.valid = False
        label = f"{name} " if name else ""
        result.errors.append(
            f"{label}has invalid check digit: expected {calculated_check} but found {provided_check}"
        )

    return result


def check_digit_at(identifier: str, marker: str, width: int, name: str) -> None:
    """
    Verify the check digit embedded in a Digital Link URI.

    The key starts right after ``marker`` and is ``width`` data digits
    followed by one check digit.

    Raises:
        ValidationException: marker missing, segment too short or mismatch
    """
    idx = identifier.find(marker)
    if idx < 0:
        raise ValidationException(
            f"{name} prefix not found in: {identifier}", ErrorKind.GRAMMAR
        )

    start = idx + len(marker)
    segment = identifier[start:start + width + 1]
    if len(segment) < width + 1 or not segment.isdigit():
        raise ValidationException(
            f"{name} segment too short ({width}+1 digits) in: {identifier}",
            ErrorKind.GRAMMAR,
        )

    result = validate_check_digit(segment)
    if not result.valid:
        raise ValidationException(
            f"{name} has invalid check digit: expected {result.meta['calculated_check_digit']} "
            f"but found {result.meta['provided_check_digit']} in {identifier}",
            ErrorKind.CHECKSUM,
        )
