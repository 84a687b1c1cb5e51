"""
Check digit helpers for GS1 keys.
"""

from .checksum import (
    ValidationResult,
    calculate_check_digit_mod10,
    check_digit_at,
    compute_check_digit,
    validate_check_digit,
    verify_check_digit,
)

__all__ = [
    "ValidationResult",
    "calculate_check_digit_mod10",
    "check_digit_at",
    "compute_check_digit",
    "validate_check_digit",
    "verify_check_digit",
]
