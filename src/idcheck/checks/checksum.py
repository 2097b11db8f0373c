"""
Check-digit validation for the 11-digit (individual) and 14-digit (company)
national identifiers.

Both schemes append two check digits to a base number. Each check digit is the
weighted sum of the preceding digits mod 11, mapped so that remainders 0 and 1
give 0 and anything else gives 11 - remainder. The second check digit is computed
over the base *plus* the first check digit.

Format problems (length, a single repeated digit) are collected first; when any is
present the checksum is not computed at all, so a result never mixes format and
checksum reasons.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..results import ErrorCode, ValidationResult
from .normalize import digits_only, is_repeated_digit_sequence

ID11_LENGTH = 11
ID14_LENGTH = 14

# 11-digit scheme: 10..2 over the 9-digit base, then 11..2 over base + first digit.
ID11_FIRST_WEIGHTS = tuple(range(10, 1, -1))
ID11_SECOND_WEIGHTS = tuple(range(11, 1, -1))

# 14-digit scheme: fixed vectors over the 12-digit base, then base + first digit.
ID14_FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
ID14_SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def weighted_check_digit(base_digits: str, weights: Sequence[int]) -> int:
    """
    Compute one mod-11 check digit.

    Args:
        base_digits: Digit string the check digit protects.
        weights:     One weight per digit, left to right.

    Returns:
        0 when sum(d * w) % 11 < 2, otherwise 11 - remainder.
    """
    if len(base_digits) != len(weights):
        raise ValueError(
            f"expected {len(weights)} digits, got {len(base_digits)}"
        )
    total = 0
    for ch, weight in zip(base_digits, weights):
        total += (ord(ch) - 48) * weight  # '0' -> 48
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def _format_errors(digits: str, length: int) -> List[ErrorCode]:
    errors: List[ErrorCode] = []
    if len(digits) != length:
        errors.append(ErrorCode.WRONG_LENGTH)
    if is_repeated_digit_sequence(digits, length):
        errors.append(ErrorCode.REPEATED_SEQUENCE)
    return errors


def _check_digits(digits: str, first: Sequence[int], second: Sequence[int]) -> bool:
    base = digits[: len(first)]
    d1 = weighted_check_digit(base, first)
    d2 = weighted_check_digit(base + str(d1), second)
    return digits[-2:] == f"{d1}{d2}"


def format_id11(digits: str) -> str:
    """'52998224725' -> '529.982.247-25'"""
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def format_id14(digits: str) -> str:
    """'11222333000181' -> '11.222.333/0001-81'"""
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def validate_id11(raw: Optional[str]) -> ValidationResult:
    """Validate an 11-digit individual taxpayer number."""
    digits = digits_only(raw)
    errors = _format_errors(digits, ID11_LENGTH)
    if errors:
        return ValidationResult.fail(errors)
    if not _check_digits(digits, ID11_FIRST_WEIGHTS, ID11_SECOND_WEIGHTS):
        return ValidationResult.fail([ErrorCode.CHECK_DIGIT_MISMATCH])
    return ValidationResult.ok(format_id11(digits), digits=digits)


def validate_id14(raw: Optional[str]) -> ValidationResult:
    """Validate a 14-digit company registration number."""
    digits = digits_only(raw)
    errors = _format_errors(digits, ID14_LENGTH)
    if errors:
        return ValidationResult.fail(errors)
    if not _check_digits(digits, ID14_FIRST_WEIGHTS, ID14_SECOND_WEIGHTS):
        return ValidationResult.fail([ErrorCode.CHECK_DIGIT_MISMATCH])
    return ValidationResult.ok(format_id14(digits), digits=digits)
