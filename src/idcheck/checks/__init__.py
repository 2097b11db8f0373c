"""Pure validators: normalizer, check-digit engine, email and password checks."""

from .checksum import validate_id11, validate_id14, weighted_check_digit
from .email import validate_email
from .normalize import digits_only, is_repeated_digit_sequence
from .password import evaluate_password, strength_score

__all__ = [
    "digits_only",
    "is_repeated_digit_sequence",
    "weighted_check_digit",
    "validate_id11",
    "validate_id14",
    "validate_email",
    "evaluate_password",
    "strength_score",
]
