"""idcheck: identifier, email and password validation engine."""

from .checks import (
    digits_only,
    evaluate_password,
    is_repeated_digit_sequence,
    validate_email,
    validate_id11,
    validate_id14,
    weighted_check_digit,
)
from .config import CacheConfig, IdcheckConfig, PasswordPolicy, load_config
from .engine import ResultCache, Validator
from .results import (
    POLICY_VIOLATIONS,
    ErrorCode,
    Kind,
    UnsupportedKindError,
    ValidationRequest,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    "digits_only",
    "is_repeated_digit_sequence",
    "weighted_check_digit",
    "validate_id11",
    "validate_id14",
    "validate_email",
    "evaluate_password",
    "CacheConfig",
    "IdcheckConfig",
    "PasswordPolicy",
    "load_config",
    "ResultCache",
    "Validator",
    "POLICY_VIOLATIONS",
    "ErrorCode",
    "Kind",
    "UnsupportedKindError",
    "ValidationRequest",
    "ValidationResult",
]
