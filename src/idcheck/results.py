"""
Typed requests, outcomes and error tags shared by every validator.

Validators never raise for bad input. They return a `ValidationResult` carrying
either the normalized form of the value or an ordered tuple of `ErrorCode` tags.
Turning tags into sentences is the job of `idcheck.reporting`, so the engine
stays locale-agnostic and tests can assert on tags instead of message strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from .config import PasswordPolicy


class UnsupportedKindError(ValueError):
    """Raised when a request names a kind the engine has no validator for."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"unsupported validation kind: {kind!r}")
        self.kind = kind


class Kind(str, Enum):
    """What a `ValidationRequest` asks to be checked."""
    ID11 = "id11"
    ID14 = "id14"
    EMAIL = "email"
    PASSWORD = "password"

    @classmethod
    def parse(cls, value: "Kind | str") -> "Kind":
        """
        Accept a member or a loose spelling of one.

        'ID11', 'national-id-11' and 'national_id_11' all map to `Kind.ID11`.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedKindError(value)
        key = value.strip().lower().replace("-", "").replace("_", "")
        if key.startswith("national"):
            key = key[len("national"):]
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedKindError(value)


class ErrorCode(str, Enum):
    """Closed set of reasons a value can be rejected."""
    # identifiers
    WRONG_LENGTH = "wrong_length"
    REPEATED_SEQUENCE = "repeated_sequence"
    CHECK_DIGIT_MISMATCH = "check_digit_mismatch"
    # email
    EMPTY = "empty"
    TOO_LONG = "too_long"
    LOCAL_PART_TOO_LONG = "local_part_too_long"
    FORMAT_INVALID = "format_invalid"
    # password policy
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_TOO_LONG = "password_too_long"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_NUMBER = "missing_number"
    MISSING_SYMBOL = "missing_symbol"
    REPEATED_CHARACTERS = "repeated_characters"
    COMMON_PASSWORD = "common_password"
    SURROUNDING_WHITESPACE = "surrounding_whitespace"


# Every tag the password evaluator can emit.
POLICY_VIOLATIONS = frozenset({
    ErrorCode.PASSWORD_TOO_SHORT,
    ErrorCode.PASSWORD_TOO_LONG,
    ErrorCode.MISSING_UPPERCASE,
    ErrorCode.MISSING_LOWERCASE,
    ErrorCode.MISSING_NUMBER,
    ErrorCode.MISSING_SYMBOL,
    ErrorCode.REPEATED_CHARACTERS,
    ErrorCode.COMMON_PASSWORD,
    ErrorCode.SURROUNDING_WHITESPACE,
})


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one validation.

    Attributes:
        valid:      True when no reason was found to reject the value.
        normalized: Canonical rendering of a valid value (punctuated identifier,
                    trimmed/lower-cased email). Always None for passwords and for
                    invalid results.
        reasons:    Ordered rejection tags; empty iff `valid`.
        metadata:   Kind-specific extras (e.g. password `strength` and `length`).
    """
    valid: bool
    normalized: Optional[str] = None
    reasons: Tuple[ErrorCode, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Cached results are shared between callers; keep them read-only.
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def ok(cls, normalized: Optional[str], **metadata: Any) -> "ValidationResult":
        return cls(valid=True, normalized=normalized, metadata=metadata)

    @classmethod
    def fail(cls, reasons: Iterable[ErrorCode], **metadata: Any) -> "ValidationResult":
        reasons = tuple(reasons)
        if not reasons:
            raise ValueError("an invalid result needs at least one reason")
        return cls(valid=False, reasons=reasons, metadata=metadata)

    def has(self, code: ErrorCode) -> bool:
        return code in self.reasons

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view, used by the CLI's --json output."""
        return {
            "valid": self.valid,
            "normalized": self.normalized,
            "reasons": [r.value for r in self.reasons],
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class ValidationRequest:
    """
    A single call into the facade.

    `kind` may be given loosely (see `Kind.parse`); the facade resolves it and raises
    `UnsupportedKindError` for anything it cannot dispatch. `policy` only matters for
    passwords and is ignored for the other kinds.
    """
    kind: "Kind | str"
    raw_value: Optional[str]
    policy: Optional["PasswordPolicy"] = None
