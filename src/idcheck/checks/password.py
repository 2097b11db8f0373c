"""
Policy-driven password checks plus a heuristic strength score.

The score is computed for every input, valid or not, so callers can show a
strength meter while the user is still typing:

    +2  length >= 12
    +1  both upper- and lower-case letters
    +1  at least one digit
    +2  at least one non-alphanumeric character

for a maximum of 6.
"""

from __future__ import annotations

from itertools import groupby
from typing import List, Optional

from ..config import PasswordPolicy
from ..results import ErrorCode, ValidationResult
from .rules import PasswordRules, load_password_rules

MAX_STRENGTH = 6
LONG_PASSWORD = 12


def _is_ascii_digit(c: str) -> bool:
    # Same notion of "digit" as the identifier normalizer.
    return "0" <= c <= "9"


def strength_score(password: str) -> int:
    score = 0
    if len(password) >= LONG_PASSWORD:
        score += 2
    if any(c.isupper() for c in password) and any(c.islower() for c in password):
        score += 1
    if any(_is_ascii_digit(c) for c in password):
        score += 1
    if any(not c.isalnum() for c in password):
        score += 2
    return score


def longest_run(password: str) -> int:
    """Length of the longest run of one repeated character ("aaab" -> 3)."""
    return max((len(list(g)) for _, g in groupby(password)), default=0)


def evaluate_password(
    raw: Optional[str],
    policy: Optional[PasswordPolicy] = None,
    rules: Optional[PasswordRules] = None,
) -> ValidationResult:
    """
    Check `raw` against `policy` (defaults apply when omitted).

    Returns a result whose metadata always holds `strength` (0..6) and `length`.
    A valid result has no normalized form: the password is never echoed back.
    """
    policy = policy or PasswordPolicy()
    rules = rules or load_password_rules()
    password = raw or ""

    errors: List[ErrorCode] = []
    if len(password) < policy.min_length:
        errors.append(ErrorCode.PASSWORD_TOO_SHORT)
    if len(password) > policy.max_length:
        errors.append(ErrorCode.PASSWORD_TOO_LONG)

    if policy.require_upper and not any(c.isupper() for c in password):
        errors.append(ErrorCode.MISSING_UPPERCASE)
    if policy.require_lower and not any(c.islower() for c in password):
        errors.append(ErrorCode.MISSING_LOWERCASE)
    if policy.require_number and not any(_is_ascii_digit(c) for c in password):
        errors.append(ErrorCode.MISSING_NUMBER)
    if policy.require_symbol and not any(c in rules.symbols for c in password):
        errors.append(ErrorCode.MISSING_SYMBOL)

    if longest_run(password) > policy.max_consecutive_repeats:
        errors.append(ErrorCode.REPEATED_CHARACTERS)
    if policy.forbid_common_passwords and password.lower() in rules.common_passwords:
        errors.append(ErrorCode.COMMON_PASSWORD)
    if password != password.strip():
        errors.append(ErrorCode.SURROUNDING_WHITESPACE)

    meta = {"strength": strength_score(password), "length": len(password)}
    if errors:
        return ValidationResult.fail(errors, **meta)
    return ValidationResult.ok(None, **meta)
