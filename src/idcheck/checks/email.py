"""
Structural email validation.

This is a shape check, not deliverability: no DNS lookups, no mailbox probing.
Every applicable problem is reported, so "too long" and "malformed" can appear
together.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..results import ErrorCode, ValidationResult

MAX_EMAIL_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64

# Local part: dot-separated atoms of the usual unquoted characters (no leading,
# trailing or doubled dots). Domain: two or more labels of 1..63 chars, each
# starting and ending with a letter or digit.
_LOCAL = r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
_LABEL = r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
EMAIL_RE = re.compile(rf"^{_LOCAL}@{_LABEL}(?:\.{_LABEL})+$")


def validate_email(raw: Optional[str]) -> ValidationResult:
    """
    Validate `raw` as an email address.

    The value is trimmed and lower-cased first; that normalized form is what gets
    checked and what a valid result returns.
    """
    email = (raw or "").strip().lower()
    if not email:
        return ValidationResult.fail([ErrorCode.EMPTY])

    errors: List[ErrorCode] = []
    if len(email) > MAX_EMAIL_LENGTH:
        errors.append(ErrorCode.TOO_LONG)

    local, at, _ = email.partition("@")
    if at and len(local) > MAX_LOCAL_PART_LENGTH:
        errors.append(ErrorCode.LOCAL_PART_TOO_LONG)

    if not EMAIL_RE.match(email):
        errors.append(ErrorCode.FORMAT_INVALID)

    if errors:
        return ValidationResult.fail(errors)
    return ValidationResult.ok(email)
