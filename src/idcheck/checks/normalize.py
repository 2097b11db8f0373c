"""
Normalizers applied before any digit-based check.

Identifiers arrive in whatever shape a user typed them ("529.982.247-25",
"529 982 247 25", ...). Checks operate on the bare digit string only.
"""

from __future__ import annotations

from typing import Optional


def digits_only(raw: Optional[str]) -> str:
    """
    Return only the ASCII digit characters from `raw`.

    None (or any other absent value) normalizes to the empty string, so callers can
    treat "nothing supplied" as "zero digits supplied".
    """
    if not raw:
        return ""
    return "".join(ch for ch in str(raw) if "0" <= ch <= "9")


def is_repeated_digit_sequence(digits: str, min_length: int) -> bool:
    """
    True iff `digits` is one digit repeated and is at least `min_length` long.

    "00000000000" and "99999999999999" pass every weighted-sum check yet are never
    issued, so the identifier checks reject them up front.
    """
    if len(digits) < min_length:
        return False
    return len(set(digits)) == 1
