"""
Human-readable rendering of validation results.

The engine only emits `ErrorCode` tags; this is where they become sentences.
"""

from __future__ import annotations

from typing import Dict

from rich.table import Table

from ..results import ErrorCode, ValidationResult

_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.WRONG_LENGTH: "Identifier has the wrong number of digits.",
    ErrorCode.REPEATED_SEQUENCE: "Identifier is a single repeated digit.",
    ErrorCode.CHECK_DIGIT_MISMATCH: "Check digits do not match.",
    ErrorCode.EMPTY: "Email is empty.",
    ErrorCode.TOO_LONG: "Email is longer than 254 characters.",
    ErrorCode.LOCAL_PART_TOO_LONG: "Part before '@' is longer than 64 characters.",
    ErrorCode.FORMAT_INVALID: "Email is not well formed.",
    ErrorCode.PASSWORD_TOO_SHORT: "Password is too short.",
    ErrorCode.PASSWORD_TOO_LONG: "Password is too long.",
    ErrorCode.MISSING_UPPERCASE: "Password needs an uppercase letter.",
    ErrorCode.MISSING_LOWERCASE: "Password needs a lowercase letter.",
    ErrorCode.MISSING_NUMBER: "Password needs a number.",
    ErrorCode.MISSING_SYMBOL: "Password needs a symbol.",
    ErrorCode.REPEATED_CHARACTERS: "Password repeats the same character too many times in a row.",
    ErrorCode.COMMON_PASSWORD: "Password is too common.",
    ErrorCode.SURROUNDING_WHITESPACE: "Password starts or ends with whitespace.",
}


def describe(code: ErrorCode) -> str:
    return _MESSAGES.get(code, code.value.replace("_", " ").capitalize())


def render_result(result: ValidationResult, title: str = "") -> Table:
    """Build a two-column rich table for console output."""
    table = Table(title=title or None, show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")

    status = "[green]valid[/green]" if result.valid else "[red]invalid[/red]"
    table.add_row("status", status)
    if result.normalized is not None:
        table.add_row("normalized", result.normalized)
    for key, value in result.metadata.items():
        table.add_row(key, str(value))
    for code in result.reasons:
        table.add_row(code.value, describe(code))
    return table
