"""
Loader for the YAML rule data under `idcheck/checks/rulesets/`.

Keeping denylists and character classes in data files means they can grow
without touching the evaluator logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import FrozenSet

import yaml

_RULESETS = "idcheck.checks.rulesets"


@dataclass(frozen=True)
class PasswordRules:
    """
    Attributes:
        symbols:          Characters counted as symbols for `require_symbol`.
        common_passwords: Lower-cased denylist entries.
    """
    symbols: FrozenSet[str]
    common_passwords: FrozenSet[str]


@lru_cache(maxsize=None)
def load_password_rules(fname: str = "password.yaml") -> PasswordRules:
    text = resources.files(_RULESETS).joinpath(fname).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    return PasswordRules(
        symbols=frozenset(str(data.get("symbols", ""))),
        common_passwords=frozenset(
            str(p).lower() for p in (data.get("common_passwords", []) or [])
        ),
    )
