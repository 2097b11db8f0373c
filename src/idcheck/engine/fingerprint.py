from __future__ import annotations

import hashlib
from typing import Optional

from ..config import PasswordPolicy
from ..results import Kind


def fingerprint(kind: Kind, raw_value: Optional[str], policy: Optional[PasswordPolicy] = None) -> str:
    """
    Deterministic cache key for a validation input.

    SHA-256 over (kind | raw_value [| policy]). The raw value itself never appears in
    the key, which matters for passwords. Policies are folded in as canonical JSON
    so two evaluations under different rules never share a cached result.
    """
    h = hashlib.sha256()
    h.update(kind.value.encode("utf-8"))
    h.update(b"|")
    if raw_value is None:
        h.update(b"-")
    else:
        h.update(b"+")
        h.update(str(raw_value).encode("utf-8", "surrogatepass"))
    if policy is not None:
        h.update(b"|")
        h.update(policy.model_dump_json().encode("utf-8"))
    return h.hexdigest()
