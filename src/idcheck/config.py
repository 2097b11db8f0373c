from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional
import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---- Password policy (what a password must satisfy) ----
class PasswordPolicy(BaseModel):
    """
    Rules applied by `evaluate_password`.

    Immutable: build a variant with `merged()` instead of mutating a shared instance.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    min_length: int = Field(default=8, ge=1)
    max_length: int = Field(default=128, ge=1)
    require_upper: bool = True
    require_lower: bool = True
    require_number: bool = True
    require_symbol: bool = True
    forbid_common_passwords: bool = True
    max_consecutive_repeats: int = Field(default=2, ge=1)  # "aaa" breaks the default

    @model_validator(mode="after")
    def _check_bounds(self) -> "PasswordPolicy":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "PasswordPolicy":
        """Return a new policy with `overrides` applied on top of this one."""
        if not overrides:
            return self
        return PasswordPolicy.model_validate({**self.model_dump(), **dict(overrides)})


# ---- Result cache ----
class CacheConfig(BaseModel):
    enabled: bool = True
    ttl_seconds: float = Field(default=300.0, gt=0)  # 5 minutes
    sweep_interval_seconds: float = Field(default=60.0, gt=0)

# ---- Root config ----
class IdcheckConfig(BaseModel):
    password: PasswordPolicy = Field(default_factory=PasswordPolicy)
    cache: CacheConfig = Field(default_factory=CacheConfig)

# ---- Loader ----
def load_config(path: Optional[Path]) -> IdcheckConfig:
    if not path:
        return IdcheckConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return IdcheckConfig(**data)
