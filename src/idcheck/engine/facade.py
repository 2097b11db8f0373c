"""
Dispatches validation requests to the matching validator, with a read-through cache.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Union

import structlog

from ..checks.checksum import validate_id11, validate_id14
from ..checks.email import validate_email
from ..checks.password import evaluate_password
from ..config import IdcheckConfig, PasswordPolicy
from ..results import Kind, UnsupportedKindError, ValidationRequest, ValidationResult
from .cache import ResultCache
from .fingerprint import fingerprint

log = structlog.get_logger()

Handler = Callable[[Optional[str], Optional[PasswordPolicy]], ValidationResult]


class Validator:
    """
    Single entry point for callers (HTTP handlers, the CLI, tests).

    Flow per request:
      1) resolve kind   -> `UnsupportedKindError` if nothing handles it
      2) fingerprint    -> SHA-256 of (kind, raw value[, policy])
      3) cache lookup   -> a hit returns the stored result object unchanged
      4) dispatch       -> run the validator for that kind
      5) cache store    -> remember the fresh result for the TTL window

    Args:
        config: Engine configuration; defaults apply when omitted.
        cache:  A cache to share with other validators. None builds one from
                `config.cache` (if enabled); False disables caching.
    """

    def __init__(
        self,
        config: Optional[IdcheckConfig] = None,
        cache: Union[ResultCache, None, bool] = None,
    ) -> None:
        self.cfg = config or IdcheckConfig()
        self._owns_cache = False

        if cache is False:
            self.cache: Optional[ResultCache] = None
        elif isinstance(cache, ResultCache):
            self.cache = cache
        elif self.cfg.cache.enabled:
            self.cache = ResultCache(
                ttl=self.cfg.cache.ttl_seconds,
                sweep_interval=self.cfg.cache.sweep_interval_seconds,
            ).start()
            self._owns_cache = True
        else:
            self.cache = None

        self._handlers: Dict[Kind, Handler] = {
            Kind.ID11: lambda raw, _policy: validate_id11(raw),
            Kind.ID14: lambda raw, _policy: validate_id14(raw),
            Kind.EMAIL: lambda raw, _policy: validate_email(raw),
            Kind.PASSWORD: lambda raw, policy: evaluate_password(raw, policy),
        }

    # ---------------- Public API ----------------

    def validate(self, request: ValidationRequest) -> ValidationResult:
        kind = Kind.parse(request.kind)
        handler = self._handlers.get(kind)
        if handler is None:
            raise UnsupportedKindError(request.kind)

        policy = self._policy_for(kind, request.policy)
        if self.cache is None:
            return handler(request.raw_value, policy)

        fp = fingerprint(kind, request.raw_value, policy)
        entry = self.cache.get(fp)
        if entry is not None:
            log.debug("cache_hit", kind=kind.value, fingerprint=fp[:12])
            return entry.result

        result = handler(request.raw_value, policy)
        self.cache.put(fp, result)
        log.debug("cache_miss", kind=kind.value, fingerprint=fp[:12], valid=result.valid)
        return result

    def check(
        self,
        kind: Union[Kind, str],
        raw_value: Optional[str],
        policy: Optional[PasswordPolicy] = None,
    ) -> ValidationResult:
        """Shorthand for `validate(ValidationRequest(kind, raw_value, policy))`."""
        return self.validate(ValidationRequest(kind=kind, raw_value=raw_value, policy=policy))

    def close(self) -> None:
        """Stop the sweeper of a cache this validator created itself."""
        if self._owns_cache and self.cache is not None:
            self.cache.shutdown()

    def __enter__(self) -> "Validator":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # --------------- Internals ------------------

    def _policy_for(self, kind: Kind, policy: Optional[PasswordPolicy]) -> Optional[PasswordPolicy]:
        if kind is not Kind.PASSWORD:
            return None
        return policy or self.cfg.password
