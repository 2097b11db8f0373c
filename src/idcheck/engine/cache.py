"""
Time-bounded memoization of validation results.

A plain dict guarded by a lock. Entries are replaced whole on `put`, so concurrent
writers for the same fingerprint simply race to last-writer-wins. Expiry is
enforced on read (an expired entry is treated as absent and dropped) and by a
periodic sweep that bounds memory for fingerprints nobody asks for again.

The sweep snapshots the map under the lock, decides what expired without holding
it, then deletes only entries that are still the exact object it examined; a
fresh `put` that lands mid-sweep survives.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import structlog

from ..results import ValidationResult

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 5 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS = 60


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: str
    result: ValidationResult
    created_at: float


class ResultCache:
    """
    TTL cache of `ValidationResult`s keyed by fingerprint.

    Typical usage:
        with ResultCache(ttl=300, sweep_interval=60).start() as cache:
            cache.put(fp, result)
            entry = cache.get(fp)

    Args:
        ttl:            Seconds an entry may be served after it was stored.
        sweep_interval: Seconds between background sweeps (see `start`).
        clock:          Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")

        self.ttl = ttl
        self.sweep_interval = sweep_interval
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._expired = 0

        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    # -- Lifecycle ----------------------------------------------------------------------

    def start(self) -> "ResultCache":
        """Launch the background sweeper (no-op if already running)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return self
        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop, name="idcheck-cache-sweeper", daemon=True
        )
        self._sweeper.start()
        log.debug("cache_sweeper_started", interval=self.sweep_interval, ttl=self.ttl)
        return self

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop the sweeper. Safe to call more than once."""
        self._stop.set()
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join(timeout)
            log.debug("cache_sweeper_stopped")

    @property
    def running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def __enter__(self) -> "ResultCache":
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    def _sweep_loop(self) -> None:
        # Event.wait returns True once shutdown() sets the flag.
        while not self._stop.wait(self.sweep_interval):
            try:
                self.sweep()
            except Exception:  # pragma: no cover
                log.exception("cache_sweep_failed")

    # -- Public API ---------------------------------------------------------------------

    def _expired_at(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at >= self.ttl

    def get(self, fingerprint: str) -> Optional[CacheEntry]:
        """Return the live entry for `fingerprint`, or None if absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is None:
                self._misses += 1
                return None
            if self._expired_at(entry, now):
                del self._entries[fingerprint]
                self._expired += 1
                self._misses += 1
                return None
            self._hits += 1
            return entry

    def put(self, fingerprint: str, result: ValidationResult) -> CacheEntry:
        """Store (or overwrite) the result for `fingerprint`, stamped now."""
        entry = CacheEntry(fingerprint=fingerprint, result=result, created_at=self._clock())
        with self._lock:
            self._entries[fingerprint] = entry
        return entry

    def sweep(self) -> int:
        """Remove every expired entry; returns how many were removed."""
        with self._lock:
            snapshot = list(self._entries.items())
        now = self._clock()
        stale = [(fp, e) for fp, e in snapshot if self._expired_at(e, now)]
        if not stale:
            return 0

        removed = 0
        with self._lock:
            for fp, entry in stale:
                if self._entries.get(fp) is entry:
                    del self._entries[fp]
                    removed += 1
            self._expired += removed
        log.debug("cache_swept", removed=removed)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._entries),
                "expired": self._expired,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        # Raw membership; does not apply TTL or touch hit/miss counters.
        with self._lock:
            return fingerprint in self._entries
