import threading
import time

import pytest

from idcheck.engine.cache import ResultCache
from idcheck.results import ErrorCode, ValidationResult


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def cache(clock):
    return ResultCache(ttl=300, sweep_interval=60, clock=clock)

@pytest.fixture
def result():
    return ValidationResult.ok("529.982.247-25")


def test_put_then_get(cache, result):
    cache.put("fp", result)
    entry = cache.get("fp")
    assert entry is not None
    assert entry.result is result
    assert entry.fingerprint == "fp"

def test_missing_key(cache):
    assert cache.get("nope") is None
    assert cache.stats()["misses"] == 1

def test_entry_served_until_just_before_ttl(cache, clock, result):
    cache.put("fp", result)
    clock.advance(299.999)
    assert cache.get("fp") is not None

def test_entry_absent_at_ttl(cache, clock, result):
    cache.put("fp", result)
    clock.advance(300)
    assert cache.get("fp") is None
    assert "fp" not in cache
    assert cache.stats()["expired"] == 1

def test_put_overwrites_and_restamps(cache, clock, result):
    cache.put("fp", result)
    clock.advance(200)
    newer = ValidationResult.fail([ErrorCode.WRONG_LENGTH])
    cache.put("fp", newer)
    clock.advance(200)
    entry = cache.get("fp")
    assert entry is not None
    assert entry.result is newer

def test_sweep_removes_only_expired(cache, clock, result):
    cache.put("old", result)
    clock.advance(250)
    cache.put("young", result)
    clock.advance(60)
    assert cache.sweep() == 1
    assert "old" not in cache
    assert "young" in cache
    assert len(cache) == 1

def test_sweep_with_nothing_expired(cache, result):
    cache.put("fp", result)
    assert cache.sweep() == 0
    assert len(cache) == 1

def test_stats_and_clear(cache, result):
    cache.put("fp", result)
    cache.get("fp")
    cache.get("other")
    assert cache.stats() == {"hits": 1, "misses": 1, "size": 1, "expired": 0}
    cache.clear()
    assert len(cache) == 0

@pytest.mark.parametrize("kwargs", [{"ttl": 0}, {"ttl": -1}, {"sweep_interval": 0}])
def test_rejects_non_positive_settings(kwargs):
    with pytest.raises(ValueError):
        ResultCache(**kwargs)


class TestSweeper:
    """Background sweeper lifecycle."""

    def test_start_and_shutdown(self):
        cache = ResultCache(ttl=1, sweep_interval=0.01).start()
        assert cache.running
        cache.shutdown(timeout=1)
        assert not cache.running
        cache.shutdown()  # idempotent

    def test_context_manager_stops_sweeper(self):
        with ResultCache(ttl=1, sweep_interval=0.01).start() as cache:
            assert cache.running
        assert not cache.running

    def test_background_sweep_evicts(self, clock, result):
        cache = ResultCache(ttl=10, sweep_interval=0.01, clock=clock)
        cache.put("fp", result)
        clock.advance(10)
        cache.start()
        try:
            deadline = time.monotonic() + 2
            while "fp" in cache and time.monotonic() < deadline:
                time.sleep(0.01)
            assert "fp" not in cache
        finally:
            cache.shutdown(timeout=1)


def test_concurrent_puts_do_not_corrupt(result):
    cache = ResultCache(ttl=60)
    other = ValidationResult.fail([ErrorCode.WRONG_LENGTH])

    def writer(r):
        for i in range(500):
            cache.put(f"fp{i % 50}", r)
            cache.get(f"fp{(i + 7) % 50}")

    threads = [threading.Thread(target=writer, args=(r,)) for r in (result, other) * 4]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 50
    for i in range(50):
        assert cache.get(f"fp{i}").result in (result, other)
