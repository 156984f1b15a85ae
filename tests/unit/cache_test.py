from __future__ import annotations

from page_tree.core.cache import TtlCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_returns_value_until_ttl_elapses() -> None:
    clock = FakeClock()
    cache: TtlCache[list[int]] = TtlCache(ttl=10.0, clock=clock)
    cache.set("k", [1, 2])

    clock.now = 109.9
    assert cache.get("k") == [1, 2]
    clock.now = 110.0
    assert cache.get("k") is None
    assert "k" not in cache


def test_set_replaces_and_restarts_ttl() -> None:
    clock = FakeClock()
    cache: TtlCache[str] = TtlCache(ttl=10.0, clock=clock)
    cache.set("k", "old")
    clock.now = 105.0
    cache.set("k", "new")

    clock.now = 112.0
    assert cache.get("k") == "new"


def test_delete_and_clear() -> None:
    cache: TtlCache[int] = TtlCache(ttl=60.0, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("missing")
    assert "a" not in cache
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_len_ignores_expired_entries() -> None:
    clock = FakeClock()
    cache: TtlCache[int] = TtlCache(ttl=5.0, clock=clock)
    cache.set("a", 1)
    clock.now = 103.0
    cache.set("b", 2)

    clock.now = 106.0
    assert len(cache) == 1
    assert cache.ttl == 5.0
