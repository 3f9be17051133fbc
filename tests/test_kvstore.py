from datetime import timedelta

import pytest

from xlive.kvstore import KeyValueStore


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return KeyValueStore(clock=clock)


def test_set_and_get_round_trip(store):
    store.set("k", b"value")
    assert store.get("k") == b"value"


def test_get_missing_returns_none(store):
    assert store.get("missing") is None


def test_exists(store):
    assert store.exists("k") is False
    store.set("k", "v")
    assert store.exists("k") is True


def test_delete_returns_count(store):
    store.set("k", "v")
    assert store.delete("k") == 1
    assert store.delete("k") == 0
    assert store.get("k") is None


def test_key_expires_after_ttl(store, clock):
    store.set("k", "v", 10)
    clock.now = 9.5
    assert store.get("k") == "v"
    clock.now = 10.0
    assert store.get("k") is None
    assert store.exists("k") is False


def test_ttl_reports_remaining_time(store, clock):
    store.set("k", "v", timedelta(hours=1))
    clock.now = 600.0
    assert store.ttl("k") == pytest.approx(3600.0 - 600.0)


def test_ttl_none_without_expiry(store):
    store.set("k", "v")
    assert store.ttl("k") is None


def test_ttl_none_for_missing_key(store):
    assert store.ttl("nope") is None


def test_zero_ttl_means_no_expiry(store, clock):
    store.set("k", "v", 0)
    clock.now = 1e9
    assert store.get("k") == "v"


def test_set_overwrites_value_and_ttl(store, clock):
    store.set("k", "a", 5)
    store.set("k", "b")
    clock.now = 100.0
    assert store.get("k") == "b"


def test_delete_expired_key_counts_zero(store, clock):
    store.set("k", "v", 1)
    clock.now = 2.0
    assert store.delete("k") == 0


def test_ping(store):
    assert store.ping() is True


def test_default_clock_store_works():
    real = KeyValueStore()
    real.set("a", "1", 60)
    assert real.get("a") == "1"
    remaining = real.ttl("a")
    assert 0 < remaining <= 60