from __future__ import annotations

import pytest

from asymbench import KeyPair
from webapp.session_store import SessionKeyStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _pair(tag: str) -> KeyPair:
    return KeyPair(public_key=f"pk-{tag}", private_key=f"sk-{tag}", key_size=0)


def test_put_and_get_scoped_by_algorithm():
    store = SessionKeyStore(ttl_seconds=60, max_entries=4)
    sid = store.put("RSA", _pair("a"))
    assert store.get("rsa", sid).public_key == "pk-a"
    assert store.get("ecc", sid) is None
    assert store.get("rsa", "missing") is None


def test_entries_expire_after_ttl():
    clock = FakeClock()
    store = SessionKeyStore(ttl_seconds=10, max_entries=4, clock=clock)
    sid = store.put("rsa", _pair("a"))
    clock.now = 9.9
    assert store.get("rsa", sid) is not None
    clock.now = 10.0
    assert store.get("rsa", sid) is None
    assert len(store) == 0


def test_oldest_entry_evicted_when_full():
    store = SessionKeyStore(ttl_seconds=60, max_entries=2)
    first = store.put("rsa", _pair("1"))
    second = store.put("rsa", _pair("2"))
    third = store.put("ecc", _pair("3"))
    assert store.get("rsa", first) is None
    assert store.get("rsa", second) is not None
    assert store.get("ecc", third) is not None
    assert len(store) == 2


def test_session_ids_are_unique():
    store = SessionKeyStore(ttl_seconds=60, max_entries=100)
    ids = {store.put("rsa", _pair(str(i))) for i in range(50)}
    assert len(ids) == 50


def test_max_entries_must_be_positive():
    with pytest.raises(ValueError):
        SessionKeyStore(ttl_seconds=1, max_entries=0)
