"""Session-scoped key storage for the ad-hoc encrypt/decrypt endpoints.

Entries are keyed by ``(algorithm, session_id)`` and expire after a TTL; when
the store is full the oldest entry is evicted first.
"""

from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from asymbench import KeyPair

_Key = Tuple[str, str]


class SessionKeyStore:
    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._items: "OrderedDict[_Key, Tuple[float, KeyPair]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._items)

    def _purge_expired(self) -> None:
        now = self._clock()
        # insertion order == creation order, so expired entries sit at the front
        while self._items:
            key, (created, _) = next(iter(self._items.items()))
            if now - created < self.ttl_seconds:
                break
            del self._items[key]

    def put(self, algorithm: str, key_pair: KeyPair) -> str:
        session_id = str(uuid.uuid4())
        with self._lock:
            self._purge_expired()
            while len(self._items) >= self.max_entries:
                self._items.popitem(last=False)
            self._items[(algorithm.lower(), session_id)] = (self._clock(), key_pair)
        return session_id

    def get(self, algorithm: str, session_id: str) -> Optional[KeyPair]:
        with self._lock:
            self._purge_expired()
            entry = self._items.get((algorithm.lower(), session_id))
        return entry[1] if entry else None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
