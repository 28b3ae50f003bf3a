# apps/api/betsim/core/locks.py
"""
In-process serialization of bankroll mutations.

Placement (deduct) and settlement (credit) both read-then-write a user's
bankroll, so they must never interleave for the same user. The service runs
as a single process; the row lock taken with SELECT ... FOR UPDATE covers
PostgreSQL deployments with more than one worker.
"""
from __future__ import annotations

import threading
from contextlib import ExitStack, contextmanager
from typing import Dict, Hashable, Iterable, Iterator


class LockRegistry:
    """Lazily creates one lock per key and never forgets it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def get(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self.get(key):
            yield

    @contextmanager
    def hold_many(self, keys: Iterable[Hashable]) -> Iterator[None]:
        # sorted acquisition order keeps two settlements from deadlocking
        with ExitStack() as stack:
            for key in sorted(set(keys), key=str):
                stack.enter_context(self.get(key))
            yield


user_locks = LockRegistry()
game_locks = LockRegistry()
