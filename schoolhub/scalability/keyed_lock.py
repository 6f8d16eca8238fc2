"""Per-key asyncio locking. Serializes work on one key; distinct keys never wait on each other."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

LOCK_PREFIX = "lock:"


class KeyedLock:
    """
    In-process lock table keyed by string (e.g. webhook event id, order id).
    Entries are dropped once no holder or waiter remains, so the table does not grow
    with the number of keys ever seen.
    """

    def __init__(self, key_prefix: str = LOCK_PREFIX) -> None:
        self._prefix = key_prefix
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for `key` for the duration of the block."""
        full_key = self._key(key)
        lock = self._locks.setdefault(full_key, asyncio.Lock())
        self._users[full_key] = self._users.get(full_key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[full_key] -= 1
            if self._users[full_key] == 0:
                del self._users[full_key]
                del self._locks[full_key]

    def is_held(self, key: str) -> bool:
        lock = self._locks.get(self._key(key))
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
