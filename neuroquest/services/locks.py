"""Per-user locks shared by services that mutate the same user record"""
import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class UserLocks:
    """
    One asyncio.Lock per user id.

    Quest completion, drift ticks and purchases for the same user run one at
    a time; different users proceed concurrently. Locks are held weakly, so
    an entry disappears once no task holds or waits on it.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def get(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        async with self.get(user_id):
            yield
