"""
Per-journey locking.

The engine does not fence concurrent calls on the same journey by itself.
Passing a JourneyLocks registry to the executor serialises calls per journey
id inside one process; calls on different journeys still run concurrently.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict
import asyncio


class JourneyLocks:
    """Registry of asyncio locks keyed by journey id."""
    
    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}
    
    @asynccontextmanager
    async def hold(self, jid: str) -> AsyncIterator[None]:
        """Hold the lock for `jid` for the duration of the block."""
        lock = self._locks.setdefault(jid, asyncio.Lock())
        self._users[jid] = self._users.get(jid, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[jid] -= 1
            # Drop the lock once nobody holds or waits on it
            if not self._users[jid]:
                del self._users[jid]
                del self._locks[jid]
    
    def is_locked(self, jid: str) -> bool:
        lock = self._locks.get(jid)
        return lock is not None and lock.locked()
    
    def __len__(self) -> int:
        return len(self._locks)
