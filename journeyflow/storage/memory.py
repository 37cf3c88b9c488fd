"""
In-Memory Key-Value Storage.

Backs the journey store in development and tests. Entries can expire a fixed
time after their last write, the way a TTL'd cache key would.
Can be easily replaced with Redis or any other key-value service that
implements the same three coroutines.
"""

from typing import Callable, Dict, Optional, Tuple
import asyncio
import logging
import time


logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    Thread-safe in-memory key-value store with optional expiry.
    
    Values are strings. A value written `expiry_minutes` ago or earlier
    reads as missing and is evicted on access.
    """
    
    def __init__(
        self,
        expiry_minutes: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = asyncio.Lock()
        self._ttl = expiry_minutes * 60 if expiry_minutes else None
        self._clock = clock
    
    async def set(self, key: str, value: str) -> None:
        """Write `value` under `key`, resetting its expiry."""
        async with self._lock:
            expires_at = self._clock() + self._ttl if self._ttl else None
            self._entries[key] = (value, expires_at)
    
    async def get(self, key: str) -> Optional[str]:
        """Get a value by key, or None if missing or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                logger.debug(f"Key expired: {key}")
                return None
            return value
    
    async def delete(self, key: str) -> None:
        """Delete a key. Deleting a missing key is not an error."""
        async with self._lock:
            self._entries.pop(key, None)
    
    def __len__(self) -> int:
        return len(self._entries)
