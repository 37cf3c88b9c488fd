"""
Storage package - Journey records on top of key-value storage.
"""

from journeyflow.storage.memory import InMemoryKeyValueStore
from journeyflow.storage.journey_store import (
    JourneyStore,
    KeyValueStore,
    KeyValueJourneyStore,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JourneyStore",
    "KeyValueStore",
    "KeyValueJourneyStore",
]
