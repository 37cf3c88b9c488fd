"""
Journey Record Store.

The engine only needs create/get/save/delete over journey records, with
"not found" distinguishable from other failures. KeyValueJourneyStore
provides that on top of any string key-value store by storing each journey
as JSON under a prefixed key.
"""

from typing import Any, Callable, Generic, Optional, Protocol, Type, TypeVar
import logging
import uuid

from pydantic import ValidationError

from journeyflow.engine.state import Journey
from journeyflow.errors import InternalSystemError, JourneyNotFoundError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class JourneyStore(Protocol[T]):
    """Durable persistence of journey records, keyed by journey id."""
    
    async def create(self) -> Journey[T]:
        ...
    
    async def get(self, jid: str) -> Journey[T]:
        ...
    
    async def save(self, journey: Journey[T]) -> None:
        ...
    
    async def delete(self, jid: str) -> None:
        ...


class KeyValueStore(Protocol):
    """Minimal string key-value service."""
    
    async def set(self, key: str, value: str) -> None:
        ...
    
    async def get(self, key: str) -> Optional[str]:
        ...
    
    async def delete(self, key: str) -> None:
        ...


def new_journey_id() -> str:
    return str(uuid.uuid4())


class KeyValueJourneyStore(Generic[T]):
    """
    Journey store backed by a KeyValueStore.
    
    Attributes:
        data_type: Type of the journey payload; called with no arguments to
            build the zero value of a new journey
        id_factory: Generates ids for new journeys
        key_prefix: Prefix of every journey key
    """
    
    def __init__(
        self,
        kv_store: KeyValueStore,
        data_type: Type[T] = dict,
        id_factory: Callable[[], str] = new_journey_id,
        key_prefix: str = "FSM_JOURNEY_",
    ):
        self.kv_store = kv_store
        self.data_type = data_type
        self.id_factory = id_factory
        self.key_prefix = key_prefix
        self._model = Journey[data_type]
    
    def journey_key(self, jid: str) -> str:
        return f"{self.key_prefix}{jid}"
    
    async def create(self) -> Journey[T]:
        """Create, store and return a journey with a fresh id and empty data."""
        journey = self._model(jid=self.id_factory(), data=self.data_type())
        await self._write(journey)
        logger.info(f"Created journey: {journey.jid}")
        return journey
    
    async def get(self, jid: str) -> Journey[T]:
        """
        Load a journey.
        
        Raises:
            JourneyNotFoundError: No record under this id
            InternalSystemError: The store failed or the record is unreadable
        """
        try:
            raw = await self.kv_store.get(self.journey_key(jid))
        except Exception as e:
            raise InternalSystemError(str(e)) from e
        
        if raw is None:
            raise JourneyNotFoundError()
        
        try:
            return self._model.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Corrupt journey record {jid}: {e}")
            raise InternalSystemError(f"cannot decode journey {jid}") from e
    
    async def save(self, journey: Journey[T]) -> None:
        """Overwrite the stored record of `journey`."""
        await self._write(journey)
    
    async def delete(self, jid: str) -> None:
        """Delete a journey record."""
        try:
            await self.kv_store.delete(self.journey_key(jid))
        except Exception as e:
            raise InternalSystemError(str(e)) from e
        logger.info(f"Deleted journey: {jid}")
    
    async def _write(self, journey: Journey[Any]) -> None:
        try:
            payload = journey.model_dump_json()
            await self.kv_store.set(self.journey_key(journey.jid), payload)
        except Exception as e:
            raise InternalSystemError(str(e)) from e
