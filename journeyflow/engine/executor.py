"""
Async Journey Executor.

The executor drives one request through the journey graph: it resolves the
journey, visits states until a handler signals TRANSITION_COMPLETE, persists
the journey once, and builds the response from the last state executed.
Resume and back requests recompute an already-reached state via revisit.
"""

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar
import logging
import time

from journeyflow.engine import handler as handlers
from journeyflow.engine.graph import Graph
from journeyflow.engine.locks import JourneyLocks
from journeyflow.engine.state import (
    BACK_EVENT,
    RESUME_EVENT,
    START_EVENT,
    TRANSITION_COMPLETE,
    FsmRequest,
    FsmResponse,
    Journey,
    State,
)
from journeyflow.errors import BypassError, InternalSystemError

if TYPE_CHECKING:
    from journeyflow.storage.journey_store import JourneyStore


# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


class Executor(Generic[T]):
    """
    Journey executor.
    
    Executes one request at a time against a journey, handling:
    - Starting new journeys (with rollback if the first call fails)
    - Internal auto-advancing through states until completion is signalled
    - Resuming at the last checkpoint
    - Navigating back along a `Back` transition
    
    Concurrent calls on the same journey id are last-writer-wins unless a
    JourneyLocks registry is supplied.
    
    Usage:
        executor = Executor(graph, journey_store)
        response = await executor.execute(FsmRequest(event=START_EVENT))
    """
    
    def __init__(
        self,
        graph: Graph,
        journey_store: "JourneyStore[T]",
        locks: Optional[JourneyLocks] = None,
        max_hops: int = 100,
    ):
        """
        Initialize the executor.
        
        Args:
            graph: The validated journey graph
            journey_store: Persistence for journey records
            locks: Optional per-journey lock registry
            max_hops: Maximum states visited in a single call
        """
        if max_hops < 1:
            raise ValueError("max_hops must be at least 1")
        self.graph = graph
        self.journey_store = journey_store
        self.locks = locks
        self.max_hops = max_hops
    
    async def execute(self, request: FsmRequest) -> FsmResponse:
        """
        Execute a request against its journey.
        
        Args:
            request: The caller's request; no jid means "start a new journey"
            
        Returns:
            FsmResponse built from the last state executed
            
        Raises:
            BypassError: The event is not valid for the journey
            InternalSystemError: The graph or journey record is inconsistent
            Exception: Store and handler errors propagate unchanged
        """
        if not request.jid:
            return await self._start(request)
        
        if self.locks is None:
            return await self._continue(request)
        async with self.locks.hold(request.jid):
            return await self._continue(request)
    
    async def _start(self, request: FsmRequest) -> FsmResponse:
        if request.event != START_EVENT:
            raise BypassError("invalid journey error: wrong event")
        
        journey = await self.journey_store.create()
        logger.info(f"Starting journey {journey.jid}")
        try:
            return await self._traverse(journey, self.graph.initial_state, request.data)
        except BaseException as e:
            # Cancellation also leaves an unvisited journey behind
            logger.error(f"New journey {journey.jid} failed, rolling back: {e!r}")
            await self._rollback(journey.jid)
            raise
    
    async def _continue(self, request: FsmRequest) -> FsmResponse:
        journey = await self.journey_store.get(request.jid)
        
        if request.event == RESUME_EVENT:
            return await self._resume(journey)
        if request.event == BACK_EVENT:
            return await self._back(journey)
        
        current = self._current_state(journey)
        destination = self.graph.get_next_state(current, request.event)
        return await self._traverse(journey, destination, request.data)
    
    async def _traverse(self, journey: Journey[T], state: State, data: Any) -> FsmResponse:
        """Visit `state` and keep following internal events until completion."""
        start_time = time.time()
        hops = 0
        
        while True:
            hops += 1
            if hops > self.max_hops:
                raise InternalSystemError(
                    f"journey exceeded {self.max_hops} transitions in one call"
                )
            
            logger.info(f"Visiting state: {state.name} (journey {journey.jid}, hop {hops})")
            result = await handlers.visit(state.handler, journey.jid, journey.data, data)
            journey.enter(state, result.journey_data)
            
            if result.next_event == TRANSITION_COMPLETE:
                break
            
            # The response of one hop is the input of the next
            data = result.response
            state = self.graph.get_next_state(state, result.next_event)
            logger.debug(f"Internal event {result.next_event} -> {state.name}")
        
        await self.journey_store.save(journey)
        logger.info(
            f"Journey {journey.jid} at '{journey.current_stage}' after {hops} hop(s) "
            f"in {(time.time() - start_time) * 1000:.1f}ms"
        )
        return self._respond(journey, state, result.response)
    
    async def _resume(self, journey: Journey[T]) -> FsmResponse:
        state = self.graph.get_state(journey.last_checkpoint_stage)
        if state is None:
            raise InternalSystemError("cannot find next state")
        logger.info(f"Resuming journey {journey.jid} at checkpoint '{state.name}'")
        return await self._revisit(journey, state)
    
    async def _back(self, journey: Journey[T]) -> FsmResponse:
        current = self._current_state(journey)
        transition = current.find_transition(BACK_EVENT)
        if transition is None:
            raise InternalSystemError(f"no back transition for state {current.name}")
        
        state = self.graph.get_state(transition.destination)
        if state is None:
            raise InternalSystemError("cannot find next state")
        logger.info(f"Journey {journey.jid} going back from '{current.name}' to '{state.name}'")
        return await self._revisit(journey, state)
    
    async def _revisit(self, journey: Journey[T], state: State) -> FsmResponse:
        result = await handlers.revisit(state.handler, journey.jid, journey.data)
        journey.enter(state, result.journey_data)
        await self.journey_store.save(journey)
        return self._respond(journey, state, result.response)
    
    def _current_state(self, journey: Journey[T]) -> State:
        state = self.graph.get_state(journey.current_stage)
        if state is None:
            raise InternalSystemError("cannot find current state")
        return state
    
    async def _rollback(self, jid: str) -> None:
        """Best-effort removal of a journey created by a failed call."""
        try:
            await self.journey_store.delete(jid)
        except Exception as e:
            logger.warning(f"Rollback of journey {jid} failed: {e}")
    
    @staticmethod
    def _respond(journey: Journey[T], state: State, response: Any) -> FsmResponse:
        return FsmResponse(
            jid=journey.jid,
            data=response,
            next_screen=state.next_screen,
            meta_data=state.meta_data,
        )
