"""
State Handler Contract.

Each state delegates its business step to a handler with two capabilities:

- visit: consume new input for the state and say which event comes next
- revisit: recompute the state's response without new input (resume/back)

Handlers are plain objects; no base class is required. Methods may be sync
or async, the engine calls both transparently.
"""

from typing import Any, NamedTuple, Protocol, runtime_checkable
import asyncio
import inspect
import functools


class VisitResult(NamedTuple):
    """Outcome of visiting a state."""
    response: Any
    journey_data: Any
    next_event: str


class RevisitResult(NamedTuple):
    """Outcome of revisiting a state."""
    response: Any
    journey_data: Any


@runtime_checkable
class StateHandler(Protocol):
    """The two capabilities every state handler implements."""
    
    def visit(self, jid: str, journey_data: Any, data: Any) -> VisitResult:
        ...
    
    def revisit(self, jid: str, journey_data: Any) -> RevisitResult:
        ...


def is_state_handler(handler: Any) -> bool:
    """Check that `handler` exposes callable visit and revisit methods."""
    return callable(getattr(handler, "visit", None)) and callable(
        getattr(handler, "revisit", None)
    )


async def _call(method, *args) -> Any:
    if inspect.iscoroutinefunction(method):
        return await method(*args)
    # Run sync handler in executor to not block
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, functools.partial(method, *args))
    # Callables that are async without being coroutine functions
    if inspect.isawaitable(result):
        result = await result
    return result


async def visit(handler: StateHandler, jid: str, journey_data: Any, data: Any) -> VisitResult:
    """
    Invoke the handler's visit capability.
    
    Exceptions raised by the handler propagate unchanged.
    
    Returns:
        VisitResult (plain 3-tuples are accepted and converted)
    """
    response, updated_data, next_event = await _call(handler.visit, jid, journey_data, data)
    return VisitResult(response, updated_data, next_event)


async def revisit(handler: StateHandler, jid: str, journey_data: Any) -> RevisitResult:
    """Invoke the handler's revisit capability."""
    response, updated_data = await _call(handler.revisit, jid, journey_data)
    return RevisitResult(response, updated_data)
