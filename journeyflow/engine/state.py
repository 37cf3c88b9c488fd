"""
Journey and State Models.

A State is a named node of the journey graph: the handler that does the
work, the outgoing transitions, and how the caller should render it.
A Journey is one running instance of the graph and is what the store persists.
"""

from typing import Any, Generic, Optional, Sequence, TypeVar
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from journeyflow.engine.handler import StateHandler, is_state_handler


T = TypeVar("T")


# Reserved protocol events
START_EVENT = "Start"
BACK_EVENT = "Back"
RESUME_EVENT = "Resume"
TRANSITION_COMPLETE = "TransitionComplete"


@dataclass(frozen=True)
class Transition:
    """An event-labelled edge from the owning state to `destination`."""
    event: str
    destination: str
    
    def to_dict(self) -> dict:
        return {"event": self.event, "destination": self.destination}


@dataclass(frozen=True)
class State:
    """
    A state in the journey graph.
    
    Attributes:
        name: Unique, non-empty state name
        handler: Object implementing `visit` and `revisit`
        transitions: Outgoing edges, matched by event in declaration order
        is_checkpoint: Whether the journey can be resumed at this state
        next_screen: Display hint returned to the caller
        meta_data: Opaque display metadata returned to the caller
    """
    
    name: str
    handler: StateHandler
    transitions: Sequence[Transition] = ()
    is_checkpoint: bool = False
    next_screen: Optional[str] = None
    meta_data: Any = None
    
    def __post_init__(self):
        if not self.name:
            raise ValueError("State name cannot be empty")
        if not is_state_handler(self.handler):
            raise ValueError(
                f"Handler for state '{self.name}' must implement visit and revisit"
            )
        # Accept any iterable of transitions, store an immutable tuple
        object.__setattr__(self, "transitions", tuple(self.transitions))
    
    @property
    def is_terminal(self) -> bool:
        return not self.transitions
    
    def find_transition(self, event: str) -> Optional[Transition]:
        """First transition declared for `event`, or None."""
        for transition in self.transitions:
            if transition.event == event:
                return transition
        return None
    
    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "handler": type(self.handler).__name__,
            "transitions": [t.to_dict() for t in self.transitions],
            "is_checkpoint": self.is_checkpoint,
            "next_screen": self.next_screen,
            "meta_data": self.meta_data,
        }


class Journey(BaseModel, Generic[T]):
    """
    The persisted record of one journey.
    
    An empty `current_stage` means the journey has not visited any state yet.
    """
    
    jid: str
    current_stage: str = ""
    last_checkpoint_stage: str = ""
    data: T
    
    def enter(self, state: State, data: T) -> None:
        """Record that `state` was (re)visited and produced `data`."""
        self.data = data
        self.current_stage = state.name
        if state.is_checkpoint:
            self.last_checkpoint_stage = state.name


class FsmRequest(BaseModel):
    """A single call into the engine."""
    jid: Optional[str] = Field(None, description="Journey id; omit to start a new journey")
    event: str = Field(..., description="Event to apply to the journey")
    data: Any = Field(None, description="Input payload for the visited state")
    
    @field_validator("event")
    @classmethod
    def event_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("event cannot be empty")
        return value


class FsmResponse(BaseModel):
    """What the caller gets back, built from the last state executed."""
    jid: str
    data: Any = None
    next_screen: Optional[str] = None
    meta_data: Any = None
