"""
Graph Definition for the Journey Engine.

The Graph is the static description of a journey: which states exist, how
events move between them, and which state ends the journey. It is built once
at startup and never changes afterwards.
"""

from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass, field
import logging

from journeyflow.engine.state import (
    State,
    START_EVENT,
    RESUME_EVENT,
    TRANSITION_COMPLETE,
)
from journeyflow.errors import (
    BypassError,
    GraphConstructionError,
    InternalSystemError,
    MultipleTerminalStatesError,
    NoTerminalStateError,
)


logger = logging.getLogger(__name__)

# Events that can never label an ordinary transition in strict mode
_NON_TRANSITION_EVENTS = (START_EVENT, RESUME_EVENT, TRANSITION_COMPLETE)


@dataclass
class Graph:
    """
    A journey graph consisting of states and event-labelled transitions.
    
    Use `Graph.build` rather than the constructor; it performs the
    construction-time validation.
    
    Attributes:
        initial_state: The state visited when a journey starts
        states: Dict of state_name -> State
        terminal_state: The only state with no outgoing transitions
    """
    
    initial_state: State
    terminal_state: State
    states: Dict[str, State] = field(default_factory=dict)
    
    @classmethod
    def build(
        cls,
        initial_state: State,
        other_states: Iterable[State],
        strict: bool = False,
    ) -> "Graph":
        """
        Build and validate a graph.
        
        Exactly one of the declared states must have no outgoing transitions.
        Dangling destinations and unreachable states are not checked here;
        they surface as lookup failures when a journey hits them.
        
        Args:
            initial_state: Entry state of every journey
            other_states: All remaining states
            strict: Also reject duplicate events on a state and transitions
                labelled with reserved protocol events
            
        Returns:
            The validated Graph
            
        Raises:
            NoTerminalStateError: No state without transitions
            MultipleTerminalStatesError: More than one such state
            GraphConstructionError: Duplicate state names, or a strict check failed
        """
        declared = [initial_state, *other_states]
        states: Dict[str, State] = {}
        for state in declared:
            if state.name in states:
                raise GraphConstructionError(f"duplicate state name {state.name}")
            states[state.name] = state
        
        terminals = [state for state in declared if state.is_terminal]
        if not terminals:
            raise NoTerminalStateError()
        if len(terminals) > 1:
            raise MultipleTerminalStatesError()
        
        for state in declared:
            cls._check_events(state, strict)
        
        graph = cls(initial_state=initial_state, terminal_state=terminals[0], states=states)
        logger.info(
            f"Built journey graph: {len(states)} states, "
            f"initial '{initial_state.name}', terminal '{terminals[0].name}'"
        )
        return graph
    
    @staticmethod
    def _check_events(state: State, strict: bool) -> None:
        seen = set()
        for transition in state.transitions:
            if strict and transition.event in _NON_TRANSITION_EVENTS:
                raise GraphConstructionError(
                    f"reserved event {transition.event} used on state {state.name}"
                )
            if transition.event in seen:
                if strict:
                    raise GraphConstructionError(
                        f"duplicate event {transition.event} on state {state.name}"
                    )
                logger.warning(
                    f"State '{state.name}' declares event '{transition.event}' more "
                    f"than once; only the first transition is reachable"
                )
            seen.add(transition.event)
    
    def get_state(self, name: str) -> Optional[State]:
        """Get a state by name, or None if it is not part of the graph."""
        return self.states.get(name)
    
    def get_next_state(self, state: State, event: str) -> State:
        """
        Resolve the destination of `event` from `state`.
        
        Raises:
            BypassError: `state` declares no transition for `event`
            InternalSystemError: The transition points at an unknown state
        """
        transition = state.find_transition(event)
        if transition is None:
            raise BypassError(f"invalid event {event} for state {state.name}")
        destination = self.states.get(transition.destination)
        if destination is None:
            raise InternalSystemError("cannot find next state")
        return destination
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize the graph to a dictionary."""
        return {
            "initial_state": self.initial_state.name,
            "terminal_state": self.terminal_state.name,
            "states": {name: state.to_dict() for name, state in self.states.items()},
            "checkpoints": [name for name, state in self.states.items() if state.is_checkpoint],
        }
    
    def to_mermaid(self) -> str:
        """Generate a Mermaid diagram of the graph."""
        lines = ["graph TD"]
        
        # Add states
        for name, state in self.states.items():
            label = name.replace("_", " ")
            if state is self.initial_state:
                lines.append(f'    {name}["{label} 🚀"]')
            elif state is self.terminal_state:
                lines.append(f'    {name}["{label} 🏁"]')
            elif state.is_checkpoint:
                lines.append(f'    {name}[("{label}")]')
            else:
                lines.append(f'    {name}["{label}"]')
        
        # Add transitions
        for name, state in self.states.items():
            for transition in state.transitions:
                lines.append(f"    {name} -->|{transition.event}| {transition.destination}")
        
        return "\n".join(lines)
    
    def list_states(self) -> List[str]:
        return list(self.states.keys())
    
    def __repr__(self) -> str:
        return (
            f"Graph(states={self.list_states()}, initial='{self.initial_state.name}', "
            f"terminal='{self.terminal_state.name}')"
        )
