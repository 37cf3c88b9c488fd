"""
Engine package - Core journey orchestration components.
"""

from journeyflow.engine.state import (
    BACK_EVENT,
    RESUME_EVENT,
    START_EVENT,
    TRANSITION_COMPLETE,
    FsmRequest,
    FsmResponse,
    Journey,
    State,
    Transition,
)
from journeyflow.engine.handler import StateHandler, VisitResult, RevisitResult
from journeyflow.engine.graph import Graph
from journeyflow.engine.locks import JourneyLocks
from journeyflow.engine.executor import Executor

__all__ = [
    "BACK_EVENT",
    "RESUME_EVENT",
    "START_EVENT",
    "TRANSITION_COMPLETE",
    "FsmRequest",
    "FsmResponse",
    "Journey",
    "State",
    "Transition",
    "StateHandler",
    "VisitResult",
    "RevisitResult",
    "Graph",
    "JourneyLocks",
    "Executor",
]
