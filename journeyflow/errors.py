"""
Error taxonomy for the journey engine.

Every error carries a stable error code and the HTTP status a transport
should answer with. Caller faults (bypass, bad request, not found) are kept
apart from internal and dependency faults.
"""

from typing import Any, Dict


class FsmError(Exception):
    """Base class for all journey engine errors."""

    error_code: str = "FSM_ERROR"
    status_code: int = 500

    def __init__(self, error_msg: str = ""):
        super().__init__(error_msg)
        self.error_msg = error_msg

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.error_code, "error_msg": self.error_msg}

    def __str__(self) -> str:
        return f'{{ErrorCode: "{self.error_code}", ErrorMsg: "{self.error_msg}"}}'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FsmError):
            return NotImplemented
        return type(self) is type(other) and self.error_msg == other.error_msg

    def __hash__(self) -> int:
        return hash((type(self), self.error_msg))


class BypassError(FsmError):
    """The request tried to skip or bypass the journey (invalid event/state pair)."""

    error_code = "FSM_BYPASS_ERROR"
    status_code = 403


class JourneyNotFoundError(BypassError):
    """No journey record exists for the given id."""

    error_code = "FSM_JOURNEY_NOT_FOUND"
    status_code = 404

    def __init__(self, error_msg: str = "journey not found"):
        super().__init__(error_msg)


class BadRequestError(FsmError):
    error_code = "FSM_BAD_REQUEST_ERROR"
    status_code = 400


class InternalSystemError(FsmError):
    """Configuration or data-integrity defect, not a user error."""

    error_code = "FSM_INTERNAL_SYSTEM_ERROR"
    status_code = 500


class DependencySystemError(FsmError):
    """A downstream system the journey depends on failed."""

    error_code = "FSM_DEPENDENCY_SYSTEM_ERROR"
    status_code = 424


class GraphConstructionError(InternalSystemError):
    """The declared states do not form a usable journey graph."""

    error_code = "FSM_GRAPH_CONSTRUCTION_ERROR"


class NoTerminalStateError(GraphConstructionError):
    def __init__(self, error_msg: str = "no final state found"):
        super().__init__(error_msg)


class MultipleTerminalStatesError(GraphConstructionError):
    def __init__(self, error_msg: str = "multiple final states found"):
        super().__init__(error_msg)
