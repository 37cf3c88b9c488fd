"""
Pydantic Schemas for API Request/Response Models.

These schemas define the structure of data flowing through the API,
providing automatic validation and documentation.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from journeyflow.engine.state import FsmRequest, FsmResponse


# ============================================================
# Journey Schemas
# ============================================================

class JourneyRequest(FsmRequest):
    """Request to advance, resume, or go back in a journey."""
    
    class Config:
        json_schema_extra = {
            "example": {
                "jid": "3f9c1b8e-5a0d-4d1e-9c55-0b7c2f7d9a11",
                "event": "Next",
                "data": {"name": "Ada", "email": "ada@example.com"}
            }
        }


class JourneyResponse(FsmResponse):
    """Response for the last state executed in the call."""
    
    class Config:
        json_schema_extra = {
            "example": {
                "jid": "3f9c1b8e-5a0d-4d1e-9c55-0b7c2f7d9a11",
                "data": {"name": "Ada", "email": "ada@example.com", "verified": True},
                "next_screen": "REVIEW"
            }
        }


class JourneyStateResponse(BaseModel):
    """Stored record of a journey."""
    jid: str
    current_stage: str
    last_checkpoint_stage: str
    data: Any = None


# ============================================================
# Graph Schemas
# ============================================================

class TransitionInfo(BaseModel):
    event: str
    destination: str


class StateInfo(BaseModel):
    """Information about one state of the graph."""
    name: str
    handler: str
    transitions: List[TransitionInfo]
    is_checkpoint: bool
    next_screen: Optional[str] = None
    meta_data: Any = None


class GraphInfoResponse(BaseModel):
    """Response with graph information."""
    initial_state: str
    terminal_state: str
    checkpoints: List[str]
    states: Dict[str, StateInfo]
    mermaid_diagram: Optional[str] = Field(None, description="Mermaid diagram of the graph")


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error_code: str
    error_msg: str
