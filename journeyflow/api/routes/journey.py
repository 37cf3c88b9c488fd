"""
Journey API Routes.

Endpoints for driving journeys and inspecting the configured graph.
"""

from fastapi import APIRouter, Request
import logging

from journeyflow.api.schemas import (
    ErrorResponse,
    GraphInfoResponse,
    JourneyRequest,
    JourneyResponse,
    JourneyStateResponse,
)
from journeyflow.engine.executor import Executor


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journey", tags=["Journey"])


def get_executor(request: Request) -> Executor:
    return request.app.state.executor


@router.post(
    "",
    response_model=JourneyResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input for the state"},
        403: {"model": ErrorResponse, "description": "Event not allowed for the journey"},
        404: {"model": ErrorResponse, "description": "Journey not found"},
    },
)
async def execute_journey(body: JourneyRequest, request: Request) -> JourneyResponse:
    """
    Execute one journey request.
    
    Omit `jid` and send the `Start` event to begin a new journey. Send
    `Resume` to redisplay the last checkpoint, or `Back` to return to the
    previous state.
    """
    executor = get_executor(request)
    response = await executor.execute(body)
    return JourneyResponse(**response.model_dump())


@router.get("/graph", response_model=GraphInfoResponse)
async def get_graph(request: Request) -> GraphInfoResponse:
    """Get the states, transitions and a diagram of the journey graph."""
    graph = get_executor(request).graph
    return GraphInfoResponse(
        **graph.to_dict(),
        mermaid_diagram=graph.to_mermaid(),
    )


@router.get(
    "/{jid}",
    response_model=JourneyStateResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_journey(jid: str, request: Request) -> JourneyStateResponse:
    """Get the stored record of a journey."""
    journey = await get_executor(request).journey_store.get(jid)
    return JourneyStateResponse(**journey.model_dump())
