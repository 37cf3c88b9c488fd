"""
JourneyFlow - FastAPI Application Entry Point.

A resumable, multi-step journey engine served over HTTP.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from journeyflow.config import settings
from journeyflow.api.routes import journey
from journeyflow.engine.executor import Executor
from journeyflow.errors import FsmError
from journeyflow.workflows.onboarding import create_onboarding_executor


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


DESCRIPTION = """
## Journey Engine API

Drives multi-step, resumable journeys through a graph of states.

### Features
- **States**: Each state delegates its work to a pluggable handler
- **Events**: Named transitions move a journey between states
- **Internal steps**: Handlers can chain states within a single call
- **Checkpoints**: `Resume` redisplays the last checkpoint reached
- **Back**: `Back` returns to the previous state without new input

### Quick Start
1. Start a journey: `POST /journey` with `{"event": "Start"}`
2. Advance it: `POST /journey` with `{"jid": ..., "event": "Next", "data": {...}}`
3. Inspect the graph: `GET /journey/graph`
"""


def create_app(executor: Optional[Executor] = None) -> FastAPI:
    """
    Create the FastAPI application.
    
    Args:
        executor: Journey executor to serve (the onboarding demo if omitted)
    """
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        if getattr(app.state, "executor", None) is None:
            app.state.executor = create_onboarding_executor()
        
        yield
        
        # Shutdown
        logger.info("Shutting down...")
    
    application = FastAPI(
        title=settings.APP_NAME,
        description=DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.executor = executor
    
    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    application.include_router(journey.router)
    
    # ============================================================
    # Root Endpoints
    # ============================================================
    
    @application.get("/", tags=["Root"])
    async def root():
        """API root - returns basic info and links."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": "A resumable multi-step journey engine",
            "docs": "/docs",
            "redoc": "/redoc",
            "endpoints": {
                "execute": "/journey",
                "graph": "/journey/graph",
                "journey": "/journey/{jid}",
            },
        }
    
    @application.get("/health", tags=["Root"])
    async def health():
        """Health check endpoint."""
        executor = application.state.executor
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "states_count": len(executor.graph.states) if executor else 0,
        }
    
    # ============================================================
    # Error Handlers
    # ============================================================
    
    @application.exception_handler(FsmError)
    async def fsm_exception_handler(request, exc: FsmError):
        """Map journey errors to their HTTP status."""
        if exc.status_code >= 500:
            logger.error(f"Journey error: {exc}")
        else:
            logger.info(f"Rejected journey request: {exc}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
    
    @application.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error_code": "FSM_INTERNAL_SYSTEM_ERROR",
                "error_msg": str(exc) if settings.DEBUG else "An unexpected error occurred",
            },
        )
    
    return application


# Create FastAPI application
app = create_app()
