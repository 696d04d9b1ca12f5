"""
FastAPI Application - REST API for a presentation layer.

Endpoints:
    GET    /api/v1/config               Pair options and timing
    POST   /api/v1/sessions             Create game session
    GET    /api/v1/sessions             List active sessions
    GET    /api/v1/sessions/{id}        Get deck snapshot
    POST   /api/v1/sessions/{id}/reset  Deal a fresh deck
    POST   /api/v1/sessions/{id}/tap    Reveal one card
    DELETE /api/v1/sessions/{id}        End session

Mismatched pairs flip back on their own after the mismatch delay.
Clients poll GET /sessions/{id} to observe that.

All responses are JSON with explicit Pydantic schemas.
"""

from contextlib import asynccontextmanager
from typing import Optional, Union
import asyncio
import logging

from fastapi import FastAPI, Body, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_allowed_origins, get_environment, get_session_max_age
from .service import APIService
from .schemas import (
    NewGameRequest,
    ResetRequest,
    TapRequest,
    SessionResponse,
    TapResponse,
    ConfigResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorCode,
)

logger = logging.getLogger(__name__)

CLEANUP_INTERVAL_SECONDS = 60

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_PAIR_COUNT: 400,
    ErrorCode.INVALID_CARD_INDEX: 400,
    ErrorCode.VALIDATION_ERROR: 400,
}


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService()

    async def cleanup_loop():
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            removed = api_service.session_manager.cleanup_stale_sessions(get_session_max_age())
            if removed:
                logger.info("Removed %d stale session(s)", len(removed))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Concentration API (%s)", get_environment())
        cleanup_task = asyncio.create_task(cleanup_loop())
        yield
        cleanup_task.cancel()
        api_service.session_manager.shutdown()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Concentration API",
        description="Single-player memory matching game.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Render an ErrorResponse with its status code."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies get the same ErrorResponse shape."""
        return make_error_response(ErrorResponse(
            error="Invalid request body",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(exc.errors())},
        ))

    # =========================================================================
    # Config Endpoint
    # =========================================================================

    @app.get(
        "/api/v1/config",
        response_model=ConfigResponse,
        tags=["Config"],
        summary="Get game options",
    )
    async def get_config() -> ConfigResponse:
        """Pair counts a picker should offer, and the mismatch delay."""
        return api_service.get_config()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid pair count"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[NewGameRequest] = Body(None),
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session with a freshly shuffled deck.

        Omit `pair_count` to use the configured default.
        """
        response = api_service.create_session(body or NewGameRequest())
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get deck snapshot",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current snapshot of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and cancel its pending work."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=SessionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid pair count"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Deal a fresh deck",
    )
    async def reset_session(
        session_id: str,
        body: Optional[ResetRequest] = Body(None),
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Deal a fresh deck.

        Omit `pair_count` to keep the current one. Pending flip-backs from
        the previous deal are cancelled.
        """
        response = api_service.reset_session(session_id, body or ResetRequest())
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/tap",
        response_model=TapResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Index out of range"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Reveal one card",
    )
    async def tap(session_id: str, body: TapRequest) -> Union[TapResponse, JSONResponse]:
        """
        Reveal the card at `index`.

        Tapping a matched or face-up card is accepted and ignored
        (`changed=false`).
        """
        response = api_service.tap(session_id, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="concentration",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Concentration API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
