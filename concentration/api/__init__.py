"""
API Module - Presentation-layer interface.

Exposes game sessions for a UI:
1. Create a session (pick a pair count)
2. Tap cards and read back the snapshot
3. Reset for a new deal
4. End the session

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    NewGameRequest,
    ResetRequest,
    TapRequest,
    # Responses
    SessionResponse,
    TapResponse,
    ConfigResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    CardInfo,
    SessionStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "NewGameRequest",
    "ResetRequest",
    "TapRequest",
    # Responses
    "SessionResponse",
    "TapResponse",
    "ConfigResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "CardInfo",
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
