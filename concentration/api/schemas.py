"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a presentation layer and the
engine. Face-down card values are never serialized.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- INVALID_PAIR_COUNT: Pair count is not one of the offered options
- INVALID_CARD_INDEX: Tap references a position outside the deck
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_PAIR_COUNT = "INVALID_PAIR_COUNT"
    INVALID_CARD_INDEX = "INVALID_CARD_INDEX"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    value: Optional[int] = Field(None, description="Only set while the card is face-up")
    face_up: bool = False
    matched: bool = False

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class NewGameRequest(BaseModel):
    """Request to create a new game session."""
    pair_count: Optional[int] = Field(None, description="Pairs to deal; configured default if omitted")
    seed: Optional[int] = Field(None, description="Seed for a reproducible shuffle")


class ResetRequest(BaseModel):
    """Request to deal a fresh deck in an existing session."""
    pair_count: Optional[int] = Field(None, description="Pairs to deal; current count if omitted")
    seed: Optional[int] = Field(None, description="Seed for a reproducible shuffle")


class TapRequest(BaseModel):
    """Request to reveal one card."""
    index: int = Field(..., description="Position of the card in display order")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Session snapshot for rendering."""
    session_id: str
    status: SessionStatus
    pair_count: int
    cards: list[CardInfo] = Field(default_factory=list)
    pending_index: Optional[int] = None
    matched_pairs: int = 0
    is_won: bool = False
    generation: int = 0
    created_at: float = 0.0
    api_version: str = "v1"


class TapResponse(SessionResponse):
    """Snapshot after a tap."""
    changed: bool = Field(True, description="False when the tap was ignored")


class ConfigResponse(BaseModel):
    """Game options for building a picker."""
    pair_options: list[int]
    default_pairs: int
    mismatch_delay: float


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
