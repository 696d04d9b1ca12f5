"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Enforces the configured pair-count options
3. Turns engine errors into ErrorResponse values
4. Formats snapshots for rendering

This layer is framework-agnostic (can be used with FastAPI, a CLI, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    NewGameRequest,
    ResetRequest,
    TapRequest,
    SessionResponse,
    TapResponse,
    ConfigResponse,
    ErrorResponse,
    CardInfo,
    SessionStatus,
    ErrorCode,
)
from ..config import get_pair_options, get_default_pairs
from ..engine_core.errors import InvalidCardIndexError
from ..engine_core.state import GameState
from ..session import SessionManager, Session

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service for a presentation layer.

    Usage:
        service = APIService()

        response = service.create_session(NewGameRequest(pair_count=4))
        response = service.tap(response.session_id, TapRequest(index=0))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    pair_options: tuple[int, ...] = field(default_factory=get_pair_options)
    default_pairs: int = field(default_factory=get_default_pairs)

    def get_config(self) -> ConfigResponse:
        """Options a picker should offer."""
        return ConfigResponse(
            pair_options=list(self.pair_options),
            default_pairs=self.default_pairs,
            mismatch_delay=self.session_manager.mismatch_delay,
        )

    def create_session(self, request: NewGameRequest) -> SessionResponse | ErrorResponse:
        """
        Create a new game session.
        """
        pair_count = request.pair_count if request.pair_count is not None else self.default_pairs
        error = self._check_pair_count(pair_count)
        if error:
            return error

        session = self.session_manager.create_session(pair_count, seed=request.seed)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get the current snapshot of a session.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def reset_session(
        self,
        session_id: str,
        request: ResetRequest,
    ) -> SessionResponse | ErrorResponse:
        """
        Deal a fresh deck, optionally with a different pair count.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        pair_count = request.pair_count if request.pair_count is not None else session.game.pair_count
        error = self._check_pair_count(pair_count)
        if error:
            return error

        session.game.reset(pair_count, seed=request.seed)
        session.touch()
        return self._session_to_response(session)

    def tap(self, session_id: str, request: TapRequest) -> TapResponse | ErrorResponse:
        """
        Reveal one card.

        Taps on matched or face-up cards succeed with changed=False.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            state, changed = session.game.apply_tap(request.index)
        except InvalidCardIndexError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_CARD_INDEX,
                details={"index": request.index, "size": e.size},
            )
        session.touch()

        response = self._session_to_response(session, state)
        return TapResponse(**response.model_dump(), changed=changed)

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a game session.
        """
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _check_pair_count(self, pair_count) -> ErrorResponse | None:
        if pair_count in self.pair_options and not isinstance(pair_count, bool):
            return None
        logger.info("Rejected pair count %r", pair_count)
        return ErrorResponse(
            error=f"pair_count must be one of {list(self.pair_options)}",
            error_code=ErrorCode.INVALID_PAIR_COUNT,
            details={"pair_count": pair_count, "pair_options": list(self.pair_options)},
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(
        self,
        session: Session,
        state: GameState | None = None,
    ) -> SessionResponse:
        """Convert Session to SessionResponse, from state if given."""
        if state is None:
            state = session.game.state
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus.WON if state.is_won else SessionStatus.ACTIVE,
            pair_count=state.pair_count,
            cards=[CardInfo.model_validate(view) for view in state.snapshot()],
            pending_index=state.pending_index,
            matched_pairs=state.matched_pairs,
            is_won=state.is_won,
            generation=state.generation,
            created_at=session.created_at,
        )
