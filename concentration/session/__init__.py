"""
Session Module - Manages ephemeral game sessions.

A session represents one player's table:
- Created when the player starts a game
- Holds the current deal and its pending mismatch reversions
- Reset in place for a new deal
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .game import GameSession
from .manager import SessionManager, Session, SessionState
from .scheduler import Scheduler, ScheduledCall, TimerScheduler, ManualScheduler

__all__ = [
    "GameSession",
    "SessionManager",
    "Session",
    "SessionState",
    "Scheduler",
    "ScheduledCall",
    "TimerScheduler",
    "ManualScheduler",
]
