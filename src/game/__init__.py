"""Game session orchestrating roster, rounds and scoring rules."""

from .session import GameSession, PendingAction

__all__ = [
    "GameSession",
    "PendingAction",
]
