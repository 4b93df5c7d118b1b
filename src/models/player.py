"""Player data model for the score tracker."""

import uuid
from dataclasses import dataclass, replace
from enum import Enum


class Stage(Enum):
    """Coarse-grained setup/play state of a game session."""

    PLAYER_SETUP = "players"
    RULE_SETUP = "scoring"
    PLAYING = "game"


@dataclass(frozen=True)
class Player:
    """
    Represents a player taking part in a game.

    Attributes:
        id: Unique identifier, stable for the session lifetime.
        name: Display name (never empty).
        score: Total derived from the round history. Recomputed by the
            calculator after every round or rule change.
    """

    id: str
    name: str
    score: int = 0

    def __post_init__(self) -> None:
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("id cannot be empty")
        if not self.name.strip():
            raise ValueError("name cannot be empty")

    def renamed(self, name: str) -> "Player":
        """Return a copy of the player with a new name."""
        return replace(self, name=name)

    def with_score(self, score: int) -> "Player":
        """Return a copy of the player with a new total."""
        return replace(self, score=score)


def new_player_id() -> str:
    """Generate a fresh player id."""
    return uuid.uuid4().hex
