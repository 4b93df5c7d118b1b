"""Global configuration and constants for the score tracker."""

import logging
import os
from typing import Final, Optional

DATA_DIR: Final = os.environ.get("SCOREKEEPER_DATA_DIR", "data")
LOG_LEVEL: Final = os.environ.get("SCOREKEEPER_LOG_LEVEL", "INFO")

# A game needs at least this many players before rules can be set
MIN_PLAYERS: Final = 2

# Storage keys
KEY_PLAYERS: Final = "players"
KEY_STARTED: Final = "gameStarted"
KEY_ROUNDS: Final = "gameRounds"
KEY_RULES: Final = "gameScoringRules"
KEY_STAGE: Final = "gameSetupStage"

ALL_KEYS: Final = (KEY_PLAYERS, KEY_STARTED, KEY_ROUNDS, KEY_RULES, KEY_STAGE)

LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the application."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
