"""Analysis modules for score calculation and input validation."""

from .calculator import (
    ScoreBreakdown,
    leaderboard,
    points_for_rank,
    recompute_all,
    round_points,
    score_breakdown,
    score_for,
    winners,
)
from .validator import (
    ValidationResult,
    can_add_player,
    can_proceed_to_rules,
    validate_draft,
    validate_player_name,
    validate_rule_set,
)

__all__ = [
    # Calculator
    "ScoreBreakdown",
    "leaderboard",
    "points_for_rank",
    "recompute_all",
    "round_points",
    "score_breakdown",
    "score_for",
    "winners",
    # Validator
    "ValidationResult",
    "can_add_player",
    "can_proceed_to_rules",
    "validate_draft",
    "validate_player_name",
    "validate_rule_set",
]
