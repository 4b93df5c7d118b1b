"""Data models for the score tracker."""

from .errors import GameError, NotFoundError, RuleViolation, ValidationError
from .player import Player, Stage, new_player_id
from .rules import (
    POINTS_FIRST,
    POINTS_OTHER,
    POINTS_SECOND,
    POINTS_THIRD,
    ScoringRule,
    ScoringRuleSet,
    coerce_rule_set,
    default_points_for_rank,
    default_rule_set,
)
from .round import (
    Adjustment,
    Ranking,
    Round,
    check_adjustments,
    check_rankings,
    create_round,
    edit_round,
)
from .draft import AdjustmentEntry, RoundDraft

__all__ = [
    # Errors
    "GameError",
    "NotFoundError",
    "RuleViolation",
    "ValidationError",
    # Player
    "Player",
    "Stage",
    "new_player_id",
    # Rules
    "POINTS_FIRST",
    "POINTS_OTHER",
    "POINTS_SECOND",
    "POINTS_THIRD",
    "ScoringRule",
    "ScoringRuleSet",
    "coerce_rule_set",
    "default_points_for_rank",
    "default_rule_set",
    # Round
    "Adjustment",
    "Ranking",
    "Round",
    "check_adjustments",
    "check_rankings",
    "create_round",
    "edit_round",
    # Draft
    "AdjustmentEntry",
    "RoundDraft",
]
