"""Score calculator deriving player totals from the round history."""

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..models.player import Player
from ..models.round import Round
from ..models.rules import ScoringRuleSet


@dataclass
class ScoreBreakdown:
    """
    A player's total split by source.

    Attributes:
        rank_points: Points earned from finishing positions.
        adjustment_points: Sum of manual adjustments.
        total: rank_points + adjustment_points.
    """

    rank_points: int
    adjustment_points: int
    total: int


def points_for_rank(rank: int, rule_set: ScoringRuleSet) -> int:
    """Points for a rank under the active rules (0 if undefined)."""
    return rule_set.points_for_rank(rank)


def score_breakdown(
    player_id: str,
    rounds: Iterable[Round],
    rule_set: ScoringRuleSet,
) -> ScoreBreakdown:
    """
    Walk the round history once and split a player's points.

    Rounds where the player has no ranking or adjustment contribute zero.

    Args:
        player_id: The player to score.
        rounds: Round history.
        rule_set: Active scoring rules.

    Returns:
        ScoreBreakdown with rank points, adjustment points and total.
    """
    rank_points = 0
    adjustment_points = 0

    for round_ in rounds:
        rank = round_.rank_of(player_id)
        if rank is not None:
            rank_points += rule_set.points_for_rank(rank)

        adjustment = round_.adjustment_for(player_id)
        if adjustment is not None:
            adjustment_points += adjustment.points

    return ScoreBreakdown(
        rank_points=rank_points,
        adjustment_points=adjustment_points,
        total=rank_points + adjustment_points,
    )


def score_for(
    player_id: str,
    rounds: Iterable[Round],
    rule_set: ScoringRuleSet,
) -> int:
    """Total score for a player over the round history."""
    return score_breakdown(player_id, rounds, rule_set).total


def round_points(round_: Round, rule_set: ScoringRuleSet) -> dict[str, int]:
    """
    Points each player earned in a single round.

    Returns:
        Dict mapping player_id to rank points plus adjustment.
    """
    points = {r.player_id: rule_set.points_for_rank(r.rank) for r in round_.rankings}
    for adjustment in round_.adjustments:
        points[adjustment.player_id] = points.get(adjustment.player_id, 0) + adjustment.points
    return points


def recompute_all(
    players: Iterable[Player],
    rounds: Sequence[Round],
    rule_set: ScoringRuleSet,
) -> list[Player]:
    """
    Recompute every player's cached score.

    Returns:
        New list of players in the same order with scores replaced.
    """
    return [p.with_score(score_for(p.id, rounds, rule_set)) for p in players]


def winners(players: Iterable[Player]) -> set[Player]:
    """
    Players sharing the highest score.

    Returns:
        Every top scorer (ties included); empty set for no players.
    """
    players = list(players)
    if not players:
        return set()
    highest = max(p.score for p in players)
    return {p for p in players if p.score == highest}


def leaderboard(players: Iterable[Player]) -> list[Player]:
    """Players sorted by score, highest first; ties keep roster order."""
    return sorted(players, key=lambda p: p.score, reverse=True)
