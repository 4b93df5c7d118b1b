"""Round data model: rankings and point adjustments for one scoring event."""

from collections import Counter
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Iterable, Optional

from .errors import RuleViolation, ValidationError


@dataclass(frozen=True)
class Ranking:
    """A player's finishing position within a round."""

    player_id: str
    rank: int


@dataclass(frozen=True)
class Adjustment:
    """
    Manual point correction for one player in one round.

    Attributes:
        player_id: The player the adjustment applies to.
        points: Signed points added to the player's total.
        reason: Optional free-text explanation.
    """

    player_id: str
    points: int
    reason: str = ""


@dataclass(frozen=True)
class Round:
    """
    One completed scoring event.

    Attributes:
        id: Unique identifier (the round number at creation).
        number: 1-based position in the round history at creation.
        rankings: One ranking per player taking part.
        adjustments: At most one non-zero adjustment per player.
        timestamp: Creation or last-edit time.
    """

    id: str
    number: int
    rankings: tuple[Ranking, ...]
    adjustments: tuple[Adjustment, ...]
    timestamp: datetime

    @property
    def player_ids(self) -> set[str]:
        """Ids of the players ranked in this round."""
        return {r.player_id for r in self.rankings}

    def rank_of(self, player_id: str) -> Optional[int]:
        """Get a player's rank, or None if they were not ranked."""
        return next(
            (r.rank for r in self.rankings if r.player_id == player_id), None
        )

    def adjustment_for(self, player_id: str) -> Optional[Adjustment]:
        """Get a player's adjustment, if any."""
        return next(
            (a for a in self.adjustments if a.player_id == player_id), None
        )

    def ordered_rankings(self) -> list[Ranking]:
        """Rankings sorted from first place down."""
        return sorted(self.rankings, key=lambda r: r.rank)


def check_rankings(
    rankings: Iterable[Ranking],
    player_ids: Iterable[str],
) -> list[RuleViolation]:
    """
    Check a round's rankings cover every player once with distinct ranks.

    Args:
        rankings: Proposed rankings.
        player_ids: Ids of the players that must be ranked.

    Returns:
        List of violations. Empty list if valid.
    """
    rankings = list(rankings)
    expected = set(player_ids)
    violations: list[RuleViolation] = []

    ranked_counts = Counter(r.player_id for r in rankings)

    missing = sorted(expected - set(ranked_counts))
    if missing:
        violations.append(
            RuleViolation(
                code="INCOMPLETE_RANKINGS",
                message=f"Please rank all players ({len(missing)} unranked)",
            )
        )

    unknown = sorted(set(ranked_counts) - expected)
    if unknown:
        violations.append(
            RuleViolation(
                code="UNKNOWN_PLAYER",
                message=f"Rankings reference unknown players: {', '.join(unknown)}",
            )
        )

    repeated = sorted(pid for pid, count in ranked_counts.items() if count > 1)
    if repeated:
        violations.append(
            RuleViolation(
                code="DUPLICATE_PLAYER",
                message=f"Players ranked more than once: {', '.join(repeated)}",
            )
        )

    ranks = [r.rank for r in rankings]
    if len(set(ranks)) != len(ranks):
        violations.append(
            RuleViolation(
                code="DUPLICATE_RANK",
                message="Each player must have a unique rank",
            )
        )

    out_of_range = sorted({rank for rank in ranks if rank < 1 or rank > len(expected)})
    if out_of_range:
        violations.append(
            RuleViolation(
                code="RANK_OUT_OF_RANGE",
                message=f"Ranks must be between 1 and {len(expected)}",
            )
        )

    return violations


def _non_zero(adjustments: Iterable[Adjustment]) -> list[Adjustment]:
    """Drop zero-point adjustments and tidy reasons."""
    return [
        Adjustment(player_id=a.player_id, points=a.points, reason=a.reason.strip())
        for a in adjustments
        if a.points != 0
    ]


def check_adjustments(
    adjustments: Iterable[Adjustment],
    player_ids: Iterable[str],
) -> list[RuleViolation]:
    """
    Check adjustments reference known players, at most once each.

    Zero-point adjustments are ignored.

    Returns:
        List of violations. Empty list if valid.
    """
    expected = set(player_ids)
    counts = Counter(a.player_id for a in adjustments if a.points != 0)
    violations: list[RuleViolation] = []

    unknown = sorted(set(counts) - expected)
    if unknown:
        violations.append(
            RuleViolation(
                code="UNKNOWN_PLAYER",
                message=f"Adjustments reference unknown players: {', '.join(unknown)}",
            )
        )

    repeated = sorted(pid for pid, count in counts.items() if count > 1)
    if repeated:
        violations.append(
            RuleViolation(
                code="DUPLICATE_ADJUSTMENT",
                message=f"Only one adjustment per player: {', '.join(repeated)}",
            )
        )

    return violations


def _validated(
    rankings: Iterable[Ranking],
    adjustments: Iterable[Adjustment],
    player_ids: Iterable[str],
) -> tuple[tuple[Ranking, ...], tuple[Adjustment, ...]]:
    rankings = tuple(rankings)
    kept = tuple(_non_zero(adjustments))
    player_ids = set(player_ids)

    violations = check_rankings(rankings, player_ids)
    violations += check_adjustments(kept, player_ids)
    if violations:
        raise ValidationError(violations)
    return rankings, kept


def create_round(
    number: int,
    rankings: Iterable[Ranking],
    adjustments: Iterable[Adjustment],
    player_ids: Iterable[str],
    now: Callable[[], datetime] = datetime.now,
) -> Round:
    """
    Create a validated round.

    Args:
        number: Round number (history length + 1).
        rankings: One ranking per roster player.
        adjustments: Point adjustments; zero-point entries are dropped.
        player_ids: Ids of the current roster.
        now: Clock used for the timestamp.

    Returns:
        The new Round.

    Raises:
        ValidationError: If rankings are incomplete, repeat a rank or a
            player, or adjustments are inconsistent.
    """
    if number < 1:
        raise ValueError("round number must be positive")
    rankings, kept = _validated(rankings, adjustments, player_ids)
    return Round(
        id=str(number),
        number=number,
        rankings=rankings,
        adjustments=kept,
        timestamp=now(),
    )


def edit_round(
    round_: Round,
    rankings: Iterable[Ranking],
    adjustments: Iterable[Adjustment],
    now: Callable[[], datetime] = datetime.now,
) -> Round:
    """
    Replace a round's rankings and adjustments.

    Validation uses the players ranked in the original round, so a round
    stays editable even if the roster has changed since. The id and number
    are preserved and the timestamp refreshed.

    Raises:
        ValidationError: If the new rankings or adjustments are invalid.
    """
    rankings, kept = _validated(rankings, adjustments, round_.player_ids)
    return replace(round_, rankings=rankings, adjustments=kept, timestamp=now())
