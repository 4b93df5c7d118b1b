"""Scoring rules mapping finishing rank to points."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Union

from .errors import RuleViolation, ValidationError


# Default points awarded per finishing position
POINTS_FIRST = 4
POINTS_SECOND = 2
POINTS_THIRD = -2
POINTS_OTHER = -4


@dataclass(frozen=True)
class ScoringRule:
    """
    Points awarded for finishing at a given rank.

    Attributes:
        rank: Finishing position (1 is best).
        points: Signed points awarded for that position.
    """

    rank: int
    points: int

    def __post_init__(self) -> None:
        """Validate the rank is a position."""
        if self.rank < 1:
            raise ValidationError.single(
                "INVALID_RULE_RANK", f"Rank must be a positive integer (got {self.rank})"
            )


@dataclass(frozen=True)
class ScoringRuleSet:
    """
    Lookup table from rank to points, fixed for the duration of a game.

    Rules are kept ordered by rank. Two rules for the same rank are a
    configuration error.
    """

    rules: tuple[ScoringRule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Reject duplicate ranks and normalise rule order."""
        counts = Counter(rule.rank for rule in self.rules)
        duplicates = sorted(rank for rank, count in counts.items() if count > 1)
        if duplicates:
            raise ValidationError(
                [
                    RuleViolation(
                        code="DUPLICATE_RULE_RANK",
                        message=f"More than one scoring rule for rank {rank}",
                    )
                    for rank in duplicates
                ]
            )
        object.__setattr__(
            self, "rules", tuple(sorted(self.rules, key=lambda r: r.rank))
        )

    @classmethod
    def from_points(cls, points_by_rank: Mapping[int, int]) -> "ScoringRuleSet":
        """Build a rule set from a {rank: points} mapping."""
        return cls(
            tuple(
                ScoringRule(rank=int(rank), points=int(points))
                for rank, points in points_by_rank.items()
            )
        )

    def __iter__(self) -> Iterator[ScoringRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def ranks(self) -> set[int]:
        """Ranks that have a rule."""
        return {rule.rank for rule in self.rules}

    def points_for_rank(self, rank: int) -> int:
        """
        Look up the points for a rank.

        Args:
            rank: Finishing position.

        Returns:
            Points for that rank, or 0 when no rule defines it.
        """
        for rule in self.rules:
            if rule.rank == rank:
                return rule.points
        return 0

    def covers(self, player_count: int) -> bool:
        """Check every rank from 1 to player_count has a rule."""
        return set(range(1, player_count + 1)) <= self.ranks

    def missing_ranks(self, player_count: int) -> list[int]:
        """Ranks in 1..player_count without a rule."""
        return sorted(set(range(1, player_count + 1)) - self.ranks)

    def as_points(self) -> dict[int, int]:
        """Return the rules as a {rank: points} mapping."""
        return {rule.rank: rule.points for rule in self.rules}


RuleSetInput = Union[ScoringRuleSet, Mapping[int, int], Iterable[ScoringRule]]


def coerce_rule_set(rules: RuleSetInput) -> ScoringRuleSet:
    """Accept a rule set, a {rank: points} mapping or an iterable of rules."""
    if isinstance(rules, ScoringRuleSet):
        return rules
    if isinstance(rules, Mapping):
        return ScoringRuleSet.from_points(rules)
    return ScoringRuleSet(tuple(rules))


def default_points_for_rank(rank: int) -> int:
    """Default points for a finishing position."""
    if rank == 1:
        return POINTS_FIRST
    elif rank == 2:
        return POINTS_SECOND
    elif rank == 3:
        return POINTS_THIRD
    return POINTS_OTHER


def default_rule_set(player_count: int) -> ScoringRuleSet:
    """Create the default rules for ranks 1..player_count."""
    return ScoringRuleSet(
        tuple(
            ScoringRule(rank=rank, points=default_points_for_rank(rank))
            for rank in range(1, player_count + 1)
        )
    )
