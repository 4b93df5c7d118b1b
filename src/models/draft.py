"""Form state for a round being entered or edited."""

from dataclasses import dataclass, field
from typing import Iterable

from .round import Adjustment, Ranking, Round


@dataclass
class AdjustmentEntry:
    """An adjustment being typed in; may still be zero."""

    points: int = 0
    reason: str = ""


@dataclass
class RoundDraft:
    """
    Rankings and adjustments keyed by player id while a round is entered.

    Nothing here is validated as it is typed. The submit path converts the
    draft with to_rankings()/to_adjustments() and the round factory
    performs the validation pass.

    Attributes:
        ranks: Player id to chosen rank.
        adjustments: Player id to adjustment being entered.
    """

    ranks: dict[str, int] = field(default_factory=dict)
    adjustments: dict[str, AdjustmentEntry] = field(default_factory=dict)

    @classmethod
    def from_round(cls, round_: Round) -> "RoundDraft":
        """Pre-fill a draft from an existing round for editing."""
        return cls(
            ranks={r.player_id: r.rank for r in round_.rankings},
            adjustments={
                a.player_id: AdjustmentEntry(points=a.points, reason=a.reason)
                for a in round_.adjustments
            },
        )

    def set_rank(self, player_id: str, rank: int) -> None:
        self.ranks[player_id] = rank

    def clear_rank(self, player_id: str) -> None:
        self.ranks.pop(player_id, None)

    def set_adjustment(self, player_id: str, points: int, reason: str = "") -> None:
        self.adjustments[player_id] = AdjustmentEntry(points=points, reason=reason)

    def nudge_adjustment(self, player_id: str, delta: int) -> int:
        """Add delta to a player's adjustment and return the new points."""
        entry = self.adjustments.setdefault(player_id, AdjustmentEntry())
        entry.points += delta
        return entry.points

    def clear_adjustment(self, player_id: str) -> None:
        self.adjustments.pop(player_id, None)

    def has_duplicate_ranks(self) -> bool:
        """Check whether two players currently share a rank."""
        ranks = list(self.ranks.values())
        return len(set(ranks)) != len(ranks)

    def missing_players(self, player_ids: Iterable[str]) -> list[str]:
        """Players from player_ids without a rank yet."""
        return [pid for pid in player_ids if pid not in self.ranks]

    def is_complete(self, player_ids: Iterable[str]) -> bool:
        """Check every given player has a rank."""
        return not self.missing_players(player_ids)

    def to_rankings(self) -> list[Ranking]:
        return [Ranking(player_id=pid, rank=rank) for pid, rank in self.ranks.items()]

    def to_adjustments(self) -> list[Adjustment]:
        """Adjustments with non-zero points."""
        return [
            Adjustment(player_id=pid, points=entry.points, reason=entry.reason)
            for pid, entry in self.adjustments.items()
            if entry.points != 0
        ]
