"""Tests for data models."""

from datetime import datetime

import pytest

from src.models import (
    Adjustment,
    Player,
    Ranking,
    Round,
    RoundDraft,
    ScoringRule,
    ScoringRuleSet,
    Stage,
    ValidationError,
    create_round,
    default_rule_set,
    edit_round,
    new_player_id,
)

FIXED_TIME = datetime(2024, 3, 1, 20, 0, 0)
LATER_TIME = datetime(2024, 3, 1, 21, 30, 0)


def make_rankings(ranks: dict[str, int]) -> list[Ranking]:
    """Helper to build rankings from {player_id: rank}."""
    return [Ranking(player_id=pid, rank=rank) for pid, rank in ranks.items()]


class TestPlayer:
    """Tests for Player model."""

    def test_create_player(self) -> None:
        """Test basic player creation."""
        player = Player(id="p1", name="Alice")
        assert player.name == "Alice"
        assert player.score == 0

    def test_empty_name_rejected(self) -> None:
        """Whitespace-only names are invalid."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            Player(id="p1", name="   ")

    def test_score_cannot_be_assigned(self) -> None:
        """Score is only replaced through copies."""
        player = Player(id="p1", name="Alice")
        with pytest.raises(AttributeError):
            player.score = 10  # type: ignore[misc]

    def test_renamed_keeps_score(self) -> None:
        """Renaming returns a copy with the same id and score."""
        player = Player(id="p1", name="Alice", score=7)
        renamed = player.renamed("Alicia")
        assert renamed.id == "p1"
        assert renamed.name == "Alicia"
        assert renamed.score == 7
        assert player.name == "Alice"

    def test_new_player_ids_unique(self) -> None:
        """Generated ids do not repeat."""
        assert len({new_player_id() for _ in range(50)}) == 50


class TestStage:
    """Tests for Stage enum."""

    def test_stage_values(self) -> None:
        """Stage values are the stored names."""
        assert Stage.PLAYER_SETUP.value == "players"
        assert Stage.RULE_SETUP.value == "scoring"
        assert Stage.PLAYING.value == "game"


class TestScoringRuleSet:
    """Tests for ScoringRuleSet."""

    def test_points_for_rank(self) -> None:
        """Defined ranks return their points."""
        rules = ScoringRuleSet.from_points({1: 4, 2: 2, 3: -2})
        assert rules.points_for_rank(1) == 4
        assert rules.points_for_rank(3) == -2

    def test_undefined_rank_is_zero(self) -> None:
        """Missing ranks contribute nothing."""
        rules = ScoringRuleSet.from_points({1: 4})
        assert rules.points_for_rank(2) == 0
        assert ScoringRuleSet().points_for_rank(1) == 0

    def test_duplicate_rank_rejected(self) -> None:
        """Two rules for one rank are a configuration error."""
        with pytest.raises(ValidationError) as exc_info:
            ScoringRuleSet((ScoringRule(1, 4), ScoringRule(1, 2)))
        assert exc_info.value.code == "DUPLICATE_RULE_RANK"

    def test_rules_ordered_by_rank(self) -> None:
        """Iteration yields rules from first place down."""
        rules = ScoringRuleSet((ScoringRule(3, -2), ScoringRule(1, 4), ScoringRule(2, 2)))
        assert [r.rank for r in rules] == [1, 2, 3]

    def test_rank_must_be_positive(self) -> None:
        """Rank zero is not a position."""
        with pytest.raises(ValidationError) as exc_info:
            ScoringRule(rank=0, points=1)
        assert exc_info.value.code == "INVALID_RULE_RANK"

    def test_covers(self) -> None:
        """Coverage checks every rank up to the player count."""
        rules = ScoringRuleSet.from_points({1: 4, 2: 2})
        assert rules.covers(2) is True
        assert rules.covers(3) is False
        assert rules.missing_ranks(4) == [3, 4]

    def test_default_rule_set(self) -> None:
        """Defaults are +4, +2, -2 then -4."""
        rules = default_rule_set(5)
        assert rules.as_points() == {1: 4, 2: 2, 3: -2, 4: -4, 5: -4}


class TestCreateRound:
    """Tests for round creation."""

    def test_valid_round(self) -> None:
        """A complete ranking with distinct ranks is accepted."""
        round_ = create_round(
            1, make_rankings({"a": 1, "b": 2}), [], ["a", "b"], now=lambda: FIXED_TIME
        )
        assert round_.id == "1"
        assert round_.number == 1
        assert round_.timestamp == FIXED_TIME
        assert round_.rank_of("b") == 2

    def test_duplicate_ranks_rejected(self) -> None:
        """Two players on the same rank fail."""
        with pytest.raises(ValidationError) as exc_info:
            create_round(1, make_rankings({"a": 1, "b": 1}), [], ["a", "b"])
        assert "DUPLICATE_RANK" in exc_info.value.codes

    def test_incomplete_rankings_rejected(self) -> None:
        """Every roster player must be ranked."""
        with pytest.raises(ValidationError) as exc_info:
            create_round(1, make_rankings({"a": 1}), [], ["a", "b"])
        assert "INCOMPLETE_RANKINGS" in exc_info.value.codes

    def test_unknown_player_rejected(self) -> None:
        """Rankings cannot name players outside the roster."""
        with pytest.raises(ValidationError) as exc_info:
            create_round(1, make_rankings({"a": 1, "x": 2}), [], ["a", "b"])
        assert "UNKNOWN_PLAYER" in exc_info.value.codes

    def test_player_ranked_twice_rejected(self) -> None:
        """One player cannot hold two ranks."""
        rankings = [Ranking("a", 1), Ranking("a", 2), Ranking("b", 3)]
        with pytest.raises(ValidationError) as exc_info:
            create_round(1, rankings, [], ["a", "b"])
        assert "DUPLICATE_PLAYER" in exc_info.value.codes

    def test_rank_out_of_range_rejected(self) -> None:
        """Ranks go from 1 to the number of players."""
        with pytest.raises(ValidationError) as exc_info:
            create_round(1, make_rankings({"a": 1, "b": 5}), [], ["a", "b"])
        assert "RANK_OUT_OF_RANGE" in exc_info.value.codes

    def test_zero_adjustments_dropped(self) -> None:
        """Zero-point adjustments are never stored."""
        round_ = create_round(
            1,
            make_rankings({"a": 1, "b": 2}),
            [Adjustment("a", 0, "x"), Adjustment("b", -1, " late ")],
            ["a", "b"],
        )
        assert round_.adjustment_for("a") is None
        assert round_.adjustment_for("b") == Adjustment("b", -1, "late")

    def test_duplicate_adjustment_rejected(self) -> None:
        """Only one adjustment per player per round."""
        with pytest.raises(ValidationError) as exc_info:
            create_round(
                1,
                make_rankings({"a": 1, "b": 2}),
                [Adjustment("a", 1), Adjustment("a", 2)],
                ["a", "b"],
            )
        assert exc_info.value.codes == ["DUPLICATE_ADJUSTMENT"]

    def test_ordered_rankings(self) -> None:
        """Rankings can be listed from first place."""
        round_ = create_round(1, make_rankings({"a": 2, "b": 1}), [], ["a", "b"])
        assert [r.player_id for r in round_.ordered_rankings()] == ["b", "a"]


class TestEditRound:
    """Tests for round editing."""

    @pytest.fixture
    def round_(self) -> Round:
        """A round between players a and b."""
        return create_round(
            3, make_rankings({"a": 1, "b": 2}), [], ["a", "b"], now=lambda: FIXED_TIME
        )

    def test_edit_preserves_identity(self, round_: Round) -> None:
        """Id and number stay, timestamp refreshes."""
        edited = edit_round(round_, make_rankings({"a": 2, "b": 1}), [], now=lambda: LATER_TIME)
        assert edited.id == round_.id
        assert edited.number == 3
        assert edited.timestamp == LATER_TIME
        assert edited.rank_of("a") == 2

    def test_edit_validates_against_original_players(self, round_: Round) -> None:
        """Edits must rank exactly the round's original players."""
        with pytest.raises(ValidationError) as exc_info:
            edit_round(round_, make_rankings({"a": 1, "b": 2, "c": 3}), [])
        assert "UNKNOWN_PLAYER" in exc_info.value.codes

    def test_edit_rejects_duplicate_ranks(self, round_: Round) -> None:
        """Duplicate ranks fail on edit too."""
        with pytest.raises(ValidationError):
            edit_round(round_, make_rankings({"a": 2, "b": 2}), [])


class TestRoundDraft:
    """Tests for the form draft."""

    def test_duplicate_detection(self) -> None:
        """Shared ranks are detected while typing."""
        draft = RoundDraft()
        draft.set_rank("a", 1)
        draft.set_rank("b", 1)
        assert draft.has_duplicate_ranks() is True
        draft.set_rank("b", 2)
        assert draft.has_duplicate_ranks() is False

    def test_missing_players(self) -> None:
        """Unranked players are listed in roster order."""
        draft = RoundDraft(ranks={"b": 1})
        assert draft.missing_players(["a", "b", "c"]) == ["a", "c"]
        assert draft.is_complete(["b"]) is True

    def test_nudge_adjustment(self) -> None:
        """Adjustments can be stepped up and down."""
        draft = RoundDraft()
        assert draft.nudge_adjustment("a", 1) == 1
        assert draft.nudge_adjustment("a", -3) == -2

    def test_to_adjustments_skips_zero(self) -> None:
        """Zero entries are not converted."""
        draft = RoundDraft()
        draft.set_adjustment("a", 0, "nothing")
        draft.set_adjustment("b", 2, "bonus")
        assert draft.to_adjustments() == [Adjustment("b", 2, "bonus")]

    def test_from_round(self) -> None:
        """Drafts can be pre-filled from a stored round."""
        round_ = create_round(
            1, make_rankings({"a": 2, "b": 1}), [Adjustment("a", 3, "bonus")], ["a", "b"]
        )
        draft = RoundDraft.from_round(round_)
        assert draft.ranks == {"a": 2, "b": 1}
        assert draft.adjustments["a"].points == 3
        assert draft.adjustments["a"].reason == "bonus"
