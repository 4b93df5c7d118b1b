"""Tests for the Streamlit app helpers."""

import pytest

from src.app.components import (
    format_points,
    ordinal,
    rank_options,
    rename_target,
    winner_banner,
)
from src.models import Player


class TestOrdinal:
    """Tests for rank labels."""

    @pytest.mark.parametrize(
        "n,expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
         (13, "13th"), (21, "21st"), (22, "22nd"), (101, "101st"), (111, "111th")],
    )
    def test_ordinal(self, n: int, expected: str) -> None:
        """Suffixes follow English rules."""
        assert ordinal(n) == expected


class TestRankOptions:
    """Tests for the rank selector options."""

    def test_one_rank_per_player(self) -> None:
        """Ranks run from 1 to the player count."""
        assert rank_options(4) == [1, 2, 3, 4]

    def test_no_players(self) -> None:
        """No players means no ranks."""
        assert rank_options(0) == []


class TestWinnerBanner:
    """Tests for the leader headline."""

    def test_no_players(self) -> None:
        """Empty roster has no winner."""
        assert winner_banner(set()) == "No players yet"

    def test_single_winner(self) -> None:
        """One leader is named."""
        assert winner_banner({Player("b", "Ben", 5)}) == "Winner: Ben"

    def test_tied_winners(self) -> None:
        """Ties list every leader alphabetically."""
        banner = winner_banner({Player("b", "Ben", 10), Player("a", "Ann", 10)})
        assert banner == "Tied Winners: Ann, Ben"


class TestFormatPoints:
    """Tests for signed point labels."""

    def test_positive(self) -> None:
        assert format_points(4) == "+4"

    def test_negative_and_zero(self) -> None:
        assert format_points(-2) == "-2"
        assert format_points(0) == "0"


class TestRenameTarget:
    """Tests for reading the rename input."""

    def test_changed_name(self) -> None:
        """A new name is returned stripped."""
        assert rename_target("Ann", "  Anna ") == "Anna"

    def test_unchanged_after_strip(self) -> None:
        """Surrounding whitespace alone is not a rename."""
        assert rename_target("Ann", " Ann ") is None

    def test_blank_input_ignored(self) -> None:
        """Clearing the box does not submit an empty name."""
        assert rename_target("Ann", "   ") is None
