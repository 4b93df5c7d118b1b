"""Scoreboard component: standings, rules and round history."""

from typing import Callable, Optional

import streamlit as st

from ...analysis import round_points
from ...game import GameSession
from ...models import Player
from .round_form import ordinal

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def winner_banner(winners: set[Player]) -> str:
    """Headline for the current leader(s)."""
    if not winners:
        return "No players yet"
    names = sorted(p.name for p in winners)
    if len(names) == 1:
        return f"Winner: {names[0]}"
    return f"Tied Winners: {', '.join(names)}"


def rename_target(current: str, typed: str) -> Optional[str]:
    """New name to save from the rename input, or None to leave it."""
    name = typed.strip()
    if not name or name == current:
        return None
    return name


def format_points(points: int) -> str:
    """Show points with an explicit sign."""
    return f"+{points}" if points > 0 else str(points)


def render_scoreboard(
    session: GameSession,
    on_rename: Optional[Callable[[str, str], None]] = None,
    on_edit_round: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Render standings, scoring rules and round history.

    Args:
        session: Session to display.
        on_rename: Called with (player_id, new_name).
        on_edit_round: Called with the round id to edit.
    """
    st.subheader("Standings")
    st.markdown(f"🏆 **{winner_banner(session.winners)}**")

    for position, player in enumerate(session.leaderboard, start=1):
        breakdown = session.score_breakdown(player.id)
        cols = st.columns([1, 3, 2, 2])
        with cols[0]:
            st.markdown(MEDALS.get(position, f"#{position}"))
        with cols[1]:
            if on_rename is not None:
                new_name = st.text_input(
                    "Name",
                    value=player.name,
                    key=f"name_{player.id}",
                    label_visibility="collapsed",
                )
                renamed = rename_target(player.name, new_name)
                if renamed is not None:
                    on_rename(player.id, renamed)
            else:
                st.markdown(f"**{player.name}**")
        with cols[2]:
            st.markdown(f"**{player.score}** pts")
        with cols[3]:
            st.caption(
                f"rank {format_points(breakdown.rank_points)} · "
                f"adj {format_points(breakdown.adjustment_points)}"
            )

    if session.rule_set is not None:
        with st.expander("Scoring Rules"):
            for rule in session.rule_set:
                st.markdown(f"{ordinal(rule.rank)} Place: **{format_points(rule.points)}**")

    st.subheader("Round History")
    if not session.rounds:
        st.info("No rounds played yet.")
        return

    names = {p.id: p.name for p in session.players}
    rule_set = session.rule_set
    for round_ in reversed(session.rounds):
        with st.expander(
            f"Round {round_.number} · {round_.timestamp.strftime('%b %d, %Y at %I:%M %p')}"
        ):
            points = round_points(round_, rule_set) if rule_set is not None else {}
            for ranking in round_.ordered_rankings():
                name = names.get(ranking.player_id, "Unknown player")
                st.markdown(
                    f"{ordinal(ranking.rank)} · {name} "
                    f"({format_points(points.get(ranking.player_id, 0))})"
                )
            for adjustment in round_.adjustments:
                name = names.get(adjustment.player_id, "Unknown player")
                reason = f": {adjustment.reason}" if adjustment.reason else ""
                st.caption(f"{name} {format_points(adjustment.points)}{reason}")
            if on_edit_round is not None:
                st.button(
                    "Edit",
                    key=f"edit_round_{round_.id}",
                    on_click=on_edit_round,
                    args=(round_.id,),
                )
