"""Round entry form: ranks and optional adjustments per player."""

from typing import Callable, Sequence

import streamlit as st

from ...analysis import validate_draft
from ...models import Player, RoundDraft
from .validation_display import render_validation


def ordinal(n: int) -> str:
    """Format a rank as 1st, 2nd, 3rd, 4th..."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def rank_options(player_count: int) -> list[int]:
    """Ranks a player can be given in a game of player_count."""
    return list(range(1, player_count + 1))


def render_round_form(
    players: Sequence[Player],
    draft: RoundDraft,
    key_prefix: str,
    submit_label: str,
    on_submit: Callable[[RoundDraft], None],
) -> None:
    """
    Render rank and adjustment inputs bound to a draft.

    Args:
        players: Players to rank.
        draft: Draft updated in place as inputs change.
        key_prefix: Distinguishes widgets of the new-round and edit forms.
        submit_label: Text of the submit button.
        on_submit: Called with the draft when the form is submitted.
    """
    options = rank_options(len(players))

    for player in players:
        cols = st.columns([2, 1])
        with cols[0]:
            st.markdown(f"**{player.name}**")
        with cols[1]:
            current = draft.ranks.get(player.id)
            choice = st.selectbox(
                "Rank",
                [None] + options,
                index=(options.index(current) + 1) if current in options else 0,
                format_func=lambda r: "Select rank" if r is None else f"{ordinal(r)} Place",
                key=f"{key_prefix}_rank_{player.id}",
                label_visibility="collapsed",
            )
            if choice is None:
                draft.clear_rank(player.id)
            else:
                draft.set_rank(player.id, choice)

        with st.expander("Adjustment", expanded=player.id in draft.adjustments):
            entry = draft.adjustments.get(player.id)
            points = st.number_input(
                "Points",
                value=entry.points if entry else 0,
                step=1,
                key=f"{key_prefix}_adj_points_{player.id}",
            )
            reason = st.text_input(
                "Reason",
                value=entry.reason if entry else "",
                key=f"{key_prefix}_adj_reason_{player.id}",
            )
            if points or reason:
                draft.set_adjustment(player.id, int(points), reason)
            else:
                draft.clear_adjustment(player.id)

    if draft.has_duplicate_ranks():
        st.warning("Each player must have a unique rank. Please fix duplicate rankings.")

    result = validate_draft(draft, [p.id for p in players])
    if draft.is_complete(p.id for p in players):
        render_validation(result)

    if st.button(
        submit_label,
        key=f"{key_prefix}_submit",
        disabled=not result.is_valid,
        type="primary",
    ):
        on_submit(draft)
