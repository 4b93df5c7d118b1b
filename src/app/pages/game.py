"""Score tracker page: player entry, rule setup and play."""

import streamlit as st

from ...analysis import can_proceed_to_rules, validate_rule_set
from ...config import DATA_DIR
from ...game import GameSession, PendingAction
from ...models import NotFoundError, RoundDraft, ScoringRuleSet, Stage, ValidationError
from ...storage import JsonFileStore
from ..components import (
    ordinal,
    render_error,
    render_round_form,
    render_scoreboard,
    render_validation,
)


def _init_session_state() -> None:
    """Initialize session state variables."""
    if "game" not in st.session_state:
        st.session_state.game = GameSession.load(JsonFileStore(DATA_DIR))
    if "round_draft" not in st.session_state:
        st.session_state.round_draft = RoundDraft()
    if "edit_draft" not in st.session_state:
        st.session_state.edit_draft = None
    if "form_version" not in st.session_state:
        st.session_state.form_version = 0


def _game() -> GameSession:
    return st.session_state.game


def _run(action, *args) -> bool:
    """Run a session intent and show any rejection."""
    try:
        action(*args)
    except ValidationError as e:
        render_error(e)
        return False
    except NotFoundError as e:
        st.error(str(e))
        return False
    return True


def _reset_round_form() -> None:
    st.session_state.round_draft = RoundDraft()
    st.session_state.form_version += 1


def _add_player() -> None:
    name = st.session_state.get("new_player_name", "")
    if _run(_game().add_player, name):
        st.session_state.new_player_name = ""


def _submit_round(draft: RoundDraft) -> None:
    if _run(_game().submit_round, draft.to_rankings(), draft.to_adjustments()):
        _reset_round_form()
        st.rerun()


def _start_edit(round_id: str) -> None:
    if _run(_game().request_edit_round, round_id):
        st.session_state.edit_draft = RoundDraft.from_round(_game().editing_round)


def _save_edit(draft: RoundDraft) -> None:
    round_ = _game().editing_round
    if round_ is None:
        return
    if _run(_game().save_edited_round, round_.id, draft.to_rankings(), draft.to_adjustments()):
        st.session_state.edit_draft = None
        st.rerun()


def _cancel_edit() -> None:
    _game().cancel_edit()
    st.session_state.edit_draft = None


def _rules_from_inputs(player_count: int) -> ScoringRuleSet:
    """Collect the rule inputs of the setup form."""
    return ScoringRuleSet.from_points(
        {
            rank: int(st.session_state.get(f"rule_{rank}", 0))
            for rank in range(1, player_count + 1)
        }
    )


def _confirm_pending() -> None:
    pending = _game().pending_confirmation
    if pending is PendingAction.RESET:
        _game().confirm_reset()
    elif pending is PendingAction.CLEAR:
        _game().confirm_clear()
    _reset_round_form()
    st.session_state.edit_draft = None


def _render_player_setup(game: GameSession) -> None:
    st.header("Add Players")
    st.text_input("Player name", key="new_player_name")
    st.button("Add Player", on_click=_add_player)

    for player in game.players:
        cols = st.columns([4, 1])
        with cols[0]:
            st.markdown(f"**{player.name}**")
        with cols[1]:
            st.button(
                "✖",
                key=f"remove_{player.id}",
                on_click=_run,
                args=(game.remove_player, player.id),
                help="Remove player",
            )

    result = can_proceed_to_rules(game.players)
    if not result.is_valid:
        render_validation(result)
    st.button(
        "Continue to Scoring Rules",
        disabled=not result.is_valid,
        on_click=_run,
        args=(game.proceed_to_rule_setup,),
        type="primary",
    )


def _render_rule_setup(game: GameSession) -> None:
    st.header("Scoring Rules")
    st.caption("Set the points awarded for each rank position")

    defaults = game.default_rules()
    for rule in defaults:
        st.number_input(
            f"{ordinal(rule.rank)} Place",
            value=rule.points,
            step=1,
            key=f"rule_{rule.rank}",
        )

    rules = _rules_from_inputs(len(game.players))
    render_validation(validate_rule_set(rules, len(game.players)))
    if st.button("Start Game", type="primary"):
        if _run(game.save_rule_set, rules):
            st.rerun()


def _render_playing(game: GameSession) -> None:
    round_tab, board_tab = st.tabs(["Round", "Scoreboard"])

    with round_tab:
        if game.editing_round is not None and st.session_state.edit_draft is not None:
            round_ = game.editing_round
            st.header(f"Edit Round {round_.number}")
            ranked = [p for p in game.players if p.id in round_.player_ids]
            render_round_form(
                ranked,
                st.session_state.edit_draft,
                key_prefix=f"edit_{round_.id}",
                submit_label="Save Changes",
                on_submit=_save_edit,
            )
            st.button("Cancel", on_click=_cancel_edit)
        else:
            st.header(f"Round {len(game.rounds) + 1}")
            render_round_form(
                game.players,
                st.session_state.round_draft,
                key_prefix=f"round_{st.session_state.form_version}",
                submit_label="Submit Round",
                on_submit=_submit_round,
            )

    with board_tab:
        render_scoreboard(
            game,
            on_rename=lambda pid, name: _run(game.rename_player, pid, name),
            on_edit_round=_start_edit,
        )

    st.divider()
    st.button("Reset Game", on_click=_run, args=(game.request_reset,))


def _render_confirmation(game: GameSession) -> None:
    pending = game.pending_confirmation
    if pending is None:
        return
    if pending is PendingAction.RESET:
        st.warning(
            "Reset the game? Rounds and scoring rules will be cleared; players are kept."
        )
    else:
        st.warning("Clear all data? Players, rounds and scoring rules will be deleted.")
    cols = st.columns(2)
    with cols[0]:
        st.button("Confirm", on_click=_confirm_pending, type="primary")
    with cols[1]:
        st.button("Cancel", key="cancel_confirm", on_click=game.cancel_confirmation)


def render() -> None:
    """Render the score tracker page."""
    _init_session_state()
    game = _game()

    col1, col2 = st.columns([3, 1])
    with col1:
        st.title("Game Score Tracker")
    with col2:
        st.button("Clear Data", on_click=game.request_clear)

    if not game.persistent:
        st.warning("Saved data is unavailable: changes will be lost on reload")

    _render_confirmation(game)

    if game.stage is Stage.PLAYER_SETUP:
        _render_player_setup(game)
    elif game.stage is Stage.RULE_SETUP:
        _render_rule_setup(game)
    else:
        _render_playing(game)
