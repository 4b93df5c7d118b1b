"""Game session: roster, round history, scoring rules and setup stage."""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional, Union

from ..analysis.calculator import (
    ScoreBreakdown,
    leaderboard,
    recompute_all,
    score_breakdown,
    winners,
)
from ..analysis.validator import (
    can_add_player,
    can_proceed_to_rules,
    validate_player_name,
    validate_rule_set,
)
from ..config import (
    ALL_KEYS,
    KEY_PLAYERS,
    KEY_ROUNDS,
    KEY_RULES,
    KEY_STAGE,
    KEY_STARTED,
)
from ..models import (
    Adjustment,
    NotFoundError,
    Player,
    Ranking,
    Round,
    ScoringRuleSet,
    Stage,
    ValidationError,
    coerce_rule_set,
    create_round,
    default_rule_set,
    edit_round,
    new_player_id,
)
from ..models.rules import RuleSetInput
from ..storage import (
    DecodeError,
    KeyValueStore,
    MemoryStore,
    StorageError,
    decode_players,
    decode_rounds,
    decode_rules,
    decode_stage,
    decode_started,
    encode_players,
    encode_rounds,
    encode_rules,
    encode_stage,
    encode_started,
)

logger = logging.getLogger(__name__)

RankingsInput = Union[Mapping[str, int], Iterable[Ranking]]


class PendingAction(Enum):
    """Destructive actions that wait for confirmation."""

    RESET = "reset"
    CLEAR = "clear"


def _coerce_rankings(rankings: RankingsInput) -> list[Ranking]:
    """Accept {player_id: rank} or an iterable of Ranking."""
    if isinstance(rankings, Mapping):
        return [Ranking(player_id=pid, rank=int(rank)) for pid, rank in rankings.items()]
    return list(rankings)


class GameSession:
    """
    Aggregate root owning all game state.

    Every mutation validates first, then assigns, recomputes derived
    scores where rounds or rules changed, and writes the changed keys
    through to the store. A failed operation leaves state untouched.

    Stages move forward only (players -> scoring -> game); a confirmed
    reset returns to player setup keeping the roster, and a confirmed
    clear empties everything.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize an empty session.

        Args:
            store: Where state is written after every change. Defaults to
                an in-memory store.
            now: Clock used for round timestamps.
        """
        self._store = store if store is not None else MemoryStore()
        self._now = now
        self.persistent = True

        self._players: list[Player] = []
        self._rounds: list[Round] = []
        self._rule_set: Optional[ScoringRuleSet] = None
        self._stage = Stage.PLAYER_SETUP
        self._started = False

        self._editing_round_id: Optional[str] = None
        self._pending: Optional[PendingAction] = None

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        store: KeyValueStore,
        now: Callable[[], datetime] = datetime.now,
    ) -> "GameSession":
        """
        Restore a session from a store.

        Each key is read independently; a missing or undecodable key
        yields its empty value. If the store cannot be read at all the
        session starts empty and stays in memory only.
        """
        session = cls(store, now=now)
        session._players = session._read(KEY_PLAYERS, decode_players, [])
        session._started = session._read(KEY_STARTED, decode_started, False)
        session._rounds = session._read(KEY_ROUNDS, decode_rounds, [])
        session._rule_set = session._read(KEY_RULES, decode_rules, None)
        session._stage = session._read(KEY_STAGE, decode_stage, Stage.PLAYER_SETUP)
        session._recompute()
        logger.info(
            "Loaded session: %d players, %d rounds, stage %s",
            len(session._players),
            len(session._rounds),
            session._stage.value,
        )
        return session

    def _read(self, key: str, decode: Callable, default):
        if not self.persistent:
            return default
        try:
            text = self._store.get(key)
        except StorageError as e:
            self._degrade(e)
            return default
        if text is None:
            return default
        try:
            return decode(text)
        except DecodeError as e:
            logger.warning("Ignoring stored %s: %s", key, e)
            return default

    def _encoded(self, key: str) -> str:
        if key == KEY_PLAYERS:
            return encode_players(self._players)
        if key == KEY_STARTED:
            return encode_started(self._started)
        if key == KEY_ROUNDS:
            return encode_rounds(self._rounds)
        if key == KEY_RULES:
            return encode_rules(self._rule_set)
        if key == KEY_STAGE:
            return encode_stage(self._stage)
        raise KeyError(key)

    def _write(self, *keys: str) -> None:
        """Rewrite the given keys in full."""
        if not self.persistent:
            return
        try:
            for key in keys:
                self._store.set(key, self._encoded(key))
        except StorageError as e:
            self._degrade(e)

    def _delete(self, *keys: str) -> None:
        if not self.persistent:
            return
        try:
            for key in keys:
                self._store.delete(key)
        except StorageError as e:
            self._degrade(e)

    def _degrade(self, error: StorageError) -> None:
        logger.warning("Storage unavailable, continuing in memory only: %s", error)
        self.persistent = False

    def save(self) -> None:
        """Write every key to the store."""
        self._write(*ALL_KEYS)

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def rounds(self) -> tuple[Round, ...]:
        return tuple(self._rounds)

    @property
    def rule_set(self) -> Optional[ScoringRuleSet]:
        return self._rule_set

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def started(self) -> bool:
        return self._started

    @property
    def winners(self) -> set[Player]:
        """Top scorers (ties included)."""
        return winners(self._players)

    @property
    def leaderboard(self) -> list[Player]:
        """Players sorted by score, highest first."""
        return leaderboard(self._players)

    @property
    def editing_round(self) -> Optional[Round]:
        """The round currently open for editing, if any."""
        if self._editing_round_id is None:
            return None
        return next((r for r in self._rounds if r.id == self._editing_round_id), None)

    @property
    def pending_confirmation(self) -> Optional[PendingAction]:
        return self._pending

    def get_player(self, player_id: str) -> Player:
        """
        Get a player by id.

        Raises:
            NotFoundError: If no player has that id.
        """
        player = next((p for p in self._players if p.id == player_id), None)
        if player is None:
            raise NotFoundError("Player", player_id)
        return player

    def get_round(self, round_id: str) -> Round:
        """
        Get a round by id.

        Raises:
            NotFoundError: If no round has that id.
        """
        round_ = next((r for r in self._rounds if r.id == round_id), None)
        if round_ is None:
            raise NotFoundError("Round", round_id)
        return round_

    def score_breakdown(self, player_id: str) -> ScoreBreakdown:
        """Split a player's total into rank points and adjustments."""
        self.get_player(player_id)
        return score_breakdown(player_id, self._rounds, self._active_rules())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _active_rules(self) -> ScoringRuleSet:
        return self._rule_set if self._rule_set is not None else ScoringRuleSet()

    def _recompute(self) -> None:
        self._players = recompute_all(self._players, self._rounds, self._active_rules())

    def _require_stage(self, action: str, *stages: Stage) -> None:
        if self._stage not in stages:
            allowed = " or ".join(s.value for s in stages)
            logger.debug("Rejected %s during stage %s", action, self._stage.value)
            raise ValidationError.single(
                "WRONG_STAGE",
                f"Cannot {action} during the '{self._stage.value}' stage (needs {allowed})",
            )

    def _player_ids(self) -> list[str]:
        return [p.id for p in self._players]

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def add_player(self, name: str) -> Player:
        """
        Add a player to the roster.

        Args:
            name: Display name; surrounding whitespace is stripped.

        Returns:
            The new player.

        Raises:
            ValidationError: If the name is empty or players can no longer
                be added.
        """
        self._require_stage("add players", Stage.PLAYER_SETUP)
        can_add_player(self._players, name).raise_for_errors()

        player = Player(id=new_player_id(), name=name.strip())
        self._players.append(player)
        logger.info("Added player %s", player.name)
        self._write(KEY_PLAYERS)
        return player

    def remove_player(self, player_id: str) -> None:
        """
        Remove a player before the game has started.

        Raises:
            ValidationError: Outside player setup.
            NotFoundError: If the player does not exist.
        """
        self._require_stage("remove players", Stage.PLAYER_SETUP)
        player = self.get_player(player_id)
        self._players = [p for p in self._players if p.id != player_id]
        logger.info("Removed player %s", player.name)
        self._write(KEY_PLAYERS)

    def rename_player(self, player_id: str, name: str) -> Player:
        """
        Rename a player at any stage. Scores are unaffected.

        Raises:
            ValidationError: If the new name is empty.
            NotFoundError: If the player does not exist.
        """
        validate_player_name(name).raise_for_errors()
        player = self.get_player(player_id)
        renamed = player.renamed(name.strip())
        self._players = [renamed if p.id == player_id else p for p in self._players]
        logger.info("Renamed player %s to %s", player.name, renamed.name)
        self._write(KEY_PLAYERS)
        return renamed

    # ------------------------------------------------------------------
    # Setup stages
    # ------------------------------------------------------------------

    def proceed_to_rule_setup(self) -> None:
        """
        Move from player entry to rule configuration.

        Raises:
            ValidationError: If fewer than two players have been added.
        """
        self._require_stage("configure scoring", Stage.PLAYER_SETUP)
        can_proceed_to_rules(self._players).raise_for_errors()
        self._stage = Stage.RULE_SETUP
        logger.info("Stage -> %s", self._stage.value)
        self._write(KEY_STAGE)

    def default_rules(self) -> ScoringRuleSet:
        """Default rules for the current roster size."""
        return default_rule_set(len(self._players))

    def save_rule_set(self, rules: RuleSetInput) -> ScoringRuleSet:
        """
        Store the scoring rules and start the game.

        Args:
            rules: Rule set, {rank: points} mapping or iterable of rules.
                Every rank from 1 to the number of players must be set.

        Returns:
            The stored rule set.

        Raises:
            ValidationError: If ranks repeat or are missing.
        """
        self._require_stage("save scoring rules", Stage.RULE_SETUP)
        rule_set = coerce_rule_set(rules)
        validate_rule_set(rule_set, len(self._players)).raise_for_errors()

        self._rule_set = rule_set
        self._started = True
        self._stage = Stage.PLAYING
        self._recompute()
        logger.info("Game started with %d scoring rules", len(self._rule_set))
        self._write(KEY_RULES, KEY_STARTED, KEY_STAGE, KEY_PLAYERS)
        return self._rule_set

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def add_round(
        self,
        rankings: RankingsInput,
        adjustments: Iterable[Adjustment] = (),
    ) -> Round:
        """
        Record a new round and update every player's score.

        Args:
            rankings: One rank per roster player, as {player_id: rank} or
                Ranking values.
            adjustments: Optional point adjustments; zero-point entries
                are dropped.

        Returns:
            The stored round.

        Raises:
            ValidationError: If rankings are incomplete or repeat a rank,
                or the game is not in play.
        """
        self._require_stage("add rounds", Stage.PLAYING)
        round_ = create_round(
            number=len(self._rounds) + 1,
            rankings=_coerce_rankings(rankings),
            adjustments=adjustments,
            player_ids=self._player_ids(),
            now=self._now,
        )
        self._rounds.append(round_)
        self._recompute()
        logger.info("Recorded round %d", round_.number)
        self._write(KEY_ROUNDS, KEY_PLAYERS)
        return round_

    submit_round = add_round

    def edit_round(
        self,
        round_id: str,
        rankings: RankingsInput,
        adjustments: Iterable[Adjustment] = (),
    ) -> Round:
        """
        Replace a round's rankings and adjustments in place.

        Validation uses the players ranked in the original round. The id
        and number are kept and the timestamp refreshed.

        Raises:
            NotFoundError: If the round does not exist.
            ValidationError: If the new rankings are invalid.
        """
        self._require_stage("edit rounds", Stage.PLAYING)
        original = self.get_round(round_id)
        edited = edit_round(
            original,
            _coerce_rankings(rankings),
            adjustments,
            now=self._now,
        )
        self._rounds = [edited if r.id == round_id else r for r in self._rounds]
        self._recompute()
        logger.info("Edited round %d", edited.number)
        self._write(KEY_ROUNDS, KEY_PLAYERS)
        return edited

    def request_edit_round(self, round_id: str) -> Round:
        """Open a round for editing and return it."""
        self._require_stage("edit rounds", Stage.PLAYING)
        round_ = self.get_round(round_id)
        self._editing_round_id = round_.id
        return round_

    def save_edited_round(
        self,
        round_id: str,
        rankings: RankingsInput,
        adjustments: Iterable[Adjustment] = (),
    ) -> Round:
        """Save the round being edited and close the editor."""
        edited = self.edit_round(round_id, rankings, adjustments)
        self._editing_round_id = None
        return edited

    def cancel_edit(self) -> None:
        self._editing_round_id = None

    # ------------------------------------------------------------------
    # Reset and clear (two-step)
    # ------------------------------------------------------------------

    def request_reset(self) -> None:
        """Ask to reset the game; nothing changes until confirmed."""
        self._require_stage("reset the game", Stage.PLAYING)
        self._pending = PendingAction.RESET

    def request_clear(self) -> None:
        """Ask to clear all data; nothing changes until confirmed."""
        self._pending = PendingAction.CLEAR

    def cancel_confirmation(self) -> None:
        self._pending = None

    def confirm_reset(self) -> bool:
        """
        Reset the game if a reset was requested.

        Rounds and rules are discarded, scores zeroed, and the stage
        returns to player setup. Player names are kept.

        Returns:
            True if the reset ran, False if no reset was pending.
        """
        if self._pending is not PendingAction.RESET:
            logger.debug("Ignoring reset confirmation without a request")
            return False
        self._pending = None
        self._editing_round_id = None

        self._rounds = []
        self._rule_set = None
        self._started = False
        self._stage = Stage.PLAYER_SETUP
        self._players = [p.with_score(0) for p in self._players]

        logger.info("Game reset; kept %d players", len(self._players))
        self._delete(KEY_ROUNDS, KEY_RULES)
        self._write(KEY_STARTED, KEY_STAGE, KEY_PLAYERS)
        return True

    def confirm_clear(self) -> bool:
        """
        Remove all data if a clear was requested.

        Returns:
            True if data was cleared, False if no clear was pending.
        """
        if self._pending is not PendingAction.CLEAR:
            logger.debug("Ignoring clear confirmation without a request")
            return False
        self._pending = None
        self._editing_round_id = None

        self._players = []
        self._rounds = []
        self._rule_set = None
        self._started = False
        self._stage = Stage.PLAYER_SETUP

        logger.info("All game data cleared")
        self._delete(*ALL_KEYS)
        return True
