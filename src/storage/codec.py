"""JSON encoding of game state for the key-value store."""

import json
from datetime import datetime
from typing import Any, Optional

from ..models import (
    Adjustment,
    Player,
    Ranking,
    Round,
    ScoringRule,
    ScoringRuleSet,
    Stage,
    ValidationError,
)


class DecodeError(Exception):
    """Raised when a stored value does not have the expected shape."""

    pass


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e}") from e


def _expect_list(data: Any, what: str) -> list:
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of {what}, got {type(data).__name__}")
    return data


def encode_players(players: list[Player]) -> str:
    return json.dumps([{"id": p.id, "name": p.name, "score": p.score} for p in players])


def decode_players(text: str) -> list[Player]:
    """
    Parse a stored roster.

    Raises:
        DecodeError: If the value is not a list of player objects.
    """
    players = []
    for item in _expect_list(_loads(text), "players"):
        try:
            players.append(
                Player(id=str(item["id"]), name=str(item["name"]), score=int(item.get("score", 0)))
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Invalid player entry: {item!r}") from e
    return players


def encode_started(started: bool) -> str:
    return json.dumps(bool(started))


def decode_started(text: str) -> bool:
    data = _loads(text)
    if not isinstance(data, bool):
        raise DecodeError(f"Expected a boolean, got {data!r}")
    return data


def encode_stage(stage: Stage) -> str:
    return json.dumps(stage.value)


def decode_stage(text: str) -> Stage:
    """
    Parse a stored stage name ("players", "scoring" or "game").

    Raises:
        DecodeError: If the value is not a known stage.
    """
    data = _loads(text)
    try:
        return Stage(data)
    except ValueError as e:
        raise DecodeError(f"Unknown stage: {data!r}") from e


def encode_rules(rule_set: Optional[ScoringRuleSet]) -> str:
    rules = list(rule_set) if rule_set is not None else []
    return json.dumps([{"rank": r.rank, "points": r.points} for r in rules])


def decode_rules(text: str) -> Optional[ScoringRuleSet]:
    """
    Parse stored scoring rules.

    Returns:
        The rule set, or None for an empty list.

    Raises:
        DecodeError: If entries are malformed or repeat a rank.
    """
    items = _expect_list(_loads(text), "rules")
    if not items:
        return None
    try:
        return ScoringRuleSet(
            tuple(ScoringRule(rank=int(i["rank"]), points=int(i["points"])) for i in items)
        )
    except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
        raise DecodeError(f"Invalid scoring rules: {e}") from e


def _encode_round(round_: Round) -> dict[str, Any]:
    return {
        "id": round_.id,
        "number": round_.number,
        "rankings": [{"playerId": r.player_id, "rank": r.rank} for r in round_.rankings],
        "adjustments": [
            {"playerId": a.player_id, "points": a.points, "reason": a.reason}
            for a in round_.adjustments
        ],
        "timestamp": round_.timestamp.isoformat(),
    }


def _decode_round(item: dict[str, Any]) -> Round:
    return Round(
        id=str(item["id"]),
        number=int(item["number"]),
        rankings=tuple(
            Ranking(player_id=str(r["playerId"]), rank=int(r["rank"]))
            for r in item.get("rankings", [])
        ),
        adjustments=tuple(
            Adjustment(
                player_id=str(a["playerId"]),
                points=int(a["points"]),
                reason=str(a.get("reason", "")),
            )
            for a in item.get("adjustments", [])
        ),
        timestamp=datetime.fromisoformat(str(item["timestamp"]).replace("Z", "+00:00")),
    )


def encode_rounds(rounds: list[Round]) -> str:
    return json.dumps([_encode_round(r) for r in rounds])


def decode_rounds(text: str) -> list[Round]:
    """
    Parse the stored round history.

    Raises:
        DecodeError: If any round is malformed.
    """
    rounds = []
    for item in _expect_list(_loads(text), "rounds"):
        try:
            rounds.append(_decode_round(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Invalid round entry: {e}") from e
    return rounds
