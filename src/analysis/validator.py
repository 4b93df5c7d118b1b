"""Validation helpers used before submitting setup and round forms."""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..config import MIN_PLAYERS
from ..models.draft import RoundDraft
from ..models.errors import RuleViolation, ValidationError
from ..models.player import Player
from ..models.round import check_adjustments, check_rankings
from ..models.rules import RuleSetInput, ScoringRuleSet, coerce_rule_set


@dataclass
class ValidationResult:
    """
    Result of a validation check.

    Attributes:
        is_valid: Whether the validation passed.
        errors: List of violations (empty if valid).
        warnings: Non-blocking issues (e.g., flat scoring rules).
    """

    is_valid: bool
    errors: list[RuleViolation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise ValidationError if the result has errors."""
        if self.errors:
            raise ValidationError(self.errors)


def validate_player_name(name: str) -> ValidationResult:
    """
    Check a player name is not empty or whitespace only.

    Args:
        name: The proposed name.

    Returns:
        ValidationResult indicating if the name is usable.
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            errors=[RuleViolation(code="EMPTY_NAME", message="Player name cannot be empty")],
        )
    return ValidationResult(is_valid=True)


def can_add_player(players: Sequence[Player], name: str) -> ValidationResult:
    """
    Check if a player can be added to the roster.

    Duplicate names are allowed but produce a warning.

    Args:
        players: The current roster.
        name: Name of the new player.

    Returns:
        ValidationResult indicating if the add is valid.
    """
    result = validate_player_name(name)
    if not result.is_valid:
        return result

    normalized = name.strip().casefold()
    if any(p.name.strip().casefold() == normalized for p in players):
        result.warnings.append(f"A player named {name.strip()} already exists")
    return result


def can_proceed_to_rules(players: Sequence[Player]) -> ValidationResult:
    """Check the roster is large enough to configure scoring."""
    if len(players) < MIN_PLAYERS:
        return ValidationResult(
            is_valid=False,
            errors=[
                RuleViolation(
                    code="NOT_ENOUGH_PLAYERS",
                    message=f"At least {MIN_PLAYERS} players are needed ({len(players)} added)",
                )
            ],
        )
    return ValidationResult(is_valid=True)


def validate_rule_set(rules: RuleSetInput, player_count: int) -> ValidationResult:
    """
    Validate scoring rules for a roster of player_count players.

    Args:
        rules: Rule set, {rank: points} mapping or iterable of rules.
        player_count: Number of players in the game.

    Returns:
        ValidationResult; duplicate or missing ranks are errors, while
        flat or inverted rules are warnings.
    """
    try:
        rule_set = coerce_rule_set(rules)
    except ValidationError as e:
        return ValidationResult(is_valid=False, errors=e.violations)

    errors: list[RuleViolation] = []
    warnings: list[str] = []

    missing = rule_set.missing_ranks(player_count)
    if missing:
        errors.append(
            RuleViolation(
                code="MISSING_RULE_RANK",
                message=f"No points set for rank(s) {', '.join(str(r) for r in missing)}",
            )
        )

    in_play = [rule_set.points_for_rank(rank) for rank in range(1, player_count + 1)]
    if len(in_play) > 1 and len(set(in_play)) == 1:
        warnings.append("Every rank awards the same points: rankings will not change totals")
    elif in_play and max(in_play) != in_play[0]:
        warnings.append("First place does not award the most points")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def validate_draft(draft: RoundDraft, player_ids: Iterable[str]) -> ValidationResult:
    """
    Validate a round draft before it is submitted.

    Args:
        draft: Rankings and adjustments entered so far.
        player_ids: Players that must be ranked.

    Returns:
        ValidationResult with ranking/adjustment errors, plus a warning for
        adjustments that will be dropped because they are zero.
    """
    player_ids = list(player_ids)
    errors = check_rankings(draft.to_rankings(), player_ids)
    errors += check_adjustments(draft.to_adjustments(), player_ids)

    warnings: list[str] = []
    dropped = [
        pid
        for pid, entry in draft.adjustments.items()
        if entry.points == 0 and entry.reason.strip()
    ]
    if dropped:
        warnings.append(
            f"{len(dropped)} adjustment(s) with zero points will not be saved"
        )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
