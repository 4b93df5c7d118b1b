"""Error types raised by the scoring engine and game session."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RuleViolation:
    """Represents a single broken rule found while validating input."""

    code: str
    message: str


class GameError(Exception):
    """Base exception for score tracker errors."""

    pass


class ValidationError(GameError):
    """
    Raised when an operation is rejected by a validation rule.

    Attributes:
        violations: Every rule the input broke, in the order found.
    """

    def __init__(self, violations: list[RuleViolation]) -> None:
        if not violations:
            raise ValueError("ValidationError requires at least one violation")
        self.violations = list(violations)
        super().__init__(violations[0].message)

    @classmethod
    def single(cls, code: str, message: str) -> "ValidationError":
        """Build an error for one violation."""
        return cls([RuleViolation(code=code, message=message)])

    @property
    def code(self) -> str:
        """Code of the first violation."""
        return self.violations[0].code

    @property
    def codes(self) -> list[str]:
        """Codes of all violations."""
        return [v.code for v in self.violations]


class NotFoundError(GameError):
    """Raised when a player or round id does not exist."""

    def __init__(self, kind: str, item_id: Optional[str]) -> None:
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"{kind} {item_id} not found")
