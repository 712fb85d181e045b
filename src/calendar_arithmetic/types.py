"""Shared types: seek enums, traversal scope and errors."""

from __future__ import annotations

from enum import Enum, IntEnum


class SeekDirection(Enum):
    """Direction in which available time is searched from the start instant."""

    FORWARD = "forward"
    BACKWARD = "backward"

    def reverse(self) -> SeekDirection:
        if self is SeekDirection.FORWARD:
            return SeekDirection.BACKWARD
        return SeekDirection.FORWARD


class SeekBoundaryMode(Enum):
    """How an exact-length match is treated at the edge of a gap.

    NEXT: stop inside a gap only if it is strictly longer than what remains,
    so an exact fit continues to the start of the following gap.
    FILL: an exact fit lands on the gap edge.
    """

    NEXT = "next"
    FILL = "fill"


class Scope(IntEnum):
    """Traversal depth. Ordered from coarsest to finest.

    A visitor descends into the next level only while the requested scope
    is deeper than the level being visited.
    """

    YEAR = 1
    MONTH = 2
    DAY = 3
    HOUR = 4
    MINUTE = 5

    def is_deeper_than(self, level: Scope) -> bool:
        return self.value > level.value


class ContractViolationError(Exception):
    """Raised when a caller breaks an operation's precondition."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Contract violation in {operation}: {reason}")


class FilterError(ValueError):
    """Raised when a filter or rule configuration is malformed."""

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(
            "Invalid filter configuration:\n"
            + "\n".join(f"  - {e}" for e in self.errors)
        )
