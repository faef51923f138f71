# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Scoring errors.

Every failure the scoring engine reports is synchronous and local: the
caller receives one of these exceptions and the log is left untouched.
Nothing here is retried.
"""

from __future__ import annotations

from typing import Any


class ScoringError(Exception):
    """Base class for errors raised by the scoring engine."""

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": str(self),
            "details": list(self.details),
        }


class InvalidOutcomeError(ScoringError):
    """Raised when an outcome value is outside the known taxonomy."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unknown play outcome: {value!r}")


class MissingRunnerDecisionError(ScoringError):
    """Raised when a play needs runner decisions that were not supplied."""

    def __init__(self, outcome: str, missing: list[str]):
        self.outcome = outcome
        self.missing = list(missing)
        super().__init__(
            f"Play '{outcome}' requires runner decisions for: {', '.join(self.missing)}",
            details=[f"missing decision: {slot}" for slot in self.missing],
        )


class InconsistentLogError(ScoringError):
    """Raised when the play log is out of order or over-counts outs."""

    def __init__(self, message: str, play_id: str | None = None, index: int | None = None):
        self.play_id = play_id
        self.index = index
        details = []
        if play_id is not None:
            details.append(f"play_id: {play_id}")
        if index is not None:
            details.append(f"index: {index}")
        super().__init__(message, details=details)


class RosterEmptyError(ScoringError):
    """Raised when a batting order is needed but the roster is empty."""

    def __init__(self, message: str = "Cannot track the batting order of an empty roster"):
        super().__init__(message)
