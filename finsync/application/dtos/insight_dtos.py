"""Insight DTOs."""

from dataclasses import dataclass, field

from finsync.core.enums import ErrorCode

LOCAL_GENERATOR_NAME = "local"


@dataclass
class InsightAttempt:
    """One candidate attempt.

    Attributes:
        generator: Candidate name.
        succeeded: Whether the candidate produced the answer.
        error_code: Why it was skipped (None on success).
    """

    generator: str
    succeeded: bool
    error_code: ErrorCode | None = None


@dataclass
class InsightOutcome:
    """Answer produced by the insight cascade.

    Attributes:
        text: Answer text (never empty).
        generator: Name of the candidate that produced it ("local" for the fallback).
        attempts: Remote attempts in order.
    """

    text: str
    generator: str
    attempts: list[InsightAttempt] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        """True when the deterministic local fallback answered."""
        return self.generator == LOCAL_GENERATOR_NAME
