"""Insight generation errors.

Every insight error means "skip to the next candidate". The subtypes only
exist so that logs and attempt records say why a candidate was skipped.
"""

from dataclasses import dataclass

from finsync.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InsightError(DomainError):
    """Base insight generation error.

    Attributes:
        generator_name: Candidate that failed (model name).
    """

    generator_name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class InsightModelNotFoundError(InsightError):
    """Candidate model does not exist or is not available to this API key."""


@dataclass(frozen=True, slots=True, kw_only=True)
class InsightQuotaExceededError(InsightError):
    """Candidate model quota or rate limit is exhausted."""


@dataclass(frozen=True, slots=True, kw_only=True)
class InsightGenerationError(InsightError):
    """Any other generation failure (API error, blocked or empty answer)."""
