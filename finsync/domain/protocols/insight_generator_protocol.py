"""InsightGeneratorProtocol for remote insight candidates.

Each candidate in the insight cascade implements this protocol. A Failure
of any InsightError subtype means "try the next candidate".
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from finsync.core.result import Result
    from finsync.domain.errors import InsightError
    from finsync.domain.value_objects import InsightContext


class InsightGeneratorProtocol(Protocol):
    """Protocol (port) for one insight generation strategy."""

    @property
    def name(self) -> str:
        """Candidate name used in logs and attempt records."""
        ...

    async def generate(self, context: "InsightContext") -> "Result[str, InsightError]":
        """Generate an answer for the context."""
        ...
