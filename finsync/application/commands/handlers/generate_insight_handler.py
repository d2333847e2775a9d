"""GenerateInsight command handler.

Loads the user's context and runs the insight cascade over it. The cascade
never fails, so the only failure left is an unknown user.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from finsync.application.commands.integration_commands import GenerateInsight
from finsync.application.dtos.insight_dtos import InsightOutcome
from finsync.application.insights.insight_cascade import InsightCascade
from finsync.core.result import Failure, Result, Success
from finsync.domain.protocols import UserContextProtocol
from finsync.domain.value_objects import InsightContext

logger = structlog.get_logger(__name__)


class GenerateInsightError:
    """GenerateInsight-specific errors."""

    USER_NOT_FOUND = "User not found"


# Transactions older than this many days are left out of the context
DEFAULT_CONTEXT_DAYS = 45


class GenerateInsightHandler:
    """Handler for GenerateInsight command.

    Returns:
        Result[InsightOutcome, str]: Success(outcome) or Failure(error)
    """

    def __init__(
        self,
        *,
        user_context: UserContextProtocol,
        cascade: InsightCascade,
        context_days: int = DEFAULT_CONTEXT_DAYS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize handler.

        Args:
            user_context: User context collaborator.
            cascade: Insight cascade.
            context_days: Recency window of transactions in the context.
            clock: Current-time source (defaults to UTC now).
        """
        self._user_context = user_context
        self._cascade = cascade
        self._context_days = context_days
        self._clock = clock or (lambda: datetime.now(UTC))

    async def handle(self, command: GenerateInsight) -> Result[InsightOutcome, str]:
        """Handle GenerateInsight command.

        Returns:
            Success(InsightOutcome): Report (no query) or chat answer.
            Failure(str): User has no context.
        """
        user_context = await self._user_context.get_user_context(command.user_id)
        if user_context is None:
            logger.warning("insight_user_not_found", user_id=str(command.user_id))
            return Failure(error=GenerateInsightError.USER_NOT_FOUND)

        context = InsightContext.from_user_context(
            user_context,
            query=command.query,
            history=command.history,
            since=self._clock().date() - timedelta(days=self._context_days),
        )
        outcome = await self._cascade.run(context)
        logger.info(
            "insight_answered",
            user_id=str(command.user_id),
            generator=outcome.generator,
            degraded=outcome.is_degraded,
        )
        return Success(value=outcome)
