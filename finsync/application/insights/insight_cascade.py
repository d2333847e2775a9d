"""Insight candidate cascade.

Tries the remote candidates strictly in order, one at a time, and returns
the first non-empty answer. A candidate is skipped when it fails, times
out, answers with blank text or raises. When every candidate is skipped
the local engine answers, so the cascade itself never fails.
"""

import asyncio
from collections.abc import Sequence

import structlog

from finsync.application.dtos.insight_dtos import (
    LOCAL_GENERATOR_NAME,
    InsightAttempt,
    InsightOutcome,
)
from finsync.application.insights.local_insights import LocalInsightEngine
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Success
from finsync.domain.errors import InsightModelNotFoundError, InsightQuotaExceededError
from finsync.domain.protocols import InsightGeneratorProtocol
from finsync.domain.value_objects import InsightContext

logger = structlog.get_logger(__name__)

DEFAULT_CANDIDATE_TIMEOUT = 30.0


class InsightCascade:
    """Ordered candidate list with a deterministic local fallback.

    Example:
        >>> cascade = InsightCascade(
        ...     candidates=[GeminiInsightGenerator(model_name="gemini-2.0-flash", ...)],
        ...     local_engine=LocalInsightEngine(),
        ... )
        >>> outcome = await cascade.run(context)
    """

    def __init__(
        self,
        *,
        candidates: Sequence[InsightGeneratorProtocol],
        local_engine: LocalInsightEngine,
        candidate_timeout: float | None = DEFAULT_CANDIDATE_TIMEOUT,
    ) -> None:
        """Initialize cascade.

        Args:
            candidates: Remote generators, most preferred first.
            local_engine: Fallback used after every candidate is skipped.
            candidate_timeout: Seconds one candidate may take (None = unbounded).
        """
        self._candidates = list(candidates)
        self._local_engine = local_engine
        self._candidate_timeout = candidate_timeout

    async def run(self, context: InsightContext) -> InsightOutcome:
        attempts: list[InsightAttempt] = []

        for candidate in self._candidates:
            name = candidate.name
            try:
                async with asyncio.timeout(self._candidate_timeout):
                    result = await candidate.generate(context)
            except TimeoutError:
                logger.warning(
                    "insight_candidate_timeout",
                    generator=name,
                    timeout_seconds=self._candidate_timeout,
                )
                attempts.append(
                    InsightAttempt(
                        generator=name,
                        succeeded=False,
                        error_code=ErrorCode.INSIGHT_GENERATION_FAILED,
                    )
                )
                continue
            except Exception as e:
                logger.error(
                    "insight_candidate_crashed",
                    generator=name,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                attempts.append(
                    InsightAttempt(
                        generator=name,
                        succeeded=False,
                        error_code=ErrorCode.INSIGHT_GENERATION_FAILED,
                    )
                )
                continue

            match result:
                case Success(value=text) if text and text.strip():
                    attempts.append(InsightAttempt(generator=name, succeeded=True))
                    logger.info(
                        "insight_generated",
                        generator=name,
                        skipped=len(attempts) - 1,
                        chat=context.is_chat,
                    )
                    return InsightOutcome(
                        text=text.strip(), generator=name, attempts=attempts
                    )
                case Success():
                    logger.warning("insight_candidate_empty", generator=name)
                    attempts.append(
                        InsightAttempt(
                            generator=name,
                            succeeded=False,
                            error_code=ErrorCode.INSIGHT_EMPTY_RESPONSE,
                        )
                    )
                case Failure(
                    error=InsightModelNotFoundError() | InsightQuotaExceededError() as error
                ):
                    logger.info(
                        "insight_candidate_skipped",
                        generator=name,
                        error_code=error.code.value,
                    )
                    attempts.append(
                        InsightAttempt(
                            generator=name, succeeded=False, error_code=error.code
                        )
                    )
                case Failure(error=error):
                    logger.warning(
                        "insight_candidate_failed",
                        generator=name,
                        error_code=error.code.value,
                        error_message=error.message,
                    )
                    attempts.append(
                        InsightAttempt(
                            generator=name, succeeded=False, error_code=error.code
                        )
                    )

        logger.warning(
            "insight_local_fallback",
            attempted=[attempt.generator for attempt in attempts],
            chat=context.is_chat,
        )
        return InsightOutcome(
            text=self._local_engine.respond(context),
            generator=LOCAL_GENERATOR_NAME,
            attempts=attempts,
        )

    async def generate_insight(self, context: InsightContext) -> str:
        """Answer text only; see run() for the attempt record."""
        outcome = await self.run(context)
        return outcome.text
