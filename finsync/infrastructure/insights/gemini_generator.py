"""Gemini insight generator.

One instance per candidate model name. Errors from the Gemini SDK are
classified into the InsightError subtypes so the cascade can log why a
candidate was skipped; none of them is raised to the caller.
"""

from typing import Any

import google.generativeai as genai
import structlog
from google.api_core import exceptions as google_exceptions

from finsync.application.insights.prompt_builder import InsightPromptBuilder
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Result, Success
from finsync.domain.errors import (
    InsightError,
    InsightGenerationError,
    InsightModelNotFoundError,
    InsightQuotaExceededError,
)
from finsync.domain.value_objects import InsightContext

logger = structlog.get_logger(__name__)


def classify_generation_error(model_name: str, error: Exception) -> InsightError:
    """Map an SDK exception to an InsightError subtype.

    Typed API exceptions are checked first; the message text is the
    fallback because some transports only surface the HTTP status there.
    """
    message = str(error)
    lowered = message.lower()
    if isinstance(error, google_exceptions.NotFound) or "404" in lowered or "not found" in lowered:
        return InsightModelNotFoundError(
            code=ErrorCode.INSIGHT_MODEL_NOT_FOUND,
            message=f"Model {model_name} is not available: {message}",
            generator_name=model_name,
        )
    if (
        isinstance(error, google_exceptions.ResourceExhausted)
        or "429" in lowered
        or "quota" in lowered
    ):
        return InsightQuotaExceededError(
            code=ErrorCode.INSIGHT_QUOTA_EXCEEDED,
            message=f"Model {model_name} quota exhausted: {message}",
            generator_name=model_name,
        )
    return InsightGenerationError(
        code=ErrorCode.INSIGHT_GENERATION_FAILED,
        message=f"Model {model_name} failed: {message}",
        generator_name=model_name,
    )


class GeminiInsightGenerator:
    """Insight candidate backed by one Gemini model.

    Example:
        >>> generator = GeminiInsightGenerator(
        ...     model_name="gemini-2.0-flash",
        ...     api_key=settings.gemini_api_key,
        ...     prompt_builder=InsightPromptBuilder(),
        ... )
        >>> result = await generator.generate(context)
    """

    def __init__(
        self,
        *,
        model_name: str,
        api_key: str,
        prompt_builder: InsightPromptBuilder,
        temperature: float = 0.7,
        max_output_tokens: int = 1000,
    ) -> None:
        self._model_name = model_name
        self._prompt_builder = prompt_builder
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            },
        )

    @property
    def name(self) -> str:
        return self._model_name

    async def generate(self, context: InsightContext) -> Result[str, InsightError]:
        prompt = self._prompt_builder.build(context)
        try:
            response: Any = await self._model.generate_content_async(prompt)
        except Exception as e:
            error = classify_generation_error(self._model_name, e)
            logger.warning(
                "gemini_generation_failed",
                model=self._model_name,
                error_code=error.code.value,
                error_type=type(e).__name__,
            )
            return Failure(error=error)

        try:
            text = response.text
        except ValueError as e:
            # Raised when the answer was blocked and has no text parts
            return Failure(
                error=InsightGenerationError(
                    code=ErrorCode.INSIGHT_EMPTY_RESPONSE,
                    message=f"Model {self._model_name} returned no text: {e}",
                    generator_name=self._model_name,
                )
            )

        return Success(value=text or "")
