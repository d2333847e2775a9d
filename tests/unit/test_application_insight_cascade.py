"""Unit tests for InsightCascade.

Tests cover:
- First non-empty answer wins, later candidates are never called
- Skips on Failure, empty answer, timeout and unexpected exceptions
- Strictly sequential attempts
- Local fallback when every candidate is skipped (never fails)
"""

import asyncio

import pytest
from uuid_extensions import uuid7

from finsync.application.dtos.insight_dtos import LOCAL_GENERATOR_NAME
from finsync.application.insights import InsightCascade, LocalInsightEngine
from finsync.core.enums import ErrorCode
from finsync.core.result import Failure, Success
from finsync.domain.errors import (
    InsightGenerationError,
    InsightModelNotFoundError,
    InsightQuotaExceededError,
)
from finsync.domain.value_objects import InsightContext, UserProfile


class StubGenerator:
    """Candidate returning a fixed result (or raising / hanging)."""

    def __init__(self, name, result=None, *, raises=None, delay=0.0, log=None):
        self._name = name
        self._result = result
        self._raises = raises
        self._delay = delay
        self._log = log if log is not None else []
        self.calls = 0

    @property
    def name(self):
        return self._name

    async def generate(self, context):
        self.calls += 1
        self._log.append(("start", self._name))
        if self._delay:
            await asyncio.sleep(self._delay)
        self._log.append(("end", self._name))
        if self._raises is not None:
            raise self._raises
        return self._result


def not_found(name):
    return Failure(
        error=InsightModelNotFoundError(
            code=ErrorCode.INSIGHT_MODEL_NOT_FOUND, message="404", generator_name=name
        )
    )


def quota(name):
    return Failure(
        error=InsightQuotaExceededError(
            code=ErrorCode.INSIGHT_QUOTA_EXCEEDED, message="429", generator_name=name
        )
    )


def generation_failed(name):
    return Failure(
        error=InsightGenerationError(
            code=ErrorCode.INSIGHT_GENERATION_FAILED, message="boom", generator_name=name
        )
    )


@pytest.fixture
def context():
    return InsightContext(profile=UserProfile(user_id=uuid7(), name="Ana"))


def build_cascade(*candidates, timeout=1.0):
    return InsightCascade(
        candidates=list(candidates),
        local_engine=LocalInsightEngine(),
        candidate_timeout=timeout,
    )


@pytest.mark.unit
class TestInsightCascadeSuccess:
    """First usable answer short-circuits."""

    async def test_first_candidate_answers(self, context):
        first = StubGenerator("m1", Success(value="  Insight text  "))
        second = StubGenerator("m2", Success(value="unused"))

        outcome = await build_cascade(first, second).run(context)

        assert outcome.text == "Insight text"
        assert outcome.generator == "m1"
        assert outcome.is_degraded is False
        assert second.calls == 0

    async def test_skips_failures_until_success(self, context):
        candidates = [
            StubGenerator("m1", not_found("m1")),
            StubGenerator("m2", quota("m2")),
            StubGenerator("m3", generation_failed("m3")),
            StubGenerator("m4", Success(value="Answer")),
            StubGenerator("m5", Success(value="unused")),
        ]

        outcome = await build_cascade(*candidates).run(context)

        assert outcome.generator == "m4"
        assert [a.error_code for a in outcome.attempts] == [
            ErrorCode.INSIGHT_MODEL_NOT_FOUND,
            ErrorCode.INSIGHT_QUOTA_EXCEEDED,
            ErrorCode.INSIGHT_GENERATION_FAILED,
            None,
        ]
        assert outcome.attempts[-1].succeeded is True
        assert candidates[4].calls == 0

    async def test_generate_insight_returns_text_only(self, context):
        cascade = build_cascade(StubGenerator("m1", Success(value="Answer")))

        assert await cascade.generate_insight(context) == "Answer"


@pytest.mark.unit
class TestInsightCascadeSkips:
    """Every kind of candidate failure moves to the next one."""

    async def test_blank_answer_is_skipped(self, context):
        outcome = await build_cascade(
            StubGenerator("m1", Success(value="   ")),
            StubGenerator("m2", Success(value="Answer")),
        ).run(context)

        assert outcome.generator == "m2"
        assert outcome.attempts[0].error_code == ErrorCode.INSIGHT_EMPTY_RESPONSE

    async def test_exception_is_skipped(self, context):
        outcome = await build_cascade(
            StubGenerator("m1", raises=RuntimeError("sdk exploded")),
            StubGenerator("m2", Success(value="Answer")),
        ).run(context)

        assert outcome.generator == "m2"
        assert outcome.attempts[0].error_code == ErrorCode.INSIGHT_GENERATION_FAILED

    async def test_timeout_is_skipped(self, context):
        slow = StubGenerator("slow", Success(value="late"), delay=1.0)
        fast = StubGenerator("fast", Success(value="Answer"))

        outcome = await build_cascade(slow, fast, timeout=0.05).run(context)

        assert outcome.generator == "fast"
        assert outcome.attempts[0].succeeded is False

    async def test_candidates_run_one_at_a_time(self, context):
        log = []
        candidates = [
            StubGenerator("m1", quota("m1"), delay=0.01, log=log),
            StubGenerator("m2", Success(value="Answer"), delay=0.01, log=log),
        ]

        await build_cascade(*candidates).run(context)

        assert log == [("start", "m1"), ("end", "m1"), ("start", "m2"), ("end", "m2")]


@pytest.mark.unit
class TestInsightCascadeFallback:
    """Local engine answers when nothing else does."""

    async def test_all_candidates_fail(self, context):
        outcome = await build_cascade(
            StubGenerator("m1", not_found("m1")),
            StubGenerator("m2", raises=ValueError("bad")),
        ).run(context)

        assert outcome.generator == LOCAL_GENERATOR_NAME
        assert outcome.is_degraded is True
        assert outcome.text.startswith("Hi Ana, here is your financial snapshot")
        assert len(outcome.attempts) == 2

    async def test_no_candidates(self, context):
        outcome = await build_cascade().run(context)

        assert outcome.generator == LOCAL_GENERATOR_NAME
        assert outcome.attempts == []
        assert outcome.text
