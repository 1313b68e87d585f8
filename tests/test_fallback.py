"""Tests for failure classification and the generation fallback chain."""

import pytest

from nagoyabae.llm.errors import (
    MalformedResponseError,
    MissingCredentialError,
    QuotaExceededError,
    TerminalFailure,
    UnsupportedModelError,
)
from nagoyabae.llm.fallback import (
    FallbackController,
    build_generation_plan,
    capture,
    classify_failure,
)
from nagoyabae.llm.types import (
    Candidate,
    Failure,
    FailureKind,
    GeneratorId,
    Success,
)

GEMINI_FLASH = Candidate(GeneratorId.GEMINI, "gemini-2.5-flash-image")
GEMINI_PRO = Candidate(GeneratorId.GEMINI, "gemini-3-pro-image-preview")
OPENAI_IMAGE = Candidate(GeneratorId.OPENAI, "gpt-image-1")
OPENAI_MINI = Candidate(GeneratorId.OPENAI, "gpt-image-1-mini")

QUOTA = Failure(FailureKind.QUOTA_EXCEEDED, "429 Too Many Requests")


class TestClassifyFailure:
    """Tests for classify_failure."""

    def test_quota_vocabulary(self):
        assert classify_failure(Exception("429 Too Many Requests")) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(Exception("You exceeded your current quota")) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(Exception("Rate limit reached")) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(Exception("rate_limit_error")) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(Exception("TooManyRequests")) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(Exception("RESOURCE_EXHAUSTED")) == FailureKind.QUOTA_EXCEEDED

    def test_status_code_attribute(self):
        """Test errors with status_code (openai/anthropic) or code (google-genai)."""

        class HttpError(Exception):
            def __init__(self, status_code: int):
                self.status_code = status_code
                super().__init__("request failed")

        class GenaiError(Exception):
            def __init__(self, code: int):
                self.code = code
                super().__init__("request failed")

        assert classify_failure(HttpError(429)) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(GenaiError(429)) == FailureKind.QUOTA_EXCEEDED
        assert classify_failure(HttpError(500)) == FailureKind.UNKNOWN
        assert classify_failure(GenaiError(400)) == FailureKind.UNKNOWN

    def test_rate_limit_exception_type(self):
        class RateLimitError(Exception):
            pass

        assert classify_failure(RateLimitError("slow down")) == FailureKind.QUOTA_EXCEEDED

    def test_typed_errors_keep_their_kind(self):
        assert classify_failure(MissingCredentialError("no key")) == FailureKind.MISSING_CREDENTIAL
        assert classify_failure(UnsupportedModelError("nope")) == FailureKind.UNSUPPORTED_MODEL
        assert classify_failure(MalformedResponseError("garbage")) == FailureKind.MALFORMED_RESPONSE
        assert classify_failure(QuotaExceededError("later")) == FailureKind.QUOTA_EXCEEDED

    def test_typed_error_wins_over_message(self):
        error = MalformedResponseError("quota text inside a bad response")
        assert classify_failure(error) == FailureKind.MALFORMED_RESPONSE

    def test_unknown(self):
        assert classify_failure(Exception("Invalid request")) == FailureKind.UNKNOWN
        assert classify_failure(ValueError("Error 14290 in pipeline")) == FailureKind.UNKNOWN
        assert classify_failure(ConnectionError("reset by peer")) == FailureKind.UNKNOWN


class TestCapture:
    """Tests for capture."""

    @pytest.mark.asyncio
    async def test_success(self):
        async def call():
            return "ok"

        assert await capture(call) == Success("ok")

    @pytest.mark.asyncio
    async def test_failure_is_classified(self):
        async def call():
            raise RuntimeError("429 Too Many Requests")

        outcome = await capture(call)
        assert outcome == Failure(FailureKind.QUOTA_EXCEEDED, "429 Too Many Requests")

    @pytest.mark.asyncio
    async def test_empty_message_uses_type_name(self):
        async def call():
            raise RuntimeError()

        outcome = await capture(call)
        assert outcome == Failure(FailureKind.UNKNOWN, "RuntimeError")


class TestBuildGenerationPlan:
    """Tests for build_generation_plan."""

    def test_gemini_default(self):
        assert build_generation_plan(GeneratorId.GEMINI) == (
            GEMINI_FLASH,
            GEMINI_PRO,
            OPENAI_IMAGE,
        )

    def test_gemini_pro_primary(self):
        assert build_generation_plan(GeneratorId.GEMINI, "gemini-3-pro-image-preview") == (
            GEMINI_PRO,
            GEMINI_FLASH,
            OPENAI_IMAGE,
        )

    def test_openai_default(self):
        assert build_generation_plan(GeneratorId.OPENAI) == (
            OPENAI_IMAGE,
            OPENAI_MINI,
            GEMINI_FLASH,
        )

    def test_unknown_model_has_no_substitutes(self):
        plan = build_generation_plan(GeneratorId.GEMINI, "gemini-1.0-pro")
        assert plan == (Candidate(GeneratorId.GEMINI, "gemini-1.0-pro"),)

    @pytest.mark.parametrize("generator", list(GeneratorId))
    def test_at_most_two_substitutions(self, generator):
        plan = build_generation_plan(generator)
        assert len(plan) == 3
        # Same family first, then the other family exactly once
        assert plan[0].generator == plan[1].generator == generator
        assert plan[2].generator != generator


class ScriptedAttempts:
    """Returns scripted outcomes and records which candidates were tried."""

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.tried: list[Candidate] = []

    async def __call__(self, candidate: Candidate):
        self.tried.append(candidate)
        return self._outcomes.pop(0)


class TestFallbackController:
    """Tests for FallbackController.run."""

    PLAN = (GEMINI_FLASH, GEMINI_PRO, OPENAI_IMAGE)

    @pytest.mark.asyncio
    async def test_primary_success(self):
        attempts = ScriptedAttempts(Success("image"))
        controller = FallbackController(self.PLAN)

        candidate, value = await controller.run(attempts)

        assert candidate == GEMINI_FLASH
        assert value == "image"
        assert attempts.tried == [GEMINI_FLASH]

    @pytest.mark.asyncio
    async def test_quota_tries_same_family_first(self):
        attempts = ScriptedAttempts(QUOTA, Success("image"))
        controller = FallbackController(self.PLAN)

        candidate, _ = await controller.run(attempts)

        assert candidate == GEMINI_PRO
        assert attempts.tried == [GEMINI_FLASH, GEMINI_PRO]

    @pytest.mark.asyncio
    async def test_double_quota_crosses_provider(self):
        attempts = ScriptedAttempts(QUOTA, QUOTA, Success("image"))
        controller = FallbackController(self.PLAN)

        candidate, _ = await controller.run(attempts)

        assert candidate == OPENAI_IMAGE
        assert attempts.tried == [GEMINI_FLASH, GEMINI_PRO, OPENAI_IMAGE]
        assert [record.candidate for record in controller.attempts] == list(self.PLAN)

    @pytest.mark.asyncio
    async def test_exhausted_is_terminal(self):
        attempts = ScriptedAttempts(QUOTA, QUOTA, QUOTA)
        controller = FallbackController(self.PLAN)

        with pytest.raises(TerminalFailure) as exc_info:
            await controller.run(attempts)

        assert exc_info.value.kind == FailureKind.QUOTA_EXCEEDED
        assert len(exc_info.value.attempts) == 3
        assert len(attempts.tried) == 3
        assert "all generation candidates failed" in exc_info.value.message

    @pytest.mark.parametrize(
        "kind",
        [
            FailureKind.MISSING_CREDENTIAL,
            FailureKind.UNSUPPORTED_MODEL,
            FailureKind.MALFORMED_RESPONSE,
            FailureKind.UNKNOWN,
        ],
    )
    @pytest.mark.asyncio
    async def test_non_quota_failure_never_falls_back(self, kind):
        attempts = ScriptedAttempts(Failure(kind, "boom"))
        controller = FallbackController(self.PLAN)

        with pytest.raises(TerminalFailure) as exc_info:
            await controller.run(attempts)

        assert exc_info.value.kind == kind
        assert exc_info.value.message == "boom"
        assert attempts.tried == [GEMINI_FLASH]

    @pytest.mark.asyncio
    async def test_non_quota_on_substitute_is_terminal(self):
        attempts = ScriptedAttempts(
            QUOTA, Failure(FailureKind.MALFORMED_RESPONSE, "no image")
        )
        controller = FallbackController(self.PLAN)

        with pytest.raises(TerminalFailure) as exc_info:
            await controller.run(attempts)

        assert exc_info.value.kind == FailureKind.MALFORMED_RESPONSE
        assert attempts.tried == [GEMINI_FLASH, GEMINI_PRO]

    def test_plan_bounds(self):
        with pytest.raises(ValueError):
            FallbackController(())
        with pytest.raises(ValueError):
            FallbackController(self.PLAN + (OPENAI_MINI,))
