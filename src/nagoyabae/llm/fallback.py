"""Failure classification and the bounded generation fallback chain.

Only quota/rate-limit failures advance to the next candidate. A plan lists at
most three candidates: the requested model, one substitute from the same
family, then the other family's default model.
"""

import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from nagoyabae.llm.errors import ProviderError, TerminalFailure
from nagoyabae.llm.models import (
    IMAGE_MODELS,
    alternate_image_model,
    default_image_model,
)
from nagoyabae.llm.types import (
    AttemptOutcome,
    AttemptRecord,
    Candidate,
    Failure,
    FailureKind,
    GeneratorId,
    Success,
)

logger = logging.getLogger(__name__)

# Vendor error text is not a stable contract; status codes are checked first.
QUOTA_PATTERN = re.compile(
    r"\b429\b|too\s*many\s*requests|quota|rate.?limit|resource.?exhausted",
    re.IGNORECASE,
)

MAX_ATTEMPTS = 3


def classify_failure(error: BaseException) -> FailureKind:
    """Map an exception raised during an attempt to a FailureKind.

    Args:
        error: The exception to classify.

    Returns:
        The error's own kind for ProviderError, QUOTA_EXCEEDED for
        rate-limit signals, otherwise UNKNOWN.
    """
    if isinstance(error, ProviderError):
        return error.kind

    # openai/anthropic expose status_code, google-genai exposes code
    for attr in ("status_code", "code"):
        if getattr(error, attr, None) == 429:
            return FailureKind.QUOTA_EXCEEDED

    if QUOTA_PATTERN.search(str(error)):
        return FailureKind.QUOTA_EXCEEDED

    error_type = type(error).__name__.lower()
    if "ratelimit" in error_type or "rate_limit" in error_type:
        return FailureKind.QUOTA_EXCEEDED

    return FailureKind.UNKNOWN


async def capture[T](call: Callable[[], Awaitable[T]]) -> AttemptOutcome:
    """Run one attempt and return its outcome instead of raising."""
    try:
        return Success(await call())
    except Exception as e:
        return Failure(classify_failure(e), str(e) or type(e).__name__)


def _other_family(generator: GeneratorId) -> GeneratorId:
    if generator == GeneratorId.GEMINI:
        return GeneratorId.OPENAI
    return GeneratorId.GEMINI


def build_generation_plan(
    generator: GeneratorId, model: str | None = None
) -> tuple[Candidate, ...]:
    """Build the ordered candidates for one generation request.

    An unknown model yields a single-candidate plan so the adapter can
    report it as unsupported without any substitution.
    """
    model = model or default_image_model(generator)
    primary = Candidate(generator, model)
    if model not in IMAGE_MODELS[generator]:
        return (primary,)

    plan = [primary]
    alternate = alternate_image_model(generator, model)
    if alternate is not None:
        plan.append(Candidate(generator, alternate))
    other = _other_family(generator)
    plan.append(Candidate(other, default_image_model(other)))
    return tuple(plan)


class FallbackController:
    """Walks a generation plan, advancing only on quota failures."""

    def __init__(self, plan: Sequence[Candidate]) -> None:
        if not plan:
            raise ValueError("fallback plan must contain at least one candidate")
        if len(plan) > MAX_ATTEMPTS:
            raise ValueError(
                f"fallback plan allows at most {MAX_ATTEMPTS} candidates, got {len(plan)}"
            )
        self._plan = tuple(plan)
        self.attempts: list[AttemptRecord] = []

    @property
    def plan(self) -> tuple[Candidate, ...]:
        return self._plan

    async def run(
        self, attempt: Callable[[Candidate], Awaitable[AttemptOutcome]]
    ) -> tuple[Candidate, Any]:
        """Attempt candidates in order until one succeeds.

        Args:
            attempt: Runs one candidate and returns its outcome.

        Returns:
            The successful candidate and its value.

        Raises:
            TerminalFailure: On a non-quota failure, or when the plan is
                exhausted.
        """
        last = len(self._plan) - 1
        for index, candidate in enumerate(self._plan):
            logger.debug(f"Generation attempt {index + 1}: {candidate.label}")
            outcome = await attempt(candidate)
            self.attempts.append(AttemptRecord(candidate=candidate, outcome=outcome))

            if isinstance(outcome, Success):
                return candidate, outcome.value

            if not outcome.is_transient:
                logger.warning(
                    "generation_failed",
                    extra={
                        "candidate": candidate.label,
                        "error.kind": outcome.kind.value,
                        "error.message": outcome.message,
                    },
                )
                raise TerminalFailure(outcome.kind, outcome.message, self.attempts)

            if index == last:
                logger.warning(
                    "fallback_exhausted",
                    extra={
                        "attempts": len(self.attempts),
                        "error.message": outcome.message,
                    },
                )
                raise TerminalFailure(
                    outcome.kind, self._exhausted_message(), self.attempts
                )

            logger.info(
                "generation_fallback",
                extra={
                    "from": candidate.label,
                    "to": self._plan[index + 1].label,
                    "error.message": outcome.message,
                },
            )

        # Loop always returns or raises
        raise AssertionError("unreachable")

    def _exhausted_message(self) -> str:
        details = "; ".join(
            f"{record.candidate.label}: {record.outcome.message}"
            for record in self.attempts
            if isinstance(record.outcome, Failure)
        )
        return f"all generation candidates failed ({details})"
