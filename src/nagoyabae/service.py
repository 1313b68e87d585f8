"""Scoring and character generation orchestration."""

from __future__ import annotations

import logging

from nagoyabae.config.models import GenerationConfig
from nagoyabae.images import codec
from nagoyabae.images.types import EncodedImage
from nagoyabae.llm.errors import MalformedInputError, TerminalFailure
from nagoyabae.llm.fallback import FallbackController, build_generation_plan, capture
from nagoyabae.llm.normalize import normalize
from nagoyabae.llm.registry import AdapterRegistry
from nagoyabae.llm.types import (
    AnalysisRequest,
    AnalysisResult,
    AttemptOutcome,
    Candidate,
    CharacterResult,
    Failure,
    FailureKind,
    GenerationRequest,
    GeneratorId,
    ProviderId,
)
from nagoyabae.prompts import build_mascot_prompt

logger = logging.getLogger(__name__)


class Orchestrator:
    """Drives adapters, normalization and fallback for one request at a time.

    Holds no per-request state; concurrent calls are independent.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        *,
        generation: GenerationConfig | None = None,
    ) -> None:
        self._registry = registry
        self._generation = generation or GenerationConfig()

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Score an image with the selected provider.

        Scoring has no fallback: any failure is terminal and reported as-is.

        Raises:
            TerminalFailure: If the provider call or normalization fails.
        """
        adapter, model = self._registry.for_scoring(request.provider_id)

        outcome = await capture(lambda: adapter.score(request, model=model))
        if not isinstance(outcome, Failure):
            outcome = normalize(outcome.value, AnalysisResult)

        if isinstance(outcome, Failure):
            logger.warning(
                "scoring_failed",
                extra={
                    "provider": request.provider_id.value,
                    "model": model,
                    "error.kind": outcome.kind.value,
                    "error.message": outcome.message,
                },
            )
            raise TerminalFailure(outcome.kind, outcome.message)

        result: AnalysisResult = outcome.value
        logger.info(
            "scoring_complete",
            extra={"provider": request.provider_id.value, "score": result.score},
        )
        return result

    async def describe(self, image: EncodedImage) -> str:
        """Run the fixed describe step. Never retried or substituted."""
        describer = self._registry.describer
        model = self._generation.describe_model
        outcome = await capture(lambda: describer.describe(image, model=model))
        if isinstance(outcome, Failure):
            logger.warning(
                "describe_failed",
                extra={
                    "error.kind": outcome.kind.value,
                    "error.message": outcome.message,
                },
            )
            raise TerminalFailure(outcome.kind, outcome.message)
        return outcome.value

    async def generate_character(self, request: GenerationRequest) -> CharacterResult:
        """Describe the image, then generate a mascot under fallback supervision.

        Raises:
            TerminalFailure: If the describe step fails, or generation fails
                after the fallback chain.
        """
        description = await self.describe(request.image)
        prompt = build_mascot_prompt(description)

        model = request.model_name or self._generation.default_model_for(
            request.generator
        )
        controller = FallbackController(build_generation_plan(request.generator, model))

        async def attempt(candidate: Candidate) -> AttemptOutcome:
            adapter = self._registry.for_generation(candidate.generator)
            return await capture(lambda: adapter.generate_image(prompt, candidate.model))

        candidate, image = await controller.run(attempt)
        logger.info(
            "character_generated",
            extra={"model": candidate.label, "attempts": len(controller.attempts)},
        )
        return CharacterResult(
            image_url=image.url,
            description=description,
            model_used=candidate.label,
        )

    async def analyze_data_uri(
        self, image: str, provider_id: ProviderId
    ) -> AnalysisResult:
        return await self.analyze(
            AnalysisRequest(image=_decode(image), provider_id=provider_id)
        )

    async def generate_character_from_data_uri(
        self,
        image: str,
        generator: GeneratorId,
        model_name: str | None = None,
    ) -> CharacterResult:
        return await self.generate_character(
            GenerationRequest(
                image=_decode(image), generator=generator, model_name=model_name
            )
        )


def _decode(image: str) -> EncodedImage:
    try:
        return codec.decode(image)
    except MalformedInputError as e:
        raise TerminalFailure(FailureKind.MALFORMED_INPUT, e.message) from e
