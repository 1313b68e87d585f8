"""OpenAI provider adapter (Chat Completions + Images)."""

import json
import logging
from typing import Any

import openai

from nagoyabae.llm.base import ProviderAdapter
from nagoyabae.llm.errors import MalformedResponseError, UnsupportedModelError
from nagoyabae.llm.models import OPENAI_IMAGE_MODELS, OPENAI_SCORING_MODEL
from nagoyabae.llm.types import (
    AnalysisRequest,
    GeneratedImage,
    RawPayload,
    StructuredPayload,
    TextPayload,
)
from nagoyabae.prompts import SCORING_SYSTEM_PROMPT, SCORING_USER_PROMPT

logger = logging.getLogger(__name__)


class OpenAIAdapter(ProviderAdapter):
    """OpenAI adapter.

    Images are passed by reference as a data URI, and scoring uses JSON mode
    so the reply is normally a parsed object rather than text.
    """

    credential_env_var = "OPENAI_API_KEY"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        max_tokens: int = 1000,
        image_size: str = "1024x1024",
        image_quality: str = "high",
    ):
        super().__init__(api_key)
        self._max_tokens = max_tokens
        self._image_size = image_size
        self._image_quality = image_quality

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return OPENAI_SCORING_MODEL

    def _create_client(self, api_key: str) -> openai.AsyncOpenAI:
        # Retries are decided by the fallback controller, not the SDK
        return openai.AsyncOpenAI(api_key=api_key, max_retries=0)

    def _build_score_kwargs(
        self, request: AnalysisRequest, model: str | None
    ) -> dict[str, Any]:
        return {
            "model": model or self.default_model,
            "messages": [
                {"role": "system", "content": SCORING_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": SCORING_USER_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {"url": request.image.source_uri},
                        },
                    ],
                },
            ],
            "response_format": {"type": "json_object"},
            "max_tokens": self._max_tokens,
        }

    async def score(
        self, request: AnalysisRequest, *, model: str | None = None
    ) -> RawPayload:
        client = self._get_client()
        kwargs = self._build_score_kwargs(request, model)
        logger.debug(f"Scoring with {kwargs['model']}")

        response = await client.chat.completions.create(**kwargs)

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise MalformedResponseError("OpenAI returned an empty response")
        try:
            return StructuredPayload(json.loads(content))
        except json.JSONDecodeError:
            return TextPayload(content)

    async def generate_image(
        self, prompt: str, model_name: str | None = None
    ) -> GeneratedImage:
        model = model_name or OPENAI_IMAGE_MODELS[0]
        if model not in OPENAI_IMAGE_MODELS:
            raise UnsupportedModelError(f"Unsupported OpenAI image model: {model}")
        client = self._get_client()
        logger.debug(f"Generating image with {model}")

        response = await client.images.generate(
            model=model,
            prompt=prompt,
            size=self._image_size,
            quality=self._image_quality,
            n=1,
        )

        image = response.data[0] if response.data else None
        if image is not None and getattr(image, "url", None):
            return GeneratedImage(url=image.url, model=model)
        if image is not None and getattr(image, "b64_json", None):
            return GeneratedImage(
                url=f"data:image/png;base64,{image.b64_json}", model=model
            )
        raise MalformedResponseError("OpenAI image generation returned no image")
