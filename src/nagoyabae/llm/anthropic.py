"""Anthropic Claude provider adapter."""

import logging
from typing import Any

import anthropic

from nagoyabae.images.codec import coerce_mime_type
from nagoyabae.images.types import EncodedImage
from nagoyabae.llm.base import ProviderAdapter
from nagoyabae.llm.errors import MalformedResponseError
from nagoyabae.llm.models import CLAUDE_HAIKU_MODEL, DESCRIBE_MODEL
from nagoyabae.llm.types import AnalysisRequest, RawPayload, TextPayload
from nagoyabae.prompts import (
    DESCRIBE_SYSTEM_PROMPT,
    DESCRIBE_USER_PROMPT,
    SCORING_SYSTEM_PROMPT,
    SCORING_USER_PROMPT,
)

logger = logging.getLogger(__name__)

# Media types the Messages API accepts for base64 image sources
SUPPORTED_MEDIA_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})

DESCRIBE_MAX_TOKENS = 180


def _image_block(image: EncodedImage) -> dict[str, Any]:
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": coerce_mime_type(image.mime_type, SUPPORTED_MEDIA_TYPES),
            "data": image.base64_payload,
        },
    }


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Claude adapter. Replies arrive as free text."""

    credential_env_var = "ANTHROPIC_API_KEY"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = CLAUDE_HAIKU_MODEL,
        max_tokens: int = 1000,
    ):
        super().__init__(api_key)
        self._model = model
        self._max_tokens = max_tokens

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return self._model

    def _create_client(self, api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)

    def _build_request_kwargs(
        self,
        image: EncodedImage,
        *,
        model: str,
        system: str,
        text: str,
        max_tokens: int,
    ) -> dict[str, Any]:
        return {
            "model": model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": [
                {
                    "role": "user",
                    "content": [_image_block(image), {"type": "text", "text": text}],
                }
            ],
        }

    async def _complete(self, kwargs: dict[str, Any]) -> str:
        client = self._get_client()
        logger.debug(f"Calling {kwargs['model']}")
        response = await client.messages.create(**kwargs)
        for block in response.content:
            if block.type == "text":
                return block.text
        raise MalformedResponseError("Claude response contained no text block")

    async def score(
        self, request: AnalysisRequest, *, model: str | None = None
    ) -> RawPayload:
        kwargs = self._build_request_kwargs(
            request.image,
            model=model or self.default_model,
            system=SCORING_SYSTEM_PROMPT,
            text=SCORING_USER_PROMPT,
            max_tokens=self._max_tokens,
        )
        return TextPayload(await self._complete(kwargs))

    async def describe(self, image: EncodedImage, *, model: str | None = None) -> str:
        kwargs = self._build_request_kwargs(
            image,
            model=model or DESCRIBE_MODEL,
            system=DESCRIBE_SYSTEM_PROMPT,
            text=DESCRIBE_USER_PROMPT,
            max_tokens=DESCRIBE_MAX_TOKENS,
        )
        text = (await self._complete(kwargs)).strip()
        if not text:
            raise MalformedResponseError("Claude description is empty")
        return text
