"""Google Gemini provider adapter."""

import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from nagoyabae.llm.base import ProviderAdapter
from nagoyabae.llm.errors import MalformedResponseError, UnsupportedModelError
from nagoyabae.llm.models import GEMINI_IMAGE_MODELS, GEMINI_SCORING_MODEL
from nagoyabae.llm.types import (
    AnalysisRequest,
    GeneratedImage,
    RawPayload,
    TextPayload,
)
from nagoyabae.prompts import combined_scoring_prompt

logger = logging.getLogger(__name__)

DEFAULT_GENERATED_MIME_TYPE = "image/png"


def _first_candidate_parts(response: Any) -> list[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def extract_image_url(response: Any) -> str:
    """Pull the generated image out of a generate_content response.

    Inline bytes win over a remote file reference wherever they appear.

    Raises:
        MalformedResponseError: If the response carries neither.
    """
    parts = _first_candidate_parts(response)

    for part in parts:
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None) if inline is not None else None
        if not data:
            continue
        if isinstance(data, (bytes, bytearray)):
            payload = base64.b64encode(bytes(data)).decode("ascii")
        else:
            # Already base64 text
            payload = str(data)
        mime_type = getattr(inline, "mime_type", None) or DEFAULT_GENERATED_MIME_TYPE
        return f"data:{mime_type};base64,{payload}"

    for part in parts:
        file_data = getattr(part, "file_data", None)
        uri = getattr(file_data, "file_uri", None) if file_data is not None else None
        if uri:
            return str(uri)

    raise MalformedResponseError(
        "Gemini model returned no image; gemini-2.5-flash-image is recommended"
    )


class GeminiAdapter(ProviderAdapter):
    """Gemini adapter.

    The API has no system/user split here: image bytes go in an inline part
    next to one concatenated instruction string.
    """

    credential_env_var = "GOOGLE_AI_API_KEY"

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return GEMINI_SCORING_MODEL

    def _create_client(self, api_key: str) -> genai.Client:
        return genai.Client(api_key=api_key)

    def _build_score_contents(self, request: AnalysisRequest) -> list[Any]:
        return [
            types.Part.from_bytes(
                data=request.image.data, mime_type=request.image.mime_type
            ),
            combined_scoring_prompt(),
        ]

    async def score(
        self, request: AnalysisRequest, *, model: str | None = None
    ) -> RawPayload:
        client = self._get_client()
        model_name = model or self.default_model
        logger.debug(f"Scoring with {model_name}")

        response = await client.aio.models.generate_content(
            model=model_name,
            contents=self._build_score_contents(request),
        )

        text = response.text
        if not text:
            raise MalformedResponseError("Gemini returned an empty response")
        return TextPayload(text)

    async def generate_image(
        self, prompt: str, model_name: str | None = None
    ) -> GeneratedImage:
        model = model_name or GEMINI_IMAGE_MODELS[0]
        if model not in GEMINI_IMAGE_MODELS:
            raise UnsupportedModelError(f"Unsupported Gemini image model: {model}")
        client = self._get_client()
        logger.debug(f"Generating image with {model}")

        response = await client.aio.models.generate_content(
            model=model,
            contents=[prompt],
        )
        return GeneratedImage(url=extract_image_url(response), model=model)
