"""Shared test fixtures and factories."""

import base64
import json
from typing import Any

import pytest

from nagoyabae.config import NagoyaConfig
from nagoyabae.images import codec
from nagoyabae.images.types import EncodedImage
from nagoyabae.llm.base import ProviderAdapter
from nagoyabae.llm.registry import AdapterRegistry
from nagoyabae.llm.types import (
    AnalysisRequest,
    GeneratedImage,
    RawPayload,
    StructuredPayload,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR-fake-image-bytes"
PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")

ANALYSIS = {
    "score": 88,
    "title": "Miso-katsu level impact!",
    "comment": "Gold everywhere, that's proper Nagoya dagane.",
    "vibe_tags": ["#brown-is-justice", "#too-much", "#big-logo"],
}
ANALYSIS_JSON = json.dumps(ANALYSIS)


# =============================================================================
# Image Fixtures
# =============================================================================


@pytest.fixture
def png_data_uri() -> str:
    return PNG_DATA_URI


@pytest.fixture
def png_image() -> EncodedImage:
    return codec.decode(PNG_DATA_URI)


# =============================================================================
# Scripted Adapter
# =============================================================================


class ScriptedAdapter(ProviderAdapter):
    """Adapter that replays scripted results instead of calling a provider.

    Each script entry is either a value to return or an exception to raise.
    Generation scripts are keyed by model name.
    """

    def __init__(
        self,
        name: str,
        *,
        api_key: str | None = "test-key",
        score: list[Any] | None = None,
        describe: list[Any] | None = None,
        images: dict[str, list[Any]] | None = None,
    ):
        super().__init__(api_key)
        self._name = name
        self._score_script = list(score or [])
        self._describe_script = list(describe or [])
        self._image_script = {model: list(items) for model, items in (images or {}).items()}
        self.calls: list[tuple[str, str | None]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_model(self) -> str:
        return f"{self._name}-default"

    def _create_client(self, api_key: str) -> Any:
        raise AssertionError("scripted adapters never create clients")

    @staticmethod
    def _next(script: list[Any]) -> Any:
        item = script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def score(
        self, request: AnalysisRequest, *, model: str | None = None
    ) -> RawPayload:
        self._require_credential()
        self.calls.append(("score", model))
        return self._next(self._score_script)

    async def describe(self, image: EncodedImage, *, model: str | None = None) -> str:
        self._require_credential()
        self.calls.append(("describe", model))
        return self._next(self._describe_script)

    async def generate_image(
        self, prompt: str, model_name: str | None = None
    ) -> GeneratedImage:
        self._require_credential()
        self.calls.append(("generate_image", model_name))
        result = self._next(self._image_script[model_name])
        if isinstance(result, str):
            return GeneratedImage(url=result, model=model_name or "")
        return result


def make_registry(*adapters: ProviderAdapter) -> AdapterRegistry:
    registry = AdapterRegistry()
    for adapter in adapters:
        registry.register(adapter)
    # Families not under test still need an entry
    for name in ("openai", "anthropic", "gemini"):
        if not registry.has(name):
            registry.register(ScriptedAdapter(name))
    return registry


@pytest.fixture
def structured_analysis() -> StructuredPayload:
    return StructuredPayload(dict(ANALYSIS))


@pytest.fixture
def dev_config() -> NagoyaConfig:
    return NagoyaConfig(environment="development")


@pytest.fixture
def prod_config() -> NagoyaConfig:
    return NagoyaConfig(environment="production")
