"""Provider adapter registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nagoyabae.llm.anthropic import AnthropicAdapter
from nagoyabae.llm.gemini import GeminiAdapter
from nagoyabae.llm.models import SCORING_MODELS
from nagoyabae.llm.openai import OpenAIAdapter
from nagoyabae.llm.types import GeneratorId, ProviderId

if TYPE_CHECKING:
    from nagoyabae.config import NagoyaConfig
    from nagoyabae.llm.base import ProviderAdapter

# Scoring provider id -> adapter family
SCORING_FAMILIES: dict[ProviderId, str] = {
    ProviderId.OPENAI: "openai",
    ProviderId.CLAUDE_HAIKU: "anthropic",
    ProviderId.CLAUDE_SONNET: "anthropic",
    ProviderId.GEMINI: "gemini",
}

GENERATION_FAMILIES: dict[GeneratorId, str] = {
    GeneratorId.OPENAI: "openai",
    GeneratorId.GEMINI: "gemini",
}

DESCRIBE_FAMILY = "anthropic"


class AdapterRegistry:
    """Registry of adapters keyed by family, plus scoring model selection."""

    def __init__(self, scoring_models: dict[ProviderId, str] | None = None) -> None:
        self._adapters: dict[str, ProviderAdapter] = {}
        self._scoring_models = dict(SCORING_MODELS)
        if scoring_models:
            self._scoring_models.update(scoring_models)

    def register(self, adapter: ProviderAdapter) -> None:
        """Register an adapter instance under its family name."""
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> ProviderAdapter:
        """Get an adapter by family name.

        Raises:
            KeyError: If adapter not found.
        """
        if name not in self._adapters:
            raise KeyError(f"Adapter '{name}' not registered")
        return self._adapters[name]

    def has(self, name: str) -> bool:
        return name in self._adapters

    def for_scoring(self, provider_id: ProviderId) -> tuple[ProviderAdapter, str]:
        """Adapter and model to score with for a provider id."""
        return self.get(SCORING_FAMILIES[provider_id]), self._scoring_models[provider_id]

    def for_generation(self, generator: GeneratorId) -> ProviderAdapter:
        return self.get(GENERATION_FAMILIES[generator])

    @property
    def describer(self) -> ProviderAdapter:
        """The fixed adapter used for the describe step."""
        return self.get(DESCRIBE_FAMILY)


def create_registry(config: NagoyaConfig) -> AdapterRegistry:
    """Create a registry with all three adapter families.

    Missing API keys are allowed here; the affected adapter reports
    MissingCredential when it is actually used.
    """
    registry = AdapterRegistry(
        scoring_models={
            provider_id: config.scoring.model_for(provider_id)
            for provider_id in ProviderId
        }
    )
    registry.register(
        OpenAIAdapter(
            api_key=config.openai.secret(),
            max_tokens=config.scoring.max_tokens,
            image_size=config.generation.image_size,
            image_quality=config.generation.image_quality,
        )
    )
    registry.register(
        AnthropicAdapter(
            api_key=config.anthropic.secret(),
            max_tokens=config.scoring.max_tokens,
        )
    )
    registry.register(GeminiAdapter(api_key=config.gemini.secret()))
    return registry
