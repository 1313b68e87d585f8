"""Configuration models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from nagoyabae.llm.models import (
    CLAUDE_HAIKU_MODEL,
    CLAUDE_SONNET_MODEL,
    DESCRIBE_MODEL,
    GEMINI_IMAGE_MODELS,
    GEMINI_SCORING_MODEL,
    OPENAI_IMAGE_MODELS,
    OPENAI_SCORING_MODEL,
)
from nagoyabae.llm.types import GeneratorId, ProviderId


class ConfigError(Exception):
    """Configuration error."""

    pass


class ProviderConfig(BaseModel):
    """Provider-level configuration."""

    api_key: SecretStr | None = None

    def secret(self) -> str | None:
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None


class ScoringConfig(BaseModel):
    """Model used for each scoring provider id."""

    openai: str = OPENAI_SCORING_MODEL
    claude_haiku: str = CLAUDE_HAIKU_MODEL
    claude_sonnet: str = CLAUDE_SONNET_MODEL
    gemini: str = GEMINI_SCORING_MODEL
    max_tokens: int = 1000

    def model_for(self, provider_id: ProviderId) -> str:
        return getattr(self, provider_id.value.replace("-", "_"))


class GenerationConfig(BaseModel):
    """Character generation settings."""

    default_generator: GeneratorId = GeneratorId.OPENAI
    gemini_model: str = GEMINI_IMAGE_MODELS[0]
    openai_model: str = OPENAI_IMAGE_MODELS[0]
    image_size: str = "1024x1024"
    image_quality: Literal["low", "medium", "high", "auto"] = "high"
    describe_model: str = DESCRIBE_MODEL

    def default_model_for(self, generator: GeneratorId) -> str:
        if generator == GeneratorId.GEMINI:
            return self.gemini_model
        return self.openai_model


class ServerConfig(BaseModel):
    """Configuration for HTTP server."""

    host: str = "127.0.0.1"
    port: int = 8080


class NagoyaConfig(BaseModel):
    """Root configuration model."""

    environment: Literal["development", "production"] = "production"
    openai: ProviderConfig = Field(default_factory=ProviderConfig)
    anthropic: ProviderConfig = Field(default_factory=ProviderConfig)
    gemini: ProviderConfig = Field(default_factory=ProviderConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "dev":
                return "development"
            if value == "prod":
                return "production"
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == "development"
