"""Provider-agnostic request, result and outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt

if TYPE_CHECKING:
    from nagoyabae.images.types import EncodedImage


class ProviderId(str, Enum):
    """Providers selectable for scoring."""

    OPENAI = "openai"
    CLAUDE_HAIKU = "claude-haiku"
    CLAUDE_SONNET = "claude-sonnet"
    GEMINI = "gemini"


class GeneratorId(str, Enum):
    """Provider families capable of image generation."""

    GEMINI = "gemini"
    OPENAI = "openai"


class FailureKind(str, Enum):
    """Closed set of classified failure kinds."""

    MISSING_CREDENTIAL = "MissingCredential"
    QUOTA_EXCEEDED = "QuotaExceeded"
    UNSUPPORTED_MODEL = "UnsupportedModel"
    MALFORMED_RESPONSE = "MalformedResponse"
    MALFORMED_INPUT = "MalformedInput"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """One scoring attempt."""

    image: EncodedImage
    provider_id: ProviderId


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """One mascot generation attempt."""

    image: EncodedImage
    generator: GeneratorId = GeneratorId.OPENAI
    model_name: str | None = None


class AnalysisResult(BaseModel):
    """Normalized scoring result, identical regardless of provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Strict: numeric strings, floats and booleans are not scores
    score: StrictInt = Field(ge=0, le=100)
    title: str
    comment: str
    vibe_tags: tuple[str, str, str] = Field(
        validation_alias=AliasChoices("vibe_tags", "vibeTags")
    )

    def to_response(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "title": self.title,
            "comment": self.comment,
            "vibe_tags": list(self.vibe_tags),
        }


@dataclass(frozen=True, slots=True)
class CharacterResult:
    """Generated mascot image plus the description it was built from."""

    image_url: str
    description: str
    model_used: str

    def to_response(self) -> dict[str, str]:
        return {
            "characterUrl": self.image_url,
            "description": self.description,
            "modelUsed": self.model_used,
        }


@dataclass(frozen=True, slots=True)
class StructuredPayload:
    """Already-parsed object from a provider's native JSON mode."""

    value: Any


@dataclass(frozen=True, slots=True)
class TextPayload:
    """Free text that should contain a JSON object, possibly fenced."""

    value: str


RawPayload = StructuredPayload | TextPayload


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    """Image returned by a generation adapter."""

    url: str
    model: str


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Successful attempt."""

    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """Classified failed attempt."""

    kind: FailureKind
    message: str

    @property
    def is_transient(self) -> bool:
        return self.kind == FailureKind.QUOTA_EXCEEDED


AttemptOutcome = Success[Any] | Failure


@dataclass(frozen=True, slots=True)
class Candidate:
    """One (generator, model) entry of a generation fallback plan."""

    generator: GeneratorId
    model: str

    @property
    def label(self) -> str:
        family = "Gemini" if self.generator == GeneratorId.GEMINI else "OpenAI"
        return f"{family} {self.model}"


@dataclass
class AttemptRecord:
    """A candidate together with the outcome it produced."""

    candidate: Candidate
    outcome: AttemptOutcome
