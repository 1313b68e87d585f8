"""Provider adapters, response normalization and fallback.

Adapters are imported from their own modules (``nagoyabae.llm.openai`` etc.)
so that importing shared types does not pull in every SDK.
"""

from nagoyabae.llm.errors import (
    MalformedInputError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderError,
    QuotaExceededError,
    TerminalFailure,
    UnsupportedModelError,
)
from nagoyabae.llm.types import (
    AnalysisRequest,
    AnalysisResult,
    AttemptOutcome,
    Candidate,
    CharacterResult,
    Failure,
    FailureKind,
    GeneratedImage,
    GenerationRequest,
    GeneratorId,
    ProviderId,
    RawPayload,
    StructuredPayload,
    Success,
    TextPayload,
)

__all__ = [
    # Errors
    "MalformedInputError",
    "MalformedResponseError",
    "MissingCredentialError",
    "ProviderError",
    "QuotaExceededError",
    "TerminalFailure",
    "UnsupportedModelError",
    # Types
    "AnalysisRequest",
    "AnalysisResult",
    "AttemptOutcome",
    "Candidate",
    "CharacterResult",
    "Failure",
    "FailureKind",
    "GeneratedImage",
    "GenerationRequest",
    "GeneratorId",
    "ProviderId",
    "RawPayload",
    "StructuredPayload",
    "Success",
    "TextPayload",
]
