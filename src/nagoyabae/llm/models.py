"""Model names known to each provider family."""

from nagoyabae.llm.types import GeneratorId, ProviderId

OPENAI_SCORING_MODEL = "gpt-4o"
CLAUDE_HAIKU_MODEL = "claude-haiku-4-5-20251001"
CLAUDE_SONNET_MODEL = "claude-sonnet-4-5-20250929"
GEMINI_SCORING_MODEL = "gemini-2.5-flash"

SCORING_MODELS: dict[ProviderId, str] = {
    ProviderId.OPENAI: OPENAI_SCORING_MODEL,
    ProviderId.CLAUDE_HAIKU: CLAUDE_HAIKU_MODEL,
    ProviderId.CLAUDE_SONNET: CLAUDE_SONNET_MODEL,
    ProviderId.GEMINI: GEMINI_SCORING_MODEL,
}

# The describe step always runs on the small Claude model
DESCRIBE_MODEL = CLAUDE_HAIKU_MODEL

# Image generation models, primary first. Order matters: the second entry is
# the same-family substitute for the first and vice versa.
GEMINI_IMAGE_MODELS: tuple[str, ...] = (
    "gemini-2.5-flash-image",
    "gemini-3-pro-image-preview",
)
OPENAI_IMAGE_MODELS: tuple[str, ...] = (
    "gpt-image-1",
    "gpt-image-1-mini",
)

IMAGE_MODELS: dict[GeneratorId, tuple[str, ...]] = {
    GeneratorId.GEMINI: GEMINI_IMAGE_MODELS,
    GeneratorId.OPENAI: OPENAI_IMAGE_MODELS,
}


def default_image_model(generator: GeneratorId) -> str:
    return IMAGE_MODELS[generator][0]


def alternate_image_model(generator: GeneratorId, model: str) -> str | None:
    """Same-family substitute for ``model``, or None if it is unknown."""
    models = IMAGE_MODELS[generator]
    if model not in models:
        return None
    for candidate in models:
        if candidate != model:
            return candidate
    return None
