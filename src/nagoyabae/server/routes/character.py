"""Mascot character generation route."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nagoyabae.llm.types import GeneratorId
from nagoyabae.server.errors import (
    INVALID_PROVIDER_MESSAGE,
    MISSING_INPUT_MESSAGE,
    error_response,
)

router = APIRouter()


class GenerateCharacterBody(BaseModel):
    image: str | None = None
    generator: str | None = None
    model: str | None = None


@router.post("/generate-character", response_model=None)
async def generate_character(
    body: GenerateCharacterBody, request: Request
) -> dict[str, str] | JSONResponse:
    """Describe an uploaded image and turn it into a mascot."""
    config = request.app.state.config
    if not body.image:
        return error_response(MISSING_INPUT_MESSAGE, status_code=400, config=config)

    try:
        generator = GeneratorId(
            body.generator or config.generation.default_generator.value
        )
    except ValueError:
        return error_response(
            INVALID_PROVIDER_MESSAGE,
            status_code=400,
            config=config,
            details=f"unknown generator: {body.generator}",
        )

    result = await request.app.state.orchestrator.generate_character_from_data_uri(
        body.image, generator, body.model or None
    )
    return result.to_response()
