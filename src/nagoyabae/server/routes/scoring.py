"""Photo scoring route."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, Field

from nagoyabae.llm.types import ProviderId
from nagoyabae.server.errors import (
    INVALID_PROVIDER_MESSAGE,
    MISSING_INPUT_MESSAGE,
    error_response,
)

router = APIRouter()


class AnalyzeBody(BaseModel):
    image: str | None = None
    provider_id: str | None = Field(
        default=None, validation_alias=AliasChoices("providerId", "provider")
    )


@router.post("/analyze-nagoya", response_model=None)
async def analyze_nagoya(
    body: AnalyzeBody, request: Request
) -> dict[str, Any] | JSONResponse:
    """Score an uploaded image with the selected provider."""
    config = request.app.state.config
    if not body.image:
        return error_response(MISSING_INPUT_MESSAGE, status_code=400, config=config)

    try:
        provider_id = ProviderId(body.provider_id or ProviderId.OPENAI.value)
    except ValueError:
        return error_response(
            INVALID_PROVIDER_MESSAGE,
            status_code=400,
            config=config,
            details=f"unknown provider: {body.provider_id}",
        )

    result = await request.app.state.orchestrator.analyze_data_uri(
        body.image, provider_id
    )
    return result.to_response()
