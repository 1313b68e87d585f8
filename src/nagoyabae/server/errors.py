"""Error responses for the HTTP layer.

Production responses only carry a stable message per failure kind. Raw
provider text is attached as ``details`` in development.
"""

from fastapi.responses import JSONResponse

from nagoyabae.config import NagoyaConfig
from nagoyabae.llm.types import FailureKind

MISSING_INPUT_MESSAGE = "No image was sent"
INVALID_PROVIDER_MESSAGE = "Invalid provider"
INVALID_REQUEST_MESSAGE = "Invalid request body"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"

FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.MISSING_CREDENTIAL: "The AI provider is not configured",
    FailureKind.QUOTA_EXCEEDED: "The AI provider is busy, please try again later",
    FailureKind.UNSUPPORTED_MODEL: "The requested model is not supported",
    FailureKind.MALFORMED_RESPONSE: "The AI returned an unexpected response",
    FailureKind.MALFORMED_INPUT: "The image could not be read",
    FailureKind.UNKNOWN: "The AI request failed",
}

FAILURE_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.MISSING_CREDENTIAL: 500,
    FailureKind.QUOTA_EXCEEDED: 429,
    FailureKind.UNSUPPORTED_MODEL: 400,
    FailureKind.MALFORMED_RESPONSE: 502,
    FailureKind.MALFORMED_INPUT: 400,
    FailureKind.UNKNOWN: 500,
}


def error_response(
    message: str,
    *,
    status_code: int,
    config: NagoyaConfig,
    details: str | None = None,
) -> JSONResponse:
    content: dict[str, str] = {"error": message}
    if details and config.is_development:
        content["details"] = details
    return JSONResponse(content, status_code=status_code)


def failure_response(
    kind: FailureKind, details: str, *, config: NagoyaConfig
) -> JSONResponse:
    return error_response(
        FAILURE_MESSAGES[kind],
        status_code=FAILURE_STATUS_CODES[kind],
        config=config,
        details=details,
    )
