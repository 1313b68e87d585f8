"""Turn raw provider payloads into validated result objects."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from nagoyabae.llm.types import (
    AttemptOutcome,
    Failure,
    FailureKind,
    RawPayload,
    StructuredPayload,
    Success,
    TextPayload,
)

# Opening fence with an optional language tag, e.g. ```json
_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*(?:\r?\n|$)")
# First line that is only a closing fence; any prose after it is dropped
_FENCE_CLOSE = re.compile(r"^```[ \t]*\r?$", re.MULTILINE)


def strip_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if present.

    Applying it to already unwrapped text returns the text unchanged.
    """
    text = text.strip()
    opener = _FENCE_OPEN.match(text)
    if opener is None:
        return text
    body = text[opener.end() :]
    closer = _FENCE_CLOSE.search(body)
    if closer is not None:
        body = body[: closer.start()]
    return body.strip()


def parse_json_text(text: str) -> Any:
    """Parse JSON from text that may be wrapped in a code fence.

    Raises:
        ValueError: If the text is not JSON.
    """
    body = strip_fences(text)
    if not body:
        raise ValueError("response text is empty")
    return json.loads(body)


def _summarize_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def normalize(payload: RawPayload, shape: type[BaseModel]) -> AttemptOutcome:
    """Validate a raw payload against the expected result shape.

    Only the payload variant is inspected, never the provider that produced it.
    """
    if isinstance(payload, StructuredPayload):
        value = payload.value
    elif isinstance(payload, TextPayload):
        try:
            value = parse_json_text(payload.value)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            return Failure(FailureKind.MALFORMED_RESPONSE, f"response is not JSON: {e}")
    else:
        return Failure(
            FailureKind.MALFORMED_RESPONSE,
            f"unexpected payload type {type(payload).__name__}",
        )

    if not isinstance(value, dict):
        return Failure(
            FailureKind.MALFORMED_RESPONSE,
            f"expected a JSON object, got {type(value).__name__}",
        )

    try:
        return Success(shape.model_validate(value))
    except ValidationError as e:
        return Failure(
            FailureKind.MALFORMED_RESPONSE,
            f"response does not match {shape.__name__}: {_summarize_validation_error(e)}",
        )
