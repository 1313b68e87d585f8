"""Data URI encoding and decoding for uploaded images."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from collections.abc import Collection
from pathlib import Path

from nagoyabae.images.types import EncodedImage
from nagoyabae.llm.errors import MalformedInputError

DATA_URI_PREFIX = "data:"
DEFAULT_MIME_TYPE = "image/jpeg"


def _render(mime_type: str, payload: str) -> str:
    return f"{DATA_URI_PREFIX}{mime_type};base64,{payload}"


def decode(source_uri: str) -> EncodedImage:
    """Split a base64 data URI into MIME type and payload.

    Only ``data:[<mime>];base64,<payload>`` is accepted. A missing MIME type
    falls back to ``image/jpeg``. The returned ``source_uri`` is always
    rendered from the stored MIME type and payload, so it equals the input
    for canonical URIs.

    Raises:
        MalformedInputError: If the string is not a base64 data URI, carries
            MIME parameters, or has an invalid payload.
    """
    if not isinstance(source_uri, str) or not source_uri.startswith(DATA_URI_PREFIX):
        raise MalformedInputError("image is not a data URI")

    header, separator, payload = source_uri[len(DATA_URI_PREFIX) :].partition(",")
    if not separator:
        raise MalformedInputError("data URI is missing the ',' separator")

    segments = header.split(";")
    if segments[-1] != "base64":
        raise MalformedInputError("data URI is not base64 encoded")
    if len(segments) > 2:
        raise MalformedInputError("data URI MIME parameters are not supported")

    if not payload:
        raise MalformedInputError("data URI has an empty payload")
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"data URI payload is not valid base64: {e}") from e

    declared = segments[0] if len(segments) == 2 else ""
    mime_type = declared if "/" in declared else DEFAULT_MIME_TYPE
    return EncodedImage(
        mime_type=mime_type,
        base64_payload=payload,
        source_uri=_render(mime_type, payload),
    )


def encode(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> EncodedImage:
    """Build an EncodedImage from raw bytes."""
    payload = base64.b64encode(data).decode("ascii")
    return EncodedImage(
        mime_type=mime_type,
        base64_payload=payload,
        source_uri=_render(mime_type, payload),
    )


def from_path(path: Path) -> EncodedImage:
    """Read a local image file, guessing its MIME type from the suffix."""
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = DEFAULT_MIME_TYPE
    return encode(path.read_bytes(), mime_type)


def coerce_mime_type(mime_type: str, allowed: Collection[str]) -> str:
    """Return ``mime_type`` if a provider accepts it, else ``image/jpeg``."""
    normalized = mime_type.lower().strip()
    return normalized if normalized in allowed else DEFAULT_MIME_TYPE
