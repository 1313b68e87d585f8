"""Types for uploaded images."""

from __future__ import annotations

import base64
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """An uploaded image in transport form.

    ``source_uri`` is always a base64 data URI whose declared MIME type is
    ``mime_type`` and whose payload segment is ``base64_payload``.
    """

    mime_type: str
    base64_payload: str
    source_uri: str

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.base64_payload)
