"""Uploaded image handling."""

from nagoyabae.images.codec import coerce_mime_type, decode, encode, from_path
from nagoyabae.images.types import EncodedImage

__all__ = [
    "EncodedImage",
    "coerce_mime_type",
    "decode",
    "encode",
    "from_path",
]
