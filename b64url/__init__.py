# b64url/__init__.py
"""
b64url: URL-safe Base64 (no padding) codec for URLs, file names and JWT segments,
plus an adapter that teaches a host byte-buffer API the "base64url" encoding name.
"""

from b64url.core.codec import (
    CHUNK_SIZE,
    decode,
    decode_json,
    decode_to_string,
    encode,
    encode_json,
)
from b64url.core.errors import (
    Base64URLError,
    DecodeError,
    ParseError,
    SerializationError,
    TextDecodeError,
    TypeMismatchError,
    UnknownEncodingError,
)

__version__ = "0.1.0"

__all__ = [
    "CHUNK_SIZE",
    "encode",
    "decode",
    "decode_to_string",
    "encode_json",
    "decode_json",
    "Base64URLError",
    "DecodeError",
    "ParseError",
    "SerializationError",
    "TextDecodeError",
    "TypeMismatchError",
    "UnknownEncodingError",
]
