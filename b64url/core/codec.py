# b64url/core/codec.py
"""
Base64URL codec (RFC 4648 §5, no padding).

Alphabet is A-Z a-z 0-9 - _ and output never carries '=' padding, so the
result can go straight into URLs, file names and JWT segments.
"""

import base64
import binascii
import json
import re
from typing import Any, Callable, Iterator, Optional, TypeVar, Union, overload

from b64url.core.canon import canonical_json, compact_json
from b64url.core.errors import (
    DecodeError,
    ParseError,
    SerializationError,
    TextDecodeError,
    TypeMismatchError,
)

T = TypeVar("T")

BytesLike = Union[bytes, bytearray, memoryview]

CHUNK_SIZE = 8192

_NOT_URLSAFE = re.compile(r"[^A-Za-z0-9_-]")
_NOT_BASE64_ANY = re.compile(r"[^A-Za-z0-9+/_-]")


def _aligned_chunks(view: memoryview, chunk_size: int) -> Iterator[bytes]:
    """
    Yield consecutive pieces of `view`, each a multiple of 3 bytes except the last.
    Leftover bytes of a chunk are carried into the next one so no piece gets padded early.
    """
    carry = b""
    for start in range(0, len(view), chunk_size):
        block = carry + view[start:start + chunk_size].tobytes()
        cut = len(block) - len(block) % 3
        if cut:
            yield block[:cut]
        carry = block[cut:]
    if carry:
        yield carry


def encode(data: Union[str, BytesLike], *, chunk_size: int = CHUNK_SIZE) -> str:
    """Encode text (as UTF-8) or bytes to Base64URL without padding."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeMismatchError(
            f"encode() expects str or bytes-like input, got {type(data).__name__}"
        )

    view = memoryview(data)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    view = view.cast("B")
    pieces = [
        base64.urlsafe_b64encode(piece).decode("ascii")
        for piece in _aligned_chunks(view, chunk_size)
    ]
    return "".join(pieces).rstrip("=")


def _strip_padding(text: str) -> str:
    stripped = text.rstrip("=")
    padding = len(text) - len(stripped)
    if padding and (padding > 2 or len(text) % 4):
        raise DecodeError(f"Incorrect padding: {padding} '=' on input of length {len(text)}")
    return stripped


def decode(text: str, *, strict: bool = True) -> bytes:
    """
    Decode Base64URL text back to bytes.

    Trailing '=' padding is accepted when it is correct. In strict mode any other
    character outside the URL-safe alphabet raises DecodeError. With strict=False
    the standard '+' and '/' are accepted too and any other character is dropped.
    """
    if not isinstance(text, str):
        raise TypeMismatchError(f"decode() expects str input, got {type(text).__name__}")

    if strict:
        body = _strip_padding(text)
        bad = _NOT_URLSAFE.search(body)
        if bad:
            raise DecodeError(f"Invalid character {bad.group()!r} at index {bad.start()}")
    else:
        body = _NOT_BASE64_ANY.sub("", text)

    if len(body) % 4 == 1:
        raise DecodeError(f"Invalid Base64URL length {len(body)}: one character past a full group")

    body = body.replace("-", "+").replace("_", "/")
    body += "=" * ((4 - len(body) % 4) % 4)

    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise DecodeError(str(e)) from e


def decode_to_string(text: str, *, strict: bool = True, errors: str = "strict") -> str:
    """
    Decode Base64URL text to a UTF-8 string.
    Invalid UTF-8 raises TextDecodeError unless a lossy `errors` handler is given.
    """
    raw = decode(text, strict=strict)
    try:
        return raw.decode("utf-8", errors)
    except UnicodeDecodeError as e:
        raise TextDecodeError(f"Decoded bytes are not valid UTF-8: {e.reason} at byte {e.start}") from e


def encode_json(value: Any, *, canonical: bool = False) -> str:
    """Serialize `value` to JSON and encode it. canonical=True uses RFC 8785 (JCS)."""
    try:
        payload = canonical_json(value) if canonical else compact_json(value)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"Value is not JSON serializable: {e}") from e
    return encode(payload)


@overload
def decode_json(text: str, validator: None = None, *, strict: bool = True) -> Any: ...


@overload
def decode_json(text: str, validator: Callable[[Any], T], *, strict: bool = True) -> T: ...


def decode_json(text: str, validator: Optional[Callable[[Any], T]] = None, *, strict: bool = True) -> Any:
    """
    Decode Base64URL text and parse it as JSON.

    The parsed value is returned unchecked. Pass `validator` to check or convert it;
    whatever the validator returns is returned, and anything it raises propagates.
    """
    decoded = decode_to_string(text, strict=strict)
    try:
        parsed = json.loads(decoded)
    except json.JSONDecodeError as e:
        raise ParseError(f"Decoded text is not valid JSON: {e.msg} (line {e.lineno} column {e.colno})") from e

    if validator is not None:
        return validator(parsed)
    return parsed
