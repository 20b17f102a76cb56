# b64url/buffer/host.py
import base64
import binascii
from typing import Any, Optional, Union

from b64url.core.errors import DecodeError, UnknownEncodingError
from . import HostBuffer

# host encoding name -> Python codec name
TEXT_ENCODINGS = {
    "utf8": "utf-8",
    "utf-8": "utf-8",
    "ascii": "ascii",
    "latin1": "latin-1",
    "binary": "latin-1",
    "utf16le": "utf-16-le",
    "utf-16le": "utf-16-le",
    "ucs2": "utf-16-le",
    "ucs-2": "utf-16-le",
}

DEFAULT_ENCODING = "utf8"


def _normalize(encoding: Optional[str]) -> str:
    return (encoding or DEFAULT_ENCODING).lower()


class BytesHost(HostBuffer):
    """
    Node-Buffer-like host over plain Python bytes.
    Knows utf8, ascii, latin1/binary, utf16le/ucs2, hex and base64, but not base64url.
    """

    def from_(
        self,
        value: Any,
        encoding_or_offset: Optional[Union[str, int]] = None,
        length: Optional[int] = None,
    ) -> bytes:
        if isinstance(encoding_or_offset, int) and not isinstance(encoding_or_offset, bool):
            view = memoryview(value).cast("B")
            end = None if length is None else encoding_or_offset + length
            return view[encoding_or_offset:end].tobytes()

        if isinstance(value, str):
            return self._decode_text(value, _normalize(encoding_or_offset))

        # bytes-like or iterable of ints; values outside 0..255 raise ValueError
        return bytes(value)

    def to_string(self, buf: Any, encoding: Optional[str] = None) -> str:
        raw = bytes(buf)
        name = _normalize(encoding)

        if name == "hex":
            return raw.hex()
        if name == "base64":
            return base64.b64encode(raw).decode("ascii")
        if name in TEXT_ENCODINGS:
            return raw.decode(TEXT_ENCODINGS[name], errors="replace")
        raise UnknownEncodingError(f"Unknown encoding: {encoding}")

    def _decode_text(self, value: str, name: str) -> bytes:
        if name == "hex":
            try:
                return bytes.fromhex(value)
            except ValueError as e:
                raise DecodeError(f"Invalid hex string: {e}") from e
        if name == "base64":
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise DecodeError(f"Invalid base64 string: {e}") from e
        if name in TEXT_ENCODINGS:
            return value.encode(TEXT_ENCODINGS[name])
        raise UnknownEncodingError(f"Unknown encoding: {name}")
