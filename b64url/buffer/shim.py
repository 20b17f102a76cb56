# b64url/buffer/shim.py
from typing import Any, Optional, Union

from b64url.core.codec import decode, encode
from b64url.core.errors import TypeMismatchError
from . import HostBuffer

BASE64URL = "base64url"


class Base64URLBuffer(HostBuffer):
    """
    Wraps a host buffer so that the "base64url" encoding name goes through the codec.
    Every other call is forwarded to the host untouched; the host itself is never modified.
    """

    def __init__(self, host: HostBuffer):
        if host is None:
            raise ValueError("host buffer is required")
        self.host = host

    def from_(
        self,
        value: Any,
        encoding_or_offset: Optional[Union[str, int]] = None,
        length: Optional[int] = None,
    ) -> bytes:
        if isinstance(encoding_or_offset, str) and encoding_or_offset == BASE64URL:
            if not isinstance(value, str):
                raise TypeMismatchError(
                    'The "value" argument must be a string when encoding is "base64url"'
                )
            return self.host.from_(decode(value))

        if isinstance(encoding_or_offset, int):
            return self.host.from_(value, encoding_or_offset, length)
        return self.host.from_(value, encoding_or_offset)

    def to_string(self, buf: Any, encoding: Optional[str] = None) -> str:
        if encoding == BASE64URL:
            return encode(bytes(buf))
        return self.host.to_string(buf, encoding)
