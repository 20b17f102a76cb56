# b64url/core/errors.py
"""
Exception types raised by the codec and the buffer shim.
Each one also subclasses the closest builtin so callers can catch either.
"""


class Base64URLError(Exception):
    """Base class for all b64url errors."""


class TypeMismatchError(Base64URLError, TypeError):
    """Value has the wrong type for the requested operation."""


class DecodeError(Base64URLError, ValueError):
    """Text is not a valid Base64URL encoding."""


class TextDecodeError(Base64URLError, ValueError):
    """Decoded bytes are not valid UTF-8."""


class SerializationError(Base64URLError, ValueError):
    """Value could not be serialized to JSON."""


class ParseError(Base64URLError, ValueError):
    """Decoded text is not valid JSON."""


class UnknownEncodingError(Base64URLError, LookupError):
    """Encoding name not supported by the host buffer."""
