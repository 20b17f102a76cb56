# b64url/buffer/registry.py
"""
Process-wide access to a base64url-capable buffer.

Prefer building Base64URLBuffer(host) and passing it where it is needed. install()
exists for consumers that expect ambient access: it is meant to be called once at
startup and is never torn down. It also registers a "base64url" Python codec so
codecs.encode(data, "base64url") / codecs.decode(text, "base64url") work.
"""

import codecs
import threading
from typing import Optional, Tuple

from b64url.core.codec import decode, encode
from b64url.core.logging import get_logger
from . import HostBuffer
from .host import BytesHost
from .shim import BASE64URL, Base64URLBuffer

logger = get_logger(__name__)

_lock = threading.Lock()
_installed: Optional[Base64URLBuffer] = None
_codec_registered = False


def _codec_encode(data, errors: str = "strict") -> Tuple[bytes, int]:
    return encode(bytes(data)).encode("ascii"), len(data)


def _codec_decode(data, errors: str = "strict") -> Tuple[bytes, int]:
    if isinstance(data, str):
        text = data
    else:
        text = bytes(data).decode("ascii")
    return decode(text, strict=(errors == "strict")), len(data)


def _search(name: str) -> Optional[codecs.CodecInfo]:
    if name.replace("-", "_") != BASE64URL:
        return None
    return codecs.CodecInfo(
        name=BASE64URL,
        encode=_codec_encode,
        decode=_codec_decode,
        _is_text_encoding=False,
    )


def install(host: Optional[HostBuffer] = None) -> Base64URLBuffer:
    """
    Install the process-wide base64url buffer (first call wins) and register the codec.
    Later calls return the already installed adapter; a different `host` is ignored.
    """
    global _installed, _codec_registered
    with _lock:
        if _installed is not None:
            if host is not None and host is not _installed.host:
                logger.warning("base64url buffer already installed; ignoring new host %r", host)
            return _installed

        _installed = Base64URLBuffer(host or BytesHost())
        if not _codec_registered:
            codecs.register(_search)
            _codec_registered = True
        logger.info("Installed base64url buffer over %s", type(_installed.host).__name__)
        return _installed


def get_buffer() -> Base64URLBuffer:
    """Return the installed adapter. Raises RuntimeError if install() was never called."""
    if _installed is None:
        raise RuntimeError("base64url buffer not installed; call b64url.buffer.install() first")
    return _installed
