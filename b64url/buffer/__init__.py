"""
Host byte-buffer interface and the base64url-aware adapter around it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union


class HostBuffer(ABC):
    """
    Capability interface of a host byte-buffer type: build bytes from encoded
    input and render bytes back as encoded text.
    """

    @abstractmethod
    def from_(
        self,
        value: Any,
        encoding_or_offset: Optional[Union[str, int]] = None,
        length: Optional[int] = None,
    ) -> bytes:
        pass

    @abstractmethod
    def to_string(self, buf: Any, encoding: Optional[str] = None) -> str:
        pass


from .host import BytesHost
from .shim import Base64URLBuffer
from .registry import get_buffer, install

__all__ = ["HostBuffer", "BytesHost", "Base64URLBuffer", "get_buffer", "install"]
