# b64url/core/canon.py
import json
from typing import Any

import jcs


def compact_json(obj: Any) -> bytes:
    """
    Serialize the way JSON.stringify does: no whitespace, keys in insertion order,
    non-ASCII kept as UTF-8. NaN and Infinity are rejected instead of emitted.
    """
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    return text.encode("utf-8")


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Stable across producers, so suitable for hashing or signing.
    """
    return jcs.canonicalize(obj)


def canonical_json_str(obj: Any) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_json(obj).decode("utf-8")
