# src/flowschema/core/canonical.py
"""
Canonical JSON serialization for deterministic output.

Serializes per RFC 8785/JCS (rfc8785 package): sorted keys, no whitespace,
fixed number formatting. Two runs over the same payload produce the same
bytes, which is what callers diff and hash.

IMPORTANT: NaN and Infinity are strictly REJECTED, not silently converted.
"""

from __future__ import annotations

import hashlib
import math
from typing import Any

import rfc8785

# Version string logged with schema hashes so they can be re-verified
CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize_for_canonical(data: Any) -> Any:
    """Recursively convert tuples to lists and reject non-finite floats.

    Raises:
        ValueError: If data contains NaN or Infinity
    """
    if isinstance(data, dict):
        return {k: _normalize_for_canonical(v) for k, v in data.items()}
    if isinstance(data, list | tuple):
        return [_normalize_for_canonical(v) for v in data]
    if isinstance(data, float) and (math.isnan(data) or math.isinf(data)):
        raise ValueError(f"Cannot canonicalize non-finite float: {data}. Use None for missing values, not NaN.")
    return data


def canonical_json(obj: Any) -> str:
    """Produce canonical JSON.

    Args:
        obj: Data structure to serialize (decoded JSON plus tuples)

    Returns:
        Canonical JSON string (no whitespace, sorted keys)

    Raises:
        ValueError: If data contains NaN, Infinity, or other non-finite values
        TypeError: If data contains types that cannot be serialized
    """
    normalized = _normalize_for_canonical(obj)
    result: bytes = rfc8785.dumps(normalized)
    return result.decode("utf-8")


def stable_hash(obj: Any, version: str = CANONICAL_VERSION) -> str:
    """Compute stable hash of object.

    Args:
        obj: Data structure to hash
        version: Hash algorithm version (logged alongside the digest)

    Returns:
        SHA-256 hex digest of canonical JSON
    """
    canonical = canonical_json(obj)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
