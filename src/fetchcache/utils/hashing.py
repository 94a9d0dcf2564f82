"""Canonical serialization and hashing for cache key generation."""

import hashlib
import json
from typing import Any


def canonical_json(value: Any) -> str:
    """Serialize a value to canonical JSON.

    Keys are sorted and separators are compact, so logically equal
    mappings produce the same string whatever their insertion order.
    Only JSON-shaped values are accepted.

    Args:
        value: Any JSON-serializable value.

    Returns:
        The canonical JSON string. ``None`` serializes as ``{}``.

    Raises:
        TypeError: If the value holds something JSON cannot represent.
    """
    if value is None:
        value = {}
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    return hashlib.sha256(canonical_json(value).encode()).hexdigest()[:16]
