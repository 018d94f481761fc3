"""
Deterministic hashing for run receipts.

Provides:
- hash64: SHA-256 canonical hash truncated to 64-bit int
- equality_fingerprint: hash64 of a set of EqualityPairs in sorted order

No use of Python's built-in hash() (salted per process for str).
"""

import hashlib
import json
from typing import Any, Iterable

from .types import EqualityPair


def hash64(obj: Any) -> int:
    """
    Deterministic 64-bit hash using SHA-256 on canonical JSON.

    - Canonical JSON serialization (sorted keys, no whitespace)
    - First 8 bytes of the digest, big-endian, unsigned

    Args:
        obj: Any JSON-serializable Python object

    Returns:
        64-bit integer hash (0 to 2^64-1)

    Examples:
        >>> hash64([1, 2, 3]) == hash64([1, 2, 3])
        True
        >>> hash64({"a": 1, "b": 2}) == hash64({"b": 2, "a": 1})
        True
    """
    canonical_json = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    sha = hashlib.sha256(canonical_json.encode("utf-8"))
    return int.from_bytes(sha.digest()[:8], byteorder="big", signed=False)


def equality_fingerprint(equalities: Iterable[EqualityPair]) -> int:
    """Order-independent hash of a set of equalities (0-indexed tuples)."""
    return hash64(sorted(list(eq.as_tuple()) for eq in equalities))
