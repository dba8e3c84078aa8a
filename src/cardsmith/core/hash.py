"""Fast hashing for non-cryptographic use cases.

xxhash for snapshot fingerprints and cache keys, SHA256 where a stable
cross-platform digest is needed.
"""

from typing import Protocol
from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys)
    SHA256 = "sha256"


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Fast non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Raises:
        ValueError: If algorithm is unknown
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    elif algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64 for speed)
        truncate: Optional length to truncate digest

    Returns:
        Hex digest string

    Examples:
        >>> len(hash_string("test"))
        16
    """
    digest = create_hasher(algorithm).digest(text.encode("utf-8"))
    if truncate:
        return digest[:truncate]
    return digest


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
]
