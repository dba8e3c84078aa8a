"""Artifact cache for the export pipeline.

Snapshots are immutable values, so an artifact generated for a snapshot
fingerprint never goes stale. The only thing that can change an artifact
for the same snapshot is the generator behind a format key, which is why
entries are keyed by the registry revision of the format as well.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, NamedTuple


class ArtifactKey(NamedTuple):
    format_key: str
    revision: int
    fingerprint: str


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class ArtifactCache:
    """
    Least-recently-used map from (format, revision, fingerprint) to artifact text.

    Examples:
        >>> cache = ArtifactCache(max_size=8)
        >>> key = ArtifactKey("source-code", 1, "9a3f")
        >>> cache.put(key, "import React from 'react';")
        >>> cache.get(key)
        "import React from 'react';"
    """

    def __init__(self, max_size: int = 32) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._entries: OrderedDict[ArtifactKey, str] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    def get(self, key: ArtifactKey) -> str | None:
        artifact = self._entries.get(key)
        if artifact is None:
            self._stats.misses += 1
            return None

        self._entries.move_to_end(key)
        self._stats.hits += 1
        return artifact

    def put(self, key: ArtifactKey, artifact: str) -> None:
        self._entries[key] = artifact
        self._entries.move_to_end(key)

        if len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self._stats.evictions += 1

        self._stats.size = len(self._entries)

    def invalidate(self, format_key: str | None = None) -> int:
        """
        Drop cached artifacts for one format (or all of them).

        Returns:
            Number of entries dropped
        """
        doomed = [key for key in self._entries if format_key is None or key.format_key == format_key]
        for key in doomed:
            del self._entries[key]
        self._stats.size = len(self._entries)
        return len(doomed)

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """Membership check that does not touch LRU order or stats."""
        return key in self._entries
