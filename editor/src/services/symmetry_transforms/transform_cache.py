"""Bounded memoization of lattice tilings.

Tilings are keyed by the full argument tuple. Only recently used tilings are
kept, since every drag of the grid handle produces a new key.
"""

import logging
from collections import OrderedDict
from typing import Optional

from constants import TRANSFORM_CACHE_SIZE
from models.transform import AffineTransformSet
from .catalog import get_symmetry_group
from .tiling import generate_tiling

logger = logging.getLogger(__name__)


class TransformCache:
    """LRU cache in front of ``generate_tiling``."""

    def __init__(self, maxsize: int = TRANSFORM_CACHE_SIZE):
        if maxsize < 1:
            raise ValueError("TransformCache needs room for at least one entry")
        self.maxsize = maxsize
        self._entries: "OrderedDict[tuple, AffineTransformSet]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, group_name: str, nx, ny, d, t, x, y) -> AffineTransformSet:
        """Return the tiling for these arguments, generating it on a miss.

        Raises:
            UnknownSymmetryError: ``group_name`` is not in the catalog
        """
        key = (group_name, nx, ny, d, t, x, y)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            return cached

        self.misses += 1
        spec = get_symmetry_group(group_name)
        result = generate_tiling(spec, nx, ny, d, t, x, y)
        self._entries[key] = result

        if len(self._entries) > self.maxsize:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted tiling %s", evicted)
        return result

    def peek(self, group_name: str, nx, ny, d, t, x, y) -> Optional[AffineTransformSet]:
        """Cached tiling without touching recency or counters."""
        return self._entries.get((group_name, nx, ny, d, t, x, y))

    def clear(self):
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries
