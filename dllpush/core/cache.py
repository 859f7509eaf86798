"""
Single-slot result cache for dllpush traversals.

An autocomplete prompt asks for the same root on every keystroke. The
cache keeps the last traversal result so those repeated queries do not
re-walk the filesystem, while a query for any other root replaces it.
"""

import logging
import os
from typing import List, Optional

from cachetools import LRUCache

from ..config import TraversalOptions
from .traverser import PathLike, TraversalEngine

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Remembers the traversal result for the most recently requested root.

    The key is the root path alone: a second call for the same root is
    served from the slot even if its options differ. There is no expiry on
    filesystem change and no locking; the owner is expected to be a single
    interactive session issuing one request at a time.

    Example:
        cache = ResultCache()
        cache.get_or_compute(cwd, TraversalOptions(base_name_only=True))
    """

    def __init__(self, engine: Optional[TraversalEngine] = None):
        """
        Initialize the cache.

        Args:
            engine: Engine used on a miss (defaults to a TraversalEngine)
        """
        self.engine = engine or TraversalEngine()
        # One entry: storing a new root evicts the previous one
        self._slot = LRUCache(maxsize=1)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    @property
    def last_root_path(self) -> Optional[str]:
        """Root path currently held in the slot, if any."""
        return next(iter(self._slot), None)

    def get_or_compute(self, root_path: PathLike,
                       options: Optional[TraversalOptions] = None) -> List[str]:
        """
        Return the paths under ``root_path``, walking only on a miss.

        Args:
            root_path: Directory to walk
            options: Options used if a walk is needed

        Returns:
            A copy of the cached (or freshly computed) path list
        """
        key = os.fspath(root_path)

        cached = self._slot.get(key)
        if cached is not None:
            self.cache_hits += 1
            return list(cached)

        self.cache_misses += 1
        if self._slot:
            logger.debug("Evicting cached traversal of %s", self.last_root_path)

        result = self.engine.traverse(key, options)
        self._slot[key] = result
        return list(result)

    def __contains__(self, root_path: PathLike) -> bool:
        return os.fspath(root_path) in self._slot

    def __len__(self) -> int:
        return len(self._slot)
