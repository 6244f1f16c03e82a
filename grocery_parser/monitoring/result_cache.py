"""
Bounded in-process cache of parse results keyed by URL.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..models.recipe import RecipeParsingResult

logger = logging.getLogger(__name__)


class ResultCache:
    """
    URL -> RecipeParsingResult map with batch eviction.

    Reads go straight to the dict. Writes take the lock, and when the map is
    full the oldest evict_batch entries are removed before the new one goes in.
    Failures are cached as well so known-bad URLs are not reprocessed.
    """

    def __init__(self, capacity: int = 50, evict_batch: int = 10):
        self.capacity = capacity
        self.evict_batch = evict_batch
        self._entries: Dict[str, RecipeParsingResult] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Optional[RecipeParsingResult]:
        return self._entries.get(url)

    def put(self, url: str, result: RecipeParsingResult):
        with self._lock:
            if url in self._entries:
                del self._entries[url]
            elif len(self._entries) >= self.capacity:
                evicted = list(self._entries)[:self.evict_batch]
                for key in evicted:
                    del self._entries[key]
                logger.debug(f"Result cache full, evicted {len(evicted)} oldest entries")
            self._entries[url] = result

    def clear(self):
        with self._lock:
            self._entries.clear()
        logger.debug("Result cache cleared")

    def keys(self) -> List[str]:
        """URLs from oldest to newest"""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: str) -> bool:
        return url in self._entries
