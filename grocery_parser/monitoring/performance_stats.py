"""
Counters of which strategy resolved each parse request.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class StatsSnapshot:
    """Point-in-time copy of the counters"""
    total_requests: int = 0
    cache_hits: int = 0
    structured_data_success: int = 0
    regex_success: int = 0
    llm_success: int = 0
    failures: int = 0

    def rate(self, count: int) -> float:
        return count / self.total_requests if self.total_requests > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "totalRequests": self.total_requests,
            "cacheHits": self.cache_hits,
            "structuredDataSuccess": self.structured_data_success,
            "regexSuccess": self.regex_success,
            "llmSuccess": self.llm_success,
            "failures": self.failures,
            "rates": {
                "cacheHitRate": self.rate(self.cache_hits),
                "structuredDataRate": self.rate(self.structured_data_success),
                "regexRate": self.rate(self.regex_success),
                "llmRate": self.rate(self.llm_success),
                "failureRate": self.rate(self.failures),
            }
        }


class PerformanceStats:
    """
    Request outcome counters.

    Every parse call records exactly one outcome, and each outcome also
    counts towards total_requests.
    """

    def __init__(self):
        self._counts = StatsSnapshot()
        self._lock = threading.Lock()

    def _record(self, attr: str):
        with self._lock:
            self._counts.total_requests += 1
            setattr(self._counts, attr, getattr(self._counts, attr) + 1)

    def record_cache_hit(self):
        self._record("cache_hits")

    def record_structured_data_success(self):
        self._record("structured_data_success")

    def record_regex_success(self):
        self._record("regex_success")

    def record_llm_success(self):
        self._record("llm_success")

    def record_failure(self):
        self._record("failures")

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(**vars(self._counts))

    def reset(self):
        with self._lock:
            self._counts = StatsSnapshot()
