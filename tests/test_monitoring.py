"""
Tests for the result cache and performance counters
"""

from grocery_parser.models.recipe import Recipe, RecipeParsingResult
from grocery_parser.monitoring.performance_stats import PerformanceStats
from grocery_parser.monitoring.result_cache import ResultCache


def _result(url: str, success: bool = True) -> RecipeParsingResult:
    return RecipeParsingResult(recipe=Recipe(url=url), success=success)


class TestResultCache:

    def test_batch_eviction(self):
        """A full cache drops its oldest batch before inserting"""
        cache = ResultCache(capacity=3, evict_batch=2)
        for url in ("a", "b", "c", "d"):
            cache.put(url, _result(url))
        assert cache.keys() == ["c", "d"]
        assert "a" not in cache
        assert cache.get("a") is None

    def test_reput_moves_to_newest(self):
        cache = ResultCache(capacity=3, evict_batch=2)
        cache.put("a", _result("a"))
        cache.put("b", _result("b"))
        cache.put("a", _result("a", success=False))
        assert cache.keys() == ["b", "a"]
        assert cache.get("a").success is False
        assert len(cache) == 2

    def test_clear(self):
        cache = ResultCache()
        cache.put("a", _result("a"))
        cache.clear()
        assert len(cache) == 0


class TestPerformanceStats:

    def test_every_outcome_counts_towards_total(self):
        stats = PerformanceStats()
        stats.record_cache_hit()
        stats.record_structured_data_success()
        stats.record_regex_success()
        stats.record_llm_success()
        stats.record_failure()
        snapshot = stats.snapshot()
        assert snapshot.total_requests == 5
        assert snapshot.cache_hits == 1
        assert snapshot.rate(snapshot.failures) == 0.2

    def test_snapshot_is_a_copy(self):
        stats = PerformanceStats()
        snapshot = stats.snapshot()
        stats.record_failure()
        assert snapshot.failures == 0
        assert stats.snapshot().failures == 1

    def test_to_dict_and_reset(self):
        stats = PerformanceStats()
        stats.record_llm_success()
        stats.record_llm_success()
        stats.record_failure()
        stats.record_cache_hit()
        data = stats.snapshot().to_dict()
        assert data["totalRequests"] == 4
        assert data["llmSuccess"] == 2
        assert data["rates"]["llmRate"] == 0.5
        assert data["rates"]["cacheHitRate"] == 0.25

        stats.reset()
        assert stats.snapshot().total_requests == 0
        assert stats.snapshot().to_dict()["rates"]["failureRate"] == 0.0
