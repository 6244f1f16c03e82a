"""
Monitoring module for pipeline observability
"""

from .performance_stats import PerformanceStats, StatsSnapshot
from .result_cache import ResultCache
from .observability import configure_observability

__all__ = [
    'PerformanceStats',
    'StatsSnapshot',
    'ResultCache',
    'configure_observability'
]
