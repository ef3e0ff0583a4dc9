"""
Request metrics for the chat assistant.
"""

import logging
import threading
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetrics:
    """Snapshot of the assistant's request metrics."""

    total_requests: int = 0
    cache_hits: int = 0
    average_response_time_ms: float = 0.0
    last_request_time: Optional[float] = None  # epoch seconds
    errors: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PerformanceMonitor:
    """
    Counts requests, cache hits and errors, and keeps a rolling average of
    the response time over the most recent non-cached requests.
    """

    def __init__(self, window: int = 100):
        self._window = window
        self._lock = threading.Lock()
        self._metrics = PerformanceMetrics()
        self._response_times: List[float] = []

    def track_request(self, start_time: float, end_time: float, cache_hit: bool = False):
        """
        Record a finished request.

        Args:
            start_time: Start timestamp in seconds
            end_time: End timestamp in seconds
            cache_hit: Whether the response came from the cache
        """
        response_time_ms = (end_time - start_time) * 1000

        with self._lock:
            self._metrics.total_requests += 1
            self._metrics.last_request_time = time.time()

            if cache_hit:
                self._metrics.cache_hits += 1
                return

            self._response_times.append(response_time_ms)
            if len(self._response_times) > self._window:
                self._response_times = self._response_times[-self._window:]

            self._metrics.average_response_time_ms = (
                sum(self._response_times) / len(self._response_times)
            )

    def track_error(self):
        with self._lock:
            self._metrics.errors += 1

    def get_metrics(self) -> PerformanceMetrics:
        """Return a copy of the current metrics."""
        with self._lock:
            return PerformanceMetrics(**asdict(self._metrics))

    def get_cache_hit_rate(self) -> float:
        """Cache hit rate as a percentage of all requests."""
        with self._lock:
            if self._metrics.total_requests == 0:
                return 0.0
            return (self._metrics.cache_hits / self._metrics.total_requests) * 100

    def reset(self):
        with self._lock:
            self._metrics = PerformanceMetrics()
            self._response_times = []

    def log_metrics(self):
        metrics = self.get_metrics()
        last_request = (
            datetime.fromtimestamp(metrics.last_request_time).strftime("%H:%M:%S")
            if metrics.last_request_time else "never"
        )
        logger.info(
            f"LLM performance: requests={metrics.total_requests}, "
            f"cache_hits={metrics.cache_hits} ({self.get_cache_hit_rate():.2f}%), "
            f"avg_response={metrics.average_response_time_ms:.2f}ms, "
            f"errors={metrics.errors}, last_request={last_request}"
        )


# Singleton instance
_performance_monitor: Optional[PerformanceMonitor] = None


def get_performance_monitor() -> PerformanceMonitor:
    """
    Get or create the performance monitor singleton.

    Returns:
        PerformanceMonitor instance
    """
    global _performance_monitor

    if _performance_monitor is None:
        _performance_monitor = PerformanceMonitor()

    return _performance_monitor
