"""
Performance Monitoring

Tracks request counts, error counts and rolling execution times for every
service operation. In production the aggregate is logged at most once per
stats interval.
"""

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

MAX_SAMPLES = 100


class PerformanceMonitor:
    """
    In-process request metrics.

    Usage:
        monitor = PerformanceMonitor()
        with monitor.track("validate_mapping"):
            ...
        monitor.snapshot()
    """

    def __init__(
        self,
        log_stats: bool = False,
        stats_interval: float = 300.0,
        max_samples: int = MAX_SAMPLES,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._log_stats = log_stats
        self._stats_interval = stats_interval
        self._start_time = clock()
        self._last_stats_log = self._start_time

        self.total_requests = 0
        self.error_count = 0
        self._request_counts: dict[str, int] = defaultdict(int)
        self._execution_times: dict[str, deque[float]] = defaultdict(
            lambda: deque(maxlen=max_samples)
        )

    @property
    def uptime_seconds(self) -> float:
        return self._clock() - self._start_time

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """Time an operation. Exceptions are counted as ``<operation>_error`` and re-raised."""
        started = time.perf_counter()
        try:
            yield
        except Exception:
            self.record(f"{operation}_error", (time.perf_counter() - started) * 1000, error=True)
            raise
        self.record(operation, (time.perf_counter() - started) * 1000)

    def record(self, operation: str, duration_ms: float, error: bool = False) -> None:
        self.total_requests += 1
        self._request_counts[operation] += 1
        self._execution_times[operation].append(duration_ms)
        if error:
            self.error_count += 1
        self._maybe_log_stats()

    def _maybe_log_stats(self) -> None:
        if not self._log_stats:
            return
        now = self._clock()
        if now - self._last_stats_log < self._stats_interval:
            return
        self._last_stats_log = now
        snap = self.snapshot()
        logger.info(
            f"[PerformanceMonitor] uptime={snap['uptime_seconds']}s "
            f"requests={snap['total_requests']} errors={snap['error_count']} "
            f"error_rate={snap['error_rate']}"
        )

    def snapshot(self) -> dict:
        operations = {}
        for name, count in sorted(self._request_counts.items()):
            samples = self._execution_times[name]
            avg = sum(samples) / len(samples) if samples else 0.0
            operations[name] = {
                "count": count,
                "avg_ms": round(avg, 3),
                "max_ms": round(max(samples), 3) if samples else 0.0,
            }
        error_rate = self.error_count / self.total_requests if self.total_requests else 0.0
        return {
            "uptime_seconds": round(self.uptime_seconds, 1),
            "total_requests": self.total_requests,
            "error_count": self.error_count,
            "error_rate": round(error_rate, 4),
            "operations": operations,
        }

    def reset(self) -> None:
        self.total_requests = 0
        self.error_count = 0
        self._request_counts.clear()
        self._execution_times.clear()
