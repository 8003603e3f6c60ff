"""
Performance monitoring for GraphQL operations
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from strawberry.extensions import SchemaExtension

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)

MAX_SAMPLES_PER_OPERATION = 100


@dataclass
class Sample:
    timestamp: float
    duration_ms: float | None = None
    error: str | None = None


class PerformanceMonitor:
    """In-process request counters and rolling duration samples."""

    def __init__(self, max_samples: int = MAX_SAMPLES_PER_OPERATION):
        self.max_samples = max_samples
        self._samples: dict[str, deque[Sample]] = {}
        self._request_counts: dict[str, int] = {}

    def add_metric(self, operation: str, sample: Sample) -> None:
        samples = self._samples.get(operation)
        if samples is None:
            samples = self._samples[operation] = deque(maxlen=self.max_samples)
        samples.append(sample)

    def record_duration(self, operation: str, duration_ms: float) -> None:
        self.add_metric(operation, Sample(timestamp=time.time(), duration_ms=duration_ms))

    def record_error(self, operation: str, error: str) -> None:
        self.add_metric(f"{operation}_error", Sample(timestamp=time.time(), error=error))

    def increment_request_count(self, endpoint: str) -> None:
        self._request_counts[endpoint] = self._request_counts.get(endpoint, 0) + 1

    def get_stats(self) -> dict[str, Any]:
        operations: dict[str, Any] = {}
        for operation, samples in self._samples.items():
            if not samples:
                continue
            durations = [s.duration_ms for s in samples if s.duration_ms is not None]
            operations[operation] = {
                "count": len(samples),
                "avg_duration_ms": sum(durations) / len(durations) if durations else 0.0,
                "max_duration_ms": max(durations) if durations else 0.0,
                "min_duration_ms": min(durations) if durations else 0.0,
                "last_executed": max(s.timestamp for s in samples),
            }
        return {"request_counts": dict(self._request_counts), "operations": operations}

    def reset(self) -> None:
        self._samples.clear()
        self._request_counts.clear()


def log_slow_operation(operation: str, duration_ms: float, threshold_ms: float = 1000.0) -> bool:
    """Warn about operations slower than ``threshold_ms``. Returns True if logged."""
    if duration_ms > threshold_ms:
        logger.warning(
            "Slow operation detected",
            operation=operation,
            duration_ms=round(duration_ms, 2),
            threshold_ms=threshold_ms,
        )
        return True
    return False


# Global instance
monitor = PerformanceMonitor()


class PerformanceExtension(SchemaExtension):
    """Count and time every GraphQL operation."""

    def on_operation(self) -> Iterator[None]:
        monitor.increment_request_count("graphql_request")
        start = time.perf_counter()

        yield

        duration_ms = (time.perf_counter() - start) * 1000
        operation = self.execution_context.operation_name or "anonymous"
        monitor.increment_request_count(operation)
        monitor.record_duration(operation, duration_ms)

        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if errors:
            logger.error(
                "GraphQL errors",
                operation=operation,
                errors=[str(error) for error in errors],
            )
            monitor.record_error(operation, str(errors[0]))

        log_slow_operation(operation, duration_ms, settings.slow_operation_threshold_ms)
