"""
In-process telemetry helpers.

Nothing is exported to a metrics backend; events go to the log and counters
and latencies stay in memory so /health and tests can read them.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections import deque
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("releasenotes.telemetry")

_COUNTERS: dict[str, int] = {}
# Most recent samples per metric; older ones are dropped
MAX_LATENCY_SAMPLES = 1000

_LATENCIES: dict[str, deque[float]] = {}


def _normalize_latency_name(metric_name: str) -> str:
    if metric_name.endswith("_ms") or not metric_name.endswith(".latency"):
        return metric_name
    return f"{metric_name}_ms"


def log_event(event_name: str, **fields: Any) -> None:
    """Structured log event. Callers must not pass secrets (API keys, credentials)."""
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """Increment an in-memory counter and return its new value."""
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counters() -> dict[str, int]:
    return dict(_COUNTERS)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """Record wall-clock time spent inside the block under metric_name."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        normalized = _normalize_latency_name(metric_name)
        logger.debug("timing=%s seconds=%.6f", normalized, elapsed)
        samples = _LATENCIES.get(normalized)
        if samples is None:
            samples = _LATENCIES[normalized] = deque(maxlen=MAX_LATENCY_SAMPLES)
        samples.append(elapsed)


def get_latency_stats(metric_name: str) -> dict[str, float]:
    """Count, min, max, avg and p95 over the retained samples of a metric."""
    samples = sorted(_LATENCIES.get(_normalize_latency_name(metric_name), []))
    if not samples:
        return {"count": 0, "min": 0.0, "max": 0.0, "avg": 0.0, "p95": 0.0}

    count = len(samples)
    p95_index = min(int(count * 0.95), count - 1)
    return {
        "count": count,
        "min": samples[0],
        "max": samples[-1],
        "avg": sum(samples) / count,
        "p95": samples[p95_index],
    }


def reset() -> None:
    """Clear counters and latencies (tests)."""
    _COUNTERS.clear()
    _LATENCIES.clear()
