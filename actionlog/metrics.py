"""
Prometheus metrics for actionlog.

Usage:
    from actionlog.metrics import init_metrics, record_event, record_dropped

    init_metrics()
    record_event("ActionEvent")
    record_dropped("inconsistent")

Recording helpers are no-ops until init_metrics() has run, so the pure
engine functions can call them unconditionally.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)

EVENTS_TOTAL: "Counter" = None  # type: ignore
EVENTS_DROPPED: "Counter" = None  # type: ignore
RUNS: "Gauge" = None  # type: ignore
REPLAY_DURATION: "Histogram" = None  # type: ignore

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics() -> None:
    """
    Initialize Prometheus metrics (call once at startup).

    Thread-safe via module-level lock; repeated calls are ignored.
    """
    global EVENTS_TOTAL, EVENTS_DROPPED, RUNS, REPLAY_DURATION
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        EVENTS_TOTAL = Counter(
            "actionlog_events_total",
            "Total number of events ingested",
            labelnames=["event_type"],
        )

        EVENTS_DROPPED = Counter(
            "actionlog_events_dropped_total",
            "Events dropped without changing any run",
            labelnames=["reason"],
        )

        RUNS = Gauge(
            "actionlog_runs",
            "Number of runs currently held by a registry",
        )

        REPLAY_DURATION = Histogram(
            "actionlog_replay_duration_seconds",
            "Duration of event stream replays in seconds",
            buckets=(0.001, 0.01, 0.1, 0.5, 1.0, 5.0, 10.0),
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in a background thread.

    Args:
        enabled: Whether to start the server (METRICS_ENABLED)
        port: HTTP port for /metrics (METRICS_PORT)
    """
    if not enabled:
        logger.info("Metrics server disabled (METRICS_ENABLED=false)")
        return

    init_metrics()
    start_http_server(port)
    logger.info("Metrics server listening on port %d", port)


def record_event(event_type: str) -> None:
    if _metrics_initialized:
        EVENTS_TOTAL.labels(event_type=event_type).inc()


def record_dropped(reason: str) -> None:
    if _metrics_initialized:
        EVENTS_DROPPED.labels(reason=reason).inc()


def set_runs(count: int) -> None:
    if _metrics_initialized:
        RUNS.set(count)


@contextmanager
def time_replay() -> Generator[None, None, None]:
    """Observe the wrapped block in the replay duration histogram."""
    start = time.perf_counter()
    try:
        yield
    finally:
        if _metrics_initialized:
            REPLAY_DURATION.observe(time.perf_counter() - start)
