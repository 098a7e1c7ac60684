"""
Prometheus Metrics — cleaning pipeline observability.

Exposes counters and histograms for:
- Stages that changed content (per CleaningStageTag)
- Safety-net fallbacks
- Cleaning latency
- Retained-length ratio of the plain text

Usage
-----
    from src.cleaning.metrics import timed_stage, record_stage_applied

    with timed_stage("clean_email_content"):
        result = clean_email_content(text, html)
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Iterable

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

STAGE_APPLIED: Counter = Counter(
    "email_cleaning_stage_applied_total",
    "Cleaning stages that changed content, by stage tag",
    ["stage"],
)

FALLBACKS: Counter = Counter(
    "email_cleaning_fallback_total",
    "Times the safety net restored the original text body",
)

STAGE_LATENCY: Histogram = Histogram(
    "email_cleaning_processing_seconds",
    "Cleaning time per entry point in seconds",
    ["stage_name"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

RETENTION_RATIO: Histogram = Histogram(
    "email_cleaning_retention_ratio",
    "Cleaned text length divided by original text length",
    buckets=(0.1, 0.15, 0.25, 0.5, 0.75, 0.9, 1.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_stage_applied(stages: Iterable[str]) -> None:
    """Increment the stage counter once per applied stage value."""
    for stage in stages:
        STAGE_APPLIED.labels(stage=stage).inc()


def record_fallback() -> None:
    FALLBACKS.inc()


def record_retention(original_length: int, cleaned_length: int) -> None:
    """Observe the retained fraction; empty originals are skipped."""
    if original_length <= 0:
        return
    RETENTION_RATIO.observe(min(1.0, cleaned_length / original_length))


@contextmanager
def timed_stage(stage_name: str) -> Generator[None, None, None]:
    """
    Context manager that records processing latency.

    Usage::

        with timed_stage("clean_batch"):
            results = clean_batch(emails)
    """
    with STAGE_LATENCY.labels(stage_name=stage_name).time():
        yield
