"""Prometheus metrics helpers for the legacy migration."""

from __future__ import annotations

from typing import Literal

from prometheus_client import Counter, Histogram

_rows_counter = Counter(
    "storefront_migration_rows_total",
    "Legacy rows handled by the migration, by entity and outcome.",
    ["entity", "outcome"],
)
_runs_counter = Counter(
    "storefront_migration_runs_total",
    "Migration runs by final status.",
    ["status"],
)
_stage_duration = Histogram(
    "storefront_migration_stage_duration_seconds",
    "Duration of each migration stage in seconds.",
    ["stage"],
    buckets=(0.1, 0.5, 1, 2, 5, 10, 30, 60, 120, 300, 900),
)

_enabled = True


def set_metrics_enabled(enabled: bool) -> None:
    """Toggle metric recording, e.g. from ``MIGRATION_METRICS_ENABLED``."""

    global _enabled
    _enabled = bool(enabled)


def record_rows(entity: str, outcome: str, count: int = 1) -> None:
    """Increment the row counter for an entity outcome (inserted, skipped, merged, renamed)."""

    if not _enabled or count <= 0:
        return
    _rows_counter.labels(entity=entity, outcome=outcome).inc(count)


def record_run(status: Literal["success", "failure"]) -> None:
    if not _enabled:
        return
    _runs_counter.labels(status=status).inc()


def record_stage_duration(stage: str, duration_seconds: float) -> None:
    if not _enabled:
        return
    _stage_duration.labels(stage=stage).observe(max(duration_seconds, 0.0))
