"""
Per-entity counters reported at the end of a run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict

from .. import metrics


@dataclass
class EntityCounts:
    inserted: int = 0
    skipped: int = 0
    merged: int = 0
    renamed: int = 0


@dataclass
class MigrationSummary:
    """Aggregate results of one migration run."""

    entities: Dict[str, EntityCounts] = field(default_factory=dict)
    rows_wiped: int = 0
    cart_items_purged: int = 0

    def counts(self, entity: str) -> EntityCounts:
        return self.entities.setdefault(entity, EntityCounts())

    def record(self, entity: str, outcome: str, count: int = 1) -> None:
        """Add ``count`` to ``entity``'s ``outcome`` counter and mirror it to Prometheus."""

        counts = self.counts(entity)
        setattr(counts, outcome, getattr(counts, outcome) + count)
        metrics.record_rows(entity, outcome, count)

    def as_dict(self) -> dict:
        return {
            "entities": {name: asdict(counts) for name, counts in self.entities.items()},
            "rows_wiped": self.rows_wiped,
            "cart_items_purged": self.cart_items_purged,
        }
