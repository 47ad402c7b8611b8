"""
Exception taxonomy for the legacy migration.

Every exception here is fatal: the orchestrator rolls back and the CLI exits
non-zero. Recoverable misses are logged by the load stages instead.
"""

from __future__ import annotations

from typing import Any, Sequence


class MigrationError(Exception):
    """Base exception for migration failures."""


class RowDecodeError(MigrationError):
    """Raised when a legacy row does not match its declared column contract."""

    def __init__(
        self,
        query_name: str,
        row_number: int,
        message: str,
        *,
        column: str | None = None,
        row: Sequence[Any] | None = None,
    ) -> None:
        location = f"{query_name} row {row_number}"
        if column:
            location += f" column '{column}'"
        details = f"{location}: {message}"
        if row is not None:
            details += f"\n\t{tuple(row)!r}"
        super().__init__(details)
        self.query_name = query_name
        self.row_number = row_number
        self.column = column
        self.row = tuple(row) if row is not None else None


class ValueDecodeError(MigrationError):
    """Raised when a well-typed value cannot be normalized (unknown country, bad sale type, ...)."""

    def __init__(self, kind: str, value: object) -> None:
        super().__init__(f"Invalid {kind}: {value!r}")
        self.kind = kind
        self.value = value


class RequiredReferenceError(MigrationError):
    """Raised when a record references a legacy key that must exist but does not."""

    def __init__(self, entity: str, legacy_key: object, record: object | None = None) -> None:
        message = f"Could not find {entity} for legacy key {legacy_key!r}"
        if record is not None:
            message += f"\n\t{record!r}"
        super().__init__(message)
        self.entity = entity
        self.legacy_key = legacy_key
        self.record = record


class VariantSkuConflictError(MigrationError):
    """
    Raised when a variant cannot be given a free (product, suffix) slot.

    Either two active variants share the suffix, or the reserved suffix an
    inactive duplicate would be renamed to is already taken.
    """

    def __init__(self, incoming: object, existing: object) -> None:
        super().__init__(f"Variant SKU conflict:\n\t{incoming!r}\n\t{existing!r}")
        self.incoming = incoming
        self.existing = existing
