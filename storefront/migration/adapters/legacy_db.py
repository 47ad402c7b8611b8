"""
Read-only access to the legacy MySQL store.

Adapters only execute declared queries and validate result rows against the
query contract; decoding into staging records happens in the pipeline.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, Sequence

from flask import Flask
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from ..contracts import LegacyQuery, decode_row
from ..errors import MigrationError

logger = logging.getLogger(__name__)


class LegacySource:
    """
    Base class for legacy readers.

    Subclasses implement :meth:`_execute`, returning raw row tuples in the
    declared column order.
    """

    def _execute(self, query: LegacyQuery, params: Mapping[str, Any]) -> Iterable[Sequence[Any]]:
        raise NotImplementedError

    def fetch(self, query: LegacyQuery, params: Mapping[str, Any] | None = None) -> Iterator[Mapping[str, Any]]:
        """Yield contract-validated rows for ``query``."""

        for row_number, row in enumerate(self._execute(query, params or {}), start=1):
            yield decode_row(query, row_number, row)

    def fetch_one(self, query: LegacyQuery, params: Mapping[str, Any] | None = None) -> Mapping[str, Any] | None:
        for row in self.fetch(query, params):
            return row
        return None

    def close(self) -> None:
        pass


class SqlLegacySource(LegacySource):
    """Legacy reader backed by a single SQLAlchemy connection."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._connection = None

    @property
    def connection(self):
        if self._connection is None:
            self._connection = self.engine.connect()
        return self._connection

    def _execute(self, query: LegacyQuery, params: Mapping[str, Any]) -> Iterable[Sequence[Any]]:
        logger.debug("Legacy query %s params=%s", query.name, dict(params))
        result = self.connection.execute(text(query.sql), dict(params))
        return [tuple(row) for row in result]

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self.engine.dispose()


def create_legacy_source(app: Flask) -> SqlLegacySource:
    """
    Build a reader from ``LEGACY_DATABASE_URL``.

    A single connection is held for the whole run.
    """

    url = app.config.get("LEGACY_DATABASE_URL")
    if not url:
        raise MigrationError("LEGACY_DATABASE_URL is not configured; cannot read the legacy store.")
    engine = create_engine(url, pool_size=1, max_overflow=0, pool_pre_ping=True)
    return SqlLegacySource(engine)
