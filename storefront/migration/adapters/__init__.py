"""Source adapters for the legacy store."""

from .legacy_db import LegacySource, SqlLegacySource, create_legacy_source

__all__ = ["LegacySource", "SqlLegacySource", "create_legacy_source"]
