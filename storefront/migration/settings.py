"""
Run settings resolved from the Flask config.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from config.legacy_exceptions import DEFAULT_EXCEPTION_TABLE, LegacyExceptionTable, load_exception_table


@dataclass(frozen=True)
class MigrationSettings:
    """Knobs the decoders and load stages need besides the legacy rows."""

    utc_offset_hours: int = -5
    admin_emails: frozenset[str] = frozenset({"gardens@southernexposure.com"})
    exceptions: LegacyExceptionTable = field(default=DEFAULT_EXCEPTION_TABLE)

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> "MigrationSettings":
        env = dict(os.environ)
        exceptions_path = config.get("MIGRATION_EXCEPTIONS_PATH")
        if exceptions_path:
            env["MIGRATION_EXCEPTIONS_PATH"] = str(exceptions_path)
        else:
            env.pop("MIGRATION_EXCEPTIONS_PATH", None)
        return cls(
            utc_offset_hours=int(config.get("LEGACY_UTC_OFFSET_HOURS", -5)),
            admin_emails=frozenset(config.get("MIGRATION_ADMIN_EMAILS") or ()),
            exceptions=load_exception_table(env),
        )
