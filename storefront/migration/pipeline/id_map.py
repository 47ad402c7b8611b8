"""
Legacy key to destination ID mappings.

One map exists per entity type. Maps are created and handed between stages
by the orchestrator only.
"""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Optional, Tuple, TypeVar

from ..errors import RequiredReferenceError

K = TypeVar("K", bound=Hashable)


class IdMap(Generic[K]):
    """
    Mapping from a legacy key (integer ID or natural key) to a new primary key.

    Several legacy keys may point at the same new ID; registering an existing
    key overwrites it.
    """

    def __init__(self, entity: str) -> None:
        self.entity = entity
        self._ids: Dict[K, int] = {}

    def register(self, legacy_key: K, new_id: int) -> None:
        self._ids[legacy_key] = new_id

    def register_many(self, legacy_keys: Iterable[K], new_id: int) -> None:
        for legacy_key in legacy_keys:
            self.register(legacy_key, new_id)

    def lookup(self, legacy_key: K) -> Optional[int]:
        """Return the mapped ID, or ``None`` when the key was never registered."""

        return self._ids.get(legacy_key)

    def require(self, legacy_key: K, record: object | None = None) -> int:
        """Return the mapped ID or raise :class:`RequiredReferenceError`."""

        new_id = self._ids.get(legacy_key)
        if new_id is None:
            raise RequiredReferenceError(self.entity, legacy_key, record)
        return new_id

    def keys_for(self, new_id: int) -> Tuple[K, ...]:
        return tuple(key for key, value in self._ids.items() if value == new_id)

    def __contains__(self, legacy_key: object) -> bool:
        return legacy_key in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"<IdMap {self.entity} ({len(self._ids)} keys)>"
