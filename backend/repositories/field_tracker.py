"""
Per-instance loaded/dirty flags for lazily loaded aggregates.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Set


@dataclass
class FieldTracker:
    """
    Loaded/dirty flag set belonging to exactly one aggregate instance.

    A field is loaded once its value is held in memory, and dirty once it was
    written through the instance. Dirty implies loaded. The repository consults
    the dirty set at save time and clears it after a successful write.
    """

    loaded: Set[str] = field(default_factory=set)
    dirty: Set[str] = field(default_factory=set)

    @classmethod
    def with_loaded(cls, fields: Iterable[str]) -> "FieldTracker":
        return cls(loaded=set(fields))

    def is_loaded(self, name: str) -> bool:
        return name in self.loaded

    def mark_loaded(self, name: str) -> None:
        self.loaded.add(name)

    def mark_dirty(self, name: str) -> None:
        self.loaded.add(name)
        self.dirty.add(name)

    def invalidate(self, name: str) -> None:
        """Forget the cached value so the next read fetches it again."""
        self.loaded.discard(name)
        self.dirty.discard(name)

    @property
    def is_dirty(self) -> bool:
        return bool(self.dirty)

    def dirty_fields(self) -> FrozenSet[str]:
        return frozenset(self.dirty)

    def clear_dirty(self) -> None:
        self.dirty.clear()
