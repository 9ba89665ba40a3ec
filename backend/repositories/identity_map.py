"""
Per-transaction cache of loaded aggregates.
"""

import weakref
from typing import Generic, Optional, TypeVar

from domain.value_objects import BookKey

T = TypeVar('T')


class IdentityMap(Generic[T]):
    """
    Maps identity keys to the instance already loaded for them.

    Repeated loads within one unit of work return the same instance, so
    in-memory mutations stay visible across loads. Entries are held weakly and
    the whole map is cleared when the unit of work ends; never share one
    across units of work.
    """

    def __init__(self):
        self._instances: "weakref.WeakValueDictionary[str, T]" = weakref.WeakValueDictionary()

    def get(self, key: BookKey) -> Optional[T]:
        return self._instances.get(key.value)

    def add(self, key: BookKey, instance: T) -> T:
        self._instances[key.value] = instance
        return instance

    def clear(self) -> None:
        self._instances.clear()

    def __contains__(self, key: BookKey) -> bool:
        return key.value in self._instances

    def __len__(self) -> int:
        return len(self._instances)
