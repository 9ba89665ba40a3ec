"""
BookKey Value Object

Immutable identity of a Book aggregate.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BookKey:
    """
    Immutable book identity.

    Used both as the external lookup key and as the target key of
    partial updates in the backing store.
    """

    value: str

    def __post_init__(self):
        """Validate key."""
        if not isinstance(self.value, str):
            raise ValueError(f"Book key must be a string: {self.value!r}")
        if not self.value.strip():
            raise ValueError("Book key cannot be empty")

    @classmethod
    def of(cls, key: Union["BookKey", str]) -> "BookKey":
        """
        Coerce a raw string or an existing key into a BookKey.

        Raises:
            ValueError: If key is neither a BookKey nor a non-empty string
        """
        if isinstance(key, BookKey):
            return key
        return cls(key)

    def __str__(self) -> str:
        """String representation."""
        return self.value
