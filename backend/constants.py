"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""
from enum import Enum


class BookField:
    """Column/field names of the Book aggregate as stored in the backing store."""

    KEY = 'key'
    TITLE = 'title'
    CONTENT = 'content'
    VERSION = 'version'

    # Always loaded together with the record
    CORE = (TITLE,)
    # Expensive, fetched on first access
    DEFERRED = (CONTENT,)

    @classmethod
    def all_fields(cls) -> tuple:
        """Every mutable business field, core first."""
        return cls.CORE + cls.DEFERRED


INITIAL_VERSION = 1


class RepositoryStrategy(str, Enum):
    """
    Persistence strategies available behind the repository interface.

    - FULL: every field loaded and written on every load/save
    - MAPPED: aggregate class mapped directly by the ORM
    - TRACKING: core fields loaded eagerly, deferred fields on demand, dirty fields written
    - RECORD: aggregate facade wraps a separately mapped ORM record
    - DIRECT: every field access goes straight to the backing store
    """

    FULL = 'full'
    MAPPED = 'mapped'
    TRACKING = 'tracking'
    RECORD = 'record'
    DIRECT = 'direct'

    @classmethod
    def uses_orm(cls, strategy: 'RepositoryStrategy') -> bool:
        """Check if this strategy needs an ORM session rather than a field store"""
        return strategy in [cls.MAPPED, cls.RECORD]

    @classmethod
    def from_string(cls, value: str) -> 'RepositoryStrategy':
        """
        Create RepositoryStrategy from string value.

        Args:
            value: String representation (case-insensitive)

        Returns:
            RepositoryStrategy instance

        Raises:
            ValueError: If value is not a known strategy
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid repository strategy: {value}")
