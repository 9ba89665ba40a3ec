"""
Field-level backing store interface.

The lazy, full and direct repositories talk to persistence only through this
capability, so each backing technology implements it once.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from constants import BookField
from domain.value_objects import BookKey


class FieldStore(ABC):
    """
    Abstract per-field access to stored books.

    Records are addressed by BookKey. Every record carries a version that
    starts at INITIAL_VERSION and is incremented by every write.
    """

    @abstractmethod
    def load_core(self, key: BookKey) -> Optional[Dict[str, Any]]:
        """
        Fetch the core fields and the version of a record.

        Returns:
            Dict with BookField.CORE fields plus 'version', or None if not found
        """

    @abstractmethod
    def load_all(self, key: BookKey) -> Optional[Dict[str, Any]]:
        """
        Fetch every field and the version of a record.

        Returns:
            Dict with all fields plus 'version', or None if not found
        """

    @abstractmethod
    def exists(self, key: BookKey) -> bool:
        pass

    @abstractmethod
    def get(self, key: BookKey, field: str) -> Any:
        """
        Fetch a single field.

        Raises:
            NotFoundError: If the record does not exist
        """

    @abstractmethod
    def set(self, key: BookKey, field: str, value: Any) -> int:
        """
        Write a single field immediately, without a version check.

        Returns:
            The new version

        Raises:
            NotFoundError: If the record does not exist
        """

    @abstractmethod
    def update(self, key: BookKey, values: Mapping[str, Any], expected_version: int) -> int:
        """
        Write the given fields only if the stored version still matches.

        Args:
            key: Record to update
            values: Field name to new value, only the fields to write
            expected_version: Version the caller loaded

        Returns:
            The new version

        Raises:
            NotFoundError: If the record does not exist
            ConflictError: If the stored version differs from expected_version
        """

    @abstractmethod
    def insert(self, key: BookKey, values: Mapping[str, Any]) -> int:
        """
        Create a new record.

        Returns:
            The initial version

        Raises:
            The backend's own duplicate-key error if the key is taken
            (DuplicateKeyError in memory, IntegrityError in SQL)
        """

    @staticmethod
    def check_field(field: str) -> str:
        if field not in BookField.all_fields():
            raise ValueError(f"Unknown book field: {field}")
        return field
