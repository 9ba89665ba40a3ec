"""
In-memory field store, used where no database is wanted.
"""

from typing import Any, Dict, Mapping, Optional

from constants import BookField, INITIAL_VERSION
from domain.value_objects import BookKey
from exceptions import ConflictError, DuplicateKeyError, NotFoundError

from .base import FieldStore


class MemoryFieldStore(FieldStore):
    """
    FieldStore keeping records in a dict.

    Values are copied in and out, so nothing outside the store can alter a
    record without going through set/update.
    """

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}

    def _record(self, key: BookKey) -> Dict[str, Any]:
        record = self._records.get(key.value)
        if record is None:
            raise NotFoundError(key.value)
        return record

    def _project(self, key: BookKey, fields) -> Optional[Dict[str, Any]]:
        record = self._records.get(key.value)
        if record is None:
            return None
        projected = {f: record[f] for f in fields}
        projected[BookField.VERSION] = record[BookField.VERSION]
        return projected

    def load_core(self, key: BookKey) -> Optional[Dict[str, Any]]:
        return self._project(key, BookField.CORE)

    def load_all(self, key: BookKey) -> Optional[Dict[str, Any]]:
        return self._project(key, BookField.all_fields())

    def exists(self, key: BookKey) -> bool:
        return key.value in self._records

    def get(self, key: BookKey, field: str) -> Any:
        self.check_field(field)
        return self._record(key)[field]

    def set(self, key: BookKey, field: str, value: Any) -> int:
        self.check_field(field)
        record = self._record(key)
        record[field] = value
        record[BookField.VERSION] += 1
        return record[BookField.VERSION]

    def update(self, key: BookKey, values: Mapping[str, Any], expected_version: int) -> int:
        for field in values:
            self.check_field(field)

        record = self._record(key)
        if record[BookField.VERSION] != expected_version:
            raise ConflictError(key.value, expected_version)

        record.update(values)
        record[BookField.VERSION] = expected_version + 1
        return record[BookField.VERSION]

    def insert(self, key: BookKey, values: Mapping[str, Any]) -> int:
        for field in values:
            self.check_field(field)
        if key.value in self._records:
            raise DuplicateKeyError(key.value)

        record = {f: '' for f in BookField.all_fields()}
        record.update(values)
        record[BookField.VERSION] = INITIAL_VERSION
        self._records[key.value] = record
        return INITIAL_VERSION
