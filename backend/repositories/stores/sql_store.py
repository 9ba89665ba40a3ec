"""
SQL field store backed by SQLAlchemy Core statements on an ORM session.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.orm import Session

from constants import BookField, INITIAL_VERSION
from domain.value_objects import BookKey
from exceptions import ConflictError, NotFoundError
from models import books_table
from utils.logging_utils import StructuredLogger

from .base import FieldStore

logger = StructuredLogger(__name__)


class SqlFieldStore(FieldStore):
    """
    FieldStore over the books table.

    Statements run inside the session's current transaction; committing is
    left to whoever owns the session.
    """

    def __init__(self, db: Session):
        """
        Initialize the store.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.table = books_table

    def _column(self, name: str):
        return self.table.c[name]

    def _select_row(self, key: BookKey, fields) -> Optional[Dict[str, Any]]:
        columns = [self._column(f) for f in fields] + [self._column(BookField.VERSION)]
        row = self.db.execute(
            select(*columns).where(self._column(BookField.KEY) == key.value)
        ).first()
        if row is None:
            return None
        return dict(row._mapping)

    def load_core(self, key: BookKey) -> Optional[Dict[str, Any]]:
        return self._select_row(key, BookField.CORE)

    def load_all(self, key: BookKey) -> Optional[Dict[str, Any]]:
        return self._select_row(key, BookField.all_fields())

    def exists(self, key: BookKey) -> bool:
        row = self.db.execute(
            select(self._column(BookField.KEY)).where(self._column(BookField.KEY) == key.value)
        ).first()
        return row is not None

    def get(self, key: BookKey, field: str) -> Any:
        self.check_field(field)
        row = self.db.execute(
            select(self._column(field)).where(self._column(BookField.KEY) == key.value)
        ).first()
        if row is None:
            raise NotFoundError(key.value)

        logger.debug("Fetched field", extra={"key": key.value, "field": field})
        return row[0]

    def _current_version(self, key: BookKey) -> Optional[int]:
        return self.db.execute(
            select(self._column(BookField.VERSION)).where(self._column(BookField.KEY) == key.value)
        ).scalar_one_or_none()

    def set(self, key: BookKey, field: str, value: Any) -> int:
        self.check_field(field)
        version_column = self._column(BookField.VERSION)

        # version = version + 1, evaluated by the database
        result = self.db.execute(
            update(self.table)
            .where(self._column(BookField.KEY) == key.value)
            .values({field: value, BookField.VERSION: version_column + 1})
        )
        if result.rowcount == 0:
            raise NotFoundError(key.value)

        # The row is write-locked by this transaction until commit
        return self._current_version(key)

    def update(self, key: BookKey, values: Mapping[str, Any], expected_version: int) -> int:
        for field in values:
            self.check_field(field)

        new_version = expected_version + 1
        result = self.db.execute(
            update(self.table)
            .where(
                self._column(BookField.KEY) == key.value,
                self._column(BookField.VERSION) == expected_version,
            )
            .values({**values, BookField.VERSION: new_version})
        )

        if result.rowcount == 0:
            if not self.exists(key):
                raise NotFoundError(key.value)
            raise ConflictError(key.value, expected_version)

        return new_version

    def insert(self, key: BookKey, values: Mapping[str, Any]) -> int:
        for field in values:
            self.check_field(field)

        self.db.execute(
            insert(self.table).values(
                {**values, BookField.KEY: key.value, BookField.VERSION: INITIAL_VERSION}
            )
        )
        return INITIAL_VERSION
