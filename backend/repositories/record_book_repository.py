"""
Book repository over a separately mapped ORM record.

The Book facade is not mapped itself; it wraps a BookRecord and lets the
mapper do the lazy loading (content is a deferred column) and the change
tracking.
"""

from typing import Optional, Union

from sqlalchemy.orm import Session

from constants import BookField, RepositoryStrategy
from domain.aggregates import Book
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import NotFoundError
from models import BookRecord
from utils.logging_utils import StructuredLogger

from .base_repository import AggregateRepository
from .book_state import read_state
from .identity_map import IdentityMap
from .orm_support import flush_changes, modified_fields

logger = StructuredLogger(__name__)

_RECORD_ATTRIBUTES = {
    BookField.TITLE: 'title',
    BookField.CONTENT: 'content',
}


class RecordBook(Book):
    """Book facade delegating its state to a BookRecord."""

    def __init__(self, record: BookRecord):
        self.record = record

    @property
    def key(self) -> BookKey:
        return BookKey(self.record.key)

    def _get_title(self) -> str:
        return self.record.title

    def _set_title(self, value: str) -> None:
        self.record.title = value

    def _get_content(self) -> str:
        return self.record.content

    def _set_content(self, value: str) -> None:
        self.record.content = value


class RecordBookRepository(AggregateRepository[Book]):
    """Repository wrapping mapped BookRecord rows in Book facades."""

    strategy = RepositoryStrategy.RECORD

    def __init__(self, db: Session, identity_map: Optional[IdentityMap] = None):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            identity_map: Optional per-transaction instance cache
        """
        super().__init__(identity_map)
        self.db = db

    def load(self, key: Union[BookKey, str]) -> RecordBook:
        key = BookKey.of(key)
        cached = self._cached(key)
        if cached is not None:
            return cached

        record = self.db.get(BookRecord, key.value)
        if record is None:
            raise NotFoundError(key.value)

        return self._remember(key, RecordBook(record))

    def save(self, aggregate: Book) -> SaveResult:
        book = self._expect(aggregate, RecordBook)
        record = book.record
        fields = modified_fields(record, _RECORD_ATTRIBUTES)

        if not fields:
            logger.debug("Nothing to save", extra={"key": record.key})
            return SaveResult(key=record.key, version=record.version)

        expected = record.version
        flush_changes(self.db, record.key, expected)

        logger.info("Saved book record", extra={"key": record.key, "fields": list(fields), "version": record.version})
        return SaveResult(key=record.key, written_fields=fields, version=record.version)

    def add(self, aggregate: Book) -> None:
        state = read_state(aggregate)
        self.db.add(BookRecord(key=aggregate.key.value, **state))
        self.db.flush()
        logger.info("Added book record", extra={"key": aggregate.key.value})
