"""
Book repository where the aggregate class itself is mapped by the ORM.

MappedBook is imperatively mapped onto the books table, so loading, lazy
loading of the deferred content column and dirty tracking are all the
mapper's job. The aggregate's shape has to fit what the mapper can express.
"""

from typing import Optional, Union

from sqlalchemy.orm import Session, deferred

from constants import BookField, RepositoryStrategy
from database import Base
from domain.aggregates import Book
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import NotFoundError
from models import books_table
from utils.logging_utils import StructuredLogger

from .base_repository import AggregateRepository
from .book_state import read_state
from .orm_support import flush_changes, modified_fields

logger = StructuredLogger(__name__)


class MappedBook(Book):
    """Book whose private attributes are columns of the books table."""

    def __init__(self, key: Union[BookKey, str], title: str, content: str = ''):
        self._key_value = BookKey.of(key).value
        self._title = title
        self._content = content

    @property
    def key(self) -> BookKey:
        return BookKey(self._key_value)

    @property
    def version(self) -> int:
        return self._version

    def _get_title(self) -> str:
        return self._title

    def _set_title(self, value: str) -> None:
        self._title = value

    def _get_content(self) -> str:
        return self._content

    def _set_content(self, value: str) -> None:
        self._content = value


Base.registry.map_imperatively(
    MappedBook,
    books_table,
    properties={
        '_key_value': books_table.c[BookField.KEY],
        '_title': books_table.c[BookField.TITLE],
        '_content': deferred(books_table.c[BookField.CONTENT]),
        '_version': books_table.c[BookField.VERSION],
    },
    version_id_col=books_table.c[BookField.VERSION],
)

_MAPPED_ATTRIBUTES = {
    BookField.TITLE: '_title',
    BookField.CONTENT: '_content',
}


class MappedBookRepository(AggregateRepository[Book]):
    """Repository delegating load and save to the ORM mapping of MappedBook."""

    strategy = RepositoryStrategy.MAPPED

    def __init__(self, db: Session):
        """
        Initialize the repository.

        The Session's own identity map already returns the same instance for
        repeated loads, so no separate one is taken.

        Args:
            db: SQLAlchemy database session
        """
        super().__init__(identity_map=None)
        self.db = db

    def load(self, key: Union[BookKey, str]) -> MappedBook:
        key = BookKey.of(key)
        book = self.db.get(MappedBook, key.value)
        if book is None:
            raise NotFoundError(key.value)
        return book

    def save(self, aggregate: Book) -> SaveResult:
        book = self._expect(aggregate, MappedBook)
        key = book.key.value
        fields = modified_fields(book, _MAPPED_ATTRIBUTES)

        if not fields:
            logger.debug("Nothing to save", extra={"key": key})
            return SaveResult(key=key, version=book.version)

        flush_changes(self.db, key, book.version)

        logger.info("Saved mapped book", extra={"key": key, "fields": list(fields), "version": book.version})
        return SaveResult(key=key, written_fields=fields, version=book.version)

    def add(self, aggregate: Book) -> None:
        state = read_state(aggregate)
        self.db.add(MappedBook(aggregate.key, state[BookField.TITLE], state[BookField.CONTENT]))
        self.db.flush()
        logger.info("Added mapped book", extra={"key": aggregate.key.value})
