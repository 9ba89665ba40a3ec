"""
Full load/save book repository.

Every load reads the whole record and every save rewrites it. Simplest of the
strategies; fine for small aggregates, wasteful for large ones.
"""

from typing import Any, Dict, Optional, Union

from constants import BookField, RepositoryStrategy
from domain.aggregates import Book, PlainBook
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import ConflictError, NotFoundError
from utils.logging_utils import StructuredLogger

from .base_repository import AggregateRepository
from .book_state import read_state
from .identity_map import IdentityMap
from .stores import FieldStore

logger = StructuredLogger(__name__)


class LoadedBook(PlainBook):
    """PlainBook remembering the version it was loaded at."""

    def __init__(self, key: BookKey, record: Dict[str, Any]):
        super().__init__(key, record[BookField.TITLE], record[BookField.CONTENT])
        self.version: int = record[BookField.VERSION]


class FullBookRepository(AggregateRepository[Book]):
    """Repository reading and writing every field, always."""

    strategy = RepositoryStrategy.FULL

    def __init__(self, store: FieldStore, identity_map: Optional[IdentityMap] = None):
        super().__init__(identity_map)
        self.store = store

    def load(self, key: Union[BookKey, str]) -> LoadedBook:
        key = BookKey.of(key)
        cached = self._cached(key)
        if cached is not None:
            return cached

        record = self.store.load_all(key)
        if record is None:
            raise NotFoundError(key.value)

        logger.debug("Loaded full book", extra={"key": key.value, "version": record[BookField.VERSION]})
        return self._remember(key, LoadedBook(key, record))

    def save(self, aggregate: Book) -> SaveResult:
        book = self._expect(aggregate, LoadedBook)
        values = read_state(book)

        try:
            version = self.store.update(book.key, values, expected_version=book.version)
        except ConflictError:
            logger.warning(
                "Concurrent modification detected",
                extra={"key": book.key.value, "version": book.version},
            )
            raise

        book.version = version
        fields = tuple(values)
        logger.info("Saved full book", extra={"key": book.key.value, "version": version})
        return SaveResult(key=book.key.value, written_fields=fields, version=version)

    def add(self, aggregate: Book) -> None:
        self.store.insert(aggregate.key, read_state(aggregate))
        logger.info("Added book", extra={"key": aggregate.key.value})
