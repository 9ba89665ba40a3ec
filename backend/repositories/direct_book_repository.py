"""
Direct-access book repository.

The aggregate holds no state of its own: every read goes to the backing store
and every write is issued immediately. Nothing is left to reconcile at save
time, at the price of one round trip per access.
"""

from typing import Optional, Union

from constants import BookField, RepositoryStrategy
from domain.aggregates import Book
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import NotFoundError
from utils.logging_utils import StructuredLogger

from .base_repository import AggregateRepository
from .book_state import read_state
from .identity_map import IdentityMap
from .stores import FieldStore

logger = StructuredLogger(__name__)


class DirectBook(Book):
    """Book forwarding every accessor call to a FieldStore."""

    def __init__(self, key: BookKey, store: FieldStore):
        self._key = key
        self._store = store

    @property
    def key(self) -> BookKey:
        return self._key

    def _write(self, field: str, value) -> None:
        version = self._store.set(self._key, field, value)
        logger.debug("Wrote field", extra={"key": self._key.value, "field": field, "version": version})

    def _get_title(self) -> str:
        return self._store.get(self._key, BookField.TITLE)

    def _set_title(self, value: str) -> None:
        self._write(BookField.TITLE, value)

    def _get_content(self) -> str:
        return self._store.get(self._key, BookField.CONTENT)

    def _set_content(self, value: str) -> None:
        self._write(BookField.CONTENT, value)


class DirectBookRepository(AggregateRepository[Book]):
    """Repository whose aggregates write through on every mutation."""

    strategy = RepositoryStrategy.DIRECT

    def __init__(self, store: FieldStore, identity_map: Optional[IdentityMap] = None):
        super().__init__(identity_map)
        self.store = store

    def load(self, key: Union[BookKey, str]) -> DirectBook:
        key = BookKey.of(key)
        cached = self._cached(key)
        if cached is not None:
            return cached

        # Only the key is checked; no field is read until the domain asks for it
        if not self.store.exists(key):
            raise NotFoundError(key.value)

        return self._remember(key, DirectBook(key, self.store))

    def save(self, aggregate: Book) -> SaveResult:
        book = self._expect(aggregate, DirectBook)
        logger.debug("Direct book already persisted", extra={"key": book.key.value})
        return SaveResult(key=book.key.value)

    def add(self, aggregate: Book) -> None:
        self.store.insert(aggregate.key, read_state(aggregate))
        logger.info("Added book", extra={"key": aggregate.key.value})
