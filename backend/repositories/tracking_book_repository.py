"""
Lazy-loading, dirty-tracking book repository.

Only the core fields are read at load time. Deferred fields are fetched the
first time the domain touches them, and save writes back only the fields the
domain actually changed.
"""

from typing import Any, Dict, Optional, Union

from constants import BookField, RepositoryStrategy
from domain.aggregates import Book
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import ConflictError, NotFoundError
from utils.logging_utils import StructuredLogger

from .base_repository import AggregateRepository
from .book_state import read_state
from .field_tracker import FieldTracker
from .identity_map import IdentityMap
from .stores import FieldStore

logger = StructuredLogger(__name__)


class LazyBook(Book):
    """
    Book whose state is supplied on demand by a FieldStore.

    Reads of a field not yet loaded fetch it exactly once; writes only touch
    memory and mark the field dirty.
    """

    def __init__(self, key: BookKey, store: FieldStore, core: Dict[str, Any]):
        self._key = key
        self._store = store
        self._values: Dict[str, Any] = {f: core[f] for f in BookField.CORE}
        self.version: int = core[BookField.VERSION]
        self.tracker = FieldTracker.with_loaded(BookField.CORE)

    @property
    def key(self) -> BookKey:
        return self._key

    def _read(self, field: str) -> Any:
        if not self.tracker.is_loaded(field):
            self._values[field] = self._store.get(self._key, field)
            self.tracker.mark_loaded(field)
            logger.debug("Lazy-loaded field", extra={"key": self._key.value, "field": field})
        return self._values[field]

    def _write(self, field: str, value: Any) -> None:
        self._values[field] = value
        self.tracker.mark_dirty(field)

    def _get_title(self) -> str:
        return self._read(BookField.TITLE)

    def _set_title(self, value: str) -> None:
        self._write(BookField.TITLE, value)

    def _get_content(self) -> str:
        return self._read(BookField.CONTENT)

    def _set_content(self, value: str) -> None:
        self._write(BookField.CONTENT, value)

    def invalidate(self, field: str) -> None:
        """Drop the cached value (and any unsaved write) of a field."""
        self.tracker.invalidate(field)
        self._values.pop(field, None)

    def pending_changes(self) -> Dict[str, Any]:
        return {f: self._values[f] for f in sorted(self.tracker.dirty_fields())}

    def mark_saved(self, version: int) -> None:
        self.version = version
        self.tracker.clear_dirty()


class TrackingBookRepository(AggregateRepository[Book]):
    """Repository loading core fields eagerly and writing only dirty fields."""

    strategy = RepositoryStrategy.TRACKING

    def __init__(self, store: FieldStore, identity_map: Optional[IdentityMap] = None):
        super().__init__(identity_map)
        self.store = store

    def load(self, key: Union[BookKey, str]) -> LazyBook:
        key = BookKey.of(key)
        cached = self._cached(key)
        if cached is not None:
            return cached

        core = self.store.load_core(key)
        if core is None:
            raise NotFoundError(key.value)

        logger.debug("Loaded book core", extra={"key": key.value, "version": core[BookField.VERSION]})
        return self._remember(key, LazyBook(key, self.store, core))

    def save(self, aggregate: Book) -> SaveResult:
        book = self._expect(aggregate, LazyBook)
        changes = book.pending_changes()

        if not changes:
            logger.debug("Nothing to save", extra={"key": book.key.value})
            return SaveResult(key=book.key.value, version=book.version)

        try:
            version = self.store.update(book.key, changes, expected_version=book.version)
        except ConflictError:
            logger.warning(
                "Concurrent modification detected",
                extra={"key": book.key.value, "version": book.version},
            )
            raise

        book.mark_saved(version)
        fields = tuple(changes)
        logger.info("Saved book", extra={"key": book.key.value, "fields": list(fields), "version": version})
        return SaveResult(key=book.key.value, written_fields=fields, version=version)

    def add(self, aggregate: Book) -> None:
        self.store.insert(aggregate.key, read_state(aggregate))
        logger.info("Added book", extra={"key": aggregate.key.value})
