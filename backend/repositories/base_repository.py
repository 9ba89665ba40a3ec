"""
Base repository defining the aggregate persistence surface.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar, Union

from constants import RepositoryStrategy
from domain.value_objects import BookKey
from dtos.internal import SaveResult
from exceptions import NotFoundError
from utils.logging_utils import StructuredLogger

from .identity_map import IdentityMap

T = TypeVar('T')

logger = StructuredLogger(__name__)


class AggregateRepository(ABC, Generic[T]):
    """
    Generic base repository for aggregates persisted as a single unit.

    Subclasses implement one persistence strategy each. When an identity map
    is given, repeated loads of the same key return the same instance.
    """

    strategy: RepositoryStrategy

    def __init__(self, identity_map: Optional[IdentityMap] = None):
        """
        Initialize the repository.

        Args:
            identity_map: Optional per-transaction instance cache
        """
        self.identity_map = identity_map

    @abstractmethod
    def load(self, key: Union[BookKey, str]) -> T:
        """
        Retrieve an aggregate by its key.

        Args:
            key: Identity key

        Returns:
            Aggregate instance

        Raises:
            NotFoundError: If no record exists for the key
        """

    @abstractmethod
    def save(self, aggregate: T) -> SaveResult:
        """
        Persist the changes made to a loaded aggregate.

        Args:
            aggregate: Instance previously returned by load

        Returns:
            SaveResult listing the fields written (empty for a no-op)

        Raises:
            ConflictError: If the record was modified concurrently
            TypeError: If the aggregate was not produced by this repository
        """

    @abstractmethod
    def add(self, aggregate: T) -> None:
        """
        Insert a new aggregate.

        Args:
            aggregate: Any aggregate instance carrying the full state
        """

    def get(self, key: Union[BookKey, str]) -> Optional[T]:
        """
        Retrieve an aggregate by its key.

        Returns:
            Aggregate instance or None if not found
        """
        try:
            return self.load(key)
        except NotFoundError:
            return None

    def exists(self, key: Union[BookKey, str]) -> bool:
        """
        Check if an aggregate exists for the key.

        Returns:
            True if exists, False otherwise
        """
        return self.get(key) is not None

    def _cached(self, key: BookKey) -> Optional[T]:
        if self.identity_map is None:
            return None
        instance = self.identity_map.get(key)
        if instance is not None:
            logger.debug("Identity map hit", extra={"key": key.value, "strategy": self.strategy.value})
        return instance

    def _remember(self, key: BookKey, instance: T) -> T:
        if self.identity_map is not None:
            self.identity_map.add(key, instance)
        return instance

    def _expect(self, aggregate, cls):
        if not isinstance(aggregate, cls):
            raise TypeError(
                f"{type(self).__name__} can only save {cls.__name__} instances it loaded, "
                f"got {type(aggregate).__name__}"
            )
        return aggregate
