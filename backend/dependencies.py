"""
Dependency injection providers.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. This allows for easier testing
and better separation of concerns.
"""

from typing import Optional

from sqlalchemy.orm import Session

from constants import RepositoryStrategy
from repositories.base_repository import AggregateRepository
from repositories.direct_book_repository import DirectBookRepository
from repositories.full_book_repository import FullBookRepository
from repositories.identity_map import IdentityMap
from repositories.mapped_book_repository import MappedBookRepository
from repositories.record_book_repository import RecordBookRepository
from repositories.stores import FieldStore, SqlFieldStore
from repositories.tracking_book_repository import TrackingBookRepository

_FIELD_STORE_REPOSITORIES = {
    RepositoryStrategy.FULL: FullBookRepository,
    RepositoryStrategy.TRACKING: TrackingBookRepository,
    RepositoryStrategy.DIRECT: DirectBookRepository,
}


def get_field_store(db: Session) -> FieldStore:
    """
    Factory function for the field store over a database session.

    Args:
        db: Database session

    Returns:
        SqlFieldStore instance
    """
    return SqlFieldStore(db)


def get_book_repository(
    strategy: RepositoryStrategy,
    db: Session,
    identity_map: Optional[IdentityMap] = None,
) -> AggregateRepository:
    """
    Factory function for creating the book repository of a strategy.

    Args:
        strategy: Persistence strategy to use
        db: Database session
        identity_map: Per-transaction instance cache (ignored by the mapped
            strategy, whose Session already keeps one)

    Returns:
        Repository instance
    """
    strategy = RepositoryStrategy(strategy)

    if RepositoryStrategy.uses_orm(strategy):
        if strategy == RepositoryStrategy.MAPPED:
            return MappedBookRepository(db)
        return RecordBookRepository(db, identity_map)

    return _FIELD_STORE_REPOSITORIES[strategy](get_field_store(db), identity_map)
