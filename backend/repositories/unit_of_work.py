"""
Unit of Work for book persistence.

Scopes a Session, its transaction and the per-transaction identity map to a
single `with` block.
"""

import logging
import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session, sessionmaker

from config.repository_config import get_repository_strategy
from constants import RepositoryStrategy
from exceptions import RepositoryError
from utils.logging_utils import clear_logging_context, set_logging_context

from .base_repository import AggregateRepository
from .identity_map import IdentityMap

logger = logging.getLogger(__name__)


class BookUnitOfWork:
    """
    Unit of work exposing the book repository of one strategy.

    Usage:
        with BookUnitOfWork(SessionLocal) as uow:
            book = uow.books.load("B1")
            book.retitle("Go, 2nd edition")
            uow.books.save(book)
            uow.commit()

    Leaving the block with an exception, or without calling commit(), rolls
    the transaction back. The session is closed and the identity map cleared
    either way, so loaded instances must not outlive the block.
    """

    def __init__(self, session_factory: sessionmaker, strategy: Optional[RepositoryStrategy] = None):
        """
        Initialize the Unit of Work.

        Args:
            session_factory: A SQLAlchemy sessionmaker instance
            strategy: Repository strategy; defaults to the configured one
        """
        if not callable(session_factory):
            raise TypeError("session_factory must be a SQLAlchemy sessionmaker instance or a callable factory.")
        self.session_factory = session_factory
        self.strategy = RepositoryStrategy(strategy) if strategy else get_repository_strategy()
        self.identity_map: IdentityMap = IdentityMap()
        self._session: Optional[Session] = None
        self._books: Optional[AggregateRepository] = None
        self._committed = False

    @property
    def session(self) -> Session:
        """
        Get the current session.

        Raises:
            RepositoryError: If no session is active (i.e., outside the `with` block)
        """
        if self._session is None:
            raise RepositoryError("Session is not active. Use 'with unit_of_work:' context.")
        return self._session

    @property
    def books(self) -> AggregateRepository:
        if self._books is None:
            raise RepositoryError("Repository is not available outside the unit of work context.")
        return self._books

    def __enter__(self) -> "BookUnitOfWork":
        # Imported here: dependencies imports the repositories package
        from dependencies import get_book_repository

        if self._session is not None:
            raise RepositoryError("Unit of work is already active.")

        self._session = self.session_factory()
        self._committed = False
        self._books = get_book_repository(self.strategy, self._session, self.identity_map)
        set_logging_context(transaction_id=uuid.uuid4().hex[:12], strategy=self.strategy.value)
        logger.debug(f"Started unit of work ({self.strategy.value})")
        return self

    def commit(self) -> None:
        self.session.commit()
        self._committed = True

    def rollback(self) -> None:
        self.session.rollback()

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any | None) -> None:
        session = self.session
        try:
            if exc_type is not None:
                logger.warning(f"Rolling back unit of work due to exception: {exc_val}")
                session.rollback()
            elif not self._committed:
                logger.debug("Unit of work ended without commit; rolling back.")
                session.rollback()
        finally:
            session.close()
            self.identity_map.clear()
            self._session = None
            self._books = None
            clear_logging_context()
