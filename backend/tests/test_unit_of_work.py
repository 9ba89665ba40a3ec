"""Tests for BookUnitOfWork and the repository factory."""

import pytest

from constants import RepositoryStrategy
from dependencies import get_book_repository
from exceptions import RepositoryError
from repositories.direct_book_repository import DirectBookRepository
from repositories.full_book_repository import FullBookRepository
from repositories.mapped_book_repository import MappedBookRepository
from repositories.record_book_repository import RecordBookRepository
from repositories.tracking_book_repository import TrackingBookRepository
from repositories.unit_of_work import BookUnitOfWork


class TestRepositoryFactory:
    """Test get_book_repository."""

    @pytest.mark.parametrize("strategy, expected", [
        (RepositoryStrategy.FULL, FullBookRepository),
        (RepositoryStrategy.MAPPED, MappedBookRepository),
        (RepositoryStrategy.TRACKING, TrackingBookRepository),
        (RepositoryStrategy.RECORD, RecordBookRepository),
        (RepositoryStrategy.DIRECT, DirectBookRepository),
    ])
    def test_builds_repository_per_strategy(self, db_session, strategy, expected) -> None:
        repo = get_book_repository(strategy, db_session)

        assert isinstance(repo, expected)
        assert repo.strategy == strategy

    def test_accepts_strategy_strings(self, db_session) -> None:
        assert isinstance(get_book_repository("tracking", db_session), TrackingBookRepository)


@pytest.mark.parametrize("strategy", list(RepositoryStrategy))
class TestBookUnitOfWork:
    """Test transaction scoping for every strategy."""

    def test_committed_changes_persist(self, session_factory, seeded_session, strategy) -> None:
        with BookUnitOfWork(session_factory, strategy) as uow:
            book = uow.books.load("B1")
            book.retitle("Go in Action")
            uow.books.save(book)
            uow.commit()

        with BookUnitOfWork(session_factory, strategy) as uow:
            assert uow.books.load("B1").title == "Go in Action"

    def test_uncommitted_changes_roll_back(self, session_factory, seeded_session, strategy) -> None:
        with BookUnitOfWork(session_factory, strategy) as uow:
            book = uow.books.load("B1")
            book.retitle("Discarded")
            uow.books.save(book)

        with BookUnitOfWork(session_factory, strategy) as uow:
            assert uow.books.load("B1").title == "Go"

    def test_exception_rolls_back_and_propagates(self, session_factory, seeded_session, strategy) -> None:
        with pytest.raises(RuntimeError):
            with BookUnitOfWork(session_factory, strategy) as uow:
                book = uow.books.load("B1")
                book.retitle("Discarded")
                uow.books.save(book)
                raise RuntimeError("boom")

        with BookUnitOfWork(session_factory, strategy) as uow:
            assert uow.books.load("B1").title == "Go"

    def test_repeated_loads_return_same_instance(self, session_factory, seeded_session, strategy) -> None:
        with BookUnitOfWork(session_factory, strategy) as uow:
            first = uow.books.load("B1")
            first.retitle("Changed in memory")
            second = uow.books.load("B1")

            assert second is first
            assert second.title == "Changed in memory"

    def test_repository_unavailable_outside_block(self, session_factory, seeded_session, strategy) -> None:
        uow = BookUnitOfWork(session_factory, strategy)

        with pytest.raises(RepositoryError):
            uow.books

        with uow:
            uow.books.load("B1")

        with pytest.raises(RepositoryError):
            uow.session
        assert len(uow.identity_map) == 0


class TestUnitOfWorkConfiguration:
    """Test the default strategy resolution."""

    def test_uses_configured_strategy(self, session_factory, monkeypatch) -> None:
        monkeypatch.setenv("BOOKSHELF_REPOSITORY_STRATEGY", "direct")

        assert BookUnitOfWork(session_factory).strategy == RepositoryStrategy.DIRECT

    def test_defaults_to_tracking(self, session_factory, monkeypatch) -> None:
        monkeypatch.delenv("BOOKSHELF_REPOSITORY_STRATEGY", raising=False)

        assert BookUnitOfWork(session_factory).strategy == RepositoryStrategy.TRACKING
