"""Tests for the ORM-backed repositories (mapped aggregate and wrapped record).

The SQL actually sent to the database is observed through the statement_log
fixture.
"""

import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from domain.aggregates import PlainBook
from exceptions import ConflictError, NotFoundError
from models import books_table
from repositories.identity_map import IdentityMap
from repositories.mapped_book_repository import MappedBook, MappedBookRepository
from repositories.record_book_repository import RecordBook, RecordBookRepository


@pytest.fixture(params=["mapped", "record"])
def orm_repo_factory(request):
    """Builds either ORM repository for a session"""
    if request.param == "mapped":
        return lambda db: MappedBookRepository(db)
    return lambda db: RecordBookRepository(db)


def _bump_version_behind_orm(db, key: str) -> None:
    db.execute(
        update(books_table)
        .where(books_table.c["key"] == key)
        .values(version=books_table.c["version"] + 1)
    )


class TestOrmLoad:
    """Test loading through the mapper."""

    def test_load_returns_facade_of_strategy(self, seeded_session) -> None:
        assert isinstance(MappedBookRepository(seeded_session).load("B1"), MappedBook)
        assert isinstance(RecordBookRepository(seeded_session).load("B1"), RecordBook)

    def test_load_missing_book_raises_not_found(self, seeded_session, orm_repo_factory) -> None:
        with pytest.raises(NotFoundError):
            orm_repo_factory(seeded_session).load("nope")

    def test_content_is_deferred_and_fetched_once(self, seeded_session, statement_log, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)

        book = repo.load("B1")
        assert book.title == "Go"
        assert statement_log.selects_of("content") == []

        assert book.word_count() == 2
        assert len(statement_log.selects_of("content")) == 1

        assert book.read("T") == "chapter text"
        assert len(statement_log.selects_of("content")) == 1


class TestOrmSave:
    """Test saving through the mapper."""

    def test_save_without_changes_is_noop(self, seeded_session, statement_log, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        book = repo.load("B1")
        book.word_count()

        result = repo.save(book)

        assert result.is_noop
        assert statement_log.updates() == []

    def test_scenario_only_content_is_written(self, seeded_session, statement_log, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        book = repo.load("B1")
        book.read("T")

        result = repo.save(book)

        assert result.written_fields == ("content",)
        assert result.version == 2
        updates = statement_log.updates()
        assert len(updates) == 1
        assert "content" in updates[0]
        assert "title" not in updates[0]

    def test_second_save_is_noop(self, seeded_session, statement_log, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        book = repo.load("B1")
        book.retitle("Go in Action")

        assert repo.save(book).written_fields == ("title",)
        assert repo.save(book).is_noop
        assert len(statement_log.updates()) == 1

    def test_round_trip(self, session_factory, seeded_session, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        book = repo.load("B1")
        book.revise("rewritten")
        repo.save(book)
        seeded_session.commit()

        other = session_factory()
        try:
            assert orm_repo_factory(other).load("B1").read("T") == "rewritten"
        finally:
            other.close()

    def test_concurrent_modification_raises_conflict(self, seeded_session, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        book = repo.load("B1")
        _bump_version_behind_orm(seeded_session, "B1")

        book.retitle("Too late")
        with pytest.raises(ConflictError) as exc_info:
            repo.save(book)
        assert exc_info.value.expected_version == 1

    def test_save_rejects_foreign_aggregates(self, seeded_session, orm_repo_factory) -> None:
        with pytest.raises(TypeError):
            orm_repo_factory(seeded_session).save(PlainBook("B1", "Go"))

    def test_add_then_load(self, seeded_session, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)
        repo.add(PlainBook("B2", "Rust", "ownership"))
        seeded_session.commit()

        book = repo.load("B2")
        assert book.title == "Rust"
        assert book.read("T") == "ownership"

    def test_add_duplicate_key_raises_integrity_error(self, seeded_session, orm_repo_factory) -> None:
        repo = orm_repo_factory(seeded_session)

        with pytest.raises(IntegrityError):
            repo.add(PlainBook("B1", "Other"))


class TestOrmIdentity:
    """Test repeated loads within one session."""

    def test_mapped_repeated_loads_share_session_instance(self, seeded_session) -> None:
        repo = MappedBookRepository(seeded_session)

        assert repo.load("B1") is repo.load("B1")

    def test_record_repeated_loads_with_identity_map(self, seeded_session) -> None:
        repo = RecordBookRepository(seeded_session, IdentityMap())

        first = repo.load("B1")
        first.retitle("Changed")

        assert repo.load("B1") is first
        assert repo.load("B1").title == "Changed"
