import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from database import Base
from domain.value_objects import BookKey
from repositories.stores import MemoryFieldStore, SqlFieldStore
import models  # noqa: F401  (registers the books table)
import repositories  # noqa: F401  (registers the MappedBook mapping)


class CountingFieldStore:
    """Spy around a FieldStore recording every call made to it."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def count(self, method, *args):
        return sum(1 for call in self.calls if call[0] == method and call[1:1 + len(args)] == args)

    def __getattr__(self, name):
        target = getattr(self.inner, name)
        if not callable(target):
            return target

        def spy(*args, **kwargs):
            self.calls.append((name,) + tuple(a.value if hasattr(a, 'value') else a for a in args))
            return target(*args, **kwargs)

        return spy


class StatementLog:
    """Collects SQL statements executed on an engine."""

    def __init__(self):
        self.statements = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        self.statements.append(statement)

    def clear(self):
        self.statements.clear()

    def selects_of(self, column: str):
        return [s for s in self.statements if s.lstrip().upper().startswith("SELECT") and column in s]

    def updates(self):
        return [s for s in self.statements if s.lstrip().upper().startswith("UPDATE")]


@pytest.fixture
def engine(tmp_path):
    """Throwaway SQLite database; a file so each session gets its own connection"""
    engine = create_engine(f"sqlite:///{tmp_path / 'books.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session on the throwaway database"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def statement_log(engine):
    log = StatementLog()
    event.listen(engine, "before_cursor_execute", log)
    yield log
    event.remove(engine, "before_cursor_execute", log)


@pytest.fixture(params=["memory", "sql"])
def field_store(request, db_session):
    """Every FieldStore backend, seeded with book B1"""
    store = MemoryFieldStore() if request.param == "memory" else SqlFieldStore(db_session)
    store.insert(BookKey("B1"), {"title": "Go", "content": "chapter text"})
    return store


@pytest.fixture
def counting_store(field_store):
    return CountingFieldStore(field_store)


@pytest.fixture
def seeded_session(db_session):
    """Session whose database holds book B1, committed"""
    SqlFieldStore(db_session).insert(BookKey("B1"), {"title": "Go", "content": "chapter text"})
    db_session.commit()
    return db_session
