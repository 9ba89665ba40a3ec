from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config.repository_config import get_database_url, is_sql_echo_enabled

Base = declarative_base()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_database_engine(url: str | None = None) -> Engine:
    """
    Create an engine for the backing store.

    SQLite connections get WAL mode and a busy timeout on connect.
    """
    url = url or get_database_url()
    is_sqlite = url.startswith('sqlite')

    engine = create_engine(
        url,
        connect_args={'check_same_thread': False} if is_sqlite else {},
        echo=is_sql_echo_enabled(),
        pool_pre_ping=True,  # Verify connections are alive before using
    )

    if is_sqlite:
        event.listen(engine, "connect", _set_sqlite_pragma)

    return engine


engine = create_database_engine()
SessionLocal = sessionmaker(bind=engine)


def get_db():
    """Yield a session for one unit of work, closing it afterwards"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that don't exist yet."""
    # Registers the mapped classes on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind or engine)

