"""
Repository Configuration

Resolves persistence settings from the environment.

Controlled by:
- BOOKSHELF_DATABASE_URL: SQLAlchemy URL of the backing database
- BOOKSHELF_REPOSITORY_STRATEGY: which repository strategy to build (default: tracking)
- BOOKSHELF_SQL_ECHO: log every SQL statement when set to 'true'
"""
import os
import logging

from constants import RepositoryStrategy
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = 'sqlite:///bookshelf.db'
DEFAULT_STRATEGY = RepositoryStrategy.TRACKING

DATABASE_URL_ENV = 'BOOKSHELF_DATABASE_URL'
STRATEGY_ENV = 'BOOKSHELF_REPOSITORY_STRATEGY'
SQL_ECHO_ENV = 'BOOKSHELF_SQL_ECHO'


def get_database_url() -> str:
    """
    Get the database URL for the backing store.

    Returns:
        URL from BOOKSHELF_DATABASE_URL, or a local SQLite file
    """
    url = os.environ.get(DATABASE_URL_ENV, '').strip()
    return url or DEFAULT_DATABASE_URL


def get_repository_strategy() -> RepositoryStrategy:
    """
    Get the configured repository strategy.

    Returns:
        RepositoryStrategy selected by BOOKSHELF_REPOSITORY_STRATEGY

    Raises:
        ConfigurationError: If the variable names an unknown strategy
    """
    raw = os.environ.get(STRATEGY_ENV, '').strip()
    if not raw:
        return DEFAULT_STRATEGY

    try:
        strategy = RepositoryStrategy.from_string(raw)
    except ValueError:
        valid = ", ".join(s.value for s in RepositoryStrategy)
        raise ConfigurationError(
            f"Unknown repository strategy '{raw}' (expected one of: {valid})",
            missing_keys=[STRATEGY_ENV],
        )

    logger.info(f"Repository strategy: {strategy.value}")
    return strategy


def is_sql_echo_enabled() -> bool:
    """
    Check if SQL statement echo is enabled.

    Returns:
        True if BOOKSHELF_SQL_ECHO is set to 'true' (case-insensitive)
    """
    return os.environ.get(SQL_ECHO_ENV, 'false').lower() in ('true', '1', 'yes')
