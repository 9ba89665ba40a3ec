"""
Shared save logic for the ORM-backed repositories.

With the ORM the Session already tracks loaded and modified attributes, so
these helpers only read its attribute history and flush.
"""

from typing import Mapping, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from exceptions import ConflictError
from utils.logging_utils import StructuredLogger

logger = StructuredLogger(__name__)


def modified_fields(instance, attributes: Mapping[str, str]) -> Tuple[str, ...]:
    """
    Names of the business fields whose mapped attribute has pending changes.

    Args:
        instance: Mapped instance
        attributes: Business field name to mapped attribute name
    """
    state = inspect(instance)
    return tuple(
        field for field, attr in attributes.items()
        if state.attrs[attr].history.has_changes()
    )


def flush_changes(db: Session, key: str, expected_version: int) -> None:
    """
    Flush pending ORM changes, translating a version mismatch into ConflictError.

    Other database errors propagate unchanged.
    """
    try:
        db.flush()
    except StaleDataError as e:
        logger.warning("Concurrent modification detected", extra={"key": key, "version": expected_version})
        raise ConflictError(key, expected_version) from e
