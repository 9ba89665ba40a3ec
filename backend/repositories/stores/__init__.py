"""
Backing stores for the field-level repositories.

Each backing technology implements FieldStore once.
"""

from .base import FieldStore
from .memory_store import MemoryFieldStore
from .sql_store import SqlFieldStore

__all__ = [
    "FieldStore",
    "MemoryFieldStore",
    "SqlFieldStore",
]
