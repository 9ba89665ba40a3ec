"""
Repository layer for aggregate persistence.

Each repository class implements one persistence strategy behind the same
load/save surface. The persistence-specific Book subclasses live here, on
this side of the domain boundary.
"""

from .base_repository import AggregateRepository
from .direct_book_repository import DirectBook, DirectBookRepository
from .field_tracker import FieldTracker
from .full_book_repository import FullBookRepository, LoadedBook
from .identity_map import IdentityMap
from .mapped_book_repository import MappedBook, MappedBookRepository
from .record_book_repository import RecordBook, RecordBookRepository
from .tracking_book_repository import LazyBook, TrackingBookRepository
from .unit_of_work import BookUnitOfWork

__all__ = [
    "AggregateRepository",
    "BookUnitOfWork",
    "DirectBook",
    "DirectBookRepository",
    "FieldTracker",
    "FullBookRepository",
    "IdentityMap",
    "LazyBook",
    "LoadedBook",
    "MappedBook",
    "MappedBookRepository",
    "RecordBook",
    "RecordBookRepository",
    "TrackingBookRepository",
]
