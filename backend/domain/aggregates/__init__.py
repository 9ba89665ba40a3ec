"""
Domain Aggregates

Aggregates are clusters of domain objects that can be treated as a single unit.
The aggregate root is the only member of the aggregate that outside objects
are allowed to hold references to.

Examples:
- Book: title plus (expensive) content, persisted and retrieved as one unit
"""

from .book import Book, PlainBook

__all__ = ["Book", "PlainBook"]
