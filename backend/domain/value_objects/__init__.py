"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- BookKey: Opaque identity of a Book aggregate
"""

from .book_key import BookKey

__all__ = ["BookKey"]
