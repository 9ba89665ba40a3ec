"""
Service layer running use cases on top of the repositories.
"""

from .book_service import BookService

__all__ = ["BookService"]
