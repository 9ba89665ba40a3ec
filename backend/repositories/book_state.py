"""
Helpers reading a Book's state from the persistence side of the boundary.
"""

from typing import Any, Dict

from constants import BookField
from domain.aggregates import Book


def read_state(book: Book) -> Dict[str, Any]:
    """Full business state of a book, read through its accessors."""
    return {
        BookField.TITLE: book._get_title(),
        BookField.CONTENT: book._get_content(),
    }
