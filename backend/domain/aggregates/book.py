"""
Book Aggregate

The Book facade exposes business behaviour only. Every field access is routed
through the abstract accessors below, so a persistence layer can supply the
state however it likes (eagerly, lazily, straight from a database row...)
without the domain knowing about it.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Union

from domain.value_objects import BookKey
from exceptions import ValidationError


class Book(ABC):
    """
    Aggregate root for a book.

    State:
    - title: core field
    - content: potentially large body text
    """

    @property
    @abstractmethod
    def key(self) -> BookKey:
        """Identity of this book."""

    @abstractmethod
    def _get_title(self) -> str:
        pass

    @abstractmethod
    def _set_title(self, value: str) -> None:
        pass

    @abstractmethod
    def _get_content(self) -> str:
        pass

    @abstractmethod
    def _set_content(self, value: str) -> None:
        pass

    @property
    def title(self) -> str:
        return self._get_title()

    def retitle(self, new_title: str) -> None:
        """
        Give the book a new title.

        Raises:
            ValidationError: If the title is not a string or is blank
        """
        if not isinstance(new_title, str) or not new_title.strip():
            raise ValidationError("Title cannot be blank", {"title": new_title})
        self._set_title(new_title)

    def read(self, at: Union[datetime, str]) -> str:
        """
        Read the book and record when it was read.

        Args:
            at: Moment of reading; datetimes are rendered in ISO format

        Returns:
            The content as it was before this reading was recorded
        """
        text = self._get_content()
        moment = at.isoformat() if isinstance(at, datetime) else str(at)
        self._set_content(f"{text}: read at {moment}")
        return text

    def revise(self, text: str) -> None:
        """
        Replace the content of the book.

        Raises:
            ValidationError: If text is not a string
        """
        if not isinstance(text, str):
            raise ValidationError("Content must be a string", {"content": repr(text)})
        self._set_content(text)

    def word_count(self) -> int:
        return len(self._get_content().split())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key.value!r}>"


class PlainBook(Book):
    """Fully in-memory book, used for new aggregates and full loads."""

    def __init__(self, key: Union[BookKey, str], title: str, content: str = ''):
        self._key = BookKey.of(key)
        self._title = title
        self._content = content

    @property
    def key(self) -> BookKey:
        return self._key

    def _get_title(self) -> str:
        return self._title

    def _set_title(self, value: str) -> None:
        self._title = value

    def _get_content(self) -> str:
        return self._content

    def _set_content(self, value: str) -> None:
        self._content = value
