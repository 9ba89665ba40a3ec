"""
Book Service

Runs book use cases, each inside its own unit of work.
"""

from datetime import datetime
from typing import Callable, Union

from domain.aggregates import PlainBook
from dtos.internal import SaveResult
from dtos.request import NewBookRequest
from repositories.unit_of_work import BookUnitOfWork
from utils.logging_utils import log_operation


class BookService:
    """Service for book-related use cases."""

    def __init__(self, uow_factory: Callable[[], BookUnitOfWork]):
        """
        Initialize BookService.

        Args:
            uow_factory: Callable returning a fresh BookUnitOfWork per use case
        """
        self.uow_factory = uow_factory

    @log_operation("register_book")
    def register_book(self, request: NewBookRequest) -> str:
        """
        Store a new book.

        Returns:
            Key of the new book
        """
        with self.uow_factory() as uow:
            uow.books.add(PlainBook(request.key, request.title, request.content))
            uow.commit()
        return request.key

    @log_operation("read_book")
    def read_book(self, key: str, at: Union[datetime, str]) -> str:
        """
        Read a book, recording the reading.

        Returns:
            Content as it was before the reading was recorded

        Raises:
            NotFoundError: If the book does not exist
            ConflictError: If the book was modified concurrently
        """
        with self.uow_factory() as uow:
            book = uow.books.load(key)
            text = book.read(at)
            uow.books.save(book)
            uow.commit()
        return text

    @log_operation("retitle_book")
    def retitle_book(self, key: str, title: str) -> SaveResult:
        with self.uow_factory() as uow:
            book = uow.books.load(key)
            book.retitle(title)
            result = uow.books.save(book)
            uow.commit()
        return result

    @log_operation("revise_book")
    def revise_book(self, key: str, content: str) -> SaveResult:
        with self.uow_factory() as uow:
            book = uow.books.load(key)
            book.revise(content)
            result = uow.books.save(book)
            uow.commit()
        return result
