"""Tests for the per-transaction identity map."""

import gc

from domain.aggregates import PlainBook
from domain.value_objects import BookKey
from repositories.identity_map import IdentityMap


class TestIdentityMap:
    """Test IdentityMap caching."""

    def test_add_and_get(self) -> None:
        identity_map = IdentityMap()
        book = PlainBook("B1", "Go")

        identity_map.add(book.key, book)

        assert identity_map.get(BookKey("B1")) is book
        assert BookKey("B1") in identity_map
        assert identity_map.get(BookKey("B2")) is None

    def test_entries_do_not_keep_books_alive(self) -> None:
        identity_map = IdentityMap()
        identity_map.add(BookKey("B1"), PlainBook("B1", "Go"))
        gc.collect()

        assert len(identity_map) == 0

    def test_clear(self) -> None:
        identity_map = IdentityMap()
        book = PlainBook("B1", "Go")
        identity_map.add(book.key, book)

        identity_map.clear()

        assert identity_map.get(book.key) is None
