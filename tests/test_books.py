"""Unit tests for book identifiers and registration."""

import hashlib

import pytest

from checkout_ledger.books import Book, book_identifier, register_book


@pytest.mark.unit
def test_identifier_is_md5_of_isbn_and_date():
    expected = hashlib.md5(b"978-01323508842008-08-01").hexdigest()
    assert book_identifier("978-0132350884", "2008-08-01") == expected


@pytest.mark.unit
def test_identifier_is_32_hex_chars():
    identifier = book_identifier("isbn", "date")
    assert len(identifier) == 32
    int(identifier, 16)


@pytest.mark.unit
def test_identifier_is_deterministic():
    assert book_identifier("1", "2") == book_identifier("1", "2")


@pytest.mark.unit
def test_identifier_changes_with_input():
    assert book_identifier("978-0", "2008") != book_identifier("978-1", "2008")
    assert book_identifier("978-0", "2008") != book_identifier("978-0", "2009")


@pytest.mark.unit
def test_register_book_replaces_id_and_keeps_fields():
    book = Book(
        id="client-chosen", title="Clean Code", author="R. Martin", isbn="1", published_date="2"
    )

    registered = register_book(book)

    assert registered.id == book_identifier("1", "2")
    assert registered.title == "Clean Code"
    assert registered.author == "R. Martin"
    assert book.id == "client-chosen"
