"""Book registration.

A registered book gets a content-derived identifier: the MD5 hex digest of
its ISBN followed by its published date.  The same pair always produces the
same identifier.  MD5 is used as a compact fingerprint here, not for
integrity; the checkout chain itself uses SHA-256.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Book:
    """A book record as submitted for registration."""

    id: str = ""
    title: str = ""
    author: str = ""
    published_date: str = ""
    isbn: str = ""


def book_identifier(isbn: str, published_date: str) -> str:
    """Return the 32-character hex identifier for ``(isbn, published_date)``."""
    digest = hashlib.md5((isbn + published_date).encode("utf-8"), usedforsecurity=False)
    return digest.hexdigest()


def register_book(book: Book) -> Book:
    """Return a copy of ``book`` with its ``id`` derived from ISBN and date.

    Any ``id`` supplied by the caller is replaced.
    """
    return replace(book, id=book_identifier(book.isbn, book.published_date))
