"""Book registration endpoint."""

import logging

from fastapi import APIRouter

from checkout_ledger.api.models import BookPayload
from checkout_ledger.books import register_book

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/new", response_model=BookPayload)
async def new_book(payload: BookPayload):
    """Register a book and return it with its content-derived ``id``."""
    book = register_book(payload.to_book())
    logger.info("Registered book %r (%s)", book.title, book.id)
    return BookPayload.from_book(book)
