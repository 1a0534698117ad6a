"""
Pydantic models for API requests and responses.

Field names and aliases here define the JSON wire format:

- Checkout payloads use snake_case keys (``book_id``, ``user``,
  ``checkout_date``, ``is_genesis``).
- Blocks use the capitalised keys existing clients read (``Position``,
  ``Data``, ``TimeStamp``, ``Hash``, ``PrevHash``).
- Books use ``id``, ``title``, ``author``, ``published_date``, ``isbn``.

Every request field has a zero-value default, so a body that omits a field
is still accepted and recorded with ``""`` / ``false``.

A checkout whose text holds a lone surrogate escape (``"\\ud800"``) still
decodes; the chain refuses it as ``serialization_failed``.  Book fields must
be encodable as UTF-8 because the identifier is hashed from them, so such a
book is refused with ``422``.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from checkout_ledger.books import Book
from checkout_ledger.chain import CheckoutRecord, HashBlock

# ============================================================================
# CHECKOUTS
# ============================================================================


class CheckoutPayload(BaseModel):
    """
    A checkout event as sent by clients and echoed back after an append.

    Attributes:
        book_id: Identifier of the book being checked out
        user: Identifier of the borrowing user
        checkout_date: Human-readable checkout date
        is_genesis: Only true for the genesis block's payload
    """

    book_id: str = ""
    user: str = ""
    checkout_date: str = ""
    is_genesis: bool = False

    def to_record(self) -> CheckoutRecord:
        return CheckoutRecord(
            book_id=self.book_id,
            user=self.user,
            checkout_date=self.checkout_date,
            is_genesis=self.is_genesis,
        )

    @classmethod
    def from_record(cls, record: CheckoutRecord) -> "CheckoutPayload":
        return cls(
            book_id=record.book_id,
            user=record.user,
            checkout_date=record.checkout_date,
            is_genesis=record.is_genesis,
        )


class BlockResponse(BaseModel):
    """
    One block of the chain as returned by ``GET /``.

    Serialized by alias, so the JSON keys are ``Position``, ``Data``,
    ``TimeStamp``, ``Hash`` and ``PrevHash``.
    """

    model_config = ConfigDict(populate_by_name=True)

    position: int = Field(alias="Position")
    data: CheckoutPayload = Field(alias="Data")
    timestamp: str = Field(alias="TimeStamp")
    hash: str = Field(alias="Hash")
    prev_hash: str = Field(alias="PrevHash")

    @classmethod
    def from_block(cls, block: HashBlock) -> "BlockResponse":
        return cls(
            position=block.position,
            data=CheckoutPayload.from_record(block.data),
            timestamp=block.timestamp,
            hash=block.hash,
            prev_hash=block.prev_hash,
        )


# ============================================================================
# BOOKS
# ============================================================================


class BookPayload(BaseModel):
    """
    A book registration request, and the registered book in the response.

    ``id`` is ignored on input and replaced by the content-derived identifier.
    """

    id: str = ""
    title: str = ""
    author: str = ""
    published_date: str = ""
    isbn: str = ""

    @field_validator("id", "title", "author", "published_date", "isbn")
    @classmethod
    def text_must_be_utf8(cls, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"text is not valid UTF-8: {exc.reason}") from exc
        return value

    def to_book(self) -> Book:
        return Book(
            id=self.id,
            title=self.title,
            author=self.author,
            published_date=self.published_date,
            isbn=self.isbn,
        )

    @classmethod
    def from_book(cls, book: Book) -> "BookPayload":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            published_date=book.published_date,
            isbn=book.isbn,
        )


# ============================================================================
# HEALTH
# ============================================================================


class HealthResponse(BaseModel):
    """
    Liveness report.

    Attributes:
        status: Always "ok" while the process is serving
        version: Installed package version
        blocks: Current chain length
        integrity: Result of a full chain audit ("ok" or "corrupt")
    """

    status: str
    version: str
    blocks: int
    integrity: str
