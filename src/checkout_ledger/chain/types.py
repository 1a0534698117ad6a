"""Immutable value types for the checkout hash chain.

:class:`CheckoutRecord` is the payload embedded in every block.
:class:`HashBlock` is one link of the chain.  Both are frozen: once a block
has been built its fields never change, and verification recomputes the
hash into a local value rather than writing it back.

:class:`AppendResult` and :class:`ChainVerifyResult` are the result objects
returned by :class:`~checkout_ledger.chain.ledger.Chain`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Literal

from checkout_ledger.chain.errors import BlockSerializationError
from checkout_ledger.chain.hashing import compute_digest, serialize_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutRecord:
    """One book checkout event.

    Every field defaults to its zero value so a request body that omits a
    field still decodes into a record.

    Attributes:
        book_id:       Identifier of the book being checked out.
        user:          Identifier of the borrowing user.
        checkout_date: Human-readable checkout date, stored verbatim.
        is_genesis:    ``True`` only for the synthetic payload of the
                       genesis block.
    """

    book_id: str = ""
    user: str = ""
    checkout_date: str = ""
    is_genesis: bool = False


@dataclass(frozen=True)
class HashBlock:
    """A single block of the checkout chain.

    Attributes:
        position:  Zero-based index in the chain.  Genesis is ``0``.
        data:      The embedded :class:`CheckoutRecord`.
        timestamp: ISO-8601 creation time, assigned once at construction.
        hash:      64-character hex SHA-256 digest of ``position``,
                   ``timestamp``, the serialized ``data`` and ``prev_hash``.
        prev_hash: ``hash`` of the preceding block; ``""`` for genesis.
    """

    position: int
    data: CheckoutRecord
    timestamp: str
    hash: str
    prev_hash: str

    def recompute_hash(self) -> str:
        """Return the digest of this block's own fields.

        Raises:
            BlockSerializationError: If ``data`` cannot be serialized.
        """
        return compute_digest(
            self.position,
            self.timestamp,
            serialize_payload(self.data),
            self.prev_hash,
        )

    def verify(self, claimed_hash: str) -> bool:
        """Check that ``claimed_hash`` matches the digest of this block.

        The stored ``hash`` is never touched.  A payload that cannot be
        serialized has no valid digest, so the block does not verify.
        """
        try:
            recomputed = self.recompute_hash()
        except BlockSerializationError as exc:
            logger.warning("chain: block %d cannot be verified: %s", self.position, exc)
            return False
        return recomputed == claimed_hash


class AppendOutcome(enum.Enum):
    """Why an append attempt did or did not grow the chain."""

    ACCEPTED = "accepted"
    LINKAGE_MISMATCH = "linkage_mismatch"
    SELF_HASH_MISMATCH = "self_hash_mismatch"
    POSITION_MISMATCH = "position_mismatch"
    SERIALIZATION_FAILED = "serialization_failed"


@dataclass(frozen=True)
class AppendResult:
    """Result of :meth:`~checkout_ledger.chain.ledger.Chain.append`.

    Attributes:
        outcome: :class:`AppendOutcome` describing the attempt.
        block:   The candidate block, or ``None`` if none could be built
                 (serialization failure).  Only committed when ``accepted``.
        length:  Number of blocks in the chain after the attempt.
    """

    outcome: AppendOutcome
    block: HashBlock | None
    length: int

    @property
    def accepted(self) -> bool:
        return self.outcome is AppendOutcome.ACCEPTED


@dataclass(frozen=True)
class ChainVerifyResult:
    """Result of a full-chain audit performed by :meth:`Chain.verify`.

    Attributes:
        status:         ``"ok"`` when every block and link checks out,
                        ``"corrupt"`` otherwise.
        length:         Number of blocks inspected.
        first_bad_position: Position of the first failing block, or ``None``.
        error_detail:   Human-readable failure reason, or ``None``.
    """

    status: Literal["ok", "corrupt"]
    length: int
    first_bad_position: int | None = None
    error_detail: str | None = None
