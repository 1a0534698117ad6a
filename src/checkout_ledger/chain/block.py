"""Block construction.

:func:`create_block` is the only way new blocks enter the system.  It links
the new block to its predecessor, stamps the creation time, and computes the
hash immediately, so every block it returns satisfies
``block.verify(block.hash)``.

The genesis block is built the same way, from the :data:`GENESIS_PARENT`
sentinel: a zero-value block at position ``-1`` with an empty hash.  That
gives genesis position ``0`` and an empty ``prev_hash``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from checkout_ledger.chain.errors import BlockSerializationError
from checkout_ledger.chain.hashing import compute_digest, serialize_payload
from checkout_ledger.chain.types import CheckoutRecord, HashBlock

#: The implicit "before genesis" predecessor.  Never stored in a chain.
GENESIS_PARENT = HashBlock(
    position=-1,
    data=CheckoutRecord(),
    timestamp="",
    hash="",
    prev_hash="",
)


def create_block(
    previous: HashBlock,
    data: CheckoutRecord,
    *,
    timestamp: str | None = None,
) -> HashBlock:
    """Build the block that follows ``previous``.

    ``previous`` is only read.  The new block takes position
    ``previous.position + 1`` and copies ``previous.hash`` into its
    ``prev_hash``.

    Args:
        previous:  Current last block of the chain (or :data:`GENESIS_PARENT`).
        data:      Payload to embed.
        timestamp: Creation time to record.  Defaults to the current UTC time
                   in ISO-8601 form; tests pass a fixed value.

    Returns:
        A new, fully hashed :class:`HashBlock`.

    Raises:
        BlockSerializationError: If ``data`` cannot be serialized.  No block
                                 is produced in that case.
    """
    position = previous.position + 1
    if timestamp is None:
        timestamp = datetime.now(UTC).isoformat()

    try:
        serialized = serialize_payload(data)
    except BlockSerializationError as exc:
        raise BlockSerializationError(str(exc), position=position) from exc

    return HashBlock(
        position=position,
        data=data,
        timestamp=timestamp,
        hash=compute_digest(position, timestamp, serialized, previous.hash),
        prev_hash=previous.hash,
    )


def genesis_block(*, timestamp: str | None = None) -> HashBlock:
    """Build the genesis block: position 0, empty ``prev_hash``, genesis payload."""
    return create_block(GENESIS_PARENT, CheckoutRecord(is_genesis=True), timestamp=timestamp)
