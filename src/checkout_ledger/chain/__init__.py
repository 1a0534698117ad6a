"""Chain package - the hash-linked checkout ledger core.

Public surface
--------------
- :class:`Chain`               - owns the blocks; validated append, snapshot read.
- :class:`CheckoutRecord`      - payload embedded in each block.
- :class:`HashBlock`           - one immutable link of the chain.
- :func:`create_block`         - build the block that follows another.
- :func:`genesis_block`        - build a genesis block.
- :func:`compute_digest`       - the SHA-256 linkage digest.
- :class:`AppendOutcome`       - accepted, or which check rejected the block.
- :class:`AppendResult`        - returned by :meth:`Chain.append`.
- :class:`ChainVerifyResult`   - returned by :meth:`Chain.verify`.
- :exc:`BlockSerializationError` - payload could not be canonically serialized.

Usage example
-------------
::

    from checkout_ledger.chain import Chain, CheckoutRecord

    chain = Chain()
    result = chain.append(CheckoutRecord(book_id="b-1", user="ada"))
    if not result.accepted:
        logger.warning("Checkout not recorded: %s", result.outcome.value)
"""

from checkout_ledger.chain.block import GENESIS_PARENT, create_block, genesis_block
from checkout_ledger.chain.errors import BlockSerializationError
from checkout_ledger.chain.hashing import compute_digest, serialize_payload
from checkout_ledger.chain.ledger import Chain, validate_candidate
from checkout_ledger.chain.types import (
    AppendOutcome,
    AppendResult,
    ChainVerifyResult,
    CheckoutRecord,
    HashBlock,
)

__all__ = [
    "GENESIS_PARENT",
    "AppendOutcome",
    "AppendResult",
    "BlockSerializationError",
    "Chain",
    "ChainVerifyResult",
    "CheckoutRecord",
    "HashBlock",
    "compute_digest",
    "create_block",
    "genesis_block",
    "serialize_payload",
    "validate_candidate",
]
