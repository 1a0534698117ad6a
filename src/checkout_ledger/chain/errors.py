"""Exceptions raised by the hash-chain core."""

from __future__ import annotations


class BlockSerializationError(ValueError):
    """Raised when a checkout payload cannot be canonically serialized.

    A block whose payload cannot be serialized has no valid hash.  Block
    construction raises this instead of producing a block with a stale or
    empty hash; :meth:`~checkout_ledger.chain.ledger.Chain.append` converts it
    into :attr:`~checkout_ledger.chain.types.AppendOutcome.SERIALIZATION_FAILED`
    so a bad payload is never fatal to the process.

    Attributes:
        position: Position the block would have occupied, or ``None`` when
                  serialization failed outside block construction.
    """

    def __init__(self, message: str, *, position: int | None = None) -> None:
        self.position = position
        super().__init__(message)
