"""The in-memory checkout chain.

:class:`Chain` owns an ordered, append-only sequence of
:class:`~checkout_ledger.chain.types.HashBlock` objects, starting with the
genesis block.  One instance is created at startup and injected into the
HTTP routers; it lives for the lifetime of the process.

Validation
----------
A candidate block is accepted only if all three checks pass, evaluated in
this order (first failure wins):

1. ``previous.hash == candidate.prev_hash``          - linkage
2. ``candidate.verify(candidate.hash)``              - self-consistency
3. ``previous.position + 1 == candidate.position``   - ordering

A rejected append leaves the chain unchanged.  The reason is returned in an
:class:`~checkout_ledger.chain.types.AppendResult` and logged at WARNING.

Concurrency
-----------
``append`` holds ``_write_lock`` across the whole read-last / build /
validate / commit sequence, so two concurrent appends can never build on the
same predecessor.  Committed blocks are stored in a tuple that is replaced
wholesale on every successful append.  Readers take the current tuple
without locking and can never observe a partially appended state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from checkout_ledger.chain.block import create_block, genesis_block
from checkout_ledger.chain.errors import BlockSerializationError
from checkout_ledger.chain.types import (
    AppendOutcome,
    AppendResult,
    ChainVerifyResult,
    CheckoutRecord,
    HashBlock,
)

logger = logging.getLogger(__name__)


def validate_candidate(previous: HashBlock, candidate: HashBlock) -> AppendOutcome:
    """Decide whether ``candidate`` may follow ``previous``.

    Returns:
        :attr:`AppendOutcome.ACCEPTED` or the first failing check.
    """
    if previous.hash != candidate.prev_hash:
        return AppendOutcome.LINKAGE_MISMATCH
    if not candidate.verify(candidate.hash):
        return AppendOutcome.SELF_HASH_MISMATCH
    if previous.position + 1 != candidate.position:
        return AppendOutcome.POSITION_MISMATCH
    return AppendOutcome.ACCEPTED


def _genesis_problem(block: HashBlock) -> str | None:
    if block.position != 0 or block.prev_hash != "" or not block.data.is_genesis:
        return "Genesis block has the wrong shape."
    if not block.verify(block.hash):
        return "Genesis block hash does not match its contents."
    return None


class Chain:
    """Append-only hash chain of checkout records.

    Args:
        genesis: Genesis block to start from.  Defaults to a freshly built
                 one; tests pass a block with a fixed timestamp.

    Raises:
        ValueError: ``genesis`` is not at position 0, has a parent hash, is
                    not flagged ``is_genesis`` or does not hash to itself.
    """

    def __init__(self, genesis: HashBlock | None = None) -> None:
        genesis = genesis or genesis_block()
        problem = _genesis_problem(genesis)
        if problem is not None:
            raise ValueError(f"Not a valid genesis block: {problem}")
        self._blocks: tuple[HashBlock, ...] = (genesis,)
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[HashBlock]:
        return iter(self._blocks)

    @property
    def last_block(self) -> HashBlock:
        return self._blocks[-1]

    def snapshot(self) -> tuple[HashBlock, ...]:
        """Return the full chain, oldest block first.

        The tuple and the frozen blocks it holds cannot be mutated, and later
        appends do not affect it.
        """
        return self._blocks

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, data: CheckoutRecord, *, timestamp: str | None = None) -> AppendResult:
        """Build a block for ``data`` on top of the last block and append it.

        Args:
            data:      Checkout payload to record.
            timestamp: Optional fixed creation time (tests only).

        Returns:
            :class:`AppendResult`.  The chain grows by one block only when
            ``result.accepted`` is true.
        """
        with self._write_lock:
            previous = self._blocks[-1]
            try:
                candidate = create_block(previous, data, timestamp=timestamp)
            except BlockSerializationError as exc:
                logger.warning("chain: rejected append at position %d: %s", exc.position, exc)
                return AppendResult(
                    outcome=AppendOutcome.SERIALIZATION_FAILED,
                    block=None,
                    length=len(self._blocks),
                )
            return self._commit(previous, candidate)

    def append_block(self, candidate: HashBlock) -> AppendResult:
        """Validate a pre-built block against the last block and append it."""
        with self._write_lock:
            return self._commit(self._blocks[-1], candidate)

    def _commit(self, previous: HashBlock, candidate: HashBlock) -> AppendResult:
        # Caller holds _write_lock.
        outcome = validate_candidate(previous, candidate)
        if outcome is AppendOutcome.ACCEPTED:
            self._blocks = (*self._blocks, candidate)
            logger.debug(
                "chain: appended block %d (%s) for book %r",
                candidate.position,
                candidate.hash[:12],
                candidate.data.book_id,
            )
        else:
            logger.warning(
                "chain: rejected block at position %d: %s",
                candidate.position,
                outcome.value,
            )
        return AppendResult(outcome=outcome, block=candidate, length=len(self._blocks))

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    def verify(self) -> ChainVerifyResult:
        """Re-check every block and link of the stored chain.

        Intended as a diagnostic (startup and ``/health``).  Nothing is
        modified; a ``"corrupt"`` result reports the first failing position.
        """
        blocks = self._blocks
        genesis = blocks[0]

        if genesis.position != 0 or genesis.prev_hash != "" or not genesis.data.is_genesis:
            return ChainVerifyResult(
                status="corrupt",
                length=len(blocks),
                first_bad_position=genesis.position,
                error_detail="Genesis block has the wrong shape.",
            )
        if not genesis.verify(genesis.hash):
            return ChainVerifyResult(
                status="corrupt",
                length=len(blocks),
                first_bad_position=0,
                error_detail="Genesis block hash does not match its contents.",
            )

        for previous, current in zip(blocks, blocks[1:]):
            outcome = validate_candidate(previous, current)
            if outcome is not AppendOutcome.ACCEPTED:
                return ChainVerifyResult(
                    status="corrupt",
                    length=len(blocks),
                    first_bad_position=current.position,
                    error_detail=f"Block {current.position} failed validation: {outcome.value}.",
                )

        return ChainVerifyResult(status="ok", length=len(blocks))
