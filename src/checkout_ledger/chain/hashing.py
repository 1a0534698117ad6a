"""Canonical payload serialization and block digests.

Digest input
------------
A block hash is the SHA-256 of four fields joined by ``"\\n"``::

    <position as decimal text>
    <timestamp>
    <canonical JSON of the payload>
    <previous block hash>

Position is hashed as its decimal text (``"0"``, ``"12"``), never as a raw
byte.  The newline separator keeps the field boundaries unambiguous: the
canonical JSON escapes newlines inside strings, and neither ISO-8601
timestamps nor hex digests contain one.

The payload is serialized with ``ensure_ascii=False, sort_keys=True`` so the
byte representation is stable regardless of field declaration order.
Re-serializing during verification therefore reproduces the exact bytes
hashed at construction time.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from checkout_ledger.chain.errors import BlockSerializationError

if TYPE_CHECKING:
    from checkout_ledger.chain.types import CheckoutRecord

_FIELD_SEPARATOR = "\n"


def serialize_payload(data: CheckoutRecord) -> str:
    """Return the canonical JSON form of a checkout payload.

    The result is also checked to encode as strict UTF-8, since that is the
    form fed to the hash function.  Lone surrogates survive ``json.dumps``
    with ``ensure_ascii=False`` but cannot be encoded.

    Raises:
        BlockSerializationError: If the payload is not JSON-serialisable or
                                 does not encode as UTF-8.
    """
    try:
        canonical = json.dumps(asdict(data), ensure_ascii=False, sort_keys=True)
        canonical.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise BlockSerializationError(f"Cannot serialize checkout payload: {exc}") from exc
    return canonical


def compute_digest(position: int, timestamp: str, serialized_payload: str, prev_hash: str) -> str:
    """Compute the SHA-256 hex digest that links a block into the chain.

    Args:
        position:           Block position.  Hashed as decimal text.
        timestamp:          Block creation timestamp, verbatim.
        serialized_payload: Output of :func:`serialize_payload`.
        prev_hash:          Hash of the preceding block (``""`` for genesis).

    Returns:
        64-character lowercase hex digest.

    Example::

        digest = compute_digest(0, "2026-10-19T10:00:00+00:00", "{}", "")
        assert len(digest) == 64
        assert digest == compute_digest(0, "2026-10-19T10:00:00+00:00", "{}", "")
    """
    material = _FIELD_SEPARATOR.join((str(position), timestamp, serialized_payload, prev_hash))
    return hashlib.sha256(material.encode("utf-8")).hexdigest()
