"""Chain endpoints: read the whole chain and append a checkout.

``POST /`` keeps the wire behaviour existing clients rely on: the decoded
payload is echoed back with ``200`` whether or not the block was accepted.
The real outcome is reported in the ``X-Ledger-Append`` header (an
:class:`~checkout_ledger.chain.AppendOutcome` value) together with the chain
length in ``X-Ledger-Length``.  The chain logs each rejection at WARNING.

With ``[chain] strict_append`` enabled, a rejected append answers ``409``
with the outcome as ``detail`` instead.
"""

import logging

from fastapi import APIRouter, HTTPException, Response

from checkout_ledger.api.models import BlockResponse, CheckoutPayload
from checkout_ledger.chain import Chain
from checkout_ledger.config import ChainSettings

logger = logging.getLogger(__name__)

APPEND_OUTCOME_HEADER = "X-Ledger-Append"
CHAIN_LENGTH_HEADER = "X-Ledger-Length"


def router(chain: Chain, settings: ChainSettings) -> APIRouter:
    """Build the chain router bound to ``chain``."""
    api = APIRouter()

    @api.get("/", response_model=list[BlockResponse])
    async def get_chain():
        """Return every block, genesis first."""
        return [BlockResponse.from_block(block) for block in chain.snapshot()]

    @api.post("/", response_model=CheckoutPayload)
    async def write_block(payload: CheckoutPayload, response: Response):
        """Append a checkout to the chain and echo the payload."""
        result = chain.append(payload.to_record())
        headers = {
            APPEND_OUTCOME_HEADER: result.outcome.value,
            CHAIN_LENGTH_HEADER: str(result.length),
        }

        if not result.accepted:
            logger.debug(
                "Checkout of book %r by %r was not recorded: %s",
                payload.book_id,
                payload.user,
                result.outcome.value,
            )
            if settings.strict_append:
                raise HTTPException(status_code=409, detail=result.outcome.value, headers=headers)

        response.headers.update(headers)
        return payload

    return api
