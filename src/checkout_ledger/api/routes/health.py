"""Health endpoint.

``/health`` reports liveness, the package version, the chain length, and the
result of a full chain audit.  The root ``/`` path belongs to the chain
router, so there is no separate identity endpoint.
"""

from fastapi import APIRouter

from checkout_ledger import __version__
from checkout_ledger.api.models import HealthResponse
from checkout_ledger.chain import Chain


def router(chain: Chain) -> APIRouter:
    """Build the health router for ``chain``."""
    api = APIRouter()

    @api.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        audit = chain.verify()
        return HealthResponse(
            status="ok",
            version=__version__,
            blocks=audit.length,
            integrity=audit.status,
        )

    return api
