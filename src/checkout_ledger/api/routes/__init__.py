"""
Route registration entry point for the FastAPI application.

Each router module builds its endpoints around the objects it needs; the
chain instance is passed in explicitly rather than read from a global.
"""

from fastapi import FastAPI

from checkout_ledger.api.routes import books, chain, health
from checkout_ledger.chain import Chain
from checkout_ledger.config import ChainSettings


def register_routes(app: FastAPI, ledger: Chain, settings: ChainSettings) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router(ledger))
    app.include_router(chain.router(ledger, settings))
    app.include_router(books.router)
