"""
FastAPI backend server for the checkout ledger.

This module builds the FastAPI application that serves the chain. It sets up:
- CORS middleware from the [security] config section
- The Chain instance that holds every checkout block
- All API route endpoints (chain read/append, book registration, health)

The chain lives in memory only; it is created when the application is built
and discarded when the process exits. The server listens on port 3000 by
default.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from checkout_ledger import __version__
from checkout_ledger.api.responses import EscapedJSONResponse, validation_exception_handler
from checkout_ledger.api.routes import register_routes
from checkout_ledger.chain import Chain
from checkout_ledger.config import ServerConfig, config

logger = logging.getLogger(__name__)


def log_chain(chain: Chain) -> None:
    """Log every block of ``chain`` at INFO, followed by the audit result."""
    for block in chain.snapshot():
        logger.info(
            "Block %d  hash=%s  prev=%s  data=%s",
            block.position,
            block.hash,
            block.prev_hash or "-",
            block.data,
        )
    audit = chain.verify()
    if audit.status == "corrupt":
        logger.critical("Chain integrity failure: %s", audit.error_detail)
    else:
        logger.info("Chain OK, %d block(s).", audit.length)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================


def create_app(chain: Chain | None = None, settings: ServerConfig | None = None) -> FastAPI:
    """
    Build the FastAPI application around a chain.

    Args:
        chain: Chain to serve. A new chain holding only the genesis block is
               created when omitted.
        settings: Configuration to apply. Defaults to the module-level config.

    Returns:
        The configured FastAPI app. The chain is also exposed as
        ``app.state.chain``.
    """
    settings = settings or config
    chain = chain if chain is not None else Chain()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("Checkout ledger %s starting", __version__)
        if settings.chain.log_on_startup:
            log_chain(chain)
        yield

    docs_enabled = settings.docs_should_be_enabled
    app = FastAPI(
        title="Checkout Ledger",
        version=__version__,
        lifespan=lifespan,
        default_response_class=EscapedJSONResponse,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.chain = chain
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=settings.security.cors_allow_credentials,
        allow_methods=settings.security.cors_allow_methods,
        allow_headers=settings.security.cors_allow_headers,
    )

    register_routes(app, chain, settings.chain)
    return app


# Application instance used by uvicorn and the CLI
app = create_app()


# ============================================================================
# SERVER STARTUP
# ============================================================================


def start_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the module-level app under uvicorn.

    Args:
        host: Interface to bind. Defaults to ``config.server.host``.
        port: Port to bind. Defaults to ``config.server.port``.

    uvicorn exits the process if the port cannot be bound.
    """
    import uvicorn

    from checkout_ledger.logging_config import configure_logging

    configure_logging(config.logging)
    host = host or config.server.host
    port = port or config.server.port

    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    start_server()
