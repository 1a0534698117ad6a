"""
Shared pytest fixtures for the checkout ledger test suite.

This module provides fixtures that are automatically available to all test files:
- Chains with a fixed-timestamp genesis block
- Sample checkout records
- FastAPI TestClient instances bound to a chain

Every fixture is function-scoped: each test gets its own chain.
"""

import pytest
from fastapi.testclient import TestClient

from checkout_ledger.api.server import create_app
from checkout_ledger.chain import Chain, CheckoutRecord, genesis_block
from checkout_ledger.config import ServerConfig

GENESIS_TIMESTAMP = "2026-10-19T09:00:00+00:00"


# ============================================================================
# CHAIN FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def chain() -> Chain:
    """A fresh chain holding only a genesis block with a fixed timestamp."""
    return Chain(genesis_block(timestamp=GENESIS_TIMESTAMP))


@pytest.fixture(scope="function")
def checkout() -> CheckoutRecord:
    """A typical checkout payload."""
    return CheckoutRecord(
        book_id="9c1185a5c5e9fc54612808977ee8f548",
        user="ada",
        checkout_date="2026-10-19",
    )


# ============================================================================
# FASTAPI TEST CLIENT FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def server_config() -> ServerConfig:
    """Built-in defaults, independent of any config/server.ini on disk."""
    return ServerConfig()


@pytest.fixture(scope="function")
def test_client(chain: Chain, server_config: ServerConfig) -> TestClient:
    """
    Create a FastAPI TestClient serving ``chain``.

    Example:
        def test_read(test_client, chain):
            response = test_client.get("/")
            assert len(response.json()) == len(chain)
    """
    return TestClient(create_app(chain, server_config))
