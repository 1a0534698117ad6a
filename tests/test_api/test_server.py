"""Tests for the application factory, health endpoint, and startup logging."""

import logging
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from checkout_ledger.api.server import create_app, log_chain
from checkout_ledger.chain import Chain, CheckoutRecord


def _corrupt_chain() -> Chain:
    """A chain whose second block was altered after it was appended."""
    chain = Chain()
    chain.append(CheckoutRecord(book_id="b", user="ada"))
    genesis, block = chain.snapshot()
    chain._blocks = (genesis, replace(block, data=replace(block.data, user="mallory")))
    return chain


@pytest.mark.api
def test_health_reports_chain_state(test_client):
    test_client.post("/", json={"book_id": "b"})

    data = test_client.get("/health").json()

    assert data["status"] == "ok"
    assert data["blocks"] == 2
    assert data["integrity"] == "ok"


@pytest.mark.api
def test_health_reports_corruption():
    corrupt = _corrupt_chain()
    client = TestClient(create_app(corrupt))

    assert client.get("/health").json()["integrity"] == "corrupt"


@pytest.mark.api
def test_app_exposes_injected_chain(chain, server_config):
    app = create_app(chain, server_config)
    assert app.state.chain is chain


@pytest.mark.api
def test_create_app_builds_its_own_chain(server_config):
    app = create_app(settings=server_config)
    assert len(app.state.chain) == 1


@pytest.mark.api
def test_separate_apps_do_not_share_chains(server_config):
    first = TestClient(create_app(settings=server_config))
    second = TestClient(create_app(settings=server_config))

    first.post("/", json={"book_id": "b"})

    assert len(second.get("/").json()) == 1


@pytest.mark.api
def test_docs_disabled_in_production(chain, server_config):
    server_config.security.production = True
    client = TestClient(create_app(chain, server_config))

    assert client.get("/docs").status_code == 404


@pytest.mark.api
def test_startup_logs_chain(chain, server_config, caplog):
    with caplog.at_level(logging.INFO, logger="checkout_ledger.api.server"):
        with TestClient(create_app(chain, server_config)):
            pass

    assert "Block 0" in caplog.text
    assert "Chain OK, 1 block(s)." in caplog.text


@pytest.mark.api
def test_startup_logging_can_be_disabled(chain, server_config, caplog):
    server_config.chain.log_on_startup = False

    with caplog.at_level(logging.INFO, logger="checkout_ledger.api.server"):
        with TestClient(create_app(chain, server_config)):
            pass

    assert "Block 0" not in caplog.text


@pytest.mark.unit
def test_log_chain_flags_corruption(caplog):
    corrupt = _corrupt_chain()

    with caplog.at_level(logging.INFO, logger="checkout_ledger.api.server"):
        log_chain(corrupt)

    assert "Chain integrity failure" in caplog.text
