"""
API endpoint tests for the chain routes (checkout_ledger/api/routes/chain.py).

Tests cover:
- GET / returns every block with the capitalised wire keys
- POST / appends a checkout and echoes the payload
- Append outcome headers, and 409 in strict mode
- Unencodable payloads are echoed escaped and reported as serialization_failed
- Request validation
"""

import pytest
from fastapi.testclient import TestClient

from checkout_ledger.api.server import create_app
from checkout_ledger.chain import AppendOutcome, AppendResult, Chain

_CHECKOUT = {
    "book_id": "9c1185a5c5e9fc54612808977ee8f548",
    "user": "ada",
    "checkout_date": "2026-10-19",
}


def _reject_appends(monkeypatch, chain: Chain, outcome: AppendOutcome) -> None:
    """Make every append on ``chain`` fail with ``outcome``."""
    monkeypatch.setattr(
        chain,
        "append",
        lambda record: AppendResult(outcome=outcome, block=None, length=len(chain)),
    )


# ============================================================================
# READ
# ============================================================================


@pytest.mark.api
def test_get_chain_returns_genesis(test_client, chain):
    response = test_client.get("/")

    assert response.status_code == 200
    blocks = response.json()
    assert len(blocks) == 1
    genesis = blocks[0]
    assert set(genesis) == {"Position", "Data", "TimeStamp", "Hash", "PrevHash"}
    assert genesis["Position"] == 0
    assert genesis["PrevHash"] == ""
    assert genesis["Hash"] == chain.last_block.hash
    assert genesis["Data"] == {
        "book_id": "",
        "user": "",
        "checkout_date": "",
        "is_genesis": True,
    }


@pytest.mark.api
def test_get_chain_reflects_appends(test_client):
    test_client.post("/", json=_CHECKOUT)
    test_client.post("/", json={**_CHECKOUT, "user": "grace"})

    blocks = test_client.get("/").json()

    assert [b["Position"] for b in blocks] == [0, 1, 2]
    assert blocks[2]["Data"]["user"] == "grace"
    assert blocks[2]["PrevHash"] == blocks[1]["Hash"]


# ============================================================================
# APPEND
# ============================================================================


@pytest.mark.api
def test_post_checkout_echoes_payload(test_client, chain):
    response = test_client.post("/", json=_CHECKOUT)

    assert response.status_code == 200
    assert response.json() == {**_CHECKOUT, "is_genesis": False}
    assert len(chain) == 2
    assert chain.last_block.data.book_id == _CHECKOUT["book_id"]


@pytest.mark.api
def test_post_checkout_reports_outcome_headers(test_client):
    response = test_client.post("/", json=_CHECKOUT)

    assert response.headers["X-Ledger-Append"] == "accepted"
    assert response.headers["X-Ledger-Length"] == "2"


@pytest.mark.api
def test_post_checkout_missing_fields_default_to_zero_values(test_client, chain):
    response = test_client.post("/", json={"book_id": "only-a-book"})

    assert response.status_code == 200
    assert response.json() == {
        "book_id": "only-a-book",
        "user": "",
        "checkout_date": "",
        "is_genesis": False,
    }
    assert chain.last_block.data.user == ""


@pytest.mark.api
def test_rejected_checkout_still_echoes_payload(test_client, chain, monkeypatch):
    _reject_appends(monkeypatch, chain, AppendOutcome.LINKAGE_MISMATCH)

    response = test_client.post("/", json=_CHECKOUT)

    assert response.status_code == 200
    assert response.json()["book_id"] == _CHECKOUT["book_id"]
    assert response.headers["X-Ledger-Append"] == "linkage_mismatch"
    assert response.headers["X-Ledger-Length"] == "1"
    assert len(chain) == 1


@pytest.mark.api
def test_rejected_checkout_in_strict_mode_is_409(chain, server_config, monkeypatch):
    server_config.chain.strict_append = True
    client = TestClient(create_app(chain, server_config))
    _reject_appends(monkeypatch, chain, AppendOutcome.POSITION_MISMATCH)

    response = client.post("/", json=_CHECKOUT)

    assert response.status_code == 409
    assert response.json()["detail"] == "position_mismatch"
    assert response.headers["X-Ledger-Append"] == "position_mismatch"


@pytest.mark.api
def test_accepted_checkout_in_strict_mode_is_200(chain, server_config):
    server_config.chain.strict_append = True
    client = TestClient(create_app(chain, server_config))

    response = client.post("/", json=_CHECKOUT)

    assert response.status_code == 200
    assert len(chain) == 2


_SURROGATE_BODY = b'{"book_id": "\\ud800", "user": "ada"}'


@pytest.mark.api
def test_unencodable_checkout_is_echoed_and_reported(test_client, chain, caplog):
    with caplog.at_level("DEBUG"):
        response = test_client.post(
            "/", content=_SURROGATE_BODY, headers={"Content-Type": "application/json"}
        )

    assert response.status_code == 200
    assert response.json()["book_id"] == "\ud800"
    assert response.content.startswith(b'{"book_id":"\\ud800"')
    assert response.headers["X-Ledger-Append"] == "serialization_failed"
    assert response.headers["X-Ledger-Length"] == "1"
    assert len(chain) == 1
    warnings = [
        r
        for r in caplog.records
        if r.name.startswith("checkout_ledger") and r.levelname == "WARNING"
    ]
    assert len(warnings) == 1


@pytest.mark.api
def test_unencodable_checkout_in_strict_mode_is_409(chain, server_config):
    server_config.chain.strict_append = True
    client = TestClient(create_app(chain, server_config))

    response = client.post(
        "/", content=_SURROGATE_BODY, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "serialization_failed"
    assert len(chain) == 1


@pytest.mark.api
def test_malformed_body_is_rejected(test_client, chain):
    response = test_client.post(
        "/", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 422
    assert len(chain) == 1


@pytest.mark.api
def test_wrong_field_type_is_rejected(test_client, chain):
    response = test_client.post("/", json={"book_id": ["not", "a", "string"]})

    assert response.status_code == 422
    assert len(chain) == 1
