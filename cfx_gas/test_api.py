"""
Tests for the HTTP surface, with a fake network adapter injected
"""
import pytest
from fastapi.testclient import TestClient

from cfx_gas.api import app, get_gas_util
from cfx_gas.constants import SEND_ETHER_ACTION_KEY, TRANSACTION_NO_CONTRACT_ERROR_KEY
from cfx_gas.errors import BlockFetchError
from cfx_gas.test_tx_gas_utils import CONTRACT_ADDRESS, USER_ADDRESS, FakeQuery
from cfx_gas.tx_gas_utils import TxGasUtil


@pytest.fixture
def query():
    return FakeQuery(code="0x")


@pytest.fixture
def client(query):
    app.dependency_overrides[get_gas_util] = lambda: TxGasUtil(query)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_estimate_simple_send(client, query):
    body = {
        "txMeta": {
            "id": 7,
            "transactionCategory": SEND_ETHER_ACTION_KEY,
            "txParams": {"from": USER_ADDRESS, "to": USER_ADDRESS, "value": "0x1"},
        }
    }

    response = client.post("/api/gas/estimate", json=body)

    assert response.status_code == 200
    tx_meta = response.json()
    assert tx_meta["estimatedGas"] == "0x5208"
    assert tx_meta["estimatedStorage"] == "0x0"
    assert tx_meta["txParams"]["gas"] == "0x5208"
    assert tx_meta["txParams"]["from"] == USER_ADDRESS
    assert tx_meta["simpleSend"] is True
    assert query.code_calls == [USER_ADDRESS]


def test_estimate_keeps_controller_fields(client):
    body = {
        "txMeta": {
            "id": 8,
            "status": "unapproved",
            "txParams": {"to": CONTRACT_ADDRESS, "data": "0xabcd"},
        },
        "getCodeResponse": "0x6080",
    }

    response = client.post("/api/gas/estimate", json=body)

    tx_meta = response.json()
    assert tx_meta["status"] == "unapproved"
    assert tx_meta["txParams"]["gas"] == "0x3a98"


def test_estimate_failure_is_reported_in_body(client, query):
    body = {
        "txMeta": {
            "transactionCategory": SEND_ETHER_ACTION_KEY,
            "txParams": {"to": USER_ADDRESS, "data": "0x12"},
        },
        "getCodeResponse": "0x",
    }

    response = client.post("/api/gas/estimate", json=body)

    assert response.status_code == 200
    fails = response.json()["simulationFails"]
    assert fails["errorKey"] == TRANSACTION_NO_CONTRACT_ERROR_KEY
    assert fails["debug"]["getCodeResponse"] == "0x"
    assert query.code_calls == []


def test_estimate_block_fetch_failure_is_bad_gateway(client, query):
    query.block_error = BlockFetchError("cfx_getBlockByEpochNumber", "node down")

    response = client.post("/api/gas/estimate", json={"txMeta": {"txParams": {}}})

    assert response.status_code == 502


def test_estimate_rejects_missing_tx_params(client):
    response = client.post("/api/gas/estimate", json={"txMeta": {}})
    assert response.status_code == 422


def test_buffer_endpoint(client):
    response = client.post(
        "/api/gas/buffer", json={"initialGasLimit": "0x2710", "blockGasLimit": "0x0186a0"}
    )
    assert response.json() == {"gasLimit": "0x3a98"}


def test_buffer_endpoint_rejects_bad_hex(client):
    response = client.post(
        "/api/gas/buffer", json={"initialGasLimit": "0xzz", "blockGasLimit": "0x0186a0"}
    )
    assert response.status_code == 400
