"""Shared pytest fixtures for pi_backend tests."""

import json
from unittest.mock import Mock

import pytest
from stellar_sdk import Account, Keypair, TimeBounds

from pi_backend.core import PiNetwork, SdkConfig, SubmissionResult

MAINNET = "Pi Network"
TESTNET = "Pi Testnet"


def make_response(status_code=200, payload=None, text=None):
    """Build a stand-in for ``requests.Response``."""
    response = Mock()
    response.status_code = status_code
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    else:
        response.json.return_value = payload
        response.text = text or json.dumps(payload)
    return response


@pytest.fixture
def app_keypair():
    """Deterministic app wallet keypair."""
    return Keypair.from_raw_ed25519_seed(bytes([1] * 32))


@pytest.fixture
def user_keypair():
    return Keypair.from_raw_ed25519_seed(bytes([2] * 32))


@pytest.fixture
def sdk_config():
    return SdkConfig(
        horizon_mainnet_url="https://api.mainnet.minepi.com",
        horizon_mainnet_passphrase=MAINNET,
        horizon_testnet_url="https://api.testnet.minepi.com",
        horizon_testnet_passphrase=TESTNET,
        platform_base_url="https://api.minepi.com",
    )


@pytest.fixture
def payment_factory(app_keypair, user_keypair):
    """Create platform payment JSON documents."""

    def factory(identifier="pay_123", txid=None, **overrides):
        payload = {
            "identifier": identifier,
            "user_uid": "uid_456",
            "amount": 3.14,
            "memo": "Reward",
            "metadata": {"order": 7},
            "from_address": app_keypair.public_key,
            "to_address": user_keypair.public_key,
            "direction": "app_to_user",
            "status": {
                "developer_approved": True,
                "transaction_verified": False,
                "developer_completed": False,
                "cancelled": False,
                "user_cancelled": False,
            },
            "transaction": None,
            "created_at": "2024-01-01T00:00:00.000Z",
            "network": TESTNET,
        }
        if txid is not None:
            payload["transaction"] = {
                "txid": txid,
                "verified": True,
                "_link": f"https://api.testnet.minepi.com/transactions/{txid}",
            }
        payload.update(overrides)
        return payload

    return factory


@pytest.fixture
def session():
    """Mocked ``requests.Session``; queue responses on ``session.request``."""
    mock_session = Mock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def ledger():
    """Mocked ledger capability that accepts every transaction."""
    mock_ledger = Mock()
    mock_ledger.load_account.side_effect = lambda public_key: Account(public_key, 1)
    mock_ledger.fetch_base_fee.return_value = 100000
    mock_ledger.fetch_timebounds.return_value = TimeBounds(min_time=0, max_time=1900000000)
    mock_ledger.submit_transaction.return_value = SubmissionResult(successful=True, id="tx_abc")
    return mock_ledger


@pytest.fixture
def ledger_factory(ledger):
    return Mock(return_value=ledger)


@pytest.fixture
def pi(app_keypair, sdk_config, session, ledger_factory):
    return PiNetwork(
        "test-api-key",
        app_keypair.secret,
        config=sdk_config,
        session=session,
        ledger_factory=ledger_factory,
    )


@pytest.fixture
def response_factory():
    return make_response
