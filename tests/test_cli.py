"""Tests for the pi-backend command line interface."""

import json
from decimal import Decimal
from unittest.mock import Mock

import pytest

from pi_backend import cli
from pi_backend.core import ConfigError, PaymentError, PaymentRecord


@pytest.fixture
def client(monkeypatch):
    mock_client = Mock()
    factory = Mock(return_value=mock_client)
    monkeypatch.setattr(cli, "create_pi_network", factory)
    mock_client.factory = factory
    return mock_client


def test_create(client, capsys):
    client.create_payment.return_value = "pay_1"

    code = cli.run_cli(
        ["create", "--amount", "1.5", "--memo", "Hi", "--uid", "u1", "--metadata", '{"a": 1}']
    )

    assert code == 0
    assert capsys.readouterr().out.strip() == "pay_1"
    client.create_payment.assert_called_once_with(
        {"amount": Decimal("1.5"), "memo": "Hi", "metadata": {"a": 1}, "uid": "u1"}
    )


def test_overrides_and_env_file_are_forwarded(client):
    client.get_incomplete_server_payments.return_value = []
    cli.run_cli(["--env-file", "custom.env", "--set", "PI_ENV=staging", "incomplete"])
    client.factory.assert_called_once_with(
        env_file="custom.env", overrides={"PI_ENV": "staging"}
    )


def test_get_prints_json(client, capsys, payment_factory):
    client.get_payment.return_value = PaymentRecord.from_response(payment_factory())
    assert cli.run_cli(["get", "pay_123"]) == 0
    assert json.loads(capsys.readouterr().out)["identifier"] == "pay_123"


def test_payment_error_exit_code(client):
    client.submit_payment.side_effect = PaymentError(
        "payment_already_has_linked_txid", data={"payment_id": "pay_1", "txid": "tx_1"}
    )
    assert cli.run_cli(["submit", "pay_1"]) == 1


def test_configuration_error_exit_code(client):
    client.factory.side_effect = ConfigError("Missing required environment variable: X")
    assert cli.run_cli(["incomplete"]) == 1


def test_invalid_metadata_is_rejected(client):
    with pytest.raises(SystemExit):
        cli.run_cli(["create", "--amount", "1", "--memo", "m", "--uid", "u", "--metadata", "[1]"])


@pytest.mark.parametrize("amount", ["abc", "0", "-1"])
def test_invalid_amount_is_rejected(client, amount):
    with pytest.raises(SystemExit):
        cli.run_cli(["send", "--amount", amount, "--memo", "m", "--uid", "u"])


def test_invalid_override_is_rejected(client):
    with pytest.raises(SystemExit):
        cli.run_cli(["--set", "NOEQUALS", "incomplete"])
