"""Unit tests for pi_backend.core.models."""

from decimal import Decimal

from pi_backend.core.models import PaymentArgs, PaymentRecord, TransactionData


def test_payment_record_from_response(payment_factory):
    record = PaymentRecord.from_response(payment_factory())
    assert record.identifier == "pay_123"
    assert record.amount == Decimal("3.14")
    assert record.direction == "app_to_user"
    assert record.status.developer_approved is True
    assert record.status.cancelled is False
    assert record.transaction is None
    assert record.txid is None
    assert record.network == "Pi Testnet"
    assert record.raw["metadata"] == {"order": 7}


def test_payment_record_with_transaction(payment_factory):
    record = PaymentRecord.from_response(payment_factory(txid="tx_9"))
    assert record.txid == "tx_9"
    assert record.transaction.verified is True
    assert record.transaction.link.endswith("/transactions/tx_9")


def test_transaction_data_from_payment(payment_factory, app_keypair, user_keypair):
    data = TransactionData.from_payment(PaymentRecord.from_response(payment_factory()))
    assert data == TransactionData(
        amount=Decimal("3.14"),
        payment_identifier="pay_123",
        from_address=app_keypair.public_key,
        to_address=user_keypair.public_key,
    )


def test_payment_args_request_body():
    args = PaymentArgs(amount=Decimal("0.5"), memo="m", metadata={"a": 1}, uid="u")
    body = PaymentArgs.as_request(args.as_dict())
    assert body == {"amount": 0.5, "memo": "m", "metadata": {"a": 1}, "uid": "u"}
    assert isinstance(body["amount"], float)
