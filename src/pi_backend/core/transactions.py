"""
Builders for ledger transactions that settle platform payments.
"""

from __future__ import annotations

import logging

from stellar_sdk import Asset, Keypair, TransactionBuilder, TransactionEnvelope

from .errors import PaymentError
from .ledger import LedgerClient
from .models import TransactionData

__all__ = ["build_a2u_transaction"]


def build_a2u_transaction(
    ledger: LedgerClient,
    keypair: Keypair,
    transaction_data: TransactionData,
    network: str,
    timebounds_seconds: int,
) -> TransactionEnvelope:
    """
    Construct and sign an app-to-user payment transaction.

    The transaction pays ``transaction_data.amount`` native Pi to the
    payment's recipient and carries the payment identifier as a text memo,
    which is how the platform links it back to the payment. The payment must
    originate from the wallet of ``keypair``. Errors raised by ``ledger``
    propagate unchanged.
    """
    if transaction_data.from_address != keypair.public_key:
        raise PaymentError("private_seed_mismatch")

    account = ledger.load_account(keypair.public_key)
    base_fee = ledger.fetch_base_fee()
    timebounds = ledger.fetch_timebounds(timebounds_seconds)

    envelope = (
        TransactionBuilder(
            source_account=account,
            network_passphrase=network,
            base_fee=base_fee,
        )
        .add_time_bounds(timebounds.min_time, timebounds.max_time)
        .append_payment_op(
            destination=transaction_data.to_address,
            asset=Asset.native(),
            amount=format(transaction_data.amount, "f"),
        )
        .add_text_memo(transaction_data.payment_identifier)
        .build()
    )
    envelope.sign(keypair)
    logging.debug(
        "Built transaction for payment %s (fee %s)",
        transaction_data.payment_identifier,
        base_fee,
    )
    return envelope
