"""
Input checks run before any request leaves the process.

Each validator raises :class:`~pi_backend.core.errors.PaymentError` on the
first violation. Cheap, general checks come before specific ones.
"""

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from typing import Any, Mapping

from stellar_sdk import StrKey

from .errors import PaymentError

__all__ = [
    "validate_api_key",
    "validate_payment_data",
    "validate_seed_format",
]

SEED_LENGTH = 56


def validate_api_key(api_key: Any) -> None:
    if not api_key:
        raise PaymentError("missing_api_key")
    if not isinstance(api_key, str):
        raise PaymentError("api_key_not_string")


def validate_seed_format(seed: Any) -> None:
    if not seed:
        raise PaymentError("missing_wallet_private_seed")
    if not isinstance(seed, str):
        raise PaymentError("wallet_private_seed_not_string")
    if not seed.startswith("S"):
        raise PaymentError("wallet_private_seed_not_starts_with_S")
    if len(seed) != SEED_LENGTH:
        raise PaymentError("wallet_private_seed_not_56_chars_long")
    if not StrKey.is_valid_ed25519_secret_seed(seed):
        raise PaymentError("invalid_wallet_private_seed")


def _is_number(value: Any) -> bool:
    # bool is an int subclass
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    # NaN and infinities cannot be sent as JSON
    return isinstance(value, Real) and math.isfinite(value)


def validate_payment_data(payment: Any) -> None:
    if not isinstance(payment, Mapping):
        raise PaymentError("payment_data_not_object")

    if "amount" not in payment:
        raise PaymentError("missing_amount")
    if not _is_number(payment["amount"]):
        raise PaymentError("amount_not_number")

    if "memo" not in payment:
        raise PaymentError("missing_memo")
    if not isinstance(payment["memo"], str):
        raise PaymentError("memo_not_string")

    if "metadata" not in payment:
        raise PaymentError("missing_metadata")
    if not isinstance(payment["metadata"], Mapping):
        raise PaymentError("metadata_not_object")

    if "uid" not in payment:
        raise PaymentError("missing_uid")
    if not isinstance(payment["uid"], str):
        raise PaymentError("uid_not_string")
