"""
Error taxonomy shared by every public SDK operation.

All failures surface as :class:`PaymentError`. Callers branch on
:attr:`PaymentError.code`; the message is meant for logs and display and may
come straight from the platform API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from .models import PaymentRecord

__all__ = [
    "API_ERROR_CODES",
    "CANCEL_ERROR_CODES",
    "COMPLETE_ERROR_CODES",
    "CREATE_ERROR_CODES",
    "ERROR_MESSAGES",
    "OPERATION_RESULT_CODES",
    "PaymentError",
    "TRANSACTION_RESULT_CODES",
    "UNKNOWN_ERROR",
    "VALIDATION_ERROR_CODES",
]

UNKNOWN_ERROR = "unknown_error"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

_VALIDATION_MESSAGES = {
    "amount_not_number": "Amount must be a number.",
    "api_key_not_string": "API key must be a string.",
    "invalid_wallet_private_seed": "Invalid wallet private seed.",
    "memo_not_string": "Memo must be a string.",
    "metadata_not_object": "Metadata must be an object.",
    "missing_amount": "Missing amount.",
    "missing_api_key": "Missing API key.",
    "missing_memo": "Missing memo.",
    "missing_metadata": "Missing metadata.",
    "missing_uid": "Missing uid.",
    "missing_wallet_private_seed": "Missing wallet private seed.",
    "payment_already_has_linked_txid": "This payment already has a linked txid.",
    "payment_data_not_object": "Payment data must be an object.",
    "private_seed_mismatch": "You should use a private seed of your app wallet.",
    "uid_not_string": "Uid must be a string.",
    "wallet_private_seed_not_56_chars_long": "Wallet private seed must be 56-character long.",
    "wallet_private_seed_not_starts_with_S": "Wallet private seed must starts with 'S'.",
    "wallet_private_seed_not_string": "Wallet private seed must be a string.",
}

# Horizon transaction result codes.
_TRANSACTION_MESSAGES = {
    "tx_failed": "Transaction failed.",
    "tx_too_early": "Transaction submitted too early.",
    "tx_too_late": "Transaction submitted too late.",
    "tx_missing_operation": "Transaction is missing operation.",
    "tx_bad_seq": "Transaction was submitted with invalid sequence number.",
    "tx_bad_auth": "Transaction contains too few valid signatures.",
    "tx_insufficient_balance": "Source account doesn't have enough balance for this transaction.",
    "tx_no_source_account": "Transaction has no source account.",
    "tx_insufficient_fee": "Transaction was submitted with insufficient fee.",
    "tx_bad_auth_extra": "Transaction contains unused signatures attached.",
    "tx_internal_error": "Transaction internal error.",
}

# Horizon operation result codes.
_OPERATION_MESSAGES = {
    "op_bad_auth": "Transaction contains too few valid signatures or was submitted to the wrong network.",
    "op_no_source_account": "Operation is missing source account.",
    "op_not_supported": "Operation is not supported.",
    "op_too_many_subentries": "Account reached max number (1000) of subentries.",
    "op_exceeded_work_limit": "Operation exceeded the work limit.",
}

ERROR_MESSAGES: Mapping[str, str] = {
    **_VALIDATION_MESSAGES,
    **_TRANSACTION_MESSAGES,
    **_OPERATION_MESSAGES,
}

VALIDATION_ERROR_CODES = frozenset(_VALIDATION_MESSAGES)
TRANSACTION_RESULT_CODES = frozenset(_TRANSACTION_MESSAGES)
OPERATION_RESULT_CODES = frozenset(_OPERATION_MESSAGES)

_NOT_FOUND_CODES = frozenset({"payment_not_found"})
_GENERIC_API_CODES = frozenset({"invalid_amount", "invalid_arguments", "invalid_metadata"})

CREATE_ERROR_CODES = _NOT_FOUND_CODES | _GENERIC_API_CODES | frozenset(
    {
        "altered_amount",
        "invalid_address",
        "missing_scope",
        "missing_wallet",
        "ongoing_payment_found",
        "feature_not_available",
        "too_many_cancelled_payments",
        "too_many_payments",
        "user_not_found",
    }
)
COMPLETE_ERROR_CODES = _NOT_FOUND_CODES | frozenset(
    {
        "already_completed",
        "cancelled_payment",
        "missing_param",
        "missing_txid",
        "not_verified",
        "txid_mismatch",
        "verification_failed",
    }
)
CANCEL_ERROR_CODES = _NOT_FOUND_CODES | frozenset(
    {
        "already_completed",
        "cancelled_payment",
        "forbidden",
        "payment_tx_present",
    }
)
API_ERROR_CODES = CREATE_ERROR_CODES | COMPLETE_ERROR_CODES | CANCEL_ERROR_CODES | {UNKNOWN_ERROR}

_PAYLOAD_FIELDS = ("payment", "payment_id", "txid", "verification_error")


class PaymentError(Exception):
    """
    A failure from one closed set of error codes.

    ``data`` may carry the offending ``payment`` record, a ``payment_id``, a
    ``txid`` or a ``verification_error``; absent keys stay ``None``. The
    message is ``message_override`` when given, otherwise the canonical text
    for ``code``, otherwise ``"Unknown error"``.
    """

    def __init__(
        self,
        code: str,
        *,
        data: Optional[Mapping[str, Any]] = None,
        message_override: Optional[str] = None,
    ) -> None:
        message = message_override or ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)
        super().__init__(message)
        payload = dict(data or {})
        unexpected = set(payload) - set(_PAYLOAD_FIELDS)
        if unexpected:
            raise TypeError(f"Unknown PaymentError data keys: {sorted(unexpected)}")

        self._code = code
        self._message = message
        self._payload = {field: payload.get(field) for field in _PAYLOAD_FIELDS}

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def payment(self) -> Optional["PaymentRecord"]:
        return self._payload["payment"]

    @property
    def payment_id(self) -> Optional[str]:
        return self._payload["payment_id"]

    @property
    def txid(self) -> Optional[str]:
        return self._payload["txid"]

    @property
    def verification_error(self) -> Optional[str]:
        return self._payload["verification_error"]

    @property
    def is_validation_error(self) -> bool:
        return self._code in VALIDATION_ERROR_CODES

    @property
    def is_ledger_error(self) -> bool:
        return self._code.startswith(("tx_", "op_"))

    @property
    def is_api_error(self) -> bool:
        return self._code in API_ERROR_CODES

    def __repr__(self) -> str:
        return f"PaymentError(code={self._code!r}, message={self._message!r})"
