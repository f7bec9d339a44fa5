"""
Payment lifecycle coordinator for Pi app-to-user payments.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import requests
from stellar_sdk import Keypair

from .config import SdkConfig, load_sdk_config
from .errors import UNKNOWN_ERROR, PaymentError
from .ledger import HorizonLedger, LedgerClient
from .models import PaymentArgs, PaymentRecord, TransactionData
from .platform import PlatformApiClient, PlatformApiError
from .transactions import build_a2u_transaction
from .validators import validate_api_key, validate_payment_data, validate_seed_format

__all__ = ["PiNetwork"]

LedgerFactory = Callable[[str], LedgerClient]
PayloadTable = Mapping[str, Tuple[str, ...]]

# Remote error codes whose body carries extra fields worth keeping on the error.
_CREATE_PAYLOADS: PayloadTable = {
    "ongoing_payment_found": ("payment",),
}
_COMPLETE_PAYLOADS: PayloadTable = {
    "verification_failed": ("verification_error",),
}
_CANCEL_PAYLOADS: PayloadTable = {
    "already_completed": ("payment",),
    "cancelled_payment": ("payment",),
    "forbidden": ("payment",),
}
_NO_PAYLOADS: PayloadTable = {}


def _payload_from_body(body: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for name in fields:
        value = body.get(name)
        if value is None:
            continue
        if name == "payment":
            if not isinstance(value, Mapping) or "identifier" not in value:
                continue
            value = PaymentRecord.from_response(value)
        data[name] = value
    return data


def classify_error(exc: BaseException, payloads: PayloadTable = _NO_PAYLOADS) -> PaymentError:
    """
    Turn any failure into a :class:`PaymentError`.

    Taxonomy errors pass through untouched. Platform errors with a structured
    ``{"error", "error_message"}`` body keep the remote code and message, plus
    whatever payload ``payloads`` lists for that code. Anything else becomes
    ``unknown_error``.
    """
    if isinstance(exc, PaymentError):
        return exc
    if isinstance(exc, PlatformApiError) and exc.error_code:
        body = exc.body or {}
        code = exc.error_code
        return PaymentError(
            code,
            data=_payload_from_body(body, payloads.get(code, ())),
            message_override=body.get("error_message"),
        )
    return PaymentError(UNKNOWN_ERROR)


class PiNetwork:
    """
    Drives one payment at a time through create, submit and complete/cancel.

    The instance keeps the most recently created or fetched payment in
    :attr:`current_payment` so :meth:`submit_payment` can skip a round trip.
    Every terminal operation (submit, complete, cancel) resets the slot on
    exit, whatever the outcome. One workflow per instance: terminal
    operations are not safe to run concurrently on the same object.
    """

    def __init__(
        self,
        api_key: str,
        wallet_private_seed: str,
        *,
        config: Optional[SdkConfig] = None,
        session: Optional[requests.Session] = None,
        ledger_factory: Optional[LedgerFactory] = None,
    ) -> None:
        validate_seed_format(wallet_private_seed)
        validate_api_key(api_key)

        self.config = config or load_sdk_config()
        self.keypair = Keypair.from_secret(wallet_private_seed)
        self.api = PlatformApiClient(api_key, self.config, session=session)
        self.ledger_factory: LedgerFactory = ledger_factory or HorizonLedger
        self.current_payment: Optional[PaymentRecord] = None
        self._depth = 0

    @property
    def public_key(self) -> str:
        return self.keypair.public_key

    @contextmanager
    def _classified(
        self,
        operation: str,
        payloads: PayloadTable = _NO_PAYLOADS,
        *,
        structured: bool = True,
    ) -> Iterator[None]:
        # Only the outermost operation warns; nested ones log at debug.
        self._depth += 1
        level = logging.WARNING if self._depth == 1 else logging.DEBUG
        try:
            yield
        except PaymentError as exc:
            logging.log(level, "%s failed: %s (%s)", operation, exc.code, exc.message)
            raise
        except Exception as exc:  # noqa: BLE001
            error = classify_error(exc, payloads) if structured else PaymentError(UNKNOWN_ERROR)
            logging.log(level, "%s failed: %s (%s)", operation, error.code, exc)
            raise error from exc
        finally:
            self._depth -= 1

    @contextmanager
    def _terminal_operation(self) -> Iterator[None]:
        try:
            yield
        finally:
            self.current_payment = None

    def create_payment(self, payment: Union[PaymentArgs, Mapping[str, Any]]) -> str:
        """Create an app-to-user payment and return its identifier."""
        if isinstance(payment, PaymentArgs):
            payment = payment.as_dict()
        validate_payment_data(payment)

        with self._classified("create_payment", _CREATE_PAYLOADS):
            response = self.api.post("/payments", {"payment": PaymentArgs.as_request(payment)})
            record = PaymentRecord.from_response(response)

        self.current_payment = record
        logging.info("Created payment %s for uid %s", record.identifier, record.user_uid)
        return record.identifier

    def submit_payment(self, payment_id: str) -> str:
        """
        Sign and submit the ledger transaction for ``payment_id``.

        Returns the ledger transaction id. Raises
        ``payment_already_has_linked_txid`` when the platform already links a
        transaction to the payment, and the ledger's own result code when the
        transaction is rejected.
        """
        with self._terminal_operation(), self._classified("submit_payment"):
            payment = self.current_payment
            if payment is None or payment.identifier != payment_id:
                payment = self.get_payment(payment_id)
                self.current_payment = payment
            else:
                logging.debug("Using cached payment %s", payment_id)

            if payment.txid:
                raise PaymentError(
                    "payment_already_has_linked_txid",
                    data={"payment_id": payment_id, "txid": payment.txid},
                )

            ledger = self.ledger_factory(self.config.horizon_url_for(payment.network))
            envelope = build_a2u_transaction(
                ledger,
                self.keypair,
                TransactionData.from_payment(payment),
                payment.network,
                self.config.default_timebounds,
            )
            result = ledger.submit_transaction(envelope)

            if not result.successful:
                raise PaymentError(result.failure_code or UNKNOWN_ERROR)
            if not result.id:
                raise PaymentError(UNKNOWN_ERROR)

            logging.info("Payment %s submitted in transaction %s", payment_id, result.id)
            return result.id

    def complete_payment(self, payment_id: str, txid: str) -> PaymentRecord:
        with self._terminal_operation(), self._classified("complete_payment", _COMPLETE_PAYLOADS):
            response = self.api.post(f"/payments/{payment_id}/complete", {"txid": txid})
            return PaymentRecord.from_response(response)

    def get_payment(self, payment_id: str) -> PaymentRecord:
        with self._classified("get_payment"):
            return PaymentRecord.from_response(self.api.get(f"/payments/{payment_id}"))

    def cancel_payment(self, payment_id: str) -> PaymentRecord:
        with self._terminal_operation(), self._classified("cancel_payment", _CANCEL_PAYLOADS):
            response = self.api.post(f"/payments/{payment_id}/cancel")
            return PaymentRecord.from_response(response)

    def get_incomplete_server_payments(self) -> List[PaymentRecord]:
        # This endpoint never returns a structured error body.
        with self._classified("get_incomplete_server_payments", structured=False):
            response = self.api.get("/payments/incomplete_server_payments")
            return [
                PaymentRecord.from_response(item)
                for item in response["incomplete_server_payments"]
            ]
