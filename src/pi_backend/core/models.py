"""
Data objects exchanged with the Pi platform API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Literal, Mapping, Optional, Union

__all__ = [
    "Direction",
    "NetworkPassphrase",
    "PaymentArgs",
    "PaymentRecord",
    "PaymentStatus",
    "PaymentTransaction",
    "TransactionData",
]

NetworkPassphrase = Literal["Pi Network", "Pi Testnet"]
Direction = Literal["user_to_app", "app_to_user"]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class PaymentArgs:
    """
    Arguments for a new app-to-user payment.

    ``amount`` is expressed in Pi and must be positive.
    """

    amount: Union[Decimal, float, int]
    memo: str
    metadata: Mapping[str, Any]
    uid: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "memo": self.memo,
            "metadata": dict(self.metadata),
            "uid": self.uid,
        }

    @staticmethod
    def as_request(payment: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the JSON-ready ``payment`` body for ``POST /payments``."""
        body = dict(payment)
        if isinstance(body.get("amount"), Decimal):
            body["amount"] = float(body["amount"])
        return body


@dataclass(frozen=True)
class PaymentStatus:
    developer_approved: bool = False
    transaction_verified: bool = False
    developer_completed: bool = False
    cancelled: bool = False
    user_cancelled: bool = False

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> "PaymentStatus":
        payload = payload or {}
        return cls(
            developer_approved=bool(payload.get("developer_approved")),
            transaction_verified=bool(payload.get("transaction_verified")),
            developer_completed=bool(payload.get("developer_completed")),
            cancelled=bool(payload.get("cancelled")),
            user_cancelled=bool(payload.get("user_cancelled")),
        )


@dataclass(frozen=True)
class PaymentTransaction:
    txid: str
    verified: bool
    link: str

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> Optional["PaymentTransaction"]:
        if not payload:
            return None
        return cls(
            txid=payload.get("txid") or "",
            verified=bool(payload.get("verified")),
            link=payload.get("_link") or "",
        )


@dataclass(frozen=True)
class PaymentRecord:
    identifier: str
    user_uid: str
    amount: Decimal
    memo: str
    metadata: Mapping[str, Any]
    from_address: str
    to_address: str
    direction: Direction
    status: PaymentStatus
    transaction: Optional[PaymentTransaction]
    created_at: str
    network: NetworkPassphrase
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def txid(self) -> Optional[str]:
        if self.transaction is None:
            return None
        return self.transaction.txid or None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentRecord":
        return cls(
            identifier=payload["identifier"],
            user_uid=payload.get("user_uid", ""),
            amount=_to_decimal(payload.get("amount", 0)),
            memo=payload.get("memo", ""),
            metadata=payload.get("metadata") or {},
            from_address=payload.get("from_address", ""),
            to_address=payload.get("to_address", ""),
            direction=payload.get("direction", "app_to_user"),
            status=PaymentStatus.from_response(payload.get("status")),
            transaction=PaymentTransaction.from_response(payload.get("transaction")),
            created_at=payload.get("created_at", ""),
            network=payload.get("network", "Pi Testnet"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class TransactionData:
    amount: Decimal
    payment_identifier: str
    from_address: str
    to_address: str

    @classmethod
    def from_payment(cls, payment: PaymentRecord) -> "TransactionData":
        return cls(
            amount=payment.amount,
            payment_identifier=payment.identifier,
            from_address=payment.from_address,
            to_address=payment.to_address,
        )
