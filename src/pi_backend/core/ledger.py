"""
Access to the Pi ledger through a Horizon server.

:class:`LedgerClient` is the capability the coordinator relies on;
:class:`HorizonLedger` implements it with stellar-sdk's synchronous
:class:`~stellar_sdk.Server`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol

from stellar_sdk import Account, Server, TimeBounds, TransactionEnvelope
from stellar_sdk.exceptions import BadRequestError

__all__ = [
    "HorizonLedger",
    "LedgerClient",
    "SubmissionResult",
]


@dataclass(frozen=True)
class SubmissionResult:
    successful: bool
    id: Optional[str]
    transaction_code: Optional[str] = None
    operation_codes: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "SubmissionResult":
        extras = payload.get("extras") or {}
        result_codes = extras.get("result_codes") or {}
        return cls(
            successful=bool(payload.get("successful")),
            id=payload.get("id"),
            transaction_code=result_codes.get("transaction"),
            operation_codes=list(result_codes.get("operations") or []),
            raw=dict(payload),
        )

    @property
    def failure_code(self) -> Optional[str]:
        """The most specific result code: first operation code, else the transaction code."""
        if self.operation_codes:
            return self.operation_codes[0]
        return self.transaction_code


class LedgerClient(Protocol):
    def load_account(self, public_key: str) -> Account:
        ...

    def fetch_base_fee(self) -> int:
        ...

    def fetch_timebounds(self, seconds: int) -> TimeBounds:
        ...

    def submit_transaction(self, envelope: TransactionEnvelope) -> SubmissionResult:
        ...


class HorizonLedger:
    """
    Thin wrapper around a Horizon server for one Pi network.
    """

    def __init__(self, horizon_url: str, *, server: Optional[Server] = None) -> None:
        self.horizon_url = horizon_url
        self.server = server or Server(horizon_url=horizon_url)

    def load_account(self, public_key: str) -> Account:
        logging.info("Loading ledger account %s from %s", public_key, self.horizon_url)
        return self.server.load_account(public_key)

    def fetch_base_fee(self) -> int:
        return self.server.fetch_base_fee()

    def fetch_timebounds(self, seconds: int) -> TimeBounds:
        return TimeBounds(min_time=0, max_time=int(time.time()) + seconds)

    def submit_transaction(self, envelope: TransactionEnvelope) -> SubmissionResult:
        logging.info("Submitting transaction %s to %s", envelope.hash_hex(), self.horizon_url)
        try:
            response = self.server.submit_transaction(envelope)
        except BadRequestError as exc:
            # Horizon answers rejected transactions with HTTP 400 and result codes in extras.
            return SubmissionResult.from_response(
                {"successful": False, "extras": exc.extras or {}}
            )
        return SubmissionResult.from_response(response)
