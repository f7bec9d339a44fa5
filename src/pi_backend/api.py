"""
Public, high-level helpers for running Pi payments.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import requests

from .core.client import LedgerFactory, PiNetwork
from .core.config import SdkConfig
from .core.environment import build_environment
from .core.models import PaymentArgs, PaymentRecord
from .core.validators import validate_api_key, validate_seed_format

__all__ = [
    "API_KEY_ENV",
    "WALLET_PRIVATE_SEED_ENV",
    "create_pi_network",
    "send_a2u_payment",
]

API_KEY_ENV = "PI_API_KEY"
WALLET_PRIVATE_SEED_ENV = "PI_WALLET_PRIVATE_SEED"


def create_pi_network(
    api_key: Optional[str] = None,
    wallet_private_seed: Optional[str] = None,
    *,
    config: Optional[SdkConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = None,
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    ledger_factory: Optional[LedgerFactory] = None,
) -> PiNetwork:
    """
    Construct a :class:`PiNetwork`.

    Callers can either supply a ready-made :class:`SdkConfig` or let the
    helper assemble one from environment data. Credentials that are not
    passed explicitly are read from ``PI_API_KEY`` and
    ``PI_WALLET_PRIVATE_SEED``.
    """
    if config is not None and any(item for item in (env_file, overrides, base)):
        raise ValueError(
            "Provide either a pre-built SdkConfig or environment sources, not both."
        )

    if config is None or api_key is None or wallet_private_seed is None:
        environment = build_environment(env_file=env_file, base=base, overrides=overrides)
        if api_key is None:
            api_key = environment.get(API_KEY_ENV)
        if wallet_private_seed is None:
            wallet_private_seed = environment.get(WALLET_PRIVATE_SEED_ENV)
        if config is None:
            # Credential errors take precedence over configuration errors.
            validate_seed_format(wallet_private_seed)
            validate_api_key(api_key)
            config = SdkConfig.from_mapping(environment.variables)

    return PiNetwork(
        api_key,
        wallet_private_seed,
        config=config,
        session=session,
        ledger_factory=ledger_factory,
    )


def send_a2u_payment(
    client: PiNetwork,
    payment: Union[PaymentArgs, Mapping[str, Any]],
) -> PaymentRecord:
    """
    Run a complete app-to-user payment: create, submit, then complete.

    Any failure surfaces as :class:`~pi_backend.core.errors.PaymentError`. A
    payment that was created but not submitted stays incomplete on the
    platform and shows up in :meth:`PiNetwork.get_incomplete_server_payments`.
    """
    payment_id = client.create_payment(payment)
    txid = client.submit_payment(payment_id)
    logging.info("Completing payment %s with transaction %s", payment_id, txid)
    return client.complete_payment(payment_id, txid)
