"""
Minimal script that uses the public API to pay a user from the app wallet.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import Iterable, Tuple

from pi_backend import ConfigError, PaymentError, create_pi_network


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send an A2U payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to the env file containing PI_* settings (default: .env.$PI_ENV)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--api-key", help="Platform API key (default: $PI_API_KEY)")
    parser.add_argument(
        "--wallet-private-seed",
        help="App wallet secret seed (default: $PI_WALLET_PRIVATE_SEED)",
    )
    parser.add_argument("--uid", required=True, help="Recipient user uid")
    parser.add_argument("--amount", type=Decimal, default=Decimal("1"), help="Amount in Pi")
    parser.add_argument("--memo", default="Reward from the example script")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        pi = create_pi_network(
            args.api_key,
            args.wallet_private_seed,
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    except PaymentError as exc:
        logging.error("Invalid credentials: %s", exc.message)
        return 1

    # Resume anything left over from an earlier run before starting a new payment.
    for payment in pi.get_incomplete_server_payments():
        if payment.txid:
            logging.info("Completing leftover payment %s", payment.identifier)
            pi.complete_payment(payment.identifier, payment.txid)
        else:
            logging.info("Cancelling leftover payment %s", payment.identifier)
            pi.cancel_payment(payment.identifier)

    payment = {
        "amount": args.amount,
        "memo": args.memo,
        "metadata": {"source": "send_a2u_payment.py"},
        "uid": args.uid,
    }

    try:
        payment_id = pi.create_payment(payment)
        logging.info("Created payment %s", payment_id)
        txid = pi.submit_payment(payment_id)
        logging.info("Submitted transaction %s", txid)
        completed = pi.complete_payment(payment_id, txid)
    except PaymentError as exc:
        logging.error("Payment failed: %s (%s)", exc.message, exc.code)
        return 1

    print(json.dumps(completed.raw, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
