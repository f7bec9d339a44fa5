"""
Command-line interface for exercising the Pi payment APIs.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Sequence, Tuple

from .api import create_pi_network, send_a2u_payment
from .core import ConfigError, PaymentError, PaymentRecord, PiNetwork


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"Amount must be a decimal number, got '{value}'") from exc
    if amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return amount


def _metadata(value: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"Metadata must be JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("Metadata must be a JSON object")
    return parsed


def _add_payment_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--amount", type=_amount, required=True, help="Amount in Pi")
    parser.add_argument("--memo", required=True, help="Memo shown to the user")
    parser.add_argument("--uid", required=True, help="App-specific user id of the recipient")
    parser.add_argument(
        "--metadata",
        type=_metadata,
        default={},
        help="JSON object stored with the payment (default: {})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-backend",
        description="Create and settle Pi app-to-user payments",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to the env file with PI_* settings (default: .env.$PI_ENV)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a payment and print its identifier")
    _add_payment_arguments(create)

    send = commands.add_parser("send", help="Create, submit and complete a payment")
    _add_payment_arguments(send)

    submit = commands.add_parser("submit", help="Submit the ledger transaction of a payment")
    submit.add_argument("payment_id")

    complete = commands.add_parser("complete", help="Complete a payment with its txid")
    complete.add_argument("payment_id")
    complete.add_argument("txid")

    get = commands.add_parser("get", help="Show a payment")
    get.add_argument("payment_id")

    cancel = commands.add_parser("cancel", help="Cancel a payment")
    cancel.add_argument("payment_id")

    commands.add_parser("incomplete", help="List incomplete server payments")
    return parser


def _print_record(record: PaymentRecord) -> None:
    print(json.dumps(record.raw, indent=2, sort_keys=True))


def _payment_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "amount": args.amount,
        "memo": args.memo,
        "metadata": args.metadata,
        "uid": args.uid,
    }


def _dispatch(client: PiNetwork, args: argparse.Namespace) -> int:
    if args.command == "create":
        print(client.create_payment(_payment_from_args(args)))
    elif args.command == "send":
        _print_record(send_a2u_payment(client, _payment_from_args(args)))
    elif args.command == "submit":
        print(client.submit_payment(args.payment_id))
    elif args.command == "complete":
        _print_record(client.complete_payment(args.payment_id, args.txid))
    elif args.command == "get":
        _print_record(client.get_payment(args.payment_id))
    elif args.command == "cancel":
        _print_record(client.cancel_payment(args.payment_id))
    elif args.command == "incomplete":
        payments = client.get_incomplete_server_payments()
        print(json.dumps([payment.raw for payment in payments], indent=2, sort_keys=True))
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        client = create_pi_network(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    except PaymentError as exc:
        logging.error("Invalid credentials: %s (%s)", exc.message, exc.code)
        return 1

    try:
        return _dispatch(client, args)
    except PaymentError as exc:
        logging.error("%s failed: %s (%s)", args.command, exc.message, exc.code)
        if exc.txid:
            logging.error("Linked transaction: %s", exc.txid)
        if exc.verification_error:
            logging.error("Verification error: %s", exc.verification_error)
        return 1


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
