"""Command that creates a demo checkout order from environment settings."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from collections.abc import Sequence
from typing import Any

import requests

from .checkout import Checkout, OrderInput
from .client import Client
from .models import SelcomError

EXIT_FAILURE = 255

_log = logging.getLogger(__name__)

_DEMO_PHONE = "255000000000"


def log_message(message: str, *args: Any) -> str:
    """Log a message followed by key/value pairs and return the logged line."""
    if len(args) % 2:
        raise ValueError("log_message: key/value arguments must come in pairs")
    line = f"msg: {message}"
    for key, value in zip(args[::2], args[1::2]):
        line += f", {key}: {value}"
    _log.info("%s", line)
    return line


def build_demo_order(order_id: str) -> OrderInput:
    """A sample mobile-money order for the given order id."""
    return OrderInput(
        vendor="TILL00000000",
        order_id=order_id,
        buyer_email="buyer@example.com",
        buyer_name="Jane Doe",
        buyer_phone=_DEMO_PHONE,
        amount=5000,
        currency="TZS",
        payment_methods="MOBILEMONEYPULL",
        billing_first_name="Jane",
        billing_last_name="Doe",
        billing_address1="Africana",
        billing_city="Dar es salaam",
        billing_state_region="Tanzania",
        billing_post_code_po_box="00000",
        billing_country="TZ",
        billing_phone=_DEMO_PHONE,
        number_items=1,
        webhook="https://example.com/webhook",
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="selcompay",
        description=(
            "Create a demo checkout order. Reads SELCOM_HOST, SELCOM_API_KEY "
            "and SELCOM_API_SECRET from the environment."
        ),
    )
    parser.add_argument(
        "--order-id",
        default=None,
        help="order id to use (default: a fresh UUID)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Create the demo order, print the reply and return the exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    host = os.environ.get("SELCOM_HOST", "")
    api_key = os.environ.get("SELCOM_API_KEY", "")
    api_secret = os.environ.get("SELCOM_API_SECRET", "")

    order = build_demo_order(args.order_id or str(uuid.uuid4()))

    with Client(host, api_key, api_secret, logger=log_message) as client:
        try:
            resp = Checkout(client).create_order(order)
        except (SelcomError, ValueError, TypeError, requests.RequestException) as exc:
            print(exc)
            return EXIT_FAILURE

    print(resp)
    return 0


if __name__ == "__main__":
    sys.exit(main())