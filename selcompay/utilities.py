"""Utility payment API: pay bills, look up references and query status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .client import Client
from .models import Response


@dataclass
class UtilityPaymentInput:
    """Input for paying a utility service."""

    transaction_id: str = ""
    utility_code: str = ""
    utility_reference: str = ""
    amount: float = 0.0
    vendor: str = ""
    pin: str = ""
    phone: str = ""

    def to_dict(self) -> dict[str, Any]:
        """The payment in its wire form."""
        amount: float | int = self.amount
        if isinstance(amount, float) and amount.is_integer():
            amount = int(amount)
        return {
            "transid": self.transaction_id,
            "utilitycode": self.utility_code,
            "utilref": self.utility_reference,
            "amount": amount,
            "vendor": self.vendor,
            "pin": self.pin,
            "msisdn": self.phone,
        }


class Utilities:
    """Calls of the utility payment API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _call(self, method: str, path: str, body: dict[str, Any]) -> Response:
        return Response.from_dict(self.client.request(method, self.client.url(path), body))

    def payment(self, body: UtilityPaymentInput) -> Response:
        """Pay for a utility service."""
        return self._call("POST", "utilitypayment/process", body.to_dict())

    def lookup(self, utility_code: str, utility_ref: str, transaction_id: str) -> Response:
        """Look up a utility reference before paying."""
        return self._call(
            "GET",
            f"utilitypayment/lookup?utilitycode={utility_code}"
            f"&utilityref={utility_ref}&transid={transaction_id}",
            {"transid": transaction_id, "utilitycode": utility_code, "utilref": utility_ref},
        )

    def payment_status(self, transaction_id: str) -> Response:
        """Status of a utility payment."""
        return self._call(
            "GET",
            f"utilitypayment/query?transid={transaction_id}",
            {"transid": transaction_id},
        )