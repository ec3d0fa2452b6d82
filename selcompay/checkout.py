"""Checkout API: orders, stored cards and direct wallet or card payments."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

import requests

from .client import Client, base64_encode
from .models import Response, SelcomError


def _key(name: str, omitempty: bool = False) -> dict[str, Any]:
    return {"json": name, "omitempty": omitempty}


def _to_wire(obj: Any) -> dict[str, Any]:
    """Encode a dataclass by its JSON keys, dropping empty optional fields."""
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        if f.metadata.get("omitempty") and not value:
            continue
        out[f.metadata["json"]] = value
    return out


@dataclass
class OrderInput:
    """Input for a full checkout order, with billing and shipping details."""

    vendor: str = field(default="", metadata=_key("vendor"))
    order_id: str = field(default="", metadata=_key("order_id"))
    buyer_email: str = field(default="", metadata=_key("buyer_email"))
    buyer_name: str = field(default="", metadata=_key("buyer_name"))
    buyer_user_id: str = field(default="", metadata=_key("buyer_userid", True))
    buyer_phone: str = field(default="", metadata=_key("buyer_phone"))
    gateway_buyer_uuid: str = field(default="", metadata=_key("gateway_buyer_uuid"))
    amount: int = field(default=0, metadata=_key("amount"))
    currency: str = field(default="", metadata=_key("currency"))
    payment_methods: str = field(default="", metadata=_key("payment_methods"))
    redirect_url: str = field(default="", metadata=_key("redirect_url", True))
    cancel_url: str = field(default="", metadata=_key("cancel_url", True))
    webhook: str = field(default="", metadata=_key("webhook", True))
    billing_first_name: str = field(default="", metadata=_key("billing.firstname"))
    billing_last_name: str = field(default="", metadata=_key("billing.lastname"))
    billing_address1: str = field(default="", metadata=_key("billing.address_1"))
    billing_address2: str = field(default="", metadata=_key("billing.address_2", True))
    billing_city: str = field(default="", metadata=_key("billing.city"))
    billing_state_region: str = field(default="", metadata=_key("billing.state_or_region"))
    billing_post_code_po_box: str = field(default="", metadata=_key("billing.postcode_or_pobox"))
    billing_country: str = field(default="", metadata=_key("billing.country"))
    billing_phone: str = field(default="", metadata=_key("billing.phone"))
    shipping_first_name: str = field(default="", metadata=_key("shipping.firstname", True))
    shipping_last_name: str = field(default="", metadata=_key("shipping.lastname", True))
    shipping_address1: str = field(default="", metadata=_key("shipping.address_1", True))
    shipping_address2: str = field(default="", metadata=_key("shipping.address_2", True))
    shipping_city: str = field(default="", metadata=_key("shipping.city", True))
    shipping_state_region: str = field(
        default="", metadata=_key("shipping.state_or_region", True)
    )
    shipping_post_code_po_box: str = field(
        default="", metadata=_key("shipping.postcode_or_pobox", True)
    )
    shipping_country: str = field(default="", metadata=_key("shipping.country", True))
    shipping_phone: str = field(default="", metadata=_key("shipping.phone", True))
    buyer_remarks: str = field(default="", metadata=_key("buyer_remarks", True))
    merchant_remarks: str = field(default="", metadata=_key("merchant_remarks", True))
    number_items: int = field(default=0, metadata=_key("no_of_items", True))
    header_colour: str = field(default="", metadata=_key("header_colour", True))
    link_colour: str = field(default="", metadata=_key("link_colour", True))
    button_colour: str = field(default="", metadata=_key("button_colour", True))
    expiry: int = field(default=0, metadata=_key("expiry", True))

    def to_dict(self) -> dict[str, Any]:
        """The order in its wire form."""
        return _to_wire(self)


@dataclass
class OrderInputMinimal:
    """Input for a minimal order, for non-card payments."""

    vendor: str = field(default="", metadata=_key("vendor"))
    order_id: str = field(default="", metadata=_key("order_id"))
    buyer_email: str = field(default="", metadata=_key("buyer_email"))
    buyer_name: str = field(default="", metadata=_key("buyer_name"))
    buyer_phone: str = field(default="", metadata=_key("buyer_phone"))
    amount: int = field(default=0, metadata=_key("amount"))
    currency: str = field(default="", metadata=_key("currency"))
    redirect_url: str = field(default="", metadata=_key("redirect_url", True))
    cancel_url: str = field(default="", metadata=_key("cancel_url", True))
    webhook: str = field(default="", metadata=_key("webhook", True))
    buyer_remarks: str = field(default="", metadata=_key("buyer_remarks", True))
    merchant_remarks: str = field(default="", metadata=_key("merchant_remarks", True))
    number_items: int = field(default=0, metadata=_key("no_of_items", True))
    header_colour: str = field(default="", metadata=_key("header_colour", True))
    link_colour: str = field(default="", metadata=_key("link_colour", True))
    button_colour: str = field(default="", metadata=_key("button_colour", True))
    expiry: int = field(default=0, metadata=_key("expiry", True))

    def to_dict(self) -> dict[str, Any]:
        """The order in its wire form."""
        return _to_wire(self)


@dataclass
class ProcessOrderRequest:
    """Request to complete an order with a wallet USSD push."""

    trans_id: str = field(default="", metadata=_key("transId"))
    order_id: str = field(default="", metadata=_key("order_id"))
    msisdn: str = field(default="", metadata=_key("msisdn"))

    def to_dict(self) -> dict[str, Any]:
        """The request in its wire form."""
        return _to_wire(self)


@dataclass
class ProcessOrderResponse:
    """Reply to a process-order request."""

    reference: str = ""
    result_code: str = ""
    result: str = ""
    message: str = ""
    data: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ProcessOrderResponse":
        """Build the reply from a decoded JSON object."""
        if not isinstance(data, dict):
            raise TypeError(f"response must be a JSON object, got {type(data).__name__}")
        return cls(
            reference=data.get("reference") or "",
            result_code=data.get("resultcode") or "",
            result=data.get("result") or "",
            message=data.get("message") or "",
            data=list(data.get("data") or []),
        )


@dataclass
class CardPaymentInput:
    """Input for paying an order with a stored card."""

    transaction_id: str = field(default="", metadata=_key("transid"))
    vendor: str = field(default="", metadata=_key("vendor"))
    order_id: str = field(default="", metadata=_key("order_id"))
    card_token: str = field(default="", metadata=_key("card_token"))
    buyer_user_id: str = field(default="", metadata=_key("buyer_userid"))
    gateway_buyer_uuid: str = field(default="", metadata=_key("gateway_buyer_uuid"))

    def to_dict(self) -> dict[str, Any]:
        """The payment in its wire form."""
        return _to_wire(self)


_SWALLOWED = (SelcomError, ValueError, TypeError, requests.RequestException)


class Checkout:
    """Calls of the checkout API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _call(self, method: str, path: str, body: dict[str, Any]) -> Response:
        return Response.from_dict(self.client.request(method, self.client.url(path), body))

    def create_order(self, order: OrderInput) -> Response:
        """Create a payment order; the reply holds the payment URL."""
        if order.webhook:
            order = dataclasses.replace(order, webhook=base64_encode(order.webhook))
        return self._call("POST", "checkout/create-order", order.to_dict())

    def create_order_minimal(self, order: OrderInputMinimal) -> Response:
        """Create an order for mobile wallet push or manual payment."""
        if order.webhook:
            order = dataclasses.replace(order, webhook=base64_encode(order.webhook))
        return self._call("POST", "checkout/create-order-minimal", order.to_dict())

    def process_order(self, order: ProcessOrderRequest) -> ProcessOrderResponse:
        """Complete an order by triggering a wallet USSD push."""
        reply = self.client.request(
            "POST", self.client.url("checkout/wallet-payment"), order.to_dict()
        )
        return ProcessOrderResponse.from_dict(reply)

    def cancel_order(self, order_id: str) -> Response:
        """Cancel an order before payment; failures yield an empty response."""
        try:
            return self._call("DELETE", "checkout/cancel-order", {"order_id": order_id})
        except _SWALLOWED:
            return Response()

    def check_order(self, order_id: str) -> Response:
        """Status of an order."""
        return self._call(
            "GET", f"checkout/order-status?order_id={order_id}", {"order_id": order_id}
        )

    def orders(self, start_date: str, end_date: str) -> Response:
        """Orders created between two dates."""
        return self._call(
            "GET",
            f"checkout/list-orders?fromdate={start_date}&todate={end_date}",
            {"fromdate": start_date, "todate": end_date},
        )

    def fetch_stored_cards(self, buyer_user_id: str, gateway_buyer_uuid: str) -> Response:
        """Stored cards of a buyer; failures yield an empty response."""
        body = {"buyer_userid": buyer_user_id, "gateway_buyer_uuid": gateway_buyer_uuid}
        try:
            return self._call("POST", "checkout/stored-cards", body)
        except _SWALLOWED:
            return Response()

    def delete_stored_card(self, card_resource_id: str, gateway_buyer_uuid: str) -> Response:
        """Delete a stored card."""
        return self._call(
            "DELETE",
            f"checkout/delete-card?id={card_resource_id}&gateway_buyer_uuid={gateway_buyer_uuid}",
            {"id": card_resource_id, "gateway_buyer_uuid": gateway_buyer_uuid},
        )

    def card_payment(self, payment: CardPaymentInput) -> Response:
        """Pay an order with a stored card."""
        return self._call("POST", "checkout/card-payment", payment.to_dict())

    def wallet_payment(self, transaction_id: str, order_id: str, phone: str) -> Response:
        """Pay an order from a mobile wallet via USSD push."""
        body = {"transid": transaction_id, "order_id": order_id, "msisdn": phone}
        return self._call("POST", "checkout/wallet-payment", body)