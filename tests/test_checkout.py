import base64
import json

import pytest
import responses

from selcompay.checkout import (
    CardPaymentInput,
    Checkout,
    OrderInput,
    OrderInputMinimal,
    ProcessOrderRequest,
    ProcessOrderResponse,
)
from selcompay.client import Client
from selcompay.models import Response, SelcomError

HOST = "https://api.example.com"
BASE = f"{HOST}/v1/checkout"

OK = {
    "reference": "ref-1",
    "resultcode": "000",
    "result": "SUCCESS",
    "message": "done",
    "data": [{"payment_gateway_url": "gw"}],
}
FAIL = {"transid": "t-1", "reference": "ref-2", "resultcode": "403", "result": "FAIL",
        "message": "denied", "data": []}


@pytest.fixture
def rsps():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def checkout():
    with Client(HOST, "placeholder", "secret") as client:
        yield Checkout(client)


def sent(rsps, index=0):
    return json.loads(rsps.calls[index].request.body)


def test_order_input_omits_empty_optional_fields():
    wire = OrderInput(vendor="V1", order_id="o1", amount=100).to_dict()
    assert wire["vendor"] == "V1"
    assert wire["order_id"] == "o1"
    assert wire["amount"] == 100
    assert wire["billing.firstname"] == ""
    assert wire["gateway_buyer_uuid"] == ""
    assert "shipping.firstname" not in wire
    assert "no_of_items" not in wire
    assert "webhook" not in wire
    assert "buyer_userid" not in wire


def test_order_input_keeps_set_optional_fields():
    wire = OrderInput(shipping_city="Arusha", number_items=2, expiry=60).to_dict()
    assert wire["shipping.city"] == "Arusha"
    assert wire["no_of_items"] == 2
    assert wire["expiry"] == 60


def test_minimal_order_has_no_billing_fields():
    wire = OrderInputMinimal(vendor="V1", order_id="o1").to_dict()
    assert set(wire) == {"vendor", "order_id", "buyer_email", "buyer_name",
                         "buyer_phone", "amount", "currency"}


def test_process_order_request_keys():
    wire = ProcessOrderRequest(trans_id="t", order_id="o", msisdn="m").to_dict()
    assert wire == {"transId": "t", "order_id": "o", "msisdn": "m"}


def test_card_payment_input_keys():
    wire = CardPaymentInput(transaction_id="t", vendor="v", order_id="o", card_token="c",
                            buyer_user_id="b", gateway_buyer_uuid="g").to_dict()
    assert wire == {"transid": "t", "vendor": "v", "order_id": "o", "card_token": "c",
                    "buyer_userid": "b", "gateway_buyer_uuid": "g"}


def test_process_order_response_from_dict():
    reply = ProcessOrderResponse.from_dict({"reference": "r", "resultcode": "111",
                                            "data": [1, "x"]})
    assert reply.reference == "r"
    assert reply.result_code == "111"
    assert reply.data == [1, "x"]
    assert reply.message == ""


def test_process_order_response_rejects_list():
    with pytest.raises(TypeError):
        ProcessOrderResponse.from_dict([])


def test_create_order_encodes_webhook(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/create-order", json=OK)
    order = OrderInput(vendor="V1", order_id="o1", webhook="https://hook.example.com/x")
    reply = checkout.create_order(order)
    assert reply == Response.from_dict(OK)
    body = sent(rsps)
    assert base64.b64decode(body["webhook"]).decode() == "https://hook.example.com/x"
    assert order.webhook == "https://hook.example.com/x"
    assert rsps.calls[0].request.headers["Digest-Method"] == "HS256"


def test_create_order_minimal(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/create-order-minimal", json=OK)
    reply = checkout.create_order_minimal(OrderInputMinimal(vendor="V1", order_id="o2"))
    assert reply.result == "SUCCESS"
    assert sent(rsps)["order_id"] == "o2"
    assert "webhook" not in sent(rsps)


def test_create_order_raises_api_error(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/create-order", json=FAIL, status=403)
    with pytest.raises(SelcomError) as info:
        checkout.create_order(OrderInput(order_id="o1"))
    assert info.value.status_code == 403
    assert info.value.message == "denied"


def test_process_order(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/wallet-payment", json={"reference": "r", "data": ["a"]})
    reply = checkout.process_order(ProcessOrderRequest(trans_id="t", order_id="o", msisdn="m"))
    assert reply == ProcessOrderResponse(reference="r", data=["a"])
    assert sent(rsps)["transId"] == "t"


def test_cancel_order_uses_delete(rsps, checkout):
    rsps.add(responses.DELETE, f"{BASE}/cancel-order", json=OK)
    reply = checkout.cancel_order("o9")
    assert reply.reference == "ref-1"
    assert sent(rsps) == {"order_id": "o9"}


def test_cancel_order_swallows_errors(rsps, checkout):
    rsps.add(responses.DELETE, f"{BASE}/cancel-order", json=FAIL, status=500)
    assert checkout.cancel_order("o9") == Response()


def test_check_order_query(rsps, checkout):
    rsps.add(responses.GET, f"{BASE}/order-status", json=OK)
    reply = checkout.check_order("o5")
    assert reply == Response.from_dict(OK)
    assert rsps.calls[0].request.url.endswith("order-status?order_id=o5")
    assert sent(rsps) == {"order_id": "o5"}


def test_orders_query(rsps, checkout):
    rsps.add(responses.GET, f"{BASE}/list-orders", json=OK)
    reply = checkout.orders("2024-01-01", "2024-02-01")
    assert reply.message == "done"
    assert "fromdate=2024-01-01&todate=2024-02-01" in rsps.calls[0].request.url
    assert sent(rsps) == {"fromdate": "2024-01-01", "todate": "2024-02-01"}


def test_fetch_stored_cards(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/stored-cards", json=OK)
    reply = checkout.fetch_stored_cards("b1", "g1")
    assert reply.data == OK["data"]
    assert sent(rsps) == {"buyer_userid": "b1", "gateway_buyer_uuid": "g1"}


def test_fetch_stored_cards_swallows_errors(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/stored-cards", body="not json", status=500)
    assert checkout.fetch_stored_cards("b1", "g1") == Response()


def test_delete_stored_card_raises(rsps, checkout):
    rsps.add(responses.DELETE, f"{BASE}/delete-card", json=FAIL, status=404)
    with pytest.raises(SelcomError) as info:
        checkout.delete_stored_card("c1", "g1")
    assert info.value.status_code == 404
    assert "id=c1&gateway_buyer_uuid=g1" in rsps.calls[0].request.url


def test_card_payment(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/card-payment", json=OK)
    payment = CardPaymentInput(transaction_id="t", order_id="o", card_token="c")
    reply = checkout.card_payment(payment)
    assert reply.reference == "ref-1"
    assert sent(rsps) == payment.to_dict()


def test_wallet_payment(rsps, checkout):
    rsps.add(responses.POST, f"{BASE}/wallet-payment", json=OK)
    reply = checkout.wallet_payment("t1", "o1", "p1")
    assert reply.result_code == "000"
    assert sent(rsps) == {"transid": "t1", "order_id": "o1", "msisdn": "p1"}
    signed = rsps.calls[0].request.headers["Signed-Fields"].split(",")
    assert sorted(signed) == ["msisdn", "order_id", "transid"]