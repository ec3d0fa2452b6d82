# selcompay

A small client for the Selcom Pay API. It covers checkout orders, stored cards,
wallet push payments and utility payments.

Every request is sent as a JSON body and signed the way the gateway expects:

- `Authorization` is `SELCOM ` followed by the base64-encoded API key.
- `Digest` is a base64 HMAC-SHA256 signature, keyed with the API secret. It is
  computed over `timestamp=<timestamp>` followed by `&key=value` for each body
  field.
- `Signed-Fields` lists the body's field names, separated by commas.
- `Timestamp` is the local time in RFC 3339 form.
- `Digest-Method` is `HS256`.

The helpers `base64_encode` and `sign_request` in `selcompay.client` expose these
steps. `Client.headers(body, timestamp)` returns the complete header set for a
body.

## Installation

```
pip install selcompay
```

To install the test dependencies as well:

```
pip install "selcompay[test]"
```

## Usage

Create a `Client` with the gateway host and your credentials. Then wrap it in
the API group you need:

```python
from selcompay.client import Client
from selcompay.checkout import Checkout
from selcompay.utilities import Utilities

with Client(
    host="https://apigw.example.com",
    api_key="placeholder",
    api_secret="secret",
) as client:
    checkout = Checkout(client)

    status = checkout.check_order("order-0001")
    print(status.result_code, status.message)

    listing = checkout.orders("2024-01-01", "2024-01-31")
    for order in listing.data:
        print(order)

    utilities = Utilities(client)
    print(utilities.payment_status("txn-0001"))
```

Endpoint URLs have the form `<host>/v1/<path>`, as returned by `Client.url(path)`.
`Client.request(method, url, body)` sends a signed request and returns the
decoded JSON reply. The API-group classes are built on top of it.

### Request data

Orders are described with the `OrderInput` and `OrderInputMinimal` data
classes. Other request types have their own classes:

- Card payments use `CardPaymentInput`.
- Wallet pull payments use `ProcessOrderRequest`.
- Utility payments use `UtilityPaymentInput` from `selcompay.utilities`.

Each of these classes has `to_dict()`, which returns the JSON body sent to the
gateway. On the order classes, optional fields that are left empty or zero are
left out of that body. When an order has a webhook URL, `create_order` and
`create_order_minimal` base64-encode it before sending, as the gateway requires.

### Checkout calls

`Checkout` (in `selcompay.checkout`) offers:

- `create_order(order)`
- `create_order_minimal(order)`
- `process_order(order)`, which returns a `ProcessOrderResponse`
- `cancel_order(order_id)`
- `check_order(order_id)`
- `orders(start_date, end_date)`
- `fetch_stored_cards(buyer_user_id, gateway_buyer_uuid)`
- `delete_stored_card(card_resource_id, gateway_buyer_uuid)`
- `card_payment(payment)`
- `wallet_payment(transaction_id, order_id, phone)`

### Utility calls

`Utilities` (in `selcompay.utilities`) offers:

- `payment(body)`
- `lookup(utility_code, utility_ref, transaction_id)`
- `payment_status(transaction_id)`

### Replies and errors

Successful calls return a `Response` from `selcompay.models`. Its fields are
`reference`, `result_code`, `result`, `message` and `data`.

When the gateway answers with a status other than 200, the call raises
`SelcomError`. The error holds `transaction_id`, `reference`, `result_code`,
`result`, `message`, `data` and `status_code`. `str()` of the error is its JSON
form, which does not include the status code.

A reply that is not valid JSON raises `ValueError`. Network failures raise the
usual `requests` exceptions.

Two calls behave differently: `cancel_order` and `fetch_stored_cards` do not
raise. On any failure they return an empty `Response`.

### Sessions and logging

You can pass your own `requests.Session` to `Client`, for example to set
proxies or mount retrying adapters. The client closes a session only if it
created that session itself.

Each request uses a 10-second connect timeout and no read timeout.

You can also pass a `logger` callable. It is called with a message and
alternating key/value details when a request starts and when it completes. It
is also called with the request headers. Without a logger, these messages go
to the `selcompay.client` standard logger at debug level.

## Command line

`selcompay-checkout` creates a demonstration checkout order: a 5000 TZS
mobile-money order from a sample buyer. It reads the host and credentials from
the environment variables `SELCOM_HOST`, `SELCOM_API_KEY` and
`SELCOM_API_SECRET`. It prints the gateway's response and exits with status 0.
If the call fails, it prints the error and exits with status 255.

```
selcompay-checkout
selcompay-checkout --order-id order-0001
```

Without `--order-id`, a fresh UUID is used as the order id.

## What it does not do

The package only sends requests to the gateway. It does not run a server to
receive the gateway's webhook callbacks, and it does not store orders or
payments anywhere.