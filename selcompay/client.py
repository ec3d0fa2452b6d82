"""HTTP client that signs and sends requests to the Selcom Pay API."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import requests

from .models import SelcomError

API_VERSION = "v1"
DIGEST_METHOD = "HS256"

# Connect timeout only; reads are not bounded.
_TIMEOUT = (10.0, None)

_log = logging.getLogger(__name__)

Logger = Callable[..., None]


def _default_logger(message: str, *args: Any) -> None:
    pairs = ", ".join(f"{key}: {value}" for key, value in zip(args[::2], args[1::2]))
    _log.debug("%s%s", message, f", {pairs}" if pairs else "")


def base64_encode(data: bytes | str) -> str:
    """Standard base64 with padding."""
    if isinstance(data, str):
        data = data.encode()
    return base64.b64encode(data).decode("ascii")


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        inner = " ".join(f"{key}:{_format_value(value[key])}" for key in sorted(value))
        return f"map[{inner}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    return str(value)


def _timestamp() -> str:
    stamp = datetime.now().astimezone().isoformat(timespec="seconds")
    return stamp[:-6] + "Z" if stamp.endswith("+00:00") else stamp


def sign_request(api_secret: str, payload: Mapping[str, Any], timestamp: str) -> tuple[str, str]:
    """Return the signed field list and the HMAC-SHA256 digest for a body."""
    if not isinstance(payload, Mapping):
        raise ValueError("unmarshal error: request body must be a JSON object")
    message = "&".join(
        [f"timestamp={timestamp}", *(f"{key}={_format_value(value)}" for key, value in payload.items())]
    )
    mac = hmac.new(api_secret.encode(), message.encode(), hashlib.sha256)
    return ",".join(payload), base64_encode(mac.digest())


class Client:
    """Talks to the Selcom Pay API, signing every request."""

    def __init__(
        self,
        host: str,
        api_key: str,
        api_secret: str,
        logger: Logger | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.host = host.lstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self._log = logger or _default_logger
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def url(self, path: str) -> str:
        """Full endpoint URL for a path below the API version."""
        return f"{self.host}/{API_VERSION}/{path.lstrip('/')}"

    def headers(self, body: Mapping[str, Any], timestamp: str | None = None) -> dict[str, str]:
        """Default and authentication headers for a request body."""
        if timestamp is None:
            timestamp = _timestamp()
        signed_fields, digest = sign_request(self.api_secret, body, timestamp)
        return {
            "Cache-Control": "no-cache",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"SELCOM {base64_encode(self.api_key)}",
            "Digest-Method": DIGEST_METHOD,
            "Digest": digest,
            "Timestamp": timestamp,
            "Signed-Fields": signed_fields,
        }

    def request(self, method: str, url: str, body: Mapping[str, Any] | None = None) -> Any:
        """Send a signed request and return the decoded JSON reply.

        Raises SelcomError when the API answers with a status other than 200.
        """
        self._log("do: rawRequest: started", "method", method, "endpoint", url)
        try:
            return self._send(method, url, body)
        finally:
            self._log("do: rawRequest: completed", "status", url)

    def _send(self, method: str, url: str, body: Mapping[str, Any] | None) -> Any:
        if body is None:
            raise ValueError("unmarshal error: request body is empty")
        try:
            payload = json.dumps(body, separators=(",", ":")) + "\n"
        except (TypeError, ValueError) as exc:
            raise ValueError(f"encoding request body: error: {exc}") from exc

        headers = self.headers(json.loads(payload))
        self._log(str(headers))

        resp = self._session.request(
            method, url, data=payload.encode(), headers=headers, timeout=_TIMEOUT
        )
        text = resp.text

        if resp.status_code != 200:
            try:
                decoded = json.loads(text)
                if not isinstance(decoded, dict):
                    raise ValueError("error response is not a JSON object")
            except ValueError as exc:
                raise ValueError(f"decoding: response: {text}, error: {exc}") from exc
            raise SelcomError.from_dict(decoded, status_code=resp.status_code)

        try:
            return json.loads(text)
        except ValueError as exc:
            raise ValueError(f"client: response: {text}: unmarshaling: error: {exc}") from exc

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()