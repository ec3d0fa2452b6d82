"""Response and error shapes returned by the Selcom Pay API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass
class Response:
    """A successful API reply."""

    reference: str = ""
    result_code: str = ""
    result: str = ""
    message: str = ""
    data: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Response":
        """Build a response from a decoded JSON object."""
        data = _require_mapping(data, "response")
        return cls(
            reference=data.get("reference") or "",
            result_code=data.get("resultcode") or "",
            result=data.get("result") or "",
            message=data.get("message") or "",
            data=list(data.get("data") or []),
        )


class SelcomError(Exception):
    """An error reply from the API, carrying the HTTP status code."""

    def __init__(
        self,
        transaction_id: str = "",
        reference: str = "",
        result_code: str = "",
        result: str = "",
        message: str = "",
        data: list[dict[str, Any]] | None = None,
        status_code: int = 0,
    ) -> None:
        super().__init__(message)
        self.transaction_id = transaction_id
        self.reference = reference
        self.result_code = result_code
        self.result = result
        self.message = message
        self.data = data
        self.status_code = status_code

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], status_code: int = 0) -> "SelcomError":
        """Build an error from a decoded JSON object and the HTTP status."""
        data = _require_mapping(data, "error response")
        raw = data.get("data")
        return cls(
            transaction_id=data.get("transid") or "",
            reference=data.get("reference") or "",
            result_code=data.get("resultcode") or "",
            result=data.get("result") or "",
            message=data.get("message") or "",
            data=list(raw) if raw is not None else None,
            status_code=status_code,
        )

    def to_dict(self) -> dict[str, Any]:
        """The error in its wire form; the status code is not part of it."""
        return {
            "transid": self.transaction_id,
            "reference": self.reference,
            "resultcode": self.result_code,
            "result": self.result,
            "message": self.message,
            "data": self.data,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))