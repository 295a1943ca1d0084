"""Decoding of ``/api/v1/value`` responses into :class:`~configly.models.ValueRecord` objects.

A successful response body looks like::

    {
      "data": {
        "slogan": {"type": "string", "value": "what exactly is a yeet", "ttl": 120},
        "cities": {"type": "jsonBlob", "value": ["medellin", "boston"], "ttl": 5}
      },
      "missingKeys": ["missingKey"]
    }

Keys unknown to the server are simply absent from ``data``.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from configly.exceptions import ServerError
from configly.models import ValueRecord


def extract_records(response: httpx.Response) -> dict[str, ValueRecord]:
    """Parse the ``data`` object of a value response.

    Entries without a ``value`` field are dropped, so callers treat them
    exactly like keys the server omitted.

    Args:
        response: A 2xx :class:`httpx.Response` from the value endpoint.

    Returns:
        A mapping of key to :class:`ValueRecord` for every key the server
        returned a value for.

    Raises:
        ServerError: If the body is not JSON, or ``data`` or one of its
            entries has the wrong shape.
    """
    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise ServerError(
            f"HTTP {response.status_code}: response body is not valid JSON",
            original_cause=exc,
        ) from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise ServerError(
            f"HTTP {response.status_code}: response has no 'data' object",
            original_cause=response,
        )

    records: dict[str, ValueRecord] = {}
    for key, raw in payload["data"].items():
        if not isinstance(raw, dict):
            raise ServerError(
                f"HTTP {response.status_code}: malformed entry for key '{key}'",
                original_cause=response,
            )
        try:
            record = ValueRecord.model_validate(raw)
        except ValidationError as exc:
            raise ServerError(
                f"HTTP {response.status_code}: malformed entry for key '{key}': {exc}",
                original_cause=exc,
            ) from exc
        if record.has_value:
            records[key] = record
    return records
