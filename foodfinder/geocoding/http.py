"""Shared request/decoding helpers for the external geocoding services."""

from __future__ import annotations

import html
import json
import re
from typing import Any, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError

from .errors import MalformedResponseError, ServiceUnavailableError, UpstreamError

T = TypeVar("T")

_XML_STRING = re.compile(r"<string[^>]*>(.*)</string>", re.DOTALL)


def send(
    session: requests.Session,
    url: str,
    *,
    provider: str,
    params: dict[str, Any],
    timeout: float,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """GET ``url``; transport errors and non-2xx statuses become ServiceUnavailableError."""
    try:
        response = session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise ServiceUnavailableError(f"{provider} request failed: {exc}", provider=provider) from exc
    if not 200 <= response.status_code < 300:
        raise ServiceUnavailableError(
            f"{provider} responded with HTTP {response.status_code}", provider=provider
        )
    return response


def decode_json(text: str, *, provider: str) -> Any:
    """Parse a JSON body, unwrapping and unescaping the ``<string>`` envelope ASMX services add."""
    body = text.strip()
    if body.startswith("<"):
        match = _XML_STRING.search(body)
        if not match:
            raise MalformedResponseError(f"{provider} returned unexpected XML", provider=provider)
        body = html.unescape(match.group(1)).strip()
    try:
        return json.loads(body)
    except ValueError as exc:
        raise MalformedResponseError(f"{provider} returned invalid JSON", provider=provider) from exc


def validate(model: Any, payload: Any, *, provider: str) -> Any:
    try:
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"{provider} response did not match the expected shape: {exc.error_count()} error(s)",
            provider=provider,
        ) from exc


def raise_for_message_list(payload: Any, *, provider: str) -> None:
    """TGOS reports parameter errors as a list under ``responseMessage`` with HTTP 200."""
    if not isinstance(payload, dict):
        return
    message = payload.get("responseMessage")
    if isinstance(message, list):
        detail = ", ".join(
            f"{item.get('parameter', '')}: {item.get('message', '')}"
            if isinstance(item, dict)
            else str(item)
            for item in message
        )
        raise UpstreamError(f"{provider} reported an error: {detail}", provider=provider)
