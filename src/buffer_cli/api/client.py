"""HTTP request layer for the Buffer API.

Builds authenticated URLs, encodes request bodies, performs a single call
under a timeout and classifies failures into BufferAPIError.

API Reference:
https://buffer.com/developers/api
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Mapping, TypeVar
from urllib.parse import quote, urlencode

import httpx

from .errors import (
    AUTH_FAILED_MESSAGE,
    DEFAULT_RETRY_AFTER,
    RATE_LIMIT_MESSAGE,
    BufferAPIError,
    ErrorCode,
)
from .models import FormBody, RequestOptions

T = TypeVar("T")

BASE_URL = "https://api.bufferapp.com/1"
ACCESS_TOKEN_PARAM = "access_token"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def build_url(path: str, token: str, params: Mapping[str, str] | None = None) -> str:
    """Build a full Buffer API URL with the access token as a query parameter.

    Args:
        path: Endpoint path, e.g. "/profiles.json"
        token: Bearer access token
        params: Extra query parameters, applied after the token

    Returns:
        Absolute URL string
    """
    query: dict[str, str] = {ACCESS_TOKEN_PARAM: token}
    if params:
        for key, value in params.items():
            query[key] = value
    return f"{BASE_URL}{path}?{urlencode(query)}"


def encode_form_body(data: FormBody) -> str:
    """Encode a mapping as application/x-www-form-urlencoded.

    List values are written as repeated pairs, which is how Buffer expects
    multi-valued fields like `profile_ids[]`.
    """
    parts: list[str] = []
    for key, value in data.items():
        values = [value] if isinstance(value, str) else value
        for item in values:
            parts.append(f"{quote(key, safe='')}={quote(str(item), safe='')}")
    return "&".join(parts)


def _parse_retry_after(value: str | None) -> int:
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER


def _extract_error_message(text: str, status: int) -> str:
    """Best-effort message from an error body: `error`, then `message`, then raw text."""
    try:
        payload = json.loads(text)
    except ValueError:
        return text or f"HTTP {status}"

    if isinstance(payload, dict):
        for key in ("error", "message"):
            value = payload.get(key)
            if value is not None:
                return value if isinstance(value, str) else json.dumps(value)
    return text


def _handle_response(response: httpx.Response) -> Any:
    """Classify a response and return its decoded JSON payload.

    Raises:
        BufferAPIError: For any non-2xx status or an empty or undecodable success body
    """
    status = response.status_code

    if status == 429:
        raise BufferAPIError(
            RATE_LIMIT_MESSAGE,
            ErrorCode.RATE_LIMITED,
            status,
            retry_after=_parse_retry_after(response.headers.get("Retry-After")),
        )

    if status in (401, 403):
        raise BufferAPIError(AUTH_FAILED_MESSAGE, ErrorCode.AUTH_FAILED, status)

    if not response.is_success:
        raise BufferAPIError(
            _extract_error_message(response.text, status),
            ErrorCode.API_ERROR,
            status,
        )

    if not response.content:
        raise BufferAPIError(
            f"Empty response body (HTTP {status})",
            ErrorCode.API_ERROR,
            status,
        )

    try:
        return response.json()
    except ValueError:
        raise BufferAPIError(
            f"Invalid JSON in response (HTTP {status})",
            ErrorCode.API_ERROR,
            status,
        ) from None


async def request(
    url: str,
    options: RequestOptions | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Make a single HTTP request to the Buffer API.

    The payload is returned as decoded JSON without schema validation.

    Args:
        url: Absolute URL, usually from build_url()
        options: Method, headers, body and timeout
        client: Optional shared client (left open); a fresh one is used otherwise

    Returns:
        Decoded JSON payload

    Raises:
        BufferAPIError: On HTTP failure, network failure or timeout
    """
    if options is None:
        options = RequestOptions()

    headers = dict(options.headers)
    content: str | None = None

    if options.form_body is not None:
        headers["Content-Type"] = FORM_CONTENT_TYPE
        content = encode_form_body(options.form_body)
    elif options.json_body is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        content = json.dumps(options.json_body)

    try:
        async with asyncio.timeout(options.timeout):
            if client is not None:
                response = await client.request(
                    options.method, url, headers=headers, content=content,
                    timeout=options.timeout,
                )
            else:
                async with httpx.AsyncClient() as own_client:
                    response = await own_client.request(
                        options.method, url, headers=headers, content=content,
                        timeout=options.timeout,
                    )
    except (TimeoutError, httpx.TimeoutException):
        raise BufferAPIError(
            f"Request timed out after {options.timeout:g}s",
            ErrorCode.TIMEOUT,
        ) from None
    except httpx.HTTPError as e:
        raise BufferAPIError(f"Network error: {e}", ErrorCode.NETWORK_ERROR) from e

    return _handle_response(response)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay: float = 1.0,
) -> T:
    """Retry an async operation with exponential backoff.

    Waits `initial_delay * 2 ** n` seconds after the n-th failure (n from 0).
    Every exception is retried; callers that want to stop early on, say,
    AUTH_FAILED should inspect the error themselves.

    Args:
        fn: Zero-argument coroutine function
        max_retries: Retries after the first attempt
        initial_delay: First backoff delay in seconds

    Returns:
        The first successful result

    Raises:
        The last exception raised by fn once all attempts have failed
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")

    attempt = 0
    while True:
        try:
            return await fn()
        except Exception:
            if attempt >= max_retries:
                raise
        await asyncio.sleep(initial_delay * 2 ** attempt)
        attempt += 1
