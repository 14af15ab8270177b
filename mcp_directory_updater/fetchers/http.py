"""Shared HTTP GET helper for registry lookups."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "MCP-Directory-Updater/1.0"

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}


class FetchError(Exception):
    """A registry request failed (non-2xx status or transport error)."""

    def __init__(self, url: str, status_code: int | None = None, message: str | None = None):
        self.url = url
        self.status_code = status_code
        if message is None:
            message = f"HTTP {status_code} for {url}" if status_code else f"Request failed for {url}"
        super().__init__(message)


def create_client(
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the HTTP client used for a whole update run.

    Redirects are not followed, so a 3xx response is a failed lookup.
    """
    return httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=False)


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str] | None = None,
) -> Any:
    """
    GET a URL and return its parsed JSON body.

    Bodies that are not valid JSON are returned as raw text.

    Args:
        client: HTTP client to use
        url: Absolute URL to request
        headers: Extra headers merged over the identifying defaults

    Returns:
        Parsed JSON value, or the response text

    Raises:
        FetchError: On a status outside 2xx or a transport-level error
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}

    try:
        response = await client.get(url, headers=request_headers)
    except httpx.HTTPError as e:
        raise FetchError(url, message=f"Request failed for {url}: {e}") from e

    if not 200 <= response.status_code < 300:
        raise FetchError(url, response.status_code)

    try:
        return response.json()
    except ValueError:
        logger.debug(f"Non-JSON body from {url}, returning raw text")
        return response.text


def get_field(body: Any, key: str) -> Any:
    """Read a key from a parsed body, or None when the body is not a JSON object."""
    if isinstance(body, dict):
        return body.get(key)
    return None
