"""Helpers for the backend's ``{"success", "data", "error"}`` response envelope."""

import logging
from typing import Any

import httpx

from ..domain.errors import TransportError

logger = logging.getLogger(__name__)


async def send(client: httpx.AsyncClient, method: str, path: str, **kwargs) -> httpx.Response:
    """Send a request, mapping every HTTP-level failure to TransportError.

    Args:
        client: Open HTTP client
        method: HTTP method
        path: Path relative to the client's base URL
        **kwargs: Passed to ``client.request``

    Returns:
        A response with a 2xx status
    """
    try:
        response = await client.request(method, path, **kwargs)
        response.raise_for_status()
        return response
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise TransportError(f"{method} {path} returned HTTP {status}", status_code=status) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f"{method} {path} failed: {type(e).__name__}: {e}") from e


def read_envelope(response: httpx.Response) -> dict:
    """Decode the JSON envelope of a successful response."""
    try:
        body = response.json()
    except ValueError as e:
        raise TransportError("Backend returned a non-JSON response") from e

    if not isinstance(body, dict):
        raise TransportError("Backend returned an unexpected response shape")
    return body


def unwrap(response: httpx.Response) -> Any:
    """Return the envelope's ``data`` payload.

    Raises:
        TransportError: If the envelope reports failure
    """
    body = read_envelope(response)
    if body.get("success") is False:
        raise TransportError(body.get("error") or "Backend reported failure")
    return body.get("data")
