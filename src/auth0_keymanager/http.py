"""HTTP client construction shared by the provider clients.

All outbound calls go through :func:`create_http_client` so timeouts are always
explicit and tests can substitute a transport in one place.
"""

from __future__ import annotations

from typing import Any

import httpx

from .version import PACKAGE_NAME, PACKAGE_VERSION

USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"


def create_http_client(
    *,
    timeout: float,
    base_url: str = "",
    auth: httpx.Auth | None = None,
    **kwargs: Any,
) -> httpx.Client:
    """Create a synchronous httpx client with the adapter's defaults."""
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    headers.update(kwargs.pop("headers", {}) or {})
    return httpx.Client(
        base_url=base_url,
        auth=auth,
        timeout=httpx.Timeout(timeout),
        headers=headers,
        **kwargs,
    )


def read_json_object(resp: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body or raise ``ValueError``."""
    if not resp.content:
        raise ValueError("empty response body")
    payload = resp.json()
    if not isinstance(payload, dict):
        raise ValueError("response body is not a JSON object")
    return payload


__all__ = ["USER_AGENT", "create_http_client", "read_json_object"]
