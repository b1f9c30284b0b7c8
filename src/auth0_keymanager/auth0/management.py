"""Authenticated access to the Auth0 Management API.

``ManagementApiAuth`` is the interceptor attached to every management call. It
obtains a token with the client-credentials grant for the configured audience,
caches it until shortly before expiry, and retries a request once with a fresh
token when the Management API answers 401.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Generator
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from ..contracts import NotFoundError, ProviderRejectedError, TransportError
from ..http import create_http_client, read_json_object
from ..models import KeyManagerBaseModel
from .constants import GRANT_TYPE_CLIENT_CREDENTIALS
from .models import Auth0AccessTokenRequest, Auth0AccessTokenResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=KeyManagerBaseModel)


class ManagementApiAuth(httpx.Auth):
    """httpx auth flow that injects a Management API bearer token."""

    requires_response_body = True

    def __init__(
        self,
        *,
        token_endpoint: str,
        client_id: str,
        client_secret: str,
        audience: str,
        leeway: float = 30.0,
    ):
        self.token_endpoint = token_endpoint
        self.client_id = client_id
        self.audience = audience
        self._client_secret = client_secret
        self._leeway = leeway
        self._lock = threading.Lock()
        self._access_token: str | None = None
        self._expires_at = 0.0

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._cached_token()
        if token is None:
            token = self._store_token((yield self._build_token_request()))

        request.headers["Authorization"] = f"Bearer {token}"
        response = yield request

        if response.status_code == 401:
            logger.info("Management API rejected the cached token, requesting a new one")
            self._invalidate(token)
            token = self._store_token((yield self._build_token_request()))
            request.headers["Authorization"] = f"Bearer {token}"
            yield request

    def _cached_token(self) -> str | None:
        with self._lock:
            if self._access_token and time.time() < self._expires_at:
                return self._access_token
            return None

    def _invalidate(self, token: str) -> None:
        with self._lock:
            if self._access_token == token:
                self._access_token = None
                self._expires_at = 0.0

    def _build_token_request(self) -> httpx.Request:
        body = Auth0AccessTokenRequest(
            client_id=self.client_id,
            client_secret=self._client_secret,
            grant_type=GRANT_TYPE_CLIENT_CREDENTIALS,
            audience=self.audience,
        )
        return httpx.Request(
            "POST",
            self.token_endpoint,
            json=body.model_dump(exclude_none=True),
            headers={"Content-Type": "application/json"},
        )

    def _store_token(self, response: httpx.Response) -> str:
        if response.status_code != 200:
            logger.warning(
                "Management API token request returned non-200",
                extra={"endpoint": "token", "status_code": response.status_code},
            )
            raise ProviderRejectedError(
                "invalid_client",
                "Could not obtain a Management API token with the configured credentials",
                status_code=response.status_code,
            )
        try:
            token = Auth0AccessTokenResponse.model_validate(read_json_object(response))
        except ValueError as exc:
            raise TransportError(description="Management API token response was invalid") from exc

        expires_in = token.expires_in if token.expires_in is not None else 0
        with self._lock:
            self._access_token = token.access_token
            self._expires_at = time.time() + max(expires_in - self._leeway, 0)
        return token.access_token


class ManagementApiClient:
    """Base for clients of one Management API collection (e.g. ``/clients``)."""

    resource_name = "management"

    def __init__(self, endpoint: str, auth: ManagementApiAuth, *, timeout: float):
        self.endpoint = endpoint.rstrip("/")
        self._client = create_http_client(timeout=timeout, auth=auth)

    def close(self) -> None:
        self._client.close()

    def _url(self, *segments: str) -> str:
        if not segments:
            return self.endpoint
        return "/".join([self.endpoint, *(quote(segment, safe="") for segment in segments)])

    def _send(
        self, method: str, url: str, *, json: Any = None, context: str
    ) -> httpx.Response:
        try:
            return self._client.request(method, url, json=json)
        except httpx.RequestError as exc:
            logger.warning(
                "Management API request failed",
                extra={
                    "endpoint": self.resource_name,
                    "context": context,
                    "error_type": exc.__class__.__name__,
                },
            )
            raise TransportError(
                description=f"Could not reach the Auth0 Management API ({context})"
            ) from exc

    def _raise_for_status(self, resp: httpx.Response, *, context: str) -> None:
        if resp.is_success:
            return

        error, message = _extract_error(resp)
        logger.warning(
            "Management API returned an error status",
            extra={
                "endpoint": self.resource_name,
                "context": context,
                "status_code": resp.status_code,
                "error": error,
            },
        )
        description = f"Auth0 rejected {context}: {message or resp.reason_phrase}"
        if resp.status_code == 404:
            raise NotFoundError(error or None, description, status_code=404)
        raise ProviderRejectedError(error or None, description, status_code=resp.status_code)

    def _parse(self, resp: httpx.Response, model: type[ModelT], *, context: str) -> ModelT:
        try:
            return model.model_validate(read_json_object(resp))
        except ValueError as exc:
            logger.warning(
                "Management API returned an invalid body",
                extra={
                    "endpoint": self.resource_name,
                    "context": context,
                    "status_code": resp.status_code,
                },
            )
            raise TransportError(
                description=f"Auth0 response to {context} was invalid"
            ) from exc


def _extract_error(resp: httpx.Response) -> tuple[str, str]:
    try:
        payload = resp.json()
    except ValueError:
        return "", resp.text
    if not isinstance(payload, dict):
        return "", resp.text
    return str(payload.get("errorCode") or payload.get("error") or ""), str(
        payload.get("message") or payload.get("error_description") or ""
    )


__all__ = ["ManagementApiAuth", "ManagementApiClient"]
