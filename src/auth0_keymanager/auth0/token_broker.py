"""Application token issuance through the Auth0 token endpoint."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from ..contracts import ProviderRejectedError, TransportError
from ..http import create_http_client, read_json_object
from ..models import AccessTokenInfo
from .codec import join_scopes, require_client_id, to_access_token_info
from .constants import GRANT_TYPE_CLIENT_CREDENTIALS, UNAUTHORIZED_APPLICATION_MESSAGE
from .models import Auth0AccessTokenRequest, Auth0AccessTokenResponse

logger = logging.getLogger(__name__)


class Auth0TokenBroker:
    """Exchanges client credentials for tokens bound to the platform's audience.

    Auth0 answers 403 when the client has not been granted access to the
    resource server. That case is returned as an ``AccessTokenInfo`` with
    ``authorized=False`` and an explanation in place of the token; every other
    failure raises.
    """

    def __init__(self, token_endpoint: str, audience: str, *, timeout: float):
        self.token_endpoint = token_endpoint
        self.audience = audience
        self._timeout = timeout

    def issue_token(
        self,
        client_id: str,
        client_secret: str | None,
        grant_type: str | None = None,
        scopes: Iterable[str] = (),
    ) -> AccessTokenInfo:
        client_id = require_client_id(client_id, "request an access token")
        body = Auth0AccessTokenRequest(
            client_id=client_id,
            client_secret=client_secret,
            grant_type=grant_type or GRANT_TYPE_CLIENT_CREDENTIALS,
            audience=self.audience,
            scope=join_scopes(scopes) or None,
        )

        with create_http_client(timeout=self._timeout) as client:
            try:
                resp = client.post(
                    self.token_endpoint,
                    json=body.model_dump(exclude_none=True),
                    headers={"Content-Type": "application/json"},
                )
            except httpx.RequestError as exc:
                logger.warning(
                    "Token endpoint request failed",
                    extra={"endpoint": "token", "error_type": exc.__class__.__name__},
                )
                raise TransportError(description="Auth0 token request failed") from exc

            if resp.status_code == 403:
                logger.warning(
                    "Token endpoint refused the application",
                    extra={"endpoint": "token", "client_id": client_id, "status_code": 403},
                )
                return AccessTokenInfo(
                    consumer_key=client_id,
                    consumer_secret=client_secret,
                    access_token=UNAUTHORIZED_APPLICATION_MESSAGE,
                    authorized=False,
                )

            if resp.status_code != 200:
                logger.warning(
                    "Token endpoint returned non-200",
                    extra={"endpoint": "token", "status_code": resp.status_code},
                )
                raise ProviderRejectedError(
                    "token_request_failed",
                    f"Auth0 token request failed with status {resp.status_code}",
                    status_code=resp.status_code,
                )

            try:
                token = Auth0AccessTokenResponse.model_validate(read_json_object(resp))
            except ValueError as exc:
                logger.warning(
                    "Token endpoint returned an invalid body",
                    extra={"endpoint": "token", "status_code": resp.status_code},
                )
                raise TransportError(description="Auth0 token response was invalid") from exc

        return to_access_token_info(token, client_id, client_secret)


__all__ = ["Auth0TokenBroker"]
