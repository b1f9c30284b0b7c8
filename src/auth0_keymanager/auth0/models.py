"""Auth0 wire models.

Field names follow the Auth0 Management and Authentication APIs; Python-side
names follow the key manager's vocabulary and map through aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from ..models import KeyManagerBaseModel


class Auth0ClientInfo(KeyManagerBaseModel):
    """Client record of the ``/clients`` endpoint.

    Fields Auth0 returns that are not declared here are kept as extras, so the
    full record can be handed back to the host platform.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    client_name: str | None = Field(default=None, alias="name")
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uris: list[str] | None = Field(default=None, alias="callbacks")
    grant_types: list[str] | None = None
    application_type: str | None = Field(default=None, alias="app_type")
    token_endpoint_auth_method: str | None = None

    def to_request_payload(self) -> dict[str, Any]:
        """Body for create/update calls: declared, writable fields only."""
        writable = set(type(self).model_fields) - {"client_id"}
        return self.model_dump(by_alias=True, exclude_none=True, include=writable)

    def snapshot(self) -> dict[str, Any]:
        """The complete record as JSON-compatible data, extras included."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Auth0ResourceServerInfo(KeyManagerBaseModel):
    """Resource server (API) record of the ``/resource-servers`` endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    identifier: str
    name: str | None = None
    token_lifetime: int | None = None


class Auth0AccessTokenRequest(KeyManagerBaseModel):
    """JSON body posted to the ``/oauth/token`` endpoint."""

    client_id: str
    client_secret: str | None = None
    grant_type: str
    audience: str
    scope: str | None = None


class Auth0AccessTokenResponse(KeyManagerBaseModel):
    """Minimal token endpoint response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str
    scope: str | None = None
    expires_in: int | None = None
    token_type: str | None = None


__all__ = [
    "Auth0AccessTokenRequest",
    "Auth0AccessTokenResponse",
    "Auth0ClientInfo",
    "Auth0ResourceServerInfo",
]
