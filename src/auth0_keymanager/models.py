"""Pydantic models for the key manager.

These are the host platform's generic key-manager types and the adapter's own
configuration. Provider wire types live in :mod:`auth0_keymanager.auth0.models`.

## Security-relevant configuration fields

- ``client_id`` / ``client_secret``: credentials of the management-API client the
  adapter authenticates as. They can create and delete every client in the tenant.
- ``server_url``: audience bound into every application token the adapter issues.

Treat changes to these fields as security-sensitive.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KeyManagerBaseModel(BaseModel):
    """Base model for all key manager models.

    - extra="forbid": rejects any fields not defined in the model
    - frozen=True: instances are immutable and safe to share between threads
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class KeyManagerConfigurationModel(KeyManagerBaseModel):
    """Configuration supplied once by the host platform.

    Unknown keys are kept so the host gets back exactly what it configured from
    ``get_key_manager_configuration()``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    token_endpoint: str = Field(min_length=1)
    audience: str = Field(min_length=1)  # Management API base URL
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    server_url: str | None = None  # Platform URL; defaults to audience
    timeout: float = Field(default=10.0, gt=0)
    management_token_leeway: float = Field(default=30.0, ge=0)

    @field_validator("audience")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @property
    def client_registration_endpoint(self) -> str:
        return f"{self.audience}clients"

    @property
    def resource_server_endpoint(self) -> str:
        return f"{self.audience}resource-servers"

    @property
    def resource_identifier(self) -> str:
        """Identifier of the protected resource this platform instance owns."""
        return self.server_url or self.audience


class OAuthApplicationInfo(KeyManagerBaseModel):
    """Platform-level description of an OAuth application.

    ``callback_url`` and ``grant_types`` are comma-joined, the way the host
    platform carries them. ``additional_properties`` is either a mapping or its
    JSON encoding.
    """

    client_name: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    callback_url: str | None = None
    key_type: str | None = None
    username: str | None = None
    grant_types: str | None = None
    additional_properties: dict[str, Any] | str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class AccessTokenRequest(KeyManagerBaseModel):
    """Platform request for a new application access token."""

    client_id: str
    client_secret: str | None = None
    grant_type: str | None = None
    scopes: frozenset[str] = frozenset()


class AccessTokenInfo(KeyManagerBaseModel):
    """Token issued for an application.

    When ``authorized`` is False the provider refused to issue a token because the
    application is not granted access to the platform's resource server, and
    ``access_token`` holds a human-readable explanation instead of a token.
    """

    consumer_key: str
    consumer_secret: str | None = None
    access_token: str
    scopes: frozenset[str] = frozenset()
    validity_period: int | None = None
    authorized: bool = True


class Scope(KeyManagerBaseModel):
    """OAuth scope as modelled by the host platform."""

    key: str
    name: str | None = None
    description: str | None = None
    roles: tuple[str, ...] | None = None


__all__ = [
    "AccessTokenInfo",
    "AccessTokenRequest",
    "KeyManagerBaseModel",
    "KeyManagerConfigurationModel",
    "OAuthApplicationInfo",
    "Scope",
]
