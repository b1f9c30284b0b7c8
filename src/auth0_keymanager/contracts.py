"""Contracts and error types for the key manager adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Protocol, runtime_checkable

from .models import (
    AccessTokenInfo,
    AccessTokenRequest,
    KeyManagerConfigurationModel,
    OAuthApplicationInfo,
    Scope,
)

if TYPE_CHECKING:
    from .auth0.models import Auth0ClientInfo


class KeyManagerError(Exception):
    """Base adapter error with HTTP-style status information."""

    default_error = "server_error"
    default_status_code = 500

    def __init__(
        self,
        error: str | None = None,
        description: str | None = None,
        status_code: int | None = None,
    ):
        self.error = error or self.default_error
        self.description = description
        self.status_code = status_code if status_code is not None else self.default_status_code
        super().__init__(description or self.error)


class ConfigurationError(KeyManagerError):
    """Missing or invalid configuration, or use before configuration."""

    default_error = "invalid_configuration"


class InvalidRequestError(KeyManagerError):
    """A platform request is missing a required identifier."""

    default_error = "invalid_request"
    default_status_code = 400


class TransportError(KeyManagerError):
    """The provider could not be reached or its response could not be read."""

    default_error = "temporarily_unavailable"
    default_status_code = 503


class ProviderRejectedError(KeyManagerError):
    """The provider answered with a status the adapter does not tolerate."""

    default_error = "provider_rejected"
    default_status_code = 502


class NotFoundError(ProviderRejectedError):
    """The provider does not know the requested client."""

    default_error = "not_found"
    default_status_code = 404


class UnsupportedOperationError(KeyManagerError):
    """The operation is part of the generic contract but not offered by this provider."""

    default_error = "unsupported_operation"
    default_status_code = 501


@runtime_checkable
class ResourceProvisioner(Protocol):
    """Ensures the platform's protected resource exists at the provider."""

    def ensure_resource_server(self, identifier: str) -> None:
        """Create the resource server unless it already exists. Never raises."""


@runtime_checkable
class ClientRegistrar(Protocol):
    """Dynamic client registration against the provider."""

    def create(self, client: Auth0ClientInfo) -> Auth0ClientInfo: ...

    def update(self, client_id: str, client: Auth0ClientInfo) -> Auth0ClientInfo: ...

    def delete(self, client_id: str) -> None: ...

    def retrieve(self, client_id: str) -> Auth0ClientInfo: ...

    def regenerate_secret(self, client_id: str) -> Auth0ClientInfo: ...


@runtime_checkable
class TokenBroker(Protocol):
    """Exchanges client credentials for application tokens."""

    def issue_token(
        self,
        client_id: str,
        client_secret: str | None,
        grant_type: str | None = None,
        scopes: Iterable[str] = (),
    ) -> AccessTokenInfo: ...


@runtime_checkable
class KeyManager(Protocol):
    """Generic key-manager contract the host platform drives."""

    def load_configuration(
        self, configuration: KeyManagerConfigurationModel | Mapping[str, Any]
    ) -> None: ...

    def get_type(self) -> str: ...

    def get_key_manager_configuration(self) -> KeyManagerConfigurationModel: ...

    def create_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo: ...

    def update_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo: ...

    def delete_application(self, client_id: str) -> None: ...

    def retrieve_application(self, client_id: str) -> OAuthApplicationInfo: ...

    def get_new_application_access_token(self, request: AccessTokenRequest) -> AccessTokenInfo: ...

    def get_new_application_consumer_secret(self, request: AccessTokenRequest) -> str: ...

    def get_token_metadata(self, access_token: str) -> AccessTokenInfo: ...

    def map_oauth_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo: ...

    def register_new_resource(self, api: Any, resource_attributes: Mapping[str, Any]) -> bool: ...

    def get_resource_by_api_id(self, api_id: str) -> dict[str, Any]: ...

    def update_registered_resource(
        self, api: Any, resource_attributes: Mapping[str, Any]
    ) -> bool: ...

    def delete_registered_resource_by_api_id(self, api_id: str) -> None: ...

    def delete_mapped_application(self, client_id: str) -> None: ...

    def get_active_tokens_by_consumer_key(self, consumer_key: str) -> set[str]: ...

    def get_access_token_by_consumer_key(self, consumer_key: str) -> AccessTokenInfo: ...

    def get_scopes_for_apis(self, api_ids: Iterable[str]) -> dict[str, set[Scope]]: ...

    def register_scope(self, scope: Scope) -> None: ...

    def get_scope_by_name(self, name: str) -> Scope | None: ...

    def get_all_scopes(self) -> dict[str, Scope]: ...

    def delete_scope(self, name: str) -> None: ...

    def update_scope(self, scope: Scope) -> None: ...

    def is_scope_exists(self, name: str) -> bool: ...


__all__ = [
    "ClientRegistrar",
    "ConfigurationError",
    "InvalidRequestError",
    "KeyManager",
    "KeyManagerError",
    "NotFoundError",
    "ProviderRejectedError",
    "ResourceProvisioner",
    "TokenBroker",
    "TransportError",
    "UnsupportedOperationError",
]
