"""Auth0 implementation of the host platform's key manager contract.

``Auth0KeyManager`` is the single entry point the host platform drives. It is
unusable until :meth:`Auth0KeyManager.load_configuration` has run; after that it
holds only immutable configuration and thread-safe HTTP clients, so it can be
called from several threads at once.

Scope and resource registration operations are part of the contract but Auth0
offers no counterpart here; they return empty results instead of failing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .auth0 import codec
from .auth0.constants import KEY_MANAGER_TYPE
from .auth0.dcr import Auth0DCRClient
from .auth0.management import ManagementApiAuth
from .auth0.resource_server import Auth0ResourceServer
from .auth0.token_broker import Auth0TokenBroker
from .config import build_configuration
from .contracts import (
    ConfigurationError,
    KeyManager,
    TransportError,
    UnsupportedOperationError,
)
from .models import (
    AccessTokenInfo,
    AccessTokenRequest,
    KeyManagerConfigurationModel,
    OAuthApplicationInfo,
    Scope,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Components:
    configuration: KeyManagerConfigurationModel
    dcr_client: Auth0DCRClient
    resource_server: Auth0ResourceServer
    token_broker: Auth0TokenBroker

    def close(self) -> None:
        self.dcr_client.close()
        self.resource_server.close()


class Auth0KeyManager(KeyManager):
    """Key manager backed by Auth0 dynamic client registration."""

    def __init__(self) -> None:
        self._components: _Components | None = None

    # ── configuration ───────────────────────────────────────────────────

    def load_configuration(
        self, configuration: KeyManagerConfigurationModel | Mapping[str, Any]
    ) -> None:
        """Store the configuration, build the Auth0 clients and provision the resource server."""
        config = build_configuration(configuration)
        auth = ManagementApiAuth(
            token_endpoint=config.token_endpoint,
            client_id=config.client_id,
            client_secret=config.client_secret,
            audience=config.audience,
            leeway=config.management_token_leeway,
        )
        components = _Components(
            configuration=config,
            dcr_client=Auth0DCRClient(
                config.client_registration_endpoint, auth, timeout=config.timeout
            ),
            resource_server=Auth0ResourceServer(
                config.resource_server_endpoint, auth, timeout=config.timeout
            ),
            token_broker=Auth0TokenBroker(
                config.token_endpoint, config.resource_identifier, timeout=config.timeout
            ),
        )

        previous, self._components = self._components, components
        if previous is not None:
            previous.close()

        logger.info(
            "Auth0 key manager configured",
            extra={"audience": config.audience, "token_endpoint": config.token_endpoint},
        )
        if not config.server_url:
            logger.warning(
                "server_url is not configured, using the Management API audience as the "
                "resource identifier for application tokens",
                extra={"audience": config.audience},
            )
        self._ensure_resource_server(components)

    def close(self) -> None:
        """Release the HTTP clients. The key manager must be configured again afterwards."""
        components, self._components = self._components, None
        if components is not None:
            components.close()

    def get_type(self) -> str:
        return KEY_MANAGER_TYPE

    def get_key_manager_configuration(self) -> KeyManagerConfigurationModel:
        return self._require_configured().configuration

    # ── application lifecycle ───────────────────────────────────────────

    def create_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo:
        components = self._require_configured()
        client_info = codec.to_provider_client_info(app)
        self._ensure_resource_server(components)
        created = components.dcr_client.create(client_info)
        return codec.to_oauth_application_info(created)

    def update_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo:
        components = self._require_configured()
        client_id = codec.require_client_id(app.client_id, "update an application")
        # The current secret travels in the payload; Auth0 does not rotate it on update.
        client_info = codec.to_provider_client_info(app)
        self._ensure_resource_server(components)
        updated = components.dcr_client.update(client_id, client_info)
        return codec.to_oauth_application_info(updated)

    def delete_application(self, client_id: str) -> None:
        self._require_configured().dcr_client.delete(client_id)

    def retrieve_application(self, client_id: str) -> OAuthApplicationInfo:
        client_info = self._require_configured().dcr_client.retrieve(client_id)
        return codec.to_oauth_application_info(client_info)

    def get_new_application_access_token(self, request: AccessTokenRequest) -> AccessTokenInfo:
        return self._require_configured().token_broker.issue_token(
            request.client_id,
            request.client_secret,
            grant_type=request.grant_type,
            scopes=request.scopes,
        )

    def get_new_application_consumer_secret(self, request: AccessTokenRequest) -> str:
        components = self._require_configured()
        self._ensure_resource_server(components)
        rotated = components.dcr_client.regenerate_secret(request.client_id)
        if not rotated.client_secret:
            raise TransportError(description="Auth0 secret rotation returned no client secret")
        return rotated.client_secret

    # ── operations Auth0 does not support ───────────────────────────────

    def get_token_metadata(self, access_token: str) -> AccessTokenInfo:
        raise UnsupportedOperationError(description="Token introspection is not supported")

    def map_oauth_application(self, app: OAuthApplicationInfo) -> OAuthApplicationInfo:
        raise UnsupportedOperationError(description="Mapping existing clients is not supported")

    def get_access_token_by_consumer_key(self, consumer_key: str) -> AccessTokenInfo:
        raise UnsupportedOperationError(description="Token lookup by consumer key is not supported")

    def get_active_tokens_by_consumer_key(self, consumer_key: str) -> set[str]:
        return set()

    def register_new_resource(self, api: Any, resource_attributes: Mapping[str, Any]) -> bool:
        return False

    def get_resource_by_api_id(self, api_id: str) -> dict[str, Any]:
        return {}

    def update_registered_resource(self, api: Any, resource_attributes: Mapping[str, Any]) -> bool:
        return False

    def delete_registered_resource_by_api_id(self, api_id: str) -> None:
        return None

    def delete_mapped_application(self, client_id: str) -> None:
        return None

    def get_scopes_for_apis(self, api_ids: Iterable[str]) -> dict[str, set[Scope]]:
        if isinstance(api_ids, str):
            api_ids = [api_id for api_id in api_ids.split(",") if api_id]
        return {api_id: set() for api_id in api_ids}

    def register_scope(self, scope: Scope) -> None:
        return None

    def get_scope_by_name(self, name: str) -> Scope | None:
        return None

    def get_all_scopes(self) -> dict[str, Scope]:
        return {}

    def delete_scope(self, name: str) -> None:
        return None

    def update_scope(self, scope: Scope) -> None:
        return None

    def is_scope_exists(self, name: str) -> bool:
        return False

    # ── helpers ─────────────────────────────────────────────────────────

    def _require_configured(self) -> _Components:
        components = self._components
        if components is None:
            raise ConfigurationError(
                "not_configured",
                "load_configuration() must be called before using the key manager",
            )
        return components

    @staticmethod
    def _ensure_resource_server(components: _Components) -> None:
        components.resource_server.ensure_resource_server(
            components.configuration.resource_identifier
        )


__all__ = ["Auth0KeyManager"]
