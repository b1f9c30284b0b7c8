"""Translation between the host platform's generic types and Auth0 wire types."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..contracts import InvalidRequestError
from ..models import AccessTokenInfo, OAuthApplicationInfo
from . import constants
from .models import Auth0AccessTokenResponse, Auth0ClientInfo

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def tenant_aware_username(username: str) -> str:
    """Strip the tenant domain from a fully qualified username."""
    if constants.TENANT_SEPARATOR in username:
        return username.rsplit(constants.TENANT_SEPARATOR, 1)[0]
    return username


def extract_user_store_domain(username: str) -> str:
    if constants.DOMAIN_SEPARATOR in username:
        return username.split(constants.DOMAIN_SEPARATOR, 1)[0].upper()
    return constants.PRIMARY_DEFAULT_DOMAIN_NAME


def _escape_name_component(value: str) -> str:
    # "_" joins the components of a derived name; it must not occur inside one.
    return value.replace("%", "%25").replace("_", "%5F")


def build_client_name(username: str | None, application_name: str, key_type: str | None) -> str:
    """Derive the Auth0 client name of a platform application.

    With a key type the name is ``{user}_{application}_{key type}``, which keeps
    applications of different owners and key types apart at Auth0. A secondary
    user store domain prefix is rewritten from ``DOMAIN/user`` to ``DOMAIN_user``,
    along with any further ``/`` in the username.
    Without a key type the raw application name is used.
    """
    if key_type is None:
        return application_name

    user = tenant_aware_username(username or "")
    escaped_user = _escape_name_component(user)
    if extract_user_store_domain(user) != constants.PRIMARY_DEFAULT_DOMAIN_NAME:
        escaped_user = escaped_user.replace(constants.DOMAIN_SEPARATOR, "_")

    return "_".join(
        [escaped_user, _escape_name_component(application_name), _escape_name_component(key_type)]
    )


def split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def join_scopes(scopes: Iterable[str]) -> str:
    return " ".join(sorted({scope for scope in scopes if scope}))


def parse_scopes(scope: str | None) -> frozenset[str]:
    if not scope:
        return frozenset()
    return frozenset(part for part in _WHITESPACE.split(scope) if part)


def _additional_properties(app: OAuthApplicationInfo) -> Mapping[str, Any]:
    value = app.additional_properties
    if value is None:
        return {}
    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning(
                "Ignoring additional properties that are not valid JSON",
                extra={"client_name": app.client_name},
            )
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return value


def _string_property(
    properties: Mapping[str, Any], key: str, client_name: str | None
) -> str | None:
    value = properties.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.warning(
        "Ignoring additional property that is not a string",
        extra={"client_name": client_name, "property": key},
    )
    return None


def to_provider_client_info(app: OAuthApplicationInfo) -> Auth0ClientInfo:
    """Build the Auth0 client record for a platform application."""
    properties = _additional_properties(app)
    grant_types = split_csv(app.grant_types)
    redirect_uris = split_csv(app.callback_url)
    application_type = _string_property(properties, constants.APP_TYPE, app.client_name)
    auth_method = _string_property(
        properties, constants.TOKEN_ENDPOINT_AUTH_METHOD, app.client_name
    )

    return Auth0ClientInfo(
        client_name=build_client_name(app.username, app.client_name or "", app.key_type),
        client_id=app.client_id or None,
        client_secret=app.client_secret or None,
        grant_types=grant_types or None,
        redirect_uris=redirect_uris or None,
        application_type=application_type or constants.DEFAULT_CLIENT_APPLICATION_TYPE,
        token_endpoint_auth_method=auth_method or None,
    )


def to_oauth_application_info(client: Auth0ClientInfo) -> OAuthApplicationInfo:
    """Build the platform view of an Auth0 client record."""
    parameters: dict[str, Any] = {}
    if client.client_name:
        parameters[constants.OAUTH_CLIENT_NAME] = client.client_name
    if client.client_id:
        parameters[constants.OAUTH_CLIENT_ID] = client.client_id
    if client.client_secret:
        parameters[constants.OAUTH_CLIENT_SECRET] = client.client_secret

    return OAuthApplicationInfo(
        client_name=client.client_name,
        client_id=client.client_id,
        client_secret=client.client_secret,
        callback_url=",".join(client.redirect_uris) if client.redirect_uris else None,
        grant_types=",".join(client.grant_types) if client.grant_types else None,
        additional_properties=client.snapshot(),
        parameters=parameters,
    )


def to_access_token_info(
    response: Auth0AccessTokenResponse, client_id: str, client_secret: str | None
) -> AccessTokenInfo:
    return AccessTokenInfo(
        consumer_key=client_id,
        consumer_secret=client_secret,
        access_token=response.access_token,
        scopes=parse_scopes(response.scope),
        validity_period=response.expires_in,
    )


def require_client_id(client_id: str | None, operation: str) -> str:
    """Return ``client_id`` or raise when it is empty."""
    if not client_id or not client_id.strip():
        raise InvalidRequestError(description=f"A client id is required to {operation}")
    return client_id


__all__ = [
    "build_client_name",
    "join_scopes",
    "parse_scopes",
    "require_client_id",
    "tenant_aware_username",
    "to_access_token_info",
    "to_oauth_application_info",
    "to_provider_client_info",
]
