"""Provisioning of the platform's resource server (API) at Auth0."""

from __future__ import annotations

import logging

from ..contracts import KeyManagerError
from .constants import DEFAULT_TOKEN_LIFETIME, RESOURCE_SERVER_NAME
from .management import ManagementApiClient
from .models import Auth0ResourceServerInfo

logger = logging.getLogger(__name__)


class Auth0ResourceServer(ManagementApiClient):
    """Client of the ``/resource-servers`` collection.

    ``ensure_resource_server`` runs before every operation that depends on the
    resource server. Nothing is cached: Auth0 is the source of truth, and a 409
    answer means the resource server is already there.
    """

    resource_name = "resource-servers"

    def ensure_resource_server(self, identifier: str) -> None:
        """Create the resource server for ``identifier`` unless it exists.

        Failures are logged, not raised; the next call reconciles again.
        """
        context = "resource server creation"
        resource_server = Auth0ResourceServerInfo(
            identifier=identifier,
            name=RESOURCE_SERVER_NAME,
            token_lifetime=DEFAULT_TOKEN_LIFETIME,
        )
        try:
            resp = self._send(
                "POST",
                self._url(),
                json=resource_server.model_dump(exclude_none=True),
                context=context,
            )
            if resp.status_code == 409:
                logger.warning("Resource server already created for %s", identifier)
                return
            self._raise_for_status(resp, context=context)
        except KeyManagerError as exc:
            logger.error(
                "Error while creating resource server for %s: %s",
                identifier,
                exc,
                extra={"status_code": exc.status_code},
            )
            return
        logger.info("Resource server created for %s", identifier)


__all__ = ["Auth0ResourceServer"]
