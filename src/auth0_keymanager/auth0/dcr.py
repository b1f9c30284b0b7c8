"""Dynamic client registration through the Auth0 ``/clients`` collection.

Updates are sent as ``PATCH clients/{id}``, the verb the Management API accepts
for client updates, rather than ``PUT``.
"""

from __future__ import annotations

import logging

from ..contracts import NotFoundError
from .codec import require_client_id
from .management import ManagementApiClient
from .models import Auth0ClientInfo

logger = logging.getLogger(__name__)


class Auth0DCRClient(ManagementApiClient):
    """Create, read, update, delete and rotate the secret of Auth0 clients."""

    resource_name = "clients"

    def create(self, client: Auth0ClientInfo) -> Auth0ClientInfo:
        context = "client creation"
        resp = self._send("POST", self._url(), json=client.to_request_payload(), context=context)
        self._raise_for_status(resp, context=context)
        created = self._parse(resp, Auth0ClientInfo, context=context)
        logger.info("Auth0 client created", extra={"client_id": created.client_id})
        return created

    def update(self, client_id: str, client: Auth0ClientInfo) -> Auth0ClientInfo:
        """Update a client. Auth0 keeps the secret unless the payload carries one."""
        client_id = require_client_id(client_id, "update an application")
        context = "client update"
        resp = self._send(
            "PATCH", self._url(client_id), json=client.to_request_payload(), context=context
        )
        self._raise_for_status(resp, context=context)
        return self._parse(resp, Auth0ClientInfo, context=context)

    def delete(self, client_id: str) -> None:
        """Delete a client; an unknown client counts as already deleted."""
        client_id = require_client_id(client_id, "delete an application")
        context = "client deletion"
        resp = self._send("DELETE", self._url(client_id), context=context)
        try:
            self._raise_for_status(resp, context=context)
        except NotFoundError:
            logger.warning("Auth0 client already deleted", extra={"client_id": client_id})
            return
        logger.info("Auth0 client deleted", extra={"client_id": client_id})

    def retrieve(self, client_id: str) -> Auth0ClientInfo:
        client_id = require_client_id(client_id, "retrieve an application")
        context = "client retrieval"
        resp = self._send("GET", self._url(client_id), context=context)
        self._raise_for_status(resp, context=context)
        return self._parse(resp, Auth0ClientInfo, context=context)

    def regenerate_secret(self, client_id: str) -> Auth0ClientInfo:
        client_id = require_client_id(client_id, "regenerate a client secret")
        context = "client secret rotation"
        resp = self._send("POST", self._url(client_id, "rotate-secret"), context=context)
        self._raise_for_status(resp, context=context)
        rotated = self._parse(resp, Auth0ClientInfo, context=context)
        logger.info("Auth0 client secret rotated", extra={"client_id": client_id})
        return rotated


__all__ = ["Auth0DCRClient"]
