"""Auth0 clients used by the key manager.

- ``Auth0DCRClient``: dynamic client registration on ``/clients``
- ``Auth0ResourceServer``: idempotent provisioning on ``/resource-servers``
- ``Auth0TokenBroker``: application tokens from ``/oauth/token``
- ``codec``: translation between platform and Auth0 types
"""

from .dcr import Auth0DCRClient
from .management import ManagementApiAuth
from .resource_server import Auth0ResourceServer
from .token_broker import Auth0TokenBroker

__all__ = [
    "Auth0DCRClient",
    "Auth0ResourceServer",
    "Auth0TokenBroker",
    "ManagementApiAuth",
]
