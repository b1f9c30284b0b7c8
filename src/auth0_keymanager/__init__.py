"""Auth0 key manager - delegates OAuth2 client lifecycle to Auth0.

The host API-management platform configures an :class:`Auth0KeyManager` once and
then drives application creation, update, deletion, token issuance and secret
rotation through it. Each call is translated into Auth0 Management API
(``/clients``, ``/resource-servers``) or Authentication API (``/oauth/token``)
requests.

## Quick Example

```python
from auth0_keymanager import Auth0KeyManager, OAuthApplicationInfo

key_manager = Auth0KeyManager()
key_manager.load_configuration(
    {
        "token_endpoint": "https://tenant.auth0.com/oauth/token",
        "audience": "https://tenant.auth0.com/api/v2/",
        "client_id": "management-client-id",
        "client_secret": "management-client-secret",
    }
)
app = key_manager.create_application(
    OAuthApplicationInfo(client_name="app1", username="alice", key_type="PRODUCTION")
)
```
"""

from .config import build_configuration, load_configuration_file
from .contracts import (
    ClientRegistrar,
    ConfigurationError,
    InvalidRequestError,
    KeyManager,
    KeyManagerError,
    NotFoundError,
    ProviderRejectedError,
    ResourceProvisioner,
    TokenBroker,
    TransportError,
    UnsupportedOperationError,
)
from .key_manager import Auth0KeyManager
from .models import (
    AccessTokenInfo,
    AccessTokenRequest,
    KeyManagerConfigurationModel,
    OAuthApplicationInfo,
    Scope,
)

__all__ = [
    "AccessTokenInfo",
    "AccessTokenRequest",
    "Auth0KeyManager",
    "ClientRegistrar",
    "ConfigurationError",
    "InvalidRequestError",
    "KeyManager",
    "KeyManagerConfigurationModel",
    "KeyManagerError",
    "NotFoundError",
    "OAuthApplicationInfo",
    "ProviderRejectedError",
    "ResourceProvisioner",
    "Scope",
    "TokenBroker",
    "TransportError",
    "UnsupportedOperationError",
    "build_configuration",
    "load_configuration_file",
]
