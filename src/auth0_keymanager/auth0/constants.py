"""Constants for the Auth0 integration."""

KEY_MANAGER_TYPE = "Auth0"

GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"

# Client registration
APP_TYPE = "app_type"
TOKEN_ENDPOINT_AUTH_METHOD = "token_endpoint_auth_method"
DEFAULT_CLIENT_APPLICATION_TYPE = "non_interactive"

# Resource server provisioned for the platform
RESOURCE_SERVER_NAME = "API Manager"
DEFAULT_TOKEN_LIFETIME = 86400

# Returned in place of a token when Auth0 answers 403 at the token endpoint
UNAUTHORIZED_APPLICATION_MESSAGE = (
    "Please add the application to the API Manager resource server to generate tokens"
)

# Host platform parameter keys
OAUTH_CLIENT_NAME = "client_name"
OAUTH_CLIENT_ID = "client_id"
OAUTH_CLIENT_SECRET = "client_secret"

# User store naming
PRIMARY_DEFAULT_DOMAIN_NAME = "PRIMARY"
DOMAIN_SEPARATOR = "/"
TENANT_SEPARATOR = "@"
