"""Loading of key manager configuration.

The host platform normally hands the configuration over as a mapping. For
standalone deployments it can also come from a YAML file:

    key_manager:
      token_endpoint: https://tenant.auth0.com/oauth/token
      audience: https://tenant.auth0.com/api/v2/
      client_id: ${AUTH0_CLIENT_ID}
      client_secret: ${AUTH0_CLIENT_SECRET}

``${ENV_VAR}`` references in string values are resolved from the environment.
"""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .contracts import ConfigurationError
from .models import KeyManagerConfigurationModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KEYMANAGER_CONFIG"
CONFIG_SECTION = "key_manager"

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def resolve_env_vars(value: str) -> str:
    """Replace ``${ENV_VAR}`` references in ``value``.

    Raises:
        ConfigurationError: If a referenced variable is not set.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            raise ConfigurationError(description=f"Environment variable {name} is not set")
        return os.environ[name]

    return ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate(value: Any) -> Any:
    if isinstance(value, str):
        return resolve_env_vars(value)
    if isinstance(value, dict):
        return {key: _interpolate(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_interpolate(item) for item in value]
    return value


def build_configuration(
    configuration: KeyManagerConfigurationModel | Mapping[str, Any],
) -> KeyManagerConfigurationModel:
    """Validate a host-supplied configuration mapping."""
    if isinstance(configuration, KeyManagerConfigurationModel):
        return configuration
    try:
        return KeyManagerConfigurationModel.model_validate(dict(configuration))
    except ValidationError as e:
        raise ConfigurationError(description=f"Invalid key manager configuration: {e}") from e


def load_configuration_file(config_path: Path | str | None = None) -> KeyManagerConfigurationModel:
    """Load key manager configuration from a YAML file.

    Args:
        config_path: Path to the file. Defaults to the path in the
            ``KEYMANAGER_CONFIG`` environment variable.

    Raises:
        ConfigurationError: If no file is given, the file cannot be read or
            parsed, or its content is invalid.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            raise ConfigurationError(
                description=f"No configuration file given and {CONFIG_ENV_VAR} is not set"
            )
        config_path = env_path

    path = Path(config_path)
    logger.debug(f"Loading key manager config from: {path}")

    try:
        with open(path) as f:
            raw_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(description=f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(description=f"Failed to parse YAML config file {path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(description=f"Config file {path} must contain a mapping")

    section = raw_config.get(CONFIG_SECTION, raw_config)
    if not isinstance(section, dict):
        raise ConfigurationError(description=f"'{CONFIG_SECTION}' in {path} must be a mapping")

    return build_configuration(_interpolate(section))


__all__ = ["build_configuration", "load_configuration_file", "resolve_env_vars"]
