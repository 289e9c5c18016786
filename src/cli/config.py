"""Configuration file loading and validation.

This module loads the optional YAML configuration of the jira-enrich CLI.
A missing file is not an error: every setting has a default.

Configuration file structure:
    tenant: "acme"
    max_concurrency: 10
    request_timeout: 30
    max_retries: 3
"""

from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigFilesystemError
from .models import EnrichConfig


class ConfigLoader:
    """Handles configuration file loading and validation."""

    DEFAULT_CONFIG_PATH = '.jira-enrich/config.yaml'

    KNOWN_FIELDS = {'tenant', 'max_concurrency', 'request_timeout', 'max_retries'}

    @classmethod
    def load(cls, config_path: str) -> EnrichConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            EnrichConfig object (defaults if the file does not exist or is empty)

        Raises:
            ConfigFilesystemError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return EnrichConfig()
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        if not content.strip():
            return EnrichConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return EnrichConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> EnrichConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If a field has the wrong type or value
        """
        unknown = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(k) for k in unknown))}"
            )

        defaults = EnrichConfig()

        tenant = config_dict.get('tenant')
        if tenant is not None:
            if not isinstance(tenant, str) or not tenant.strip():
                raise ConfigError(
                    "Field 'tenant' must be a non-empty string",
                    'tenant'
                )
            tenant = tenant.strip()

        max_concurrency = config_dict.get('max_concurrency', defaults.max_concurrency)
        if not isinstance(max_concurrency, int) or isinstance(max_concurrency, bool) or max_concurrency < 1:
            raise ConfigError(
                f"Field 'max_concurrency' must be a positive integer, got {max_concurrency!r}",
                'max_concurrency'
            )

        request_timeout = config_dict.get('request_timeout', defaults.request_timeout)
        if isinstance(request_timeout, bool) or not isinstance(request_timeout, (int, float)) or request_timeout <= 0:
            raise ConfigError(
                f"Field 'request_timeout' must be a positive number, got {request_timeout!r}",
                'request_timeout'
            )

        max_retries = config_dict.get('max_retries', defaults.max_retries)
        if not isinstance(max_retries, int) or isinstance(max_retries, bool) or max_retries < 0:
            raise ConfigError(
                f"Field 'max_retries' must be a non-negative integer, got {max_retries!r}",
                'max_retries'
            )

        return EnrichConfig(
            tenant=tenant,
            max_concurrency=max_concurrency,
            request_timeout=float(request_timeout),
            max_retries=max_retries,
        )
