# fastapi-interservice-sdk/fastapi_interservice_sdk/config.py
"""
Configuration management for FastAPI Interservice SDK.

This module handles the SDK settings (environment variables, JSON/YAML
files, dictionaries) and the lookup of per-client configuration keys such
as "OrdersApi:BaseUrl" used to resolve a downstream service's scheme and host.
"""

import os
from typing import ClassVar, Optional, Dict, Any, List, Union
from pathlib import Path
from dataclasses import dataclass, field
from enum import Enum
import json

from .constants import DEFAULT_GET_TIMEOUT_MS, DEFAULT_POST_TIMEOUT_MS

KEY_DELIMITER = ":"
ENV_KEY_DELIMITER = "__"


class LogLevel(str, Enum):
    """Logging levels for the SDK."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class SDKConfig:
    """Main SDK configuration class."""

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO

    # Name of the current service, used as the call-sequence namespace
    application_name: str = "app"

    # Outbound call defaults
    default_get_timeout_ms: int = DEFAULT_GET_TIMEOUT_MS
    default_post_timeout_ms: int = DEFAULT_POST_TIMEOUT_MS

    # Free-form nested settings, looked up with "Section:Key" paths
    settings: Dict[str, Any] = field(default_factory=dict)

    _global_config: ClassVar[Optional['SDKConfig']] = None

    @classmethod
    def from_env(cls) -> 'SDKConfig':
        """
        Create configuration from environment variables.

        Returns:
            SDKConfig instance with values from environment

        Example:
            os.environ['SDK_APPLICATION_NAME'] = 'orders-service'
            config = SDKConfig.from_env()
        """
        return cls(
            environment=os.getenv('SDK_ENVIRONMENT', 'development'),
            debug=os.getenv('SDK_DEBUG', 'false').lower() == 'true',
            log_level=LogLevel(os.getenv('SDK_LOG_LEVEL', 'INFO').upper()),
            application_name=os.getenv('SDK_APPLICATION_NAME', 'app'),
            default_get_timeout_ms=int(os.getenv('SDK_GET_TIMEOUT_MS', str(DEFAULT_GET_TIMEOUT_MS))),
            default_post_timeout_ms=int(os.getenv('SDK_POST_TIMEOUT_MS', str(DEFAULT_POST_TIMEOUT_MS))),
        )

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'SDKConfig':
        """
        Create configuration from JSON or YAML file.

        Args:
            file_path: Path to configuration file

        Returns:
            SDKConfig instance

        Example:
            config = SDKConfig.from_file('appsettings.json')
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r') as f:
            if file_path.suffix.lower() == '.json':
                data = json.load(f)
            elif file_path.suffix.lower() in ['.yaml', '.yml']:
                import yaml
                data = yaml.safe_load(f) or {}
            else:
                raise ValueError(f"Unsupported configuration file format: {file_path.suffix}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SDKConfig':
        """
        Create configuration from dictionary.

        Known SDK fields are taken from the top level; everything else
        is kept in ``settings`` for key lookups.

        Args:
            data: Configuration dictionary

        Returns:
            SDKConfig instance
        """
        known = {'environment', 'debug', 'log_level', 'application_name',
                 'default_get_timeout_ms', 'default_post_timeout_ms'}

        config_data = {k: v for k, v in data.items() if k in known}
        if 'log_level' in config_data:
            config_data['log_level'] = LogLevel(str(config_data['log_level']).upper())

        settings = dict(data.get('settings', {}))
        settings.update({k: v for k, v in data.items() if k not in known and k != 'settings'})

        return cls(settings=settings, **config_data)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        return {
            'environment': self.environment,
            'debug': self.debug,
            'log_level': self.log_level.value,
            'application_name': self.application_name,
            'default_get_timeout_ms': self.default_get_timeout_ms,
            'default_post_timeout_ms': self.default_post_timeout_ms,
            'settings': self.settings,
        }

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of validation error messages
        """
        issues = []

        if not self.application_name:
            issues.append("application_name must not be empty")

        if self.default_get_timeout_ms < 1:
            issues.append(f"Invalid default_get_timeout_ms: {self.default_get_timeout_ms}. Must be > 0.")

        if self.default_post_timeout_ms < 1:
            issues.append(f"Invalid default_post_timeout_ms: {self.default_post_timeout_ms}. Must be > 0.")

        return issues

    def get_value(self, key: str) -> Optional[str]:
        """
        Resolve a colon-separated configuration key.

        The nested ``settings`` mapping is searched first, then the
        environment with ``:`` replaced by ``__`` (as-is, then upper-cased).

        Args:
            key: Key such as "OrdersApi:BaseUrl"

        Returns:
            The value as a string, or None when the key is not set
        """
        node: Any = self.settings
        for segment in key.split(KEY_DELIMITER):
            if not isinstance(node, dict) or segment not in node:
                node = None
                break
            node = node[segment]

        if node is not None and not isinstance(node, dict):
            return str(node)

        env_key = key.replace(KEY_DELIMITER, ENV_KEY_DELIMITER)
        value = os.getenv(env_key)
        if value is None:
            value = os.getenv(env_key.upper())
        return value

    @classmethod
    def set_global_config(cls, config: 'SDKConfig') -> None:
        """Set global configuration instance."""
        cls._global_config = config

    @classmethod
    def get_global_config(cls) -> Optional['SDKConfig']:
        """Get global configuration instance."""
        return cls._global_config


def get_config() -> SDKConfig:
    """
    Get current global configuration or create one from the environment.

    Returns:
        Current SDKConfig instance
    """
    config = SDKConfig.get_global_config()
    if config is None:
        config = SDKConfig.from_env()
        SDKConfig.set_global_config(config)
    return config
