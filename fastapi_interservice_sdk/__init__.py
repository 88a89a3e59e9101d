# fastapi-interservice-sdk/fastapi_interservice_sdk/__init__.py
"""
FastAPI Interservice SDK

Helpers for calling one backend service from another: a base HTTP
service resolving its target from configuration, call-sequence
propagation through the ``g-callsec`` header, dependency registration
and documentation visibility for FastAPI routes.

Example usage:
    from fastapi_interservice_sdk import BaseHttpService, RequestContext

    class OrdersClient(BaseHttpService):
        def __init__(self, json_client):
            super().__init__("OrdersApi:BaseUrl", json_client)

        async def get_order(self, order_id: int, context: RequestContext):
            return await self.execute_get(
                f"/api/orders/{order_id}", None, "get_order", context=context
            )
"""

import logging
from typing import Optional

from .version import __version__, get_build_info, get_version_info
from .config import SDKConfig, LogLevel, get_config
from .constants import CALL_SEQUENCE_HEADER
from .communication import (
    AuthenticationHeader,
    BaseHttpService,
    CommunicationLogger,
    HttpJsonClient,
    RequestContext,
    get_headers_with_call_sequence,
    parse_call_sequence,
)
from .core import (
    DependencyContainer,
    add_http_helper,
    get_container,
    get_http_json_client,
    get_request_context,
)
from .docs import filter_openapi_schema, install_docs_visibility, swagger_hide_in_docs
from .exceptions import (
    SDKError,
    ConfigurationError,
    SerializationError,
    TransportError,
    TransportTimeoutError,
)

# Package metadata
__title__ = "fastapi-interservice-sdk"
__license__ = "MIT"

VERSION_INFO = get_version_info()

__all__ = [
    # Version
    "__version__",
    "VERSION_INFO",

    # Configuration
    "SDKConfig",
    "LogLevel",
    "get_config",
    "initialize_sdk",
    "get_sdk_info",

    # Outbound calls
    "AuthenticationHeader",
    "BaseHttpService",
    "CommunicationLogger",
    "HttpJsonClient",
    "RequestContext",
    "CALL_SEQUENCE_HEADER",
    "get_headers_with_call_sequence",
    "parse_call_sequence",

    # Dependency registration
    "DependencyContainer",
    "add_http_helper",
    "get_container",
    "get_http_json_client",
    "get_request_context",

    # Documentation
    "filter_openapi_schema",
    "install_docs_visibility",
    "swagger_hide_in_docs",

    # Exceptions
    "SDKError",
    "ConfigurationError",
    "SerializationError",
    "TransportError",
    "TransportTimeoutError",
]

_sdk_initialized = False


def initialize_sdk(config: Optional[SDKConfig] = None) -> SDKConfig:
    """
    Initialize the FastAPI Interservice SDK.

    Sets the global configuration and configures logging. Call it once
    at application startup.

    Args:
        config: SDK configuration object. If None, it is read from the environment.

    Returns:
        The configuration in effect

    Example:
        from fastapi_interservice_sdk import initialize_sdk, SDKConfig

        initialize_sdk(SDKConfig(application_name="orders-service"))
    """
    global _sdk_initialized

    if config is None:
        config = SDKConfig.from_env()

    issues = config.validate()
    if issues:
        raise ConfigurationError("Invalid SDK configuration", details={"issues": issues})

    SDKConfig.set_global_config(config)

    if not _sdk_initialized:
        logging.basicConfig(
            level=config.log_level.value,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _sdk_initialized = True

    return config


def get_sdk_info() -> dict:
    """
    Get information about the SDK installation and configuration.

    Returns:
        Dictionary containing SDK version, configuration, and status.
    """
    config = SDKConfig.get_global_config()

    return {
        "version": __version__,
        "version_info": VERSION_INFO,
        "initialized": _sdk_initialized,
        "build": get_build_info(),
        "config": {
            "application_name": config.application_name,
            "environment": config.environment,
            "log_level": config.log_level.value,
        } if config else None,
    }
