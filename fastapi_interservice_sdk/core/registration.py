"""
Registration of the SDK services into a dependency container, and
FastAPI dependencies resolving them.
"""

from typing import AsyncIterator, Optional

from fastapi import Request
from httpx import AsyncClient

from ..config import SDKConfig, get_config
from ..communication.context import RequestContext
from ..communication.http.json_client import HttpJsonClient
from ..communication.logging import CommunicationLogger
from ..utils.helpers import generate_request_id
from .container import DependencyContainer, LifecycleScope, get_container


def add_http_helper(
    container: Optional[DependencyContainer] = None,
    config: Optional[SDKConfig] = None
) -> DependencyContainer:
    """
    Register the outbound HTTP services.

    Registers the SDK configuration, one shared ``httpx.AsyncClient``
    transport, one ``CommunicationLogger`` at the configured log level
    and a scoped ``HttpJsonClient`` built over them.

    Args:
        container: Target container; the global one when omitted
        config: Configuration to register; the global one when omitted

    Returns:
        The container, for chaining

    Example:
        container = add_http_helper(config=SDKConfig.from_file("appsettings.json"))
        json_client = container.resolve(HttpJsonClient, scope_id="startup")
    """
    container = container or get_container()

    if config is not None:
        container.register_instance(SDKConfig, config)
    elif not container.is_registered(SDKConfig):
        container.register_factory(SDKConfig, get_config)

    container.register_factory(AsyncClient, lambda: AsyncClient(follow_redirects=True))
    container.register_factory(
        CommunicationLogger,
        lambda: CommunicationLogger("http", container.resolve(SDKConfig).log_level)
    )
    container.register_factory(
        HttpJsonClient,
        lambda: HttpJsonClient(
            client=container.resolve(AsyncClient),
            logger=container.resolve(CommunicationLogger)
        ),
        scope=LifecycleScope.SCOPED
    )

    return container


async def get_http_json_client() -> AsyncIterator[HttpJsonClient]:
    """FastAPI dependency yielding the request-scoped HttpJsonClient."""
    container = get_container()
    scope_id = generate_request_id()
    container.begin_scope(scope_id)
    try:
        yield container.resolve(HttpJsonClient, scope_id=scope_id)
    finally:
        container.end_scope(scope_id)


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency snapshotting the inbound request."""
    return RequestContext.from_request(request)
