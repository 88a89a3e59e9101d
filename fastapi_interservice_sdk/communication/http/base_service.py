# fastapi-interservice-sdk/fastapi_interservice_sdk/communication/http/base_service.py
"""
Base class for clients of other backend services.
"""

import logging
from typing import Optional, Any, Type

from ...config import SDKConfig, get_config
from ...exceptions import ConfigurationError
from ...utils.helpers import build_url
from ..call_sequence import HeaderList, get_headers_with_call_sequence
from ..context import RequestContext
from .json_client import AuthenticationHeader, HeaderValues, HttpJsonClient, QueryParameters

logger = logging.getLogger(__name__)


class BaseHttpService:
    """
    HTTP client for one downstream service.

    The downstream scheme and host are read from configuration under
    ``scheme_and_host_config_key`` at call time, so every client can be
    pointed elsewhere without code change. Every call carries the
    ``g-callsec`` header built from the inbound request context.

    Example:
        class OrdersClient(BaseHttpService):
            def __init__(self, json_client, config=None):
                super().__init__("OrdersApi:BaseUrl", json_client, config)

            async def get_order(self, order_id, context):
                return await self.execute_get(
                    f"/api/orders/{order_id}", None, "get_order", context=context
                )
    """

    def __init__(
        self,
        scheme_and_host_config_key: str,
        json_client: HttpJsonClient,
        config: Optional[SDKConfig] = None,
        context: Optional[RequestContext] = None
    ):
        """
        Initialize the service client.

        Args:
            scheme_and_host_config_key: Configuration key holding the base URL,
                e.g. "OrdersApi:BaseUrl"
            json_client: Collaborator performing the HTTP exchange
            config: SDK configuration; the global one when omitted
            context: Default inbound request context for calls that do not pass one
        """
        self.scheme_and_host_config_key = scheme_and_host_config_key
        self.json_client = json_client
        self.config = config or get_config()
        self.application_name = self.config.application_name
        self.context = context

    async def execute_get(
        self,
        path: str,
        query_parameters: QueryParameters,
        caller_name: str,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        timeout_ms: Optional[int] = None,
        response_type: Optional[Type[Any]] = None,
        context: Optional[RequestContext] = None
    ) -> Any:
        """
        GET ``path`` on the configured service and return the parsed JSON.

        Raises:
            ConfigurationError: Base URL key missing or empty, before any I/O
        """
        new_headers = self._get_headers_with_call_sequence(headers, caller_name, context)
        url = self.build_url(path)

        return await self.json_client.execute_get(
            url_without_query_parameters=url,
            query_parameters=query_parameters,
            timeout_ms=timeout_ms if timeout_ms is not None else self.config.default_get_timeout_ms,
            auth=auth,
            headers=new_headers,
            response_type=response_type
        )

    async def execute_get_string(
        self,
        path: str,
        query_parameters: QueryParameters,
        caller_name: str,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        timeout_ms: Optional[int] = None,
        context: Optional[RequestContext] = None
    ) -> str:
        """GET ``path`` and return the raw body text."""
        new_headers = self._get_headers_with_call_sequence(headers, caller_name, context)
        url = self.build_url(path)

        return await self.json_client.execute_get_string(
            url_without_query_parameters=url,
            query_parameters=query_parameters,
            timeout_ms=timeout_ms if timeout_ms is not None else self.config.default_get_timeout_ms,
            auth=auth,
            headers=new_headers
        )

    async def execute_post(
        self,
        path: str,
        request: Any,
        caller_name: str,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        timeout_ms: Optional[int] = None,
        response_type: Optional[Type[Any]] = None,
        context: Optional[RequestContext] = None
    ) -> Any:
        """POST ``request`` as JSON to ``path`` and return the parsed JSON."""
        new_headers = self._get_headers_with_call_sequence(headers, caller_name, context)
        url = self.build_url(path)

        return await self.json_client.execute_post(
            url=url,
            request=request,
            timeout_ms=timeout_ms if timeout_ms is not None else self.config.default_post_timeout_ms,
            auth=auth,
            headers=new_headers,
            response_type=response_type
        )

    async def execute_post_string(
        self,
        path: str,
        request: Any,
        caller_name: str,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        timeout_ms: Optional[int] = None,
        context: Optional[RequestContext] = None
    ) -> str:
        """POST ``request`` as JSON to ``path`` and return the raw body text."""
        new_headers = self._get_headers_with_call_sequence(headers, caller_name, context)
        url = self.build_url(path)

        return await self.json_client.execute_post_string(
            url=url,
            request=request,
            timeout_ms=timeout_ms if timeout_ms is not None else self.config.default_post_timeout_ms,
            auth=auth,
            headers=new_headers
        )

    def build_url(self, path: str) -> str:
        """
        Build the absolute URL for ``path`` on the configured service.

        Raises:
            ConfigurationError: The key is empty, or its value is missing or empty
        """
        if not self.scheme_and_host_config_key:
            raise ConfigurationError("scheme_and_host_config_key is empty")

        scheme_and_host = self.config.get_value(self.scheme_and_host_config_key)

        if not scheme_and_host:
            raise ConfigurationError(
                f"scheme and host is empty by key = {self.scheme_and_host_config_key}",
                details={"key": self.scheme_and_host_config_key}
            )

        return build_url(scheme_and_host, path)

    def _get_headers_with_call_sequence(
        self,
        headers: HeaderValues,
        caller_name: str,
        context: Optional[RequestContext]
    ) -> HeaderList:
        new_headers = get_headers_with_call_sequence(
            headers,
            caller_name=caller_name,
            application_name=self.application_name,
            context=context if context is not None else self.context
        )
        logger.debug(f"Call sequence for {caller_name}: {new_headers[-1][1]}")
        return new_headers
