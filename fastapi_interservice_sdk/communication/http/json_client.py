# fastapi-interservice-sdk/fastapi_interservice_sdk/communication/http/json_client.py
"""
JSON execution client.

Performs the actual HTTP exchange for BaseHttpService: sends query
parameters, headers and serialized bodies, checks the status and
deserializes the response.
"""

import json
import time
from dataclasses import dataclass
from typing import Optional, Any, Iterable, List, Mapping, Tuple, Type, Union

import httpx
from httpx import AsyncClient, Response
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ...constants import AUTHORIZATION_HEADER, CALL_SEQUENCE_HEADER, JSON_CONTENT_TYPE
from ...exceptions import SerializationError, TransportError, TransportTimeoutError
from ...utils.helpers import to_pairs
from ..logging import CommunicationLogger

# A mapping, or (name, value) pairs when a name repeats
QueryParameters = Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]]
HeaderValues = Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]]


@dataclass(frozen=True)
class AuthenticationHeader:
    """Value of the Authorization header, e.g. AuthenticationHeader("Bearer", token)."""
    scheme: str
    parameter: Optional[str] = None

    def to_header_value(self) -> str:
        if self.parameter:
            return f"{self.scheme} {self.parameter}"
        return self.scheme

    @classmethod
    def bearer(cls, token: str) -> 'AuthenticationHeader':
        return cls("Bearer", token)


class HttpJsonClient:
    """
    HTTP client exchanging JSON with other services.

    Features:
    - Shared httpx.AsyncClient transport (injected or created lazily)
    - Per-call timeout in milliseconds
    - Optional Authorization header
    - Request/response logging
    - pydantic validation of responses into a requested type

    Nothing is retried: every failure is raised to the caller.
    """

    def __init__(
        self,
        client: Optional[AsyncClient] = None,
        logger: Optional[CommunicationLogger] = None
    ):
        """
        Initialize JSON client.

        Args:
            client: Transport to use. When omitted, one is created on first
                use and closed by close().
            logger: Structured logger for outbound calls
        """
        self._client = client
        self._owns_client = client is None
        self.logger = logger or CommunicationLogger("http")

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def _ensure_client(self) -> AsyncClient:
        if self._client is None:
            self._client = AsyncClient(follow_redirects=True)
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the transport if this client created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def execute_get(
        self,
        url_without_query_parameters: str,
        query_parameters: QueryParameters = None,
        timeout_ms: int = 12000,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        response_type: Optional[Type[Any]] = None
    ) -> Any:
        """
        GET a URL and deserialize its JSON body.

        Returns:
            Parsed JSON, validated into ``response_type`` when given;
            None for an empty body

        Raises:
            TransportError: Network failure or non-success status
            TransportTimeoutError: Timeout elapsed
            SerializationError: Body is not valid JSON or does not match ``response_type``
        """
        response = await self._send(
            "GET", url_without_query_parameters,
            params=query_parameters, timeout_ms=timeout_ms, auth=auth, headers=headers
        )
        return self._deserialize(response, response_type)

    async def execute_get_string(
        self,
        url_without_query_parameters: str,
        query_parameters: QueryParameters = None,
        timeout_ms: int = 12000,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None
    ) -> str:
        """GET a URL and return the body text."""
        response = await self._send(
            "GET", url_without_query_parameters,
            params=query_parameters, timeout_ms=timeout_ms, auth=auth, headers=headers
        )
        return response.text

    async def execute_post(
        self,
        url: str,
        request: Any,
        timeout_ms: int = 120000,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None,
        response_type: Optional[Type[Any]] = None
    ) -> Any:
        """POST ``request`` as JSON and deserialize the JSON response."""
        response = await self._send(
            "POST", url,
            content=self._serialize(request), timeout_ms=timeout_ms, auth=auth, headers=headers
        )
        return self._deserialize(response, response_type)

    async def execute_post_string(
        self,
        url: str,
        request: Any,
        timeout_ms: int = 120000,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None
    ) -> str:
        """POST ``request`` as JSON and return the body text."""
        response = await self._send(
            "POST", url,
            content=self._serialize(request), timeout_ms=timeout_ms, auth=auth, headers=headers
        )
        return response.text

    async def _send(
        self,
        method: str,
        url: str,
        timeout_ms: int,
        params: QueryParameters = None,
        content: Optional[bytes] = None,
        auth: Optional[AuthenticationHeader] = None,
        headers: HeaderValues = None
    ) -> Response:
        client = self._ensure_client()

        request_headers = to_pairs(headers)
        if auth is not None:
            request_headers.append((AUTHORIZATION_HEADER, auth.to_header_value()))
        if content is not None and _find_header(request_headers, "content-type") is None:
            request_headers.append(("Content-Type", JSON_CONTENT_TYPE))

        correlation_id = _find_header(request_headers, CALL_SEQUENCE_HEADER)
        self.logger.log_http_request(method, url, correlation_id=correlation_id, timeout_ms=timeout_ms)

        start = time.perf_counter()
        try:
            response = await client.request(
                method,
                url,
                params=to_pairs(params) if params is not None else None,
                content=content,
                headers=request_headers,
                timeout=httpx.Timeout(timeout_ms / 1000)
            )
        except httpx.TimeoutException as e:
            self.logger.log_http_failure(method, url, e, _elapsed_ms(start), correlation_id=correlation_id)
            raise TransportTimeoutError(
                f"Request timeout after {timeout_ms}ms", url=url, method=method, cause=e
            ) from e
        except httpx.HTTPError as e:
            self.logger.log_http_failure(method, url, e, _elapsed_ms(start), correlation_id=correlation_id)
            raise TransportError(
                f"Request failed: {e}", url=url, method=method, cause=e,
                details={"error": str(e)}
            ) from e

        self.logger.log_http_response(
            method, url, response.status_code, _elapsed_ms(start), correlation_id=correlation_id
        )

        if not response.is_success:
            raise TransportError(
                f"HTTP error {response.status_code}",
                url=url,
                method=method,
                status_code=response.status_code,
                details={"response": response.text}
            )

        return response

    @staticmethod
    def _serialize(request: Any) -> bytes:
        try:
            return json.dumps(to_jsonable_python(request)).encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize request body: {e}", cause=e) from e

    @staticmethod
    def _deserialize(response: Response, response_type: Optional[Type[Any]]) -> Any:
        if not response.content:
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise SerializationError(
                f"Invalid JSON response: {e}", cause=e, details={"response": response.text}
            ) from e

        if response_type is None:
            return data

        try:
            return TypeAdapter(response_type).validate_python(data)
        except ValidationError as e:
            raise SerializationError(
                f"Response does not match {getattr(response_type, '__name__', response_type)}: {e}",
                cause=e,
                details={"response": response.text}
            ) from e


def _find_header(headers: List[Tuple[str, str]], name: str) -> Optional[str]:
    """Last value of header ``name``, if present."""
    for header, value in reversed(headers):
        if header.lower() == name:
            return value
    return None


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
