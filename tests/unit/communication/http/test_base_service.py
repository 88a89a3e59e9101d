"""
Tests for BaseHttpService.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi_interservice_sdk.communication.context import RequestContext
from fastapi_interservice_sdk.communication.http.base_service import BaseHttpService
from fastapi_interservice_sdk.communication.http.json_client import (
    AuthenticationHeader,
    HttpJsonClient,
)
from fastapi_interservice_sdk.config import SDKConfig
from fastapi_interservice_sdk.constants import CALL_SEQUENCE_HEADER
from fastapi_interservice_sdk.exceptions import ConfigurationError, TransportError


@pytest.fixture
def sdk_config():
    """Configuration with one downstream service."""
    return SDKConfig(
        application_name="Svc2",
        settings={"Catalog": {"BaseUrl": "https://api.x.com"}}
    )


@pytest.fixture
def json_client():
    """Mocked JSON execution client."""
    client = MagicMock(spec=HttpJsonClient)
    client.execute_get = AsyncMock(return_value={"ok": True})
    client.execute_get_string = AsyncMock(return_value="text")
    client.execute_post = AsyncMock(return_value={"created": True})
    client.execute_post_string = AsyncMock(return_value="created")
    return client


@pytest.fixture
def inbound_context():
    """Inbound request already carrying a call sequence."""
    return RequestContext.from_headers({CALL_SEQUENCE_HEADER: "Svc1:/orders"}, route_path="/ship")


class CatalogClient(BaseHttpService):
    """Client used by the tests, configured the way applications subclass it."""

    def __init__(self, json_client, config):
        super().__init__("Catalog:BaseUrl", json_client, config)

    async def get_item(self, item_id, context=None):
        return await self.execute_get(f"/v1/items/{item_id}", None, "get_item", context=context)


class TestBuildUrl:
    """Test URL resolution."""

    @pytest.mark.parametrize("host,path", [
        ("https://api.x.com", "/v1/items"),
        ("https://api.x.com/", "/v1/items"),
        ("https://api.x.com/", "v1/items"),
        ("https://api.x.com", "v1/items"),
    ])
    def test_single_separating_slash(self, json_client, host, path):
        config = SDKConfig(settings={"Catalog": {"BaseUrl": host}})
        service = BaseHttpService("Catalog:BaseUrl", json_client, config)

        assert service.build_url(path) == "https://api.x.com/v1/items"

    def test_missing_key_in_configuration(self, json_client):
        service = BaseHttpService("Missing:BaseUrl", json_client, SDKConfig())

        with pytest.raises(ConfigurationError):
            service.build_url("/v1/items")

    def test_empty_value_in_configuration(self, json_client):
        config = SDKConfig(settings={"Catalog": {"BaseUrl": ""}})
        service = BaseHttpService("Catalog:BaseUrl", json_client, config)

        with pytest.raises(ConfigurationError):
            service.build_url("/v1/items")

    def test_empty_key(self, json_client, sdk_config):
        service = BaseHttpService("", json_client, sdk_config)

        with pytest.raises(ConfigurationError):
            service.build_url("/v1/items")

    def test_value_from_environment(self, json_client, monkeypatch):
        monkeypatch.setenv("Inventory__BaseUrl", "http://inventory:8080/")
        service = BaseHttpService("Inventory:BaseUrl", json_client, SDKConfig())

        assert service.build_url("/stock") == "http://inventory:8080/stock"


class TestExecuteGet:
    """Test GET dispatch."""

    @pytest.mark.asyncio
    async def test_delegates_with_call_sequence(self, json_client, sdk_config, inbound_context):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)
        auth = AuthenticationHeader.bearer("token")

        result = await service.execute_get(
            "/v1/items",
            [("page", "1")],
            "list_items",
            auth=auth,
            headers=[("X-Tenant", "t1")],
            context=inbound_context
        )

        assert result == {"ok": True}
        json_client.execute_get.assert_awaited_once_with(
            url_without_query_parameters="https://api.x.com/v1/items",
            query_parameters=[("page", "1")],
            timeout_ms=12000,
            auth=auth,
            headers=[("X-Tenant", "t1"), (CALL_SEQUENCE_HEADER, "Svc1:/orders;Svc2:/ship")],
            response_type=None
        )

    @pytest.mark.asyncio
    async def test_background_call_uses_caller_name(self, json_client, sdk_config):
        service = CatalogClient(json_client, sdk_config)

        await service.get_item(3)

        kwargs = json_client.execute_get.await_args.kwargs
        assert kwargs["url_without_query_parameters"] == "https://api.x.com/v1/items/3"
        assert kwargs["headers"] == [(CALL_SEQUENCE_HEADER, "Svc2:get_item")]

    @pytest.mark.asyncio
    async def test_instance_context_used_when_call_passes_none(self, json_client, sdk_config, inbound_context):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config, context=inbound_context)

        await service.execute_get("/v1/items", None, "list_items")

        kwargs = json_client.execute_get.await_args.kwargs
        assert kwargs["headers"][-1] == (CALL_SEQUENCE_HEADER, "Svc1:/orders;Svc2:/ship")

    @pytest.mark.asyncio
    async def test_string_variant_carries_call_sequence(self, json_client, sdk_config, inbound_context):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        result = await service.execute_get_string("/v1/ping", None, "ping", context=inbound_context)

        assert result == "text"
        kwargs = json_client.execute_get_string.await_args.kwargs
        assert kwargs["headers"] == [(CALL_SEQUENCE_HEADER, "Svc1:/orders;Svc2:/ship")]
        assert kwargs["timeout_ms"] == 12000

    @pytest.mark.asyncio
    async def test_configuration_error_before_io(self, json_client):
        service = BaseHttpService("Missing:BaseUrl", json_client, SDKConfig())

        with pytest.raises(ConfigurationError):
            await service.execute_get("/v1/items", None, "list_items")

        json_client.execute_get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, json_client, sdk_config):
        json_client.execute_get.side_effect = TransportError("HTTP error 500", status_code=500)
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        with pytest.raises(TransportError) as exc_info:
            await service.execute_get("/v1/items", None, "list_items")

        assert exc_info.value.status_code == 500
        assert json_client.execute_get.await_count == 1


class TestExecutePost:
    """Test POST dispatch."""

    @pytest.mark.asyncio
    async def test_delegates_with_post_timeout(self, json_client, sdk_config, inbound_context):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        result = await service.execute_post("/v1/items", {"name": "pen"}, "create_item", context=inbound_context)

        assert result == {"created": True}
        kwargs = json_client.execute_post.await_args.kwargs
        assert kwargs["url"] == "https://api.x.com/v1/items"
        assert kwargs["request"] == {"name": "pen"}
        assert kwargs["timeout_ms"] == 120000
        assert kwargs["headers"][-1] == (CALL_SEQUENCE_HEADER, "Svc1:/orders;Svc2:/ship")

    @pytest.mark.asyncio
    async def test_custom_timeout(self, json_client, sdk_config):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        await service.execute_post("/v1/items", {}, "create_item", timeout_ms=500)

        assert json_client.execute_post.await_args.kwargs["timeout_ms"] == 500

    @pytest.mark.asyncio
    async def test_zero_timeout_passed_through(self, json_client, sdk_config):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        await service.execute_post("/v1/items", {}, "create_item", timeout_ms=0)
        await service.execute_get_string("/v1/items", None, "list_items", timeout_ms=0)

        assert json_client.execute_post.await_args.kwargs["timeout_ms"] == 0
        assert json_client.execute_get_string.await_args.kwargs["timeout_ms"] == 0

    @pytest.mark.asyncio
    async def test_string_variant_carries_call_sequence(self, json_client, sdk_config):
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        result = await service.execute_post_string("/v1/items", {}, "create_item")

        assert result == "created"
        kwargs = json_client.execute_post_string.await_args.kwargs
        assert kwargs["headers"] == [(CALL_SEQUENCE_HEADER, "Svc2:create_item")]

    @pytest.mark.asyncio
    async def test_configuration_error_before_io(self, json_client):
        service = BaseHttpService("Missing:BaseUrl", json_client, SDKConfig())

        with pytest.raises(ConfigurationError):
            await service.execute_post_string("/v1/items", {}, "create_item")

        json_client.execute_post_string.assert_not_awaited()


class TestEndToEnd:
    """Test the service over a mocked transport."""

    @pytest.mark.asyncio
    async def test_outbound_request_carries_headers(self, sdk_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": 1})

        json_client = HttpJsonClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)
        context = RequestContext.from_headers({CALL_SEQUENCE_HEADER: "A:x;B:y;A:x"}, route_path="/ship")

        await service.execute_post(
            "/v1/items",
            {"name": "pen"},
            "create_item",
            headers=[(CALL_SEQUENCE_HEADER, "Manual:entry")],
            context=context
        )

        request = requests[0]
        assert str(request.url) == "https://api.x.com/v1/items"
        assert request.headers.get_list(CALL_SEQUENCE_HEADER) == ["Manual:entry", "A:x;B:y;Svc2:/ship"]
        assert json.loads(request.content) == {"name": "pen"}

    @pytest.mark.asyncio
    async def test_query_parameters_from_mapping(self, sdk_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=[])

        json_client = HttpJsonClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        await service.execute_get("/items", {"id": "5"}, "list_items", headers={"X-Tenant": "t1"})

        request = requests[0]
        assert str(request.url) == "https://api.x.com/items?id=5"
        assert request.headers["X-Tenant"] == "t1"
        assert request.headers[CALL_SEQUENCE_HEADER] == "Svc2:list_items"

    @pytest.mark.asyncio
    async def test_repeated_query_parameters(self, sdk_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=[])

        json_client = HttpJsonClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        service = BaseHttpService("Catalog:BaseUrl", json_client, sdk_config)

        await service.execute_get("/items", [("id", "1"), ("id", "2")], "list_items")

        assert str(requests[0].url) == "https://api.x.com/items?id=1&id=2"
