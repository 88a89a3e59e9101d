"""
Documentation visibility for FastAPI routes.

Endpoints marked with ``swagger_hide_in_docs`` are left out of the
OpenAPI document unless the request presents the configured cookie.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Set, TypeVar

from fastapi import FastAPI, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.routing import APIRoute

from ..constants import DEFAULT_DOCS_COOKIE_NAME, DEFAULT_DOCS_PASSWORD
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

HIDE_IN_DOCS_ATTRIBUTE = "_swagger_hide_in_docs"
SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass(frozen=True)
class SwaggerHideInDocs:
    """Cookie that must be sent with ``password`` to see a hidden endpoint."""
    cookie_name: str = DEFAULT_DOCS_COOKIE_NAME
    password: str = DEFAULT_DOCS_PASSWORD

    def is_unlocked(self, cookies: Mapping[str, str]) -> bool:
        return cookies.get(self.cookie_name) == self.password


def swagger_hide_in_docs(
    cookie_name: str = DEFAULT_DOCS_COOKIE_NAME,
    password: str = DEFAULT_DOCS_PASSWORD
) -> Callable[[F], F]:
    """
    Mark an endpoint as hidden from the API documentation.

    Example:
        @app.get("/internal/stats")
        @swagger_hide_in_docs(password="s3cret")
        async def stats():
            ...
    """
    def decorator(func: F) -> F:
        setattr(func, HIDE_IN_DOCS_ATTRIBUTE, SwaggerHideInDocs(cookie_name, password))
        return func

    return decorator


def get_hide_in_docs(endpoint: Callable[..., Any]) -> Optional[SwaggerHideInDocs]:
    """Marker attached to ``endpoint``, if any."""
    return getattr(endpoint, HIDE_IN_DOCS_ATTRIBUTE, None)


def filter_openapi_schema(
    schema: Dict[str, Any],
    app: FastAPI,
    cookies: Mapping[str, str]
) -> Dict[str, Any]:
    """
    Remove the operations of hidden endpoints from an OpenAPI document.

    Component schemas left without any reference once those operations
    are gone are removed too.

    Args:
        schema: OpenAPI document, left untouched
        app: Application owning the routes
        cookies: Cookies of the request asking for the document

    Returns:
        Filtered copy of the document
    """
    filtered = copy.deepcopy(schema)
    paths = filtered.get("paths", {})
    hidden = False

    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue

        marker = get_hide_in_docs(route.endpoint)
        if marker is None or marker.is_unlocked(cookies):
            continue

        operations = paths.get(route.path_format)
        if operations is None:
            continue

        for method in route.methods:
            hidden = operations.pop(method.lower(), None) is not None or hidden

        if not any(key for key in operations if key != "parameters"):
            del paths[route.path_format]

    if hidden:
        _drop_unreferenced_schemas(filtered)

    return filtered


def _collect_schema_refs(node: Any, refs: Set[str]) -> None:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(SCHEMA_REF_PREFIX):
            refs.add(ref[len(SCHEMA_REF_PREFIX):])
        for value in node.values():
            _collect_schema_refs(value, refs)
    elif isinstance(node, list):
        for value in node:
            _collect_schema_refs(value, refs)


def _drop_unreferenced_schemas(document: Dict[str, Any]) -> None:
    schemas = document.get("components", {}).get("schemas")
    if not schemas:
        return

    reachable: Set[str] = set()
    _collect_schema_refs({key: value for key, value in document.items() if key != "components"}, reachable)
    _collect_schema_refs({key: value for key, value in document["components"].items() if key != "schemas"}, reachable)

    pending = list(reachable)
    while pending:
        found: Set[str] = set()
        _collect_schema_refs(schemas.get(pending.pop()), found)
        for name in found - reachable:
            reachable.add(name)
            pending.append(name)

    for name in list(schemas):
        if name not in reachable:
            del schemas[name]


def install_docs_visibility(
    app: FastAPI,
    openapi_url: str = "/openapi.json",
    docs_url: Optional[str] = "/docs"
) -> None:
    """
    Serve an OpenAPI document filtered per request, and Swagger UI for it.

    The application must be created with ``openapi_url=None`` so that
    FastAPI does not serve the unfiltered document itself.

    Raises:
        ConfigurationError: The application still serves its own OpenAPI document
    """
    if app.openapi_url is not None:
        raise ConfigurationError(
            "Create the application with openapi_url=None to filter its documentation",
            details={"openapi_url": app.openapi_url}
        )

    async def openapi(request: Request) -> JSONResponse:
        return JSONResponse(filter_openapi_schema(app.openapi(), app, request.cookies))

    app.add_api_route(openapi_url, openapi, include_in_schema=False)

    if docs_url:
        async def swagger_ui(request: Request) -> HTMLResponse:
            return get_swagger_ui_html(openapi_url=openapi_url, title=f"{app.title} - Swagger UI")

        app.add_api_route(docs_url, swagger_ui, include_in_schema=False)

    logger.debug(f"Filtered documentation served at {openapi_url}")
