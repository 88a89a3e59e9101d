"""
API documentation helpers for FastAPI Interservice SDK.
"""

from .visibility import (
    SwaggerHideInDocs,
    filter_openapi_schema,
    install_docs_visibility,
    swagger_hide_in_docs,
)

__all__ = [
    "SwaggerHideInDocs",
    "filter_openapi_schema",
    "install_docs_visibility",
    "swagger_hide_in_docs",
]
