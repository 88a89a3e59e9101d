"""
HTTP communication module for FastAPI Interservice SDK.
"""

from .json_client import AuthenticationHeader, HttpJsonClient
from .base_service import BaseHttpService

__all__ = [
    "AuthenticationHeader",
    "BaseHttpService",
    "HttpJsonClient",
]
