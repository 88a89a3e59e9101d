"""
Core components for FastAPI Interservice SDK.
"""

from .container import DependencyContainer, LifecycleScope, get_container
from .registration import add_http_helper, get_http_json_client, get_request_context

__all__ = [
    "DependencyContainer",
    "LifecycleScope",
    "get_container",
    "add_http_helper",
    "get_http_json_client",
    "get_request_context",
]
