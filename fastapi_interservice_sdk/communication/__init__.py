"""
Communication module for FastAPI Interservice SDK.

Outbound service-to-service HTTP calls with call-sequence propagation.
"""

from .context import RequestContext
from .call_sequence import (
    build_call_identifier,
    format_call_sequence,
    get_headers_with_call_sequence,
    parse_call_sequence,
)
from .logging import CommunicationEvent, CommunicationEventType, CommunicationLogger
from .http import AuthenticationHeader, BaseHttpService, HttpJsonClient

__all__ = [
    "RequestContext",
    "build_call_identifier",
    "format_call_sequence",
    "get_headers_with_call_sequence",
    "parse_call_sequence",
    "CommunicationEvent",
    "CommunicationEventType",
    "CommunicationLogger",
    "AuthenticationHeader",
    "BaseHttpService",
    "HttpJsonClient",
]
