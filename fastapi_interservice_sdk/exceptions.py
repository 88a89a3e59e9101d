# fastapi-interservice-sdk/fastapi_interservice_sdk/exceptions.py
"""
Exception classes for FastAPI Interservice SDK.

Every error raised by the SDK derives from SDKError. Nothing is retried
or swallowed here: errors propagate to the caller of the outbound call.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CommunicationErrorContext:
    """Context information for transport errors."""
    url: Optional[str] = None
    method: Optional[str] = None
    status_code: Optional[int] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            'url': self.url,
            'method': self.method,
            'status_code': self.status_code,
            'timestamp': self.timestamp.isoformat(),
            'details': self.details
        }


class SDKError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SDKError):
    """Exception raised for configuration errors."""
    pass


class SerializationError(SDKError):
    """Exception raised when a request or response body cannot be (de)serialized."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.cause = cause
        super().__init__(message, details)


class TransportError(SDKError):
    """Exception raised for network failures and non-success HTTP statuses."""

    def __init__(
        self,
        message: str,
        context: Optional[CommunicationErrorContext] = None,
        cause: Optional[Exception] = None,
        **kwargs
    ):
        self.context = context or CommunicationErrorContext(**kwargs)
        self.cause = cause
        super().__init__(message, self.context.details)

    @property
    def status_code(self) -> Optional[int]:
        return self.context.status_code

    def __str__(self) -> str:
        base_msg = self.message
        if self.context.method and self.context.url:
            base_msg += f" ({self.context.method} {self.context.url})"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context.to_dict(),
            'cause': str(self.cause) if self.cause else None
        }


class TransportTimeoutError(TransportError):
    """Exception raised when an outbound call exceeds its timeout."""
    pass
