"""
Communication Logging for FastAPI Interservice SDK.

This module provides structured logging for outbound HTTP calls. Every
event is logged through the standard ``logging`` module with the event
dictionary attached as ``extra['communication_event']``.
"""

import json
import logging
import uuid
from typing import Dict, Any, Optional, List, Callable
from datetime import datetime, timezone
from dataclasses import dataclass, field, asdict
from enum import Enum

from ..config import LogLevel


class CommunicationEventType(str, Enum):
    """Types of communication events."""
    HTTP_REQUEST = "http_request"
    HTTP_RESPONSE = "http_response"
    ERROR = "error"


@dataclass
class CommunicationEvent:
    """Communication event for structured logging."""
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: CommunicationEventType = CommunicationEventType.HTTP_REQUEST
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    correlation_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    status: Optional[str] = None
    duration_ms: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class CommunicationLogger:
    """
    Structured logger for outbound calls.

    The correlation id of an event is the call sequence of the request
    when one is given, otherwise a fresh uuid. Without ``level`` the
    level of the underlying ``communication.<name>`` logger is left alone.
    """

    def __init__(self, name: str = "http", level: Optional[LogLevel] = None):
        self.name = name
        self.level = level
        self.logger = logging.getLogger(f"communication.{name}")
        if level is not None:
            self.logger.setLevel(getattr(logging, level.value))
        self._event_handlers: List[Callable[[CommunicationEvent], None]] = []

    def add_event_handler(self, handler: Callable[[CommunicationEvent], None]) -> None:
        """Register a callable invoked with every logged event."""
        self._event_handlers.append(handler)

    def _create_event(
        self,
        event_type: CommunicationEventType,
        message: str,
        **kwargs
    ) -> CommunicationEvent:
        return CommunicationEvent(
            event_type=event_type,
            correlation_id=kwargs.get('correlation_id') or str(uuid.uuid4()),
            component=self.name,
            operation=kwargs.get('operation'),
            status=kwargs.get('status'),
            duration_ms=kwargs.get('duration_ms'),
            metadata={
                'message': message,
                **kwargs.get('metadata', {})
            }
        )

    def _log_event(self, event: CommunicationEvent, level: LogLevel) -> None:
        self.logger.log(
            getattr(logging, level.value),
            f"[{event.correlation_id}] {event.metadata.get('message', '')}",
            extra={'communication_event': event.to_dict()}
        )

        for handler in self._event_handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error(f"Event handler error: {e}")

    def info(self, message: str, event_type: CommunicationEventType = CommunicationEventType.HTTP_REQUEST, **kwargs):
        """Log info message."""
        self._log_event(self._create_event(event_type, message, **kwargs), LogLevel.INFO)

    def debug(self, message: str, event_type: CommunicationEventType = CommunicationEventType.HTTP_REQUEST, **kwargs):
        """Log debug message."""
        self._log_event(self._create_event(event_type, message, **kwargs), LogLevel.DEBUG)

    def error(self, message: str, event_type: CommunicationEventType = CommunicationEventType.ERROR, **kwargs):
        """Log error message."""
        self._log_event(self._create_event(event_type, message, **kwargs), LogLevel.ERROR)

    def log_http_request(
        self,
        method: str,
        url: str,
        correlation_id: Optional[str] = None,
        timeout_ms: Optional[int] = None
    ) -> None:
        """Log an outgoing HTTP request."""
        self.debug(
            f"{method} {url}",
            event_type=CommunicationEventType.HTTP_REQUEST,
            correlation_id=correlation_id,
            operation=f"{method} {url}",
            metadata={
                'method': method,
                'url': url,
                'timeout_ms': timeout_ms
            }
        )

    def log_http_response(
        self,
        method: str,
        url: str,
        status_code: int,
        duration_ms: float,
        correlation_id: Optional[str] = None
    ) -> None:
        """Log an HTTP response, as an error for non-success statuses."""
        success = 200 <= status_code < 300
        log = self.info if success else self.error
        log(
            f"{method} {url} -> {status_code} ({duration_ms:.2f}ms)",
            event_type=CommunicationEventType.HTTP_RESPONSE,
            correlation_id=correlation_id,
            operation=f"{method} {url}",
            status="success" if success else "failure",
            duration_ms=duration_ms,
            metadata={
                'method': method,
                'url': url,
                'status_code': status_code
            }
        )

    def log_http_failure(
        self,
        method: str,
        url: str,
        error: Exception,
        duration_ms: float,
        correlation_id: Optional[str] = None
    ) -> None:
        """Log a transport failure (no response received)."""
        self.error(
            f"{method} {url} failed: {error}",
            correlation_id=correlation_id,
            operation=f"{method} {url}",
            status="failure",
            duration_ms=duration_ms,
            metadata={
                'method': method,
                'url': url,
                'error_type': type(error).__name__
            }
        )
