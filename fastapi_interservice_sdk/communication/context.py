# fastapi-interservice-sdk/fastapi_interservice_sdk/communication/context.py
"""
Inbound request context.

A read-only snapshot of the request currently being served, passed
explicitly to outbound calls so they can extend its call sequence.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, List, Mapping, Union

from starlette.requests import Request

HeaderPairs = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RequestContext:
    """
    Headers and route path of the inbound request.

    Header names are stored lower-cased; a name may appear several times.
    ``route_path`` is None outside of a request (background jobs, startup).
    """
    headers: HeaderPairs = ()
    route_path: Optional[str] = None

    @classmethod
    def empty(cls) -> 'RequestContext':
        """Context for code running without an inbound request."""
        return cls()

    @classmethod
    def from_headers(
        cls,
        headers: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
        route_path: Optional[str] = None
    ) -> 'RequestContext':
        """Build a context from a header mapping or a list of (name, value) pairs."""
        items = headers.items() if isinstance(headers, Mapping) else headers
        return cls(
            headers=tuple((name.lower(), value) for name, value in items),
            route_path=route_path
        )

    @classmethod
    def from_request(cls, request: Request) -> 'RequestContext':
        """Snapshot a Starlette/FastAPI request."""
        return cls.from_headers(request.headers.items(), route_path=request.url.path)

    @property
    def has_request(self) -> bool:
        return self.route_path is not None

    def get_all(self, name: str) -> List[str]:
        """Return every value sent for header ``name`` (case-insensitive)."""
        name = name.lower()
        return [value for header, value in self.headers if header == name]
