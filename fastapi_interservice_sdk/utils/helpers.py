# fastapi-interservice-sdk/fastapi_interservice_sdk/utils/helpers.py
"""
Helper utilities for the FastAPI Interservice SDK.
"""

import uuid
from typing import Iterable, List, Mapping, Optional, Tuple, Union


def generate_request_id() -> str:
    """
    Generate a unique request ID.

    Returns:
        Unique request ID
    """
    return str(uuid.uuid4())


def build_url(scheme_and_host: str, url_path: str) -> str:
    """
    Join a base scheme and host with a path.

    Exactly one slash separates the two parts, whatever trailing or
    leading slashes the inputs carry.

    Args:
        scheme_and_host: Base URL, e.g. "https://api.example.com/"
        url_path: Path relative to the base, e.g. "/v1/items"

    Returns:
        Absolute URL

    Example:
        build_url("https://api.x.com/", "/v1/items")  # "https://api.x.com/v1/items"
    """
    base = scheme_and_host.rstrip('/')
    path = (url_path or '').lstrip('/')

    if not path:
        return base

    return f"{base}/{path}"

def to_pairs(values: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]]) -> List[Tuple[str, str]]:
    """
    Normalize a mapping or an iterable of (name, value) pairs into a list of pairs.

    Mappings keep their insertion order; pair lists keep repeated names.

    Example:
        to_pairs({"id": "5"})                   # [("id", "5")]
        to_pairs([("id", "1"), ("id", "2")])    # [("id", "1"), ("id", "2")]
    """
    if values is None:
        return []
    items = values.items() if isinstance(values, Mapping) else values
    return [(name, value) for name, value in items]
