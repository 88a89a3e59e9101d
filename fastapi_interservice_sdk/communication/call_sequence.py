# fastapi-interservice-sdk/fastapi_interservice_sdk/communication/call_sequence.py
"""
Call-sequence propagation.

Each outbound call carries a ``g-callsec`` header listing the
"<application>:<route>" identifiers the request went through, so that a
chain of service-to-service calls can be traced end to end.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..constants import CALL_SEQUENCE_HEADER, CALL_SEQUENCE_SEPARATOR
from ..utils.helpers import to_pairs
from .context import RequestContext

HeaderList = List[Tuple[str, str]]


def parse_call_sequence(values: Iterable[str]) -> List[str]:
    """
    Flatten raw header values into an ordered, duplicate-free sequence.

    Args:
        values: Raw ``g-callsec`` header values

    Returns:
        Entries in first-seen order, empty segments dropped

    Example:
        parse_call_sequence(["A:x;B:y;A:x"])  # ["A:x", "B:y"]
    """
    entries: List[str] = []
    for value in values:
        entries.extend(segment for segment in value.split(CALL_SEQUENCE_SEPARATOR) if segment)

    return list(dict.fromkeys(entries))


def format_call_sequence(entries: Sequence[str]) -> str:
    """Join entries into the wire form."""
    return CALL_SEQUENCE_SEPARATOR.join(entries)


def build_call_identifier(
    application_name: str,
    route_path: Optional[str],
    caller_name: str
) -> str:
    """
    Identifier of the current call.

    The inbound route path is used when there is one, otherwise the
    caller-supplied method name.
    """
    return f"{application_name}:{route_path or caller_name}"


def get_call_sequence(context: Optional[RequestContext]) -> List[str]:
    """Read the inbound call sequence, if any."""
    if context is None:
        return []
    return parse_call_sequence(context.get_all(CALL_SEQUENCE_HEADER))


def get_headers_with_call_sequence(
    headers: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]],
    caller_name: str,
    application_name: str,
    context: Optional[RequestContext] = None
) -> HeaderList:
    """
    Build the outbound header list for a call.

    Caller headers are copied in order, including a caller-supplied
    ``g-callsec`` which stays a separate entry. The inbound sequence is
    de-duplicated before the current identifier is appended, so a route
    revisited by the chain shows up twice at the end.

    Args:
        headers: Caller-supplied mapping or (name, value) pairs
        caller_name: Name of the calling method, used without an inbound request
        application_name: Name of the current service
        context: Inbound request context

    Returns:
        New list of (name, value) pairs ending with the call-sequence header
    """
    result = to_pairs(headers)

    call_sequence = get_call_sequence(context)
    route_path = context.route_path if context is not None else None
    call_sequence.append(build_call_identifier(application_name, route_path, caller_name))

    result.append((CALL_SEQUENCE_HEADER, format_call_sequence(call_sequence)))
    return result
