"""
Request Parser

Decodes the URL-encoded JSON payload carried in the query string of
/route and /one-to-city into validated request models.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from transit_gateway.core.errors import MalformedRequest
from transit_gateway.schemas.requests import OneToCityRequest, RouteRequest

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=OneToCityRequest)

# A '%' that does not start a two-digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def strip_proxy_suffix(query: str) -> str:
    """
    Remove the single '=' some proxies append to the query string.

    Only one trailing '=' is ever removed; a query ending in '==' keeps
    one of them.
    """
    if query.endswith("="):
        return query[:-1]
    return query


def _reject_constant(name: str) -> float:
    # NaN and Infinity are not JSON
    raise ValueError(f"non-standard JSON constant {name}")


def parse_request_url(request_url: str) -> Dict[str, Any]:
    """
    Extract the query component of a URL and decode it as a JSON object.

    Args:
        request_url: Request URL, absolute or path-only

    Returns:
        The decoded JSON object

    Raises:
        MalformedRequest: If the query is missing, badly percent-encoded
            or not a JSON object
    """
    query = urlsplit(request_url).query
    if not query:
        raise MalformedRequest("missing query string")

    query = strip_proxy_suffix(query)
    if _BAD_ESCAPE.search(query):
        raise MalformedRequest("invalid percent-encoding")

    try:
        decoded = unquote(query, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedRequest("query is not valid UTF-8") from e

    try:
        payload = json.loads(decoded, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedRequest("query is not valid JSON") from e

    if not isinstance(payload, dict):
        raise MalformedRequest("query must be a JSON object")
    return payload


def seconds_since_midnight(now: Optional[datetime] = None) -> int:
    now = now or datetime.now()
    return now.hour * 3600 + now.minute * 60 + now.second


def _validate(model: Type[RequestT], payload: Dict[str, Any]) -> RequestT:
    try:
        request = model.model_validate(payload)
    except ValidationError as e:
        logger.debug("Rejected %s: %s", model.__name__, e)
        raise MalformedRequest(f"invalid {model.__name__}") from e

    if request.departure_secs is None:
        request = request.model_copy(update={"departure_secs": seconds_since_midnight()})
    return request


def parse_route_request(request_url: str) -> RouteRequest:
    """Parse the query of a /route request."""
    return _validate(RouteRequest, parse_request_url(request_url))


def parse_one_to_city_request(request_url: str) -> OneToCityRequest:
    """Parse the query of a /one-to-city request."""
    return _validate(OneToCityRequest, parse_request_url(request_url))
