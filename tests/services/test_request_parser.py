"""
Unit tests for the request parser.
"""

from datetime import datetime
from urllib.parse import quote

import pytest
from pydantic import ValidationError

from tests.helpers import encode_query
from transit_gateway.core.errors import MalformedRequest
from transit_gateway.schemas.requests import OneToCityRequest
from transit_gateway.services.request_parser import (
    parse_one_to_city_request,
    parse_request_url,
    parse_route_request,
    seconds_since_midnight,
    strip_proxy_suffix,
)


def test_parse_route_request(route_query):
    """Test decoding a well-formed /route query."""
    request = parse_route_request("/route?" + encode_query(route_query))

    assert request.origin.latitude == 40.7
    assert request.origin.longitude == -74.0
    assert request.origin.id == "origin"
    assert request.destination.latitude == 40.75
    assert request.destination.id == "destination"
    assert request.departure_secs == 28800
    assert request.options == {}


def test_parse_absolute_url(route_query):
    request = parse_route_request("http://gateway:1337/route?" + encode_query(route_query))
    assert request.destination.longitude == -73.99


def test_trailing_equals_is_stripped(route_query):
    """Test that one proxy-appended '=' decodes the same as none."""
    plain = parse_route_request("/route?" + encode_query(route_query))
    suffixed = parse_route_request("/route?" + encode_query(route_query) + "=")
    assert plain == suffixed


def test_only_one_trailing_equals_is_stripped(route_query):
    """Test that a second '=' is left in place and breaks the payload."""
    with pytest.raises(MalformedRequest):
        parse_route_request("/route?" + encode_query(route_query) + "==")


def test_strip_proxy_suffix():
    assert strip_proxy_suffix("abc") == "abc"
    assert strip_proxy_suffix("abc=") == "abc"
    assert strip_proxy_suffix("abc==") == "abc="
    assert strip_proxy_suffix("") == ""


def test_options_passed_through_verbatim(route_query):
    options = {"modes": ["WALK", "BUS"], "maxWalkKm": 1.5, "nested": {"a": None}}
    route_query["options"] = options
    request = parse_route_request("/route?" + encode_query(route_query))
    assert request.options == options


def test_existing_location_ids_are_kept(route_query):
    route_query["origin"]["id"] = "home"
    request = parse_route_request("/route?" + encode_query(route_query))
    assert request.origin.id == "home"
    assert request.destination.id == "destination"


def test_missing_departure_defaults_to_time_of_day(route_query):
    del route_query["departureSecs"]
    request = parse_route_request("/route?" + encode_query(route_query))
    assert 0 <= request.departure_secs < 24 * 3600


def test_seconds_since_midnight():
    assert seconds_since_midnight(datetime(2026, 1, 1, 8, 0, 30)) == 28830
    assert seconds_since_midnight(datetime(2026, 1, 1, 0, 0, 0)) == 0


@pytest.mark.parametrize(
    "url",
    [
        "/route",
        "/route?",
        "/route?not-json",
        "/route?%7Bbroken",
        "/route?%zz",
        "/route?%FF%FE",
        "/route?%5B1%2C2%5D",
    ],
)
def test_undecodable_queries(url):
    """Test that missing, badly encoded, non-JSON or non-object queries are rejected."""
    with pytest.raises(MalformedRequest):
        parse_request_url(url)


def test_plus_is_not_a_space():
    payload = parse_request_url("/route?" + encode_query({"name": "a+b"}).replace("%2B", "+"))
    assert payload == {"name": "a+b"}


@pytest.mark.parametrize(
    "mutate",
    [
        lambda q: q.pop("destination"),
        lambda q: q.pop("origin"),
        lambda q: q["origin"].pop("latitude"),
        lambda q: q["origin"].update(latitude="40.7"),
        lambda q: q["origin"].update(latitude=91.0),
        lambda q: q["destination"].update(longitude=-180.5),
        lambda q: q.update(departureSecs="8am"),
        lambda q: q.update(departureSecs=-1),
        lambda q: q.update(options=["not", "an", "object"]),
        lambda q: q.update(origin="40.7,-74.0"),
    ],
)
def test_invalid_route_requests(route_query, mutate):
    """Test that missing, non-numeric or out-of-range fields are rejected."""
    mutate(route_query)
    with pytest.raises(MalformedRequest):
        parse_route_request("/route?" + encode_query(route_query))


def test_nan_coordinates_rejected():
    query = encode_query({"origin": {"latitude": 1.0, "longitude": 2.0}}).replace("1.0", "NaN")
    with pytest.raises(MalformedRequest):
        parse_one_to_city_request("/one-to-city?" + query)


def test_parse_one_to_city_request(route_query):
    """Test that /one-to-city needs no destination and ignores one if sent."""
    request = parse_one_to_city_request("/one-to-city?" + encode_query(route_query))
    assert request.origin.latitude == 40.7
    assert not hasattr(request, "destination")

    del route_query["destination"]
    request = parse_one_to_city_request("/one-to-city?" + encode_query(route_query))
    assert request.departure_secs == 28800


def test_one_to_city_requires_origin():
    with pytest.raises(MalformedRequest):
        parse_one_to_city_request("/one-to-city?" + encode_query({"departureSecs": 0}))


@pytest.mark.parametrize(
    "raw_query",
    [
        '{"origin": {"latitude": 40.7, "longitude": -74.0},'
        ' "destination": {"latitude": 40.75, "longitude": -73.99}, "departureSecs": Infinity}',
        '{"origin": {"latitude": 40.7, "longitude": -74.0},'
        ' "destination": {"latitude": 40.75, "longitude": -73.99}, "departureSecs": -Infinity}',
        '{"origin": {"latitude": 40.7, "longitude": -74.0},'
        ' "destination": {"latitude": 40.75, "longitude": -73.99}, "options": {"maxWalkKm": NaN}}',
        '{"origin": {"latitude": 40.7, "longitude": -74.0},'
        ' "destination": {"latitude": 40.75, "longitude": -73.99},'
        ' "options": {"limits": [1, Infinity]}}',
    ],
)
def test_non_standard_json_constants_rejected(raw_query):
    """Test that NaN and Infinity are not JSON numbers, wherever they appear."""
    with pytest.raises(MalformedRequest):
        parse_route_request("/route?" + quote(raw_query, safe=""))


def test_infinite_departure_rejected_by_model():
    with pytest.raises(ValidationError):
        OneToCityRequest(
            origin={"latitude": 40.7, "longitude": -74.0}, departure_secs=float("inf")
        )


def test_deeply_nested_payload_rejected():
    """Test that nesting too deep to decode is a malformed request."""
    with pytest.raises(MalformedRequest):
        parse_request_url("/route?" + "%5B" * 5000)
    with pytest.raises(MalformedRequest):
        parse_request_url("/route?" + "%7B%22a%22%3A" * 5000)
