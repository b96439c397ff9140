"""
Routing API Endpoints

Directions between two points (/route) and travel times from a point to
every zone of the city (/one-to-city). Both take a URL-encoded JSON object
as their whole query string.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from transit_gateway.core.errors import MalformedRequest, RouterFailure
from transit_gateway.schemas.route import Route, TravelTimes
from transit_gateway.services.request_parser import (
    parse_one_to_city_request,
    parse_route_request,
)
from transit_gateway.services.response_assembler import assemble_route, assemble_travel_times
from transit_gateway.services.router_client import router_client

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(e: MalformedRequest) -> HTTPException:
    # The reason stays in the log; the caller's input is never echoed back
    logger.info("Malformed request: %s", str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request")


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error"
    )


@router.get("/route", response_model=Route)
async def get_route(request: Request):
    """
    Get step-by-step directions between two points.

    Query: {origin: {latitude, longitude}, destination: {latitude, longitude},
    departureSecs?, options?}

    Returns:
        The itinerary found by the routing engine

    Raises:
        HTTPException: 400 for a malformed query, 500 if no route could be produced
    """
    try:
        params = parse_route_request(str(request.url))
    except MalformedRequest as e:
        raise _bad_request(e) from e

    logger.info(
        "Route request: origin=%s, destination=%s, departure_secs=%s",
        params.origin,
        params.destination,
        params.departure_secs,
    )

    try:
        payload = await router_client.resolve_route(
            origin=params.origin,
            destination=params.destination,
            options=params.options,
            departure_secs=params.departure_secs,
        )
        return assemble_route(payload, origin=params.origin, destination=params.destination)

    except RouterFailure as e:
        logger.error("Routing engine failure: %s", str(e))
        raise _server_error() from e

    except Exception as e:
        logger.exception("Unexpected error while resolving route")
        raise _server_error() from e


@router.get("/one-to-city", response_model=TravelTimes)
async def get_one_to_city(request: Request):
    """
    Get travel times from an origin to every zone of the city.

    Query: {origin: {latitude, longitude}, departureSecs?, options?}

    Returns:
        Mapping of zone id to travel time in seconds

    Raises:
        HTTPException: 400 for a malformed query, 500 if the engine fails
    """
    try:
        params = parse_one_to_city_request(str(request.url))
    except MalformedRequest as e:
        raise _bad_request(e) from e

    logger.info(
        "One-to-city request: origin=%s, departure_secs=%s",
        params.origin,
        params.departure_secs,
    )

    try:
        payload = await router_client.compute_travel_times(
            origin=params.origin,
            options=params.options,
            departure_secs=params.departure_secs,
        )
        return assemble_travel_times(payload)

    except RouterFailure as e:
        logger.error("Routing engine failure: %s", str(e))
        raise _server_error() from e

    except Exception as e:
        logger.exception("Unexpected error while computing travel times")
        raise _server_error() from e
