"""
Response Assembler

Turns the routing engine's payloads into the public Route model and the
travel-time mapping. Fields the engine leaves out are derived; fields it
supplies are kept as they are.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter

from transit_gateway.core.errors import RouterPayloadError
from transit_gateway.schemas.geo import Location
from transit_gateway.schemas.route import (
    Route,
    TransportMode,
    TravelTimes,
    empty_feature_collection,
)

logger = logging.getLogger(__name__)

_travel_times_adapter = TypeAdapter(TravelTimes)

_MOVING_VERBS = {
    TransportMode.WALK: "Walk",
    TransportMode.BICYCLE: "Cycle",
    TransportMode.CAR: "Drive",
}


def _stop_label(stop: Any) -> str:
    if not isinstance(stop, dict):
        return "unknown stop"
    return stop.get("stopName") or stop.get("id") or "unknown stop"


def describe_step(step: Dict[str, Any]) -> str:
    """
    Build a human-readable description of a raw step.

    Examples:
        "Walk 0.40 km to Main St"
        "Take bus 550 from Main St to Central (3 stops)"
    """
    mode = TransportMode(step["mode"])
    origin = _stop_label(step.get("from"))
    destination = _stop_label(step.get("to"))

    if not mode.is_transit:
        verb = _MOVING_VERBS[mode]
        distance = step.get("distanceKm")
        if distance is not None:
            return f"{verb} {float(distance):.2f} km to {destination}"
        return f"{verb} to {destination}"

    vehicle = mode.value.lower().replace("_", " ")
    route_id = step.get("routeId")
    text = f"Take {vehicle} {route_id}" if route_id else f"Take {vehicle}"
    text = f"{text} from {origin} to {destination}"
    num_stops = step.get("numStops")
    if num_stops:
        noun = "stop" if num_stops == 1 else "stops"
        text = f"{text} ({num_stops} {noun})"
    return text


def _normalize_step(step: Dict[str, Any]) -> Dict[str, Any]:
    step = dict(step)
    if step.get("travelTimeSecs") is None:
        step["travelTimeSecs"] = step["arriveTimeSecs"] - step["departTimeSecs"]
    if not step.get("description"):
        step["description"] = describe_step(step)
    return step


def _walking_distance(steps: List[Dict[str, Any]]) -> float:
    return sum(
        float(step.get("distanceKm") or 0.0)
        for step in steps
        if TransportMode(step["mode"]).is_walking
    )


def _normalize_route(
    data: Dict[str, Any],
    origin: Optional[Location],
    destination: Optional[Location],
) -> Dict[str, Any]:
    route = dict(data)
    steps = [_normalize_step(step) for step in route.get("steps") or []]
    route["steps"] = steps

    if route.get("origin") is None and origin is not None:
        route["origin"] = origin.model_dump(by_alias=True)
    if route.get("destination") is None and destination is not None:
        route["destination"] = destination.model_dump(by_alias=True)

    if route.get("departureSecs") is None:
        route["departureSecs"] = steps[0]["departTimeSecs"]
    if route.get("arriveTimeSecs") is None:
        route["arriveTimeSecs"] = steps[-1]["arriveTimeSecs"]
    if route.get("travelTimeSecs") is None:
        route["travelTimeSecs"] = route["arriveTimeSecs"] - route["departureSecs"]
    if route.get("walkingDistanceKm") is None:
        route["walkingDistanceKm"] = _walking_distance(steps)
    if route.get("geojson") is None:
        route["geojson"] = empty_feature_collection()
    return route


def assemble_route(
    payload: Any,
    origin: Optional[Location] = None,
    destination: Optional[Location] = None,
) -> Route:
    """
    Build a Route from the engine's route payload.

    Args:
        payload: Route-shaped JSON object returned by the engine
        origin: Requested origin, used when the engine omits it
        destination: Requested destination, used when the engine omits it

    Returns:
        The validated Route

    Raises:
        RouterPayloadError: If the payload is absent, malformed or
            violates the itinerary invariants
    """
    if not isinstance(payload, dict) or not payload:
        raise RouterPayloadError("Routing engine returned no route")

    try:
        return Route.model_validate(_normalize_route(payload, origin, destination))
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.error("Failed to assemble route from engine payload: %s", str(e))
        raise RouterPayloadError(f"Invalid route data: {str(e)}") from e


def assemble_travel_times(payload: Any) -> TravelTimes:
    """
    Extract the zone id to travel time mapping from the engine's payload.

    Accepts either a bare mapping or one wrapped in a "travelTimes" key.
    """
    if isinstance(payload, dict) and isinstance(payload.get("travelTimes"), dict):
        payload = payload["travelTimes"]
    if not isinstance(payload, dict):
        raise RouterPayloadError("Routing engine returned no travel times")

    try:
        return _travel_times_adapter.validate_python(payload, strict=True)
    except ValueError as e:
        logger.error("Failed to read travel times from engine payload: %s", str(e))
        raise RouterPayloadError(f"Invalid travel time data: {str(e)}") from e
