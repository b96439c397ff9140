"""
Route Schema

Pydantic models for itineraries returned by the gateway.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, FiniteFloat, model_validator

from transit_gateway.schemas.geo import GeoModel, Location, Stop


class TransportMode(str, Enum):
    """Transport modes, as named by the routing engine."""

    WALK = "WALK"
    BICYCLE = "BICYCLE"
    CAR = "CAR"
    BUS = "BUS"
    RAIL = "RAIL"
    SUBWAY = "SUBWAY"
    TRAM = "TRAM"
    FERRY = "FERRY"
    CABLE_CAR = "CABLE_CAR"
    GONDOLA = "GONDOLA"
    FUNICULAR = "FUNICULAR"
    TRANSIT = "TRANSIT"

    @property
    def is_walking(self) -> bool:
        return self is TransportMode.WALK

    @property
    def is_transit(self) -> bool:
        return self not in (
            TransportMode.WALK,
            TransportMode.BICYCLE,
            TransportMode.CAR,
        )


# Engine clock seconds; integers stay integers, fractions are kept
Seconds = Union[int, FiniteFloat]


def _same_duration(a: Seconds, b: Seconds) -> bool:
    return math.isclose(a, b, abs_tol=1e-6)


def empty_feature_collection() -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": []}


class Step(GeoModel):
    """A single leg of an itinerary, on one transport mode."""

    from_stop: Stop = Field(..., alias="from")
    to_stop: Stop = Field(..., alias="to")
    mode: TransportMode
    depart_time_secs: Seconds
    arrive_time_secs: Seconds
    travel_time_secs: Seconds
    num_stops: Optional[int] = Field(None, ge=0, description="Number of stops, for transit")
    trip_id: Optional[str] = Field(None, description="Trip identifier, for transit")
    route_id: Optional[str] = Field(None, description="Route identifier, for transit")
    distance_km: Optional[float] = Field(None, ge=0.0, description="Distance, e.g. for walking")
    description: str

    @model_validator(mode="after")
    def check_times(self) -> "Step":
        if self.arrive_time_secs < self.depart_time_secs:
            raise ValueError("step arrives before it departs")
        elapsed = self.arrive_time_secs - self.depart_time_secs
        if not _same_duration(self.travel_time_secs, elapsed):
            raise ValueError("step travel time does not match its departure and arrival")
        return self


class Route(GeoModel):
    """A complete itinerary from one location to another."""

    origin: Location
    destination: Location
    departure_secs: Seconds
    arrive_time_secs: Seconds
    travel_time_secs: Seconds
    walking_distance_km: float = Field(..., ge=0.0)
    steps: List[Step]
    geojson: Dict[str, Any] = Field(
        default_factory=empty_feature_collection,
        description="GeoJSON FeatureCollection of the route's path, passed through as is",
    )

    @model_validator(mode="after")
    def check_itinerary(self) -> "Route":
        elapsed = self.arrive_time_secs - self.departure_secs
        if not _same_duration(self.travel_time_secs, elapsed):
            raise ValueError("route travel time does not match its departure and arrival")

        if not self.steps:
            if not self.origin.same_place(self.destination):
                raise ValueError("route without steps must start at its destination")
            return self

        first, last = self.steps[0], self.steps[-1]
        if not first.from_stop.same_place(self.origin):
            raise ValueError("first step does not start at the origin")
        if not last.to_stop.same_place(self.destination):
            raise ValueError("last step does not end at the destination")
        if first.depart_time_secs < self.departure_secs:
            raise ValueError("first step departs before the route")
        if last.arrive_time_secs > self.arrive_time_secs:
            raise ValueError("last step arrives after the route")

        for previous, step in zip(self.steps, self.steps[1:]):
            if step.depart_time_secs < previous.arrive_time_secs:
                raise ValueError("steps are not in chronological order")
            if not previous.to_stop.same_place(step.from_stop):
                raise ValueError("steps are not connected")

        walked = sum(s.distance_km or 0.0 for s in self.steps if s.mode.is_walking)
        if not math.isclose(walked, self.walking_distance_km, abs_tol=1e-6):
            raise ValueError("walking distance does not match the walking steps")
        return self


# Zone id -> travel time in seconds, None when the zone is unreachable
TravelTimes = Dict[str, Optional[Seconds]]
