"""
Routing Request Schemas

Pydantic models for the JSON payloads carried in the query string of
/route and /one-to-city.
"""

from typing import Any, Dict, Optional

from pydantic import Field, model_validator

from transit_gateway.schemas.geo import GeoModel, Location


def _default_location_id(data: Any, key: str) -> Any:
    """Give an id-less point the name of the field it was sent in."""
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        point = data[key]
        if "id" not in point:
            data = {**data, key: {**point, "id": key}}
    return data


class OneToCityRequest(GeoModel):
    """Request for travel times from an origin to every zone of the city."""

    origin: Location = Field(..., description="Starting location")
    departure_secs: Optional[float] = Field(
        None,
        ge=0,
        strict=True,
        allow_inf_nan=False,
        description="Departure time in seconds. Defaults to the current time of day.",
    )
    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Router-specific options, passed to the routing engine verbatim",
    )

    @model_validator(mode="before")
    @classmethod
    def default_ids(cls, data: Any) -> Any:
        return _default_location_id(data, "origin")


class RouteRequest(OneToCityRequest):
    """Request for directions between two points."""

    destination: Location = Field(..., description="Destination location")

    @model_validator(mode="before")
    @classmethod
    def default_ids(cls, data: Any) -> Any:
        data = _default_location_id(data, "origin")
        return _default_location_id(data, "destination")
