"""
Location and Stop Type Definitions

Pydantic models for the points exchanged between the gateway, its callers
and the routing engine.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel


class GeoModel(BaseModel):
    """
    Base for all gateway models: immutable, camelCase on the wire.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_serializer(mode="wrap")
    def omit_missing_optionals(self, handler):
        # Optional fields the engine did not send stay absent in the output
        return {key: value for key, value in handler(self).items() if value is not None}


class Location(GeoModel):
    """
    A point with an identifier.
    """

    id: str = Field(..., description="Identifier of the point")
    latitude: float = Field(
        ...,
        ge=-90.0,
        le=90.0,
        strict=True,
        allow_inf_nan=False,
        description="Latitude in decimal degrees",
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        strict=True,
        allow_inf_nan=False,
        description="Longitude in decimal degrees",
    )

    def same_place(self, other: "Location") -> bool:
        """True when both refer to the same stop or to identical coordinates."""
        if self.id == other.id:
            return True
        return (self.latitude, self.longitude) == (other.latitude, other.longitude)

    def __str__(self) -> str:
        return f"{self.id} ({self.latitude}, {self.longitude})"


class Stop(Location):
    """
    A transit stop, or a synthetic stop standing in for the origin or destination.
    """

    stop_name: Optional[str] = None
    stop_desc: Optional[str] = None
    parent_station: Optional[str] = Field(
        None, description="Identifier of the parent stop, if any"
    )
    feed: Optional[str] = Field(
        None, description="Source feed when several feeds are merged upstream"
    )

    @property
    def label(self) -> str:
        """Name to use in step descriptions."""
        return self.stop_name or self.id
