"""Pydantic models for places and API payloads."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class RawCandidate(BaseModel):
    """A provider result reduced to the fields discovery cares about."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    type_tags: tuple[str, ...] = ()
    location: Coordinate
    rating: float | None = None
    rating_count: int | None = None
    operational_status: str | None = None
    formatted_address: str | None = None
    area_name: str | None = None
    open_now: bool | None = None
    photo_reference: str | None = None


class Category(str, Enum):
    HERITAGE = "heritage"


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PlaceMetadata(_CamelModel):
    rating: float | None = None
    rating_count: int | None = None
    operational_status: str | None = None
    open_now: bool | None = None
    type_tags: tuple[str, ...] | None = None
    formatted_address: str | None = None
    area_name: str | None = None


class Place(_CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str
    latitude: float
    longitude: float
    image_url: str
    category: Category = Category.HERITAGE
    distance_label: str
    metadata: PlaceMetadata | None = None


class DiscoveryResponse(BaseModel):
    count: int
    source: str
    places: list[Place]


class HistoricPlacesRequest(BaseModel):
    latitude: float
    longitude: float
    radius: int | None = Field(default=None, gt=0)
