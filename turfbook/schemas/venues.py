# turfbook/schemas/venues.py
"""
Pydantic schemas for venues and search criteria.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .slots import TimeSlot


class Venue(BaseModel):
    """A bookable turf. Every field is optional: upstream records are partial."""
    id: Optional[str | int] = None
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance: Optional[float] = None
    price: Optional[float] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    surface: Optional[str] = None
    amenities: list[str] = []
    weather_dependent: Optional[bool] = Field(default=None, alias="weatherDependent")
    time_slots: Optional[list[TimeSlot]] = Field(default=None, alias="timeSlots")
    established: Optional[str | int] = None

    model_config = {"from_attributes": True, "populate_by_name": True}


SortKey = Literal["distance", "price", "rating", "popularity", "newest", "none"]


class SearchCriteria(BaseModel):
    """Filter + sort request. Defaults match the client's initial filter panel."""
    query: str = ""
    max_distance: float = Field(default=20, alias="maxDistance")
    min_price: float = Field(default=0, alias="minPrice")
    max_price: float = Field(default=2500, alias="maxPrice")
    min_rating: float = Field(default=0, alias="minRating")
    surface: str = "all"
    amenities: list[str] = []
    availability: Literal["all", "available"] = "all"
    weather_dependent: Literal["all", "true", "false"] = Field(default="all", alias="weatherDependent")
    sort_by: str = Field(default="distance", alias="sortBy")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("weather_dependent", mode="before")
    @classmethod
    def _weather_flag(cls, value):
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

    @classmethod
    def from_filters(cls, filters: dict[str, Any], query: str = "") -> "SearchCriteria":
        """
        Build criteria from the client's filter panel shape:

            {"distance": [20], "priceRange": [0, 2500], "rating": [0],
             "availability": "all", "sortBy": "distance", "surface": "all",
             "amenities": [], "weatherDependent": "all"}

        Slider values arrive as one- or two-element lists. Keys naming a
        criteria field directly (maxPrice, min_rating, ...) are accepted too.
        """
        names = {}
        for name, info in cls.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name

        data: dict[str, Any] = {
            names[k]: v for k, v in filters.items() if k in names and v is not None
        }
        data["query"] = query or ""

        distance = filters.get("distance")
        if distance:
            data["max_distance"] = _first(distance)

        price_range = filters.get("priceRange")
        if isinstance(price_range, (list, tuple)) and len(price_range) == 2:
            data["min_price"], data["max_price"] = price_range

        rating = filters.get("rating")
        if rating is not None:
            data["min_rating"] = _first(rating)

        return cls(**data)


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else 0
    return value
