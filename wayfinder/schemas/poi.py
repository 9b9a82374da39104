from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wayfinder.core.geo import Coordinate
from wayfinder.models.poi import POI, POICategory, category_from_token


class CoordinateIn(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class POICreate(BaseModel):
    """Partner request body registering a POI"""
    name: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)
    category: POICategory
    location: CoordinateIn
    geofence_radius_meters: int = Field(..., gt=0)

    @field_validator('category', mode='before')
    @classmethod
    def parse_category(cls, v):
        """Accept the canonical name or its lowercase alias"""
        if isinstance(v, str) and not isinstance(v, POICategory):
            category = category_from_token(v)
            if category is None:
                raise ValueError(f"Unknown category '{v}'")
            return category
        return v


class POIRead(BaseModel):
    id: str
    partner_id: str
    name: str
    description: str
    category: POICategory
    latitude: float
    longitude: float
    geofence_radius_meters: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProximityResult(POIRead):
    """A POI annotated with its distance (meters) from the query center"""
    distance: float = Field(..., ge=0)

    @classmethod
    def from_poi(cls, poi: POI, distance: float) -> "ProximityResult":
        fields = POIRead.model_validate(poi).model_dump()
        return cls(**fields, distance=max(0.0, float(distance)))
