"""
Point of interest model and its closed category enumeration
"""
import enum
import uuid
from typing import Optional

from sqlalchemy import Column, DateTime, Enum as SQLEnum, Float, Integer, String, Text
from sqlalchemy.sql import func

from wayfinder.core.db import Base


class POICategory(str, enum.Enum):
    """Canonical POI classification"""
    LANDMARK = "LANDMARK"
    NATURE = "NATURE"
    PARTNER_LOCATION = "PARTNER_LOCATION"
    FUN_FACT = "FUN_FACT"
    TRAFFIC_ALERT = "TRAFFIC_ALERT"


# Canonical category <-> lowercase alias. Filters and request bodies both go
# through this table.
CATEGORY_ALIASES: dict[POICategory, str] = {
    POICategory.LANDMARK: "landmark",
    POICategory.NATURE: "nature",
    POICategory.PARTNER_LOCATION: "partner_location",
    POICategory.FUN_FACT: "fun_fact",
    POICategory.TRAFFIC_ALERT: "traffic_alert",
}
_CATEGORIES_BY_ALIAS: dict[str, POICategory] = {alias: cat for cat, alias in CATEGORY_ALIASES.items()}


def category_alias(category: POICategory) -> str:
    return CATEGORY_ALIASES[category]


def category_from_token(token: str) -> Optional[POICategory]:
    """Map a free-text token to its category, or None when it has no mapping."""
    return _CATEGORIES_BY_ALIAS.get(token.strip().lower())


def _new_poi_id() -> str:
    return str(uuid.uuid4())


class POI(Base):
    """
    A partner-registered place whose geofence triggers narrated audio
    """
    __tablename__ = "pois"

    id = Column(String(36), primary_key=True, default=_new_poi_id)
    partner_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(POICategory, name="poi_category"), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    geofence_radius_meters = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
