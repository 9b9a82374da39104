"""
Trip API endpoints - POI proximity lookups along a trip
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wayfinder.config.settings import settings
from wayfinder.core.dependencies import get_nearby_service
from wayfinder.core.metrics import record_nearby_latency
from wayfinder.core.security import Principal, get_current_principal
from wayfinder.schemas.base import Envelope
from wayfinder.schemas.poi import ProximityResult
from wayfinder.services.nearby_service import NearbyPOIService

router = APIRouter(prefix="/v1/trip", tags=["trips"])


@router.get("/{trip_id}/nearby-pois", response_model=Envelope[list[ProximityResult]])
async def get_nearby_pois(
    trip_id: UUID,
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius_meters: float = Query(
        settings.nearby.default_radius_meters,
        le=settings.nearby.max_radius_meters,
    ),
    category: Optional[list[str]] = Query(None),
    service: NearbyPOIService = Depends(get_nearby_service),
    principal: Principal = Depends(get_current_principal),
):
    """
    POIs near the traveller's current position, nearest first

    - **latitude** / **longitude**: Current position
    - **radius_meters**: Search radius (default 10 km, max 100 km)
    - **category**: Optional, repeatable (landmark, nature, partner_location,
      fun_fact, traffic_alert); unknown values are ignored
    """
    with record_nearby_latency():
        pois = await service.find_nearby(latitude, longitude, radius_meters, category)

    return Envelope(status="ok", data=pois)
