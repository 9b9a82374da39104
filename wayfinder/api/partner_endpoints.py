"""
Partner API endpoints - POI registration
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from wayfinder.core.dependencies import get_partner_service
from wayfinder.core.security import require_partner_api_key
from wayfinder.schemas.base import Envelope
from wayfinder.schemas.poi import POICreate, POIRead
from wayfinder.services.partner_service import PartnerService

router = APIRouter(
    prefix="/v1/partner",
    tags=["partner"],
    dependencies=[Depends(require_partner_api_key)],
)


@router.post("/{partner_id}/poi", response_model=Envelope[POIRead], status_code=status.HTTP_201_CREATED)
async def create_poi(
    partner_id: UUID,
    poi_data: POICreate,
    service: PartnerService = Depends(get_partner_service),
):
    """
    Register a POI

    - **name**: At least 3 characters
    - **description**: At least 10 characters
    - **category**: LANDMARK, NATURE, PARTNER_LOCATION, FUN_FACT or TRAFFIC_ALERT
    - **location**: { latitude, longitude }
    - **geofence_radius_meters**: Positive integer
    """
    poi = await service.create_poi(str(partner_id), poi_data)
    return Envelope(status="ok", data=POIRead.model_validate(poi))


@router.get("/{partner_id}/pois", response_model=Envelope[list[POIRead]])
async def list_pois(
    partner_id: UUID,
    service: PartnerService = Depends(get_partner_service),
):
    pois = await service.list_pois(str(partner_id))
    return Envelope(status="ok", data=[POIRead.model_validate(p) for p in pois])
