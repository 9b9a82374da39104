"""
Partner Service - POI registration on behalf of partners
"""
import logging
from typing import List

from wayfinder.models.poi import POI
from wayfinder.schemas.poi import POICreate
from wayfinder.services.poi_repository import POIRepository

logger = logging.getLogger(__name__)


class PartnerService:
    """Registers and lists the POIs a partner owns"""

    def __init__(self, repository: POIRepository):
        self.repository = repository

    async def create_poi(self, partner_id: str, poi_data: POICreate) -> POI:
        """
        Register a new POI for a partner

        Args:
            partner_id: Owning partner ID
            poi_data: Validated registration body

        Returns:
            Created POI
        """
        location = poi_data.location.to_coordinate()
        poi = POI(
            partner_id=partner_id,
            name=poi_data.name,
            description=poi_data.description,
            category=poi_data.category,
            latitude=location.latitude,
            longitude=location.longitude,
            geofence_radius_meters=poi_data.geofence_radius_meters,
        )
        poi = await self.repository.add(poi)
        logger.info(
            f"Partner {partner_id} registered POI {poi.id}",
            extra={"partner_id": partner_id, "poi_id": poi.id, "category": poi.category.value},
        )
        return poi

    async def list_pois(self, partner_id: str) -> List[POI]:
        return await self.repository.list_for_partner(partner_id)
