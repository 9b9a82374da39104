"""
Dependency providers wiring request-scoped sessions into services.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wayfinder.config.settings import settings
from wayfinder.core.db import get_db
from wayfinder.services.nearby_service import NearbyPOIService
from wayfinder.services.partner_service import PartnerService
from wayfinder.services.poi_repository import POIRepository


def get_poi_repository(db: AsyncSession = Depends(get_db)) -> POIRepository:
    return POIRepository(db)


def get_nearby_service(repository: POIRepository = Depends(get_poi_repository)) -> NearbyPOIService:
    return NearbyPOIService(
        repository,
        spatial_queries_enabled=settings.nearby.spatial_queries_enabled,
    )


def get_partner_service(repository: POIRepository = Depends(get_poi_repository)) -> PartnerService:
    return PartnerService(repository)
