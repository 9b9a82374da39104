# Business logic services

from .category_filter import CategoryFilter, resolve_category_filter
from .poi_repository import POIRepository
from .nearby_service import NearbyPOIService
from .partner_service import PartnerService

__all__ = [
    "CategoryFilter",
    "resolve_category_filter",
    "POIRepository",
    "NearbyPOIService",
    "PartnerService",
]
