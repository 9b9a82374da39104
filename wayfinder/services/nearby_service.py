"""
Nearby-POI service: distance-bounded, distance-sorted POI lookup.

A request is served by the database's spatial query when at most one category
is requested. When that path is disabled, inapplicable (several categories)
or fails, the service lists the category-matched POIs and measures them with
the haversine formula instead. Both paths return the same shape: POIs within
the radius, ascending by distance in meters with ties ordered by id.

The scan is O(n log n) in the number of category-matched POIs regardless of
geography. That is the expected degraded mode for databases without PostGIS,
not a fault.
"""
import logging
from typing import Iterable, List, Optional, Union

from wayfinder.core import metrics
from wayfinder.core.geo import (
    Coordinate,
    format_coordinates,
    haversine_distance,
    validate_coordinate,
    validate_radius,
)
from wayfinder.core.result import Ok
from wayfinder.schemas.poi import ProximityResult
from wayfinder.services.category_filter import CategoryFilter, resolve_category_filter
from wayfinder.services.poi_repository import POIRepository

logger = logging.getLogger(__name__)


class NearbyPOIService:
    """Picks the query path for each nearby request and shapes the results"""

    def __init__(self, repository: POIRepository, spatial_queries_enabled: bool = True):
        self.repository = repository
        self.spatial_queries_enabled = spatial_queries_enabled

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float,
        categories: Union[str, Iterable[str], None] = None,
    ) -> List[ProximityResult]:
        """
        Find POIs within ``radius_meters`` of a point.

        Args:
            latitude: Center latitude in [-90, 90]
            longitude: Center longitude in [-180, 180]
            radius_meters: Positive search radius in meters
            categories: Category token(s); unknown tokens are ignored

        Returns:
            POIs with their ``distance``, nearest first

        Raises:
            ValidationError: Bad center or radius, before any query is issued
            RepositoryFailureError: The fallback listing query failed
        """
        center = validate_coordinate(latitude, longitude)
        radius = validate_radius(radius_meters)
        category_filter = resolve_category_filter(categories)

        if self.spatial_queries_enabled and not category_filter.is_multiple:
            results = await self._query_spatial(center, radius, category_filter.single)
            if results is not None:
                metrics.record_path("primary")
                return results

        metrics.record_path("fallback")
        return await self._scan(center, radius, category_filter)

    async def _query_spatial(
        self,
        center: Coordinate,
        radius: float,
        category,
    ) -> Optional[List[ProximityResult]]:
        outcome = await self.repository.find_within_radius(center, radius, category)
        if isinstance(outcome, Ok):
            return [ProximityResult.from_poi(poi, distance) for poi, distance in outcome.value]

        metrics.record_path("primary_failed")
        logger.warning(
            f"Spatial POI query unavailable, falling back to haversine scan: {outcome.error.message}",
            extra={
                "cause": type(outcome.error.cause).__name__ if outcome.error.cause else None,
                "center": format_coordinates(center.latitude, center.longitude),
                "radius_meters": radius,
            },
        )
        return None

    async def _scan(
        self,
        center: Coordinate,
        radius: float,
        category_filter: CategoryFilter,
    ) -> List[ProximityResult]:
        pois = await self.repository.list_by_categories(sorted(category_filter.categories))

        within = []
        for poi in pois:
            distance = haversine_distance(center, Coordinate(poi.latitude, poi.longitude))
            if distance <= radius:
                within.append(ProximityResult.from_poi(poi, distance))

        within.sort(key=lambda r: (r.distance, r.id))
        return within
