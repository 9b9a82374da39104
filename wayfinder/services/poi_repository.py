"""
POI Repository - read and registration access to the POI store
"""
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wayfinder.core.exceptions import RepositoryFailureError, RepositoryUnavailableError
from wayfinder.core.geo import Coordinate
from wayfinder.core.result import Err, Ok, Result
from wayfinder.models.poi import POI, POICategory

logger = logging.getLogger(__name__)

SpatialRows = List[Tuple[POI, float]]


class POIRepository:
    """Queries against the ``pois`` table through one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_within_radius(
        self,
        center: Coordinate,
        radius_meters: float,
        category: Optional[POICategory] = None,
    ) -> Result[SpatialRows, RepositoryUnavailableError]:
        """
        Spatial proximity query run by the database (PostGIS).

        Distance is ``ST_DistanceSphere`` in meters; the radius predicate is
        ``ST_DWithin`` on geography so a GiST index can serve it. Both measure
        on the sphere (``use_spheroid`` off), otherwise a row just past the
        radius on the sphere could pass the spheroid check. Rows come back
        ordered by distance ascending, then by id.

        Returns:
            Ok with (poi, distance) pairs, or Err when the spatial functions
            or the query itself failed
        """
        location = func.ST_MakePoint(POI.longitude, POI.latitude)
        origin = func.ST_MakePoint(center.longitude, center.latitude)
        distance = func.ST_DistanceSphere(location, origin).label("distance")

        stmt = select(POI, distance).where(
            func.ST_DWithin(func.geography(location), func.geography(origin), radius_meters, False)
        )
        if category is not None:
            stmt = stmt.where(POI.category == category)
        stmt = stmt.order_by(distance, POI.id)

        try:
            result = await self.db.execute(stmt)
            rows = result.all()
        except SQLAlchemyError as e:
            await self._discard_failed_transaction()
            return Err(RepositoryUnavailableError(f"Spatial query failed: {type(e).__name__}", cause=e))

        return Ok([(poi, float(dist)) for poi, dist in rows])

    async def list_by_categories(self, categories: Iterable[POICategory] = ()) -> List[POI]:
        """
        List POIs without any distance computation.

        No categories lists every POI; one or more restricts by membership.
        """
        wanted = list(categories)
        stmt = select(POI)
        if len(wanted) == 1:
            stmt = stmt.where(POI.category == wanted[0])
        elif wanted:
            stmt = stmt.where(POI.category.in_(wanted))

        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"POI listing query failed: {e}", exc_info=True)
            raise RepositoryFailureError() from e

    async def list_for_partner(self, partner_id: str) -> List[POI]:
        stmt = (
            select(POI)
            .where(POI.partner_id == partner_id)
            .order_by(POI.created_at.desc(), POI.name)
        )
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Partner POI listing failed: {e}", exc_info=True)
            raise RepositoryFailureError("Failed to list POIs") from e

    async def add(self, poi: POI) -> POI:
        self.db.add(poi)
        try:
            await self.db.commit()
            await self.db.refresh(poi)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"POI registration failed: {e}", exc_info=True)
            raise RepositoryFailureError("Failed to register POI") from e
        return poi

    async def _discard_failed_transaction(self) -> None:
        # A failed statement leaves a PostgreSQL transaction aborted; the
        # fallback listing runs on the same session.
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after failed spatial query also failed: {e}")
