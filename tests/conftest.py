"""
Shared fixtures.

Repository and endpoint tests run on SQLite (aiosqlite). The ``spatial``
database registers stand-ins for the PostGIS functions the spatial query
uses, computed with the spherical law of cosines on PostGIS's sphere radius,
so the database path and the haversine path are measured by different
formulas. ``ST_DWithin`` measures on the WGS84 spheroid unless its fourth
argument turns that off, as in PostGIS. The ``plain`` database has no such
functions, like a PostgreSQL server without PostGIS.
"""
import math

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from wayfinder.config.settings import settings
from wayfinder.core import metrics
from wayfinder.core.db import Base, get_db
from wayfinder.core.security import create_access_token
from wayfinder.main import app
from tests.factories import NYC_POIS, make_poi

POSTGIS_SPHERE_RADIUS_M = 6370986.0
WGS84_MAJOR_AXIS_M = 6378137.0
WGS84_FLATTENING = 1 / 298.257223563
PARTNER_API_KEY = "partner-test-key"


def _st_make_point(x, y):
    return f"{x!r} {y!r}"


def _parse_point(point):
    lon, lat = point.split()
    return float(lat), float(lon)


def _st_distance_sphere(a, b):
    lat1, lon1 = (math.radians(v) for v in _parse_point(a))
    lat2, lon2 = (math.radians(v) for v in _parse_point(b))
    cos_angle = (
        math.sin(lat1) * math.sin(lat2)
        + math.cos(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    )
    return POSTGIS_SPHERE_RADIUS_M * math.acos(max(-1.0, min(1.0, cos_angle)))


def _vincenty_distance(a, b):
    """Inverse geodesic on the WGS84 ellipsoid, as PostGIS measures with ``use_spheroid``."""
    major = WGS84_MAJOR_AXIS_M
    f = WGS84_FLATTENING
    minor = (1 - f) * major
    lat1, lon1 = (math.radians(v) for v in _parse_point(a))
    lat2, lon2 = (math.radians(v) for v in _parse_point(b))
    u1 = math.atan((1 - f) * math.tan(lat1))
    u2 = math.atan((1 - f) * math.tan(lat2))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lon_diff = lon2 - lon1
    lam = lon_diff
    for _ in range(200):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sigma = math.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        if sin_sigma == 0:
            return 0.0
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos2_alpha = 1 - sin_alpha ** 2
        cos_2sm = cos_sigma - 2 * sin_u1 * sin_u2 / cos2_alpha if cos2_alpha else 0.0
        c = f / 16 * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))
        previous = lam
        lam = lon_diff + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos_2sm + c * cos_sigma * (-1 + 2 * cos_2sm ** 2))
        )
        if abs(lam - previous) < 1e-12:
            break

    u_sq = cos2_alpha * (major ** 2 - minor ** 2) / minor ** 2
    big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = big_b * sin_sigma * (
        cos_2sm + big_b / 4 * (
            cos_sigma * (-1 + 2 * cos_2sm ** 2)
            - big_b / 6 * cos_2sm * (-3 + 4 * sin_sigma ** 2) * (-3 + 4 * cos_2sm ** 2)
        )
    )
    return minor * big_a * (sigma - delta_sigma)


def _st_dwithin(a, b, radius, use_spheroid=True):
    measure = _vincenty_distance if use_spheroid else _st_distance_sphere
    return 1 if measure(a, b) <= radius else 0


def _register_spatial_functions(dbapi_connection, connection_record):
    dbapi_connection.create_function("ST_MakePoint", 2, _st_make_point)
    dbapi_connection.create_function("geography", 1, lambda point: point)
    dbapi_connection.create_function("ST_DistanceSphere", 2, _st_distance_sphere)
    # three arguments measure on the spheroid, as PostGIS does by default
    dbapi_connection.create_function("ST_DWithin", 3, _st_dwithin)
    dbapi_connection.create_function("ST_DWithin", 4, _st_dwithin)


async def _build_engine(path, spatial: bool):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    if spatial:
        event.listen(engine.sync_engine, "connect", _register_spatial_functions)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def _seed(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with factory() as session:
        session.add_all([make_poi(*row) for row in NYC_POIS])
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def spatial_engine(tmp_path):
    engine = await _build_engine(tmp_path / "spatial.db", spatial=True)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def plain_engine(tmp_path):
    engine = await _build_engine(tmp_path / "plain.db", spatial=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def spatial_sessions(spatial_engine):
    """Session factory over the seeded spatial database"""
    return await _seed(spatial_engine)


@pytest_asyncio.fixture
async def plain_sessions(plain_engine):
    """Session factory over the seeded database without spatial functions"""
    return await _seed(plain_engine)


@pytest_asyncio.fixture
async def spatial_db(spatial_sessions):
    async with spatial_sessions() as session:
        yield session


@pytest_asyncio.fixture
async def plain_db(plain_sessions):
    async with plain_sessions() as session:
        yield session


def _override_db(sessions):
    async def _get_db():
        async with sessions() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db


@pytest_asyncio.fixture
async def async_client(spatial_sessions):
    """Client for the app, backed by the spatial database"""
    _override_db(spatial_sessions)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def plain_client(plain_sessions):
    """Client for the app, backed by the database without spatial functions"""
    _override_db(plain_sessions)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def authenticated_headers():
    token = create_access_token("traveller-1", email="traveller@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def partner_headers(monkeypatch):
    monkeypatch.setattr(settings.security, "partner_api_keys", [PARTNER_API_KEY])
    return {"X-API-Key": PARTNER_API_KEY}


@pytest.fixture(autouse=True)
def clean_metrics():
    metrics.reset_metrics()
    yield
    metrics.reset_metrics()


@pytest.fixture
def db_session(request):
    """The session fixture named by an indirect parameter, resolved at setup"""
    return request.getfixturevalue(request.param)
