"""
Integration tests for partner POI registration
"""
import pytest
from httpx import AsyncClient

from tests.factories import PARTNER_ID

NEW_PARTNER_ID = "a3d9e6f0-1c2b-4e8a-b7f5-0d9c8e7a6b54"


def poi_body(**overrides):
    body = {
        "name": "Flatiron Building",
        "description": "Triangular 1902 skyscraper at Madison Square.",
        "category": "landmark",
        "location": {"latitude": 40.7411, "longitude": -73.9897},
        "geofence_radius_meters": 120,
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
@pytest.mark.parametrize("category", ["landmark", "LANDMARK", " Landmark "])
async def test_create_poi(async_client: AsyncClient, partner_headers, category):
    response = await async_client.post(
        f"/v1/partner/{NEW_PARTNER_ID}/poi",
        json=poi_body(category=category),
        headers=partner_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"] == "LANDMARK"
    assert data["partner_id"] == NEW_PARTNER_ID
    assert (data["latitude"], data["longitude"]) == (40.7411, -73.9897)
    assert data["id"]


@pytest.mark.asyncio
async def test_created_poi_is_found_nearby(async_client: AsyncClient, partner_headers, authenticated_headers):
    await async_client.post(f"/v1/partner/{NEW_PARTNER_ID}/poi", json=poi_body(), headers=partner_headers)

    response = await async_client.get(
        "/v1/trip/0b7e8d52-5f0c-4f7e-8c1a-93d2b6a4e0f5/nearby-pois",
        params={"latitude": 40.7411, "longitude": -73.9897, "radius_meters": 50},
        headers=authenticated_headers,
    )

    assert response.status_code == 200
    assert [p["name"] for p in response.json()["data"]] == ["Flatiron Building"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"category": "museum"},
        {"name": "ab"},
        {"description": "short"},
        {"geofence_radius_meters": 0},
        {"location": {"latitude": 95, "longitude": 0}},
    ],
)
async def test_create_poi_rejects_invalid_body(async_client: AsyncClient, partner_headers, overrides):
    response = await async_client.post(
        f"/v1/partner/{NEW_PARTNER_ID}/poi",
        json=poi_body(**overrides),
        headers=partner_headers,
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"X-API-Key": "wrong-key"}])
async def test_partner_routes_require_api_key(async_client: AsyncClient, partner_headers, headers):
    response = await async_client.post(
        f"/v1/partner/{NEW_PARTNER_ID}/poi", json=poi_body(), headers=headers
    )

    assert response.status_code == 403
    assert response.json()["error_code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_list_partner_pois(async_client: AsyncClient, partner_headers):
    seeded = await async_client.get(f"/v1/partner/{PARTNER_ID}/pois", headers=partner_headers)
    empty = await async_client.get(f"/v1/partner/{NEW_PARTNER_ID}/pois", headers=partner_headers)

    assert seeded.status_code == 200
    assert len(seeded.json()["data"]) == 10
    assert empty.json()["data"] == []
