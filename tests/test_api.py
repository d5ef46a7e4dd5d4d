from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies.services import get_owner_service, get_property_service
from app.errors import ErrorKind
from app.main import app
from app.schemas.common import ApiResponse
from app.schemas.owner import OwnerResponse
from app.schemas.property import PropertyResponse
from app.services.owners import to_response as owner_response
from app.services.properties import OWNER_NOT_FOUND, to_response as property_response
from conftest import make_owner, make_property


@pytest.fixture
def property_service():
    service = MagicMock()
    app.dependency_overrides[get_property_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_property_service, None)

@pytest.fixture
def owner_service():
    service = MagicMock()
    app.dependency_overrides[get_owner_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_owner_service, None)

def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_search_passes_filters_and_returns_envelope(property_service):
    owner = make_owner("Juan Pérez")
    data = [property_response(make_property("Casa Campestre", owner_id=owner.id), owner.name)]
    property_service.search = AsyncMock(return_value=ApiResponse[list[PropertyResponse]].paged(data, 5, 2, 2))

    async with client() as ac:
        response = await ac.get(
            "/api/v1/properties/search",
            params={"name": "casa", "minPrice": "100", "maxPrice": "200", "page": 2, "pageSize": 2},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["total"] == 5
    assert body["page"] == 2
    assert body["pageSize"] == 2
    assert body["data"][0]["ownerName"] == "Juan Pérez"
    assert body["data"][0]["idOwner"] == owner.id
    search = property_service.search.await_args.args[0]
    assert search.name == "casa"
    assert search.min_price == Decimal("100")
    assert search.max_price == Decimal("200")
    assert search.skip == 2

@pytest.mark.asyncio
async def test_search_rejects_invalid_page(property_service):
    property_service.search = AsyncMock()
    async with client() as ac:
        response = await ac.get("/api/v1/properties/search", params={"page": 0})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errorKind"] == "validation"
    property_service.search.assert_not_awaited()

@pytest.mark.asyncio
@pytest.mark.parametrize("bound", ["minPrice", "maxPrice"])
async def test_search_rejects_over_precise_price_bounds(property_service, bound):
    property_service.search = AsyncMock()
    async with client() as ac:
        response = await ac.get(
            "/api/v1/properties/search", params={bound: "0.12345678901234567890123456789012345678"}
        )

    assert response.status_code == 422
    assert response.json()["errorKind"] == "validation"
    property_service.search.assert_not_awaited()

@pytest.mark.asyncio
async def test_get_property_with_missing_owner(property_service):
    data = property_response(make_property(), None)
    property_service.get = AsyncMock(return_value=ApiResponse[PropertyResponse].ok(data))

    async with client() as ac:
        response = await ac.get(f"/api/v1/properties/{data.id}")

    assert response.status_code == 200
    assert response.json()["data"]["ownerName"] == OWNER_NOT_FOUND

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind,expected",
    [
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.VALIDATION, 400),
        (ErrorKind.CONFLICT, 409),
        (ErrorKind.INTERNAL, 500),
    ],
)
async def test_error_kind_maps_to_status(owner_service, kind, expected):
    owner_service.delete = AsyncMock(return_value=ApiResponse[bool].fail(kind, "nope"))

    async with client() as ac:
        response = await ac.delete("/api/v1/owners/6650b2f1c2a4e3b1d0f1a2b3")

    assert response.status_code == expected
    assert response.json()["errorKind"] == kind.value

@pytest.mark.asyncio
async def test_create_property_returns_201(property_service):
    owner = make_owner()
    data = property_response(make_property(owner_id=owner.id), owner.name)
    property_service.create = AsyncMock(return_value=ApiResponse[PropertyResponse].ok(data))

    async with client() as ac:
        response = await ac.post(
            "/api/v1/properties",
            json={"name": "Casa", "address": "Calle 1", "price": 150000, "idOwner": owner.id, "year": 2015},
        )

    assert response.status_code == 201
    payload = property_service.create.await_args.args[0]
    assert payload.id_owner == owner.id
    assert payload.price == Decimal("150000")

@pytest.mark.asyncio
async def test_create_property_with_unknown_owner_is_400(property_service):
    property_service.create = AsyncMock(
        return_value=ApiResponse[PropertyResponse].fail(ErrorKind.VALIDATION, "Referenced owner not found")
    )
    async with client() as ac:
        response = await ac.post(
            "/api/v1/properties",
            json={"name": "Casa", "address": "Calle 1", "price": 1, "idOwner": "6650b2f1c2a4e3b1d0f1a2b3"},
        )
    assert response.status_code == 400
    assert response.json()["success"] is False

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "", "address": "Calle 1", "price": 1, "idOwner": "x"},
        {"name": "Casa", "address": "Calle 1", "price": 0, "idOwner": "x"},
        {"name": "Casa", "address": "Calle 1", "price": 1, "idOwner": "x", "year": 1800},
        {"name": "Casa", "address": "Calle 1", "price": 1, "idOwner": "x", "image": "not a url"},
    ],
)
async def test_create_property_request_validation(property_service, body):
    property_service.create = AsyncMock()
    async with client() as ac:
        response = await ac.post("/api/v1/properties", json=body)
    assert response.status_code == 422
    property_service.create.assert_not_awaited()

@pytest.mark.asyncio
async def test_update_owner_partial_payload(owner_service):
    owner = make_owner()
    owner_service.update = AsyncMock(return_value=ApiResponse[OwnerResponse].ok(owner_response(owner)))

    async with client() as ac:
        response = await ac.put(f"/api/v1/owners/{owner.id}", json={"phone": "+57 300 999 9999"})

    assert response.status_code == 200
    payload = owner_service.update.await_args.args[1]
    assert payload.phone == "+57 300 999 9999"
    assert payload.name is None

@pytest.mark.asyncio
async def test_health():
    async with client() as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    assert response.json() == "ok"

@pytest.mark.asyncio
async def test_unconnected_store_returns_internal_envelope():
    async with client() as ac:
        response = await ac.get("/api/v1/owners")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["errorKind"] == "internal"
    assert body["message"] == "Database unavailable"

@pytest.mark.asyncio
async def test_database_health_reports_unavailable_when_unconnected():
    async with client() as ac:
        response = await ac.get("/health/db")
    assert response.status_code == 503
    assert response.json() == {"mongodb": "unavailable"}
