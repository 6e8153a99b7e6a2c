from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from homevisit.api.dependencies import get_distance, get_store
from homevisit.config import settings
from homevisit.main import create_app
from homevisit.persistence.service_areas import row_to_area
from homevisit.services.service_areas import InMemoryServiceAreaStore
from homevisit.services.travel.distance import HaversineDistanceSource

TENANT = "salon-1"
BASE = f"/api/tenants/{TENANT}"


def _circle_payload(**overrides) -> dict:
    payload = {
        "name": "Central Jakarta",
        "boundaries": {"type": "circle", "center": {"lat": -6.2, "lng": 106.816}, "radius": 5},
        "base_travel_surcharge": 20000,
        "per_km_surcharge": 1000,
        "max_travel_distance_km": 10,
        "estimated_travel_time_minutes": 30,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> InMemoryServiceAreaStore:
    return InMemoryServiceAreaStore()


@pytest.fixture
def api_client(store: InMemoryServiceAreaStore) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_distance] = lambda: HaversineDistanceSource(average_speed_kmh=40.0)
    return TestClient(app)


def _create(api_client: TestClient, **overrides) -> dict:
    response = api_client.post(f"{BASE}/service-areas", json=_circle_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "running"


def test_osrm_health_when_unconfigured(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "osrm_base_url", None)

    body = api_client.get("/api/health/osrm").json()

    assert body["configured"] is False
    assert body["healthy"] is False


def test_service_area_lifecycle(api_client: TestClient):
    created = _create(api_client)
    area_url = f"{BASE}/service-areas/{created['id']}"

    assert created["tenant_id"] == TENANT
    assert created["boundaries"]["type"] == "circle"
    assert api_client.get(area_url).json()["name"] == "Central Jakarta"
    assert [a["id"] for a in api_client.get(f"{BASE}/service-areas").json()] == [created["id"]]

    patched = api_client.patch(area_url, json={"name": "Central", "is_active": False})
    assert patched.status_code == 200
    assert patched.json()["name"] == "Central"
    assert patched.json()["boundaries"] == created["boundaries"]
    assert api_client.get(f"{BASE}/service-areas").json() == []
    assert len(api_client.get(f"{BASE}/service-areas", params={"include_inactive": True}).json()) == 1

    assert api_client.delete(area_url).status_code == 204
    assert api_client.get(area_url).status_code == 404


def test_areas_are_isolated_by_tenant(api_client: TestClient):
    created = _create(api_client)

    response = api_client.get(f"/api/tenants/other/service-areas/{created['id']}")

    assert response.status_code == 404


@pytest.mark.parametrize(
    "boundaries",
    [
        {"type": "polygon", "coordinates": [{"lat": 0, "lng": 0}, {"lat": 1, "lng": 1}]},
        {
            "type": "polygon",
            "coordinates": [
                {"lat": 0, "lng": 0},
                {"lat": 2, "lng": 2},
                {"lat": 0, "lng": 2},
                {"lat": 3, "lng": 0},
            ],
        },
        {"type": "circle", "center": {"lat": 95, "lng": 0}, "radius": 5},
        {"type": "circle", "center": {"lat": 0, "lng": 0}, "radius": 0},
    ],
)
def test_invalid_boundaries_are_rejected(api_client: TestClient, store, boundaries):
    response = api_client.post(f"{BASE}/service-areas", json=_circle_payload(boundaries=boundaries))

    assert response.status_code == 400
    assert store.list_areas(TENANT, include_inactive=True) == []


def test_invalid_boundary_on_update_is_rejected(api_client: TestClient):
    created = _create(api_client)

    response = api_client.patch(
        f"{BASE}/service-areas/{created['id']}",
        json={"boundaries": {"type": "circle", "center": {"lat": 0, "lng": 0}, "radius": -1}},
    )

    assert response.status_code == 400


def test_unknown_boundary_type_fails_request_validation(api_client: TestClient):
    response = api_client.post(
        f"{BASE}/service-areas",
        json=_circle_payload(boundaries={"type": "hexagon", "coordinates": []}),
    )

    assert response.status_code == 422


def test_update_missing_area_is_404(api_client: TestClient):
    assert api_client.patch(f"{BASE}/service-areas/nope", json={"name": "x"}).status_code == 404


def test_delete_referenced_area_conflicts(api_client: TestClient, store):
    created = _create(api_client)
    store.referenced_area_ids.add(created["id"])

    response = api_client.delete(f"{BASE}/service-areas/{created['id']}")

    assert response.status_code == 409


def test_match_endpoint(api_client: TestClient):
    created = _create(api_client)

    inside = api_client.post(f"{BASE}/service-areas/match", json={"point": {"lat": -6.195, "lng": 106.817}})
    outside = api_client.post(f"{BASE}/service-areas/match", json={"point": {"lat": -7.25, "lng": 112.75}})
    invalid = api_client.post(f"{BASE}/service-areas/match", json={"point": {"lat": 95, "lng": 0}})

    assert [a["id"] for a in inside.json()["areas"]] == [created["id"]]
    assert outside.json()["areas"] == []
    assert invalid.status_code == 400


def test_surcharge_with_known_distance(api_client: TestClient):
    created = _create(api_client)

    response = api_client.post(
        f"{BASE}/travel/surcharge",
        json={"destination": {"lat": -6.195, "lng": 106.817}, "distance_km": 5.0},
    )

    body = response.json()
    assert response.status_code == 200
    assert Decimal(str(body["surcharge"])) == Decimal("25000")
    assert body["matched_service_area_id"] == created["id"]
    assert body["is_within_service_area"] is True
    assert body["status"] == "within_area"
    assert body["is_estimate"] is False


def test_surcharge_beyond_max_distance(api_client: TestClient):
    created = _create(api_client)

    body = api_client.post(
        f"{BASE}/travel/surcharge",
        json={"destination": {"lat": -6.195, "lng": 106.817}, "distance_km": 15.0},
    ).json()

    assert body["is_within_service_area"] is False
    assert body["status"] == "outside_max_distance"
    assert body["matched_service_area_id"] == created["id"]


def test_surcharge_measures_distance_from_origin(api_client: TestClient):
    _create(api_client)

    body = api_client.post(
        f"{BASE}/travel/surcharge",
        json={"destination": {"lat": -6.195, "lng": 106.817}, "origin": {"lat": -6.2, "lng": 106.816}},
    ).json()

    assert body["is_estimate"] is True
    assert 0.5 < body["distance_km"] < 0.6


def test_surcharge_outside_every_zone(api_client: TestClient):
    _create(api_client)

    body = api_client.post(
        f"{BASE}/travel/surcharge",
        json={"destination": {"lat": -7.25, "lng": 112.75}, "distance_km": 3},
    ).json()

    assert Decimal(str(body["surcharge"])) == Decimal("0")
    assert body["is_within_service_area"] is False
    assert body["matched_service_area_id"] is None
    assert body["status"] == "no_matching_zone"


def test_optimize_route(api_client: TestClient):
    _create(api_client, base_travel_surcharge=10000, per_km_surcharge=0)
    request = {
        "start_location": {"lat": -6.2, "lng": 106.816},
        "reference_time": "2026-03-02T08:00:00Z",
        "stops": [
            {
                "booking_id": "B",
                "coordinates": {"lat": -6.25, "lng": 106.8},
                "service_duration_minutes": 45,
                "scheduled_at": "2026-03-02T10:00:00Z",
            },
            {
                "booking_id": "A",
                "address": "Jl. Thamrin",
                "coordinates": {"lat": -6.195, "lng": 106.817},
                "service_duration_minutes": 30,
                "scheduled_at": "2026-03-02T09:00:00Z",
            },
        ],
    }

    response = api_client.post(f"{BASE}/routes/optimize", json=request)

    body = response.json()
    assert response.status_code == 200, response.text
    assert [step["booking_id"] for step in body["optimized_route"]] == ["A", "B"]
    assert [step["order"] for step in body["optimized_route"]] == [0, 1]
    # B sits outside the 5 km zone, so only A is priced.
    assert Decimal(str(body["total_surcharge"])) == Decimal("10000")


def test_optimize_route_without_stops(api_client: TestClient):
    response = api_client.post(
        f"{BASE}/routes/optimize",
        json={"start_location": {"lat": -6.2, "lng": 106.816}, "stops": []},
    )

    assert response.status_code == 200
    assert response.json()["optimized_route"] == []


def test_optimize_route_rejects_bad_start(api_client: TestClient):
    response = api_client.post(
        f"{BASE}/routes/optimize",
        json={"start_location": {"lat": 120, "lng": 0}, "stops": []},
    )

    assert response.status_code == 400


class CorruptRowStore(InMemoryServiceAreaStore):
    """Store whose persisted boundary JSON cannot be decoded."""

    def get_area(self, tenant_id, area_id):
        return row_to_area({"id": area_id, "tenantId": tenant_id, "boundaries": {"type": "blob"}})


def test_unreadable_stored_boundary_is_a_bad_request():
    app = create_app()
    app.dependency_overrides[get_store] = lambda: CorruptRowStore()
    client = TestClient(app)
    area_url = f"{BASE}/service-areas/area-1"

    assert client.get(area_url).status_code == 400
    assert client.patch(area_url, json={"name": "Renamed"}).status_code == 400
    assert client.delete(area_url).status_code == 400
