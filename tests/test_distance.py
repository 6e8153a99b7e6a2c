import math

import httpx
import pytest

from homevisit.config import settings
from homevisit.errors import DistanceSourceUnavailable
from homevisit.models.domain import Coordinate, DistanceEstimate
from homevisit.services.travel import distance as distance_module
from homevisit.services.travel.distance import (
    FallbackDistanceSource,
    HaversineDistanceSource,
    OSRMDistanceSource,
    get_distance_source,
)
from homevisit.services.travel.osrm_client import OSRMClient

ORIGIN = Coordinate(-6.2000, 106.8160)
DESTINATION = Coordinate(-6.1950, 106.8170)


class DummyOSRM:
    def __init__(self, payload=None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.requests = []

    def route(self, coordinates):
        self.requests.append(list(coordinates))
        if self.error is not None:
            raise self.error
        return self.payload


def _client_with(handler, **kwargs) -> OSRMClient:
    client = OSRMClient(base_url="http://osrm.test/", backoff_seconds=0.0, **kwargs)
    client._get_client = lambda: httpx.Client(transport=httpx.MockTransport(handler))
    return client


def test_haversine_source_is_always_an_estimate():
    estimate = HaversineDistanceSource(average_speed_kmh=60.0).distance(
        Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)
    )

    assert estimate.is_estimate is True
    assert math.isclose(estimate.distance_km, 111.195, rel_tol=1e-3)
    assert math.isclose(estimate.duration_minutes, estimate.distance_km, rel_tol=1e-9)


def test_osrm_source_converts_units():
    osrm = DummyOSRM({"code": "Ok", "routes": [{"distance": 12500.0, "duration": 900.0}]})

    estimate = OSRMDistanceSource(osrm).distance(ORIGIN, DESTINATION)

    assert estimate == DistanceEstimate(distance_km=12.5, duration_minutes=15.0, is_estimate=False)
    assert osrm.requests == [[ORIGIN, DESTINATION]]


@pytest.mark.parametrize(
    "osrm",
    [
        DummyOSRM(error=ConnectionError("refused")),
        DummyOSRM(error=ValueError("NoRoute")),
        DummyOSRM({"code": "Ok", "routes": [{}]}),
    ],
)
def test_osrm_source_failures_are_reported_as_unavailable(osrm):
    with pytest.raises(DistanceSourceUnavailable):
        OSRMDistanceSource(osrm).distance(ORIGIN, DESTINATION)


def test_fallback_source_degrades_to_estimate():
    source = FallbackDistanceSource(
        OSRMDistanceSource(DummyOSRM(error=ConnectionError("down"))),
        HaversineDistanceSource(),
    )

    estimate = source.distance(ORIGIN, DESTINATION)

    assert estimate.is_estimate is True
    assert estimate.distance_km > 0


def test_fallback_source_prefers_primary():
    osrm = DummyOSRM({"code": "Ok", "routes": [{"distance": 2000.0, "duration": 240.0}]})
    source = FallbackDistanceSource(OSRMDistanceSource(osrm), HaversineDistanceSource())

    assert source.distance(ORIGIN, DESTINATION).distance_km == 2.0


def test_get_distance_source_without_osrm(monkeypatch):
    monkeypatch.setattr(settings, "osrm_base_url", None)
    assert isinstance(get_distance_source(), HaversineDistanceSource)


def test_get_distance_source_with_osrm():
    source = get_distance_source("http://osrm.test")

    assert isinstance(source, FallbackDistanceSource)
    assert isinstance(source.primary, distance_module.OSRMDistanceSource)
    assert source.primary.client.base_url == "http://osrm.test"


def test_osrm_client_requires_base_url(monkeypatch):
    monkeypatch.setattr(settings, "osrm_base_url", None)
    with pytest.raises(ValueError):
        OSRMClient()


def test_osrm_client_sends_lng_lat_pairs():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 1000, "duration": 60}]})

    data = _client_with(handler, profile="driving").route([ORIGIN, DESTINATION])

    assert data["routes"][0]["distance"] == 1000
    assert seen[0].url.path == "/route/v1/driving/106.816,-6.2;106.817,-6.195"
    assert seen[0].url.params["overview"] == "false"


def test_osrm_client_retries_server_errors():
    responses = [
        httpx.Response(503),
        httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 1, "duration": 1}]}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    data = _client_with(handler, max_retries=2).route([ORIGIN, DESTINATION])

    assert data["code"] == "Ok"
    assert responses == []


def test_osrm_client_gives_up_after_retries():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    client = _client_with(handler, max_retries=1)

    with pytest.raises(httpx.HTTPStatusError):
        client.route([ORIGIN, DESTINATION])
    with pytest.raises(DistanceSourceUnavailable):
        OSRMDistanceSource(client).distance(ORIGIN, DESTINATION)


def test_osrm_client_rejects_error_codes():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": "NoRoute", "message": "Impossible route"})

    with pytest.raises(ValueError, match="Impossible route"):
        _client_with(handler, max_retries=0).route([ORIGIN, DESTINATION])


def test_osrm_client_needs_two_points():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        _client_with(handler).route([ORIGIN])
