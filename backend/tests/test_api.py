"""Tests for FastAPI endpoints."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from config import Settings
import main
from main import app, get_pipeline, get_settings
from models import Coordinate, RawCandidate
from pipeline import DiscoveryPipeline
from proxy_chain import ProxyChainExhausted

client = TestClient(app)


class StubFetcher:
    def __init__(self, candidates=None, exhausted=False):
        self.candidates = candidates or []
        self.exhausted = exhausted
        self.radii = []

    async def fetch_raw(self, coord, radius_m=None):
        self.radii.append(radius_m)
        if self.exhausted:
            raise ProxyChainExhausted([])
        return self.candidates


CHARMINAR = RawCandidate(
    id="ChIJcharminar",
    display_name="Charminar",
    type_tags=("tourist_attraction",),
    location=Coordinate(latitude=17.3616, longitude=78.4747),
    formatted_address="Charminar Rd, Hyderabad",
    rating=4.5,
)


def use_pipeline(fetcher=None, api_key="test-key"):
    pipeline = DiscoveryPipeline(Settings(api_key=api_key), fetcher=fetcher or StubFetcher())
    app.dependency_overrides[get_pipeline] = lambda: pipeline


def teardown_function():
    app.dependency_overrides.clear()


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_places_from_provider():
    use_pipeline(StubFetcher([CHARMINAR]))
    resp = client.get("/places?lat=17.385&lon=78.4867")
    assert resp.status_code == 200
    data = resp.json()
    assert data["count"] == 1
    assert data["source"] == "provider"
    place = data["places"][0]
    assert place["name"] == "Charminar"
    assert place["category"] == "heritage"
    assert "distanceLabel" in place
    assert "imageUrl" in place
    assert place["metadata"] == {
        "rating": 4.5,
        "typeTags": ["tourist_attraction"],
        "formattedAddress": "Charminar Rd, Hyderabad",
    }


def test_places_fallback_when_exhausted():
    use_pipeline(StubFetcher(exhausted=True))
    resp = client.get("/places?lat=17.385&lon=78.4867")
    assert resp.status_code == 200
    data = resp.json()
    assert data["source"] == "fallback"
    assert data["count"] == 5


def test_places_without_key_is_fallback():
    use_pipeline(api_key="")
    data = client.get("/places?lat=17.385&lon=78.4867").json()
    assert data["source"] == "fallback"
    assert data["count"] == 5


def test_places_requires_coordinates():
    use_pipeline()
    assert client.get("/places?lat=17.385").status_code == 422


def test_historic_post_passes_radius():
    fetcher = StubFetcher([CHARMINAR])
    use_pipeline(fetcher)
    resp = client.post("/api/places/historic", json={"latitude": 17.385, "longitude": 78.4867, "radius": 5000})
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == ["ChIJcharminar"]
    assert fetcher.radii == [5000]


def test_demo_places():
    resp = client.get("/places/demo?lat=0&lon=0")
    assert resp.status_code == 200
    assert len(resp.json()) == 5


def test_config_hides_key():
    app.dependency_overrides[get_settings] = lambda: Settings(api_key="super-secret")
    resp = client.get("/config")
    assert resp.status_code == 200
    data = resp.json()
    assert data["api_key_configured"] is True
    assert data["search_radius_m"] == 50000
    assert "super-secret" not in resp.text


def test_unknown_access_path_fails_at_startup(monkeypatch):
    monkeypatch.setattr(main, "get_settings", lambda: Settings(access_paths=("direct", "nope")))

    async def start():
        async with main.lifespan(app):
            pass

    with pytest.raises(ValueError):
        asyncio.run(start())


def test_known_access_paths_start_cleanly(monkeypatch):
    monkeypatch.setattr(main, "get_settings", lambda: Settings(access_paths=("direct", "allorigins")))

    async def start():
        async with main.lifespan(app):
            return True

    assert asyncio.run(start()) is True
