"""
Tests for typography routes.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.deps import get_rules
from src.api.routes import typography
from src.rules.models import Rules

# --- Test Setup ---


@pytest.fixture
def app(rules: Rules) -> FastAPI:
    app = FastAPI()
    app.include_router(typography.router, prefix="/api/typography")
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestScale:
    """POST /api/typography/scale."""

    def test_default_scale(self, client: TestClient) -> None:
        response = client.post("/api/typography/scale", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["base_size"] == 16
        assert [v["size"] for v in data["values"]] == [10, 13, 16, 20, 25, 31, 39, 49, 61]
        assert data["values"][2] == {
            "label": "f0",
            "step": 0,
            "size": 16,
            "ratio": 1.0,
            "rem": 1.0,
        }

    def test_ratio_below_one_is_clamped(self, client: TestClient) -> None:
        data = client.post(
            "/api/typography/scale", json={"ratio": 0.5, "steps_up": 2, "steps_down": 0}
        ).json()
        sizes = [v["size"] for v in data["values"]]
        assert sizes == sorted(sizes)

    def test_huge_ratio_is_bounded(self, client: TestClient) -> None:
        response = client.post(
            "/api/typography/scale", json={"ratio": 1e20, "steps_up": 24, "steps_down": 0}
        )
        assert response.status_code == 200
        sizes = [v["size"] for v in response.json()["values"]]
        assert sizes[1] == 160
        assert max(sizes) == 100_000

    def test_specimen_png(self, client: TestClient) -> None:
        response = client.post("/api/typography/scale.png", json={"steps_up": 3})
        assert response.status_code == 200
        assert response.content.startswith(b"\x89PNG")


class TestDistance:
    def test_reference_conditions(self, client: TestClient) -> None:
        response = client.post("/api/typography/distance", json={})
        assert response.json() == {"pixel_size": 7}

    def test_outdoor_sign(self, client: TestClient) -> None:
        body = {
            "viewing_distance": 300,
            "text_type": "isolated",
            "lighting": "moderate",
            "ppi": 72,
        }
        assert client.post("/api/typography/distance", json=body).json()["pixel_size"] == 58

    def test_unknown_lighting_rejected(self, client: TestClient) -> None:
        response = client.post("/api/typography/distance", json={"lighting": "dim"})
        assert response.status_code == 422


class TestPresets:
    def test_ratios(self, client: TestClient) -> None:
        data = client.get("/api/typography/ratios").json()
        assert len(data) == 8
        assert {"name": "Golden Ratio", "ratio": 1.618} in data

    def test_platforms(self, client: TestClient) -> None:
        data = client.get("/api/typography/platforms").json()
        ids = {p["id"]: p["scale_method"] for p in data}
        assert ids["web"] == "modular"
        assert ids["outdoor"] == "distance"

    def test_distance_platform_scale(self, client: TestClient) -> None:
        response = client.get("/api/typography/platforms/outdoor/scale")
        assert response.status_code == 200
        data = response.json()
        assert data["base_size"] == 58
        body = next(s for s in data["styles"] if s["style"]["name"] == "Body")
        assert body["size"] == 58

    def test_unknown_platform(self, client: TestClient) -> None:
        response = client.get("/api/typography/platforms/watch/scale")
        assert response.status_code == 404
