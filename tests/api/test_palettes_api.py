"""
Tests for palette routes.

Malformed input never yields a 4xx here: the engine degrades and reports
faults alongside a usable palette.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.deps import get_rules
from src.api.routes import palettes
from src.rules.models import Rules

# --- Test Setup ---


@pytest.fixture
def app(rules: Rules) -> FastAPI:
    """Test FastAPI app with palette routes."""
    app = FastAPI()
    app.include_router(palettes.router, prefix="/api/palettes")
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def generate(client: TestClient, **body: object) -> dict:
    response = client.post("/api/palettes/generate", json=body)
    assert response.status_code == 200
    return response.json()


# --- Generate ---


class TestGenerate:
    """POST /api/palettes/generate."""

    def test_defaults_from_rules(self, client: TestClient) -> None:
        data = generate(client, base_color="#3264c8")
        assert len(data["steps"]) == 9
        assert data["faults"] == []
        assert data["is_fallback"] is False

    def test_base_step_locked(self, client: TestClient) -> None:
        data = generate(client, base_color="#3264c8", num_steps=7)
        base = [s for s in data["steps"] if s["is_base_color"]]
        assert len(base) == 1
        assert base[0]["values"]["hex"] == "#3264c8"
        assert data["steps"][3]["is_base_color"] is True

    def test_step_shape(self, client: TestClient) -> None:
        step = generate(client, base_color="#3264c8", num_steps=3)["steps"][0]
        assert set(step) == {"id", "name", "values", "accessibility", "is_base_color"}
        assert set(step["accessibility"]) == {
            "contrast_with_white",
            "contrast_with_black",
            "wcag_aa_normal",
            "wcag_aa_large",
            "wcag_aaa",
            "readable_on",
        }

    def test_color_values_body(self, client: TestClient) -> None:
        base = {"oklch": "", "rgb": "rgb(50, 100, 200)", "hex": "#3264c8"}
        data = generate(client, base_color=base, num_steps=5)
        assert data["steps"][2]["values"]["hex"] == "#3264c8"

    def test_options_override_rules(self, client: TestClient) -> None:
        data = generate(
            client,
            base_color="#3264c8",
            num_steps=5,
            use_lightness=False,
            options={"chroma_preset": "increase", "lock_base_color": False},
        )
        assert len(data["steps"]) == 5
        assert data["is_fallback"] is False

    def test_invalid_base_color_falls_back(self, client: TestClient) -> None:
        data = generate(client, base_color="not-a-color", num_steps=5)
        assert data["is_fallback"] is True
        assert [f["code"] for f in data["faults"]] == ["invalid_base_color"]
        assert {s["values"]["hex"] for s in data["steps"]} == {"#808080"}

    def test_num_steps_clamped(self, client: TestClient) -> None:
        data = generate(client, base_color="#3264c8", num_steps=100)
        assert len(data["steps"]) == 25
        assert data["faults"][0]["code"] == "num_steps_clamped"

    def test_missing_base_color_is_rejected(self, client: TestClient) -> None:
        response = client.post("/api/palettes/generate", json={})
        assert response.status_code == 422


# --- Override / Regenerate ---


class TestOverride:
    """POST /api/palettes/override."""

    def test_override_replaces_one_step(self, client: TestClient) -> None:
        steps = generate(client, base_color="#3264c8", num_steps=5)["steps"]
        response = client.post(
            "/api/palettes/override", json={"steps": steps, "index": 0, "color": "#000000"}
        )
        assert response.status_code == 200
        new_steps = response.json()["steps"]
        assert new_steps[0]["values"]["hex"] == "#000000"
        assert new_steps[0]["id"] == steps[0]["id"]
        assert new_steps[1:] == steps[1:]

    def test_override_bad_index_reports_fault(self, client: TestClient) -> None:
        steps = generate(client, base_color="#3264c8", num_steps=3)["steps"]
        response = client.post(
            "/api/palettes/override", json={"steps": steps, "index": 9, "color": "#000000"}
        )
        data = response.json()
        assert data["steps"] == steps
        assert data["faults"][0]["code"] == "step_index_out_of_range"


class TestRegenerate:
    """POST /api/palettes/regenerate."""

    def test_regenerate_changes_step_count(self, client: TestClient) -> None:
        steps = generate(client, base_color="#3264c8", num_steps=5)["steps"]
        palette = {
            "id": "p1",
            "brand_id": "b1",
            "name": "Primary",
            "base_color": steps[2]["values"],
            "steps": steps,
        }
        response = client.post(
            "/api/palettes/regenerate",
            json={"palette": palette, "config": {"num_steps": 7}},
        )
        assert response.status_code == 200
        regenerated = response.json()["palette"]
        assert regenerated["id"] == "p1"
        assert len(regenerated["steps"]) == 7
        assert regenerated["steps"][3]["values"]["hex"] == "#3264c8"


# --- Swatch ---


class TestSwatch:
    def test_swatch_png(self, client: TestClient) -> None:
        response = client.post(
            "/api/palettes/swatch.png", json={"base_color": "#3264c8", "num_steps": 5}
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")
