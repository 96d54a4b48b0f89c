"""Tests for the detection API routes."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from traffic_source_941 import setup_detection
from traffic_source_941.rules import BRAND_PATTERNS, CLICK_ID_DEFINITIONS


@pytest.fixture
def client():
    """Create a test app with the detection router mounted."""
    app = FastAPI()
    detection = setup_detection()
    app.include_router(detection.router, prefix="/api/source")
    return TestClient(app)


class TestDetectEndpoints:
    """Test GET and POST /detect."""

    def test_get_detect(self, client):
        response = client.get(
            "/api/source/detect",
            params={"url": "https://example.com/?utm_source=google&utm_medium=cpc&gclid=abc123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "google"
        assert data["is_paid"] is True
        assert data["confidence_level"] == "high"
        assert data["detected_click_ids"][0]["param"] == "gclid"

    def test_get_without_params(self, client):
        response = client.get("/api/source/detect")
        assert response.status_code == 200
        data = response.json()
        assert data["confidence"] == 0
        assert data["matched_brand"] is None

    def test_get_override(self, client):
        response = client.get(
            "/api/source/detect",
            params={"url": "https://example.com/?utm_source=foo", "utm_source": "bar"},
        )
        assert response.json()["source"] == "bar"

    def test_get_bad_url_still_succeeds(self, client):
        response = client.get("/api/source/detect", params={"url": "https://exa mple.com"})
        assert response.status_code == 200
        assert response.json()["confidence"] == 0

    def test_post_detect(self, client):
        response = client.post("/api/source/detect", json={"url": "facebook.com"})
        assert response.status_code == 200
        data = response.json()
        assert data["matched_brand"]["name"] == "facebook"
        assert data["signals"][0]["type"] == "domain"

    def test_post_blank_override_clears(self, client):
        response = client.post(
            "/api/source/detect",
            json={
                "url": "https://example.com/?utm_source=google&utm_medium=email",
                "utm": {"utm_source": ""},
            },
        )
        data = response.json()
        assert data["raw_utm_params"] == {"utm_medium": "email"}
        assert data["recommendation"] == "Unknown Source (Email)"

    def test_post_invalid_body(self, client):
        response = client.post("/api/source/detect", json={"url": ["not", "a", "string"]})
        assert response.status_code == 422


class TestRuleEndpoints:
    """Test rule introspection routes."""

    def test_list_brands(self, client):
        response = client.get("/api/source/rules/brands")
        assert response.status_code == 200
        names = [b["name"] for b in response.json()]
        assert names == [b.name for b in BRAND_PATTERNS]

    def test_list_click_ids(self, client):
        response = client.get("/api/source/rules/click-ids")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == len(CLICK_ID_DEFINITIONS)
        assert data[0] == {
            "param": "gclid",
            "platform": "google",
            "display_name": "Google Ads",
            "confidence": 95,
            "is_paid": True,
        }
