"""
Tests for the HTTP API

Verifies:
- Health endpoints
- Description parsing, estimates, market stats, comparables, PDF reports
- Every rejected request is a 400 with {"success": false, "errors": [...]}
- Request ids are echoed or assigned
"""

import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import ValuationPipeline
from core.market import MarketContextEngine
from core.valuation import ValuationCalculator
from utils.config import Config
from web.app import create_app


REFERENCE_DATE = date(2025, 6, 1)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def client(tmp_path):
    config = Config(openai_api_key=None, data_dir=str(tmp_path))
    pipeline = ValuationPipeline(
        calculator=ValuationCalculator(reference_date=REFERENCE_DATE),
        market=MarketContextEngine(reference_date=REFERENCE_DATE),
    )
    return TestClient(create_app(config, pipeline))


def _assert_rejected(response):
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"]


# =============================================================================
# Test: Health
# =============================================================================

class TestHealth:

    def test_root(self, client):
        assert client.get("/").json() == {"status": "ok"}

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["delegated_extraction"] is False

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-Id": "abc-123"})
        assert response.headers["X-Request-Id"] == "abc-123"

    def test_request_id_assigned(self, client):
        assert client.get("/health").headers.get("X-Request-Id")


# =============================================================================
# Test: Description Parsing
# =============================================================================

class TestParseDescription:

    def test_vehicle(self, client):
        response = client.post("/api/parse-description", json={
            "category": "vehicle",
            "description": "Porsche 911 Carrera S, Baujahr 2021, 22.000 km, unfallfrei",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["method"] == "rule-based"
        assert body["attributes"]["brand"] == "Porsche"
        assert body["attributes"]["mileage_km"] == 22000
        assert body["attributes"]["is_accident_free"] is True

    def test_missing_description(self, client):
        _assert_rejected(client.post("/api/parse-description", json={"category": "watch", "description": "  "}))

    def test_unknown_category(self, client):
        _assert_rejected(client.post("/api/parse-description", json={"category": "yacht", "description": "Sunseeker"}))


# =============================================================================
# Test: Estimates
# =============================================================================

class TestEstimate:

    def test_real_estate(self, client):
        response = client.post("/api/valuations/estimate", json={
            "category": "real_estate",
            "attributes": {"area_sqm": 120, "location_tier": 1},
            "location": "München",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["valuation"]["point_estimate"] == 1_500_000
        assert body["valuation"]["low"] == 1_320_000
        assert body["valuation"]["high"] == 1_680_000
        assert body["market"]["region"] == "München"
        assert body["market"]["seasonal"]["current_month"] == "Juni"
        assert len(body["comparables"]) == 5
        assert body["distribution"]["sample_size"] == 6

    def test_from_description(self, client):
        response = client.post("/api/valuations/estimate", json={
            "category": "watch",
            "description": "Rolex Submariner Date 116610LN aus 2018, Box und Papiere",
            "limit": 3,
        })
        body = response.json()
        assert body["valuation"]["point_estimate"] == 18000
        assert body["extraction_method"] == "rule-based"
        assert [c["id"] for c in body["comparables"]] == ["watch-1", "watch-3", "watch-5"]

    def test_real_estate_without_area(self, client):
        _assert_rejected(client.post("/api/valuations/estimate", json={
            "category": "real_estate", "attributes": {"location_tier": 1},
        }))

    def test_malformed_attribute(self, client):
        _assert_rejected(client.post("/api/valuations/estimate", json={
            "category": "vehicle", "attributes": {"mileage_km": "a lot"},
        }))

    def test_missing_category(self, client):
        _assert_rejected(client.post("/api/valuations/estimate", json={"attributes": {}}))

    def test_limit_out_of_range(self, client):
        _assert_rejected(client.post("/api/valuations/estimate", json={"category": "watch", "limit": 99}))

    def test_invalid_json_body(self, client):
        response = client.post(
            "/api/valuations/estimate",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        _assert_rejected(response)


# =============================================================================
# Test: Market Stats and Comparables
# =============================================================================

class TestMarketAndComparables:

    def test_market_stats(self, client):
        body = client.get("/api/market-stats", params={"category": "watch"}).json()
        assert body["success"] is True
        assert body["data"]["trend"]["percentage"] == 5.8
        assert body["data"]["trend"]["data_source"] == "estimated"
        assert body["data"]["price_stats"] is None

    def test_market_stats_requires_category(self, client):
        _assert_rejected(client.get("/api/market-stats"))

    def test_comparables(self, client):
        body = client.get("/api/comparables", params={"category": "watch", "estimate": 18000, "limit": 3}).json()
        assert [c["id"] for c in body["comparables"]] == ["watch-1", "watch-3", "watch-5"]
        assert body["distribution"]["percentile_of_estimate"] == 83

    def test_comparables_requires_estimate(self, client):
        _assert_rejected(client.get("/api/comparables", params={"category": "watch"}))

    def test_comparables_rejects_negative_estimate(self, client):
        _assert_rejected(client.get("/api/comparables", params={"category": "watch", "estimate": -1}))

    @pytest.mark.parametrize("estimate", ["inf", "-inf", "nan"])
    def test_comparables_rejects_non_finite_estimate(self, client, estimate):
        _assert_rejected(client.get("/api/comparables", params={"category": "watch", "estimate": estimate}))


# =============================================================================
# Test: PDF Report
# =============================================================================

class TestReport:

    def test_pdf_response(self, client):
        response = client.post("/api/valuations/report", json={
            "category": "vehicle",
            "attributes": {"brand": "Porsche", "year": 2021, "mileage_km": 22000},
            "report_date": "2025-06-01",
        })
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "assero-bewertung-vehicle.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_pdf_is_deterministic(self, client):
        payload = {
            "category": "watch",
            "attributes": {"brand": "Rolex", "brand_tier": 1},
            "report_date": "2025-06-01",
        }
        first = client.post("/api/valuations/report", json=payload).content
        second = client.post("/api/valuations/report", json=payload).content
        assert first == second

    def test_invalid_report_request(self, client):
        _assert_rejected(client.post("/api/valuations/report", json={"category": "watch", "report_date": "soon"}))
