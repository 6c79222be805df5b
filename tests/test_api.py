"""
Tests for the HTTP layer: routing, JSON shape and error rendering.
"""

import pytest
from fastapi.testclient import TestClient

from pricing_api.config import ApplicationConfig, UpstreamConfig, PipelineConfig
from pricing_api.controllers import get_pricing_service
from pricing_api.exceptions import AuthenticationFailure
from pricing_api.main import create_app
from pricing_api.models import EnrichmentSkipped
from pricing_api.services import HistoricalPricingService, PriceDataService

from factories import FakePriceRepository, FakeLoadRepository, points_for_chunk, build_points, utc

NOW = utc(2024, 6, 15, 12)

config = ApplicationConfig(
    upstream=UpstreamConfig(api_key="test-key"),
    pipeline=PipelineConfig(inter_chunk_delay_seconds=0.0)
)
app = create_app(config)
client = TestClient(app)


def _service(respond):
    price_data = PriceDataService(
        config,
        FakePriceRepository(respond),
        FakeLoadRepository(EnrichmentSkipped("not configured")),
        sleep=lambda seconds: None
    )
    return HistoricalPricingService(
        config, price_data, clock=lambda: NOW, sleep=lambda seconds: None)


@pytest.fixture
def use_service():
    def install(respond):
        service = _service(respond)
        app.dependency_overrides[get_pricing_service] = lambda: service
        return service
    yield install
    app.dependency_overrides.clear()


class TestInfoEndpoints:

    def test_root(self):
        response = client.get("/api/")
        assert response.status_code == 200
        assert response.json()["message"] == "Pool Price Analytics API"

    def test_health_reports_key_presence(self):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "pool-price-analytics-api",
            "api_key_configured": True
        }

    def test_health_without_key(self):
        keyless = TestClient(create_app(ApplicationConfig(upstream=UpstreamConfig(api_key=None))))
        assert keyless.get("/api/health").json()["api_key_configured"] is False


class TestHistoricalPricingEndpoint:

    def test_custom_rows(self, use_service):
        use_service(lambda chunk: build_points([10, 20], start=utc(2024, 1, 1, 7)))
        response = client.post(
            "/api/historical-pricing",
            json={"timeframe": "custom", "startDate": "2024-01-01", "endDate": "2024-01-02"}
        )
        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 2
        assert set(rows[0]) == {"ts", "date", "hour", "price", "generation", "ail"}
        assert rows[0]["price"] == 10.0
        assert rows[0]["ail"] == 0.0

    def test_monthly_uses_camel_case(self, use_service):
        use_service(lambda chunk: build_points([40.0] * 48, start=utc(2024, 6, 14)))
        response = client.post("/api/historical-pricing", json={"timeframe": "monthly"})
        assert response.status_code == 200
        body = response.json()
        for key in ("statistics", "chartData", "peakHours", "hourlyPatterns", "distribution",
                    "predictions", "patterns", "rawHourlyData", "lastUpdated"):
            assert key in body
        assert "volatilityPercent" in body["statistics"]
        assert set(body["chartData"][0]) == {"date", "price"}
        assert set(body["predictions"][0]) == {"hourOffset", "hourOfDay", "predictedPrice", "confidence"}

    def test_historical_summary(self, use_service):
        use_service(points_for_chunk(hours=24))
        response = client.post(
            "/api/historical-pricing",
            json={"timeframe": "historical-10year", "uptimePercentage": 95}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["totalYears"] == 8
        assert body["realDataYears"] == 8
        assert body["uptimePercentage"] == 95
        assert body["historicalYears"][0]["isReal"] is True


class TestErrorResponses:

    def test_missing_custom_dates(self, use_service):
        use_service(points_for_chunk())
        response = client.post("/api/historical-pricing", json={"timeframe": "custom"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert "startDate" in response.json()["details"]

    def test_unknown_timeframe(self):
        response = client.post("/api/historical-pricing", json={"timeframe": "weekly"})
        assert response.status_code == 400
        assert set(response.json()) == {"error", "details"}

    def test_empty_range(self, use_service):
        use_service(lambda chunk: [])
        response = client.post(
            "/api/historical-pricing",
            json={"timeframe": "custom", "startDate": "2024-01-01", "endDate": "2024-01-02"}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "No historical data available"

    def test_upstream_authentication(self, use_service):
        def respond(chunk):
            raise AuthenticationFailure("Invalid or missing API subscription key.")

        use_service(respond)
        response = client.post("/api/historical-pricing", json={"timeframe": "monthly"})
        assert response.status_code == 502
        assert response.json() == {
            "error": "AESO API authentication failed",
            "details": "Invalid or missing API subscription key."
        }

    def test_missing_api_key(self):
        keyless = TestClient(create_app(ApplicationConfig(upstream=UpstreamConfig(api_key=None))))
        response = keyless.post("/api/historical-pricing", json={"timeframe": "monthly"})
        assert response.status_code == 500
        assert response.json()["error"] == "AESO API key configuration error"

    def test_unexpected_error_is_http_500(self, use_service):
        def respond(chunk):
            raise RuntimeError("boom")

        use_service(respond)
        response = client.post("/api/historical-pricing", json={"timeframe": "monthly"})
        assert response.status_code == 500
        assert "boom" in response.json()["detail"]
