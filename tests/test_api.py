"""
API endpoint tests for FastAPI application.

CO-OPS is replaced with a fake client so the tests run offline.
"""

import pytest
from fastapi.testclient import TestClient

from app import main
from app.errors import UpstreamUnavailable
from app.tide_report import TideReportService
from tests.payloads import EMPTY_PAYLOAD, FakeCoopsClient


@pytest.fixture
def coops():
    """Fake CO-OPS client installed behind the app."""
    return FakeCoopsClient()


@pytest.fixture
def client(monkeypatch, coops):
    """Create a test client for the FastAPI app."""
    monkeypatch.setattr(main, "report_service", TideReportService(client=coops))
    return TestClient(main.app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_ok(self, client):
        """Health endpoint should return healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "upstream" in data

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestTidesEndpoint:
    """Tests for the /tides endpoint."""

    def test_tides_returns_report(self, client):
        """Latest prediction within 30 minutes of a high reads as high."""
        response = client.get("/tides?station=8453767&tz=America/New_York")
        assert response.status_code == 200
        data = response.json()
        assert data["current"] == {"time": "4:18 AM", "height": "4.6", "type": "high"}
        assert len(data["future"]) == 4

    def test_future_structure(self, client):
        """Future tides should be high/low in upstream order."""
        response = client.get("/tides", params={"station": "8453767", "tz": "America/New_York"})
        assert response.status_code == 200
        future = response.json()["future"]
        assert [tide["type"] for tide in future] == ["high", "low", "high", "low"]
        for tide in future:
            assert set(tide) == {"time", "height", "type"}
            assert tide["time"].endswith((" AM", " PM"))

    def test_single_prediction_near_high(self, client, coops):
        coops.latest = b'{"predictions": [{"t": "2025-01-02 09:10", "v": "4.415"}]}'
        response = client.get("/tides?station=8453767&tz=America/New_York")
        assert response.status_code == 200
        current = response.json()["current"]
        assert current["type"] == "high"
        assert current["height"] == "4.4"

    def test_defaults(self, client, coops):
        """Station and time zone are optional."""
        response = client.get("/tides")
        assert response.status_code == 200
        assert coops.calls[0] == ("latest", "8453767")
        assert response.json()["current"]["time"] == "4:18 AM"

    def test_other_time_zone(self, client):
        response = client.get("/tides", params={"station": "8453767", "tz": "Europe/London"})
        assert response.status_code == 200
        assert response.json()["current"]["time"] == "9:18 AM"

    def test_invalid_station(self, client, coops):
        response = client.get("/tides?station=abc123")
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "InvalidStation"
        assert "station" in data["detail"]
        assert coops.calls == []

    def test_empty_station(self, client):
        response = client.get("/tides?station=")
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidStation"

    def test_invalid_time_zone(self, client):
        response = client.get("/tides", params={"tz": "Mars/Phobos"})
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "InvalidTimeZone"
        assert "time zone" in data["detail"]

    def test_zone_database_folder_is_invalid(self, client, coops):
        response = client.get("/tides", params={"tz": "America"})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidTimeZone"
        assert coops.calls == []

    def test_no_latest_data(self, client, coops):
        coops.latest = EMPTY_PAYLOAD
        response = client.get("/tides?station=8453767")
        assert response.status_code == 404
        assert response.json()["error"] == "NoDataAvailable"

    def test_no_high_low_data(self, client, coops):
        coops.high_low = EMPTY_PAYLOAD
        response = client.get("/tides?station=8453767")
        assert response.status_code == 404
        assert response.json()["error"] == "NoDataAvailable"

    def test_upstream_unavailable(self, client, coops):
        coops.error = UpstreamUnavailable("CO-OPS request failed: timed out")
        response = client.get("/tides?station=8453767")
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "UpstreamUnavailable"
        assert "timed out" in data["detail"]
        assert "ref:" in data["detail"]

    def test_upstream_format_error(self, client, coops):
        coops.latest = b'{"predictions": [{"t": "yesterday", "v": "4.4"}]}'
        response = client.get("/tides?station=8453767")
        assert response.status_code == 500
        assert response.json()["error"] == "UpstreamFormatError"

    def test_out_of_range_year_is_format_error(self, client, coops):
        coops.latest = b'{"predictions": [{"t": "0000-01-02 09:10", "v": "4.4"}]}'
        response = client.get("/tides?station=8453767")
        assert response.status_code == 500
        assert response.json()["error"] == "UpstreamFormatError"

    def test_huge_height(self, client, coops):
        coops.latest = b'{"predictions": [{"t": "2025-01-02 09:18", "v": "1e30"}]}'
        response = client.get("/tides?station=8453767")
        assert response.status_code == 200
        assert response.json()["current"]["height"] == "1" + "0" * 30 + ".0"

    def test_unexpected_error(self, client, coops):
        coops.error = RuntimeError("boom")
        response = client.get("/tides?station=8453767")
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "InternalError"
        assert "Internal error" in data["detail"]
