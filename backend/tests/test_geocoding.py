"""Tests for the geocoding collaborator and its resource."""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from travel_wishlist.main import app
from travel_wishlist.services.geocoding import GeocodeResult, GeocodingClient, GeocodingError, get_geocoder


class FakeGeocoder(GeocodingClient):
    def __init__(self, result: Optional[GeocodeResult] = None, error: bool = False):
        super().__init__()
        self.result = result
        self.error = error
        self.queries = []

    async def geocode(self, destination: str, country: str) -> Optional[GeocodeResult]:
        self.queries.append((destination, country))
        if self.error:
            raise GeocodingError("connection refused")
        return self.result


@pytest.fixture
def geocode_client():
    def _client(geocoder: GeocodingClient) -> TestClient:
        app.dependency_overrides[get_geocoder] = lambda: geocoder
        return TestClient(app)
    yield _client
    app.dependency_overrides.clear()


class TestParseResponse:
    def test_first_match_wins(self):
        result = GeocodingClient()._parse_response([
            {"lat": "35.6768601", "lon": "139.7638947", "display_name": "Tokyo, Japan"},
            {"lat": "1.0", "lon": "2.0", "display_name": "Elsewhere"},
        ])

        assert result.latitude == pytest.approx(35.6768601)
        assert result.longitude == pytest.approx(139.7638947)
        assert result.display_name == "Tokyo, Japan"

    def test_no_match(self):
        assert GeocodingClient()._parse_response([]) is None

    def test_error_object_instead_of_list(self):
        with pytest.raises(GeocodingError):
            GeocodingClient()._parse_response({"error": "Unable to geocode"})

    def test_place_without_coordinates(self):
        with pytest.raises(GeocodingError):
            GeocodingClient()._parse_response([{"display_name": "Tokyo, Japan"}])

    def test_non_numeric_coordinates(self):
        with pytest.raises(GeocodingError):
            GeocodingClient()._parse_response([{"lat": "north", "lon": "139.7", "display_name": "Tokyo"}])

    def test_place_that_is_not_an_object(self):
        with pytest.raises(GeocodingError):
            GeocodingClient()._parse_response(["Tokyo"])


class TestGeocodeResource:
    def test_match(self, geocode_client):
        geocoder = FakeGeocoder(GeocodeResult(latitude=48.8566, longitude=2.3522, display_name="Paris, France"))
        response = geocode_client(geocoder).get("/geocode", params={"destination": " Paris ", "country": "France"})

        assert response.status_code == 200
        assert response.json()["display_name"] == "Paris, France"
        assert geocoder.queries == [("Paris", "France")]

    def test_no_match_is_404(self, geocode_client):
        response = geocode_client(FakeGeocoder()).get("/geocode", params={"destination": "Atlantis", "country": "Greece"})

        assert response.status_code == 404
        assert response.json()["error"] == "Location not found"

    def test_upstream_failure_is_502(self, geocode_client):
        response = geocode_client(FakeGeocoder(error=True)).get("/geocode", params={"destination": "Paris", "country": "France"})
        assert response.status_code == 502

    def test_malformed_upstream_body_is_502(self, geocode_client):
        class MalformedBodyGeocoder(GeocodingClient):
            async def geocode(self, destination, country):
                return self._parse_response([{"lat": "48.85"}])

        response = geocode_client(MalformedBodyGeocoder()).get("/geocode", params={"destination": "Paris", "country": "France"})

        assert response.status_code == 502
        assert "request_id" in response.json()

    def test_blank_parameters_are_400(self, geocode_client):
        geocoder = FakeGeocoder()
        response = geocode_client(geocoder).get("/geocode", params={"destination": "  ", "country": "France"})

        assert response.status_code == 400
        assert geocoder.queries == []

    def test_missing_parameters_are_400(self, geocode_client):
        response = geocode_client(FakeGeocoder()).get("/geocode", params={"destination": "Paris"})
        assert response.status_code == 400
