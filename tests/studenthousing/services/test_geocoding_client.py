"""
Unit tests for geocoding module
"""
import pytest
import requests
from unittest.mock import Mock, MagicMock

from src.studenthousing.services.geocoding import GeocodingClient, GeocodingError, Suggestion


NOMINATIM_RESULT = {
    "place_id": 123456,
    "licence": "Data (c) OpenStreetMap contributors",
    "display_name": "123 Main St, Boston, MA 02115, USA",
    "lat": "42.3401",
    "lon": "-71.0892",
    "type": "house",
}


def make_client(payload=None, error=None):
    """Build a client whose session returns ``payload`` or raises ``error``."""
    client = GeocodingClient(search_url="https://geo.example.com/search", country_codes="US", timeout=5)

    mock_response = Mock()
    mock_response.raise_for_status.return_value = None
    mock_response.json.return_value = payload

    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = mock_response
    client.session = session
    return client


class TestGeocodingClient:
    """Tests for GeocodingClient class"""

    def test_client_initialization(self):
        """Test defaults come from settings"""
        client = GeocodingClient()

        assert client.search_url == "https://nominatim.openstreetmap.org/search"
        assert client.country_codes == "US"
        assert client.session.headers["User-Agent"]

    def test_search_sends_query_params(self):
        """Test the outgoing request"""
        client = make_client([NOMINATIM_RESULT])

        client.search("123 Main")

        client.session.get.assert_called_once_with(
            "https://geo.example.com/search",
            params={"format": "json", "q": "123 Main", "countrycodes": "US"},
            timeout=5,
        )

    def test_search_parses_suggestions(self):
        """Test that results keep order and string coordinates"""
        second = dict(NOMINATIM_RESULT, place_id=789, display_name="123 Main St, Cambridge, MA, USA")
        client = make_client([NOMINATIM_RESULT, second])

        suggestions = client.search("123 Main")

        assert [s.place_id for s in suggestions] == [123456, 789]
        assert isinstance(suggestions[0], Suggestion)
        assert suggestions[0].lat == "42.3401"
        assert suggestions[0].lon == "-71.0892"

    def test_search_empty_result(self):
        """Test no matches"""
        client = make_client([])

        assert client.search("zzzz") == []

    def test_network_error(self):
        """Test connection failures surface as GeocodingError"""
        client = make_client(error=requests.ConnectionError("unreachable"))

        with pytest.raises(GeocodingError):
            client.search("123 Main")

    def test_http_error(self):
        """Test non-success status"""
        client = make_client([])
        client.session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503")

        with pytest.raises(GeocodingError):
            client.search("123 Main")

    def test_invalid_json(self):
        """Test a body that is not JSON"""
        client = make_client()
        client.session.get.return_value.json.side_effect = ValueError("no JSON")

        with pytest.raises(GeocodingError):
            client.search("123 Main")

    def test_unexpected_payload_shape(self):
        """Test an object where a list is expected"""
        client = make_client({"error": "rate limited"})

        with pytest.raises(GeocodingError):
            client.search("123 Main")

    def test_malformed_suggestion(self):
        """Test a suggestion missing coordinates"""
        client = make_client([{"place_id": 1, "display_name": "Somewhere"}])

        with pytest.raises(GeocodingError):
            client.search("Somewhere")


class TestSuggestionCoordinates:
    """Tests for coordinate validation on suggestions"""

    @pytest.mark.parametrize("lat,lon", [("", ""), ("north", "-71.09"), ("42.34", "nan"), ("91", "-71.09"), ("42.34", "-181")])
    def test_unusable_coordinates_rejected(self, lat, lon):
        with pytest.raises(ValueError):
            Suggestion(place_id=1, display_name="Somewhere", lat=lat, lon=lon)

    def test_coordinates_kept_as_strings(self):
        suggestion = Suggestion(place_id=1, display_name="Somewhere", lat=" 42.34 ", lon=-71.09)

        assert suggestion.lat == "42.34"
        assert suggestion.lon == "-71.09"

    def test_blank_coordinates_fail_lookup(self):
        """Test that a result without coordinates is a failed lookup"""
        client = make_client([dict(NOMINATIM_RESULT, lat="", lon="")])

        with pytest.raises(GeocodingError):
            client.search("123 Main")
