"""
Unit tests for the frontend API client
"""
import pytest
import requests
from unittest.mock import Mock, MagicMock

from src.studenthousing.frontend.utils.api_client import APIClient, APIError, DEFAULT_ERROR_MESSAGE


def make_response(status_code=200, payload=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = ValueError("no JSON")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    api = APIClient(base_url="http://api.test/", timeout=3)
    api.session = MagicMock()
    return api


class TestAPIClient:
    """Tests for APIClient class"""

    def test_base_url_strips_trailing_slash(self, client):
        assert client.base_url == "http://api.test"

    def test_create_listing_request(self, client):
        """Test method, URL, bearer header and JSON body"""
        listing = {"rent": 1200, "address": "123 Main St"}
        client.session.request.return_value = make_response(201, listing)

        result = client.create_listing("alice", listing, "jwt-token")

        assert result == listing
        client.session.request.assert_called_once_with(
            "POST",
            "http://api.test/api/listers/listers/alice/listings",
            headers={"Authorization": "Bearer jwt-token"},
            timeout=3,
            json=listing,
        )

    def test_no_authorization_header_without_token(self, client):
        client.session.request.return_value = make_response(201, {})

        client.create_listing("alice", {}, None)

        assert client.session.request.call_args.kwargs["headers"] == {}

    def test_error_uses_server_message(self, client):
        client.session.request.return_value = make_response(
            403, {"message": "Not allowed to modify another lister's data"}
        )

        with pytest.raises(APIError) as exc_info:
            client.create_listing("bob", {}, "jwt-token")

        assert exc_info.value.message == "Not allowed to modify another lister's data"
        assert exc_info.value.status_code == 403

    def test_error_default_message(self, client):
        """Test fallback when the error body has no message"""
        client.session.request.return_value = make_response(500, json_error=True)

        with pytest.raises(APIError) as exc_info:
            client.create_listing("alice", {}, "jwt-token")

        assert exc_info.value.message == "Failed to create listing"

    def test_generic_default_message(self, client):
        client.session.request.return_value = make_response(502, {"detail": "bad gateway"})

        with pytest.raises(APIError) as exc_info:
            client.get_lister("alice")

        assert exc_info.value.message == DEFAULT_ERROR_MESSAGE

    def test_network_errors_propagate(self, client):
        client.session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(requests.ConnectionError):
            client.health_check()

    def test_login_posts_form(self, client):
        client.session.request.return_value = make_response(200, {"access_token": "abc", "token_type": "bearer"})

        token = client.login("alice", "secret")

        assert token == "abc"
        args, kwargs = client.session.request.call_args
        assert args == ("POST", "http://api.test/api/auth/token")
        assert kwargs["data"] == {"username": "alice", "password": "secret"}

    def test_list_listings_camel_params(self, client):
        """Test that only given filters are sent"""
        client.session.request.return_value = make_response(200, [])

        client.list_listings(max_rent=1500, max_distance=2.0)

        params = client.session.request.call_args.kwargs["params"]
        assert params == {"limit": 100, "offset": 0, "maxRent": 1500, "maxDistance": 2.0}

    def test_delete_listing(self, client):
        client.session.request.return_value = make_response(200, {"message": "Listing 1 removed"})

        client.delete_listing("alice", 1, "jwt-token")

        args, kwargs = client.session.request.call_args
        assert args == ("DELETE", "http://api.test/api/listers/listers/alice/listings/1")
        assert kwargs["headers"] == {"Authorization": "Bearer jwt-token"}
