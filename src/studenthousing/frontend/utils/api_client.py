"""
API Client for Streamlit Frontend

Handles all HTTP requests to the FastAPI backend.
"""
import requests
from typing import Optional, List, Dict, Any

from config.settings import settings
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "Request failed"


class APIError(Exception):
    """Non-success response from the API, carrying the server's message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class APIClient:
    """Client for interacting with the Student Housing API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize API client.

        Args:
            base_url: Base URL for API endpoints (default from settings)
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.api_timeout_seconds
        self.session = requests.Session()

    def _request(
        self,
        method: str,
        endpoint: str,
        token: Optional[str] = None,
        default_error: str = DEFAULT_ERROR_MESSAGE,
        **kwargs,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            token: Bearer token for authenticated endpoints
            default_error: Message used when the server gives none
            **kwargs: Passed through to requests (params, json, data)

        Returns:
            Decoded JSON body

        Raises:
            APIError: If the response status is not a success
        """
        url = f"{self.base_url}{endpoint}"
        headers = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = default_error
            if isinstance(data, dict) and data.get("message"):
                message = data["message"]
            logger.warning(
                "api_request_failed",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                message=message,
            )
            raise APIError(message, status_code=response.status_code)

        return data

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self._request("GET", endpoint, params=params, **kwargs)

    def health_check(self) -> Dict[str, Any]:
        """
        Check API health.

        Returns:
            Health check response
        """
        return self._get("/health")

    def login(self, username: str, password: str) -> str:
        """
        Exchange credentials for an access token.

        Args:
            username: Lister username
            password: Lister password

        Returns:
            Bearer access token
        """
        data = self._request(
            "POST",
            "/api/auth/token",
            data={"username": username, "password": password},
            default_error="Sign in failed",
        )
        return data["access_token"]

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """
        Get the lister that owns a token.

        Args:
            token: Bearer access token

        Returns:
            Lister profile with listings
        """
        return self._get("/api/auth/me", token=token)

    def register_lister(self, lister: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register a new lister.

        Args:
            lister: Registration body (camelCase keys)

        Returns:
            Created lister
        """
        return self._request(
            "POST",
            "/api/listers/listers",
            json=lister,
            default_error="Failed to register",
        )

    def get_lister(self, username: str) -> Dict[str, Any]:
        """
        Get a lister's profile and listings.
        """
        return self._get(f"/api/listers/listers/{username}")

    def list_lister_listings(self, username: str) -> List[Dict[str, Any]]:
        """
        Get a lister's listings in display order.
        """
        return self._get(f"/api/listers/listers/{username}/listings")

    def list_listings(
        self,
        max_rent: Optional[float] = None,
        min_rooms: Optional[float] = None,
        max_distance: Optional[float] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Marketplace overview across all listers.

        Args:
            max_rent: Maximum monthly rent
            min_rooms: Minimum number of rooms
            max_distance: Maximum distance from the university (miles)
            limit: Number of results (max 1000)
            offset: Pagination offset

        Returns:
            Listings, each with listerUsername and index
        """
        params: Dict[str, Any] = {"limit": limit, "offset": offset}

        if max_rent is not None:
            params["maxRent"] = max_rent
        if min_rooms is not None:
            params["minRooms"] = min_rooms
        if max_distance is not None:
            params["maxDistance"] = max_distance

        return self._get("/api/listers/listings", params=params)

    def create_listing(self, username: str, listing: Dict[str, Any], token: Optional[str]) -> Dict[str, Any]:
        """
        Append a listing to a lister's listings.

        Args:
            username: Owning lister
            listing: Listing body with numeric fields already coerced
            token: Bearer access token

        Returns:
            Stored listing

        Raises:
            APIError: With the server's message, or "Failed to create listing"
        """
        return self._request(
            "POST",
            f"/api/listers/listers/{username}/listings",
            token=token,
            json=listing,
            default_error="Failed to create listing",
        )

    def replace_listing(
        self,
        username: str,
        index: int,
        listing: Dict[str, Any],
        token: Optional[str],
    ) -> Dict[str, Any]:
        """
        Replace the listing at ``index``.
        """
        return self._request(
            "PUT",
            f"/api/listers/listers/{username}/listings/{index}",
            token=token,
            json=listing,
            default_error="Failed to update listing",
        )

    def delete_listing(self, username: str, index: int, token: Optional[str]) -> Dict[str, Any]:
        """
        Remove the listing at ``index``.
        """
        return self._request(
            "DELETE",
            f"/api/listers/listers/{username}/listings/{index}",
            token=token,
            default_error="Failed to delete listing",
        )
