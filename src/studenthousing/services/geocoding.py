"""
Address Geocoding Client

Fetches address suggestions from a Nominatim-compatible search endpoint for
the listing form's autocomplete.
"""
from typing import List, Optional

import math

import requests
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from config.settings import settings
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)


class GeocodingError(Exception):
    """Raised when a suggestion lookup fails (network, HTTP status or payload)."""


class Suggestion(BaseModel):
    """
    Candidate address returned by the geocoding service.

    Coordinates arrive as strings and are parsed when a suggestion is selected;
    values that do not parse as in-range finite numbers are rejected here.
    """
    model_config = ConfigDict(extra="allow")

    place_id: int | str
    display_name: str
    lat: str
    lon: str

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def check_coordinate(cls, value, info):
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError("coordinate must be a number")
        text = str(value).strip()
        try:
            number = float(text)
        except ValueError:
            raise ValueError(f"coordinate is not a number: {value!r}")
        limit = 90 if info.field_name == "lat" else 180
        if not math.isfinite(number) or abs(number) > limit:
            raise ValueError(f"coordinate out of range: {value!r}")
        return text


class GeocodingClient:
    """
    Client for the public address search endpoint.

    Every call is a single GET; results are restricted to the configured
    country codes.
    """

    def __init__(
        self,
        search_url: Optional[str] = None,
        country_codes: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the geocoding client.

        Args:
            search_url: Override the default search URL (for testing)
            country_codes: Comma-separated ISO country codes
            timeout: Request timeout in seconds
        """
        self.search_url = search_url or settings.geocoding_search_url
        self.country_codes = country_codes or settings.geocoding_country_codes
        self.timeout = timeout or settings.geocoding_timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": settings.geocoding_user_agent})
        logger.info("geocoding_client_initialized", search_url=self.search_url)

    def search(self, query: str) -> List[Suggestion]:
        """
        Look up address suggestions for free text.

        Args:
            query: Free-text address fragment

        Returns:
            Suggestions in the order the service ranked them

        Raises:
            GeocodingError: If the request or the response payload fails
        """
        params = {
            "format": "json",
            "q": query,
            "countrycodes": self.country_codes,
        }

        try:
            response = self.session.get(self.search_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise GeocodingError(f"Address lookup failed: {e}") from e
        except ValueError as e:
            raise GeocodingError(f"Address lookup returned invalid JSON: {e}") from e

        return self._parse_response(data)

    def _parse_response(self, data) -> List[Suggestion]:
        """
        Validate the JSON array returned by the service.

        Args:
            data: Decoded JSON payload

        Returns:
            List of Suggestion instances

        Raises:
            GeocodingError: If the payload is not a list of suggestions
        """
        if not isinstance(data, list):
            raise GeocodingError(f"Unexpected geocoding payload: {type(data).__name__}")

        try:
            suggestions = [Suggestion.model_validate(item) for item in data]
        except ValidationError as e:
            raise GeocodingError(f"Malformed geocoding suggestion: {e}") from e

        logger.debug("geocoding_suggestions_parsed", count=len(suggestions))
        return suggestions
