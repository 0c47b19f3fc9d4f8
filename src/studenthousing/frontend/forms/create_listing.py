"""
Create Listing Form

UI-independent state and handlers behind the "Create Listing" page: address
autocomplete, suggestion selection, numeric coercion and submission.

Handlers may be called from worker threads. Address lookups are sequenced:
every input change takes a new request number and only the response to the
latest one may replace the suggestions, so a slow stale response can never
overwrite newer results.
"""
import math
import threading
from typing import Any, Dict, List, Mapping, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from config.settings import settings
from src.studenthousing.frontend.utils.api_client import APIClient, APIError
from src.studenthousing.frontend.utils.token_store import TokenStore
from src.studenthousing.services.geocoding import GeocodingClient, GeocodingError, Suggestion
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

FormValue = Union[str, int, float]

MISSING_USER_ERROR = "User information not available"
CREATE_FAILED_ERROR = "Failed to create listing"
NETWORK_FAILED_ERROR = "Failed to create listing. Please try again."

# field -> (label, whole number required)
NUMERIC_FIELDS = {
    "distance_from_univ": ("Distance from university", False),
    "rent": ("Monthly rent", True),
    "number_of_rooms": ("Number of bedrooms", True),
    "number_of_bathrooms": ("Number of bathrooms", False),
    "square_foot": ("Square footage", True),
    "latitude": ("Latitude", False),
    "longitude": ("Longitude", False),
}


class FormValidationError(ValueError):
    """A form value that cannot be sent to the API."""


class ListingFormData(BaseModel):
    """
    Raw form values, as typed (strings) or as adopted from a suggestion (floats).

    Immutable: use ``with_field`` / ``with_fields`` to derive updated copies.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    distance_from_univ: FormValue = ""
    rent: FormValue = ""
    description: str = ""
    number_of_rooms: FormValue = ""
    number_of_bathrooms: FormValue = ""
    square_foot: FormValue = ""
    address: str = ""
    latitude: FormValue = ""
    longitude: FormValue = ""

    def with_fields(self, **changes: Any) -> "ListingFormData":
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise KeyError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
        return self.model_copy(update=changes)

    def with_field(self, name: str, value: Any) -> "ListingFormData":
        return self.with_fields(**{name: value})


def coerce_number(field: str, value: FormValue) -> Union[int, float]:
    """
    Convert one numeric form value.

    Args:
        field: Form field name (key of NUMERIC_FIELDS)
        value: Raw value, string or number

    Returns:
        int for whole-number fields, float otherwise

    Raises:
        FormValidationError: If the value is empty, not a number, or not whole
    """
    label, whole = NUMERIC_FIELDS[field]

    if isinstance(value, bool):
        raise FormValidationError(f"{label} must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            raise FormValidationError(f"{label} is required")
        try:
            number = float(text)
        except ValueError:
            raise FormValidationError(f"{label} must be a number")

    if not math.isfinite(number):
        raise FormValidationError(f"{label} must be a number")

    if whole:
        if not number.is_integer():
            raise FormValidationError(f"{label} must be a whole number")
        return int(number)
    return number


def build_listing_payload(form_data: ListingFormData) -> Dict[str, Any]:
    """
    Build the JSON body for the listing-creation request.

    Numeric fields are coerced; description and address are sent as typed.

    Args:
        form_data: Current form values

    Returns:
        camelCase request body
    """
    values = {field: coerce_number(field, getattr(form_data, field)) for field in NUMERIC_FIELDS}
    return {
        "distanceFromUniv": values["distance_from_univ"],
        "rent": values["rent"],
        "numberOfRooms": values["number_of_rooms"],
        "numberOfBathrooms": values["number_of_bathrooms"],
        "squareFoot": values["square_foot"],
        "description": form_data.description,
        "address": form_data.address,
        "latitude": values["latitude"],
        "longitude": values["longitude"],
    }


class CreateListingForm:
    """State and event handlers for the listing-creation form."""

    def __init__(
        self,
        api_client: Optional[APIClient] = None,
        geocoder: Optional[GeocodingClient] = None,
        token_store: Optional[TokenStore] = None,
        overview_path: Optional[str] = None,
        min_query_length: Optional[int] = None,
    ):
        """
        Args:
            api_client: Backend client
            geocoder: Address suggestion client
            token_store: Persisted storage holding the access token
            overview_path: Navigation target after a successful submit
            min_query_length: Shortest query that triggers a lookup
        """
        self.api_client = api_client or APIClient()
        self.geocoder = geocoder or GeocodingClient()
        self.token_store = token_store or TokenStore()
        self.overview_path = overview_path or settings.listings_overview_path
        self.min_query_length = min_query_length or settings.geocoding_min_query_length

        self.query = ""
        self.form_data = ListingFormData()
        self.suggestions: List[Suggestion] = []
        self.error = ""
        self.navigate_to: Optional[str] = None

        self._lookup_seq = 0
        self._lock = threading.Lock()

    def set_field(self, name: str, value: FormValue) -> None:
        """
        Update one form field.

        Args:
            name: snake_case field name
            value: New raw value
        """
        with self._lock:
            self.form_data = self.form_data.with_field(name, value)

    def on_address_change(self, value: str) -> None:
        """
        Handle a change of the address input.

        The raw text becomes both the query and the address. Queries shorter
        than ``min_query_length`` clear the suggestions without a lookup;
        lookup failures are logged and also clear them.

        Args:
            value: Current address input text
        """
        with self._lock:
            self._lookup_seq += 1
            seq = self._lookup_seq
            self.query = value
            self.form_data = self.form_data.with_field("address", value)
            if len(value) < self.min_query_length:
                self.suggestions = []
                return

        try:
            results = self.geocoder.search(value)
        except GeocodingError as e:
            logger.error("address_suggestions_failed", query=value, error=str(e))
            results = []

        with self._lock:
            if seq != self._lookup_seq:
                logger.debug("stale_address_suggestions_dropped", query=value, seq=seq, latest=self._lookup_seq)
                return
            self.suggestions = results

    def on_suggestion_select(self, suggestion: Union[Suggestion, Mapping[str, Any]]) -> bool:
        """
        Adopt a suggestion's address and coordinates.

        A suggestion without usable coordinates is ignored and the form is
        left unchanged.

        Args:
            suggestion: Selected suggestion

        Returns:
            True if the suggestion was adopted
        """
        if not isinstance(suggestion, Suggestion):
            try:
                suggestion = Suggestion.model_validate(suggestion)
            except ValidationError as e:
                logger.warning("invalid_address_suggestion_ignored", error=str(e))
                return False

        with self._lock:
            # Pending lookups must not bring the list back after a selection.
            self._lookup_seq += 1
            self.query = suggestion.display_name
            self.form_data = self.form_data.with_fields(
                address=suggestion.display_name,
                latitude=float(suggestion.lat),
                longitude=float(suggestion.lon),
            )
            self.suggestions = []
        return True

    def submit(self, user: Optional[Mapping[str, Any]]) -> bool:
        """
        Submit the form as ``user``.

        On success ``navigate_to`` is set to the listings overview. On failure
        ``error`` holds the message to show and the form values are kept.

        Args:
            user: Authenticated user (needs a non-empty "username")

        Returns:
            True if the listing was created
        """
        with self._lock:
            self.error = ""
            self.navigate_to = None
            form_data = self.form_data

        username = user.get("username") if user else None
        if not username:
            return self._finish(error=MISSING_USER_ERROR)

        try:
            payload = build_listing_payload(form_data)
        except FormValidationError as e:
            return self._finish(error=str(e))

        logger.info("creating_listing", username=username, address=payload["address"])
        token = self.token_store.get()

        try:
            self.api_client.create_listing(username, payload, token)
        except APIError as e:
            logger.error("create_listing_failed", username=username, status_code=e.status_code, error=e.message)
            return self._finish(error=e.message or CREATE_FAILED_ERROR)
        except requests.RequestException as e:
            logger.error("create_listing_failed", username=username, error=str(e))
            return self._finish(error=NETWORK_FAILED_ERROR)

        logger.info("listing_created", username=username)
        return self._finish(navigate_to=self.overview_path)

    def _finish(self, error: str = "", navigate_to: Optional[str] = None) -> bool:
        with self._lock:
            self.error = error
            self.navigate_to = navigate_to
        return navigate_to is not None
