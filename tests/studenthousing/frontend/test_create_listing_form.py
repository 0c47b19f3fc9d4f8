"""
Tests for the Create Listing form

Address autocomplete, suggestion selection, numeric coercion and submission,
with the backend, geocoder and local storage mocked.
"""
import threading

import pytest
import requests
from unittest.mock import Mock

from src.studenthousing.frontend.forms.create_listing import (
    CREATE_FAILED_ERROR,
    MISSING_USER_ERROR,
    NETWORK_FAILED_ERROR,
    CreateListingForm,
    FormValidationError,
    ListingFormData,
    build_listing_payload,
    coerce_number,
)
from src.studenthousing.frontend.utils.api_client import APIClient, APIError
from src.studenthousing.frontend.utils.token_store import TokenStore
from src.studenthousing.services.geocoding import GeocodingClient, GeocodingError, Suggestion

ALICE = {"username": "alice", "name": "Alice Chen"}


def suggestion(name="123 Main St, Boston, MA, USA", lat="42.34", lon="-71.09", place_id=1):
    return Suggestion(place_id=place_id, display_name=name, lat=lat, lon=lon)


@pytest.fixture
def api_client():
    return Mock(spec=APIClient)


@pytest.fixture
def geocoder():
    mock = Mock(spec=GeocodingClient)
    mock.search.return_value = []
    return mock


@pytest.fixture
def token_store():
    store = Mock(spec=TokenStore)
    store.get.return_value = "jwt-token"
    return store


@pytest.fixture
def form(api_client, geocoder, token_store):
    return CreateListingForm(
        api_client=api_client,
        geocoder=geocoder,
        token_store=token_store,
        overview_path="/listings",
        min_query_length=3,
    )


def fill_form(form, **overrides):
    values = {
        "distance_from_univ": "0.5",
        "rent": "1200",
        "number_of_rooms": "2",
        "number_of_bathrooms": "1.5",
        "square_foot": "800",
        "description": "Nice place",
        "address": "123 Main St",
        "latitude": "42.34",
        "longitude": "-71.09",
    }
    values.update(overrides)
    for name, value in values.items():
        form.set_field(name, value)


class TestListingFormData:
    """Tests for the immutable form values."""

    def test_defaults_are_empty(self):
        data = ListingFormData()

        assert data.rent == ""
        assert data.address == ""

    def test_with_field_returns_copy(self):
        """Test that updates never mutate the original."""
        data = ListingFormData()
        updated = data.with_field("rent", "900")

        assert updated.rent == "900"
        assert data.rent == ""

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            ListingFormData().with_field("pool", "yes")

    def test_camel_case_aliases(self):
        data = ListingFormData.model_validate({"distanceFromUniv": "0.5", "squareFoot": "800"})

        assert data.distance_from_univ == "0.5"
        assert data.square_foot == "800"


class TestNumericCoercion:
    """Tests for coerce_number and build_listing_payload."""

    def test_whole_number_fields_become_int(self):
        assert coerce_number("rent", "1200") == 1200
        assert isinstance(coerce_number("rent", "1200"), int)
        assert coerce_number("square_foot", 800.0) == 800

    def test_decimal_fields_become_float(self):
        assert coerce_number("number_of_bathrooms", "1.5") == 1.5
        assert coerce_number("latitude", " 42.34 ") == 42.34
        assert coerce_number("longitude", -71.09) == -71.09

    def test_empty_value(self):
        with pytest.raises(FormValidationError, match="Monthly rent is required"):
            coerce_number("rent", "   ")

    @pytest.mark.parametrize("value", ["abc", "nan", "inf", True])
    def test_not_a_number(self, value):
        with pytest.raises(FormValidationError, match="must be a number"):
            coerce_number("distance_from_univ", value)

    def test_whole_number_required(self):
        with pytest.raises(FormValidationError, match="Number of bedrooms must be a whole number"):
            coerce_number("number_of_rooms", "2.5")

    def test_payload_is_camel_case(self):
        data = ListingFormData().with_fields(
            distance_from_univ="0.5",
            rent="1200",
            number_of_rooms="2",
            number_of_bathrooms="1.5",
            square_foot="800",
            description="Nice place",
            address="123 Main St",
            latitude="42.34",
            longitude="-71.09",
        )

        assert build_listing_payload(data) == {
            "distanceFromUniv": 0.5,
            "rent": 1200,
            "numberOfRooms": 2,
            "numberOfBathrooms": 1.5,
            "squareFoot": 800,
            "description": "Nice place",
            "address": "123 Main St",
            "latitude": 42.34,
            "longitude": -71.09,
        }


class TestAddressAutocomplete:
    """Tests for on_address_change and on_suggestion_select."""

    def test_short_query_skips_lookup(self, form, geocoder):
        """Test that queries under three characters never hit the service."""
        form.suggestions = [suggestion()]

        form.on_address_change("12")

        geocoder.search.assert_not_called()
        assert form.suggestions == []
        assert form.query == "12"
        assert form.form_data.address == "12"

    def test_lookup_replaces_suggestions(self, form, geocoder):
        results = [suggestion(place_id=1), suggestion("123 Main St, Cambridge, MA, USA", place_id=2)]
        geocoder.search.return_value = results

        form.on_address_change("123 Main")

        geocoder.search.assert_called_once_with("123 Main")
        assert form.suggestions == results
        assert form.form_data.address == "123 Main"

    def test_lookup_failure_clears_suggestions(self, form, geocoder):
        """Test that a failed lookup is swallowed and leaves no suggestions."""
        form.suggestions = [suggestion()]
        geocoder.search.side_effect = GeocodingError("Address lookup failed")

        form.on_address_change("123 Main")

        assert form.suggestions == []
        assert form.form_data.address == "123 Main"

    def test_select_suggestion(self, form):
        """Test adopting address and parsed coordinates."""
        form.suggestions = [suggestion()]

        form.on_suggestion_select({
            "place_id": 99,
            "display_name": "1 Huntington Ave, Boston, MA, USA",
            "lat": "42.3467",
            "lon": "-71.0810",
        })

        assert form.query == "1 Huntington Ave, Boston, MA, USA"
        assert form.form_data.address == "1 Huntington Ave, Boston, MA, USA"
        assert form.form_data.latitude == 42.3467
        assert form.form_data.longitude == -71.081
        assert form.suggestions == []

    def test_select_keeps_other_fields(self, form):
        fill_form(form, rent="950")

        form.on_suggestion_select(suggestion())

        assert form.form_data.rent == "950"
        assert form.form_data.description == "Nice place"

    def test_stale_response_is_dropped(self, form, geocoder):
        """Test that a slow earlier lookup cannot overwrite newer suggestions."""
        slow_started = threading.Event()
        release_slow = threading.Event()
        stale = [suggestion("123 M Street (stale)", place_id=1)]
        fresh = [suggestion("123 Main St (fresh)", place_id=2)]

        def search(query):
            if query == "123 M":
                slow_started.set()
                release_slow.wait(timeout=5)
                return stale
            return fresh

        geocoder.search.side_effect = search

        worker = threading.Thread(target=form.on_address_change, args=("123 M",))
        worker.start()
        assert slow_started.wait(timeout=5)

        form.on_address_change("123 Main")
        release_slow.set()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert form.suggestions == fresh
        assert form.query == "123 Main"

    def test_pending_lookup_dropped_after_selection(self, form, geocoder):
        """Test that a selection wins over a lookup still in flight."""
        started = threading.Event()
        release = threading.Event()

        def search(query):
            started.set()
            release.wait(timeout=5)
            return [suggestion(place_id=5)]

        geocoder.search.side_effect = search

        worker = threading.Thread(target=form.on_address_change, args=("123 Main",))
        worker.start()
        assert started.wait(timeout=5)

        form.on_suggestion_select(suggestion("123 Main St, Boston, MA, USA"))
        release.set()
        worker.join(timeout=5)

        assert form.suggestions == []
        assert form.form_data.address == "123 Main St, Boston, MA, USA"


class TestSubmit:
    """Tests for CreateListingForm.submit."""

    def test_submit_posts_coerced_payload(self, form, api_client):
        """Test the request sent for a fully filled form."""
        fill_form(form)

        assert form.submit(ALICE) is True

        api_client.create_listing.assert_called_once_with(
            "alice",
            {
                "distanceFromUniv": 0.5,
                "rent": 1200,
                "numberOfRooms": 2,
                "numberOfBathrooms": 1.5,
                "squareFoot": 800,
                "description": "Nice place",
                "address": "123 Main St",
                "latitude": 42.34,
                "longitude": -71.09,
            },
            "jwt-token",
        )
        assert form.navigate_to == "/listings"
        assert form.error == ""

    def test_submit_after_selection(self, form, api_client):
        """Test coordinates from a suggestion are sent as numbers."""
        fill_form(form, latitude="", longitude="")
        form.on_suggestion_select(suggestion("123 Main St, Boston, MA, USA", lat="42.34", lon="-71.09"))

        assert form.submit(ALICE) is True

        payload = api_client.create_listing.call_args.args[1]
        assert payload["address"] == "123 Main St, Boston, MA, USA"
        assert payload["latitude"] == 42.34
        assert payload["longitude"] == -71.09

    @pytest.mark.parametrize("user", [None, {}, {"username": ""}])
    def test_missing_user(self, form, api_client, user):
        """Test that no request is made without a username."""
        fill_form(form)

        assert form.submit(user) is False

        assert form.error == MISSING_USER_ERROR
        assert form.navigate_to is None
        api_client.create_listing.assert_not_called()

    def test_invalid_number_blocks_request(self, form, api_client):
        fill_form(form, rent="twelve hundred")

        assert form.submit(ALICE) is False

        assert form.error == "Monthly rent must be a number"
        api_client.create_listing.assert_not_called()

    def test_missing_number_blocks_request(self, form, api_client):
        fill_form(form, latitude="")

        assert form.submit(ALICE) is False

        assert form.error == "Latitude is required"
        api_client.create_listing.assert_not_called()

    def test_server_message_shown(self, form, api_client):
        """Test the server's message is surfaced and the form kept."""
        fill_form(form)
        api_client.create_listing.side_effect = APIError("Validation failed: rent: Field required", 400)

        assert form.submit(ALICE) is False

        assert form.error == "Validation failed: rent: Field required"
        assert form.navigate_to is None
        assert form.form_data.rent == "1200"

    def test_default_message_without_server_message(self, form, api_client):
        fill_form(form)
        api_client.create_listing.side_effect = APIError("", 500)

        assert form.submit(ALICE) is False

        assert form.error == CREATE_FAILED_ERROR

    def test_network_failure(self, form, api_client):
        fill_form(form)
        api_client.create_listing.side_effect = requests.ConnectionError("refused")

        assert form.submit(ALICE) is False

        assert form.error == NETWORK_FAILED_ERROR
        assert form.navigate_to is None

    def test_submit_without_stored_token(self, form, api_client, token_store):
        """Test that a missing token is passed through as None."""
        token_store.get.return_value = None
        fill_form(form)

        form.submit(ALICE)

        assert api_client.create_listing.call_args.args[2] is None

    def test_retry_clears_previous_error(self, form, api_client):
        fill_form(form)
        api_client.create_listing.side_effect = [APIError("Server busy", 503), {"rent": 1200}]

        assert form.submit(ALICE) is False
        assert form.error == "Server busy"

        assert form.submit(ALICE) is True
        assert form.error == ""
        assert form.navigate_to == "/listings"


class TestInvalidSuggestion:
    """Tests for suggestions whose coordinates cannot be used."""

    def test_blank_coordinates_are_ignored(self, form):
        """Test that the click handler never raises and keeps the form."""
        fill_form(form)
        form.suggestions = [suggestion()]

        adopted = form.on_suggestion_select({"place_id": 1, "display_name": "x", "lat": "", "lon": ""})

        assert adopted is False
        assert form.form_data.address == "123 Main St"
        assert form.form_data.latitude == "42.34"
        assert form.suggestions == [suggestion()]

    def test_valid_selection_reports_adopted(self, form):
        assert form.on_suggestion_select(suggestion()) is True


class TestSubmitLocking:
    """Tests that submit updates shared state under the form lock."""

    def test_submit_waits_for_lock(self, form, api_client):
        fill_form(form)
        results = []

        with form._lock:
            worker = threading.Thread(target=lambda: results.append(form.submit(ALICE)))
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            api_client.create_listing.assert_not_called()

        worker.join(timeout=5)

        assert results == [True]
        assert form.navigate_to == "/listings"

