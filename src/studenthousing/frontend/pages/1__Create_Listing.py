"""
Create Listing Page

Address autocomplete plus the listing details form.
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent.parent))

import streamlit as st

from config.settings import settings
from src.studenthousing.frontend.components.session import init_session, current_user
from src.studenthousing.frontend.forms import CreateListingForm

# Page configuration
st.set_page_config(
    page_title="Create Listing - Student Housing",
    page_icon="🏠",
    layout="wide",
)

init_session()

if "create_listing_form" not in st.session_state:
    st.session_state.create_listing_form = CreateListingForm(
        api_client=st.session_state.api_client,
        token_store=st.session_state.token_store,
    )

form: CreateListingForm = st.session_state.create_listing_form

# (widget key, form field, label)
DETAIL_FIELDS = [
    ("distance_input", "distance_from_univ", f"Distance from {settings.university_name or 'campus'} (miles)"),
    ("rent_input", "rent", "Monthly Rent ($)"),
    ("rooms_input", "number_of_rooms", "Number of Bedrooms"),
    ("bathrooms_input", "number_of_bathrooms", "Number of Bathrooms"),
    ("square_foot_input", "square_foot", "Square Footage"),
]


def _on_address_change():
    form.on_address_change(st.session_state.address_query)


def _on_suggestion_click(index: int):
    suggestion = form.suggestions[index]
    form.on_suggestion_select(suggestion)
    st.session_state.address_query = form.query


def _on_detail_change(widget_key: str, field: str):
    form.set_field(field, st.session_state[widget_key])


st.title("Create New Listing")

if form.error:
    st.error(form.error)

user = current_user()
if not user:
    st.info("Sign in on the home page to publish listings.")

col1, col2 = st.columns(2)

with col1:
    st.text_input(
        "Address",
        key="address_query",
        placeholder="Search for a location",
        on_change=_on_address_change,
    )
    for i, suggestion in enumerate(form.suggestions):
        st.button(
            suggestion.display_name,
            key=f"suggestion_{suggestion.place_id}_{i}",
            on_click=_on_suggestion_click,
            args=(i,),
            use_container_width=True,
        )
    if form.form_data.latitude != "" and form.form_data.longitude != "":
        st.caption(f"Location: {form.form_data.latitude}, {form.form_data.longitude}")

with col2:
    for widget_key, field, label in DETAIL_FIELDS:
        st.text_input(
            label,
            key=widget_key,
            on_change=_on_detail_change,
            args=(widget_key, field),
        )

st.text_area(
    "Description",
    key="description_input",
    height=120,
    on_change=_on_detail_change,
    args=("description_input", "description"),
)

if st.button("Create Listing", type="primary", use_container_width=True):
    if form.submit(user):
        del st.session_state.create_listing_form
        st.switch_page("pages/2__Listings.py")
    else:
        st.rerun()
