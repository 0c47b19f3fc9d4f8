"""
Listings Overview Page

All listings on the marketplace, plus the signed-in lister's own listings.
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent.parent))

import requests
import streamlit as st

from config.settings import settings
from src.studenthousing.frontend.components.filters import render_listing_filters
from src.studenthousing.frontend.components.maps import render_listings_map
from src.studenthousing.frontend.components.session import init_session, current_user
from src.studenthousing.frontend.components.tables import render_listings_table
from src.studenthousing.frontend.utils import APIError

# Page configuration
st.set_page_config(
    page_title="Listings - Student Housing",
    page_icon="🏠",
    layout="wide",
)

init_session()

st.title("Listings")

filters = render_listing_filters()
user = current_user()

tab_all, tab_mine = st.tabs(["All listings", "My listings"])

with tab_all:
    try:
        with st.spinner("Loading listings..."):
            listings = st.session_state.api_client.list_listings(**filters, limit=500)

        st.subheader(f"Found {len(listings)} listings")
        render_listings_table(listings)

        with st.expander("Map", expanded=True):
            render_listings_map(listings)

    except APIError as e:
        st.error(f"Failed to load listings: {e.message}")
    except Exception as e:
        st.error(f"Failed to load listings: {str(e)}")
        st.info(f"Make sure the FastAPI server is running on {settings.api_base_url}")

with tab_mine:
    if not user:
        st.info("Sign in on the home page to see your listings.")
    else:
        try:
            my_listings = st.session_state.api_client.list_lister_listings(user["username"])
            render_listings_table(my_listings, show_owner=False)

            for index, listing in enumerate(my_listings):
                if st.button(f"Remove: {listing['address']}", key=f"remove_listing_{index}"):
                    st.session_state.api_client.delete_listing(
                        user["username"], index, st.session_state.token_store.get()
                    )
                    st.rerun()
        except APIError as e:
            st.error(f"Your listings request failed: {e.message}")
        except requests.RequestException as e:
            st.error(f"Your listings request failed: {str(e)}")
            st.info(f"Make sure the FastAPI server is running on {settings.api_base_url}")

        if st.button("Create a new listing"):
            st.switch_page("pages/1__Create_Listing.py")
