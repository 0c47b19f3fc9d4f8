"""
Filter Components

Sidebar filters for the listings overview.
"""
import streamlit as st
from typing import Dict, Any


def render_listing_filters() -> Dict[str, Any]:
    """
    Render listing filter sidebar.

    Returns:
        Dictionary of selected filter values (APIClient.list_listings kwargs)
    """
    st.sidebar.header("Filters")

    filters = {}

    st.sidebar.subheader("Budget")
    max_rent = st.sidebar.number_input("Max monthly rent ($)", min_value=0, value=0, step=50)
    if max_rent:
        filters["max_rent"] = float(max_rent)

    st.sidebar.subheader("Size")
    min_rooms = st.sidebar.selectbox("Min bedrooms", ["Any", 1, 2, 3, 4, 5], index=0)
    if min_rooms != "Any":
        filters["min_rooms"] = float(min_rooms)

    st.sidebar.subheader("Location")
    max_distance = st.sidebar.slider(
        "Max distance from campus (miles)",
        min_value=0.0,
        max_value=10.0,
        value=10.0,
        step=0.5,
    )
    if max_distance < 10.0:
        filters["max_distance"] = max_distance

    return filters
